# Persistence records
from hotel_nova.models.ontology import RoomRecord, GuestRecord, ReservationRecord

__all__ = ['RoomRecord', 'GuestRecord', 'ReservationRecord']
