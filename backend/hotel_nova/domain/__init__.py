"""
领域层：实体、房价策略、仓储接口
"""
from hotel_nova.domain.enums import RoomCategory, RoomStatus, ReservationStatus
from hotel_nova.domain.room import Room, nightly_cost, parse_room_status
from hotel_nova.domain.guest import Guest
from hotel_nova.domain.reservation import Reservation
from hotel_nova.domain.repositories import (
    Repository, RoomRepository, GuestRepository, ReservationRepository, UnitOfWork,
)

__all__ = [
    "RoomCategory",
    "RoomStatus",
    "ReservationStatus",
    "Room",
    "nightly_cost",
    "parse_room_status",
    "Guest",
    "Reservation",
    "Repository",
    "RoomRepository",
    "GuestRepository",
    "ReservationRepository",
    "UnitOfWork",
]
