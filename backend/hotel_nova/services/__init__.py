# Business services
from hotel_nova.services.event_bus import Event, EventBus, event_bus
from hotel_nova.services.room_service import RoomService
from hotel_nova.services.guest_service import GuestService
from hotel_nova.services.reservation_service import ReservationService
from hotel_nova.services.checkin_service import CheckInService
from hotel_nova.services.checkout_service import CheckOutService
from hotel_nova.services.report_service import ReportService
from hotel_nova.services.hotel_service import HotelService

__all__ = [
    'Event',
    'EventBus',
    'event_bus',
    'RoomService',
    'GuestService',
    'ReservationService',
    'CheckInService',
    'CheckOutService',
    'ReportService',
    'HotelService',
]
