"""
酒店门面服务
把房间、客人、预订、入住、退房、报表服务组合成一个入口，共享同一个工作单元
"""
from typing import List, Optional, Callable, Union
from datetime import date
from decimal import Decimal
import logging

from hotel_nova.config import settings
from hotel_nova.domain.enums import RoomStatus
from hotel_nova.domain.guest import Guest
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.domain.reservation import Reservation
from hotel_nova.domain.room import Room
from hotel_nova.models.schemas import Invoice, OccupancyReport
from hotel_nova.services.checkin_service import CheckInService
from hotel_nova.services.checkout_service import CheckOutService
from hotel_nova.services.event_bus import Event
from hotel_nova.services.guest_service import GuestService
from hotel_nova.services.report_service import ReportService
from hotel_nova.services.reservation_service import ReservationService
from hotel_nova.services.room_service import RoomService

logger = logging.getLogger(__name__)


class HotelService:
    """酒店门面"""

    def __init__(self, uow: UnitOfWork, name: Optional[str] = None,
                 clock: Callable[[], date] = date.today,
                 event_publisher: Callable[[Event], None] = None):
        self.name = name or settings.APP_NAME
        self.uow = uow
        self.rooms = RoomService(uow, event_publisher=event_publisher)
        self.guests = GuestService(uow, event_publisher=event_publisher)
        self.reservations = ReservationService(uow, clock=clock, event_publisher=event_publisher)
        self.checkin = CheckInService(uow, event_publisher=event_publisher)
        self.checkout = CheckOutService(uow, event_publisher=event_publisher)
        self.reports = ReportService(uow)
        logger.debug(f"{self.name} services initialized")

    # ============== 房间 ==============

    def add_room(self, room: Room) -> Room:
        return self.rooms.add_room(room)

    def find_room_by_number(self, number: str) -> Optional[Room]:
        return self.rooms.find_room_by_number(number)

    def list_rooms(self) -> List[Room]:
        return self.rooms.list_rooms()

    def update_room_status(self, number: str, new_status: Union[str, RoomStatus]) -> Room:
        return self.rooms.update_room_status(number, new_status)

    # ============== 客人 ==============

    def register_guest(self, name: str, surname: str, national_id: str,
                       email: Optional[str] = None, phone: Optional[str] = None) -> Guest:
        return self.guests.register_guest(name, surname, national_id, email=email, phone=phone)

    def find_guest_by_national_id(self, national_id: str) -> Optional[Guest]:
        return self.guests.find_guest_by_national_id(national_id)

    # ============== 预订生命周期 ==============

    def create_reservation(self, guest: Guest, room_number: str, check_in: date,
                           check_out: date, guest_count: int = 1) -> Reservation:
        return self.reservations.create_reservation(guest, room_number, check_in, check_out, guest_count)

    def find_reservation(self, reservation_id: int) -> Optional[Reservation]:
        return self.reservations.find_reservation(reservation_id)

    def list_reservations(self) -> List[Reservation]:
        return self.reservations.list_reservations()

    def cancel_reservation(self, reservation_id: int) -> Reservation:
        return self.reservations.cancel_reservation(reservation_id)

    def check_in(self, reservation_id: int) -> Reservation:
        return self.checkin.check_in(reservation_id)

    def check_out(self, reservation_id: int) -> Invoice:
        return self.checkout.check_out(reservation_id)

    # ============== 报表 ==============

    def total_revenue(self) -> Decimal:
        return self.reports.total_revenue()

    def occupancy_report(self) -> OccupancyReport:
        return self.reports.occupancy_report()
