"""
退房服务
CheckedIn 预订办理退房：计算账单，预订变为 CheckedOut，房间变为 Cleaning
"""
from typing import Callable
import logging

from hotel_nova.domain.enums import RoomStatus
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.models.events import EventType, GuestCheckedOutData
from hotel_nova.models.schemas import Invoice
from hotel_nova.services.event_bus import event_bus, Event
from hotel_nova.services.reservation_service import load_reservation
from hotel_nova.services.room_service import room_status_changed_event

logger = logging.getLogger(__name__)


class CheckOutService:
    """退房服务"""

    def __init__(self, uow: UnitOfWork, event_publisher: Callable[[Event], None] = None):
        self.uow = uow
        self._publish_event = event_publisher or event_bus.publish

    def check_out(self, reservation_id: int) -> Invoice:
        """
        办理退房，返回账单

        总价 = 晚数 × 房间每晚价格（Suite 含 20% 附加费），按分四舍五入
        """
        with self.uow:
            reservation = load_reservation(self.uow, reservation_id)
            reservation.check_out_guest()

            room = reservation.room
            invoice = Invoice(
                reservation_id=reservation.id,
                reservation_code=reservation.code,
                guest_name=reservation.guest.full_name,
                room_number=room.number,
                room_category=room.category,
                check_in=reservation.check_in,
                check_out=reservation.check_out,
                nights=reservation.nights(),
                nightly_cost=room.nightly_cost(),
                total=reservation.total_cost(),
            )

            old_room_status = room.status
            room.status = RoomStatus.CLEANING
            self.uow.reservations.update(reservation)
            self.uow.rooms.update(room)

        logger.info(
            f"Guest {invoice.guest_name} checked out of room {room.number}: "
            f"{invoice.nights} night(s), total {invoice.total}"
        )
        self.uow.publish_after_commit(self._publish_event, Event(
            event_type=EventType.GUEST_CHECKED_OUT,
            data=GuestCheckedOutData(
                reservation_id=reservation.id,
                guest_id=reservation.guest.id,
                guest_name=invoice.guest_name,
                room_number=room.number,
                nights=invoice.nights,
                total_amount=invoice.total,
            ).to_dict(),
            source="checkout_service",
        ))
        self.uow.publish_after_commit(
            self._publish_event, room_status_changed_event(room, old_room_status, "checkout_service", "check-out")
        )
        return invoice
