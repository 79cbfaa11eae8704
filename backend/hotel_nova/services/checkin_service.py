"""
入住服务
Confirmed 预订办理入住：预订变为 CheckedIn，房间变为 Occupied
"""
from typing import Callable
import logging

from hotel_nova.domain.enums import RoomStatus
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.domain.reservation import Reservation
from hotel_nova.exceptions import RoomNotAvailable
from hotel_nova.models.events import EventType, GuestCheckedInData
from hotel_nova.services.event_bus import event_bus, Event
from hotel_nova.services.reservation_service import load_reservation
from hotel_nova.services.room_service import room_status_changed_event

logger = logging.getLogger(__name__)


class CheckInService:
    """入住服务"""

    def __init__(self, uow: UnitOfWork, event_publisher: Callable[[Event], None] = None):
        self.uow = uow
        self._publish_event = event_publisher or event_bus.publish

    def check_in(self, reservation_id: int) -> Reservation:
        """
        办理入住

        Raises:
            ReservationNotFound: 预订不存在
            InvalidState: 预订不是 Confirmed 状态
            RoomNotAvailable: 房间当前不是 Available
        """
        with self.uow:
            reservation = load_reservation(self.uow, reservation_id)
            reservation.check_in_guest()

            room = reservation.room
            if not room.is_available():
                raise RoomNotAvailable(
                    f"Room {room.number} is not available for check-in. "
                    f"Current status: {room.status.value}"
                )
            old_room_status = room.status
            room.status = RoomStatus.OCCUPIED

            self.uow.reservations.update(reservation)
            self.uow.rooms.update(room)

        logger.info(f"Guest {reservation.guest.full_name} checked in to room {room.number}")
        self.uow.publish_after_commit(self._publish_event, Event(
            event_type=EventType.GUEST_CHECKED_IN,
            data=GuestCheckedInData(
                reservation_id=reservation.id,
                guest_id=reservation.guest.id,
                guest_name=reservation.guest.full_name,
                room_number=room.number,
            ).to_dict(),
            source="checkin_service",
        ))
        self.uow.publish_after_commit(
            self._publish_event, room_status_changed_event(room, old_room_status, "checkin_service", "check-in")
        )
        return reservation
