"""
预订服务
管理 Reservation 对象：创建、取消、查询

房间可用性只看房间当前状态，不做日期区间重叠检查
"""
from typing import List, Optional, Callable
from datetime import date
import logging
import uuid

from hotel_nova.domain.enums import RoomStatus
from hotel_nova.domain.guest import Guest
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.domain.reservation import Reservation
from hotel_nova.exceptions import (
    GuestNotPersisted, ReservationNotFound, RoomNotAvailable, RoomNotFound,
)
from hotel_nova.models.events import EventType, ReservationCreatedData, ReservationCancelledData
from hotel_nova.services.event_bus import event_bus, Event
from hotel_nova.services.room_service import room_status_changed_event

logger = logging.getLogger(__name__)


def load_reservation(uow: UnitOfWork, reservation_id: int) -> Reservation:
    """在当前工作单元内加载预订，不存在时抛出 ReservationNotFound"""
    reservation = uow.reservations.find_by_id(reservation_id)
    if reservation is None:
        raise ReservationNotFound(f"Reservation with id {reservation_id} not found")
    return reservation


class ReservationService:
    """预订服务"""

    def __init__(self, uow: UnitOfWork, clock: Callable[[], date] = date.today,
                 event_publisher: Callable[[Event], None] = None):
        self.uow = uow
        self._clock = clock
        self._publish_event = event_publisher or event_bus.publish

    @staticmethod
    def _generate_code(today: date) -> str:
        """生成预订号：RES-日期-随机串"""
        return f"RES-{today.strftime('%Y%m%d')}-{uuid.uuid4().hex[:6].upper()}"

    def create_reservation(self, guest: Guest, room_number: str, check_in: date,
                           check_out: date, guest_count: int = 1) -> Reservation:
        """
        创建预订
        业务规则：
        - 客人必须已持久化
        - 房间必须存在且状态为 Available
        - 离店日期必须晚于入住日期
        - 入住日期为今天或更早时，房间立即变为 Occupied；否则保持 Available 直到办理入住
        """
        if guest.id is None:
            raise GuestNotPersisted(
                f"Guest {guest.full_name} has not been persisted. Register the guest first"
            )

        with self.uow:
            stored_guest = self.uow.guests.find_by_id(guest.id)
            if stored_guest is None:
                raise GuestNotPersisted(f"Guest with id {guest.id} is not registered")

            room = self.uow.rooms.find_by_natural_key(str(room_number))
            if room is None:
                raise RoomNotFound(f"Room with number {room_number} not found")
            if not room.is_available():
                raise RoomNotAvailable(
                    f"Room {room.number} is not available. Current status: {room.status.value}"
                )

            today = self._clock()
            reservation = Reservation(
                code=self._generate_code(today),
                guest=stored_guest,
                room=room,
                check_in=check_in,
                check_out=check_out,
                guest_count=guest_count,
            )
            self.uow.reservations.save(reservation)

            occupied_now = reservation.check_in <= today
            if occupied_now:
                room.status = RoomStatus.OCCUPIED
                self.uow.rooms.update(room)

        logger.info(
            f"Reservation {reservation.code} (id {reservation.id}) created for "
            f"{stored_guest.full_name} in room {room.number}"
        )
        self.uow.publish_after_commit(self._publish_event, Event(
            event_type=EventType.RESERVATION_CREATED,
            data=ReservationCreatedData(
                reservation_id=reservation.id,
                reservation_code=reservation.code,
                guest_id=stored_guest.id,
                guest_name=stored_guest.full_name,
                room_number=room.number,
                check_in=reservation.check_in,
                check_out=reservation.check_out,
                guest_count=reservation.guest_count,
            ).to_dict(),
            source="reservation_service",
        ))
        if occupied_now:
            self.uow.publish_after_commit(self._publish_event, room_status_changed_event(
                room, RoomStatus.AVAILABLE, "reservation_service", "same-day reservation"
            ))
        else:
            logger.info(
                f"Room {room.number} held by reservation {reservation.code} but stays "
                f"{room.status.value} until check-in"
            )
        return reservation

    def cancel_reservation(self, reservation_id: int) -> Reservation:
        """
        取消预订
        只有 Confirmed 状态可以取消；房间无论之前状态如何都恢复为 Available
        """
        with self.uow:
            reservation = load_reservation(self.uow, reservation_id)
            reservation.cancel()
            self.uow.reservations.update(reservation)

            room = reservation.room
            old_room_status = room.status
            room.status = RoomStatus.AVAILABLE
            self.uow.rooms.update(room)

        logger.info(f"Reservation {reservation_id} cancelled, room {room.number} released")
        self.uow.publish_after_commit(self._publish_event, Event(
            event_type=EventType.RESERVATION_CANCELLED,
            data=ReservationCancelledData(
                reservation_id=reservation.id,
                reservation_code=reservation.code,
                room_number=room.number,
            ).to_dict(),
            source="reservation_service",
        ))
        if old_room_status != room.status:
            self.uow.publish_after_commit(self._publish_event, room_status_changed_event(
                room, old_room_status, "reservation_service", "reservation cancelled"
            ))
        return reservation

    def find_reservation(self, reservation_id: int) -> Optional[Reservation]:
        with self.uow:
            return self.uow.reservations.find_by_id(reservation_id)

    def find_reservation_by_code(self, code: str) -> Optional[Reservation]:
        """根据预订号获取预订"""
        with self.uow:
            return self.uow.reservations.find_by_natural_key(code)

    def list_reservations(self) -> List[Reservation]:
        with self.uow:
            return self.uow.reservations.find_all()
