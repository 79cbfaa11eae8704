"""
房间服务
管理 Room 对象；房间状态变更时发布事件
"""
from typing import List, Optional, Callable, Union
import logging

from hotel_nova.domain.enums import RoomStatus
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.domain.room import Room, parse_room_status
from hotel_nova.exceptions import DuplicateRoom, RoomNotFound
from hotel_nova.models.events import EventType, RoomCreatedData, RoomStatusChangedData
from hotel_nova.services.event_bus import event_bus, Event

logger = logging.getLogger(__name__)


def room_status_changed_event(room: Room, old_status: RoomStatus, source: str, reason: str = "") -> Event:
    """构造房间状态变更事件（入住/退房/取消等服务共用）"""
    return Event(
        event_type=EventType.ROOM_STATUS_CHANGED,
        data=RoomStatusChangedData(
            room_id=room.id,
            room_number=room.number,
            old_status=old_status.value,
            new_status=room.status.value,
            reason=reason,
        ).to_dict(),
        source=source,
    )


class RoomService:
    """房间服务"""

    def __init__(self, uow: UnitOfWork, event_publisher: Callable[[Event], None] = None):
        self.uow = uow
        # 支持依赖注入事件发布器，便于测试
        self._publish_event = event_publisher or event_bus.publish

    def add_room(self, room: Room) -> Room:
        """新增房间；房间号重复时抛出 DuplicateRoom，且不写入任何记录"""
        with self.uow:
            if self.uow.rooms.find_by_natural_key(room.number) is not None:
                raise DuplicateRoom(f"A room with number {room.number} already exists")
            room.status = RoomStatus.AVAILABLE
            self.uow.rooms.save(room)

        logger.info(f"Room {room.number} ({room.category.value}) added with id {room.id}")
        self.uow.publish_after_commit(self._publish_event, Event(
            event_type=EventType.ROOM_CREATED,
            data=RoomCreatedData(
                room_id=room.id,
                room_number=room.number,
                category=room.category.value,
            ).to_dict(),
            source="room_service",
        ))
        return room

    def find_room_by_number(self, number: str) -> Optional[Room]:
        with self.uow:
            return self.uow.rooms.find_by_natural_key(str(number))

    def list_rooms(self) -> List[Room]:
        with self.uow:
            return self.uow.rooms.find_all()

    def update_room_status(self, number: str, new_status: Union[str, RoomStatus]) -> Room:
        """
        更新房间状态

        Raises:
            RoomNotFound: 房间不存在
            InvalidStatus: 不是四种已知状态之一
        """
        with self.uow:
            room = self.uow.rooms.find_by_natural_key(str(number))
            if room is None:
                raise RoomNotFound(f"Room with number {number} not found")
            status = parse_room_status(new_status)

            old_status = room.status
            room.status = status
            self.uow.rooms.update(room)

        if old_status != status:
            logger.info(f"Room {room.number} status changed: {old_status.value} -> {status.value}")
            self.uow.publish_after_commit(
                self._publish_event, room_status_changed_event(room, old_status, "room_service", "manual update")
            )
        else:
            logger.debug(f"Room {room.number} already {status.value}")
        return room

    def delete_room(self, number: str) -> bool:
        """删除房间（未接入任何业务约束）"""
        with self.uow:
            room = self.uow.rooms.find_by_natural_key(str(number))
            if room is None:
                raise RoomNotFound(f"Room with number {number} not found")
            return self.uow.rooms.delete(room.id)
