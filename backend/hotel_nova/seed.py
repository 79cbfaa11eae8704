"""
初始化数据脚本
创建默认房间：101 (Simple, 50)、102 (Double, 80)、201 (Suite, 150)

可重复执行：房间号已存在时跳过
    python -m hotel_nova.seed
"""
from decimal import Decimal
from typing import Callable, List
import logging

from hotel_nova.domain.enums import RoomCategory
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.domain.room import Room
from hotel_nova.services.event_bus import Event
from hotel_nova.services.room_service import RoomService

logger = logging.getLogger(__name__)

DEFAULT_ROOMS = [
    ("101", RoomCategory.SIMPLE, Decimal("50.00")),
    ("102", RoomCategory.DOUBLE, Decimal("80.00")),
    ("201", RoomCategory.SUITE, Decimal("150.00")),
]


def seed_default_rooms(uow: UnitOfWork, event_publisher: Callable[[Event], None] = None) -> List[Room]:
    """创建默认房间，返回本次新建的房间"""
    room_service = RoomService(uow, event_publisher=event_publisher)
    created = []
    for number, category, base_rate in DEFAULT_ROOMS:
        if room_service.find_room_by_number(number) is not None:
            logger.debug(f"Room {number} already exists, skipped")
            continue
        created.append(room_service.add_room(Room(number=number, category=category, base_rate=base_rate)))

    logger.info(f"Seeded {len(created)} default room(s)")
    return created


def main():
    from hotel_nova.config import settings
    from hotel_nova.database import init_db
    from hotel_nova.repositories import SqlAlchemyUnitOfWork

    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
    init_db()
    for room in seed_default_rooms(SqlAlchemyUnitOfWork()):
        print(f"  创建房间: {room}")


if __name__ == '__main__':
    main()
