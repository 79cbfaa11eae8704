"""
初始化数据测试
"""
from decimal import Decimal

from hotel_nova.domain import Room, RoomCategory
from hotel_nova.seed import seed_default_rooms
from hotel_nova.services import RoomService


class TestSeedDefaultRooms:

    def test_creates_default_rooms(self, uow, recorder):
        created = seed_default_rooms(uow, event_publisher=recorder.append)
        assert [r.number for r in created] == ["101", "102", "201"]

        rooms = {r.number: r for r in RoomService(uow, event_publisher=recorder.append).list_rooms()}
        assert rooms["101"].category == RoomCategory.SIMPLE
        assert rooms["102"].base_rate == Decimal("80.00")
        assert rooms["201"].nightly_cost() == Decimal("180.00")
        assert recorder.types() == ["room.created"] * 3

    def test_idempotent(self, uow, recorder):
        seed_default_rooms(uow, event_publisher=recorder.append)
        assert seed_default_rooms(uow, event_publisher=recorder.append) == []
        assert len(RoomService(uow, event_publisher=recorder.append).list_rooms()) == 3

    def test_skips_existing_numbers(self, uow, recorder):
        RoomService(uow, event_publisher=recorder.append).add_room(
            Room(number="102", category="Suite", base_rate=300)
        )
        created = seed_default_rooms(uow, event_publisher=recorder.append)
        assert [r.number for r in created] == ["101", "201"]
