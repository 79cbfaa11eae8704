"""
工作单元测试：提交、回滚、嵌套
"""
import pytest
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from hotel_nova.domain import Room
from hotel_nova.exceptions import HotelError, StorageError
from hotel_nova.models.ontology import RoomRecord


def _room(number="101"):
    return Room(number=number, category="Simple", base_rate=Decimal("50.00"))


class TestSqlAlchemyUnitOfWork:

    def test_commit_on_exit(self, uow, db_session):
        with uow:
            uow.rooms.save(_room())
        assert db_session.query(RoomRecord).count() == 1

    def test_rollback_on_exception(self, uow, db_session):
        with pytest.raises(HotelError):
            with uow:
                uow.rooms.save(_room("101"))
                uow.rooms.save(_room("102"))
                raise HotelError("boom")
        assert db_session.query(RoomRecord).count() == 0

    def test_session_closed_after_exit(self, uow):
        with uow:
            assert uow.session is not None
        assert uow.session is None

    def test_nested_blocks_share_transaction(self, uow, db_session):
        with pytest.raises(HotelError):
            with uow:
                with uow:
                    uow.rooms.save(_room("101"))
                # 内层退出时不提交，会话仍然打开
                assert uow.session is not None
                raise HotelError("outer failure")
        assert db_session.query(RoomRecord).count() == 0

    def test_commit_failure_wrapped(self, uow, monkeypatch, db_session):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        with pytest.raises(StorageError, match="Failed to commit transaction"):
            with uow:
                uow.rooms.save(_room())
                monkeypatch.setattr(uow.session, "commit", broken_commit)
        assert db_session.query(RoomRecord).count() == 0


class TestEventsAfterCommit:

    def test_event_published_immediately_outside_transaction(self, uow):
        published = []
        uow.publish_after_commit(published.append, "room.created")
        assert published == ["room.created"]

    def test_nested_events_wait_for_outer_commit(self, uow, hotel, recorder):
        with uow:
            hotel.add_room(_room("101"))
            assert recorder == []
        assert recorder.types() == ["room.created"]

    def test_outer_rollback_discards_events(self, uow, hotel, recorder):
        with pytest.raises(RuntimeError):
            with uow:
                hotel.add_room(_room("102"))
                raise RuntimeError("outer failure")

        assert recorder == []
        assert hotel.find_room_by_number("102") is None

    def test_failed_commit_discards_events(self, uow, hotel, recorder, monkeypatch):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        with pytest.raises(StorageError):
            with uow:
                hotel.add_room(_room("103"))
                monkeypatch.setattr(uow.session, "commit", broken_commit)
        assert recorder == []
