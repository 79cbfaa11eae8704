"""
预订服务测试：创建、取消、查询
"""
import re
import pytest
from datetime import timedelta

from hotel_nova.domain import Guest, ReservationStatus, RoomStatus
from hotel_nova.exceptions import (
    GuestNotPersisted, InvalidDateRange, InvalidState, ReservationNotFound,
    RoomNotAvailable, RoomNotFound, StorageError,
)
from hotel_nova.repositories import SqlAlchemyRoomRepository
from hotel_nova.services import ReservationService, RoomService


@pytest.fixture
def reservation_service(uow, clock, publisher):
    return ReservationService(uow, clock=clock, event_publisher=publisher)


def _room_status(uow, number):
    with uow:
        return uow.rooms.find_by_natural_key(number).status


class TestCreateReservation:

    def test_future_reservation_keeps_room_available(self, reservation_service, uow, guest,
                                                     simple_room, today, recorder):
        reservation = reservation_service.create_reservation(
            guest, "101", today + timedelta(days=1), today + timedelta(days=3), guest_count=2
        )
        assert reservation.id is not None
        assert reservation.status == ReservationStatus.CONFIRMED
        assert re.fullmatch(r"RES-20240310-[0-9A-F]{6}", reservation.code)
        assert _room_status(uow, "101") == RoomStatus.AVAILABLE
        assert recorder.types() == ["reservation.created"]
        assert recorder[0].data["guest_count"] == 2

    def test_same_day_reservation_occupies_room(self, reservation_service, uow, guest,
                                                simple_room, today, recorder):
        reservation = reservation_service.create_reservation(
            guest, "101", today, today + timedelta(days=2)
        )
        assert reservation.room.status == RoomStatus.OCCUPIED
        assert _room_status(uow, "101") == RoomStatus.OCCUPIED
        assert recorder.types() == ["reservation.created", "room.status_changed"]

    def test_past_check_in_occupies_room(self, reservation_service, uow, guest, simple_room, today):
        reservation_service.create_reservation(guest, "101", today - timedelta(days=1), today + timedelta(days=1))
        assert _room_status(uow, "101") == RoomStatus.OCCUPIED

    def test_guest_reloaded_from_storage(self, reservation_service, guest, simple_room, today):
        stale = Guest(name="Stale", surname="Copy", national_id=guest.national_id, id=guest.id)
        reservation = reservation_service.create_reservation(stale, "101", today, today + timedelta(days=1))
        assert reservation.guest.full_name == "Ana Lopez"

    def test_unpersisted_guest(self, reservation_service, simple_room, today):
        with pytest.raises(GuestNotPersisted):
            reservation_service.create_reservation(
                Guest(name="New", surname="Guest", national_id="N1"), "101", today, today + timedelta(days=1)
            )

    def test_unpersisted_guest_checked_before_room(self, reservation_service, today):
        with pytest.raises(GuestNotPersisted):
            reservation_service.create_reservation(
                Guest(name="New", surname="Guest", national_id="N1"), "999", today, today
            )

    def test_unknown_room(self, reservation_service, guest, today):
        with pytest.raises(RoomNotFound):
            reservation_service.create_reservation(guest, "999", today, today + timedelta(days=1))

    def test_room_not_available(self, reservation_service, uow, guest, simple_room, today):
        RoomService(uow, event_publisher=lambda e: None).update_room_status("101", "Cleaning")
        with pytest.raises(RoomNotAvailable):
            reservation_service.create_reservation(guest, "101", today, today + timedelta(days=1))
        assert reservation_service.list_reservations() == []

    def test_invalid_date_range_writes_nothing(self, reservation_service, uow, guest, simple_room, today, recorder):
        with pytest.raises(InvalidDateRange):
            reservation_service.create_reservation(guest, "101", today, today)
        assert reservation_service.list_reservations() == []
        assert _room_status(uow, "101") == RoomStatus.AVAILABLE
        assert recorder == []

    def test_failed_room_write_rolls_back_reservation(self, reservation_service, uow, guest,
                                                      simple_room, today, recorder, monkeypatch):
        def broken_update(self, room):
            raise StorageError("Failed to update room", cause=RuntimeError("disk full"))

        monkeypatch.setattr(SqlAlchemyRoomRepository, "update", broken_update)
        with pytest.raises(StorageError, match="disk full"):
            reservation_service.create_reservation(guest, "101", today, today + timedelta(days=2))

        monkeypatch.undo()
        assert reservation_service.list_reservations() == []
        assert _room_status(uow, "101") == RoomStatus.AVAILABLE
        assert recorder == []


class TestCancelReservation:

    def test_cancel_releases_room(self, reservation_service, uow, guest, suite_room, today, recorder):
        reservation = reservation_service.create_reservation(guest, "201", today, today + timedelta(days=1))
        cancelled = reservation_service.cancel_reservation(reservation.id)

        assert cancelled.status == ReservationStatus.CANCELLED
        assert reservation_service.find_reservation(reservation.id).status == ReservationStatus.CANCELLED
        assert _room_status(uow, "201") == RoomStatus.AVAILABLE
        assert recorder.types()[-2:] == ["reservation.cancelled", "room.status_changed"]

    def test_cancel_future_reservation(self, reservation_service, uow, guest, simple_room, today, recorder):
        reservation = reservation_service.create_reservation(
            guest, "101", today + timedelta(days=5), today + timedelta(days=6)
        )
        reservation_service.cancel_reservation(reservation.id)
        assert _room_status(uow, "101") == RoomStatus.AVAILABLE
        # 房间状态未变化，不发布房态事件
        assert recorder.types() == ["reservation.created", "reservation.cancelled"]

    @pytest.mark.parametrize("prior_status", ["Cleaning", "Maintenance"])
    def test_cancel_releases_room_whatever_its_status(self, reservation_service, uow, guest,
                                                      simple_room, today, recorder, prior_status):
        reservation = reservation_service.create_reservation(
            guest, "101", today + timedelta(days=2), today + timedelta(days=4)
        )
        RoomService(uow, event_publisher=lambda e: None).update_room_status("101", prior_status)

        reservation_service.cancel_reservation(reservation.id)
        assert _room_status(uow, "101") == RoomStatus.AVAILABLE
        assert recorder[-1].data["old_status"] == prior_status
        assert recorder[-1].data["new_status"] == "Available"

    def test_cancel_twice(self, reservation_service, guest, simple_room, today):
        reservation = reservation_service.create_reservation(guest, "101", today, today + timedelta(days=1))
        reservation_service.cancel_reservation(reservation.id)
        with pytest.raises(InvalidState) as exc_info:
            reservation_service.cancel_reservation(reservation.id)
        assert exc_info.value.current_state == "Cancelled"

    def test_cancel_missing(self, reservation_service):
        with pytest.raises(ReservationNotFound):
            reservation_service.cancel_reservation(404)


class TestFindReservations:

    def test_find_and_list(self, reservation_service, guest, simple_room, suite_room, today):
        first = reservation_service.create_reservation(guest, "101", today, today + timedelta(days=1))
        second = reservation_service.create_reservation(guest, "201", today, today + timedelta(days=1))

        assert reservation_service.find_reservation(first.id).code == first.code
        assert reservation_service.find_reservation_by_code(second.code).id == second.id
        assert reservation_service.find_reservation(999) is None
        assert [r.id for r in reservation_service.list_reservations()] == [first.id, second.id]
