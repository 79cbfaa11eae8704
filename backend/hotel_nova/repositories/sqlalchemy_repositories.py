"""
SQLAlchemy 仓储实现
负责领域实体 <-> ORM 记录的映射；仓储只 flush（获取主键），提交由工作单元负责
"""
from contextlib import contextmanager
from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_nova.domain.guest import Guest
from hotel_nova.domain.repositories import GuestRepository, ReservationRepository, RoomRepository
from hotel_nova.domain.reservation import Reservation
from hotel_nova.domain.room import Room
from hotel_nova.exceptions import StorageError
from hotel_nova.models.ontology import GuestRecord, ReservationRecord, RoomRecord

logger = logging.getLogger(__name__)


# ============== 映射 ==============

def room_from_record(record: RoomRecord) -> Room:
    return Room(
        number=record.room_number,
        category=record.category,
        base_rate=record.base_rate,
        status=record.status,
        id=record.id,
    )


def guest_from_record(record: GuestRecord) -> Guest:
    return Guest(
        name=record.name,
        surname=record.surname,
        national_id=record.national_id,
        email=record.email,
        phone=record.phone,
        id=record.id,
    )


def reservation_from_record(record: ReservationRecord) -> Reservation:
    return Reservation(
        code=record.reservation_code,
        guest=guest_from_record(record.guest),
        room=room_from_record(record.room),
        check_in=record.check_in_date,
        check_out=record.check_out_date,
        guest_count=record.guest_count,
        status=record.status,
        id=record.id,
    )


# ============== 基类 ==============

class _SqlAlchemyRepository:
    """公共部分：会话、错误转换、按 id 取记录"""

    record_cls = None
    entity_name = "entity"

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage_errors(self, action: str):
        """把 SQLAlchemyError 回滚后转换为 StorageError"""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Storage failure while trying to {action} {self.entity_name}: {e}")
            raise StorageError(f"Failed to {action} {self.entity_name}", cause=e) from e

    def _require_new(self, entity) -> None:
        if entity.id is not None:
            raise StorageError(f"{self.entity_name.capitalize()} {entity.id} is already persisted; use update()")

    def _require_record(self, entity_id: Optional[int]):
        """update 使用：id 未设置或不存在时抛出 StorageError"""
        if entity_id is None:
            raise StorageError(f"Cannot update {self.entity_name} without a persistent identifier")
        with self._storage_errors("load"):
            record = self.db.get(self.record_cls, entity_id)
        if record is None:
            raise StorageError(f"{self.entity_name.capitalize()} with id {entity_id} does not exist")
        return record

    def delete(self, entity_id: int) -> bool:
        with self._storage_errors("delete"):
            record = self.db.get(self.record_cls, entity_id)
            if record is None:
                return False
            self.db.delete(record)
            self.db.flush()
        logger.info(f"Deleted {self.entity_name} {entity_id}")
        return True


# ============== 房间 ==============

class SqlAlchemyRoomRepository(_SqlAlchemyRepository, RoomRepository):
    record_cls = RoomRecord
    entity_name = "room"

    def save(self, room: Room) -> Room:
        self._require_new(room)
        with self._storage_errors("save"):
            record = RoomRecord(
                room_number=room.number,
                category=room.category,
                base_rate=room.base_rate,
                status=room.status,
            )
            self.db.add(record)
            self.db.flush()
        room.id = record.id
        return room

    def find_by_id(self, entity_id: int) -> Optional[Room]:
        with self._storage_errors("load"):
            record = self.db.get(RoomRecord, entity_id)
        return room_from_record(record) if record else None

    def find_by_natural_key(self, key: str) -> Optional[Room]:
        with self._storage_errors("load"):
            record = self.db.query(RoomRecord).filter(RoomRecord.room_number == str(key)).first()
        return room_from_record(record) if record else None

    def find_all(self) -> List[Room]:
        with self._storage_errors("list"):
            records = self.db.query(RoomRecord).order_by(RoomRecord.room_number).all()
        return [room_from_record(r) for r in records]

    def update(self, room: Room) -> Room:
        record = self._require_record(room.id)
        with self._storage_errors("update"):
            record.room_number = room.number
            record.category = room.category
            record.base_rate = room.base_rate
            record.status = room.status
            self.db.flush()
        return room


# ============== 客人 ==============

class SqlAlchemyGuestRepository(_SqlAlchemyRepository, GuestRepository):
    record_cls = GuestRecord
    entity_name = "guest"

    def save(self, guest: Guest) -> Guest:
        self._require_new(guest)
        with self._storage_errors("save"):
            record = GuestRecord(
                name=guest.name,
                surname=guest.surname,
                national_id=guest.national_id,
                email=guest.email,
                phone=guest.phone,
            )
            self.db.add(record)
            self.db.flush()
        guest.id = record.id
        return guest

    def find_by_id(self, entity_id: int) -> Optional[Guest]:
        with self._storage_errors("load"):
            record = self.db.get(GuestRecord, entity_id)
        return guest_from_record(record) if record else None

    def find_by_natural_key(self, key: str) -> Optional[Guest]:
        with self._storage_errors("load"):
            record = self.db.query(GuestRecord).filter(GuestRecord.national_id == key).first()
        return guest_from_record(record) if record else None

    def find_all(self) -> List[Guest]:
        with self._storage_errors("list"):
            records = self.db.query(GuestRecord).order_by(GuestRecord.id).all()
        return [guest_from_record(r) for r in records]

    def update(self, guest: Guest) -> Guest:
        record = self._require_record(guest.id)
        with self._storage_errors("update"):
            record.name = guest.name
            record.surname = guest.surname
            record.national_id = guest.national_id
            record.email = guest.email
            record.phone = guest.phone
            self.db.flush()
        return guest


# ============== 预订 ==============

class SqlAlchemyReservationRepository(_SqlAlchemyRepository, ReservationRepository):
    record_cls = ReservationRecord
    entity_name = "reservation"

    def _check_references(self, reservation: Reservation) -> None:
        """客人与房间必须已持久化（外键）"""
        if reservation.guest.id is None:
            raise StorageError(f"Guest {reservation.guest.national_id} of reservation {reservation.code} is not persisted")
        if reservation.room.id is None:
            raise StorageError(f"Room {reservation.room.number} of reservation {reservation.code} is not persisted")
        with self._storage_errors("load"):
            guest_exists = self.db.get(GuestRecord, reservation.guest.id) is not None
            room_exists = self.db.get(RoomRecord, reservation.room.id) is not None
        if not guest_exists:
            raise StorageError(f"Guest with id {reservation.guest.id} does not exist")
        if not room_exists:
            raise StorageError(f"Room with id {reservation.room.id} does not exist")

    def save(self, reservation: Reservation) -> Reservation:
        self._require_new(reservation)
        self._check_references(reservation)
        with self._storage_errors("save"):
            record = ReservationRecord(
                reservation_code=reservation.code,
                guest_id=reservation.guest.id,
                room_id=reservation.room.id,
                check_in_date=reservation.check_in,
                check_out_date=reservation.check_out,
                guest_count=reservation.guest_count,
                status=reservation.status,
            )
            self.db.add(record)
            self.db.flush()
        reservation.id = record.id
        return reservation

    def find_by_id(self, entity_id: int) -> Optional[Reservation]:
        with self._storage_errors("load"):
            record = self.db.get(ReservationRecord, entity_id)
            return reservation_from_record(record) if record else None

    def find_by_natural_key(self, key: str) -> Optional[Reservation]:
        with self._storage_errors("load"):
            record = self.db.query(ReservationRecord).filter(
                ReservationRecord.reservation_code == key
            ).first()
            return reservation_from_record(record) if record else None

    def find_all(self) -> List[Reservation]:
        with self._storage_errors("list"):
            records = self.db.query(ReservationRecord).order_by(ReservationRecord.id).all()
            return [reservation_from_record(r) for r in records]

    def update(self, reservation: Reservation) -> Reservation:
        record = self._require_record(reservation.id)
        self._check_references(reservation)
        with self._storage_errors("update"):
            record.reservation_code = reservation.code
            record.guest_id = reservation.guest.id
            record.room_id = reservation.room.id
            record.check_in_date = reservation.check_in
            record.check_out_date = reservation.check_out
            record.guest_count = reservation.guest_count
            record.status = reservation.status
            self.db.flush()
        return reservation
