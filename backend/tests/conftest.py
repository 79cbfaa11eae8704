"""
Pytest 配置和共享 fixtures
"""
import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hotel_nova.database import Base, init_db
from hotel_nova.domain import Guest, Room, RoomCategory
from hotel_nova.repositories import SqlAlchemyUnitOfWork
from hotel_nova.services import HotelService

TODAY = date(2024, 3, 10)


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """独立会话，用于直接检查已提交的数据"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def uow(session_factory):
    return SqlAlchemyUnitOfWork(session_factory)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    """固定时钟"""
    return lambda: TODAY


class EventRecorder(list):
    """记录发布的事件"""

    def types(self):
        return [e.event_type for e in self]


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def publisher(recorder):
    return recorder.append


@pytest.fixture
def hotel(uow, clock, publisher):
    return HotelService(uow, clock=clock, event_publisher=publisher)


# ============== 测试数据 ==============

@pytest.fixture
def simple_room(uow):
    with uow:
        return uow.rooms.save(Room(number="101", category=RoomCategory.SIMPLE, base_rate=Decimal("50.00")))


@pytest.fixture
def suite_room(uow):
    with uow:
        return uow.rooms.save(Room(number="201", category=RoomCategory.SUITE, base_rate=Decimal("150.00")))


@pytest.fixture
def guest(uow):
    with uow:
        return uow.guests.save(Guest(name="Ana", surname="Lopez", national_id="X1234567"))
