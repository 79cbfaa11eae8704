"""
SQLAlchemy 工作单元
一个 with 块对应一个会话和一个事务；嵌套使用时内层加入外层事务

事件在最外层提交成功后才发布，回滚时丢弃
"""
from typing import Any, Callable, List, Optional, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_nova.database import SessionLocal
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.exceptions import StorageError
from hotel_nova.repositories.sqlalchemy_repositories import (
    SqlAlchemyGuestRepository,
    SqlAlchemyReservationRepository,
    SqlAlchemyRoomRepository,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """基于 SQLAlchemy Session 的工作单元"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory
        self.session: Optional[Session] = None
        self._depth = 0
        self._pending_events: List[Tuple[Callable[[Any], None], Any]] = []

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        if self._depth == 0:
            self.session = self.session_factory()
            self.rooms = SqlAlchemyRoomRepository(self.session)
            self.guests = SqlAlchemyGuestRepository(self.session)
            self.reservations = SqlAlchemyReservationRepository(self.session)
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._depth -= 1
        if self._depth > 0:
            # 内层：由最外层决定提交或回滚
            return

        committed = False
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
            committed = exc_type is None
        finally:
            self.session.close()
            self.session = None
            pending, self._pending_events = self._pending_events, []

        if committed:
            for publish, event in pending:
                publish(event)
        elif pending:
            logger.debug(f"Discarded {len(pending)} event(s) of a rolled back transaction")

    def publish_after_commit(self, publish: Callable[[Any], None], event: Any) -> None:
        """事务进行中时排队，等最外层提交后发布"""
        if self._depth > 0:
            self._pending_events.append((publish, event))
        else:
            publish(event)

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning(f"Commit failed, transaction rolled back: {e}")
            raise StorageError("Failed to commit transaction", cause=e) from e

    def rollback(self) -> None:
        self.session.rollback()
        logger.debug("Transaction rolled back")
