"""
仓储接口定义
服务层只通过这些接口访问持久化层，不直接执行查询
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, List, Optional, TypeVar

from hotel_nova.domain.guest import Guest
from hotel_nova.domain.reservation import Reservation
from hotel_nova.domain.room import Room

T = TypeVar("T")
K = TypeVar("K")


class Repository(ABC, Generic[T, K]):
    """
    仓储基类

    失败统一抛出 StorageError
    """

    @abstractmethod
    def save(self, entity: T) -> T:
        """插入实体并回写存储分配的 id"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, entity_id: int) -> Optional[T]:
        raise NotImplementedError

    @abstractmethod
    def find_by_natural_key(self, key: K) -> Optional[T]:
        """按自然键查找"""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> List[T]:
        raise NotImplementedError

    @abstractmethod
    def update(self, entity: T) -> T:
        """按 id 写入实体的完整当前状态；id 未设置或不存在时抛出 StorageError"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, entity_id: int) -> bool:
        raise NotImplementedError


class RoomRepository(Repository[Room, str]):
    """房间仓储，自然键为房间号"""
    pass


class GuestRepository(Repository[Guest, str]):
    """客人仓储，自然键为证件号"""
    pass


class ReservationRepository(Repository[Reservation, str]):
    """预订仓储，自然键为预订号"""
    pass


class UnitOfWork(ABC):
    """
    工作单元：一次业务操作内的所有写入在同一事务中提交或回滚

    用法:
        with uow:
            uow.reservations.save(reservation)
            uow.rooms.update(room)
        # 正常退出时提交，异常时回滚并继续抛出
    """

    rooms: RoomRepository
    guests: GuestRepository
    reservations: ReservationRepository

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()

    def publish_after_commit(self, publish: Callable[[Any], None], event: Any) -> None:
        """事件在事务提交后发布；默认实现立即发布"""
        publish(event)

    @abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError
