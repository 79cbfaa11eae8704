"""
业务异常定义
所有业务规则违反统一继承 HotelError，子类用于区分具体原因
"""
from typing import Optional


class HotelError(Exception):
    """业务规则违反（携带可读消息）"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateRoom(HotelError):
    """房间号已存在"""
    pass


class RoomNotFound(HotelError):
    """房间不存在"""
    pass


class RoomNotAvailable(HotelError):
    """房间当前状态不可用"""
    pass


class InvalidStatus(HotelError):
    """无法识别的房间状态"""
    pass


class InvalidRate(HotelError):
    """房价为负数"""
    pass


class GuestNotPersisted(HotelError):
    """客人尚未持久化"""
    pass


class InvalidDateRange(HotelError):
    """离店日期必须晚于入住日期"""
    pass


class InvalidGuestCount(HotelError):
    """入住人数必须为正整数"""
    pass


class ReservationNotFound(HotelError):
    """预订不存在"""
    pass


class InvalidState(HotelError):
    """非法的预订状态转换"""

    def __init__(self, message: str, current_state: Optional[str] = None):
        super().__init__(message)
        self.current_state = current_state


class StorageError(HotelError):
    """持久化层失败，cause 保存底层错误信息"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


__all__ = [
    "HotelError",
    "DuplicateRoom",
    "RoomNotFound",
    "RoomNotAvailable",
    "InvalidStatus",
    "InvalidRate",
    "GuestNotPersisted",
    "InvalidDateRange",
    "InvalidGuestCount",
    "ReservationNotFound",
    "InvalidState",
    "StorageError",
]
