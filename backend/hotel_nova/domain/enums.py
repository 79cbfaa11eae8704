"""领域枚举"""
from enum import Enum
from typing import Union


class RoomCategory(str, Enum):
    """房型（决定每晚价格公式）"""
    SIMPLE = "Simple"
    DOUBLE = "Double"
    SUITE = "Suite"


class RoomStatus(str, Enum):
    """房间状态枚举"""
    AVAILABLE = "Available"      # 空闲可售
    OCCUPIED = "Occupied"        # 入住中
    CLEANING = "Cleaning"        # 清洁中
    MAINTENANCE = "Maintenance"  # 维修中


class ReservationStatus(str, Enum):
    """预订状态枚举"""
    CONFIRMED = "Confirmed"      # 已确认
    CHECKED_IN = "CheckedIn"     # 已入住
    CHECKED_OUT = "CheckedOut"   # 已退房
    CANCELLED = "Cancelled"      # 已取消


def parse_enum(enum_cls, value: Union[str, Enum]):
    """
    按值或成员名解析枚举（不区分大小写）

    Raises:
        ValueError: 无法识别的值
    """
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise ValueError(f"'{value}' is not a valid {enum_cls.__name__}")

    wanted = value.strip().lower()
    for member in enum_cls:
        if wanted in (member.value.lower(), member.name.lower()):
            return member
    raise ValueError(f"'{value}' is not a valid {enum_cls.__name__}")
