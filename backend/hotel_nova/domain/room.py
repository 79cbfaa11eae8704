"""
Room 领域实体与房价策略
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from hotel_nova.domain.enums import RoomCategory, RoomStatus, parse_enum
from hotel_nova.exceptions import HotelError, InvalidRate, InvalidStatus

# 套房固定加价 20%
SUITE_SURCHARGE = Decimal("1.20")


def nightly_cost(category: RoomCategory, base_rate: Decimal) -> Decimal:
    """
    每晚价格（纯函数，不缓存）

    Simple / Double: 基础价
    Suite: 基础价 × 1.20
    """
    if category == RoomCategory.SUITE:
        return base_rate * SUITE_SURCHARGE
    return base_rate


@dataclass
class Room:
    """
    房间对象
    id 为 None 表示尚未持久化
    """
    number: str
    category: RoomCategory
    base_rate: Decimal
    status: RoomStatus = RoomStatus.AVAILABLE
    id: Optional[int] = None

    def __post_init__(self):
        self.number = str(self.number)
        try:
            self.category = parse_enum(RoomCategory, self.category)
        except ValueError as e:
            raise HotelError(f"Unknown room category '{self.category}'") from e
        self.status = parse_room_status(self.status)

        if not isinstance(self.base_rate, Decimal):
            self.base_rate = Decimal(str(self.base_rate))
        if self.base_rate < 0:
            raise InvalidRate(f"Base rate for room {self.number} cannot be negative: {self.base_rate}")

    def nightly_cost(self) -> Decimal:
        return nightly_cost(self.category, self.base_rate)

    def is_available(self) -> bool:
        return self.status == RoomStatus.AVAILABLE

    def __str__(self) -> str:
        return (
            f"Room {self.number} ({self.category.value}) "
            f"${self.base_rate:.2f}/night - {self.status.value}"
        )


def parse_room_status(value: Union[str, RoomStatus]) -> RoomStatus:
    """解析房间状态，无法识别时抛出 InvalidStatus"""
    try:
        return parse_enum(RoomStatus, value)
    except ValueError as e:
        raise InvalidStatus(f"Status '{value}' is not valid for a room") from e
