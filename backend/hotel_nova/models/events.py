"""
领域事件定义 (Domain Events)
业务操作提交成功后发布
"""
from enum import Enum
from dataclasses import dataclass, field, asdict
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, Dict, Any


class EventType(str, Enum):
    """事件类型枚举"""
    # 房间相关
    ROOM_CREATED = "room.created"
    ROOM_STATUS_CHANGED = "room.status_changed"

    # 客人相关
    GUEST_REGISTERED = "guest.registered"

    # 预订相关
    RESERVATION_CREATED = "reservation.created"
    RESERVATION_CANCELLED = "reservation.cancelled"

    # 入住 / 退房
    GUEST_CHECKED_IN = "guest.checked_in"
    GUEST_CHECKED_OUT = "guest.checked_out"


@dataclass
class BaseEventData:
    """事件数据基类"""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, (datetime, date)):
                result[key] = value.isoformat()
            elif isinstance(value, Decimal):
                result[key] = str(value)
        return result


@dataclass
class RoomCreatedData(BaseEventData):
    room_id: int = 0
    room_number: str = ""
    category: str = ""


@dataclass
class RoomStatusChangedData(BaseEventData):
    """房间状态变更事件数据"""
    room_id: int = 0
    room_number: str = ""
    old_status: str = ""
    new_status: str = ""
    reason: str = ""


@dataclass
class GuestRegisteredData(BaseEventData):
    guest_id: int = 0
    national_id: str = ""
    guest_name: str = ""


@dataclass
class ReservationCreatedData(BaseEventData):
    """预订创建事件数据"""
    reservation_id: int = 0
    reservation_code: str = ""
    guest_id: int = 0
    guest_name: str = ""
    room_number: str = ""
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guest_count: int = 1


@dataclass
class ReservationCancelledData(BaseEventData):
    reservation_id: int = 0
    reservation_code: str = ""
    room_number: str = ""


@dataclass
class GuestCheckedInData(BaseEventData):
    """客人入住事件数据"""
    reservation_id: int = 0
    guest_id: int = 0
    guest_name: str = ""
    room_number: str = ""


@dataclass
class GuestCheckedOutData(BaseEventData):
    """客人退房事件数据"""
    reservation_id: int = 0
    guest_id: int = 0
    guest_name: str = ""
    room_number: str = ""
    nights: int = 0
    total_amount: Decimal = Decimal("0")
