"""
Pydantic 模式定义
服务层对外返回的汇总结构
"""
from datetime import date
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

from hotel_nova.domain.enums import RoomCategory


# ============== 退房账单 ==============

class Invoice(BaseModel):
    """退房时生成的账单摘要"""
    reservation_id: int
    reservation_code: str
    guest_name: str
    room_number: str
    room_category: RoomCategory
    check_in: date
    check_out: date
    nights: int = Field(..., ge=1)
    nightly_cost: Decimal = Field(..., ge=0)
    total: Decimal = Field(..., ge=0)
    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        """文本格式（供控制台前端展示）"""
        return "\n".join([
            f"--- Invoice for reservation {self.reservation_id} ({self.reservation_code}) ---",
            f"Guest: {self.guest_name}",
            f"Room: {self.room_number} ({self.room_category.value})",
            f"Stay: {self.check_in} to {self.check_out} ({self.nights} night(s))",
            f"Total: ${self.total:.2f}",
        ])


# ============== 报表 ==============

class OccupancyReport(BaseModel):
    """房态统计"""
    total: int = 0
    available: int = 0
    occupied: int = 0
    cleaning: int = 0
    maintenance: int = 0
    occupancy_rate: float = 0.0
    model_config = ConfigDict(frozen=True)
