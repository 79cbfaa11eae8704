"""
报表服务
提供经营数据统计
"""
from decimal import Decimal
import logging

from hotel_nova.domain.enums import ReservationStatus, RoomStatus
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.models.schemas import OccupancyReport

logger = logging.getLogger(__name__)


class ReportService:
    """报表服务"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def total_revenue(self) -> Decimal:
        """已退房预订的总收入（Confirmed / CheckedIn / Cancelled 不计入）"""
        with self.uow:
            reservations = self.uow.reservations.find_all()

        revenue = sum(
            (r.total_cost() for r in reservations if r.status == ReservationStatus.CHECKED_OUT),
            Decimal("0.00"),
        )
        logger.debug(f"Total revenue over {len(reservations)} reservation(s): {revenue}")
        return revenue

    def occupancy_report(self) -> OccupancyReport:
        """房态统计，入住率 = Occupied / 全部房间 × 100"""
        with self.uow:
            rooms = self.uow.rooms.find_all()

        total_rooms = len(rooms)
        counts = {status: 0 for status in RoomStatus}
        for room in rooms:
            counts[room.status] += 1

        occupied = counts[RoomStatus.OCCUPIED]
        occupancy_rate = (occupied / total_rooms * 100) if total_rooms > 0 else 0

        return OccupancyReport(
            total=total_rooms,
            available=counts[RoomStatus.AVAILABLE],
            occupied=occupied,
            cleaning=counts[RoomStatus.CLEANING],
            maintenance=counts[RoomStatus.MAINTENANCE],
            occupancy_rate=round(occupancy_rate, 1),
        )
