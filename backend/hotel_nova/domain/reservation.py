"""
Reservation 领域实体

状态机：
    Confirmed → CheckedIn → CheckedOut
    Confirmed → Cancelled
CheckedOut / Cancelled 为终态
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import logging

from hotel_nova.domain.enums import ReservationStatus
from hotel_nova.domain.guest import Guest
from hotel_nova.domain.room import Room
from hotel_nova.engine.state_machine import StateMachine, StateMachineConfig, StateTransition
from hotel_nova.exceptions import InvalidDateRange, InvalidGuestCount, InvalidState

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

RESERVATION_LIFECYCLE = StateMachineConfig(
    name="Reservation",
    states=[s.value for s in ReservationStatus],
    transitions=[
        StateTransition(
            from_state=ReservationStatus.CONFIRMED.value,
            to_state=ReservationStatus.CHECKED_IN.value,
            trigger="check_in",
        ),
        StateTransition(
            from_state=ReservationStatus.CHECKED_IN.value,
            to_state=ReservationStatus.CHECKED_OUT.value,
            trigger="check_out",
        ),
        StateTransition(
            from_state=ReservationStatus.CONFIRMED.value,
            to_state=ReservationStatus.CANCELLED.value,
            trigger="cancel",
        ),
    ],
    initial_state=ReservationStatus.CONFIRMED.value,
    final_states=[ReservationStatus.CHECKED_OUT.value, ReservationStatus.CANCELLED.value],
)


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass
class Reservation:
    """
    预订对象

    guest / room 是每次操作从仓储重新加载的副本，不拥有其生命周期；
    存储层只保存外键。
    """
    code: str
    guest: Guest
    room: Room
    check_in: date
    check_out: date
    guest_count: int = 1
    status: ReservationStatus = ReservationStatus.CONFIRMED
    id: Optional[int] = None
    _machine: StateMachine = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.check_out <= self.check_in:
            raise InvalidDateRange(
                f"Check-out date ({self.check_out}) must be after check-in date ({self.check_in})"
            )
        if isinstance(self.guest_count, bool) or not isinstance(self.guest_count, int) or self.guest_count < 1:
            raise InvalidGuestCount(f"Guest count must be a positive integer, got {self.guest_count!r}")

        self.status = ReservationStatus(self.status)
        self._machine = StateMachine(RESERVATION_LIFECYCLE, current_state=self.status.value)

    # ============== 计费 ==============

    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def total_cost(self) -> Decimal:
        """总价 = 晚数 × 每晚价格（每次调用重新计算）"""
        return quantize_money(self.room.nightly_cost() * self.nights())

    # ============== 状态转换 ==============

    def check_in_guest(self) -> None:
        self._fire("check_in")

    def check_out_guest(self) -> None:
        self._fire("check_out")

    def cancel(self) -> None:
        self._fire("cancel")

    def can(self, trigger: str) -> bool:
        return self._synced_machine().can_fire(trigger)

    def is_final(self) -> bool:
        return self._synced_machine().is_final()

    def _synced_machine(self) -> StateMachine:
        """status 是唯一事实来源；被直接赋值后按 status 重建状态机"""
        self.status = ReservationStatus(self.status)
        if self._machine.current_state != self.status.value:
            self._machine = StateMachine(RESERVATION_LIFECYCLE, current_state=self.status.value)
        return self._machine

    def _fire(self, trigger: str) -> None:
        if not self._synced_machine().fire(trigger):
            raise InvalidState(
                f"Reservation {self.id or self.code} cannot {trigger.replace('_', '-')}: "
                f"current status is {self.status.value}",
                current_state=self.status.value,
            )
        self.status = ReservationStatus(self._machine.current_state)

    def __str__(self) -> str:
        return (
            f"Reservation {self.code} [{self.status.value}] "
            f"{self.guest.full_name} in room {self.room.number} "
            f"{self.check_in} → {self.check_out}, {self.guest_count} guest(s), "
            f"total ${self.total_cost():.2f}"
        )
