"""
hotel_nova/engine/state_machine.py

状态机引擎 - 基于 (源状态, 触发动作) 的转换表
"""
from typing import Dict, List, Optional
from dataclasses import dataclass, field
import logging
import time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateTransition:
    """
    状态转换定义

    Attributes:
        from_state: 源状态
        to_state: 目标状态
        trigger: 触发动作
    """

    from_state: str
    to_state: str
    trigger: str


@dataclass
class StateMachineConfig:
    """
    状态机配置

    Attributes:
        name: 状态机名称
        states: 所有状态的列表
        transitions: 转换列表
        initial_state: 初始状态
        final_states: 终态（没有出边）
    """

    name: str
    states: List[str]
    transitions: List[StateTransition]
    initial_state: str
    final_states: List[str] = field(default_factory=list)


@dataclass
class StateMachineSnapshot:
    """状态转换记录"""

    previous_state: str
    current_state: str
    trigger: str
    timestamp: float


class StateMachine:
    """
    状态机引擎

    Example:
        >>> machine = StateMachine(config, current_state="Confirmed")
        >>> if machine.can_fire("check_in"):
        ...     machine.fire("check_in")
    """

    def __init__(self, config: StateMachineConfig, current_state: Optional[str] = None):
        self._config = config
        self._current_state = current_state if current_state is not None else config.initial_state
        if self._current_state not in config.states:
            raise ValueError(f"Unknown state '{self._current_state}' for {config.name}")
        self._history: List[StateMachineSnapshot] = []
        self._transition_map: Dict[str, Dict[str, StateTransition]] = {}

        # 构建转换映射: from_state -> trigger -> transition
        for t in config.transitions:
            self._transition_map.setdefault(t.from_state, {})[t.trigger] = t

    @property
    def current_state(self) -> str:
        """获取当前状态"""
        return self._current_state

    @property
    def config(self) -> StateMachineConfig:
        return self._config

    def target_of(self, trigger: str) -> Optional[str]:
        """返回触发动作在当前状态下的目标状态，不允许时返回 None"""
        transition = self._transition_map.get(self._current_state, {}).get(trigger)
        return transition.to_state if transition else None

    def can_fire(self, trigger: str) -> bool:
        return self.target_of(trigger) is not None

    def available_triggers(self) -> List[str]:
        """当前状态下可用的触发动作"""
        return sorted(self._transition_map.get(self._current_state, {}).keys())

    def is_final(self) -> bool:
        return self._current_state in self._config.final_states

    def fire(self, trigger: str) -> bool:
        """
        执行触发动作

        Returns:
            True 如果转换成功；不允许时返回 False 且状态不变
        """
        target = self.target_of(trigger)
        if target is None:
            logger.warning(
                f"Invalid transition for {self._config.name}: "
                f"'{trigger}' not allowed from {self._current_state}"
            )
            return False

        previous_state = self._current_state
        self._current_state = target
        self._history.append(StateMachineSnapshot(
            previous_state=previous_state,
            current_state=target,
            trigger=trigger,
            timestamp=time.time(),
        ))
        logger.debug(f"State transition: {previous_state} -> {target} (trigger: {trigger})")
        return True

    def get_history(self) -> List[StateMachineSnapshot]:
        """获取转换历史"""
        return list(self._history)
