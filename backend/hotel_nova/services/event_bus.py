"""
事件总线 - 进程内发布/订阅
业务操作提交成功后发布领域事件；处理器异常只记录日志，不影响业务操作
"""
from typing import Callable, Dict, List, Any, Optional, Union
from dataclasses import dataclass, field
from datetime import datetime
from collections import deque
import logging
import uuid

from hotel_nova.models.events import EventType

logger = logging.getLogger(__name__)

EventHandler = Callable[["Event"], None]


@dataclass
class Event:
    """事件"""
    event_type: str
    data: Dict[str, Any]
    source: str  # 触发来源（服务名）
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        if isinstance(self.event_type, EventType):
            self.event_type = self.event_type.value


class EventBus:
    """
    同步事件总线

    使用方式：
    1. 订阅事件：event_bus.subscribe(EventType.GUEST_CHECKED_OUT, handler)
    2. 发布事件：event_bus.publish(Event(...))
    3. 取消订阅：event_bus.unsubscribe(EventType.GUEST_CHECKED_OUT, handler)
    """

    def __init__(self, history_size: int = 100):
        self._subscribers: Dict[str, List[EventHandler]] = {}
        self._event_history: deque = deque(maxlen=history_size)

    @staticmethod
    def _key(event_type: Union[str, EventType]) -> str:
        return event_type.value if isinstance(event_type, EventType) else event_type

    def subscribe(self, event_type: Union[str, EventType], handler: EventHandler) -> None:
        handlers = self._subscribers.setdefault(self._key(event_type), [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Handler {getattr(handler, '__name__', handler)} subscribed to {self._key(event_type)}")

    def unsubscribe(self, event_type: Union[str, EventType], handler: EventHandler) -> None:
        handlers = self._subscribers.get(self._key(event_type), [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: Event) -> None:
        """
        发布事件（同步执行所有处理器）

        处理器异常不会影响其他处理器的执行
        """
        self._event_history.append(event)

        for handler in list(self._subscribers.get(event.event_type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"Event handler {getattr(handler, '__name__', handler)} error for {event.event_type}: {e}",
                    exc_info=True
                )

    def get_history(self, event_type: Optional[Union[str, EventType]] = None, limit: int = 50) -> List[Event]:
        """获取事件历史（最新的在前）"""
        history = list(self._event_history)
        if event_type:
            key = self._key(event_type)
            history = [e for e in history if e.event_type == key]
        return list(reversed(history))[:limit]

    def clear_subscribers(self) -> None:
        """清空所有订阅（用于测试）"""
        self._subscribers.clear()

    def clear_history(self) -> None:
        self._event_history.clear()


# 全局事件总线实例
event_bus = EventBus()
