"""
客人服务
按证件号去重登记
"""
from typing import List, Optional, Callable
import logging

from hotel_nova.domain.guest import Guest
from hotel_nova.domain.repositories import UnitOfWork
from hotel_nova.models.events import EventType, GuestRegisteredData
from hotel_nova.services.event_bus import event_bus, Event

logger = logging.getLogger(__name__)


class GuestService:
    """客人服务"""

    def __init__(self, uow: UnitOfWork, event_publisher: Callable[[Event], None] = None):
        self.uow = uow
        self._publish_event = event_publisher or event_bus.publish

    def register_guest(self, name: str, surname: str, national_id: str,
                       email: Optional[str] = None, phone: Optional[str] = None) -> Guest:
        """
        登记客人（幂等）

        证件号已存在时原样返回已有记录，不做任何写入
        """
        with self.uow:
            existing = self.uow.guests.find_by_natural_key(national_id)
            if existing is not None:
                logger.debug(f"Guest with national id {national_id} already registered (id {existing.id})")
                return existing

            guest = Guest(
                name=name,
                surname=surname,
                national_id=national_id,
                email=email,
                phone=phone,
            )
            self.uow.guests.save(guest)

        logger.info(f"Guest {guest.full_name} registered with id {guest.id}")
        self.uow.publish_after_commit(self._publish_event, Event(
            event_type=EventType.GUEST_REGISTERED,
            data=GuestRegisteredData(
                guest_id=guest.id,
                national_id=guest.national_id,
                guest_name=guest.full_name,
            ).to_dict(),
            source="guest_service",
        ))
        return guest

    def find_guest(self, guest_id: int) -> Optional[Guest]:
        with self.uow:
            return self.uow.guests.find_by_id(guest_id)

    def find_guest_by_national_id(self, national_id: str) -> Optional[Guest]:
        """根据证件号获取客人"""
        with self.uow:
            return self.uow.guests.find_by_natural_key(national_id)

    def list_guests(self) -> List[Guest]:
        with self.uow:
            return self.uow.guests.find_all()
