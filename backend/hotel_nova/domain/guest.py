"""Guest 领域实体"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Guest:
    """
    客人对象
    national_id 为自然键（证件号），id 由存储分配
    """
    name: str
    surname: str
    national_id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"

    def is_persisted(self) -> bool:
        return self.id is not None

    def __str__(self) -> str:
        return f"Guest {self.full_name} (ID {self.national_id})"
