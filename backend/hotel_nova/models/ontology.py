"""
持久化记录定义 (ORM)
领域实体为普通 dataclass，这里的记录只负责表结构；二者之间的映射在仓储中完成
"""
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, DateTime, Date,
    ForeignKey, Enum as SQLEnum, Numeric
)
from sqlalchemy.orm import relationship

from hotel_nova.database import Base
from hotel_nova.domain.enums import RoomCategory, RoomStatus, ReservationStatus


class RoomRecord(Base):
    """
    房间记录
    room_number 为自然键
    """
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String(10), unique=True, nullable=False)  # 房间号
    category = Column(SQLEnum(RoomCategory), nullable=False)       # 房型
    base_rate = Column(Numeric(10, 2), nullable=False)             # 基础价格
    status = Column(SQLEnum(RoomStatus), nullable=False, default=RoomStatus.AVAILABLE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    reservations = relationship("ReservationRecord", back_populates="room")


class GuestRecord(Base):
    """
    客人记录
    national_id 为自然键
    """
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)                      # 名
    surname = Column(String(100), nullable=False)                   # 姓
    national_id = Column(String(50), unique=True, nullable=False)   # 证件号码
    email = Column(String(100))
    phone = Column(String(20))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    reservations = relationship("ReservationRecord", back_populates="guest")


class ReservationRecord(Base):
    """
    预订记录
    只保存客人与房间的外键，总价不落库
    """
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    reservation_code = Column(String(32), unique=True, nullable=False)  # 预订号
    guest_id = Column(Integer, ForeignKey("guests.id"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    check_in_date = Column(Date, nullable=False)         # 入住日期
    check_out_date = Column(Date, nullable=False)        # 离店日期
    guest_count = Column(Integer, nullable=False, default=1)
    status = Column(SQLEnum(ReservationStatus), nullable=False, default=ReservationStatus.CONFIRMED)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    guest = relationship("GuestRecord", back_populates="reservations")
    room = relationship("RoomRecord", back_populates="reservations")
