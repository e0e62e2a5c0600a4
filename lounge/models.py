import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from .config import settings
from .database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Guests who have booked at least once, keyed by email"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(254), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(30))
    stripe_customer_id = Column(String(100))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    bookings = relationship("Booking", back_populates="user")


class Booking(Base):
    """A reservation of one 4-hour time slot"""
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    booking_date = Column(String(10), nullable=False)  # YYYY-MM-DD
    time_slot = Column(String(10), nullable=False)  # 6am-10am, 10am-2pm, 2pm-6pm, 6pm-10pm
    base_price = Column(Numeric(10, 2), nullable=False)
    add_on_services = Column(JSON, default=list)  # [{"name": ..., "price": ...}]
    total_price = Column(Numeric(10, 2), nullable=False)
    payment_intent_id = Column(String(100))
    payment_status = Column(String(20), default="pending")  # pending, completed, failed, cancelled
    special_requests = Column(Text)
    flight_details = Column(Text)
    status = Column(String(20), default="confirmed")  # confirmed, cancelled
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="bookings")


class Availability(Base):
    """Capacity bookkeeping for one (date, time slot) pair"""
    __tablename__ = "availability"
    __table_args__ = (UniqueConstraint("date", "time_slot", name="uq_availability_date_slot"),)

    id = Column(String(36), primary_key=True, default=_uuid)
    date = Column(String(10), nullable=False)
    time_slot = Column(String(10), nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    max_capacity = Column(Integer, default=lambda: settings.default_slot_capacity, nullable=False)
    current_bookings = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    @property
    def has_room(self) -> bool:
        return bool(self.is_available) and self.current_bookings < self.max_capacity
