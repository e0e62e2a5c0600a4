from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from .config import settings
from .models import Availability, Booking, User


class DatabaseStorage:
    """Persistence for users, bookings and slot availability"""

    def __init__(self, db: Session):
        self.db = db

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, email: str, name: str, phone: Optional[str] = None) -> User:
        user = User(email=email, name=name, phone=phone)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_user_stripe_customer_id(self, user_id: str, stripe_customer_id: str) -> Optional[User]:
        user = self.get_user(user_id)
        if user is None:
            return None
        user.stripe_customer_id = stripe_customer_id
        self.db.commit()
        self.db.refresh(user)
        return user

    # Bookings

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return self.db.get(Booking, booking_id)

    def get_bookings_by_user(self, user_id: str) -> List[Booking]:
        return self.db.query(Booking).filter(Booking.user_id == user_id).order_by(Booking.created_at).all()

    def list_bookings(self) -> List[Booking]:
        return self.db.query(Booking).order_by(Booking.created_at.desc()).all()

    def create_booking(self, fields: dict, user_id: str) -> Booking:
        booking = Booking(user_id=user_id, **fields)
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def update_booking_payment(self, booking_id: str, payment_intent_id: Optional[str],
                               payment_status: str) -> Optional[Booking]:
        booking = self.get_booking(booking_id)
        if booking is None:
            return None
        booking.payment_intent_id = payment_intent_id
        booking.payment_status = payment_status
        booking.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def cancel_booking(self, booking_id: str) -> Optional[Booking]:
        booking = self.get_booking(booking_id)
        if booking is None:
            return None
        booking.status = "cancelled"
        booking.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(booking)
        return booking

    # Availability

    def get_availability(self, date: str, time_slot: str) -> Optional[Availability]:
        return self.db.query(Availability).filter(
            Availability.date == date,
            Availability.time_slot == time_slot,
        ).first()

    def create_availability(self, date: str, time_slot: str, is_available: bool = True,
                            max_capacity: Optional[int] = None, current_bookings: int = 0) -> Availability:
        record = Availability(
            date=date,
            time_slot=time_slot,
            is_available=is_available,
            max_capacity=settings.default_slot_capacity if max_capacity is None else max_capacity,
            current_bookings=current_bookings,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def check_availability(self, date: str, time_slot: str) -> bool:
        """A slot with no row yet gets a default one and counts as open."""
        record = self.get_availability(date, time_slot)
        if record is None:
            self.create_availability(date, time_slot)
            return True
        return record.has_room

    def update_availability(self, date: str, time_slot: str, current_bookings: int) -> Availability:
        record = self.get_availability(date, time_slot)
        if record is None:
            record = self.create_availability(date, time_slot)
        record.current_bookings = current_bookings
        self.db.commit()
        self.db.refresh(record)
        return record
