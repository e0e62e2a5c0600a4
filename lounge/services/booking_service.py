import logging
import re
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from .. import notify
from ..config import settings
from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import Booking
from ..schemas import BookingCreate
from ..storage import DatabaseStorage
from .payment_service import PaymentGateway, PaymentGatewayError

logger = logging.getLogger(__name__)

TIME_SLOTS = ("6am-10am", "10am-2pm", "2pm-6pm", "6pm-10pm")

SLOT_NAMES = {
    "6am-10am": "Early Heritage",
    "10am-2pm": "Morning Heritage",
    "2pm-6pm": "Afternoon Heritage",
    "6pm-10pm": "Evening Heritage",
}

BASE_PRICE = Decimal("20.00")

ADD_ON_SERVICES = [
    {"name": "Ayurvedic Spa Treatment", "price": 25},
    {"name": "Premium Tea Tasting", "price": 15},
    {"name": "Grooming Services", "price": 20},
    {"name": "Gourmet Meal", "price": 18},
]

# Bookings may be cancelled only while the slot start is further away than this
CANCELLATION_WINDOW = timedelta(hours=2)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SLOT_START_RE = re.compile(r"^(\d{1,2})(am|pm)-")


def validate_date(value: str) -> str:
    if not value or not _DATE_RE.match(value):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.")
    return value


def slot_start(booking_date: str, time_slot: str) -> datetime:
    """Local start time of ``time_slot`` on ``booking_date``."""
    m = _SLOT_START_RE.match(time_slot or "")
    if not m or time_slot not in TIME_SLOTS:
        raise ValidationError(f"Unknown time slot: {time_slot}")
    hour = int(m.group(1)) % 12
    if m.group(2) == "pm":
        hour += 12
    day = datetime.strptime(booking_date, "%Y-%m-%d")
    return day.replace(hour=hour)


def price_add_ons(requested: List[Dict]) -> List[Dict]:
    """Resolve requested add-ons against the catalogue; client prices are ignored."""
    catalogue = {s["name"].lower(): s for s in ADD_ON_SERVICES}
    priced = []
    for item in requested:
        service = catalogue.get(str(item.get("name", "")).strip().lower())
        if service is None:
            raise ValidationError(f"Unknown add-on service: {item.get('name')}")
        priced.append({"name": service["name"], "price": service["price"]})
    return priced


class BookingService:
    def __init__(self, db: Session, payments: Optional[PaymentGateway] = None,
                 mailer: Optional[notify.MailTransport] = None):
        self.db = db
        self.storage = DatabaseStorage(db)
        self._payments = payments
        self.mailer = mailer

    @property
    def payments(self) -> PaymentGateway:
        if self._payments is None:
            self._payments = PaymentGateway()
        return self._payments

    def get_date_availability(self, date: str) -> List[Dict]:
        validate_date(date)
        return [
            {"time_slot": slot, "is_available": self.storage.check_availability(date, slot)}
            for slot in TIME_SLOTS
        ]

    def create_booking(self, data: BookingCreate) -> Dict:
        """Reserve a slot, then open a payment intent for it.

        The slot only counts as taken once the payment is confirmed.
        """
        validate_date(data.booking_date)
        if data.time_slot not in TIME_SLOTS:
            raise ValidationError(f"Unknown time slot: {data.time_slot}")
        add_ons = price_add_ons([a.model_dump() for a in data.add_on_services])

        if not self.storage.check_availability(data.booking_date, data.time_slot):
            raise ConflictError("Selected time slot is not available.")

        user = self.storage.get_user_by_email(data.email)
        if user is None:
            user = self.storage.create_user(email=data.email, name=data.name, phone=data.phone)

        total = BASE_PRICE + sum(Decimal(a["price"]) for a in add_ons)
        booking = self.storage.create_booking(
            {
                "booking_date": data.booking_date,
                "time_slot": data.time_slot,
                "base_price": BASE_PRICE,
                "add_on_services": add_ons,
                "total_price": total,
                "special_requests": data.special_requests,
                "flight_details": data.flight_details,
            },
            user.id,
        )

        try:
            intent = self.payments.create_payment_intent(
                int((total * 100).to_integral_value()),
                settings.currency,
                {"booking_id": booking.id, "user_id": user.id},
            )
        except PaymentGatewayError:
            self.storage.update_booking_payment(booking.id, None, "failed")
            raise

        self.storage.update_booking_payment(booking.id, intent.id, "pending")
        logger.info(f"Booking {booking.id} created for {data.booking_date} {data.time_slot}, total {total}")
        return {
            "booking_id": booking.id,
            "client_secret": intent.client_secret,
            "total_price": float(total),
        }

    def confirm_payment(self, payment_intent_id: str) -> Booking:
        intent = self.payments.retrieve_payment_intent(payment_intent_id)
        if intent.status != "succeeded":
            raise ConflictError("Payment not completed")

        metadata = getattr(intent, "metadata", None) or {}
        booking = self.storage.get_booking(metadata.get("booking_id", ""))
        if booking is None:
            raise NotFoundError("Booking not found")
        if booking.status == "cancelled":
            logger.warning(f"Payment {payment_intent_id} settled for cancelled booking {booking.id}")
            raise ConflictError("Booking has been cancelled")
        if booking.payment_status == "completed":
            return booking

        # Pending bookings hold no capacity, so the slot may have filled since creation
        if not self.storage.check_availability(booking.booking_date, booking.time_slot):
            self.storage.update_booking_payment(booking.id, payment_intent_id, "failed")
            logger.warning(f"Slot {booking.booking_date} {booking.time_slot} filled before payment {payment_intent_id} was confirmed")
            raise ConflictError("Selected time slot is no longer available.")

        booking = self.storage.update_booking_payment(booking.id, payment_intent_id, "completed")
        record = self.storage.get_availability(booking.booking_date, booking.time_slot)
        self.storage.update_availability(booking.booking_date, booking.time_slot, record.current_bookings + 1)
        logger.info(f"Payment {payment_intent_id} confirmed for booking {booking.id}")
        if settings.send_confirmations:
            notify.send_booking_confirmation(booking, booking.user, self.mailer)
        return booking

    def get_booking(self, booking_id: str) -> Dict:
        booking = self.storage.get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        user = self.storage.get_user(booking.user_id)
        return {
            "booking": booking,
            "user": {"name": user.name, "email": user.email, "phone": user.phone} if user else None,
        }

    def cancel_booking(self, booking_id: str, now: Optional[datetime] = None) -> Booking:
        booking = self.storage.get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        if booking.status == "cancelled":
            raise ConflictError("Booking is already cancelled")

        now = now or datetime.now()
        if slot_start(booking.booking_date, booking.time_slot) - now <= CANCELLATION_WINDOW:
            raise ConflictError("Cancellation must be made at least 2 hours before the booking time")

        cancelled = self.storage.cancel_booking(booking_id)
        record = self.storage.get_availability(booking.booking_date, booking.time_slot)
        if booking.payment_status == "completed" and record and record.current_bookings > 0:
            self.storage.update_availability(booking.booking_date, booking.time_slot, record.current_bookings - 1)
        logger.info(f"Booking {booking_id} cancelled")
        return cancelled
