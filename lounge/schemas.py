from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AddOnService(BaseModel):
    name: str
    price: Optional[float] = None


class BookingCreate(BaseModel):
    booking_date: str
    time_slot: str
    add_on_services: List[AddOnService] = []
    special_requests: Optional[str] = None
    flight_details: Optional[str] = None
    email: EmailStr
    name: str = Field(min_length=1)
    phone: Optional[str] = None


class BookingCreated(BaseModel):
    booking_id: str
    client_secret: Optional[str] = None
    total_price: float


class Booking(BaseModel):
    id: str
    user_id: str
    booking_date: str
    time_slot: str
    base_price: float
    add_on_services: List[AddOnService] = []
    total_price: float
    payment_intent_id: Optional[str] = None
    payment_status: Optional[str] = None
    special_requests: Optional[str] = None
    flight_details: Optional[str] = None
    status: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None


class BookingDetail(Booking):
    user: Optional[UserSummary] = None


class BookingActionResponse(BaseModel):
    success: bool
    booking: Booking


class PaymentConfirmation(BaseModel):
    payment_intent_id: str = Field(min_length=1)


class SlotAvailability(BaseModel):
    time_slot: str
    is_available: bool


class DateAvailability(BaseModel):
    date: str
    availability: List[SlotAvailability]


class ContactForm(BaseModel):
    # Presence and format are checked by the mailer so the guest gets its messages
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class ContactResponse(BaseModel):
    success: bool
    message: str


class ChatQuery(BaseModel):
    question: str = ""


class ChatResponse(BaseModel):
    answered: bool
    text: str
    faq_id: Optional[str] = None
    match_type: Optional[str] = None
    score: Optional[int] = None
    follow_up: Optional[str] = None


class FaqItem(BaseModel):
    id: str
    question: str
    answer: str
    tags: List[str]
    alt_phrases: List[str]


class FaqListing(BaseModel):
    welcome: str
    quick_questions: List[str]
    faqs: List[FaqItem]
