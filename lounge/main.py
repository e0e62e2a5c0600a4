import logging
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import notify, schemas
from .chatbot import QUICK_QUESTIONS, WELCOME_MESSAGE, Answered, CaptainAssistant
from .config import settings
from .database import get_db, init_db
from .errors import LoungeError, UpstreamServiceError
from .faq_data import get_corpus
from .services.booking_service import ADD_ON_SERVICES, BookingService
from .services.payment_service import PaymentGateway

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Captain's Lounge",
    description="Booking, payments and the Ask the Captain assistant for a heritage day-lounge in Galle Fort",
    version="1.0.0"
)

assistant = CaptainAssistant()


def get_payment_gateway(request: Request) -> PaymentGateway:
    gateway = getattr(request.app.state, "payment_gateway", None)
    if gateway is None:
        gateway = PaymentGateway()
        request.app.state.payment_gateway = gateway
    return gateway


def get_mail_transport(request: Request) -> notify.MailTransport:
    transport = getattr(request.app.state, "mail_transport", None)
    return transport or notify.get_transport()


def get_booking_service(
    request: Request,
    db: Session = Depends(get_db),
) -> BookingService:
    return BookingService(db, payments=get_payment_gateway(request), mailer=get_mail_transport(request))


@app.exception_handler(LoungeError)
async def lounge_error_handler(request: Request, exc: LoungeError):
    if isinstance(exc, UpstreamServiceError):
        logger.error(f"{request.method} {request.url.path} failed upstream: {type(exc).__name__}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    init_db()


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.get("/api/availability/{date}", response_model=schemas.DateAvailability)
def get_availability(date: str, service: BookingService = Depends(get_booking_service)):
    """Availability of the four time slots on a date (YYYY-MM-DD)"""
    return {"date": date, "availability": service.get_date_availability(date)}


@app.get("/api/services")
async def get_services():
    """Add-on services catalogue"""
    return ADD_ON_SERVICES


@app.post("/api/create-booking", response_model=schemas.BookingCreated)
def create_booking(data: schemas.BookingCreate, service: BookingService = Depends(get_booking_service)):
    """Create a booking and the payment intent that pays for it"""
    return service.create_booking(data)


@app.post("/api/confirm-payment", response_model=schemas.BookingActionResponse)
def confirm_payment(data: schemas.PaymentConfirmation, service: BookingService = Depends(get_booking_service)):
    booking = service.confirm_payment(data.payment_intent_id)
    return {"success": True, "booking": schemas.Booking.model_validate(booking)}


@app.get("/api/booking/{booking_id}", response_model=schemas.BookingDetail)
def get_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    found = service.get_booking(booking_id)
    detail = schemas.Booking.model_validate(found["booking"]).model_dump()
    return schemas.BookingDetail(**detail, user=found["user"])


@app.post("/api/booking/{booking_id}/cancel", response_model=schemas.BookingActionResponse)
def cancel_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    """Cancel a booking (at least 2 hours before the slot starts)"""
    booking = service.cancel_booking(booking_id)
    return {"success": True, "booking": schemas.Booking.model_validate(booking)}


@app.post("/api/contact", response_model=schemas.ContactResponse)
def contact(form: schemas.ContactForm, transport: notify.MailTransport = Depends(get_mail_transport)):
    """Forward a contact-form submission to the lounge inbox"""
    notify.send_contact_message(form.name, form.email, form.subject, form.message, transport)
    return {
        "success": True,
        "message": "Your message has been sent successfully! We'll get back to you soon.",
    }


@app.post("/api/chatbot", response_model=schemas.ChatResponse)
async def chatbot_query(query: schemas.ChatQuery):
    """Ask the Captain: answer a free-text question from the FAQ"""
    reply = assistant.reply(query.question)
    if isinstance(reply, Answered):
        return schemas.ChatResponse(
            answered=True,
            text=reply.text,
            faq_id=reply.entry.id,
            match_type=reply.match.match_type.value,
            score=reply.match.score,
            follow_up=reply.follow_up,
        )
    return schemas.ChatResponse(answered=False, text=reply.text)


@app.get("/api/faq", response_model=schemas.FaqListing)
async def list_faq():
    return {
        "welcome": WELCOME_MESSAGE,
        "quick_questions": QUICK_QUESTIONS,
        "faqs": [
            {
                "id": e.id,
                "question": e.question,
                "answer": e.answer,
                "tags": list(e.tags),
                "alt_phrases": list(e.alt_phrases),
            }
            for e in get_corpus()
        ],
    }
