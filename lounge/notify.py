from __future__ import annotations

import logging
import re
import smtplib
import socket
import time
from dataclasses import dataclass
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Optional, Protocol

from . import models
from .config import settings
from .errors import UpstreamServiceError, ValidationError

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class MailMessage:
    to: str
    from_addr: str
    subject: str
    body: str
    reply_to: Optional[str] = None


class MailDeliveryError(UpstreamServiceError):
    """The transport could not hand the message off."""


class MailAuthError(MailDeliveryError):
    pass


class MailUnavailableError(MailDeliveryError):
    pass


class MailUnreachableError(MailDeliveryError):
    pass


class MailTransport(Protocol):
    def send(self, message: MailMessage) -> str:
        ...


class ConsoleTransport:
    """Writes messages to the log instead of delivering them."""

    def send(self, message: MailMessage) -> str:
        logger.info(
            "\n📧 ================ OUTGOING MESSAGE ================\n"
            f"To: {message.to}\n"
            f"From: {message.from_addr}\n"
            f"Reply-To: {message.reply_to or '-'}\n"
            f"Subject: {message.subject}\n"
            f"{message.body}\n"
            "=================================================="
        )
        return f"console-delivered-{int(time.time() * 1000)}"


class SmtpTransport:
    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 user: Optional[str] = None, password: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.user = user if user is not None else settings.smtp_user
        self.password = password if password is not None else settings.smtp_pass
        self.timeout = timeout or settings.smtp_timeout

    def send(self, message: MailMessage) -> str:
        msg = MIMEText(message.body)
        msg["Subject"] = message.subject
        msg["From"] = formataddr((settings.mail_from_name, message.from_addr))
        msg["To"] = message.to
        if message.reply_to:
            msg["Reply-To"] = message.reply_to
        message_id = make_msgid()
        msg["Message-ID"] = message_id
        contact = settings.contact_recipient
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as s:
                if self.user and self.password:
                    s.starttls()
                    s.login(self.user, self.password)
                s.sendmail(message.from_addr, [message.to], msg.as_string())
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed - check mail configuration: {e}")
            raise MailAuthError(
                f"Email service configuration issue. Please contact us directly at {contact}.",
                status_code=500,
            ) from e
        except socket.gaierror as e:
            logger.error(f"SMTP server {self.host} not found - check mail configuration: {e}")
            raise MailUnreachableError(
                f"Email service unreachable. Please contact us directly at {contact}.",
                status_code=500,
            ) from e
        except (socket.timeout, ConnectionRefusedError, smtplib.SMTPConnectError,
                smtplib.SMTPServerDisconnected) as e:
            logger.error(f"SMTP server {self.host}:{self.port} unavailable: {e}")
            raise MailUnavailableError(
                "Email service temporarily unavailable. Please try again in a few minutes.",
                status_code=503,
            ) from e
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery failed: {e}")
            raise MailDeliveryError(
                "Unable to send message at this time. Please try again later.",
                status_code=500,
            ) from e
        return message_id


def get_transport() -> MailTransport:
    if settings.mail_mode == "smtp":
        return SmtpTransport()
    return ConsoleTransport()


def _clean(value, limit: int) -> str:
    return str(value).strip()[:limit]


def build_contact_message(name, email, subject, message) -> MailMessage:
    """Validate and sanitise a contact-form submission into a mail for the lounge inbox."""
    if not name or not email or not subject or not message:
        raise ValidationError("All fields are required")
    if not EMAIL_RE.match(str(email).strip()):
        raise ValidationError("Please enter a valid email address")

    clean_name = _clean(name, 100)
    clean_email = _clean(email, 254).lower()
    clean_subject = re.sub(r"[\r\n]", " ", _clean(subject, 200))
    clean_message = _clean(message, 2000).replace("\r\n", "\n").replace("\r", "\n")

    body = (
        "CAPTAIN'S LOUNGE - Contact Form Submission\n\n"
        f"Name: {clean_name}\n"
        f"Email: {clean_email}\n"
        f"Subject: {clean_subject}\n\n"
        "Message:\n"
        f"{clean_message}\n\n"
        "---\n"
        "Website contact form submission from Captain's Lounge\n"
        f"Reply to this email to respond to {clean_name}"
    )
    return MailMessage(
        to=settings.contact_recipient,
        from_addr=settings.mail_from,
        reply_to=clean_email,
        subject=f"CONTACT: {clean_subject} - from {clean_name}",
        body=body,
    )


def send_contact_message(name, email, subject, message,
                         transport: Optional[MailTransport] = None) -> str:
    mail = build_contact_message(name, email, subject, message)
    transport = transport or get_transport()
    message_id = transport.send(mail)
    if not message_id:
        logger.error("Mail transport returned no message id for contact form")
        raise MailDeliveryError("Unable to send message at this time. Please try again later.", status_code=500)
    logger.info(f"Contact form email sent: id={message_id} to={mail.to}")
    return message_id


def send_booking_confirmation(booking: models.Booking, user: models.User,
                              transport: Optional[MailTransport] = None) -> bool:
    """Best-effort: try to send a confirmation to the guest.
    Never raises; returns False if sending fails.
    """
    to = (user.email or "").strip()
    if not to:
        return False
    add_ons = ", ".join(a["name"] for a in (booking.add_on_services or [])) or "None"
    body = (
        f"Hello {user.name},\n\n"
        "Your Captain's Lounge booking is confirmed.\n"
        f"Date: {booking.booking_date}\n"
        f"Time slot: {booking.time_slot}\n"
        f"Add-on services: {add_ons}\n"
        f"Total paid: ${booking.total_price}\n"
        f"Booking reference: {booking.id}\n\n"
        "Cancellations are accepted up to 2 hours before your slot starts.\n"
        "We look forward to welcoming you to Galle Fort!\n"
        "- Captain's Lounge"
    )
    mail = MailMessage(
        to=to,
        from_addr=settings.mail_from,
        reply_to=settings.general_contact,
        subject="Your Captain's Lounge booking is confirmed",
        body=body,
    )
    try:
        (transport or get_transport()).send(mail)
        return True
    except MailDeliveryError as e:
        logger.warning(f"Booking confirmation for {booking.id} not sent: {e}")
        return False
