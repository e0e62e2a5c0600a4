import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv("config.env")


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass
class Settings:
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./captains_lounge.db")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Payments
    stripe_secret_key: str | None = os.getenv("STRIPE_SECRET_KEY")
    currency: str = os.getenv("CURRENCY", "usd")
    # Availability
    default_slot_capacity: int = int(os.getenv("DEFAULT_SLOT_CAPACITY", "1"))
    # Mail
    mail_mode: str = os.getenv("MAIL_MODE", "console")  # console | smtp
    smtp_host: str = os.getenv("SMTP_HOST", "localhost")
    smtp_port: int = int(os.getenv("SMTP_PORT", "587"))
    smtp_user: str | None = os.getenv("SMTP_USER")
    smtp_pass: str | None = os.getenv("SMTP_PASS")
    smtp_timeout: float = float(os.getenv("SMTP_TIMEOUT", "10"))
    mail_from: str = os.getenv("MAIL_FROM", "captains-lounge@system.local")
    mail_from_name: str = os.getenv("MAIL_FROM_NAME", "Captain's Lounge")
    contact_recipient: str = os.getenv("CONTACT_RECIPIENT", "daindm@yahoo.com")
    general_contact: str = os.getenv("GENERAL_CONTACT", "info@princeofgalle.com")
    send_confirmations: bool = _as_bool(os.getenv("SEND_CONFIRMATIONS"), True)


settings = Settings()
