import os
from types import SimpleNamespace

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MAIL_MODE"] = "console"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lounge import models  # noqa: F401
from lounge.database import Base, get_db
from lounge.main import app


class FakePaymentGateway:
    """Stands in for Stripe; intents live in memory until a test settles them."""

    def __init__(self):
        self.intents = {}

    def create_payment_intent(self, amount_minor, currency=None, metadata=None):
        intent_id = f"pi_test_{len(self.intents) + 1}"
        intent = SimpleNamespace(
            id=intent_id,
            client_secret=f"{intent_id}_secret",
            amount=amount_minor,
            currency=currency,
            status="requires_payment_method",
            metadata=dict(metadata or {}),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_payment_intent(self, payment_intent_id):
        return self.intents[payment_intent_id]

    def succeed(self, payment_intent_id):
        self.intents[payment_intent_id].status = "succeeded"


class RecordingTransport:
    def __init__(self):
        self.sent = []

    def send(self, message):
        self.sent.append(message)
        return f"test-{len(self.sent)}"


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def payments():
    return FakePaymentGateway()


@pytest.fixture()
def mailer():
    return RecordingTransport()


@pytest.fixture()
def client(db_session, payments, mailer):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.state.payment_gateway = payments
    app.state.mail_transport = mailer
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        app.state.payment_gateway = None
        app.state.mail_transport = None
