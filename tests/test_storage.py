from lounge.database import engine_options
from lounge.storage import DatabaseStorage


def test_user_lookup_by_email(db_session):
    storage = DatabaseStorage(db_session)
    user = storage.create_user(email="ana@galle-travel.com", name="Ana")

    assert storage.get_user_by_email("ana@galle-travel.com").id == user.id
    assert storage.get_user(user.id).name == "Ana"
    assert storage.get_user_by_email("nobody@galle-travel.com") is None


def test_stripe_customer_id_update(db_session):
    storage = DatabaseStorage(db_session)
    user = storage.create_user(email="ana@galle-travel.com", name="Ana")

    assert storage.update_user_stripe_customer_id(user.id, "cus_123").stripe_customer_id == "cus_123"
    assert storage.update_user_stripe_customer_id("missing", "cus_123") is None


def test_booking_payment_and_cancel(db_session):
    storage = DatabaseStorage(db_session)
    user = storage.create_user(email="ana@galle-travel.com", name="Ana")
    booking = storage.create_booking(
        {"booking_date": "2030-01-15", "time_slot": "6pm-10pm", "base_price": 20, "total_price": 20},
        user.id,
    )

    assert booking.payment_status == "pending"
    assert booking.status == "confirmed"

    updated = storage.update_booking_payment(booking.id, "pi_1", "completed")
    assert updated.payment_intent_id == "pi_1"
    assert updated.payment_status == "completed"

    assert storage.cancel_booking(booking.id).status == "cancelled"
    assert storage.get_bookings_by_user(user.id)[0].id == booking.id
    assert storage.cancel_booking("missing") is None


def test_check_availability_creates_default_row(db_session):
    storage = DatabaseStorage(db_session)

    assert storage.get_availability("2030-01-15", "6am-10am") is None
    assert storage.check_availability("2030-01-15", "6am-10am") is True

    record = storage.get_availability("2030-01-15", "6am-10am")
    assert record.max_capacity == 1
    assert record.current_bookings == 0


def test_slot_full_when_bookings_reach_capacity(db_session):
    storage = DatabaseStorage(db_session)
    storage.create_availability("2030-01-15", "2pm-6pm", max_capacity=2)

    storage.update_availability("2030-01-15", "2pm-6pm", 1)
    assert storage.check_availability("2030-01-15", "2pm-6pm") is True

    storage.update_availability("2030-01-15", "2pm-6pm", 2)
    assert storage.check_availability("2030-01-15", "2pm-6pm") is False


def test_closed_slot_is_unavailable(db_session):
    storage = DatabaseStorage(db_session)
    storage.create_availability("2030-01-15", "10am-2pm", is_available=False)

    assert storage.check_availability("2030-01-15", "10am-2pm") is False


def test_update_availability_creates_missing_row(db_session):
    storage = DatabaseStorage(db_session)

    record = storage.update_availability("2030-01-16", "6pm-10pm", 1)

    assert record.current_bookings == 1
    assert storage.check_availability("2030-01-16", "6pm-10pm") is False


def test_engine_options_per_backend():
    assert engine_options("sqlite:///./captains_lounge.db") == {"connect_args": {"check_same_thread": False}}
    assert engine_options("postgresql://lounge@localhost/lounge") == {"pool_pre_ping": True}
