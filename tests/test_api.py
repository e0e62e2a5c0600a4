BOOKING = {
    "booking_date": "2030-01-15",
    "time_slot": "6pm-10pm",
    "add_on_services": [{"name": "Premium Tea Tasting", "price": 15}],
    "email": "ana@galle-travel.com",
    "name": "Ana Perera",
    "special_requests": "Quiet corner please",
}


def _create(client, **overrides):
    payload = dict(BOOKING, **overrides)
    response = client.post("/api/create-booking", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def test_health(client):
    assert client.get("/api/health").json()["status"] == "healthy"


def test_services_catalogue(client):
    names = [s["name"] for s in client.get("/api/services").json()]
    assert names == ["Ayurvedic Spa Treatment", "Premium Tea Tasting", "Grooming Services", "Gourmet Meal"]


def test_availability_for_date(client):
    body = client.get("/api/availability/2030-01-15").json()

    assert body["date"] == "2030-01-15"
    assert [a["time_slot"] for a in body["availability"]] == ["6am-10am", "10am-2pm", "2pm-6pm", "6pm-10pm"]
    assert all(a["is_available"] for a in body["availability"])


def test_availability_rejects_bad_date(client):
    response = client.get("/api/availability/15-01-2030")

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid date format. Use YYYY-MM-DD."


def test_booking_payment_flow(client, payments, mailer):
    created = _create(client)
    assert created["total_price"] == 35.0
    assert created["client_secret"] == "pi_test_1_secret"

    not_paid = client.post("/api/confirm-payment", json={"payment_intent_id": "pi_test_1"})
    assert not_paid.status_code == 409
    assert not_paid.json()["detail"] == "Payment not completed"

    payments.succeed("pi_test_1")
    confirmed = client.post("/api/confirm-payment", json={"payment_intent_id": "pi_test_1"})
    assert confirmed.status_code == 200
    assert confirmed.json()["booking"]["payment_status"] == "completed"
    assert len(mailer.sent) == 1

    slots = client.get("/api/availability/2030-01-15").json()["availability"]
    assert {a["time_slot"]: a["is_available"] for a in slots}["6pm-10pm"] is False

    taken = client.post("/api/create-booking", json=dict(BOOKING, email="other@galle-travel.com"))
    assert taken.status_code == 409
    assert taken.json()["detail"] == "Selected time slot is not available."


def test_booking_details(client):
    created = _create(client)

    body = client.get(f"/api/booking/{created['booking_id']}").json()
    assert body["time_slot"] == "6pm-10pm"
    assert body["total_price"] == 35.0
    assert body["user"] == {"name": "Ana Perera", "email": "ana@galle-travel.com", "phone": None}

    assert client.get("/api/booking/missing").status_code == 404


def test_cancel_booking(client):
    created = _create(client)

    response = client.post(f"/api/booking/{created['booking_id']}/cancel")
    assert response.status_code == 200
    assert response.json()["booking"]["status"] == "cancelled"

    assert client.post(f"/api/booking/{created['booking_id']}/cancel").status_code == 409
    assert client.post("/api/booking/missing/cancel").status_code == 404


def test_cancel_inside_window_is_rejected(client):
    created = _create(client, booking_date="2000-01-01")

    response = client.post(f"/api/booking/{created['booking_id']}/cancel")
    assert response.status_code == 409
    assert "at least 2 hours" in response.json()["detail"]


def test_create_booking_validation(client):
    assert client.post("/api/create-booking", json=dict(BOOKING, email="nope")).status_code == 422
    assert client.post("/api/create-booking", json=dict(BOOKING, time_slot="noon")).status_code == 400
    unknown = client.post("/api/create-booking", json=dict(BOOKING, add_on_services=[{"name": "Jet ski"}]))
    assert unknown.status_code == 400


def test_payment_gateway_failure_is_reported(client):
    from lounge.main import app
    from lounge.services.payment_service import PaymentGatewayError

    class BrokenGateway:
        def create_payment_intent(self, *args, **kwargs):
            raise PaymentGatewayError("Unable to start payment at this time. Please try again later.")

    app.state.payment_gateway = BrokenGateway()
    response = client.post("/api/create-booking", json=BOOKING)

    assert response.status_code == 502
    assert response.json()["detail"] == "Unable to start payment at this time. Please try again later."


def test_contact_form(client, mailer):
    response = client.post("/api/contact", json={
        "name": "Ana", "email": "ana@galle-travel.com", "subject": "Groups", "message": "We are 8 people.",
    })

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert mailer.sent[0].subject == "CONTACT: Groups - from Ana"
    assert mailer.sent[0].reply_to == "ana@galle-travel.com"


def test_contact_form_validation(client, mailer):
    missing = client.post("/api/contact", json={"name": "Ana", "email": "ana@galle-travel.com"})
    assert missing.status_code == 400
    assert missing.json()["detail"] == "All fields are required"

    bad_email = client.post("/api/contact", json={
        "name": "Ana", "email": "ana-at-example", "subject": "Hi", "message": "Hello",
    })
    assert bad_email.status_code == 400
    assert bad_email.json()["detail"] == "Please enter a valid email address"
    assert mailer.sent == []


def test_contact_form_transport_unavailable(client):
    from lounge.main import app
    from lounge.notify import MailUnavailableError

    class DownTransport:
        def send(self, message):
            raise MailUnavailableError(
                "Email service temporarily unavailable. Please try again in a few minutes.", status_code=503
            )

    app.state.mail_transport = DownTransport()
    response = client.post("/api/contact", json={
        "name": "Ana", "email": "ana@galle-travel.com", "subject": "Hi", "message": "Hello",
    })

    assert response.status_code == 503


def test_chatbot_answers(client):
    body = client.post("/api/chatbot", json={"question": "How much does it cost?"}).json()

    assert body["answered"] is True
    assert body["faq_id"] == "pricing-basic"
    assert body["match_type"] == "exact"
    assert body["text"].startswith("Captain's Lounge offers 4-hour exclusive time slots for $20 USD per person.")


def test_chatbot_follow_up(client):
    body = client.post("/api/chatbot", json={"question": "booking"}).json()

    assert body["follow_up"] == "What's included in the basic booking?"
    assert "You might also be interested in" in body["text"]


def test_chatbot_fallback(client):
    body = client.post("/api/chatbot", json={"question": "xyzqqq"}).json()

    assert body["answered"] is False
    assert body["faq_id"] is None
    assert "daindm@yahoo.com" in body["text"]


def test_faq_listing(client):
    body = client.get("/api/faq").json()

    assert len(body["faqs"]) == 20
    assert body["quick_questions"][0] == "How much does it cost?"
    assert body["welcome"].startswith("Ahoy!")
