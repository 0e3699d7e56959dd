from datetime import date, datetime, time, timedelta

from sqlalchemy.exc import IntegrityError, OperationalError

from clinic_api import email_service
from clinic_api.config import CLINIC_TZ, Settings, get_settings
from clinic_api.domain.booking.repository import BookingRepository
from clinic_api.main import app
from clinic_api.models import Rental, WebAppointment


def booking_payload(**overrides):
    payload = {
        "name": "Lucía Gómez",
        "email": "lucia@example.com",
        "phone": "+54 9 2954 123456",
        "date": "2099-06-10",
        "time": "14:00",
        "zones": ["Axilas", "Piernas completas"],
        "message": "Primera sesión",
    }
    payload.update(overrides)
    return payload


def test_book_appointment_creates_pending_request(client, db, sent_emails):
    response = client.post("/api/book-appointment", json=booking_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Appointment requested successfully!"
    assert body["appointment"]["status"] == "pendiente"
    assert body["appointment"]["date"] == "2099-06-10"
    assert body["appointment"]["time"].startswith("14:00")

    stored = db.query(WebAppointment).one()
    assert stored.email == "lucia@example.com"
    assert stored.zones == ["Axilas", "Piernas completas"]


def test_same_slot_cannot_be_booked_twice(client, db, sent_emails):
    first = client.post("/api/book-appointment", json=booking_payload())
    second = client.post(
        "/api/book-appointment",
        json=booking_payload(name="Otra Persona", email="otra@example.com"),
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"] == "Este horario acaba de ser reservado. Por favor, elegí otro."
    assert db.query(WebAppointment).count() == 1


def test_adjacent_slot_is_still_bookable(client, sent_emails):
    assert client.post("/api/book-appointment", json=booking_payload()).status_code == 201
    assert client.post("/api/book-appointment", json=booking_payload(time="15:00")).status_code == 201


def test_rental_day_rejects_booking(client, db, sent_emails):
    db.add(Rental(start_date=date(2099, 6, 9), end_date=date(2099, 6, 12)))
    db.commit()

    response = client.post("/api/book-appointment", json=booking_payload())

    assert response.status_code == 409
    assert response.json()["error"] == "Ese día no hay turnos disponibles."
    assert db.query(WebAppointment).count() == 0


def test_missing_fields_are_rejected_without_writing(client, db, sent_emails):
    for field in ["name", "email", "date", "time", "zones"]:
        payload = booking_payload()
        del payload[field]
        response = client.post("/api/book-appointment", json=payload)
        assert response.status_code == 400, field
        assert response.json()["error"] == "Faltan campos obligatorios."

    assert db.query(WebAppointment).count() == 0
    assert sent_emails == []


def test_empty_zones_are_rejected(client, db):
    for zones in [[], ["", "   "]]:
        response = client.post("/api/book-appointment", json=booking_payload(zones=zones))
        assert response.status_code == 400
        assert response.json()["error"] == "Faltan campos obligatorios."
    assert db.query(WebAppointment).count() == 0


def test_blank_name_is_rejected(client):
    response = client.post("/api/book-appointment", json=booking_payload(name="   "))
    assert response.status_code == 400
    assert response.json()["error"] == "Faltan campos obligatorios."


def test_invalid_email_is_rejected(client, db):
    response = client.post("/api/book-appointment", json=booking_payload(email="lucia@example"))

    assert response.status_code == 400
    assert response.json()["error"] == "El formato del email no es válido."
    assert db.query(WebAppointment).count() == 0


def test_malformed_date_and_time_are_rejected(client):
    bad_date = client.post("/api/book-appointment", json=booking_payload(date="10/06/2099"))
    bad_time = client.post("/api/book-appointment", json=booking_payload(time="2pm"))

    assert bad_date.status_code == 400
    assert "YYYY-MM-DD" in bad_date.json()["error"]
    assert bad_time.status_code == 400
    assert "HH:MM" in bad_time.json()["error"]


def test_past_date_goes_through_conflict_check(client, db, sent_emails):
    yesterday = (datetime.now(CLINIC_TZ).date() - timedelta(days=1)).isoformat()

    response = client.post("/api/book-appointment", json=booking_payload(date=yesterday))

    assert response.status_code == 201
    assert db.query(WebAppointment).count() == 1


def test_taken_slot_on_listed_day_answers_conflict(client, db, sent_emails):
    db.add(
        WebAppointment(
            name="Lucía",
            email="lucia@example.com",
            date=date(2024, 6, 10),
            time=time(14, 0),
            zones=["Axilas"],
        )
    )
    db.commit()

    slots = client.get("/api/get-availability", params={"date": "2024-06-10"}).json()["availableSlots"]
    response = client.post(
        "/api/book-appointment",
        json=booking_payload(name="Otra Persona", email="otra@example.com", date="2024-06-10", time="14:00"),
    )

    assert "14:00" not in slots
    assert response.status_code == 409
    assert response.json() == {"error": "Este horario acaba de ser reservado. Por favor, elegí otro."}
    assert db.query(WebAppointment).count() == 1
    assert sent_emails == []


def test_slot_taken_between_check_and_insert_answers_conflict(client, db, sent_emails, monkeypatch):
    def concurrent_insert(*args, **kwargs):
        raise IntegrityError("INSERT INTO web_appointments", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(BookingRepository, "create_web_appointment", staticmethod(concurrent_insert))

    response = client.post("/api/book-appointment", json=booking_payload())

    assert response.status_code == 409
    assert response.json()["error"] == "Este horario acaba de ser reservado. Por favor, elegí otro."
    assert sent_emails == []


def test_insert_failure_is_a_server_error(client, sent_emails, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("INSERT INTO web_appointments", {}, Exception("disk full"))

    monkeypatch.setattr(BookingRepository, "create_web_appointment", staticmethod(broken))

    response = client.post("/api/book-appointment", json=booking_payload())

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "No se pudo agendar el turno."
    assert "disk full" in body["details"]
    assert sent_emails == []



def test_time_outside_business_hours_is_rejected(client):
    for hhmm in ["06:00", "21:00", "14:30"]:
        response = client.post("/api/book-appointment", json=booking_payload(time=hhmm))
        assert response.status_code == 400
        assert response.json()["error"] == "El horario elegido está fuera del horario de atención."


def test_get_is_not_allowed(client):
    response = client.get("/api/book-appointment")

    assert response.status_code == 405
    assert "POST" in response.headers["allow"]
    assert "error" in response.json()


def test_booking_sends_confirmation_and_admin_notification(client, sent_emails):
    client.post("/api/book-appointment", json=booking_payload())

    assert len(sent_emails) == 2
    confirmation, notification = sent_emails

    assert confirmation["to"] == ["lucia@example.com"]
    assert confirmation["subject"] == "Solicitud de turno recibida - Centro de Belleza"
    assert confirmation["attachments"][0]["filename"] == "invitacion.ics"
    ics = bytes(confirmation["attachments"][0]["content"]).decode("utf-8")
    assert "BEGIN:VCALENDAR" in ics
    assert "DTSTART:20990610T170000Z" in ics

    assert notification["to"] == ["admin@centrodebelleza.test", "recepcion@centrodebelleza.test"]
    assert notification["subject"] == "Nueva solicitud de turno de Lucía Gómez para el 2099-06-10"
    assert "Primera sesión" in notification["html"]


def test_user_input_is_escaped_in_emails(client, sent_emails):
    client.post(
        "/api/book-appointment",
        json=booking_payload(message="<script>alert(1)</script>"),
    )

    notification = sent_emails[1]
    assert "<script>" not in notification["html"]
    assert "&lt;script&gt;" in notification["html"]


def test_email_failure_does_not_fail_booking(client, db, monkeypatch):
    def failing_send(params):
        raise RuntimeError("resend is down")

    monkeypatch.setattr(email_service.resend.Emails, "send", staticmethod(failing_send))
    monkeypatch.setattr(email_service, "compile_mjml_to_html", lambda mjml: mjml)

    response = client.post("/api/book-appointment", json=booking_payload())

    assert response.status_code == 201
    assert db.query(WebAppointment).count() == 1


def test_booking_without_email_config_skips_sending(client, db, sent_emails):
    app.dependency_overrides[get_settings] = lambda: Settings(
        _env_file=None, RESEND_API_KEY=None, ADMIN_EMAIL=None
    )

    response = client.post("/api/book-appointment", json=booking_payload())

    assert response.status_code == 201
    assert sent_emails == []
    assert db.query(WebAppointment).count() == 1


def test_booked_slot_disappears_from_availability(client, sent_emails):
    client.post("/api/book-appointment", json=booking_payload(time="09:00"))

    slots = client.get("/api/get-availability", params={"date": "2099-06-10"}).json()["availableSlots"]

    assert "09:00" not in slots
    assert "10:00" in slots
    assert len(slots) == 13


def test_booking_responses_carry_security_headers(client, sent_emails):
    response = client.post("/api/book-appointment", json=booking_payload())

    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["cache-control"].startswith("no-store")


def test_stored_time_matches_requested_slot(db, client, sent_emails):
    client.post("/api/book-appointment", json=booking_payload(time="07:00"))
    assert db.query(WebAppointment).one().time == time(7, 0)
