from datetime import date, time

from sqlalchemy.exc import OperationalError

from clinic_api.domain.booking.availability import (
    AvailabilityStatus,
    ConflictReason,
    check_availability,
    generate_slots,
    get_available_slots,
)
from clinic_api.domain.booking.repository import BookingRepository
from clinic_api.models import Appointment, Location, Rental, WebAppointment

DAY = date(2024, 6, 10)


def add_web_appointment(db, day=DAY, at=time(14, 0)):
    db.add(
        WebAppointment(
            name="Lucía", email="lucia@example.com", date=day, time=at, zones=["Axilas"]
        )
    )
    db.commit()


def test_generate_slots_covers_business_hours():
    slots = generate_slots()
    assert slots[0] == "07:00"
    assert slots[-1] == "20:00"
    assert len(slots) == 14


def test_empty_day_is_available(db):
    result = check_availability(db, DAY, time(10, 0))
    assert result.status == AvailabilityStatus.AVAILABLE
    assert result.available


def test_rental_blocks_whole_day(db):
    location = Location(name="General Pico")
    db.add(location)
    db.flush()
    db.add(Rental(start_date=date(2024, 6, 9), end_date=date(2024, 6, 11), location_id=location.id))
    db.commit()

    result = check_availability(db, DAY, time(9, 0))
    assert result.status == AvailabilityStatus.UNAVAILABLE
    assert result.reason == ConflictReason.RENTAL
    assert get_available_slots(db, DAY) == []


def test_rental_range_is_inclusive_at_both_ends(db):
    db.add(Rental(start_date=DAY, end_date=DAY))
    db.commit()

    assert check_availability(db, DAY, time(7, 0)).reason == ConflictReason.RENTAL
    assert check_availability(db, date(2024, 6, 11), time(7, 0)).available


def test_walk_in_appointment_overlap_uses_half_open_intervals(db):
    db.add(Appointment(date=DAY, start_time=time(10, 0), end_time=time(11, 30)))
    db.commit()

    assert check_availability(db, DAY, time(9, 0)).available  # ends exactly at 10:00
    assert check_availability(db, DAY, time(10, 0)).reason == ConflictReason.APPOINTMENT
    assert check_availability(db, DAY, time(11, 0)).reason == ConflictReason.APPOINTMENT
    assert check_availability(db, DAY, time(11, 30), duration_minutes=30).available


def test_walk_in_without_end_time_occupies_one_slot(db):
    db.add(Appointment(date=DAY, start_time=time(15, 0), end_time=None))
    db.commit()

    assert not check_availability(db, DAY, time(15, 0)).available
    assert check_availability(db, DAY, time(16, 0)).available


def test_walk_in_with_same_start_and_end_occupies_one_slot(db):
    db.add(Appointment(date=DAY, start_time=time(10, 0), end_time=time(10, 0)))
    db.commit()

    assert not check_availability(db, DAY, time(10, 0)).available
    assert check_availability(db, DAY, time(11, 0)).available
    slots = get_available_slots(db, DAY)
    assert "10:00" not in slots
    assert slots[-1] == "20:00"
    assert len(slots) == 13


def test_walk_in_crossing_midnight_blocks_rest_of_day(db):
    db.add(Appointment(date=DAY, start_time=time(19, 0), end_time=time(1, 0)))
    db.commit()

    assert get_available_slots(db, DAY)[-1] == "18:00"


def test_web_appointment_blocks_its_slot(db):
    add_web_appointment(db)

    result = check_availability(db, DAY, time(14, 0))
    assert result.status == AvailabilityStatus.UNAVAILABLE
    assert result.reason == ConflictReason.WEB_APPOINTMENT
    assert check_availability(db, DAY, time(13, 0)).available
    assert check_availability(db, DAY, time(15, 0)).available


def test_longer_request_collides_with_following_web_appointment(db):
    add_web_appointment(db)
    assert not check_availability(db, DAY, time(13, 0), duration_minutes=90).available


def test_other_dates_do_not_interfere(db):
    add_web_appointment(db, day=date(2024, 6, 11))
    assert check_availability(db, DAY, time(14, 0)).available


def test_database_error_is_reported_as_error_not_available(db, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    monkeypatch.setattr(BookingRepository, "get_rentals_covering", staticmethod(broken))

    result = check_availability(db, DAY, time(10, 0))
    assert result.status == AvailabilityStatus.ERROR
    assert not result.available
    assert "connection lost" in result.error


def test_available_slots_exclude_every_booked_time(db):
    add_web_appointment(db, at=time(14, 0))
    db.add(Appointment(date=DAY, start_time=time(9, 0), end_time=time(10, 0)))
    db.commit()

    slots = get_available_slots(db, DAY)
    assert "14:00" not in slots
    assert "09:00" not in slots
    assert "10:00" in slots
    assert len(slots) == 12


# ------------------ endpoint ------------------


def test_get_availability_endpoint_excludes_booked_slot(client, db):
    add_web_appointment(db)

    response = client.get("/api/get-availability", params={"date": "2024-06-10"})

    assert response.status_code == 200
    slots = response.json()["availableSlots"]
    assert "14:00" not in slots
    assert "13:00" in slots


def test_get_availability_endpoint_rental_day_is_empty(client, db):
    db.add(Rental(start_date=DAY, end_date=date(2024, 6, 12)))
    db.commit()

    response = client.get("/api/get-availability", params={"date": "2024-06-10"})

    assert response.status_code == 200
    assert response.json() == {"availableSlots": []}


def test_get_availability_rejects_malformed_date(client):
    for bad in ["", "10/06/2024", "2024-13-40"]:
        response = client.get("/api/get-availability", params={"date": bad})
        assert response.status_code == 400
        assert "YYYY-MM-DD" in response.json()["error"]


def test_get_availability_database_failure_is_500(client, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("db down"))

    monkeypatch.setattr(BookingRepository, "get_rentals_covering", staticmethod(broken))

    response = client.get("/api/get-availability", params={"date": "2024-06-10"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "No se pudo obtener la disponibilidad."
    assert "db down" in body["details"]


def test_get_availability_rejects_post(client):
    response = client.post("/api/get-availability")
    assert response.status_code == 405
    assert "GET" in response.headers["allow"]
