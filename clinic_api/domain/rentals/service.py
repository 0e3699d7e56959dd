"""Rental calendar - Expands rental ranges into a per-day location map"""

from datetime import date, timedelta

from sqlalchemy.orm import Session, joinedload

from ...models import Rental

UNKNOWN_LOCATION = "Ubicación no especificada"


def rentals_since(db: Session, from_date: date) -> list[Rental]:
    return (
        db.query(Rental)
        .options(joinedload(Rental.location))
        .filter(Rental.start_date >= from_date)
        .order_by(Rental.start_date)
        .all()
    )


def build_rental_calendar(rentals: list[Rental]) -> dict[str, str]:
    """{'YYYY-MM-DD': location name} for every day covered by a rental, ends inclusive"""
    calendar: dict[str, str] = {}
    for rental in rentals:
        location_name = rental.location.name if rental.location else UNKNOWN_LOCATION
        day = rental.start_date
        while day <= rental.end_date:
            calendar[day.isoformat()] = location_name
            day += timedelta(days=1)
    return calendar


def default_from_date(today: date) -> date:
    """Two months back, so the calendar shows recent context"""
    month = today.month - 2
    year = today.year
    if month < 1:
        month += 12
        year -= 1
    return date(year, month, min(today.day, 28))
