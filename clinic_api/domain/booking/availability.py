"""
Booking conflict checker.

A proposed appointment is free when no rental covers its date and its
[start, start + duration) interval overlaps neither a walk-in appointment nor
a web appointment on that date. Web appointments occupy exactly one slot.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import END_HOUR, SLOT_MINUTES, START_HOUR
from .repository import BookingRepository

logger = logging.getLogger(__name__)


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


class ConflictReason(str, Enum):
    RENTAL = "rental"
    APPOINTMENT = "appointment"
    WEB_APPOINTMENT = "web_appointment"


@dataclass
class AvailabilityResult:
    status: AvailabilityStatus
    reason: Optional[ConflictReason] = None
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.status == AvailabilityStatus.AVAILABLE


@dataclass
class BusyInterval:
    start: datetime
    end: datetime
    source: ConflictReason

    def overlaps(self, start: datetime, end: datetime) -> bool:
        # Half-open intervals: back-to-back appointments do not collide
        return self.start < end and self.end > start


@dataclass
class DaySchedule:
    day: date
    blocked: bool = False
    busy: list[BusyInterval] = field(default_factory=list)

    def conflict_for(self, start: time, duration_minutes: int = SLOT_MINUTES) -> Optional[ConflictReason]:
        if self.blocked:
            return ConflictReason.RENTAL
        proposed_start = datetime.combine(self.day, start)
        proposed_end = proposed_start + timedelta(minutes=duration_minutes)
        for interval in self.busy:
            if interval.overlaps(proposed_start, proposed_end):
                return interval.source
        return None


def generate_slots() -> list[str]:
    """All bookable hour-aligned slots, '07:00' through '20:00'"""
    return [f"{hour:02d}:00" for hour in range(START_HOUR, END_HOUR)]


def _interval(day: date, start: time, end: Optional[time], source: ConflictReason) -> BusyInterval:
    start_dt = datetime.combine(day, start)
    # Missing or empty end means one slot long
    if end is None or end == start:
        end_dt = start_dt + timedelta(minutes=SLOT_MINUTES)
    else:
        end_dt = datetime.combine(day, end)
        # If end is before start (cross-midnight), clamp to end-of-day
        if end_dt < start_dt:
            end_dt = datetime.combine(day, datetime.max.time())
    return BusyInterval(start=start_dt, end=end_dt, source=source)


def load_day_schedule(db: Session, day: date) -> DaySchedule:
    """
    Read everything that occupies the day. Database errors propagate to the caller.
    The appointment tables are only read when no rental blocks the day.
    """
    repo = BookingRepository()

    if repo.get_rentals_covering(db, day):
        return DaySchedule(day=day, blocked=True)

    schedule = DaySchedule(day=day)
    for appointment in repo.get_appointments_on(db, day):
        schedule.busy.append(
            _interval(day, appointment.start_time, appointment.end_time, ConflictReason.APPOINTMENT)
        )
    for web_appointment in repo.get_web_appointments_on(db, day):
        schedule.busy.append(
            _interval(day, web_appointment.time, None, ConflictReason.WEB_APPOINTMENT)
        )
    return schedule


def check_availability(
    db: Session, day: date, start: time, duration_minutes: int = SLOT_MINUTES
) -> AvailabilityResult:
    """
    Decide whether the slot is free. A failed query yields ERROR, which callers
    must never read as available.
    """
    try:
        schedule = load_day_schedule(db, day)
    except SQLAlchemyError as e:
        logger.error(f"❌ Availability check failed for {day} {start}: {e}")
        db.rollback()
        return AvailabilityResult(status=AvailabilityStatus.ERROR, error=str(e))

    reason = schedule.conflict_for(start, duration_minutes)
    if reason:
        logger.info(f"⛔ {day} {start:%H:%M} unavailable ({reason.value})")
        return AvailabilityResult(status=AvailabilityStatus.UNAVAILABLE, reason=reason)
    return AvailabilityResult(status=AvailabilityStatus.AVAILABLE)


def get_available_slots(db: Session, day: date) -> list[str]:
    """Free slots for the day; empty when a rental blocks it. Database errors propagate."""
    schedule = load_day_schedule(db, day)
    if schedule.blocked:
        return []

    available = []
    for slot in generate_slots():
        slot_time = datetime.strptime(slot, "%H:%M").time()
        if schedule.conflict_for(slot_time) is None:
            available.append(slot)
    return available
