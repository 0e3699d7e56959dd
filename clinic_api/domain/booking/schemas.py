"""Booking domain schemas - Pydantic models for validation"""

from datetime import date as date_type
from datetime import datetime
from datetime import time as time_type
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.validators import parse_date, parse_time, validate_email, validate_required
from .availability import generate_slots


class BookingRequest(BaseModel):
    """Schema for a public booking submission"""

    name: str
    email: str
    phone: Optional[str] = None
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    zones: list[str]
    message: Optional[str] = None

    @field_validator("name", "email", "date", "time", mode="before")
    @classmethod
    def validate_present(cls, v):
        return validate_required(v)

    @field_validator("email")
    @classmethod
    def validate_email_shape(cls, v):
        return validate_email(v)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        parse_date(v)
        return v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        parse_time(v)
        if v not in generate_slots():
            raise ValueError("El horario elegido está fuera del horario de atención.")
        return v

    @field_validator("zones")
    @classmethod
    def validate_zones(cls, v):
        zones = [z.strip() for z in v if z and z.strip()]
        if not zones:
            raise ValueError("Faltan campos obligatorios.")
        return zones

    @field_validator("phone", "message")
    @classmethod
    def blank_to_none(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def parsed_date(self) -> date_type:
        return parse_date(self.date)

    @property
    def parsed_time(self) -> time_type:
        return parse_time(self.time)


class WebAppointmentResponse(BaseModel):
    """Schema for a created web appointment"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    date: date_type
    time: time_type
    zones: list[str]
    message: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


class BookingResponse(BaseModel):
    success: bool = True
    message: str = "Appointment requested successfully!"
    appointment: WebAppointmentResponse


class AvailabilityResponse(BaseModel):
    availableSlots: list[str]
