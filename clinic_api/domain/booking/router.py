"""Booking router - Public availability and booking endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...config import Settings, get_settings
from ...database import get_db
from ...shared.validators import parse_date
from .schemas import AvailabilityResponse, BookingRequest, BookingResponse, WebAppointmentResponse
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Booking"])


def get_booking_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db, settings)


@router.get("/get-availability", response_model=AvailabilityResponse)
async def get_availability(
    date: str = Query(""),
    service: BookingService = Depends(get_booking_service),
):
    """Hour-aligned free slots for a day, empty when the equipment is rented out"""
    try:
        day = parse_date(date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None

    return AvailabilityResponse(availableSlots=service.get_available_slots(day))


@router.post("/book-appointment", status_code=201, response_model=BookingResponse)
async def book_appointment(
    data: BookingRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Request an appointment; it stays 'pendiente' until the clinic confirms it"""
    appointment = await service.book(data)
    return BookingResponse(appointment=WebAppointmentResponse.model_validate(appointment))
