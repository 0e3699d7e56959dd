"""Booking service - Business logic for web appointment requests"""

import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import Settings
from ...email_service import send_appointment_admin_notification, send_appointment_confirmation
from ...models import WebAppointment
from .availability import AvailabilityStatus, ConflictReason, check_availability, get_available_slots
from .repository import BookingRepository
from .schemas import BookingRequest

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "Este horario acaba de ser reservado. Por favor, elegí otro."
DAY_BLOCKED_MESSAGE = "Ese día no hay turnos disponibles."


class BookingService:
    """Service layer for availability and booking business logic"""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.repo = BookingRepository()

    def get_available_slots(self, day: date) -> list[str]:
        try:
            return get_available_slots(self.db, day)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching availability for {day}: {e}")
            raise HTTPException(
                status_code=500,
                detail={"error": "No se pudo obtener la disponibilidad.", "details": str(e)},
            ) from e

    async def book(self, data: BookingRequest) -> WebAppointment:
        """
        Re-check the slot, insert the request as 'pendiente' and notify by email.
        Email failures never fail the booking.
        """
        day = data.parsed_date
        start = data.parsed_time
        logger.info(f"📅 Booking request from {data.email} for {day} {data.time}")

        result = check_availability(self.db, day, start)
        if result.status == AvailabilityStatus.ERROR:
            raise HTTPException(
                status_code=500,
                detail={"error": "No se pudo agendar el turno.", "details": result.error},
            )
        if result.status == AvailabilityStatus.UNAVAILABLE:
            message = DAY_BLOCKED_MESSAGE if result.reason == ConflictReason.RENTAL else SLOT_TAKEN_MESSAGE
            raise HTTPException(status_code=409, detail=message)

        try:
            appointment = self.repo.create_web_appointment(
                self.db,
                name=data.name,
                email=data.email,
                phone=data.phone,
                date=day,
                time=start,
                zones=data.zones,
                message=data.message,
                status="pendiente",
            )
        except IntegrityError:
            # Lost the race against a concurrent request for the same slot
            self.db.rollback()
            logger.warning(f"⚠️ Slot {day} {data.time} taken between check and insert")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN_MESSAGE) from None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error booking appointment: {e}")
            raise HTTPException(
                status_code=500,
                detail={"error": "No se pudo agendar el turno.", "details": str(e)},
            ) from e

        logger.info(f"✅ Web appointment {appointment.id} created for {day} {data.time}")
        await self.notify(appointment)
        return appointment

    async def notify(self, appointment: WebAppointment) -> None:
        if not self.settings.RESEND_API_KEY or not self.settings.admin_emails:
            logger.warning(
                "⚠️ Email sending skipped: Resend API key or admin email not configured"
            )
            return

        try:
            await send_appointment_confirmation(
                self.settings,
                to=appointment.email,
                name=appointment.name,
                day=appointment.date,
                start=appointment.time,
                zones=appointment.zones,
            )
        except Exception as e:
            logger.error(f"Failed to send booking confirmation (appointment was saved): {e}")

        try:
            await send_appointment_admin_notification(
                self.settings,
                name=appointment.name,
                email=appointment.email,
                day=appointment.date,
                start=appointment.time,
                zones=appointment.zones,
                phone=appointment.phone,
                message=appointment.message,
            )
        except Exception as e:
            logger.error(f"Failed to send booking admin notification (appointment was saved): {e}")
