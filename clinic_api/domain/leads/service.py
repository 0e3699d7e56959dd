"""Lead service - Business logic for prize wheel claims"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import PRIZE_VALIDITY_DAYS, Settings
from ...email_service import send_lead_admin_notification, send_prize_email
from ...recaptcha import require_human
from .repository import LeadRepository
from .schemas import PrizeClaimRequest

logger = logging.getLogger(__name__)

ALREADY_CLAIMED_MESSAGE = "Este email o WhatsApp ya ha sido utilizado para reclamar un premio."


class LeadService:
    """Service layer for prize claims"""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.repo = LeadRepository()

    async def claim_prize(self, data: PrizeClaimRequest, client_ip: Optional[str] = None) -> None:
        """
        Verify the visitor, enforce one claim per contact and record the lead.
        A failed insert is logged but the claim still succeeds so the user gets the prize email.
        """
        await require_human(data.recaptchaToken, self.settings, client_ip)

        try:
            existing = self.repo.find_existing(self.db, data.email, data.whatsapp)
        except SQLAlchemyError as e:
            logger.error(f"❌ Lead lookup failed: {e}")
            raise HTTPException(
                status_code=500,
                detail={
                    "error": "No se pudo reclamar el premio.",
                    "details": "Error al verificar la base de datos de leads.",
                },
            ) from e

        if existing:
            logger.warning(f"⚠️ Repeat prize claim for {data.email or data.whatsapp}")
            raise HTTPException(status_code=409, detail=ALREADY_CLAIMED_MESSAGE)

        expires_at = datetime.now(timezone.utc) + timedelta(days=PRIZE_VALIDITY_DAYS)
        try:
            lead = self.repo.create_lead(
                self.db,
                email=data.email,
                whatsapp=data.whatsapp,
                prize_won=data.prize,
                source="roulette",
                expires_at=expires_at,
            )
            logger.info(f"🎁 Lead {lead.id} saved, prize '{data.prize}' valid until {expires_at:%Y-%m-%d}")
        except IntegrityError:
            # A concurrent claim with the same contact got in first
            self.db.rollback()
            raise HTTPException(status_code=409, detail=ALREADY_CLAIMED_MESSAGE) from None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Lead insert failed, continuing with prize email: {e}")

        await self.notify(data, expires_at)

    async def notify(self, data: PrizeClaimRequest, expires_at: datetime) -> None:
        if not self.settings.RESEND_API_KEY or not self.settings.admin_emails:
            logger.warning("⚠️ Email sending skipped: Resend API Key or Admin Email not configured.")
            return

        if data.email:
            try:
                await send_prize_email(self.settings, to=data.email, prize=data.prize)
            except Exception as e:
                logger.error(f"Failed to send prize email to {data.email}: {e}")

        try:
            await send_lead_admin_notification(
                self.settings,
                prize=data.prize,
                expires_at=expires_at,
                email=data.email,
                whatsapp=data.whatsapp,
            )
        except Exception as e:
            logger.error(f"Failed to send lead notification: {e}")
