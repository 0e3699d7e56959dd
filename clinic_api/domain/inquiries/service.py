"""Inquiry service - Relays contact form messages to the clinic"""

import logging
from typing import Optional

from fastapi import HTTPException

from ...config import Settings
from ...email_service import send_inquiry_notification
from ...recaptcha import require_human
from .schemas import InquiryRequest

logger = logging.getLogger(__name__)

VERIFICATION_FAILED_MESSAGE = "La verificación de seguridad falló. Por favor, intente de nuevo."


class InquiryService:
    def __init__(self, settings: Settings):
        self.settings = settings

    async def send(self, data: InquiryRequest, client_ip: Optional[str] = None) -> None:
        if not data.recaptchaToken:
            raise HTTPException(status_code=400, detail="Falta el token de reCAPTCHA.")

        await require_human(
            data.recaptchaToken,
            self.settings,
            client_ip,
            failure_message=VERIFICATION_FAILED_MESSAGE,
        )

        if not data.is_complete:
            raise HTTPException(status_code=400, detail="Faltan campos obligatorios.")

        if not self.settings.RESEND_API_KEY or not self.settings.admin_emails:
            logger.warning(
                "⚠️ Email sending skipped: Resend API key or admin email not configured"
            )
            return

        try:
            await send_inquiry_notification(
                self.settings,
                name=data.name.strip(),
                whatsapp=data.whatsapp.strip(),
                message=data.message.strip(),
            )
        except Exception as e:
            logger.error(f"❌ Error sending inquiry: {e}")
            raise HTTPException(
                status_code=500,
                detail={"error": "No se pudo enviar la consulta.", "details": str(e)},
            ) from e

        logger.info(f"📨 Inquiry from {data.name.strip()} relayed to the clinic")
