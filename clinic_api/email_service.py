"""
Email Service using Resend
Provides email functionality using MJML templates for responsive design
"""

import logging
from datetime import date, datetime, time
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import CLINIC_NAME, CLINIC_TZ, PRIZE_VALIDITY_DAYS, Settings
from .domain.booking.calendar import create_calendar_links, create_ics_content, format_date_for_display
from .email_templates import (
    appointment_admin_notification_template,
    appointment_confirmation_template,
    inquiry_notification_template,
    lead_admin_notification_template,
    prize_won_template,
)
from .shared.sanitization import sanitize_list, sanitize_string

logger = logging.getLogger(__name__)


class EmailNotConfiguredError(Exception):
    """Raised when RESEND_API_KEY is missing"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        # mjml_to_html returns a dict-like result with 'html' and 'errors'
        errors = getattr(result, "errors", None) or (
            result.get("errors") if isinstance(result, dict) else None
        )
        if errors:
            logger.warning(f"MJML compilation warnings: {errors}")
        if isinstance(result, dict):
            return result.get("html", "")
        return getattr(result, "html", str(result))
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise Exception(f"Failed to compile MJML template: {str(e)}") from e


async def send_email(
    settings: Settings,
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    reply_to: Optional[str] = None,
    attachments: Optional[list[dict]] = None,
) -> dict:
    """
    Send an email through Resend

    Args:
        settings: Application settings holding the Resend key and sender
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        reply_to: Optional reply-to address
        attachments: Optional list of {"filename", "content"} dicts, content as text or bytes

    Returns:
        Resend response dict
    """
    if not settings.RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailNotConfiguredError("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    email_data = {
        "from": settings.FROM_EMAIL,
        "to": recipients,
        "subject": subject,
        "html": html_content,
    }
    if reply_to:
        email_data["reply_to"] = reply_to
    if attachments:
        email_data["attachments"] = [
            {
                "filename": attachment["filename"],
                "content": list(
                    attachment["content"].encode("utf-8")
                    if isinstance(attachment["content"], str)
                    else attachment["content"]
                ),
            }
            for attachment in attachments
        ]

    try:
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        resend.api_key = settings.RESEND_API_KEY
        response = resend.Emails.send(email_data)
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise Exception(f"Failed to send email: {str(e)}") from e


# ============================================
# Pre-built emails for the public site flows
# ============================================


async def send_appointment_confirmation(
    settings: Settings, to: str, name: str, day: date, start: time, zones: list[str]
) -> dict:
    """Booking receipt for the client, with an .ics invite attached"""
    hhmm = start.strftime("%H:%M")
    mjml_content = appointment_confirmation_template(
        name=sanitize_string(name),
        display_date=format_date_for_display(day),
        time=hhmm,
        zones=sanitize_list(zones),
        calendar_links=create_calendar_links(name, day, start, zones),
    )
    return await send_email(
        settings,
        to=to,
        subject=f"Solicitud de turno recibida - {CLINIC_NAME}",
        mjml_content=mjml_content,
        attachments=[
            {"filename": "invitacion.ics", "content": create_ics_content(name, day, start, zones)}
        ],
    )


async def send_appointment_admin_notification(
    settings: Settings,
    name: str,
    email: str,
    day: date,
    start: time,
    zones: list[str],
    phone: Optional[str] = None,
    message: Optional[str] = None,
) -> dict:
    """Tell the clinic staff a web booking is waiting for confirmation"""
    mjml_content = appointment_admin_notification_template(
        name=sanitize_string(name),
        email=sanitize_string(email),
        display_date=format_date_for_display(day),
        time=start.strftime("%H:%M"),
        zones=sanitize_list(zones),
        calendar_links=create_calendar_links(name, day, start, zones),
        phone=sanitize_string(phone),
        message=sanitize_string(message),
    )
    return await send_email(
        settings,
        to=settings.admin_emails,
        subject=f"Nueva solicitud de turno de {name} para el {day.isoformat()}",
        mjml_content=mjml_content,
    )


async def send_prize_email(settings: Settings, to: str, prize: str) -> dict:
    mjml_content = prize_won_template(
        contact=sanitize_string(to),
        prize=sanitize_string(prize),
        validity_days=PRIZE_VALIDITY_DAYS,
    )
    admin_emails = settings.admin_emails
    return await send_email(
        settings,
        to=to,
        subject="Aquí está tu premio de la Ruleta de la Belleza",
        mjml_content=mjml_content,
        reply_to=admin_emails[0] if admin_emails else None,
    )


async def send_lead_admin_notification(
    settings: Settings,
    prize: str,
    expires_at: datetime,
    email: Optional[str] = None,
    whatsapp: Optional[str] = None,
) -> dict:
    claimed_at = datetime.now(CLINIC_TZ).strftime("%d/%m/%Y, %H:%M:%S")
    expires_on = expires_at.astimezone(CLINIC_TZ).strftime("%d/%m/%Y")
    mjml_content = lead_admin_notification_template(
        prize=sanitize_string(prize),
        claimed_at=claimed_at,
        expires_on=expires_on,
        email=sanitize_string(email),
        whatsapp=sanitize_string(whatsapp),
    )
    return await send_email(
        settings,
        to=settings.admin_emails,
        subject=f"Nuevo Lead de la Ruleta: {email or whatsapp}",
        mjml_content=mjml_content,
    )


async def send_inquiry_notification(settings: Settings, name: str, whatsapp: str, message: str) -> dict:
    mjml_content = inquiry_notification_template(
        name=sanitize_string(name),
        whatsapp=sanitize_string(whatsapp),
        message=sanitize_string(message),
    )
    return await send_email(
        settings,
        to=settings.admin_emails,
        subject=f"Nueva consulta de {name}",
        mjml_content=mjml_content,
    )
