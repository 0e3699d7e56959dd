"""Shared validation utilities"""

import re
from datetime import date, datetime, time
from typing import Optional

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def validate_required(value: Optional[str]) -> str:
    """Reject missing or blank text fields"""
    if value is None or not str(value).strip():
        raise ValueError("Faltan campos obligatorios.")
    return str(value).strip()


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email shape.

    Returns:
        The trimmed email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("El formato del email no es válido.")
    return email


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD date"""
    if not isinstance(value, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", value):
        raise ValueError("Se requiere una fecha válida en formato YYYY-MM-DD.")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError("Se requiere una fecha válida en formato YYYY-MM-DD.") from None


def parse_time(value: str) -> time:
    """Parse a strict HH:MM time"""
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValueError("Se requiere una hora válida en formato HH:MM.")
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        raise ValueError("Se requiere una hora válida en formato HH:MM.") from None


def normalize_whatsapp(value: Optional[str]) -> Optional[str]:
    """Keep digits and a leading plus so '+54 9 2954-123456' and '+5492954123456' match"""
    if not value:
        return None
    value = value.strip()
    digits = re.sub(r"\D", "", value)
    if not digits:
        return None
    return f"+{digits}" if value.startswith("+") else digits
