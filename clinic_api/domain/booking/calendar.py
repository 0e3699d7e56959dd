"""Calendar helpers for booking emails: Spanish dates, add-to-calendar links and .ics invites"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from urllib.parse import quote

from ...config import CLINIC_LOCATION, CLINIC_NAME, CLINIC_TZ, SLOT_MINUTES

DAYS = ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"]
MONTHS = [
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
]


def format_date_for_display(day: date) -> str:
    """2024-06-10 -> 'Lunes, 10 de Junio de 2024'"""
    return f"{DAYS[day.weekday()]}, {day.day} de {MONTHS[day.month - 1]} de {day.year}"


def to_calendar_utc(value: datetime) -> str:
    """UTC stamp in the basic format calendars expect, e.g. 20240815T180000Z"""
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def appointment_window(day: date, start: time, duration_minutes: int = SLOT_MINUTES) -> tuple[str, str]:
    """Start and end of an appointment as UTC calendar stamps"""
    start_dt = datetime.combine(day, start, tzinfo=CLINIC_TZ)
    end_dt = start_dt + timedelta(minutes=duration_minutes)
    return to_calendar_utc(start_dt), to_calendar_utc(end_dt)


def create_calendar_links(name: str, day: date, start: time, zones: list[str]) -> dict[str, str]:
    start_utc, end_utc = appointment_window(day, start)
    summary = quote(f"Turno: {name} en {CLINIC_NAME}")
    description = quote(f"Detalles del turno para {name}. Zonas: {', '.join(zones)}.")
    location = quote(CLINIC_LOCATION)

    google = (
        "https://www.google.com/calendar/render?action=TEMPLATE"
        f"&text={summary}&dates={start_utc}/{end_utc}&details={description}&location={location}"
    )
    outlook = (
        "https://outlook.live.com/calendar/0/deeplink/compose?path=/calendar/action/compose&rru=addevent"
        f"&subject={summary}&startdt={start_utc}&enddt={end_utc}&body={description}&location={location}"
    )
    return {"google": google, "outlook": outlook}


def create_ics_content(
    name: str, day: date, start: time, zones: list[str], now: Optional[datetime] = None
) -> str:
    start_utc, end_utc = appointment_window(day, start)
    stamp = to_calendar_utc(now or datetime.now(timezone.utc))
    compact_name = re.sub(r"\s+", "", name)
    uid = f"{start_utc}-{compact_name}@centrodebelleza.com"

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:-//{CLINIC_NAME}//Solicitud de Turno//ES",
        "BEGIN:VEVENT",
        f"UID:{uid}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{start_utc}",
        f"DTEND:{end_utc}",
        f"SUMMARY:Turno: {name} en {CLINIC_NAME}",
        f"DESCRIPTION:Zonas a tratar: {', '.join(zones)}.",
        f"LOCATION:{CLINIC_LOCATION}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines)
