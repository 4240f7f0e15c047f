# menudujour/utils/dates.py
"""
Date helpers shared by the dashboard, the public page and the PDF export.

Every label is built from lookup tables rather than the process locale, so
the same input date always yields the same string on every host.
"""
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo
import re

from menudujour.core.config import get_settings

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

WEEKDAYS_FR = ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"]
MONTHS_FR = [
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
]
MONTHS_FR_SHORT = [
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
]


def today_local(now: Optional[datetime] = None) -> date:
    tz = ZoneInfo(get_settings().timezone)
    local_now = (now or datetime.now(tz)).astimezone(tz)
    return local_now.date()


def parse_iso_date(value: str) -> Optional[date]:
    """Strict YYYY-MM-DD parsing. Returns None for anything malformed."""
    if not value or not ISO_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def navigate_date(d: date, days: int) -> date:
    return d + timedelta(days=days)


def previous_day(viewed: date) -> date:
    # Relative to the date being edited, not to the real today
    return navigate_date(viewed, -1)


def format_menu_date(d: date) -> str:
    """e.g. 'lundi 15 janvier 2024'"""
    return f"{WEEKDAYS_FR[d.weekday()]} {d.day} {MONTHS_FR[d.month - 1]} {d.year}"


def format_short_date(d: date) -> str:
    """e.g. '15-janv.-24'"""
    return f"{d.day}-{MONTHS_FR_SHORT[d.month - 1]}-{d.year % 100:02d}"


def relative_date_label(d: date, today: date) -> str:
    diff = (d - today).days
    if diff == 0:
        return "Aujourd'hui"
    if diff == 1:
        return "Demain"
    if diff == -1:
        return "Hier"
    if diff > 1:
        return f"Dans {diff} jours"
    return f"Il y a {abs(diff)} jours"
