"""Display helpers for times and weekdays."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

import pytz

from .constants import SANSKRIT_WEEKDAYS
from .location import timezone_for
from .models import Observer

DEFAULT_TIMEZONE = "Asia/Kolkata"


def _zone(name: Optional[str]):
    try:
        return pytz.timezone(name or DEFAULT_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        return pytz.timezone(DEFAULT_TIMEZONE)


def format_time(moment: Optional[datetime], tz_name: Optional[str] = None) -> str:
    """12-hour clock time, e.g. ``"5:42 AM"``; empty for ``None``.

    Unknown zone names fall back to Asia/Kolkata.
    """
    if moment is None:
        return ""
    local = moment.astimezone(_zone(tz_name))
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def get_timezones() -> List[str]:
    return list(pytz.common_timezones)


def format_sanskrit_date(day: date) -> str:
    weekday = SANSKRIT_WEEKDAYS[(day.weekday() + 1) % 7]
    return f"{day.day}  {weekday}"


def guess_timezone(observer: Optional[Observer] = None) -> str:
    if observer is None:
        return DEFAULT_TIMEZONE
    return timezone_for(observer).zone
