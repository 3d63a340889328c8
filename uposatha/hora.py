"""Planetary hours (horas).

Daylight and night are each cut into twelve equal parts, so hora length
varies with season and latitude. Rulers follow the Chaldean order and
advance one step per hora across the sunset boundary.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from .models import HoraSegment, Observer
from .panchangam import PanchangamCache, resolve_cache

CHALDEAN_ORDER = ["Saturn", "Jupiter", "Mars", "Sun", "Venus", "Mercury", "Moon"]

PLANET_SYMBOLS = {
    "Sun": "☉",
    "Moon": "☽",
    "Mars": "♂",
    "Mercury": "☿",
    "Jupiter": "♃",
    "Venus": "♀",
    "Saturn": "♄",
}

# vara (0 = Sunday) -> Chaldean index of the day's first hora, i.e. the day lord
DAY_START_INDEX = [3, 6, 2, 5, 1, 4, 0]


def _segments(start: datetime, end: datetime, first_number: int, ruler: int,
              is_day: bool, now: datetime) -> List[HoraSegment]:
    length = (end - start) / 12
    out = []
    for i in range(12):
        seg_start = start + i * length
        seg_end = seg_start + length
        planet = CHALDEAN_ORDER[ruler]
        out.append(HoraSegment(
            hora_number=first_number + i,
            planet=planet,
            planet_symbol=PLANET_SYMBOLS.get(planet, ""),
            start_time=seg_start,
            end_time=seg_end,
            is_day_hora=is_day,
            is_current=seg_start <= now < seg_end,
            ruler_index=ruler,
        ))
        ruler = (ruler + 1) % 7
    return out


def compute_horas(day: date, observer: Observer,
                  cache: Optional[PanchangamCache] = None,
                  now: Optional[datetime] = None) -> List[HoraSegment]:
    """24 horas from sunrise to the next sunrise, or ``[]`` without rise/set data."""
    cache = resolve_cache(cache)
    today = cache.get(day, observer)
    tomorrow = cache.get(day + timedelta(days=1), observer)
    sunrise, sunset, next_sunrise = today.sunrise, today.sunset, tomorrow.sunrise
    if sunrise is None or sunset is None or next_sunrise is None:
        return []

    now = now or datetime.now(timezone.utc)
    start = DAY_START_INDEX[today.vara]
    day_horas = _segments(sunrise, sunset, 1, start, True, now)
    night_horas = _segments(sunset, next_sunrise, 13, (start + 12) % 7, False, now)
    return day_horas + night_horas


def get_current_hora(day: date, observer: Observer,
                     cache: Optional[PanchangamCache] = None,
                     now: Optional[datetime] = None) -> Optional[HoraSegment]:
    now = now or datetime.now(timezone.utc)
    for hora in compute_horas(day, observer, cache, now):
        if hora.start_time <= now < hora.end_time:
            return hora
    return None
