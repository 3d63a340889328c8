"""Uposatha classification of civil days.

The sunrise tithi (udaya tithi) of each day decides its observance. Two
neighbouring sunrises refine it:

* vridhi: the tithi already prevailed at yesterday's sunrise. For the
  8th/14th-day observances the second day becomes optional.
* kshaya: the tithi in between two sunrises never meets a sunrise of its
  own. If that tithi is an observance, the non-observance day next to it
  carries it as an optional day. Usually that is the day before the skip.
  When the day before is itself an observance (chaturdashi followed by a
  skipped full or new moon), the day after the skip carries it instead.
"""
from __future__ import annotations

import calendar
import logging
from datetime import date, timedelta
from typing import List, Optional

from .constants import (
    ASHTAMI, CHATURDASHI, FULL_MOON, NEW_MOON, PALI_LABELS, TITHI_NAMES,
    UPOSATHA_TITHIS, UPOSATHA_TYPE,
)
from .models import Observer, UposathaDay, UposathaStatus
from .panchangam import PanchangamCache, resolve_cache

logger = logging.getLogger(__name__)

_EXTENDABLE = ASHTAMI | CHATURDASHI


def _observance_label(tithi: int, suffix: str) -> str:
    return f"{UPOSATHA_TYPE[tithi]} ({PALI_LABELS[tithi]}) — {suffix}"


def get_uposatha_status(day: date, observer: Observer,
                        cache: Optional[PanchangamCache] = None) -> UposathaStatus:
    cache = resolve_cache(cache)
    p = cache.get(day, observer)
    tithi = p.tithi

    significant = tithi in UPOSATHA_TITHIS
    is_vridhi = False
    if significant and tithi in _EXTENDABLE:
        is_vridhi = cache.get(day - timedelta(days=1), observer).tithi == tithi
    is_uposatha = significant and not is_vridhi

    skipped = None
    if not significant:
        ahead = (tithi + 1) % 30
        if ahead in UPOSATHA_TITHIS:
            tomorrow = cache.get(day + timedelta(days=1), observer).tithi
            if (tomorrow - tithi) % 30 == 2:
                skipped = ahead
        if skipped is None:
            yesterday = cache.get(day - timedelta(days=1), observer).tithi
            behind = (yesterday + 1) % 30
            # yesterday already keeps its own observance
            if (yesterday in UPOSATHA_TITHIS and behind in UPOSATHA_TITHIS
                    and (tithi - yesterday) % 30 == 2):
                skipped = behind
    is_kshaya = skipped is not None

    if is_uposatha:
        label = _observance_label(tithi, "Pakkha Uposatha")
        pali_label = PALI_LABELS[tithi]
    elif is_vridhi:
        label = _observance_label(tithi, "optional (vridhi tithi)")
        pali_label = PALI_LABELS[tithi]
    elif is_kshaya:
        label = _observance_label(skipped, "optional (kshaya tithi)")
        pali_label = PALI_LABELS[skipped]
    else:
        label = f"{TITHI_NAMES[tithi]} — {p.paksha} Paksha"
        pali_label = ""

    return UposathaStatus(
        is_uposatha=is_uposatha,
        is_full_moon=tithi == FULL_MOON,
        is_new_moon=tithi == NEW_MOON,
        is_ashtami=tithi in ASHTAMI,
        is_chaturdashi=tithi in CHATURDASHI,
        is_optional=is_vridhi or is_kshaya,
        is_kshaya=is_kshaya,
        is_vridhi=is_vridhi,
        tithi_index=tithi,
        tithi_number=tithi + 1,
        tithi_name=TITHI_NAMES[tithi],
        paksha=p.paksha,
        label=label,
        pali_label=pali_label,
        panchangam=p,
        sunrise=p.sunrise,
        sunset=p.sunset,
    )


def _keep(status: UposathaStatus, include_optional: bool) -> bool:
    return status.is_uposatha or (include_optional and status.is_optional)


def get_month_uposatha_days(year: int, month: int, observer: Observer,
                            cache: Optional[PanchangamCache] = None,
                            include_optional: bool = False) -> List[UposathaDay]:
    """Observance days of a Gregorian month (``month`` is 1-12)."""
    cache = resolve_cache(cache)
    days_in_month = calendar.monthrange(year, month)[1]
    out: List[UposathaDay] = []
    for dom in range(1, days_in_month + 1):
        d = date(year, month, dom)
        status = get_uposatha_status(d, observer, cache)
        if _keep(status, include_optional):
            out.append(UposathaDay(d, status))
    return out


def get_year_uposatha_days(year: int, observer: Observer,
                           cache: Optional[PanchangamCache] = None,
                           include_optional: bool = False) -> List[UposathaDay]:
    out: List[UposathaDay] = []
    for month in range(1, 13):
        out.extend(get_month_uposatha_days(year, month, observer, cache, include_optional))
    logger.debug("%d uposatha days in %d", len(out), year)
    return out


def get_next_uposatha(start: date, observer: Observer,
                      cache: Optional[PanchangamCache] = None,
                      max_days: int = 30,
                      include_optional: bool = False) -> Optional[UposathaDay]:
    """First observance day on or after ``start`` within ``max_days``."""
    cache = resolve_cache(cache)
    for offset in range(max_days):
        d = start + timedelta(days=offset)
        status = get_uposatha_status(d, observer, cache)
        if _keep(status, include_optional):
            return UposathaDay(d, status)
    return None
