from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta
from typing import List, Optional

from . import config
from .festival_data import VAJRAYANA_FESTIVALS
from .festivals import detect_mahayana, detect_theravada
from .lunar import LunarCalendar
from .models import FestivalMatch, Observer
from .panchangam import PanchangamCache, resolve_cache

logger = logging.getLogger(__name__)

# Vajrayana dates come straight from their tables, so only these need a daily scan
DAILY_DETECTORS = (detect_theravada, detect_mahayana)


def _vajrayana_matches(start: date, end: date) -> List[FestivalMatch]:
    out = []
    for year in range(start.year, end.year + 1):
        for festival in VAJRAYANA_FESTIVALS:
            d = festival.date_for_year(year)
            if d is not None and start <= d < end:
                out.append(FestivalMatch(festival, d, (d - start).days))
    return out


def _merge(matches: List[FestivalMatch]) -> List[FestivalMatch]:
    seen = set()
    unique = []
    for m in matches:
        key = (m.festival.id, m.date.isoformat())
        if key in seen:
            continue
        seen.add(key)
        unique.append(m)
    return sorted(unique, key=lambda m: m.date)


async def get_upcoming_festivals(start: date, observer: Observer,
                                 days: int = config.SCAN_DAYS,
                                 cache: Optional[PanchangamCache] = None,
                                 lunar: Optional[LunarCalendar] = None) -> List[FestivalMatch]:
    """Festivals in ``[start, start + days)``, ascending by date.

    Yields to the event loop every ``config.SCAN_YIELD_EVERY`` days of the
    daily scan. Provider errors propagate.
    """
    cache = resolve_cache(cache)
    end = start + timedelta(days=days)
    matches = _vajrayana_matches(start, end)

    for offset in range(days):
        d = start + timedelta(days=offset)
        snapshot = cache.get(d, observer)
        for detect in DAILY_DETECTORS:
            festival = detect(d, observer, cache, snapshot, lunar)
            if festival is not None:
                matches.append(FestivalMatch(festival, d, offset))
        if (offset + 1) % config.SCAN_YIELD_EVERY == 0:
            logger.debug("Scanned %d/%d days from %s", offset + 1, days, start.isoformat())
            await asyncio.sleep(0)

    return _merge(matches)


def upcoming_festivals(start: date, observer: Observer,
                       days: int = config.SCAN_DAYS,
                       cache: Optional[PanchangamCache] = None,
                       lunar: Optional[LunarCalendar] = None) -> List[FestivalMatch]:
    """Blocking wrapper around :func:`get_upcoming_festivals`."""
    return asyncio.run(get_upcoming_festivals(start, observer, days, cache, lunar))
