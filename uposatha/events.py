from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional

from .festivals import check_all_festivals, check_festival_by_tradition
from .lunar import LunarCalendar
from .models import Observer
from .panchangam import PanchangamCache, resolve_cache
from .uposatha import get_year_uposatha_days

logger = logging.getLogger(__name__)


def uposatha_events_for_year(observer: Observer, year: int,
                             cache: Optional[PanchangamCache] = None,
                             include_optional: bool = False) -> List[Dict]:
    out = []
    for day, status in get_year_uposatha_days(year, observer, cache, include_optional):
        masa = status.panchangam.masa
        month = f"Adhika {masa.name}" if masa.is_adhika else masa.name
        out.append({
            "summary": status.label,
            "date": day,
            "desc": f"{status.tithi_name} ({status.paksha} Paksha), {month}",
            "kind": "uposatha",
        })
    return out


def festival_events_for_year(observer: Observer, year: int,
                             cache: Optional[PanchangamCache] = None,
                             lunar: Optional[LunarCalendar] = None,
                             tradition: Optional[str] = None) -> List[Dict]:
    cache = resolve_cache(cache)
    out = []
    d, end = date(year, 1, 1), date(year + 1, 1, 1)
    while d < end:
        if tradition:
            found = check_festival_by_tradition(d, observer, tradition, cache, lunar=lunar)
            festivals = [found] if found is not None else []
        else:
            festivals = check_all_festivals(d, observer, cache, lunar=lunar)
        for f in festivals:
            out.append({
                "summary": f.name,
                "date": d,
                "desc": f"{f.description} ({f.tradition})",
                "kind": "festival",
            })
        d += timedelta(days=1)
    return out


def events_for_year(
    observer: Observer, year: int, *,
    cache: Optional[PanchangamCache] = None,
    lunar: Optional[LunarCalendar] = None,
    tradition: Optional[str] = None,
    include_uposatha: bool = True,
    include_optional: bool = False,
    include_festivals: bool = True,
) -> List[Dict]:
    """All-day calendar events for one Gregorian year, sorted and deduplicated."""
    ev: List[Dict] = []
    if include_uposatha:
        ev += uposatha_events_for_year(observer, year, cache, include_optional)
    if include_festivals:
        ev += festival_events_for_year(observer, year, cache, lunar, tradition)
    ev.sort(key=lambda e: e["date"])
    return _dedup(ev)


def _dedup(events: List[Dict]) -> List[Dict]:
    seen, out = set(), []
    for e in events:
        key = (e["summary"], e["date"])
        if key not in seen:
            seen.add(key); out.append(e)
    return out
