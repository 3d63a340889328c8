"""Festival detection for Theravada, Vajrayana and Mahayana calendars.

Each detector shares the signature
``detect(day, observer, cache=None, snapshot=None, lunar=None)`` and returns
one festival or ``None``. ``snapshot`` lets callers that already hold the
day's panchangam skip a cache lookup; ``lunar`` is an optional
:class:`~uposatha.lunar.LunarCalendar`.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional

from .constants import ASHVINA, DASHAMI, VIJAYADASHAMI_FLAG
from .festival_data import (
    MAHAYANA_FIXED, MAHAYANA_LUNAR, THERAVADA_FIXED, VAJRAYANA_FESTIVALS,
    VIJAYADASHAMI_FESTIVAL, theravada_lunar_festivals,
)
from .lunar import LunarCalendar
from .models import (
    MAHAYANA, THERAVADA, VAJRAYANA, BuddhistFestival, MahayanaFestival, Observer,
    Panchangam, TheravadaFestival, VajrayanaFestival,
)
from .panchangam import PanchangamCache, resolve_cache

logger = logging.getLogger(__name__)


# ---------------- Theravada ----------------
def _is_dashami_of_ashvina(p: Panchangam) -> bool:
    return p.tithi == DASHAMI and p.masa.index == ASHVINA and not p.masa.is_adhika


def is_vijayadashami(day: date, observer: Observer, cache: PanchangamCache,
                     snapshot: Panchangam) -> bool:
    # Either the day before Dashami meets a sunrise, or Dashami holds that
    # afternoon (the ephemeris flag).
    tomorrow = cache.get(day + timedelta(days=1), observer)
    transition_day = _is_dashami_of_ashvina(tomorrow) and snapshot.tithi != DASHAMI
    return transition_day or VIJAYADASHAMI_FLAG in snapshot.observances


def detect_theravada(day: date, observer: Observer,
                     cache: Optional[PanchangamCache] = None,
                     snapshot: Optional[Panchangam] = None,
                     lunar: Optional[LunarCalendar] = None) -> Optional[TheravadaFestival]:
    for festival in THERAVADA_FIXED:
        if festival.month == day.month and festival.day == day.day:
            return festival

    cache = resolve_cache(cache)
    p = snapshot if snapshot is not None else cache.get(day, observer)

    if is_vijayadashami(day, observer, cache, p):
        return VIJAYADASHAMI_FESTIVAL

    if p.masa.is_adhika:
        return None
    for festival in theravada_lunar_festivals():
        if festival.masa_index == p.masa.index and festival.matches_tithi(p.tithi):
            return festival
    return None


# ---------------- Vajrayana ----------------
def detect_vajrayana(day: date, observer: Observer,
                     cache: Optional[PanchangamCache] = None,
                     snapshot: Optional[Panchangam] = None,
                     lunar: Optional[LunarCalendar] = None) -> Optional[VajrayanaFestival]:
    for festival in VAJRAYANA_FESTIVALS:
        if festival.date_for_year(day.year) == day:
            return festival
    return None


# ---------------- Mahayana ----------------
def detect_mahayana(day: date, observer: Observer,
                    cache: Optional[PanchangamCache] = None,
                    snapshot: Optional[Panchangam] = None,
                    lunar: Optional[LunarCalendar] = None) -> Optional[MahayanaFestival]:
    for festival in MAHAYANA_FIXED:
        if festival.month == day.month and festival.day == day.day:
            return festival

    if lunar is None:
        return None
    lunar_day = lunar.get_lunar(day.year, day.month, day.day)
    if lunar_day is None or lunar_day.is_leap:
        return None
    for festival in MAHAYANA_LUNAR:
        if (festival.lunar_month == lunar_day.lunar_month
                and festival.lunar_day == lunar_day.lunar_date):
            return festival
    return None


DETECTORS = [
    {"tradition": THERAVADA, "detect": detect_theravada},
    {"tradition": VAJRAYANA, "detect": detect_vajrayana},
    {"tradition": MAHAYANA, "detect": detect_mahayana},
]


def _detector(tradition: str):
    for entry in DETECTORS:
        if entry["tradition"].lower() == tradition.lower():
            return entry["detect"]
    raise ValueError(f"unknown tradition: {tradition!r}")


def check_all_festivals(day: date, observer: Observer,
                        cache: Optional[PanchangamCache] = None,
                        snapshot: Optional[Panchangam] = None,
                        lunar: Optional[LunarCalendar] = None) -> List[BuddhistFestival]:
    found = []
    for entry in DETECTORS:
        festival = entry["detect"](day, observer, cache, snapshot, lunar)
        if festival is not None:
            found.append(festival)
    return found


def check_festival(day: date, observer: Observer,
                   cache: Optional[PanchangamCache] = None,
                   snapshot: Optional[Panchangam] = None,
                   lunar: Optional[LunarCalendar] = None) -> Optional[BuddhistFestival]:
    for entry in DETECTORS:
        festival = entry["detect"](day, observer, cache, snapshot, lunar)
        if festival is not None:
            return festival
    return None


def check_festival_by_tradition(day: date, observer: Observer, tradition: str,
                                cache: Optional[PanchangamCache] = None,
                                snapshot: Optional[Panchangam] = None,
                                lunar: Optional[LunarCalendar] = None) -> Optional[BuddhistFestival]:
    """Run a single tradition's detector; ``ValueError`` for an unknown tradition."""
    return _detector(tradition)(day, observer, cache, snapshot, lunar)


def get_all_festival_definitions() -> List[BuddhistFestival]:
    return [
        *THERAVADA_FIXED,
        VIJAYADASHAMI_FESTIVAL,
        *theravada_lunar_festivals(),
        *VAJRAYANA_FESTIVALS,
        *MAHAYANA_FIXED,
        *MAHAYANA_LUNAR,
    ]
