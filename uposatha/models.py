from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, FrozenSet, List, Mapping, NamedTuple, Optional, Tuple

from .constants import TITHI_NAMES

THERAVADA = "Theravada"
MAHAYANA = "Mahayana"
VAJRAYANA = "Vajrayana"
# order used when several traditions match the same day
TRADITIONS = (THERAVADA, VAJRAYANA, MAHAYANA)


@dataclass(frozen=True)
class Observer:
    latitude: float
    longitude: float
    altitude: float = 0.0


# ---------------- Ephemeris snapshot ----------------
@dataclass(frozen=True)
class Masa:
    index: int
    name: str
    is_adhika: bool = False

    def __post_init__(self):
        if not 0 <= self.index <= 11:
            raise ValueError(f"masa index out of range: {self.index}")


@dataclass(frozen=True)
class Transition:
    name: str
    index: int
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class PlanetPosition:
    longitude: float
    rashi: int
    rashi_name: str
    degree: float
    is_retrograde: bool = False
    dignity: str = "neutral"


@dataclass(frozen=True)
class Panchangam:
    """Sunrise-anchored snapshot for one civil day at one observer.

    ``tithi`` is the 0-indexed tithi prevailing at sunrise (udaya tithi).
    Transition lists run from sunrise to the next sunrise.
    """
    date: date
    tithi: int
    masa: Masa
    paksha: str
    vara: int
    nakshatra: int = 0
    yoga: int = 0
    karana: int = 0
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    moonrise: Optional[datetime] = None
    moonset: Optional[datetime] = None
    tithi_transitions: Tuple[Transition, ...] = ()
    nakshatra_transitions: Tuple[Transition, ...] = ()
    yoga_transitions: Tuple[Transition, ...] = ()
    karana_transitions: Tuple[Transition, ...] = ()
    planetary_positions: Mapping[str, PlanetPosition] = field(default_factory=dict, hash=False)
    observances: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if not 0 <= self.tithi <= 29:
            raise ValueError(f"tithi out of range: {self.tithi}")
        if not 0 <= self.vara <= 6:
            raise ValueError(f"vara out of range: {self.vara}")

    @property
    def tithi_name(self) -> str:
        return TITHI_NAMES[self.tithi]


# ---------------- Uposatha ----------------
@dataclass(frozen=True)
class UposathaStatus:
    is_uposatha: bool
    is_full_moon: bool
    is_new_moon: bool
    is_ashtami: bool
    is_chaturdashi: bool
    is_optional: bool
    is_kshaya: bool
    is_vridhi: bool
    tithi_index: int
    tithi_number: int
    tithi_name: str
    paksha: str
    label: str
    pali_label: str
    panchangam: Panchangam
    sunrise: Optional[datetime]
    sunset: Optional[datetime]


class UposathaDay(NamedTuple):
    date: date
    status: UposathaStatus


# ---------------- Festivals ----------------
@dataclass(frozen=True)
class FestivalEvent:
    event_en: str
    event_hi: Optional[str] = None
    pali_reference: Optional[str] = None
    relic: Optional[str] = None
    sutta_cited: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class BuddhistFestival:
    id: str
    name: str
    description: str
    region: str = ""
    events: Tuple[FestivalEvent, ...] = ()


@dataclass(frozen=True)
class TheravadaFestival(BuddhistFestival):
    # fixed Gregorian observance when month/day are set, otherwise masa + tithi
    masa_index: Optional[int] = None
    tithi: Optional[int] = None
    tithi_range: Optional[Tuple[int, int]] = None
    month: Optional[int] = None
    day: Optional[int] = None
    also_known_as: Optional[str] = None
    month_hi: Optional[str] = None
    tradition: str = field(default=THERAVADA, init=False)

    def matches_tithi(self, tithi: int) -> bool:
        if self.tithi_range is not None:
            lo, hi = self.tithi_range
            return lo <= tithi <= hi
        return self.tithi == tithi


@dataclass(frozen=True)
class MahayanaFestival(BuddhistFestival):
    month: Optional[int] = None
    day: Optional[int] = None
    lunar_month: Optional[int] = None
    lunar_day: Optional[int] = None
    tradition: str = field(default=MAHAYANA, init=False)

    @property
    def is_fixed(self) -> bool:
        return self.month is not None


@dataclass(frozen=True)
class VajrayanaFestival(BuddhistFestival):
    dates: Mapping[int, date] = field(default_factory=dict, hash=False)
    tibetan_month: Optional[int] = None
    tibetan_day: Optional[int] = None
    tradition: str = field(default=VAJRAYANA, init=False)

    def date_for_year(self, year: int) -> Optional[date]:
        return self.dates.get(year)


@dataclass(frozen=True)
class FestivalMatch:
    festival: BuddhistFestival
    date: date
    days_remaining: int


# ---------------- Hora / timeline ----------------
@dataclass(frozen=True)
class HoraSegment:
    hora_number: int
    planet: str
    planet_symbol: str
    start_time: datetime
    end_time: datetime
    is_day_hora: bool
    is_current: bool
    ruler_index: int


@dataclass(frozen=True)
class TimelineSegment:
    name: str
    start_time: datetime
    end_time: datetime
    is_primary: bool


@dataclass(frozen=True)
class TimelineRow:
    type: str
    label: str
    icon: str
    segments: List[TimelineSegment]


@dataclass(frozen=True)
class TimelineData:
    rows: List[TimelineRow]
    sunrise: Optional[datetime]
    sunset: Optional[datetime]
    moonrise: Optional[datetime]
    moonset: Optional[datetime]


@dataclass(frozen=True)
class GrahaCard:
    id: str
    english_name: str
    sanskrit_name: str
    icon: str
    rashi_name: str
    rashi_symbol: str
    degree: float
    is_retrograde: bool
    dignity: str


TimelineMarkers = Dict[str, Optional[float]]
