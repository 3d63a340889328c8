from __future__ import annotations
import logging
from datetime import date, datetime, time, timedelta, timezone
from math import floor
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from astral import Observer as AstralObserver
from astral.moon import moonrise as astral_moonrise, moonset as astral_moonset
from astral.sun import sunrise as astral_sunrise, sunset as astral_sunset
from skyfield.api import Loader

from . import config
from .constants import (
    ASHVINA, DASHAMI, KARANA_NAMES, MASA_NAMES, NAKSHATRA_NAMES, RASHI_NAMES, TITHI_NAMES,
    VIJAYADASHAMI_FLAG, YOGA_NAMES, dignity_for, paksha_for_tithi,
)
from .location import timezone_for
from .models import Masa, Observer, Panchangam, PlanetPosition, Transition

logger = logging.getLogger(__name__)

NAKSHATRA_SPAN = 360.0 / 27
SYNODIC_MONTH_DAYS = 29.530588853
MEAN_ELONGATION_PER_DAY = 360.0 / SYNODIC_MONTH_DAYS

_SAMPLE_STEP = timedelta(minutes=20)
_BISECT_PRECISION = timedelta(seconds=30)

_PLANET_TARGETS = {
    "sun": "sun",
    "moon": "moon",
    "mars": "mars barycenter",
    "mercury": "mercury",
    "jupiter": "jupiter barycenter",
    "venus": "venus",
    "saturn": "saturn barycenter",
}

_CATEGORY_NAMES = {
    "tithi": TITHI_NAMES,
    "nakshatra": NAKSHATRA_NAMES,
    "yoga": YOGA_NAMES,
    "karana": KARANA_NAMES,
}


# ------------- Sidereal (Lahiri) ----------
def _julian_centuries_tt(dt_aware: datetime) -> float:
    dt_utc = dt_aware.astimezone(timezone.utc)
    y, m = dt_utc.year, dt_utc.month
    d = dt_utc.day + (dt_utc.hour + (dt_utc.minute + dt_utc.second/60)/60)/24
    if m <= 2:
        y -= 1; m += 12
    A = floor(y/100); B = 2 - A + floor(A/4)
    JD = floor(365.25*(y+4716)) + floor(30.6001*(m+1)) + d + B - 1524.5
    return (JD - 2451545.0) / 36525.0


def lahiri_ayanamsha_deg(dt_aware: datetime) -> float:
    T = _julian_centuries_tt(dt_aware)
    lahiri_2000_sec = 23*3600 + 51*60 + 11
    precession_sec = 5028.796195 * T
    return (lahiri_2000_sec + precession_sec) / 3600.0


def mean_lunar_node_deg(dt_aware: datetime) -> float:
    T = _julian_centuries_tt(dt_aware)
    return (125.04452 - 1934.136261 * T) % 360.0


def _wrap180(x: float) -> float:
    return (x + 180.0) % 360.0 - 180.0


def panchanga_indices(lam_sun: float, lam_moon: float, ayanamsha: float) -> Dict[str, int]:
    """Tithi, karana, nakshatra and yoga indices from tropical longitudes."""
    elong = (lam_moon - lam_sun) % 360.0
    sun_sid = (lam_sun - ayanamsha) % 360.0
    moon_sid = (lam_moon - ayanamsha) % 360.0
    return {
        "tithi": int(elong // 12.0) % 30,
        "karana": int(elong // 6.0) % 60,
        "nakshatra": int(moon_sid // NAKSHATRA_SPAN) % 27,
        "yoga": int(((sun_sid + moon_sid) % 360.0) // NAKSHATRA_SPAN) % 27,
    }


def _position(key: str, sidereal: float, retrograde: bool) -> PlanetPosition:
    rashi = int(sidereal // 30.0) % 12
    return PlanetPosition(
        longitude=round(sidereal, 4),
        rashi=rashi,
        rashi_name=RASHI_NAMES[rashi],
        degree=round(sidereal % 30.0, 2),
        is_retrograde=retrograde,
        dignity=dignity_for(key, rashi),
    )


class SkyfieldEphemeris:
    """Panchangam provider: JPL kernel through skyfield, rise/set through astral.

    All values are anchored to local sunrise. Where the sun does not rise
    (polar day or night) the snapshot falls back to local noon and carries
    ``None`` for the missing instants.
    """

    def __init__(self, ephemeris_file: str = config.EPHEMERIS_FILE,
                 data_dir: Path = config.EPHEMERIS_DIR):
        self.ephemeris_file = ephemeris_file
        self.data_dir = Path(data_dir)
        self._eph = None
        self._ts = None

    # ---------------- Ephemerides ----------------
    def _load_ephem(self):
        if self._eph is None or self._ts is None:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            load = Loader(str(self.data_dir))
            logger.info("Loading ephemeris %s from %s", self.ephemeris_file, self.data_dir)
            self._eph = load(self.ephemeris_file)
            self._ts = load.timescale()
        return self._eph, self._ts

    def _longitudes(self, moments: List[datetime]) -> Tuple[List[float], List[float]]:
        eph, ts = self._load_ephem()
        t = ts.from_datetimes(moments)
        earth = eph["earth"]
        _, lon_sun, _ = earth.at(t).observe(eph["sun"]).apparent().ecliptic_latlon(epoch="date")
        _, lon_moon, _ = earth.at(t).observe(eph["moon"]).apparent().ecliptic_latlon(epoch="date")
        return ([float(x) % 360.0 for x in lon_sun.degrees],
                [float(x) % 360.0 for x in lon_moon.degrees])

    def _longitudes_at(self, moment: datetime) -> Tuple[float, float]:
        suns, moons = self._longitudes([moment])
        return suns[0], moons[0]

    def _index_at(self, category: str, moment: datetime) -> int:
        lam_sun, lam_moon = self._longitudes_at(moment)
        return panchanga_indices(lam_sun, lam_moon, lahiri_ayanamsha_deg(moment))[category]

    def _sun_sidereal(self, moment: datetime) -> float:
        lam_sun, _ = self._longitudes_at(moment)
        return (lam_sun - lahiri_ayanamsha_deg(moment)) % 360.0

    # --------------- Rise/Set ----------
    @staticmethod
    def _astral_observer(observer: Observer) -> AstralObserver:
        return AstralObserver(latitude=observer.latitude, longitude=observer.longitude,
                              elevation=observer.altitude)

    def sun_times(self, observer: Observer, day: date, tz) -> Tuple[Optional[datetime], Optional[datetime]]:
        obs = self._astral_observer(observer)
        try:
            sr = astral_sunrise(obs, date=day, tzinfo=tz)
        except ValueError:
            sr = None
        try:
            ss = astral_sunset(obs, date=day, tzinfo=tz)
        except ValueError:
            ss = None
        return sr, ss

    def moon_times(self, observer: Observer, day: date, tz) -> Tuple[Optional[datetime], Optional[datetime]]:
        obs = self._astral_observer(observer)
        try:
            mr = astral_moonrise(obs, date=day, tzinfo=tz)
        except ValueError:
            mr = None
        try:
            ms = astral_moonset(obs, date=day, tzinfo=tz)
        except ValueError:
            ms = None
        return mr, ms

    # ------------- New moon / masa -------------
    def _find_amavasya_utc(self, dt_guess_utc: datetime) -> Optional[datetime]:
        def f(dt):
            ls, lm = self._longitudes_at(dt)
            return _wrap180(lm - ls)

        left = dt_guess_utc - timedelta(hours=36)
        right = dt_guess_utc + timedelta(hours=36)
        fl, fr = f(left), f(right)
        tries = 0
        while fl * fr > 0 and tries < 6:
            left -= timedelta(hours=24)
            right += timedelta(hours=24)
            fl, fr = f(left), f(right)
            tries += 1
        if fl * fr > 0:
            return None

        for _ in range(50):
            mid = left + (right - left) / 2
            fm = f(mid)
            if abs(fm) < 1e-4:
                return mid
            if fl * fm <= 0:
                right, fr = mid, fm
            else:
                left, fl = mid, fm
        return left + (right - left) / 2

    def masa_at(self, anchor: datetime) -> Masa:
        """Amanta month containing ``anchor``.

        Named by the sidereal sign of the Sun at the opening Amavasya (Pisces
        opens Chaitra); adhika when the Sun changes no sign before the closing
        Amavasya.
        """
        anchor_utc = anchor.astimezone(timezone.utc)
        lam_sun, lam_moon = self._longitudes_at(anchor_utc)
        elong = (lam_moon - lam_sun) % 360.0
        start = self._find_amavasya_utc(anchor_utc - timedelta(days=elong / MEAN_ELONGATION_PER_DAY))
        if start is not None and start > anchor_utc:
            start = self._find_amavasya_utc(start - timedelta(days=SYNODIC_MONTH_DAYS))
        end = None
        if start is not None:
            end = self._find_amavasya_utc(start + timedelta(days=SYNODIC_MONTH_DAYS))
        if start is None or end is None:
            # no bracketed conjunction; name the month from the Sun at the anchor
            sign = int(self._sun_sidereal(anchor_utc) // 30.0)
            idx = (sign + 1) % 12
            return Masa(idx, MASA_NAMES[idx], False)

        sign_start = int(self._sun_sidereal(start) // 30.0) % 12
        sign_end = int(self._sun_sidereal(end) // 30.0) % 12
        idx = (sign_start + 1) % 12
        return Masa(idx, MASA_NAMES[idx], sign_start == sign_end)

    # ------------- Transitions -------------
    def _bisect_change(self, category: str, lo: datetime, hi: datetime, lo_val: int) -> datetime:
        while hi - lo > _BISECT_PRECISION:
            mid = lo + (hi - lo) / 2
            if self._index_at(category, mid) == lo_val:
                lo = mid
            else:
                hi = mid
        return hi

    def transitions(self, start: datetime, end: datetime) -> Dict[str, Tuple[Transition, ...]]:
        """Ordered, non-overlapping segments per category between two instants."""
        moments: List[datetime] = []
        cur = start
        while cur < end:
            moments.append(cur)
            cur += _SAMPLE_STEP
        moments.append(end)

        suns, moons = self._longitudes(moments)
        samples = [panchanga_indices(s, m, lahiri_ayanamsha_deg(t))
                   for s, m, t in zip(suns, moons, moments)]

        out: Dict[str, Tuple[Transition, ...]] = {}
        for category, names in _CATEGORY_NAMES.items():
            segments: List[Transition] = []
            seg_start, seg_val = start, samples[0][category]
            for i in range(1, len(moments)):
                val = samples[i][category]
                if val == seg_val:
                    continue
                change = self._bisect_change(category, moments[i-1], moments[i], seg_val)
                segments.append(Transition(names[seg_val], seg_val, seg_start, change))
                seg_start, seg_val = change, val
            segments.append(Transition(names[seg_val], seg_val, seg_start, end))
            out[category] = tuple(segments)
        return out

    # ------------- Grahas -------------
    def planetary_positions(self, moment: datetime) -> Dict[str, PlanetPosition]:
        eph, ts = self._load_ephem()
        earth = eph["earth"]
        t_now = ts.from_datetime(moment)
        t_next = ts.from_datetime(moment + timedelta(days=1))
        ayan = lahiri_ayanamsha_deg(moment)

        out: Dict[str, PlanetPosition] = {}
        for key, target in _PLANET_TARGETS.items():
            body = eph[target]
            lon_now = earth.at(t_now).observe(body).apparent().ecliptic_latlon(epoch="date")[1].degrees
            lon_next = earth.at(t_next).observe(body).apparent().ecliptic_latlon(epoch="date")[1].degrees
            motion = _wrap180(float(lon_next) - float(lon_now))
            out[key] = _position(key, (float(lon_now) - ayan) % 360.0, motion < 0)

        rahu = (mean_lunar_node_deg(moment) - ayan) % 360.0
        out["rahu"] = _position("rahu", rahu, True)
        out["ketu"] = _position("ketu", (rahu + 180.0) % 360.0, True)
        return out

    # ------------- Aparahna -------------
    def aparahna_tithis(self, observer: Observer, day: date, tz) -> set:
        """Tithis current during the aparahna (fourth fifth of daylight)."""
        sunrise, sunset = self.sun_times(observer, day, tz)
        if sunrise is None or sunset is None:
            return set()
        daylight = sunset - sunrise
        # no tithi is shorter than an aparahna, so the two ends see every one
        return {self._index_at("tithi", sunrise + daylight * 3 / 5),
                self._index_at("tithi", sunrise + daylight * 4 / 5)}

    def dashami_starts_aparahna(self, observer: Observer, day: date, tz) -> bool:
        """Dashami holds this afternoon but did not hold the previous one."""
        if DASHAMI not in self.aparahna_tithis(observer, day, tz):
            return False
        return DASHAMI not in self.aparahna_tithis(observer, day - timedelta(days=1), tz)

    # ---------------- Snapshot -----------------
    def get_panchangam(self, day: date, observer: Observer) -> Panchangam:
        tz = timezone_for(observer)
        sunrise, sunset = self.sun_times(observer, day, tz)
        next_sunrise, _ = self.sun_times(observer, day + timedelta(days=1), tz)
        moonrise, moonset = self.moon_times(observer, day, tz)

        if sunrise is None:
            logger.warning("No sunrise on %s at (%.4f, %.4f); anchoring to local noon",
                           day.isoformat(), observer.latitude, observer.longitude)
        anchor = sunrise or tz.localize(datetime.combine(day, time(12, 0)))
        window_end = next_sunrise or anchor + timedelta(days=1)

        lam_sun, lam_moon = self._longitudes_at(anchor)
        idx = panchanga_indices(lam_sun, lam_moon, lahiri_ayanamsha_deg(anchor))
        tithi = idx["tithi"]
        masa = self.masa_at(anchor)
        segments = self.transitions(anchor, window_end)

        observances = set()
        if (masa.index == ASHVINA and not masa.is_adhika
                and self.dashami_starts_aparahna(observer, day, tz)):
            observances.add(VIJAYADASHAMI_FLAG)

        return Panchangam(
            date=day,
            tithi=tithi,
            masa=masa,
            paksha=paksha_for_tithi(tithi),
            vara=(day.weekday() + 1) % 7,
            nakshatra=idx["nakshatra"],
            yoga=idx["yoga"],
            karana=idx["karana"],
            sunrise=sunrise,
            sunset=sunset,
            moonrise=moonrise,
            moonset=moonset,
            tithi_transitions=segments["tithi"],
            nakshatra_transitions=segments["nakshatra"],
            yoga_transitions=segments["yoga"],
            karana_transitions=segments["karana"],
            planetary_positions=self.planetary_positions(anchor),
            observances=frozenset(observances),
        )
