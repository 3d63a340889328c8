# tests/conftest.py

from datetime import date, datetime, timedelta

import pytest
import pytz

from uposatha.constants import (
    KARANA_NAMES, MASA_NAMES, NAKSHATRA_NAMES, RASHI_NAMES, TITHI_NAMES, YOGA_NAMES,
    GRAHA_KEYS, paksha_for_tithi,
)
from uposatha.models import Masa, Observer, Panchangam, PlanetPosition, Transition
from uposatha.panchangam import PanchangamCache

EPOCH = date(2026, 1, 1)
GAYA = Observer(24.7914, 85.0002, 111.0)


class FakeEphemeris:
    """
    Deterministic provider: tithi advances by one per day from Pratipada on
    2026-01-01, each 30-day block is one masa starting at Chaitra, sunrise
    06:00 UTC and sunset 18:00 UTC. Individual days, and their sunset hour
    (hours after sunrise, in ``sunsets``), can be overridden.
    """

    def __init__(self):
        self.overrides = {}
        self.polar = set()
        self.sunsets = {}
        self.calls = []

    def set_day(self, day, tithi, masa_index=None, adhika=False, observances=()):
        self.overrides[day] = {
            "tithi": tithi,
            "masa": masa_index,
            "adhika": adhika,
            "observances": frozenset(observances),
        }

    def tithi_for(self, day):
        override = self.overrides.get(day)
        if override is not None:
            return override["tithi"]
        return (day - EPOCH).days % 30

    def get_panchangam(self, day, observer):
        self.calls.append(day)
        override = self.overrides.get(day, {})
        offset = (day - EPOCH).days
        tithi = self.tithi_for(day)
        masa_index = override.get("masa")
        if masa_index is None:
            masa_index = (offset // 30) % 12

        if day in self.polar:
            sunrise = sunset = moonrise = moonset = None
            start = pytz.utc.localize(datetime(day.year, day.month, day.day, 12))
        else:
            start = pytz.utc.localize(datetime(day.year, day.month, day.day, 6))
            sunrise = start
            sunset = start + timedelta(hours=self.sunsets.get(day, 12))
            moonrise = start + timedelta(hours=13)
            moonset = start + timedelta(hours=1, minutes=30)
        end = start + timedelta(days=1)
        change = start + timedelta(hours=10)

        def two(names, first):
            second = (first + 1) % len(names)
            return (Transition(names[first], first, start, change),
                    Transition(names[second], second, change, end))

        positions = {
            key: PlanetPosition(longitude=30.0 * i + 12.5, rashi=i, rashi_name=RASHI_NAMES[i],
                                degree=12.5, is_retrograde=key in ("rahu", "ketu"))
            for i, key in enumerate(GRAHA_KEYS)
        }

        return Panchangam(
            date=day,
            tithi=tithi,
            masa=Masa(masa_index, MASA_NAMES[masa_index], override.get("adhika", False)),
            paksha=paksha_for_tithi(tithi),
            vara=(day.weekday() + 1) % 7,
            nakshatra=offset % 27,
            yoga=offset % 27,
            karana=(2 * tithi) % 60,
            sunrise=sunrise,
            sunset=sunset,
            moonrise=moonrise,
            moonset=moonset,
            tithi_transitions=two(TITHI_NAMES, tithi),
            nakshatra_transitions=two(NAKSHATRA_NAMES, offset % 27),
            yoga_transitions=two(YOGA_NAMES, offset % 27),
            karana_transitions=two(KARANA_NAMES, (2 * tithi) % 60),
            planetary_positions=positions,
            observances=override.get("observances", frozenset()),
        )


@pytest.fixture
def provider():
    fake = FakeEphemeris()
    # Vaishakha Purnima
    fake.set_day(date(2026, 5, 1), 14, masa_index=1)
    # Kartika Amavasya
    fake.set_day(date(2026, 11, 8), 29, masa_index=7)
    return fake


@pytest.fixture
def cache(provider):
    return PanchangamCache(provider)


@pytest.fixture
def observer():
    return GAYA
