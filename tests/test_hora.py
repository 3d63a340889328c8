from datetime import date, datetime, timedelta

import pytz

from uposatha.hora import CHALDEAN_ORDER, compute_horas, get_current_hora

from conftest import GAYA

SUNDAY = date(2026, 1, 4)


def test_twenty_four_horas_with_twelve_by_day(cache):
    horas = compute_horas(SUNDAY, GAYA, cache)
    assert len(horas) == 24
    assert [h.hora_number for h in horas] == list(range(1, 25))
    assert sum(h.is_day_hora for h in horas) == 12
    assert all(h.is_day_hora for h in horas[:12])


def test_ruler_walk_is_contiguous_across_sunset(cache):
    horas = compute_horas(SUNDAY, GAYA, cache)
    # Sunday opens with the Sun
    assert horas[0].planet == "Sun"
    assert horas[0].planet_symbol == "☉"
    for prev, cur in zip(horas, horas[1:]):
        assert cur.ruler_index == (prev.ruler_index + 1) % 7
        assert cur.planet == CHALDEAN_ORDER[cur.ruler_index]


def test_day_lords_by_weekday(cache):
    expected = ["Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn"]
    for i, planet in enumerate(expected):
        assert compute_horas(SUNDAY + timedelta(days=i), GAYA, cache)[0].planet == planet


def test_segments_divide_day_and_night(cache, provider):
    horas = compute_horas(SUNDAY, GAYA, cache)
    sunrise = pytz.utc.localize(datetime(2026, 1, 4, 6))
    assert horas[0].start_time == sunrise
    assert horas[11].end_time == sunrise + timedelta(hours=12)
    assert horas[12].start_time == horas[11].end_time
    assert horas[23].end_time == sunrise + timedelta(days=1)
    for h in horas:
        assert h.end_time - h.start_time == timedelta(hours=1)


def test_long_day_gives_longer_day_horas(cache, provider):
    # summer-like day: sunset at 19:00, so 13 h of daylight and 11 h of night
    provider.sunsets[SUNDAY] = 13
    horas = compute_horas(SUNDAY, GAYA, cache)
    sunset = pytz.utc.localize(datetime(2026, 1, 4, 19))
    assert horas[11].end_time == sunset
    assert horas[12].start_time == sunset
    for h in horas[:12]:
        assert h.end_time - h.start_time == timedelta(minutes=65)
    for h in horas[12:]:
        assert h.end_time - h.start_time == timedelta(minutes=55)
    assert horas[23].end_time == pytz.utc.localize(datetime(2026, 1, 5, 6))


def test_current_hora(cache):
    now = pytz.utc.localize(datetime(2026, 1, 4, 7, 30))
    horas = compute_horas(SUNDAY, GAYA, cache, now=now)
    assert [h.hora_number for h in horas if h.is_current] == [2]
    assert get_current_hora(SUNDAY, GAYA, cache, now=now).hora_number == 2
    later = pytz.utc.localize(datetime(2026, 1, 6, 7, 30))
    assert get_current_hora(SUNDAY, GAYA, cache, now=later) is None


def test_no_horas_without_sunrise(cache, provider):
    provider.polar.add(SUNDAY + timedelta(days=1))
    assert compute_horas(SUNDAY, GAYA, cache) == []
