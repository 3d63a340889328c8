from datetime import date

import pytest

from uposatha.models import Masa, Observer, Panchangam
from uposatha.panchangam import PanchangamCache, cache_key

from conftest import FakeEphemeris, GAYA


def test_second_lookup_hits_cache(cache, provider):
    d = date(2026, 3, 1)
    first = cache.get(d, GAYA)
    second = cache.get(d, GAYA)
    assert first is second
    assert provider.calls == [d]


def test_key_rounds_coordinates_to_four_decimals(cache, provider):
    d = date(2026, 3, 1)
    cache.get(d, Observer(24.79141, 85.00019))
    cache.get(d, Observer(24.79139, 85.00021))
    assert len(provider.calls) == 1
    assert cache_key(d, Observer(24.79141, 85.00019)) == ("2026-03-01", 24.7914, 85.0002)


def test_eviction_drops_oldest_inserted_even_if_recently_read():
    provider = FakeEphemeris()
    cache = PanchangamCache(provider, max_entries=3)
    days = [date(2026, 1, i) for i in range(1, 5)]
    for d in days[:3]:
        cache.get(d, GAYA)
    # reading the oldest entry does not protect it
    cache.get(days[0], GAYA)
    cache.get(days[3], GAYA)

    assert len(cache) == 3
    assert cache_key(days[0], GAYA) not in cache
    assert cache_key(days[1], GAYA) in cache
    assert cache_key(days[3], GAYA) in cache


def test_clear_forces_recompute(cache, provider):
    d = date(2026, 3, 1)
    cache.get(d, GAYA)
    cache.clear()
    assert len(cache) == 0
    cache.get(d, GAYA)
    assert provider.calls == [d, d]


def test_provider_errors_propagate():
    class Broken:
        def get_panchangam(self, day, observer):
            raise RuntimeError("bad observer")

    with pytest.raises(RuntimeError):
        PanchangamCache(Broken()).get(date(2026, 1, 1), GAYA)


def test_snapshot_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        Masa(12, "?")
    with pytest.raises(ValueError):
        Panchangam(date=date(2026, 1, 1), tithi=30, masa=Masa(0, "Chaitra"), paksha="Krishna", vara=0)
    with pytest.raises(ValueError):
        Panchangam(date=date(2026, 1, 1), tithi=3, masa=Masa(0, "Chaitra"), paksha="Shukla", vara=7)
