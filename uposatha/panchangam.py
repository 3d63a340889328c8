"""Memoizing access to the ephemeris provider.

Every consumer (resolver, festival detectors, hora, timeline) reads its
snapshots through a :class:`PanchangamCache`. Passing ``cache=None`` to any
of them falls back to the process-wide :func:`default_cache`.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date
from typing import Optional, Protocol, Tuple

from . import config
from .models import Observer, Panchangam

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, float, float]


class EphemerisProvider(Protocol):
    def get_panchangam(self, day: date, observer: Observer) -> Panchangam:
        ...


def cache_key(day: date, observer: Observer) -> CacheKey:
    return (day.isoformat(), round(observer.latitude, 4), round(observer.longitude, 4))


class PanchangamCache:
    """Bounded map of (day, lat, lon) -> Panchangam.

    Eviction drops the oldest *inserted* entry once the size exceeds
    ``max_entries``; reads do not refresh an entry's position.
    Not thread-safe.
    """

    def __init__(self, provider: EphemerisProvider, max_entries: int = config.CACHE_MAX_ENTRIES):
        self.provider = provider
        self.max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, Panchangam]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def get(self, day: date, observer: Observer) -> Panchangam:
        key = cache_key(day, observer)
        hit = self._entries.get(key)
        if hit is not None:
            return hit

        snapshot = self.provider.get_panchangam(day, observer)
        self._entries[key] = snapshot
        if len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted panchangam %s", evicted)
        return snapshot

    def clear(self) -> None:
        self._entries.clear()


_default: Optional[PanchangamCache] = None


def default_cache() -> PanchangamCache:
    """Process cache over the skyfield provider, built on first use."""
    global _default
    if _default is None:
        from .astronomy import SkyfieldEphemeris
        _default = PanchangamCache(SkyfieldEphemeris())
    return _default


def resolve_cache(cache: Optional[PanchangamCache]) -> PanchangamCache:
    return cache if cache is not None else default_cache()
