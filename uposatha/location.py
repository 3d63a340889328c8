"""Location utilities shared across CLI, server and the ephemeris provider."""
from __future__ import annotations

import logging
from functools import lru_cache

import pytz
import requests
from timezonefinder import TimezoneFinder

from . import config
from .models import Observer

logger = logging.getLogger(__name__)

DEFAULT_OBSERVER = Observer(config.DEFAULT_LATITUDE, config.DEFAULT_LONGITUDE, config.DEFAULT_ALTITUDE)


@lru_cache(maxsize=1)
def _finder() -> TimezoneFinder:
    return TimezoneFinder()


@lru_cache(maxsize=256)
def _timezone_name(lat: float, lon: float) -> str:
    return _finder().timezone_at(lng=lon, lat=lat) or "UTC"


def timezone_for(observer: Observer):
    """IANA timezone (pytz) for the observer's coordinates; UTC over open ocean."""
    return pytz.timezone(_timezone_name(round(observer.latitude, 4), round(observer.longitude, 4)))


def autolocate(altitude: float = 0.0) -> Observer:
    """Observer at the caller's public IP address.

    ipinfo.io answers first; any request or decoding failure there is logged
    and ipapi.co is asked instead. A failure from ipapi.co propagates.
    """
    try:
        response = requests.get("https://ipinfo.io/json", timeout=4)
        if response.ok and response.json().get("loc"):
            lat_s, lon_s = response.json()["loc"].split(",")
            return Observer(float(lat_s), float(lon_s), altitude)
    except (requests.RequestException, ValueError) as exc:
        # try the fallback service below
        logger.info("ipinfo.io lookup failed: %s", exc)

    fallback = requests.get("https://ipapi.co/json", timeout=4)
    fallback.raise_for_status()
    data = fallback.json()
    return Observer(float(data["latitude"]), float(data["longitude"]), altitude)
