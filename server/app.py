# server/app.py
import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse, StreamingResponse

from uposatha import config
from uposatha.events import events_for_year
from uposatha.festivals import (
    check_all_festivals, check_festival_by_tradition, get_all_festival_definitions,
)
from uposatha.graha import get_graha_cards
from uposatha.hora import compute_horas
from uposatha.ics import build_ics
from uposatha.location import timezone_for
from uposatha.lunar import LunarCalendar
from uposatha.models import Observer
from uposatha.panchangam import default_cache
from uposatha.scanner import get_upcoming_festivals
from uposatha.timeline import build_sky_markers, build_timeline_data
from uposatha.timeutils import format_sanskrit_date, format_time, get_timezones, guess_timezone
from uposatha.uposatha import get_month_uposatha_days, get_uposatha_status

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # lunardate is optional; None disables the Chinese lunar festivals
    app.state.lunar = LunarCalendar.load()
    logger.info("Lunar calendar %s", "available" if app.state.lunar else "unavailable")
    yield


app = FastAPI(title="Uposatha Calendar API", lifespan=lifespan)


# --------- dependencies ---------
def get_cache():
    return default_cache()


def get_lunar(request: Request):
    return getattr(request.app.state, "lunar", None)


def get_observer(
    lat: float = Query(config.DEFAULT_LATITUDE, ge=-90, le=90, description="Latitude"),
    lon: float = Query(config.DEFAULT_LONGITUDE, ge=-180, le=180, description="Longitude"),
    alt: float = Query(config.DEFAULT_ALTITUDE, description="Altitude (m)"),
) -> Observer:
    return Observer(lat, lon, alt)


def _day(value: Optional[date]) -> date:
    return value or date.today()


# --------------------- routes ---------------------
@app.get("/", response_class=PlainTextResponse)
def root():
    return (f"Uposatha Calendar API is running (default observer: {config.DEFAULT_LOCATION_NAME}). "
            "Try /docs for the interactive UI.")


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/uposatha")
def uposatha_status(
    day: Optional[date] = Query(None, description="YYYY-MM-DD, default today"),
    observer: Observer = Depends(get_observer),
    cache=Depends(get_cache),
):
    d = _day(day)
    status = get_uposatha_status(d, observer, cache)
    p = status.panchangam
    tz_name = guess_timezone(observer)
    return {
        "date": d,
        "date_label": format_sanskrit_date(d),
        "is_uposatha": status.is_uposatha,
        "is_optional": status.is_optional,
        "is_full_moon": status.is_full_moon,
        "is_new_moon": status.is_new_moon,
        "is_ashtami": status.is_ashtami,
        "is_chaturdashi": status.is_chaturdashi,
        "is_kshaya": status.is_kshaya,
        "is_vridhi": status.is_vridhi,
        "tithi_number": status.tithi_number,
        "tithi_name": status.tithi_name,
        "paksha": status.paksha,
        "masa": p.masa,
        "label": status.label,
        "pali_label": status.pali_label,
        "sunrise": status.sunrise,
        "sunset": status.sunset,
        "timezone": tz_name,
        "sunrise_local": format_time(status.sunrise, tz_name),
        "sunset_local": format_time(status.sunset, tz_name),
    }


@app.get("/uposatha/month")
def uposatha_month(
    year: int = Query(..., description="e.g. 2026"),
    month: int = Query(..., ge=1, le=12),
    include_optional: bool = False,
    observer: Observer = Depends(get_observer),
    cache=Depends(get_cache),
):
    days = get_month_uposatha_days(year, month, observer, cache, include_optional)
    return [
        {"date": d, "label": s.label, "is_optional": s.is_optional, "tithi_number": s.tithi_number}
        for d, s in days
    ]


@app.get("/festivals")
def festivals(
    day: Optional[date] = Query(None, description="YYYY-MM-DD, default today"),
    tradition: Optional[str] = Query(None, description="Theravada, Vajrayana or Mahayana"),
    observer: Observer = Depends(get_observer),
    cache=Depends(get_cache),
    lunar=Depends(get_lunar),
):
    d = _day(day)
    if tradition:
        try:
            found = check_festival_by_tradition(d, observer, tradition, cache, lunar=lunar)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return [found] if found is not None else []
    return check_all_festivals(d, observer, cache, lunar=lunar)


@app.get("/festivals/upcoming")
async def festivals_upcoming(
    start: Optional[date] = Query(None, description="YYYY-MM-DD, default today"),
    days: int = Query(config.SCAN_DAYS, ge=1, le=3 * 366),
    observer: Observer = Depends(get_observer),
    cache=Depends(get_cache),
    lunar=Depends(get_lunar),
):
    return await get_upcoming_festivals(_day(start), observer, days, cache, lunar)


@app.get("/festivals/definitions")
def festival_definitions():
    return get_all_festival_definitions()


@app.get("/timezones")
def timezones():
    return get_timezones()


@app.get("/horas")
def horas(
    day: Optional[date] = Query(None, description="YYYY-MM-DD, default today"),
    observer: Observer = Depends(get_observer),
    cache=Depends(get_cache),
):
    return compute_horas(_day(day), observer, cache)


@app.get("/timeline")
def timeline(
    day: Optional[date] = Query(None, description="YYYY-MM-DD, default today"),
    observer: Observer = Depends(get_observer),
    cache=Depends(get_cache),
):
    d = _day(day)
    p = cache.get(d, observer)
    day_start = timezone_for(observer).localize(datetime.combine(d, datetime.min.time()))
    return {
        "timeline": build_timeline_data(p),
        "markers": build_sky_markers(p, day_start),
    }


@app.get("/grahas")
def grahas(
    day: Optional[date] = Query(None, description="YYYY-MM-DD, default today"),
    observer: Observer = Depends(get_observer),
    cache=Depends(get_cache),
):
    return get_graha_cards(cache.get(_day(day), observer))


@app.get("/ics")
def ics(
    year: int = Query(..., description="Start year, e.g. 2026"),
    year_to: Optional[int] = Query(None, description="End year (inclusive). If omitted, equals 'year'."),
    tradition: Optional[str] = Query(None, pattern="^(?i:theravada|vajrayana|mahayana)$"),
    no_uposatha: bool = False,
    no_festivals: bool = False,
    include_optional: bool = False,
    observer: Observer = Depends(get_observer),
    cache=Depends(get_cache),
    lunar=Depends(get_lunar),
):
    yf = year
    yt = year_to or year
    if yt < yf:
        raise HTTPException(status_code=400, detail="year_to must not precede year")

    all_events = []
    for y in range(yf, yt + 1):
        all_events.extend(
            events_for_year(
                observer, y,
                cache=cache,
                lunar=lunar,
                tradition=tradition,
                include_uposatha=not no_uposatha,
                include_optional=include_optional,
                include_festivals=not no_festivals,
            )
        )

    name = f"uposatha-calendar-{yf}.ics" if yt == yf else f"uposatha-calendar-{yf}-{yt}.ics"
    payload = build_ics(all_events, tzid=timezone_for(observer).zone)
    headers = {"Content-Disposition": f'attachment; filename="{name}"'}
    return StreamingResponse(iter([payload]), media_type="text/calendar", headers=headers)
