import argparse
import logging
from datetime import date
from pathlib import Path

import requests

from . import config
from .events import events_for_year
from .ics import build_ics
from .location import autolocate, timezone_for
from .lunar import LunarCalendar
from .models import MAHAYANA, THERAVADA, VAJRAYANA, Observer
from .panchangam import default_cache
from .scanner import upcoming_festivals

logger = logging.getLogger(__name__)


def ensure_site_dir():
    Path("site").mkdir(parents=True, exist_ok=True)


def generate_range(observer, year_from, year_to, **kw):
    all_events = []
    for y in range(year_from, year_to + 1):
        all_events.extend(events_for_year(observer, y, **kw))
    return all_events


def print_upcoming(observer, start, days, cache, lunar):
    for m in upcoming_festivals(start, observer, days, cache, lunar):
        print(f"{m.date.isoformat()}  (+{m.days_remaining:3d}d)  "
              f"[{m.festival.tradition}] {m.festival.name}")


def build_parser():
    ap = argparse.ArgumentParser(
        description="Uposatha calendar (.ics): full/new moon and 8th/14th-day observances, "
                    "Theravada, Vajrayana and Mahayana festivals, location-aware."
    )
    ap.add_argument("--lat", type=float, help="Latitude (decimal)")
    ap.add_argument("--lon", type=float, help="Longitude (decimal)")
    ap.add_argument("--alt", type=float, default=0.0, help="Altitude in metres")
    ap.add_argument("--auto-location", action="store_true", help="Detect lat/lon from IP")
    ap.add_argument("--year", type=int, help="Start year, e.g., 2026")
    ap.add_argument("--year-to", type=int, help="End year (inclusive). If omitted, equals --year.")
    ap.add_argument("--tradition", choices=[THERAVADA.lower(), VAJRAYANA.lower(), MAHAYANA.lower()],
                    help="Only festivals of one tradition (default: all)")
    ap.add_argument("--no-uposatha", action="store_true")
    ap.add_argument("--no-festivals", action="store_true")
    ap.add_argument("--include-optional", action="store_true",
                    help="Also add optional (kshaya/vridhi) observance days")
    ap.add_argument("--upcoming", type=int, metavar="DAYS",
                    help="Print festivals in the next DAYS days instead of writing a calendar")
    ap.add_argument("--start", type=date.fromisoformat, default=None,
                    help="Start date for --upcoming (YYYY-MM-DD, default today)")
    ap.add_argument("--outfile", type=str, default=None, help="Output .ics file path")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    if args.auto_location:
        if args.lat is not None or args.lon is not None:
            print("Note: --auto-location overrides --lat/--lon")
        try:
            observer = autolocate(args.alt)
        except (requests.RequestException, KeyError, ValueError) as e:
            raise SystemExit(f"Auto-location failed ({e}). Pass --lat and --lon.")
    elif args.lat is None or args.lon is None:
        raise SystemExit("Provide --lat and --lon, or use --auto-location.")
    else:
        observer = Observer(args.lat, args.lon, args.alt)

    cache = default_cache()
    lunar = LunarCalendar.load()

    if args.upcoming is not None:
        print_upcoming(observer, args.start or date.today(), args.upcoming, cache, lunar)
        return

    if args.year is None:
        raise SystemExit("Provide --year (or --upcoming DAYS).")
    year_to = args.year_to or args.year

    events = generate_range(
        observer, args.year, year_to,
        cache=cache,
        lunar=lunar,
        tradition=args.tradition,
        include_uposatha=not args.no_uposatha,
        include_optional=args.include_optional,
        include_festivals=not args.no_festivals,
    )

    ics = build_ics(events, tzid=timezone_for(observer).zone)
    if args.outfile:
        out = Path(args.outfile)
    else:
        ensure_site_dir()
        out = Path(
            f"site/{args.year}-{year_to}-uposatha-calendar.ics" if year_to != args.year
            else f"site/{args.year}-uposatha-calendar.ics"
        )
    out.write_bytes(ics)
    print(f"Wrote {out}  (lat={observer.latitude}, lon={observer.longitude}, "
          f"years={args.year}..{year_to}, events={len(events)})")


if __name__ == "__main__":
    main()
