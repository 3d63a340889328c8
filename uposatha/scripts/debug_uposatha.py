# scripts/debug_uposatha.py
import calendar
from datetime import date, timedelta
from typing import Optional

from uposatha.location import timezone_for
from uposatha.models import Observer
from uposatha.panchangam import PanchangamCache, resolve_cache
from uposatha.uposatha import get_uposatha_status


def debug_uposatha_for_city(lat: float, lon: float, year: int, month: int,
                            cache: Optional[PanchangamCache] = None):
    observer = Observer(lat, lon)
    cache = resolve_cache(cache)
    tz = timezone_for(observer)
    print(f"\n=== Uposatha debug for {year}-{month:02d} at lat={lat}, lon={lon}, tz={tz.zone} ===")

    def fmt(dt): return dt.astimezone(tz).strftime("%H:%M") if dt else "--:--"

    d = date(year, month, 1)
    end = d + timedelta(days=calendar.monthrange(year, month)[1])
    while d < end:
        status = get_uposatha_status(d, observer, cache)
        p = status.panchangam
        masa = f"{'Adhika ' if p.masa.is_adhika else ''}{p.masa.name}"
        parts = [f"{d}  SR:{fmt(p.sunrise)}  T:{p.tithi:02d} {p.tithi_name:<11} {masa:<18}"]
        # tithi changes during the day
        for t in p.tithi_transitions[1:]:
            parts.append(f"->{t.index:02d}@{fmt(t.start_time)}")
        if status.is_uposatha:
            parts.append("UPOSATHA")
        elif status.is_kshaya:
            parts.append("optional (kshaya)")
        elif status.is_vridhi:
            parts.append("optional (vridhi)")
        print("  ".join(parts))
        d += timedelta(days=1)


if __name__ == "__main__":
    # Bodh Gaya
    debug_uposatha_for_city(24.6961, 84.9869, 2026, 5)
    # Colombo sanity check (uncomment if you want)
    # debug_uposatha_for_city(6.9271, 79.8612, 2026, 5)
