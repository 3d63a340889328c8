"""Timeline view-model built from a panchangam's transition lists."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from .constants import DAY_NAMES
from .models import Panchangam, TimelineData, TimelineMarkers, TimelineRow, TimelineSegment, Transition

DAY_WINDOW = timedelta(hours=24)

# (row type, label, icon, panchangam attribute)
ROWS = [
    ("tithi", "Tithi", "🌙", "tithi_transitions"),
    ("nakshatra", "Nakshatra", "⭐", "nakshatra_transitions"),
    ("yoga", "Yoga", "☯", "yoga_transitions"),
    ("karana", "Karana", "◐", "karana_transitions"),
]


def _segments(transitions: Sequence[Transition]) -> List[TimelineSegment]:
    # the first transition is the one prevailing at sunrise
    return [TimelineSegment(t.name, t.start_time, t.end_time, i == 0)
            for i, t in enumerate(transitions)]


def build_timeline_data(panchangam: Panchangam) -> TimelineData:
    rows = [TimelineRow(kind, label, icon, _segments(getattr(panchangam, attr)))
            for kind, label, icon, attr in ROWS]

    # weekday covers daylight only
    vara_segments = []
    if panchangam.sunrise is not None and panchangam.sunset is not None:
        vara_segments.append(TimelineSegment(DAY_NAMES[panchangam.vara],
                                             panchangam.sunrise, panchangam.sunset, True))
    rows.append(TimelineRow("vara", "Weekday", "📆", vara_segments))

    return TimelineData(
        rows=rows,
        sunrise=panchangam.sunrise,
        sunset=panchangam.sunset,
        moonrise=panchangam.moonrise,
        moonset=panchangam.moonset,
    )


def get_time_percent(time: datetime, day_start: datetime) -> float:
    """Position of ``time`` in the 24h window opening at ``day_start``, clamped to 0-100."""
    elapsed = (time - day_start) / DAY_WINDOW
    return max(0.0, min(100.0, elapsed * 100.0))


def build_sky_markers(panchangam: Panchangam, day_start: datetime,
                      now: Optional[datetime] = None) -> TimelineMarkers:
    """Sun/moon rise and set positions as window percentages (``None`` when absent)."""
    instants = {
        "sunrise": panchangam.sunrise,
        "sunset": panchangam.sunset,
        "moonrise": panchangam.moonrise,
        "moonset": panchangam.moonset,
    }
    if now is not None:
        instants["now"] = now
    return {key: (get_time_percent(value, day_start) if value is not None else None)
            for key, value in instants.items()}
