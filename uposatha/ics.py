from datetime import timedelta
from hashlib import md5
from typing import Dict, Iterable, Optional

from icalendar import Calendar, Event

PRODID = "-//Uposatha Calendar (Location-aware)//uposatha//EN"
CALNAME = "Uposatha & Buddhist Festivals"


def stable_uid(e: Dict) -> str:
    key = f"{e['summary']}|{e['date'].isoformat()}|ALLDAY"
    return f"{md5(key.encode()).hexdigest()}@uposatha"


def build_ics(events: Iterable[Dict], prodid: str = PRODID, calname: str = CALNAME,
              tzid: Optional[str] = None) -> bytes:
    cal = Calendar()
    cal.add("prodid", prodid)
    cal.add("version", "2.0")
    cal.add("X-WR-CALNAME", calname)
    if tzid:
        cal.add("X-WR-TIMEZONE", tzid)
    for e in events:
        ev = Event()
        ev.add("uid", stable_uid(e))
        ev.add("summary", e["summary"])
        ev.add("description", e.get("desc", ""))
        if e.get("kind"):
            ev.add("categories", [e["kind"]])
        dt = e["date"]
        ev.add("dtstart", dt)
        ev.add("dtend", dt + timedelta(days=1))
        cal.add_component(ev)
    return cal.to_ical()
