"""Optional Chinese lunar calendar conversion.

Backed by the ``lunardate`` distribution (install the ``lunar`` extra).
Without it, :meth:`LunarCalendar.load` returns ``None`` and Mahayana
matching falls back to its fixed Gregorian dates.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)


class LunarDay(NamedTuple):
    lunar_month: int
    lunar_date: int
    is_leap: bool = False


class LunarCalendar:
    def __init__(self, converter):
        self._converter = converter

    @classmethod
    def load(cls) -> Optional["LunarCalendar"]:
        try:
            from lunardate import LunarDate
        except ImportError:
            logger.info("lunardate not installed; Chinese lunar festivals disabled")
            return None
        return cls(LunarDate)

    def get_lunar(self, year: int, month: int, day: int) -> Optional[LunarDay]:
        try:
            ld = self._converter.fromSolarDate(year, month, day)
        except ValueError:
            # outside the converter's supported years
            return None
        return LunarDay(ld.month, ld.day, bool(ld.isLeapMonth))
