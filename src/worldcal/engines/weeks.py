"""
worldcal.engines.weeks
----------------------
Named weeks inside a month (tendays, novenas, ...), independent of the
weekday cycle.
"""

from __future__ import annotations

from typing import Optional

from ..core.date import CalendarDate, ordinal
from ..core.types import NamedWeek
from .calendar import CalendarEngine


def week_of_month(engine: CalendarEngine, date: CalendarDate) -> Optional[int]:
    """
    1-based week number of `date` inside its month, or None when the calendar
    has no month-based weeks, the date is intercalary, or the date falls in a
    remainder that has no week ('none' handling).
    """
    w = engine.definition.weeks
    if w is None or w.type == "year-based" or date.intercalary is not None:
        return None

    per_week = w.days_per_week or engine.week_length
    raw = (date.day - 1) // per_week + 1
    month_days = engine.month_length(date.month, date.year)
    if month_days % per_week == 0:
        return raw

    expected = w.per_month if w.per_month is not None else month_days // per_week
    if w.remainder_handling == "extend-last" and raw == expected + 1:
        return expected
    if w.remainder_handling == "none" and raw > expected:
        return None
    return raw


def week_info(engine: CalendarEngine, date: CalendarDate) -> Optional[NamedWeek]:
    n = week_of_month(engine, date)
    w = engine.definition.weeks
    if n is None or w is None:
        return None
    if n <= len(w.names):
        return w.names[n - 1]
    if w.naming_pattern == "ordinal":
        return NamedWeek(name=f"{ordinal(n)} Week", abbreviation=str(n))
    if w.naming_pattern == "numeric":
        return NamedWeek(name=f"Week {n}", abbreviation=str(n))
    return None
