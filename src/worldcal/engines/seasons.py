"""
worldcal.engines.seasons
------------------------
Which season a date falls in, and how far through it.

A season with an explicit end month covers start..end inclusive (wrapping
over the new year when end < start). A season without one runs until the day
before the next season starts. Intercalary dates take the season of the last
regular day before them.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..core.date import CalendarDate
from ..core.types import Season
from .calendar import CalendarEngine

Pos = Tuple[int, int]


def _regular_position(engine: CalendarEngine, date: CalendarDate) -> Tuple[int, Pos]:
    """(year, (month, day)) of the date, or of the last regular day before an intercalary one."""
    n = len(engine.definition.months)
    if date.intercalary is None or not engine.is_placed(date.intercalary):
        month = min(max(date.month, 1), n)
        return date.year, (month, min(max(date.day, 1), engine.month_length(month, date.year)))
    entry = engine.definition.find_intercalary(date.intercalary)
    month = date.month if entry.after is not None else date.month - 1
    if month >= 1:
        return date.year, (month, engine.month_length(month, date.year))
    return date.year - 1, (n, engine.month_length(n, date.year - 1))


def _start(engine: CalendarEngine, season: Season, year: int) -> Pos:
    n = len(engine.definition.months)
    month = min(max(season.start_month, 1), n)
    day = min(max(season.start_day, 1), engine.month_length(month, year))
    return month, day


def _usable(engine: CalendarEngine) -> List[int]:
    n = len(engine.definition.months)
    return [i for i, s in enumerate(engine.definition.seasons) if 1 <= s.start_month <= n]


def _contains(engine: CalendarEngine, i: int, pos: Pos, year: int) -> bool:
    seasons = engine.definition.seasons
    s = seasons[i]
    start = _start(engine, s, year)

    if s.end_month is not None:
        em = min(max(s.end_month, 1), len(engine.definition.months))
        end = (em, s.end_day if s.end_day is not None else engine.month_length(em, year))
        if start <= end:
            return start <= pos <= end
        return pos >= start or pos <= end

    starts = sorted({_start(engine, seasons[j], year) for j in _usable(engine)})
    later = [p for p in starts if p > start]
    nxt = later[0] if later else starts[0]
    if nxt > start:
        return start <= pos < nxt
    if nxt == start:
        return True
    return pos >= start or pos < nxt


def season_index(engine: CalendarEngine, date: CalendarDate) -> Optional[int]:
    """Index into definition.seasons of the season holding `date`, or None."""
    year, pos = _regular_position(engine, date)
    for i in _usable(engine):
        if _contains(engine, i, pos, year):
            return i
    return None


def season_for(engine: CalendarEngine, date: CalendarDate) -> Optional[Season]:
    i = season_index(engine, date)
    return engine.definition.seasons[i] if i is not None else None


def season_progress(engine: CalendarEngine, date: CalendarDate, index: int) -> float:
    """
    Fraction of the way from the start of season `index` to the start of the
    next season in definition order: 0.0 on the first day.
    """
    seasons = engine.definition.seasons
    current = seasons[index]
    nxt = seasons[(index + 1) % len(seasons)]
    year = date.year

    def doy(pos: Pos) -> int:
        return engine.day_of_year(engine.make_date(year, pos[0], pos[1]))

    start = doy(_start(engine, current, year))
    end = doy(_start(engine, nxt, year))
    now = engine.day_of_year(date)
    year_len = engine.year_length(year)

    total = end - start if end > start else year_len - start + end
    into = now - start if now >= start else year_len - start + now
    return into / total if total > 0 else 0.0
