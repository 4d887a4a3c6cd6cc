"""
worldcal.engines.sunrise
------------------------
Sunrise and sunset as decimal hours, interpolated across seasons.

Each season contributes the times of its first day: explicit "HH:MM" values,
else reference values looked up by season name, else a quarter/three-quarter
split of the day. Between season starts the times move linearly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..core.date import CalendarDate
from ..core.time import hours_to_time_string, time_string_to_hours
from ..core.types import Season
from .calendar import CalendarEngine
from .seasons import season_index, season_progress

# Gregorian reference times by season name (mid-latitude, local clock)
GREGORIAN_DEFAULTS: Dict[str, Tuple[str, str]] = {
    "Winter": ("07:00", "16:45"),
    "Spring": ("06:30", "17:45"),
    "Summer": ("05:45", "20:15"),
    "Autumn": ("06:30", "19:30"),
    "Fall": ("06:30", "19:30"),
}


@dataclass(frozen=True)
class SunTimes:
    sunrise: float
    sunset: float

    @property
    def daylight_hours(self) -> float:
        return self.sunset - self.sunrise

    def as_strings(self, minutes_in_hour: int = 60) -> Tuple[str, str]:
        return (
            hours_to_time_string(self.sunrise, minutes_in_hour),
            hours_to_time_string(self.sunset, minutes_in_hour),
        )


def default_times(engine: CalendarEngine) -> SunTimes:
    h = engine.time.hours_in_day
    return SunTimes(sunrise=h / 4, sunset=h * 3 / 4)


def season_times(engine: CalendarEngine, season: Season) -> SunTimes:
    mih = engine.time.minutes_in_hour
    if season.sunrise and season.sunset:
        return SunTimes(time_string_to_hours(season.sunrise, mih), time_string_to_hours(season.sunset, mih))
    if season.name in GREGORIAN_DEFAULTS:
        rise, set_ = GREGORIAN_DEFAULTS[season.name]
        return SunTimes(time_string_to_hours(rise, mih), time_string_to_hours(set_, mih))
    return default_times(engine)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def sun_times(engine: CalendarEngine, date: CalendarDate) -> SunTimes:
    seasons = engine.definition.seasons
    if not seasons:
        return default_times(engine)
    i = season_index(engine, date)
    if i is None:
        return default_times(engine)

    cur = season_times(engine, seasons[i])
    nxt = season_times(engine, seasons[(i + 1) % len(seasons)])
    t = season_progress(engine, date, i)
    return SunTimes(_lerp(cur.sunrise, nxt.sunrise, t), _lerp(cur.sunset, nxt.sunset, t))
