from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional, Tuple

from .errors import InvalidDateError
from .types import TimeConfig, TimeOfDay


def split_seconds(seconds: int, time: TimeConfig) -> Tuple[int, TimeOfDay]:
    """Split elapsed seconds into (whole days, time of day). Floors toward -inf."""
    days, rem = divmod(int(seconds), time.seconds_per_day)
    hour, rem = divmod(rem, time.seconds_per_hour)
    minute, second = divmod(rem, time.seconds_in_minute)
    return days, TimeOfDay(hour, minute, second)


def time_to_seconds(t: TimeOfDay, time: TimeConfig) -> int:
    return t.hour * time.seconds_per_hour + t.minute * time.seconds_in_minute + t.second


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def decimal_hours_to_time(hours: float, minutes_in_hour: Optional[int] = None) -> Tuple[int, int]:
    """
    6.5 -> (6, 30). The minute is rounded to the nearest whole minute; a minute
    that rounds up to a full hour rolls into the next hour, so 6.9999 -> (7, 0).
    """
    mih = minutes_in_hour or 60
    h = math.floor(hours)
    m = _round_half_up((hours - h) * mih)
    if m >= mih:
        return h + 1, 0
    return h, m


def hours_to_time_string(hours: float, minutes_in_hour: Optional[int] = None) -> str:
    h, m = decimal_hours_to_time(hours, minutes_in_hour)
    return f"{h:02d}:{m:02d}"


def time_string_to_hours(s: str, minutes_in_hour: Optional[int] = None) -> float:
    """'06:30' -> 6.5 (with 60-minute hours)."""
    parts = s.split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {s!r}. Expected HH:MM")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise ValueError(f"Invalid time values: {s!r}") from e
    return hours + minutes / (minutes_in_hour or 60)


def utc_components(timestamp: float) -> Tuple[int, int, int, int, int, int]:
    """Unix timestamp -> (year, month, day, hour, minute, second) in UTC."""
    try:
        dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidDateError(f"Invalid anchor timestamp: {timestamp!r}") from e
    return dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second
