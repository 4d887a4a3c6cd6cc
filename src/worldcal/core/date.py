from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .types import CalendarDefinition, TimeOfDay

logger = logging.getLogger(__name__)


def ordinal(n: int) -> str:
    """1 -> '1st', 12 -> '12th', 23 -> '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


@dataclass(frozen=True)
class CalendarDate:
    """
    Immutable snapshot of a resolved date.

    For intercalary dates `month` is the 1-based index of the month an `after`
    period follows, or of the month a `before` period precedes, and `day` is
    the position inside the period. Equality looks at year/month/day/intercalary
    only; weekday and time of day do not take part.
    """
    year: int
    month: int
    day: int
    weekday: int = field(default=0, compare=False)
    time: TimeOfDay = field(default=TimeOfDay(), compare=False)
    intercalary: Optional[str] = None
    calendar: Optional[CalendarDefinition] = field(default=None, compare=False, repr=False)

    @property
    def is_intercalary(self) -> bool:
        return self.intercalary is not None

    def counts_for_weekdays(self) -> bool:
        if self.intercalary is None:
            return True
        if self.calendar is None:
            return True
        entry = self.calendar.find_intercalary(self.intercalary)
        if entry is None:
            logger.debug(
                "Intercalary '%s' not found in calendar '%s'; counting it for weekdays",
                self.intercalary, self.calendar.id,
            )
            return True
        return entry.counts_for_weekdays

    def with_time(self, hour: int = 0, minute: int = 0, second: int = 0) -> "CalendarDate":
        return replace(self, time=TimeOfDay(hour, minute, second))

    def sort_key(self) -> Tuple[int, int, int, int, int]:
        """
        Chronological key: year, month, placement around the month (0 before,
        1 the month itself, 2 after), rank among periods, day. A name the
        calendar does not define sorts as a day of the month itself.
        """
        if self.intercalary is None:
            return (self.year, self.month, 1, 0, self.day)
        place, rank = 1, 0
        if self.calendar is not None:
            for i, entry in enumerate(self.calendar.intercalary):
                if entry.name == self.intercalary:
                    place = 2 if entry.after is not None or entry.before is None else 0
                    rank = i
                    break
        return (self.year, self.month, place, rank, self.day)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "weekday": self.weekday,
            "time": {"hour": self.time.hour, "minute": self.time.minute, "second": self.time.second},
        }
        if self.intercalary is not None:
            out["intercalary"] = self.intercalary
        return out

    # ---------------------------------------------------------
    # Display helpers
    # ---------------------------------------------------------

    def month_name(self, short: bool = False) -> str:
        if self.calendar is None or not (1 <= self.month <= len(self.calendar.months)):
            return "Unknown"
        m = self.calendar.months[self.month - 1]
        if short and m.abbreviation:
            return m.abbreviation
        return m.name

    def weekday_name(self, short: bool = False) -> str:
        if self.calendar is None or not (0 <= self.weekday < len(self.calendar.weekdays)):
            return "Unknown"
        w = self.calendar.weekdays[self.weekday]
        if short and w.abbreviation:
            return w.abbreviation
        return w.name

    def year_string(self) -> str:
        if self.calendar is None:
            return str(self.year)
        return f"{self.calendar.year.prefix}{self.year}{self.calendar.year.suffix}"

    def to_time_string(self) -> str:
        t = self.time
        return f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}"

    def to_short_string(self) -> str:
        if self.intercalary is not None:
            return f"{self.intercalary} {self.year_string()}"
        return f"{self.day} {self.month_name(short=True)} {self.year_string()}"

    def to_long_string(self) -> str:
        if self.intercalary is not None:
            label = self.intercalary
            entry = self.calendar.find_intercalary(self.intercalary) if self.calendar else None
            if entry is not None and entry.days > 1:
                label = f"{label} (day {self.day})"
            return f"{label}, {self.year_string()} {self.to_time_string()}"
        return (
            f"{self.weekday_name()}, {ordinal(self.day)} {self.month_name()} "
            f"{self.year_string()} {self.to_time_string()}"
        )
