"""
worldcal.engines.leap
---------------------
Leap-year rules and intercalary placement.

Everything a year needs (month lengths, active intercalary periods, total
length) depends on the year only through `is_leap_year`, so the resolver
precomputes one layout for ordinary years and one for leap years. Counting days
across many years uses the period of the leap rule: whole cycles are handled in
closed form and only the remainder is looked up in a prefix table.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from functools import cached_property
from typing import Dict, List, Optional, Tuple

from ..core.types import CalendarDefinition, IntercalaryDay

logger = logging.getLogger(__name__)

GREGORIAN_CYCLE = 400


@dataclass(frozen=True)
class Segment:
    """
    One contiguous run of days inside a year.

    Regular months have `entry is None`. Intercalary runs carry their entry and
    the month their dates report: the month an `after` period follows, or the
    month a `before` period precedes. `slot` k is the gap between month k and
    month k+1 (0 opens the year); for regular months it equals `month`.
    """
    month: int
    length: int
    entry: Optional[IntercalaryDay] = None
    slot: int = 0

    @property
    def counts_for_weekdays(self) -> bool:
        return self.entry is None or self.entry.counts_for_weekdays


class LeapResolver:
    def __init__(self, defn: CalendarDefinition):
        self.defn = defn
        self.rule = defn.leap_year
        self.epoch = defn.year.epoch
        self._base_lengths: Tuple[int, ...] = tuple(m.days for m in defn.months)
        self._leap_month: Optional[int] = (
            defn.month_index(self.rule.month) if self.rule.month is not None else None
        )

        # slot k sits between month k and month k+1; slot 0 opens the year.
        afters: Dict[int, List[IntercalaryDay]] = {}
        befores: Dict[int, List[IntercalaryDay]] = {}
        self._month_by_name: Dict[str, int] = {}
        for entry in defn.intercalary:
            slot = self._resolve_slot(entry)
            if slot is None:
                continue
            if entry.after is not None:
                afters.setdefault(slot, []).append(entry)
                self._month_by_name.setdefault(entry.name, slot)
            else:
                befores.setdefault(slot, []).append(entry)
                self._month_by_name.setdefault(entry.name, slot + 1)
        self._slots: Dict[int, Tuple[IntercalaryDay, ...]] = {
            k: tuple(afters.get(k, [])) + tuple(befores.get(k, []))
            for k in sorted(set(afters) | set(befores))
        }

        self._layouts = {leap: self._build_layout(leap) for leap in (False, True)}

    def _resolve_slot(self, entry: IntercalaryDay) -> Optional[int]:
        if entry.after is not None:
            idx = self.defn.month_index(entry.after)
            if idx is not None:
                return idx
            ref = f"after='{entry.after}'"
        elif entry.before is not None:
            idx = self.defn.month_index(entry.before)
            if idx is not None:
                return idx - 1
            ref = f"before='{entry.before}'"
        else:
            ref = "no month reference"
        logger.warning(
            "Calendar '%s': intercalary '%s' has %s matching no month; ignoring it",
            self.defn.id, entry.name, ref,
        )
        return None

    # ---------------------------------------------------------
    # Leap rule
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        rule = self.rule
        if rule.rule == "gregorian":
            y = year - rule.offset
            return y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)
        if rule.rule == "custom":
            if not rule.interval or rule.interval <= 0:
                return False
            return (year - rule.offset) % rule.interval == 0
        return False

    @property
    def cycle_years(self) -> int:
        """Period (in years) after which year lengths repeat."""
        if self.rule.rule == "gregorian":
            return GREGORIAN_CYCLE
        if self.rule.rule == "custom" and self.rule.interval and self.rule.interval > 0:
            return self.rule.interval
        return 1

    # ---------------------------------------------------------
    # Per-year structure
    # ---------------------------------------------------------

    def _lengths_for(self, leap: bool) -> Tuple[int, ...]:
        lengths = list(self._base_lengths)
        if leap and self._leap_month is not None:
            i = self._leap_month - 1
            adjusted = lengths[i] + self.rule.extra_days
            if adjusted < 1:
                logger.debug(
                    "Calendar '%s': month '%s' clamped to 1 day (was %d)",
                    self.defn.id, self.rule.month, adjusted,
                )
                adjusted = 1
            lengths[i] = adjusted
        return tuple(lengths)

    def _build_layout(self, leap: bool) -> Tuple[Segment, ...]:
        lengths = self._lengths_for(leap)
        out: List[Segment] = []

        def add_slot(k: int) -> None:
            for entry in self._slots.get(k, ()):
                if entry.leap_year_only and not leap:
                    continue
                month = k if entry.after is not None else k + 1
                out.append(Segment(month=month, length=entry.days, entry=entry, slot=k))

        add_slot(0)
        for i, n in enumerate(lengths, start=1):
            out.append(Segment(month=i, length=n, slot=i))
            add_slot(i)
        return tuple(out)

    def layout(self, year: int) -> Tuple[Segment, ...]:
        """Chronological segments of `year`."""
        return self._layouts[self.is_leap_year(year)]

    def month_lengths(self, year: int) -> Tuple[int, ...]:
        return tuple(s.length for s in self.layout(year) if s.entry is None)

    def month_length(self, year: int, month: int) -> int:
        lengths = self.month_lengths(year)
        if 1 <= month <= len(lengths):
            return lengths[month - 1]
        return 0

    def is_active(self, entry: IntercalaryDay, year: int) -> bool:
        return not entry.leap_year_only or self.is_leap_year(year)

    def active_intercalary(self, year: int) -> List[IntercalaryDay]:
        return [s.entry for s in self.layout(year) if s.entry is not None]

    def month_of(self, name: str) -> Optional[int]:
        """Month reported by dates of the intercalary period `name`; None if it is not placed."""
        return self._month_by_name.get(name)

    def intercalary_days_after(self, year: int, month_index: int) -> List[IntercalaryDay]:
        if not (1 <= month_index <= len(self._base_lengths)):
            return []
        name = self.defn.months[month_index - 1].name
        return [e for e in self.active_intercalary(year) if e.after == name]

    def intercalary_days_before(self, year: int, month_index: int) -> List[IntercalaryDay]:
        if not (1 <= month_index <= len(self._base_lengths)):
            return []
        name = self.defn.months[month_index - 1].name
        return [e for e in self.active_intercalary(year) if e.before == name]

    def year_length(self, year: int) -> int:
        return sum(s.length for s in self.layout(year))

    def weekday_year_length(self, year: int) -> int:
        return sum(s.length for s in self.layout(year) if s.counts_for_weekdays)

    # ---------------------------------------------------------
    # Multi-year accumulation
    # ---------------------------------------------------------

    @cached_property
    def _prefix(self) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        """Prefix sums of (all days, weekday days) over one cycle starting at the epoch."""
        days, wdays = [0], [0]
        for i in range(self.cycle_years):
            y = self.epoch + i
            days.append(days[-1] + self.year_length(y))
            wdays.append(wdays[-1] + self.weekday_year_length(y))
        return tuple(days), tuple(wdays)

    def days_before_year(self, year: int) -> int:
        """Days from the first day of the epoch year to the first day of `year` (signed)."""
        prefix = self._prefix[0]
        q, r = divmod(year - self.epoch, self.cycle_years)
        return q * prefix[-1] + prefix[r]

    def weekday_days_before_year(self, year: int) -> int:
        prefix = self._prefix[1]
        q, r = divmod(year - self.epoch, self.cycle_years)
        return q * prefix[-1] + prefix[r]

    def year_from_day(self, day: int) -> Tuple[int, int]:
        """Elapsed day index (0 = first day of the epoch) -> (year, 0-based day of year)."""
        prefix = self._prefix[0]
        q, rem = divmod(day, prefix[-1])
        i = bisect_right(prefix, rem) - 1
        return self.epoch + q * self.cycle_years + i, rem - prefix[i]
