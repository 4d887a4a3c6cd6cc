"""
worldcal.engines.calendar
-------------------------
The conversion engine. Binds one validated CalendarDefinition to the leap
resolver and translates between the host's elapsed-seconds world clock and
structured CalendarDate values.

Reference frame:
Elapsed day 0 is the first day of the epoch year. World clock seconds are
elapsed days * seconds_per_day + time of day, shifted by the world-time
interpretation (or by an anchor timestamp when the host supplies one).
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from ..core.date import CalendarDate
from ..core.errors import CalendarValidationError, InvalidDateError
from ..core.time import split_seconds, time_to_seconds, utc_components
from ..core.types import CalendarDefinition, IntercalaryDay, TimeOfDay
from .leap import LeapResolver, Segment
from .validation import validate_definition

logger = logging.getLogger(__name__)


class CalendarEngine:
    """
    Translates calendar dates to world-clock seconds and back for one calendar.

    The definition is fixed for the engine's lifetime; switching calendars means
    building another engine.
    """
    def __init__(self, definition: CalendarDefinition):
        report = validate_definition(definition)
        if not report.is_valid:
            raise CalendarValidationError(definition.id, report.errors)
        for w in report.warnings:
            logger.warning("Calendar '%s': %s", definition.id, w)

        self.definition = definition
        self.id = definition.id
        self.time = definition.time
        self.resolver = LeapResolver(definition)
        self._world_offset = self._world_time_offset()

    # ---------------------------------------------------------
    # Resolver pass-throughs
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.resolver.is_leap_year(year)

    def month_lengths(self, year: int) -> Tuple[int, ...]:
        return self.resolver.month_lengths(year)

    def month_length(self, month: int, year: int) -> int:
        return self.resolver.month_length(year, month)

    def year_length(self, year: int) -> int:
        return self.resolver.year_length(year)

    def intercalary_days_after(self, year: int, month: int) -> List[IntercalaryDay]:
        return self.resolver.intercalary_days_after(year, month)

    def intercalary_days_before(self, year: int, month: int) -> List[IntercalaryDay]:
        return self.resolver.intercalary_days_before(year, month)

    @property
    def seconds_per_day(self) -> int:
        return self.time.seconds_per_day

    @property
    def week_length(self) -> int:
        return len(self.definition.weekdays)

    # ---------------------------------------------------------
    # Day index <-> date
    # ---------------------------------------------------------

    def is_placed(self, intercalary: Optional[str]) -> bool:
        """True for regular dates and for intercalary names this calendar places somewhere."""
        return intercalary is None or self.resolver.month_of(intercalary) is not None

    def _locate(self, year: int, month: int, day: int, intercalary: Optional[str]) -> Tuple[int, int]:
        """
        Days before a date inside its year: (all days, days that count for weekdays).

        A name the calendar does not place (renamed or removed since the date was
        stored) is read as an ordinary day counted from the start of `month`.
        """
        layout = self.resolver.layout(year)
        if not self.is_placed(intercalary):
            return self._locate_unplaced(layout, month, day, intercalary)

        offset = counted = 0
        for seg in layout:
            if intercalary is None:
                hit = seg.entry is None and seg.month == month
            else:
                hit = seg.entry is not None and seg.entry.name == intercalary
            if hit:
                if intercalary is not None and seg.month != month:
                    raise InvalidDateError(
                        f"Intercalary '{intercalary}' belongs to month {seg.month}, not month {month}"
                    )
                if not (1 <= day <= seg.length):
                    raise InvalidDateError(
                        f"Day {day} is outside 1..{seg.length} for "
                        f"{intercalary or self.definition.months[month - 1].name} in year {year}"
                    )
                inside = day - 1
                return offset + inside, counted + (inside if seg.counts_for_weekdays else 0)
            offset += seg.length
            if seg.counts_for_weekdays:
                counted += seg.length

        if intercalary is None:
            raise InvalidDateError(f"Month {month} is outside 1..{len(self.definition.months)}")
        raise InvalidDateError(f"Intercalary '{intercalary}' does not occur in year {year}")

    def _locate_unplaced(self, layout: Tuple[Segment, ...], month: int, day: int, intercalary: str) -> Tuple[int, int]:
        logger.debug(
            "Calendar '%s': intercalary '%s' is not defined; reading it as day %d of month %d",
            self.id, intercalary, day, month,
        )
        month = min(max(month, 1), len(self.definition.months))
        offset = counted = 0
        for seg in layout:
            if seg.month >= month:
                break
            offset += seg.length
            if seg.counts_for_weekdays:
                counted += seg.length
        return offset + day - 1, counted + day - 1

    def _weekday(self, year: int, counted: int) -> int:
        counted += self.resolver.weekday_days_before_year(year)
        return (counted + self.definition.year.start_day) % self.week_length

    def date_to_days(self, date: CalendarDate) -> int:
        """Elapsed days from the first day of the epoch year (negative before it)."""
        offset, _ = self._locate(date.year, date.month, date.day, date.intercalary)
        return self.resolver.days_before_year(date.year) + offset

    def days_to_date(self, days: int, time: TimeOfDay = TimeOfDay()) -> CalendarDate:
        year, rem = self.resolver.year_from_day(days)
        counted = 0
        for seg in self.resolver.layout(year):
            if rem < seg.length:
                break
            rem -= seg.length
            if seg.counts_for_weekdays:
                counted += seg.length
        if seg.counts_for_weekdays:
            counted += rem
        return CalendarDate(
            year=year,
            month=seg.month,
            day=rem + 1,
            weekday=self._weekday(year, counted),
            time=time,
            intercalary=seg.entry.name if seg.entry is not None else None,
            calendar=self.definition,
        )

    def calculate_weekday(self, year: int, month: int, day: int, intercalary: Optional[str] = None) -> int:
        """
        Weekday index of a date: days that count toward the week since the epoch,
        modulo the week length, offset by the epoch's starting weekday.

        An intercalary day that does not count reports the weekday the next
        counting day will have.
        """
        _, counted = self._locate(year, month, day, intercalary)
        return self._weekday(year, counted)

    def make_date(
        self,
        year: int,
        month: int,
        day: int,
        *,
        time: TimeOfDay = TimeOfDay(),
        intercalary: Optional[str] = None,
    ) -> CalendarDate:
        """
        Build a fully resolved (weekday included) date; raises InvalidDateError if
        it does not exist. An intercalary name the calendar does not define is kept
        on the date and positioned as day `day` of `month`.
        """
        _, counted = self._locate(year, month, day, intercalary)
        return CalendarDate(
            year=year,
            month=month,
            day=day,
            weekday=self._weekday(year, counted),
            time=time,
            intercalary=intercalary,
            calendar=self.definition,
        )

    def intercalary_date(self, year: int, name: str, day: int = 1, *, time: TimeOfDay = TimeOfDay()) -> CalendarDate:
        month = self.resolver.month_of(name)
        if month is None:
            raise InvalidDateError(f"Unknown intercalary '{name}' in calendar '{self.id}'")
        return self.make_date(year, month, day, time=time, intercalary=name)

    def day_of_year(self, date: CalendarDate) -> int:
        """1-based position of the date inside its year, intercalary days included."""
        offset, _ = self._locate(date.year, date.month, date.day, date.intercalary)
        return offset + 1

    # ---------------------------------------------------------
    # World clock
    # ---------------------------------------------------------

    def _world_time_offset(self) -> int:
        wt = self.definition.world_time
        if wt is None or wt.interpretation != "real-time-based":
            return 0
        days = self.resolver.days_before_year(wt.current_year) - self.resolver.days_before_year(wt.epoch_year)
        return days * self.seconds_per_day

    def anchor_date(self, anchor_timestamp: float) -> CalendarDate:
        """
        The date world clock 0 maps to when the host anchors the clock at a Unix
        timestamp: the timestamp's UTC date, year shifted by the epoch, clamped
        into this calendar's months and time units.
        """
        y, mo, d, h, mi, s = utc_components(anchor_timestamp)
        year = y + self.definition.year.epoch
        month = min(max(mo, 1), len(self.definition.months))
        day = min(max(d, 1), self.month_length(month, year))
        t = self.time
        tod = TimeOfDay(
            min(h, t.hours_in_day - 1),
            min(mi, t.minutes_in_hour - 1),
            min(s, t.seconds_in_minute - 1),
        )
        return self.make_date(year, month, day, time=tod)

    def _clock_offset(self, anchor_timestamp: Optional[float]) -> int:
        if anchor_timestamp is None:
            return self._world_offset
        base = self.anchor_date(anchor_timestamp)
        return self.date_to_days(base) * self.seconds_per_day + time_to_seconds(base.time, self.time)

    def date_to_clock(self, date: CalendarDate, anchor_timestamp: Optional[float] = None) -> int:
        seconds = self.date_to_days(date) * self.seconds_per_day + time_to_seconds(date.time, self.time)
        return seconds - self._clock_offset(anchor_timestamp)

    def clock_to_date(self, seconds: float, anchor_timestamp: Optional[float] = None) -> CalendarDate:
        internal = math.floor(seconds) + self._clock_offset(anchor_timestamp)
        days, tod = split_seconds(internal, self.time)
        return self.days_to_date(days, tod)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def add_days(self, date: CalendarDate, days: int) -> CalendarDate:
        return self.days_to_date(self.date_to_days(date) + days, date.time)

    def add_weeks(self, date: CalendarDate, weeks: int) -> CalendarDate:
        return self.add_days(date, weeks * self.week_length)

    def add_months(self, date: CalendarDate, months: int) -> CalendarDate:
        """
        Move by whole months, clamping the day to the target month's length.
        Intercalary dates move from the month they report and always land on a
        regular day.
        """
        self._locate(date.year, date.month, date.day, date.intercalary)
        n = len(self.definition.months)
        start = min(max(date.month, 1), n)
        year_shift, month0 = divmod(start - 1 + months, n)
        year, month = date.year + year_shift, month0 + 1
        day = min(date.day, self.month_length(month, year))
        return self.make_date(year, month, day, time=date.time)

    def add_years(self, date: CalendarDate, years: int) -> CalendarDate:
        """
        Same month and day in another year, clamped to that month's length.
        An intercalary date stays on its period when the period exists in the
        target year; otherwise it falls back to the regular day just before the
        period (day 1 of the first month for periods opening the year). Names
        the calendar does not define are treated as regular days.
        """
        self._locate(date.year, date.month, date.day, date.intercalary)
        year = date.year + years
        if not self.is_placed(date.intercalary):
            month = min(max(date.month, 1), len(self.definition.months))
            day = min(max(date.day, 1), self.month_length(month, year))
            return self.make_date(year, month, day, time=date.time)
        if date.intercalary is None:
            day = min(date.day, self.month_length(date.month, year))
            return self.make_date(year, date.month, day, time=date.time)

        for seg in self.resolver.layout(year):
            if seg.entry is not None and seg.entry.name == date.intercalary:
                return self.make_date(year, date.month, min(date.day, seg.length),
                                      time=date.time, intercalary=date.intercalary)
        entry = self.definition.find_intercalary(date.intercalary)
        month = date.month if entry.after is not None else date.month - 1
        if month >= 1:
            return self.make_date(year, month, self.month_length(month, year), time=date.time)
        return self.make_date(year, 1, 1, time=date.time)

    def _add_seconds(self, date: CalendarDate, seconds: int) -> CalendarDate:
        total = self.date_to_days(date) * self.seconds_per_day + time_to_seconds(date.time, self.time) + seconds
        days, tod = split_seconds(total, self.time)
        return self.days_to_date(days, tod)

    def add_hours(self, date: CalendarDate, hours: int) -> CalendarDate:
        return self._add_seconds(date, hours * self.time.seconds_per_hour)

    def add_minutes(self, date: CalendarDate, minutes: int) -> CalendarDate:
        return self._add_seconds(date, minutes * self.time.seconds_in_minute)

    def add_seconds(self, date: CalendarDate, seconds: int) -> CalendarDate:
        return self._add_seconds(date, seconds)

    def days_between(self, a: CalendarDate, b: CalendarDate) -> int:
        return self.date_to_days(b) - self.date_to_days(a)

    # ---------------------------------------------------------
    # High-level info (CLI / api)
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        d = self.definition
        return {
            "id": d.id,
            "label": d.display_name,
            "months": len(d.months),
            "weekdays": len(d.weekdays),
            "epoch": d.year.epoch,
            "leap_rule": d.leap_year.rule,
            "cycle_years": self.resolver.cycle_years,
            "intercalary": [e.name for e in d.intercalary],
            "seconds_per_day": self.seconds_per_day,
            "variants": sorted(d.variants),
        }

    def with_definition(self, **changes: Any) -> "CalendarEngine":
        """A new engine over a tweaked copy of this definition."""
        return CalendarEngine(replace(self.definition, **changes))
