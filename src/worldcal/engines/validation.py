"""
worldcal.engines.validation
---------------------------
Load-time checks on a CalendarDefinition.

Errors make a definition unusable (an engine refuses it). Warnings describe
user-authored data the engine tolerates with a documented default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from ..core.types import CalendarDefinition

LEAP_RULES = ("none", "gregorian", "custom")
INTERPRETATIONS = ("epoch-based", "real-time-based")


@dataclass
class ValidationReport:
    calendar_id: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _duplicates(names: Iterable[str]) -> List[str]:
    seen, dups = set(), []
    for n in names:
        if n in seen and n not in dups:
            dups.append(n)
        seen.add(n)
    return dups


def _is_positive_int(x) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and x > 0


def validate_definition(defn: CalendarDefinition) -> ValidationReport:
    rep = ValidationReport(calendar_id=defn.id)
    err, warn = rep.errors.append, rep.warnings.append

    if not defn.id:
        err("Calendar must have a non-empty id")

    # months / weekdays
    if not defn.months:
        err("Calendar must define at least one month")
    for i, m in enumerate(defn.months, start=1):
        if not m.name:
            err(f"Month {i} has no name")
        if not _is_positive_int(m.days):
            err(f"Month {i} ('{m.name}') must have a positive whole number of days, got {m.days!r}")
    for name in _duplicates(m.name for m in defn.months):
        err(f"Month names must be unique ('{name}' repeats)")

    if not defn.weekdays:
        err("Calendar must define at least one weekday")
    for name in _duplicates(w.name for w in defn.weekdays):
        err(f"Weekday names must be unique ('{name}' repeats)")

    # time units
    t = defn.time
    for label, value in (
        ("hours_in_day", t.hours_in_day),
        ("minutes_in_hour", t.minutes_in_hour),
        ("seconds_in_minute", t.seconds_in_minute),
    ):
        if not _is_positive_int(value):
            err(f"time.{label} must be a positive integer, got {value!r}")

    # leap rule
    rule = defn.leap_year
    if rule.rule not in LEAP_RULES:
        err(f"Unknown leap year rule '{rule.rule}' (expected one of {', '.join(LEAP_RULES)})")
    if rule.rule == "custom" and not _is_positive_int(rule.interval):
        err(f"Custom leap year rule needs a positive interval, got {rule.interval!r}")
    if rule.month is not None and rule.rule != "none":
        target = next((m for m in defn.months if m.name == rule.month), None)
        if target is None:
            err(f"Leap year month '{rule.month}' does not exist in months list")
        elif _is_positive_int(target.days) and target.days + rule.extra_days < 1:
            warn(
                f"Leap year adjustment of {rule.extra_days} days would reduce '{rule.month}' "
                f"to {target.days + rule.extra_days} days (will be clamped to 1 day minimum)"
            )

    # intercalary
    month_names = {m.name for m in defn.months}
    for i, entry in enumerate(defn.intercalary, start=1):
        if not _is_positive_int(entry.days):
            err(f"Intercalary '{entry.name}' must last a positive whole number of days, got {entry.days!r}")
        if entry.after is not None and entry.before is not None:
            err(f"Intercalary '{entry.name}' cannot set both 'after' and 'before'")
        ref = entry.after if entry.after is not None else entry.before
        if ref is None:
            warn(f"Intercalary {i} ('{entry.name}') names no month and will be ignored")
        elif ref not in month_names:
            warn(f"Intercalary {i} ('{entry.name}') references non-existent month '{ref}' and will be ignored")
    for name in _duplicates(e.name for e in defn.intercalary):
        err(f"Intercalary names must be unique ('{name}' repeats)")

    # year / world time
    if defn.weekdays and not (0 <= defn.year.start_day < len(defn.weekdays)):
        warn(f"year.start_day {defn.year.start_day} is outside the week; it will wrap modulo {len(defn.weekdays)}")
    if defn.world_time is not None and defn.world_time.interpretation not in INTERPRETATIONS:
        err(f"Unknown world time interpretation '{defn.world_time.interpretation}'")

    # seasons
    n_months = len(defn.months)
    for s in defn.seasons:
        if not (1 <= s.start_month <= n_months):
            warn(f"Season '{s.name}' starts in month {s.start_month}, outside 1..{n_months}")
        if s.end_month is not None and not (1 <= s.end_month <= n_months):
            warn(f"Season '{s.name}' ends in month {s.end_month}, outside 1..{n_months}")

    # moons
    for moon in defn.moons:
        if not moon.cycle_length or moon.cycle_length <= 0:
            err(f"Moon '{moon.name}' must have a positive cycle length")
        if not moon.phases:
            err(f"Moon '{moon.name}' must define at least one phase")
        elif any(p.length <= 0 for p in moon.phases):
            err(f"Moon '{moon.name}' has a phase with non-positive length")
        elif moon.cycle_length and abs(sum(p.length for p in moon.phases) - moon.cycle_length) > 1e-6:
            warn(f"Moon '{moon.name}' phase lengths do not add up to its cycle length")

    # weeks
    w = defn.weeks
    if w is not None:
        if w.type == "month-based" and w.per_month is None:
            err("weeks.per_month is required for month-based weeks")
        if w.per_month is not None and w.per_month <= 0:
            err("weeks.per_month must be greater than 0")
        if w.days_per_week is not None and w.days_per_week <= 0:
            err("weeks.days_per_week must be greater than 0")
        for name in _duplicates(n.name for n in w.names):
            err(f"Week names must be unique ('{name}' repeats)")

    return rep
