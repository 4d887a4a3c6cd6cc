"""
Calendar documents -> CalendarDefinition.

Calendar files use camelCase keys (leapYear, hoursInDay, countsForWeekdays,
...). Sections a usable calendar cannot do without are filled with
Gregorian-like defaults, each one logged as a warning.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .types import (
    CalendarDefinition,
    FormatOverride,
    IntercalaryDay,
    LeapYearRule,
    Month,
    MonthOverride,
    Moon,
    MoonOverride,
    MoonPhase,
    MoonReference,
    NamedWeek,
    Override,
    Season,
    SeasonOverride,
    TimeConfig,
    Variant,
    WeekConfig,
    Weekday,
    WeekdayOverride,
    WorldTimeConfig,
    YearConfig,
    YearOverride,
)

logger = logging.getLogger(__name__)


def _label(doc: Mapping[str, Any]) -> Optional[str]:
    if doc.get("label"):
        return doc["label"]
    tr = doc.get("translations") or {}
    en = tr.get("en") or next(iter(tr.values()), None)
    if isinstance(en, Mapping):
        return en.get("label")
    return None


def _year(d: Mapping[str, Any]) -> YearConfig:
    return YearConfig(
        epoch=int(d.get("epoch", 0)),
        current_year=d.get("currentYear"),
        prefix=d.get("prefix", "") or "",
        suffix=d.get("suffix", "") or "",
        start_day=int(d.get("startDay", 0)),
    )


def _leap(d: Mapping[str, Any]) -> LeapYearRule:
    return LeapYearRule(
        rule=d.get("rule", "none"),
        interval=d.get("interval"),
        offset=int(d.get("offset", 0)),
        month=d.get("month"),
        extra_days=int(d.get("extraDays", 1)),
    )


def _time(d: Mapping[str, Any]) -> TimeConfig:
    return TimeConfig(
        hours_in_day=d.get("hoursInDay", 24),
        minutes_in_hour=d.get("minutesInHour", 60),
        seconds_in_minute=d.get("secondsInMinute", 60),
    )


def _month(d: Mapping[str, Any]) -> Month:
    return Month(name=d.get("name", ""), days=d.get("days", 0),
                 abbreviation=d.get("abbreviation"), description=d.get("description"))


def _weekday(d: Mapping[str, Any]) -> Weekday:
    return Weekday(name=d.get("name", ""), abbreviation=d.get("abbreviation"), description=d.get("description"))


def _intercalary(d: Mapping[str, Any]) -> IntercalaryDay:
    return IntercalaryDay(
        name=d.get("name", ""),
        after=d.get("after"),
        before=d.get("before"),
        days=d.get("days", 1),
        leap_year_only=bool(d.get("leapYearOnly", False)),
        counts_for_weekdays=bool(d.get("countsForWeekdays", True)),
        description=d.get("description"),
    )


def _season(d: Mapping[str, Any]) -> Season:
    return Season(
        name=d.get("name", ""),
        start_month=int(d.get("startMonth", 1)),
        start_day=int(d.get("startDay", 1)),
        end_month=d.get("endMonth"),
        end_day=d.get("endDay"),
        sunrise=d.get("sunrise"),
        sunset=d.get("sunset"),
        description=d.get("description"),
    )


def _moon(d: Mapping[str, Any]) -> Moon:
    ref = d.get("firstNewMoon") or {}
    return Moon(
        name=d.get("name", ""),
        cycle_length=float(d.get("cycleLength", 0)),
        first_new_moon=MoonReference(int(ref.get("year", 0)), int(ref.get("month", 1)), int(ref.get("day", 1))),
        phases=tuple(
            MoonPhase(
                name=p.get("name", ""),
                length=float(p.get("length", 0)),
                single_day=bool(p.get("singleDay", False)),
                icon=p.get("icon"),
            )
            for p in d.get("phases", ())
        ),
        color=d.get("color"),
    )


def _weeks(d: Mapping[str, Any]) -> WeekConfig:
    return WeekConfig(
        type=d.get("type", "month-based"),
        per_month=d.get("perMonth"),
        days_per_week=d.get("daysPerWeek"),
        remainder_handling=d.get("remainderHandling", "partial-last"),
        names=tuple(
            NamedWeek(name=n.get("name", ""), abbreviation=n.get("abbreviation"), description=n.get("description"))
            for n in d.get("names", ())
        ),
        naming_pattern=d.get("namingPattern", "numeric"),
    )


def _world_time(d: Mapping[str, Any]) -> WorldTimeConfig:
    return WorldTimeConfig(
        interpretation=d.get("interpretation", "epoch-based"),
        epoch_year=int(d.get("epochYear", 0)),
        current_year=int(d.get("currentYear", 0)),
    )


# ------------------------------------------------------------
# Variants
# ------------------------------------------------------------

_YEAR_KEYS = {"epoch": "epoch", "currentYear": "current_year", "prefix": "prefix",
              "suffix": "suffix", "startDay": "start_day"}


def _overrides(d: Mapping[str, Any], config: Mapping[str, Any]) -> Tuple[Override, ...]:
    out: List[Override] = []
    year_kw = {_YEAR_KEYS[k]: v for k, v in (d.get("year") or {}).items() if k in _YEAR_KEYS}
    if "yearOffset" in config:
        year_kw["epoch"] = int(config["yearOffset"])
    if year_kw:
        out.append(YearOverride(**year_kw))
    for name, m in (d.get("months") or {}).items():
        out.append(MonthOverride(month=name, name=m.get("name"), days=m.get("days"),
                                 abbreviation=m.get("abbreviation"), description=m.get("description")))
    for name, w in (d.get("weekdays") or {}).items():
        out.append(WeekdayOverride(weekday=name, name=w.get("name"),
                                   abbreviation=w.get("abbreviation"), description=w.get("description")))
    if d.get("dateFormats"):
        out.append(FormatOverride(formats=d["dateFormats"]))
    if "moons" in d:
        out.append(MoonOverride(moons=tuple(_moon(m) for m in d["moons"] or ())))
    if "seasons" in d:
        out.append(SeasonOverride(seasons=tuple(_season(s) for s in d["seasons"] or ())))
    return tuple(out)


def _variant(d: Mapping[str, Any]) -> Variant:
    return Variant(
        name=d.get("name", ""),
        description=d.get("description", "") or "",
        default=bool(d.get("default", False)),
        overrides=_overrides(d.get("overrides") or {}, d.get("config") or {}),
    )


# ------------------------------------------------------------
# Entry points
# ------------------------------------------------------------

def calendar_from_dict(doc: Mapping[str, Any]) -> CalendarDefinition:
    if not isinstance(doc, Mapping):
        raise TypeError(f"Calendar document must be a mapping, got {type(doc).__name__}")
    cid = str(doc.get("id", ""))

    def section(key: str, default: Any) -> Any:
        if key in doc and doc[key] is not None:
            return doc[key]
        logger.warning("Calendar '%s' has no '%s' section; using defaults", cid, key)
        return default

    return CalendarDefinition(
        id=cid,
        label=_label(doc),
        months=tuple(_month(m) for m in doc.get("months") or ()),
        weekdays=tuple(_weekday(w) for w in doc.get("weekdays") or ()),
        year=_year(section("year", {})),
        leap_year=_leap(section("leapYear", {})),
        intercalary=tuple(_intercalary(e) for e in section("intercalary", [])),
        time=_time(section("time", {})),
        seasons=tuple(_season(s) for s in doc.get("seasons") or ()),
        moons=tuple(_moon(m) for m in doc.get("moons") or ()),
        weeks=_weeks(doc["weeks"]) if doc.get("weeks") else None,
        world_time=_world_time(doc["worldTime"]) if doc.get("worldTime") else None,
        date_formats=doc.get("dateFormats") or {},
        variants={k: _variant(v) for k, v in (doc.get("variants") or {}).items()},
    )


def calendar_from_json(source: Union[str, Path]) -> CalendarDefinition:
    """Load a calendar from a JSON file path, or from a JSON string."""
    if isinstance(source, Path) or not source.lstrip().startswith("{"):
        text = Path(source).read_text(encoding="utf-8")
    else:
        text = source
    doc: Dict[str, Any] = json.loads(text)
    return calendar_from_dict(doc)
