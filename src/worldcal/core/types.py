from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Tuple, Union

LeapRuleKind = Literal["none", "gregorian", "custom"]
Interpretation = Literal["epoch-based", "real-time-based"]
WeekType = Literal["month-based", "year-based"]
RemainderHandling = Literal["partial-last", "extend-last", "none"]
NamingPattern = Literal["ordinal", "numeric", "none"]


def _plain_copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain_copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain_copy(v) for v in value]
    return value


def _frozen_mapping(value: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value or {}))


def _frozen_document(value: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """Read-only copy of a JSON-shaped mapping; nested dicts and lists are copied too."""
    return MappingProxyType(_plain_copy(value or {}))


@dataclass(frozen=True)
class YearConfig:
    epoch: int = 0
    current_year: Optional[int] = None
    prefix: str = ""
    suffix: str = ""
    start_day: int = 0  # weekday index of the first day of the epoch year


@dataclass(frozen=True)
class Month:
    name: str
    days: int
    abbreviation: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Weekday:
    name: str
    abbreviation: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class LeapYearRule:
    """
    Leap rule family plus the month adjustment it triggers.

    gregorian: y = year - offset; leap iff y%4==0 and (y%100!=0 or y%400==0)
    custom:    leap iff (year - offset) % interval == 0
    """
    rule: LeapRuleKind = "none"
    interval: Optional[int] = None
    offset: int = 0
    month: Optional[str] = None
    extra_days: int = 1


@dataclass(frozen=True)
class IntercalaryDay:
    name: str
    after: Optional[str] = None
    before: Optional[str] = None
    days: int = 1
    leap_year_only: bool = False
    counts_for_weekdays: bool = True
    description: Optional[str] = None


@dataclass(frozen=True)
class TimeConfig:
    hours_in_day: int = 24
    minutes_in_hour: int = 60
    seconds_in_minute: int = 60

    @property
    def seconds_per_hour(self) -> int:
        return self.minutes_in_hour * self.seconds_in_minute

    @property
    def seconds_per_day(self) -> int:
        return self.hours_in_day * self.seconds_per_hour


@dataclass(frozen=True)
class Season:
    name: str
    start_month: int
    start_day: int = 1
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    sunrise: Optional[str] = None  # "HH:MM" on the first day of the season
    sunset: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class MoonPhase:
    name: str
    length: float
    single_day: bool = False
    icon: Optional[str] = None


@dataclass(frozen=True)
class MoonReference:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class Moon:
    name: str
    cycle_length: float
    first_new_moon: MoonReference
    phases: Tuple[MoonPhase, ...]
    color: Optional[str] = None


@dataclass(frozen=True)
class NamedWeek:
    name: str
    abbreviation: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class WeekConfig:
    type: WeekType = "month-based"
    per_month: Optional[int] = None
    days_per_week: Optional[int] = None
    remainder_handling: RemainderHandling = "partial-last"
    names: Tuple[NamedWeek, ...] = ()
    naming_pattern: NamingPattern = "numeric"


@dataclass(frozen=True)
class WorldTimeConfig:
    interpretation: Interpretation = "epoch-based"
    epoch_year: int = 0
    current_year: int = 0


# ------------------------------------------------------------
# Variant overrides (one kind per dataclass, merged in engines.variants)
# ------------------------------------------------------------

@dataclass(frozen=True)
class YearOverride:
    epoch: Optional[int] = None
    current_year: Optional[int] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    start_day: Optional[int] = None


@dataclass(frozen=True)
class MonthOverride:
    month: str  # name of the base month being overridden
    name: Optional[str] = None
    days: Optional[int] = None
    abbreviation: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class WeekdayOverride:
    weekday: str
    name: Optional[str] = None
    abbreviation: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class FormatOverride:
    formats: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "formats", _frozen_document(self.formats))


@dataclass(frozen=True)
class MoonOverride:
    moons: Tuple[Moon, ...] = ()


@dataclass(frozen=True)
class SeasonOverride:
    seasons: Tuple[Season, ...] = ()


Override = Union[YearOverride, MonthOverride, WeekdayOverride, FormatOverride, MoonOverride, SeasonOverride]


@dataclass(frozen=True)
class Variant:
    name: str
    description: str = ""
    default: bool = False
    overrides: Tuple[Override, ...] = ()


# ------------------------------------------------------------
# The definition itself
# ------------------------------------------------------------

@dataclass(frozen=True)
class CalendarDefinition:
    """Pure data payload describing one calendar. Never mutated after load."""
    id: str
    months: Tuple[Month, ...]
    weekdays: Tuple[Weekday, ...]
    year: YearConfig = YearConfig()
    leap_year: LeapYearRule = LeapYearRule()
    intercalary: Tuple[IntercalaryDay, ...] = ()
    time: TimeConfig = TimeConfig()
    seasons: Tuple[Season, ...] = ()
    moons: Tuple[Moon, ...] = ()
    weeks: Optional[WeekConfig] = None
    world_time: Optional[WorldTimeConfig] = None
    label: Optional[str] = None
    date_formats: Mapping[str, Any] = field(default_factory=dict, hash=False)
    variants: Mapping[str, Variant] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "months", tuple(self.months))
        object.__setattr__(self, "weekdays", tuple(self.weekdays))
        object.__setattr__(self, "intercalary", tuple(self.intercalary))
        object.__setattr__(self, "seasons", tuple(self.seasons))
        object.__setattr__(self, "moons", tuple(self.moons))
        object.__setattr__(self, "date_formats", _frozen_document(self.date_formats))
        object.__setattr__(self, "variants", _frozen_mapping(self.variants))

    @property
    def display_name(self) -> str:
        return self.label or self.id

    def month_index(self, name: str) -> Optional[int]:
        """1-based index of the month called `name`, or None."""
        for i, m in enumerate(self.months, start=1):
            if m.name == name:
                return i
        return None

    def find_intercalary(self, name: str) -> Optional[IntercalaryDay]:
        for entry in self.intercalary:
            if entry.name == name:
                return entry
        return None


@dataclass(frozen=True)
class TimeOfDay:
    hour: int = 0
    minute: int = 0
    second: int = 0


@dataclass(frozen=True)
class DayInfo:
    clock: int
    calendar_id: str
    date: Any  # worldcal.core.date.CalendarDate
    attributes: Optional[Dict[str, Any]] = None
