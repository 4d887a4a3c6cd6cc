from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Sequence, Tuple

from ..core.types import (
    CalendarDefinition,
    IntercalaryDay,
    LeapYearRule,
    Month,
    Moon,
    MoonPhase,
    MoonReference,
    Season,
    Variant,
    WeekConfig,
    Weekday,
    YearConfig,
    YearOverride,
)


# ============================================================
# SHARED BUILDING BLOCKS
# ============================================================

PHASE_NAMES = (
    ("New Moon", "new"),
    ("Waxing Crescent", "waxing-crescent"),
    ("First Quarter", "first-quarter"),
    ("Waxing Gibbous", "waxing-gibbous"),
    ("Full Moon", "full"),
    ("Waning Gibbous", "waning-gibbous"),
    ("Last Quarter", "last-quarter"),
    ("Waning Crescent", "waning-crescent"),
)


def eight_phases(cycle_length: float) -> Tuple[MoonPhase, ...]:
    """
    The usual eight-phase table: the four principal phases last one day each and
    the four intermediate phases share the rest of the cycle equally.
    """
    span = (cycle_length - 4) / 4
    return tuple(
        MoonPhase(name=name, length=1.0 if i % 2 == 0 else span, single_day=(i % 2 == 0), icon=icon)
        for i, (name, icon) in enumerate(PHASE_NAMES)
    )


def months(pairs: Sequence[Tuple[str, int]], abbrev: int = 3) -> Tuple[Month, ...]:
    return tuple(Month(name=n, days=d, abbreviation=n[:abbrev]) for n, d in pairs)


def weekdays(names: Sequence[str], abbrev: int = 3) -> Tuple[Weekday, ...]:
    return tuple(Weekday(name=n, abbreviation=n[:abbrev]) for n in names)


def festival(name: str, after: str, *, leap_year_only: bool = False) -> IntercalaryDay:
    """A one-day holiday outside the month grid that does not advance the week."""
    return IntercalaryDay(name=name, after=after, leap_year_only=leap_year_only, counts_for_weekdays=False)


# ============================================================
# GREGORIAN
# Proleptic, astronomical year numbering (year 0 exists).
# 0000-01-01 was a Saturday, so start_day = 6 with Sunday = 0.
# ============================================================

GREGORIAN = CalendarDefinition(
    id="gregorian",
    label="Gregorian Calendar",
    months=months([
        ("January", 31), ("February", 28), ("March", 31), ("April", 30),
        ("May", 31), ("June", 30), ("July", 31), ("August", 31),
        ("September", 30), ("October", 31), ("November", 30), ("December", 31),
    ]),
    weekdays=weekdays(["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]),
    year=YearConfig(epoch=0, current_year=2024, start_day=6),
    leap_year=LeapYearRule(rule="gregorian", month="February", extra_days=1),
    seasons=(
        Season("Spring", start_month=3, start_day=20),
        Season("Summer", start_month=6, start_day=21),
        Season("Autumn", start_month=9, start_day=22),
        Season("Winter", start_month=12, start_day=21),
    ),
    moons=(
        Moon(
            name="Luna",
            cycle_length=29.530588853,
            first_new_moon=MoonReference(2000, 1, 6),
            phases=eight_phases(29.530588853),
            color="#f0f0f0",
        ),
    ),
)


# ============================================================
# HARPTOS (Forgotten Realms)
# Twelve 30-day months of three tendays; festivals sit between months and
# do not belong to any tenday. Shieldmeet follows Midsummer every fourth year.
# ============================================================

HARPTOS = CalendarDefinition(
    id="harptos",
    label="Calendar of Harptos",
    months=months([
        ("Hammer", 30), ("Alturiak", 30), ("Ches", 30), ("Tarsakh", 30),
        ("Mirtul", 30), ("Kythorn", 30), ("Flamerule", 30), ("Eleasis", 30),
        ("Eleint", 30), ("Marpenoth", 30), ("Uktar", 30), ("Nightal", 30),
    ]),
    weekdays=weekdays([
        "First-day", "Second-day", "Third-day", "Fourth-day", "Fifth-day",
        "Sixth-day", "Seventh-day", "Eighth-day", "Ninth-day", "Tenth-day",
    ], abbrev=2),
    year=YearConfig(epoch=0, current_year=1492, suffix=" DR"),
    leap_year=LeapYearRule(rule="custom", interval=4),
    intercalary=(
        festival("Midwinter", after="Hammer"),
        festival("Greengrass", after="Tarsakh"),
        festival("Midsummer", after="Flamerule"),
        festival("Shieldmeet", after="Flamerule", leap_year_only=True),
        festival("Highharvestide", after="Eleint"),
        festival("Feast of the Moon", after="Uktar"),
    ),
    seasons=(
        Season("Winter", start_month=1, end_month=2),
        Season("Spring", start_month=3, end_month=5),
        Season("Summer", start_month=6, end_month=8),
        Season("Autumn", start_month=9, end_month=11),
    ),
    moons=(
        Moon(
            name="Selûne",
            cycle_length=30.4375,
            first_new_moon=MoonReference(1372, 1, 1),
            phases=eight_phases(30.4375),
            color="#e8e8ff",
        ),
    ),
    weeks=WeekConfig(type="month-based", per_month=3, days_per_week=10, naming_pattern="ordinal"),
)


# ============================================================
# GOLARION (Pathfinder)
# Calistril gains a day every eighth year.
# ============================================================

GOLARION = CalendarDefinition(
    id="golarion",
    label="Golarion Calendar",
    months=months([
        ("Abadius", 31), ("Calistril", 28), ("Pharast", 31), ("Gozran", 30),
        ("Desnus", 31), ("Sarenith", 30), ("Erastus", 31), ("Arodus", 31),
        ("Rova", 30), ("Lamashan", 31), ("Neth", 30), ("Kuthona", 31),
    ]),
    weekdays=weekdays(["Moonday", "Toilday", "Wealday", "Oathday", "Fireday", "Starday", "Sunday"]),
    year=YearConfig(epoch=0, current_year=4724, suffix=" AR"),
    leap_year=LeapYearRule(rule="custom", interval=8, month="Calistril", extra_days=1),
    seasons=(
        Season("Winter", start_month=12, end_month=2),
        Season("Spring", start_month=3, end_month=5),
        Season("Summer", start_month=6, end_month=8),
        Season("Autumn", start_month=9, end_month=11),
    ),
    moons=(
        Moon(
            name="Somal",
            cycle_length=29.5,
            first_new_moon=MoonReference(4700, 1, 7),
            phases=eight_phases(29.5),
        ),
    ),
    variants={
        "absalom-reckoning": Variant(
            name="Absalom Reckoning",
            description="Years counted from the raising of the Starstone.",
            default=True,
        ),
        "imperial-calendar": Variant(
            name="Imperial Calendar",
            description="Taldan reckoning, 1200 years ahead of Absalom Reckoning.",
            overrides=(YearOverride(epoch=1200, current_year=5924, suffix=" IC"),),
        ),
    },
)


# ============================================================
# EXANDRIAN (Critical Role)
# Eleven months of uneven length, no leap years.
# ============================================================

EXANDRIAN = CalendarDefinition(
    id="exandrian",
    label="Exandrian Calendar",
    months=months([
        ("Horisal", 29), ("Misuthar", 30), ("Dualahei", 30), ("Thunsheer", 31),
        ("Unndilar", 28), ("Brussendar", 31), ("Sydenstar", 32), ("Fessuran", 29),
        ("Quen'pillar", 27), ("Cuersaan", 29), ("Duscar", 32),
    ]),
    weekdays=weekdays(["Miresen", "Grissen", "Whelsen", "Conthsen", "Folsen", "Yulisen", "Da'leysen"]),
    year=YearConfig(epoch=0, current_year=812, suffix=" PD"),
    seasons=(
        Season("Spring", start_month=3, start_day=1),
        Season("Summer", start_month=5, start_day=1),
        Season("Autumn", start_month=8, start_day=1),
        Season("Winter", start_month=10, start_day=1),
    ),
    moons=(
        Moon(
            name="Catha",
            cycle_length=33.0,
            first_new_moon=MoonReference(800, 1, 1),
            phases=eight_phases(33.0),
        ),
    ),
)


ALL_SPECS: Dict[str, CalendarDefinition] = {
    "gregorian": GREGORIAN,
    "harptos": HARPTOS,
    "golarion": GOLARION,
    "exandrian": EXANDRIAN,
}


def like(name: str) -> CalendarDefinition:
    if name not in ALL_SPECS:
        raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(ALL_SPECS)}")
    return ALL_SPECS[name]


def tweak(defn: CalendarDefinition, **kwargs: Any) -> CalendarDefinition:
    return replace(defn, **kwargs)
