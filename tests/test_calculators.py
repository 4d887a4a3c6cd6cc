# tests/test_calculators.py

import pytest

from worldcal.core.types import (
    CalendarDefinition,
    IntercalaryDay,
    Month,
    NamedWeek,
    Season,
    TimeConfig,
    WeekConfig,
    Weekday,
)
from worldcal.engines.calendar import CalendarEngine
from worldcal.engines.moons import moon_phase, moon_phases, normalize_fraction
from worldcal.engines.seasons import season_for, season_progress
from worldcal.engines.specs import EXANDRIAN, GREGORIAN, HARPTOS, tweak
from worldcal.engines.sunrise import sun_times
from worldcal.engines.weeks import week_info, week_of_month


@pytest.fixture
def greg():
    return CalendarEngine(GREGORIAN)


@pytest.fixture
def harptos():
    return CalendarEngine(HARPTOS)


def novena_calendar(handling: str, **weeks) -> CalendarEngine:
    return CalendarEngine(CalendarDefinition(
        id="novena",
        months=(Month("Long", 37), Month("Even", 36)),
        weekdays=tuple(Weekday(f"D{i}") for i in range(9)),
        weeks=WeekConfig(type="month-based", per_month=4, days_per_week=9, remainder_handling=handling, **weeks),
    ))


# ------------------------------------------------------------
# Seasons
# ------------------------------------------------------------

@pytest.mark.parametrize("md, name", [
    ((3, 25), "Spring"),
    ((3, 19), "Winter"),
    ((1, 10), "Winter"),
    ((12, 21), "Winter"),
    ((12, 20), "Autumn"),
    ((7, 4), "Summer"),
])
def test_open_ended_seasons(greg, md, name):
    assert season_for(greg, greg.make_date(2023, *md)).name == name


def test_explicit_season_ranges_and_festivals(harptos):
    assert season_for(harptos, harptos.make_date(1372, 1, 5)).name == "Winter"
    assert season_for(harptos, harptos.intercalary_date(1372, "Midwinter")).name == "Winter"
    assert season_for(harptos, harptos.intercalary_date(1372, "Feast of the Moon")).name == "Autumn"
    assert season_for(harptos, harptos.make_date(1372, 12, 1)) is None


def test_season_progress(greg):
    spring = 0
    assert season_progress(greg, greg.make_date(2023, 3, 20), spring) == 0.0
    mid = season_progress(greg, greg.make_date(2023, 5, 5), spring)
    assert 0.4 < mid < 0.6


def test_before_periods_take_season_of_previous_day():
    eng = CalendarEngine(tweak(HARPTOS, intercalary=HARPTOS.intercalary + (
        IntercalaryDay("Dawnfeast", before="Hammer", counts_for_weekdays=False),
        IntercalaryDay("Springeve", before="Ches", counts_for_weekdays=False),
    )))
    eve = eng.intercalary_date(1372, "Springeve")
    assert eve.month == 3
    assert season_for(eng, eve).name == "Winter"
    assert season_for(eng, eng.intercalary_date(1372, "Dawnfeast")) is None


# ------------------------------------------------------------
# Sunrise / sunset
# ------------------------------------------------------------

def test_sun_times_without_seasons():
    eng = CalendarEngine(tweak(GREGORIAN, seasons=(), time=TimeConfig(hours_in_day=20)))
    st = sun_times(eng, eng.make_date(1, 1, 1))
    assert (st.sunrise, st.sunset) == (5.0, 15.0)


def test_sun_times_at_season_start_use_reference_values(greg):
    st = sun_times(greg, greg.make_date(2023, 3, 20))
    assert st.sunrise == pytest.approx(6.5)
    assert st.sunset == pytest.approx(17.75)
    assert st.as_strings() == ("06:30", "17:45")


def test_sun_times_interpolate(greg):
    st = sun_times(greg, greg.make_date(2023, 8, 1))
    assert 5.75 < st.sunrise < 6.5
    assert 19.5 < st.sunset < 20.25
    assert st.daylight_hours == pytest.approx(st.sunset - st.sunrise)


def test_explicit_season_times_win():
    defn = tweak(GREGORIAN, seasons=(
        Season("Light", start_month=1, sunrise="04:00", sunset="22:00"),
        Season("Dark", start_month=7, sunrise="10:00", sunset="14:00"),
    ))
    eng = CalendarEngine(defn)
    st = sun_times(eng, eng.make_date(2023, 1, 1))
    assert (st.sunrise, st.sunset) == (pytest.approx(4.0), pytest.approx(22.0))
    st = sun_times(eng, eng.make_date(2023, 7, 1))
    assert (st.sunrise, st.sunset) == (pytest.approx(10.0), pytest.approx(14.0))


def test_unnamed_seasons_fall_back_to_day_split():
    eng = CalendarEngine(tweak(EXANDRIAN, seasons=(Season("Rains", start_month=1),)))
    st = sun_times(eng, eng.make_date(812, 4, 1))
    assert (st.sunrise, st.sunset) == (6.0, 18.0)


# ------------------------------------------------------------
# Moons
# ------------------------------------------------------------

def test_new_moon_on_reference_date(greg):
    luna = GREGORIAN.moons[0]
    info = moon_phase(greg, luna, greg.make_date(2000, 1, 6))
    assert info.phase.name == "New Moon"
    assert info.phase_index == 0
    assert info.day_in_phase == 0
    assert info.days_until_next == 1


def test_day_after_new_moon(greg):
    info = moon_phase(greg, GREGORIAN.moons[0], greg.make_date(2000, 1, 7))
    assert info.phase.name == "Waxing Crescent"
    assert info.day_in_phase == 0
    assert info.phase_progress == 0.0


def test_dates_before_reference_wrap(greg):
    info = moon_phase(greg, GREGORIAN.moons[0], greg.make_date(1999, 12, 31))
    assert info.phase.name == "Waning Crescent"
    assert info.phase_index == 7
    assert info.day_in_phase_exact == pytest.approx(0.3826, abs=1e-3)


def test_full_cycle_returns_to_new_moon():
    eng = CalendarEngine(EXANDRIAN)
    catha = EXANDRIAN.moons[0]
    ref = eng.make_date(800, 1, 1)
    assert moon_phase(eng, catha, eng.add_days(ref, 33)).phase.name == "New Moon"
    assert moon_phase(eng, catha, eng.add_days(ref, 17)).phase.name == "Full Moon"


def test_moon_phases_filter(harptos):
    d = harptos.make_date(1372, 1, 1)
    assert [p.moon.name for p in moon_phases(harptos, d)] == ["Selûne"]
    assert moon_phases(harptos, d, name="Nope") == []


def test_normalize_fraction():
    assert normalize_fraction(1e-9) == 0.0
    assert normalize_fraction(2.0000004) == pytest.approx(2.0)
    assert normalize_fraction(float("inf")) == 0.0


# ------------------------------------------------------------
# Weeks
# ------------------------------------------------------------

def test_tendays(harptos):
    assert week_of_month(harptos, harptos.make_date(1372, 3, 15)) == 2
    assert week_info(harptos, harptos.make_date(1372, 3, 21)).name == "3rd Week"
    assert week_of_month(harptos, harptos.intercalary_date(1372, "Midwinter")) is None


def test_remainder_handling():
    assert week_of_month(novena_calendar("partial-last"), _d(37)) == 5
    assert week_of_month(novena_calendar("extend-last"), _d(37)) == 4
    assert week_of_month(novena_calendar("none"), _d(37)) is None
    assert week_of_month(novena_calendar("none"), _d(36)) == 4
    eng = novena_calendar("none")
    assert week_of_month(eng, eng.make_date(1, 2, 36)) == 4


def _d(day):
    return novena_calendar("partial-last").make_date(1, 1, day)


def test_named_weeks_and_patterns():
    eng = novena_calendar("extend-last", names=(NamedWeek("The Novena of Water", abbreviation="Water"),))
    assert week_info(eng, eng.make_date(1, 1, 3)).abbreviation == "Water"
    assert week_info(eng, eng.make_date(1, 1, 10)).name == "Week 2"
    silent = novena_calendar("partial-last", naming_pattern="none")
    assert week_info(silent, silent.make_date(1, 1, 10)) is None


def test_no_or_year_based_weeks(greg):
    assert week_of_month(greg, greg.make_date(2024, 1, 1)) is None
    eng = CalendarEngine(tweak(HARPTOS, weeks=WeekConfig(type="year-based", days_per_week=10)))
    assert week_of_month(eng, eng.make_date(1372, 1, 1)) is None
