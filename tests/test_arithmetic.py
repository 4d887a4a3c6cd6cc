# tests/test_arithmetic.py

import pytest

from worldcal.core.types import TimeOfDay
from worldcal.engines.calendar import CalendarEngine
from worldcal.engines.specs import GREGORIAN, HARPTOS


@pytest.fixture
def greg():
    return CalendarEngine(GREGORIAN)


@pytest.fixture
def harptos():
    return CalendarEngine(HARPTOS)


def ymd(d):
    return (d.year, d.month, d.day)


def test_add_days_crosses_years(greg):
    d = greg.make_date(2023, 12, 31)
    assert ymd(greg.add_days(d, 1)) == (2024, 1, 1)
    assert ymd(greg.add_days(d, 366 + 1)) == (2025, 1, 1)
    assert ymd(greg.add_days(greg.make_date(2024, 1, 1), -1)) == (2023, 12, 31)


def test_add_days_keeps_time(greg):
    d = greg.make_date(2024, 3, 1, time=TimeOfDay(13, 45, 10))
    assert greg.add_days(d, 10).time == TimeOfDay(13, 45, 10)


def test_add_weeks_uses_week_length(greg, harptos):
    assert ymd(greg.add_weeks(greg.make_date(2024, 1, 1), 2)) == (2024, 1, 15)
    assert ymd(harptos.add_weeks(harptos.make_date(1373, 2, 1), 1)) == (1373, 2, 11)


def test_add_months_clamps_day(greg):
    assert ymd(greg.add_months(greg.make_date(2023, 1, 31), 1)) == (2023, 2, 28)
    assert ymd(greg.add_months(greg.make_date(2024, 1, 31), 1)) == (2024, 2, 29)
    assert ymd(greg.add_months(greg.make_date(2024, 3, 31), -1)) == (2024, 2, 29)
    assert ymd(greg.add_months(greg.make_date(2024, 5, 31), 1)) == (2024, 6, 30)


def test_add_months_wraps_years(greg):
    assert ymd(greg.add_months(greg.make_date(2024, 11, 15), 3)) == (2025, 2, 15)
    assert ymd(greg.add_months(greg.make_date(2024, 2, 15), -14)) == (2022, 12, 15)
    assert ymd(greg.add_months(greg.make_date(2024, 6, 1), 12)) == (2025, 6, 1)


def test_add_months_from_intercalary_lands_on_regular_day(harptos):
    fest = harptos.intercalary_date(1372, "Midwinter")
    d = harptos.add_months(fest, 1)
    assert d.intercalary is None
    assert ymd(d) == (1372, 2, 1)


def test_add_years_clamps_leap_day(greg):
    assert ymd(greg.add_years(greg.make_date(2024, 2, 29), 1)) == (2025, 2, 28)
    assert ymd(greg.add_years(greg.make_date(2024, 2, 29), 4)) == (2028, 2, 29)
    assert ymd(greg.add_years(greg.make_date(2024, 7, 4), -24)) == (2000, 7, 4)


def test_add_years_keeps_intercalary_when_it_exists(harptos):
    sm = harptos.intercalary_date(1372, "Shieldmeet")
    assert harptos.add_years(sm, 4) == harptos.intercalary_date(1376, "Shieldmeet")
    mw = harptos.intercalary_date(1372, "Midwinter")
    assert harptos.add_years(mw, 1) == harptos.intercalary_date(1373, "Midwinter")


def test_add_years_falls_back_when_period_missing(harptos):
    sm = harptos.intercalary_date(1372, "Shieldmeet")
    d = harptos.add_years(sm, 1)
    assert d.intercalary is None
    assert ymd(d) == (1373, 7, 30)


def test_add_time_units(greg):
    d = greg.make_date(2024, 1, 1)
    h = greg.add_hours(d, 25)
    assert ymd(h) == (2024, 1, 2)
    assert h.time == TimeOfDay(1, 0, 0)
    m = greg.add_minutes(d, -1)
    assert ymd(m) == (2023, 12, 31)
    assert m.time == TimeOfDay(23, 59, 0)
    s = greg.add_seconds(d, 3661)
    assert s.time == TimeOfDay(1, 1, 1)


def test_arithmetic_agrees_with_clock(greg):
    d = greg.make_date(2024, 5, 17, time=TimeOfDay(6, 0, 0))
    t = greg.date_to_clock(d)
    assert greg.date_to_clock(greg.add_days(d, 100)) == t + 100 * 86400
    assert greg.days_between(d, greg.add_days(d, -45)) == -45
