# tests/test_leap.py

import logging
import random

import pytest

from worldcal.core.types import CalendarDefinition, IntercalaryDay, LeapYearRule, Month, Weekday, YearConfig
from worldcal.engines.calendar import CalendarEngine
from worldcal.engines.leap import LeapResolver
from worldcal.engines.specs import GREGORIAN, HARPTOS


def three_month_calendar(**kw) -> CalendarDefinition:
    return CalendarDefinition(
        id=kw.pop("id", "tri"),
        months=(Month("Jan", 31), Month("Feb", 29), Month("Mar", 31)),
        weekdays=(Weekday("A"), Weekday("B"), Weekday("C"), Weekday("D"), Weekday("E")),
        **kw,
    )


@pytest.fixture
def greg():
    return CalendarEngine(GREGORIAN)


def test_gregorian_rule(greg):
    assert greg.is_leap_year(2024)
    assert greg.is_leap_year(2000)
    assert not greg.is_leap_year(1900)
    assert not greg.is_leap_year(2023)
    assert greg.is_leap_year(0)
    assert greg.is_leap_year(-4)
    assert not greg.is_leap_year(-100)


def test_gregorian_offset_shifts_rule():
    rule = LeapYearRule(rule="gregorian", offset=1, month="Feb")
    eng = CalendarEngine(three_month_calendar(leap_year=rule))
    assert eng.is_leap_year(2025)
    assert not eng.is_leap_year(2024)


def test_gregorian_month_lengths(greg):
    assert greg.month_lengths(2024)[1] == 29
    assert greg.month_lengths(2023)[1] == 28
    assert greg.year_length(2024) == 366
    assert greg.year_length(2023) == 365


def test_custom_rule_with_offset():
    rule = LeapYearRule(rule="custom", interval=4, offset=1, month="Jan")
    eng = CalendarEngine(three_month_calendar(leap_year=rule))
    assert eng.is_leap_year(5)
    assert eng.is_leap_year(1)
    assert not eng.is_leap_year(4)
    assert eng.month_lengths(5) == (32, 29, 31)


def test_none_rule_never_leaps():
    eng = CalendarEngine(three_month_calendar())
    assert not any(eng.is_leap_year(y) for y in range(-50, 50))
    assert eng.year_length(12345) == 91


def test_negative_leap_adjustment():
    rule = LeapYearRule(rule="gregorian", month="Feb", extra_days=-1)
    eng = CalendarEngine(three_month_calendar(leap_year=rule))
    assert eng.month_lengths(2024)[1] == 28
    assert eng.year_length(2024) == 90
    assert eng.month_lengths(2025)[1] == 29
    assert eng.year_length(2025) == 91


def test_leap_adjustment_clamps_to_one_day(caplog):
    defn = CalendarDefinition(
        id="clamp",
        months=(Month("Short", 5), Month("Long", 30)),
        weekdays=(Weekday("Only"),),
        leap_year=LeapYearRule(rule="custom", interval=2, month="Short", extra_days=-10),
    )
    with caplog.at_level(logging.WARNING):
        eng = CalendarEngine(defn)
    assert "clamped to 1 day" in caplog.text
    assert eng.month_lengths(2) == (1, 30)
    assert eng.month_lengths(3) == (5, 30)
    assert eng.year_length(2) == 31


def test_intercalary_days_after_out_of_range():
    eng = CalendarEngine(HARPTOS)
    assert eng.intercalary_days_after(1372, 0) == []
    assert eng.intercalary_days_after(1372, 13) == []
    assert eng.intercalary_days_after(1372, -1) == []
    assert eng.intercalary_days_after(1372, 2) == []


def test_intercalary_days_after_leap_only():
    eng = CalendarEngine(HARPTOS)
    assert [e.name for e in eng.intercalary_days_after(1372, 7)] == ["Midsummer", "Shieldmeet"]
    assert [e.name for e in eng.intercalary_days_after(1373, 7)] == ["Midsummer"]
    assert eng.year_length(1372) == 366
    assert eng.year_length(1373) == 365


def test_year_length_depends_on_year_only():
    eng = CalendarEngine(HARPTOS)
    for y in (1368, 1372, 1376, -4, 0, 4000):
        assert eng.year_length(y) == eng.year_length(y + 4)
        assert eng.month_lengths(y) == eng.month_lengths(y + 400)


@pytest.mark.parametrize("defn", [GREGORIAN, HARPTOS])
def test_days_before_year_matches_summation(defn):
    r = LeapResolver(defn)
    epoch = defn.year.epoch
    acc = 0
    for y in range(epoch, epoch + 900):
        assert r.days_before_year(y) == acc
        acc += r.year_length(y)

    acc = 0
    for y in range(epoch - 1, epoch - 900, -1):
        acc -= r.year_length(y)
        assert r.days_before_year(y) == acc


def test_year_from_day_inverts_days_before_year():
    r = LeapResolver(GREGORIAN)
    random.seed(7)
    for _ in range(2000):
        y = random.randint(-5000, 5000)
        start = r.days_before_year(y)
        assert r.year_from_day(start) == (y, 0)
        last = start + r.year_length(y) - 1
        assert r.year_from_day(last) == (y, r.year_length(y) - 1)


def test_large_spans_use_closed_form():
    r = LeapResolver(GREGORIAN)
    # 400-year Gregorian cycle = 146097 days
    assert r.days_before_year(400_000) == 1000 * 146097
    assert r.year_from_day(1000 * 146097) == (400_000, 0)


def test_epoch_offsets_day_zero():
    defn = three_month_calendar(year=YearConfig(epoch=100))
    r = LeapResolver(defn)
    assert r.days_before_year(100) == 0
    assert r.days_before_year(101) == 91
    assert r.year_from_day(-1) == (99, 90)


def test_unresolvable_intercalary_is_inert(caplog):
    defn = three_month_calendar(intercalary=(IntercalaryDay("Lost Day", after="Smarch"),))
    with caplog.at_level(logging.WARNING):
        eng = CalendarEngine(defn)
    assert "Smarch" in caplog.text
    assert eng.year_length(1) == 91
    assert all(eng.intercalary_days_after(1, m) == [] for m in range(1, 4))
