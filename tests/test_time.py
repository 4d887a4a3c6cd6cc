# tests/test_time.py

import pytest

from worldcal.core.time import (
    decimal_hours_to_time,
    hours_to_time_string,
    split_seconds,
    time_string_to_hours,
    time_to_seconds,
)
from worldcal.core.types import TimeConfig, TimeOfDay


def test_decimal_hours_rolls_over_full_minute():
    assert decimal_hours_to_time(6.9999) == (7, 0)
    assert decimal_hours_to_time(23.99999) == (24, 0)


@pytest.mark.parametrize("hours, expected", [
    (6.5, (6, 30)),
    (6.25, (6, 15)),
    (0.0, (0, 0)),
    (17.75, (17, 45)),
    (5.0083, (5, 0)),
    (5.0084, (5, 1)),
])
def test_decimal_hours_rounding(hours, expected):
    assert decimal_hours_to_time(hours) == expected


def test_decimal_hours_custom_minutes():
    assert decimal_hours_to_time(6.5, 100) == (6, 50)
    assert decimal_hours_to_time(6.999, 100) == (7, 0)
    assert decimal_hours_to_time(6.5, None) == (6, 30)


def test_hours_to_time_string():
    assert hours_to_time_string(17.75) == "17:45"
    assert hours_to_time_string(6.9999) == "07:00"
    assert hours_to_time_string(4.05) == "04:03"


def test_time_string_to_hours():
    assert time_string_to_hours("06:30") == pytest.approx(6.5)
    assert time_string_to_hours("06:25", 50) == pytest.approx(6.5)
    with pytest.raises(ValueError):
        time_string_to_hours("0630")
    with pytest.raises(ValueError):
        time_string_to_hours("aa:bb")


def test_split_seconds_floors_negative():
    t = TimeConfig()
    assert split_seconds(-1, t) == (-1, TimeOfDay(23, 59, 59))
    assert split_seconds(86400 + 3725, t) == (1, TimeOfDay(1, 2, 5))
    assert time_to_seconds(TimeOfDay(1, 2, 5), t) == 3725
