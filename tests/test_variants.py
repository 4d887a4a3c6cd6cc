# tests/test_variants.py

import logging

import pytest

from worldcal.core.errors import UnknownVariantError
from worldcal.core.types import (
    FormatOverride,
    MonthOverride,
    MoonOverride,
    SeasonOverride,
    Variant,
    WeekdayOverride,
    YearOverride,
)
from worldcal.engines.calendar import CalendarEngine
from worldcal.engines.specs import GOLARION, GREGORIAN, tweak
from worldcal.engines.variants import (
    apply_override,
    apply_variant,
    default_variant_id,
    expand_variants,
)


def test_expand_variants_ids_and_labels():
    out = expand_variants(GOLARION)
    assert sorted(out) == ["golarion(absalom-reckoning)", "golarion(imperial-calendar)"]
    ic = out["golarion(imperial-calendar)"]
    assert ic.label == "Golarion Calendar (Imperial Calendar)"
    assert ic.year.epoch == 1200
    assert ic.year.suffix == " IC"
    assert ic.variants == {}


def test_base_definition_is_untouched():
    expand_variants(GOLARION)
    assert GOLARION.year.epoch == 0
    assert GOLARION.year.suffix == " AR"
    assert GOLARION.id == "golarion"


def test_default_variant():
    assert default_variant_id(GOLARION) == "golarion(absalom-reckoning)"
    assert default_variant_id(GREGORIAN) is None


def test_variant_engine_shifts_years():
    base = CalendarEngine(GOLARION)
    ic = CalendarEngine(apply_variant(GOLARION, "imperial-calendar"))
    assert ic.clock_to_date(0).year == 1200
    d = ic.clock_to_date(10 ** 9)
    assert d.year == base.clock_to_date(10 ** 9).year + 1200
    assert d.year_string().endswith(" IC")


def test_unknown_variant():
    with pytest.raises(UnknownVariantError):
        apply_variant(GOLARION, "nope")
    with pytest.raises(KeyError):
        apply_variant(GOLARION, "nope")


def test_month_and_weekday_overrides():
    defn = apply_override(GREGORIAN, MonthOverride(month="March", days=35, abbreviation="Mr"))
    defn = apply_override(defn, WeekdayOverride(weekday="Sunday", name="Sunnday"))
    assert defn.months[2].days == 35
    assert defn.months[2].abbreviation == "Mr"
    assert defn.months[2].name == "March"
    assert defn.weekdays[0].name == "Sunnday"
    assert GREGORIAN.months[2].days == 31
    assert CalendarEngine(defn).year_length(2023) == 369


def test_unknown_month_override_is_ignored(caplog):
    with caplog.at_level(logging.WARNING):
        defn = apply_override(GREGORIAN, MonthOverride(month="Smarch", days=3))
    assert defn == GREGORIAN
    assert "Smarch" in caplog.text


def test_format_override_merges_widgets():
    base = tweak(GREGORIAN, date_formats={"short": "{d}", "widgets": {"mini": "a", "main": "b"}})
    out = apply_override(base, FormatOverride(formats={"long": "{D}", "widgets": {"mini": "z"}}))
    assert out.date_formats["short"] == "{d}"
    assert out.date_formats["long"] == "{D}"
    assert out.date_formats["widgets"] == {"mini": "z", "main": "b"}


def test_moon_and_season_overrides_replace():
    out = apply_override(GREGORIAN, MoonOverride(moons=()))
    assert out.moons == ()
    out = apply_override(GREGORIAN, SeasonOverride(seasons=GREGORIAN.seasons[:2]))
    assert [s.name for s in out.seasons] == ["Spring", "Summer"]


def test_overrides_apply_in_order():
    defn = tweak(GREGORIAN, variants={
        "v": Variant(name="V", overrides=(YearOverride(epoch=10), YearOverride(epoch=20, prefix="Y"))),
    })
    out = apply_variant(defn, "v")
    assert out.year.epoch == 20
    assert out.year.prefix == "Y"
    assert out.id == "gregorian(v)"


def test_apply_override_rejects_unknown_kind():
    with pytest.raises(TypeError):
        apply_override(GREGORIAN, object())


def test_format_documents_are_copied_not_shared():
    widgets = {"mini": {"size": "s"}}
    defn = tweak(GREGORIAN, date_formats={"short": "{d}", "widgets": widgets})
    widgets["mini"]["size"] = "xl"
    assert defn.date_formats["widgets"]["mini"]["size"] == "s"

    out = apply_override(defn, FormatOverride(formats={"long": "{D}"}))
    out.date_formats["widgets"]["mini"]["size"] = "m"
    assert defn.date_formats["widgets"]["mini"]["size"] == "s"
    with pytest.raises(TypeError):
        defn.date_formats["short"] = "{y}"
