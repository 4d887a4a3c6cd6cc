"""
worldcal.engines.variants
-------------------------
Named variants of a calendar. A variant never edits its base: every override
kind has one merge function that returns a new CalendarDefinition.
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Dict, Optional

from ..core.errors import UnknownVariantError
from ..core.types import (
    CalendarDefinition,
    FormatOverride,
    MonthOverride,
    MoonOverride,
    Override,
    SeasonOverride,
    Variant,
    WeekdayOverride,
    YearOverride,
)

logger = logging.getLogger(__name__)


def variant_id(base_id: str, variant_key: str) -> str:
    return f"{base_id}({variant_key})"


def _set_fields(override: Any, skip: str = "") -> Dict[str, Any]:
    """Fields of an override that carry a value."""
    return {
        f.name: getattr(override, f.name)
        for f in fields(override)
        if f.name != skip and getattr(override, f.name) is not None
    }


# ------------------------------------------------------------
# One merge per override kind
# ------------------------------------------------------------

def _merge_year(defn: CalendarDefinition, o: YearOverride) -> CalendarDefinition:
    return replace(defn, year=replace(defn.year, **_set_fields(o)))


def _merge_month(defn: CalendarDefinition, o: MonthOverride) -> CalendarDefinition:
    idx = defn.month_index(o.month)
    if idx is None:
        logger.warning("Calendar '%s': month override for unknown month '%s' ignored", defn.id, o.month)
        return defn
    months = list(defn.months)
    months[idx - 1] = replace(months[idx - 1], **_set_fields(o, skip="month"))
    return replace(defn, months=tuple(months))


def _merge_weekday(defn: CalendarDefinition, o: WeekdayOverride) -> CalendarDefinition:
    weekdays = list(defn.weekdays)
    for i, w in enumerate(weekdays):
        if w.name == o.weekday:
            weekdays[i] = replace(w, **_set_fields(o, skip="weekday"))
            return replace(defn, weekdays=tuple(weekdays))
    logger.warning("Calendar '%s': weekday override for unknown weekday '%s' ignored", defn.id, o.weekday)
    return defn


def _merge_formats(defn: CalendarDefinition, o: FormatOverride) -> CalendarDefinition:
    merged = dict(defn.date_formats)
    merged.update(o.formats)
    base_widgets = defn.date_formats.get("widgets")
    new_widgets = o.formats.get("widgets")
    if isinstance(base_widgets, dict) and isinstance(new_widgets, dict):
        merged["widgets"] = {**base_widgets, **new_widgets}
    return replace(defn, date_formats=merged)


def _merge_moons(defn: CalendarDefinition, o: MoonOverride) -> CalendarDefinition:
    return replace(defn, moons=tuple(o.moons))


def _merge_seasons(defn: CalendarDefinition, o: SeasonOverride) -> CalendarDefinition:
    return replace(defn, seasons=tuple(o.seasons))


def apply_override(defn: CalendarDefinition, override: Override) -> CalendarDefinition:
    if isinstance(override, YearOverride):
        return _merge_year(defn, override)
    if isinstance(override, MonthOverride):
        return _merge_month(defn, override)
    if isinstance(override, WeekdayOverride):
        return _merge_weekday(defn, override)
    if isinstance(override, FormatOverride):
        return _merge_formats(defn, override)
    if isinstance(override, MoonOverride):
        return _merge_moons(defn, override)
    if isinstance(override, SeasonOverride):
        return _merge_seasons(defn, override)
    raise TypeError(f"Unknown override type: {type(override)}")


# ------------------------------------------------------------
# Variant builders
# ------------------------------------------------------------

def build_variant(defn: CalendarDefinition, key: str, variant: Variant) -> CalendarDefinition:
    """
    The definition `defn` becomes under `variant`: id 'base(key)', label
    'Base label (Variant name)', overrides applied in order. The result
    carries no variants of its own.
    """
    out = replace(
        defn,
        id=variant_id(defn.id, key),
        label=f"{defn.display_name} ({variant.name})",
        variants={},
    )
    for o in variant.overrides:
        out = apply_override(out, o)
    return out


def apply_variant(defn: CalendarDefinition, key: str) -> CalendarDefinition:
    if key not in defn.variants:
        raise UnknownVariantError(
            f"Calendar '{defn.id}' has no variant '{key}'. Available: {sorted(defn.variants)}"
        )
    return build_variant(defn, key, defn.variants[key])


def expand_variants(defn: CalendarDefinition) -> Dict[str, CalendarDefinition]:
    """Every variant of `defn`, keyed by its 'base(variant)' id."""
    out: Dict[str, CalendarDefinition] = {}
    for key, variant in defn.variants.items():
        built = build_variant(defn, key, variant)
        out[built.id] = built
        logger.debug("Created calendar variant: %s", built.id)
    return out


def default_variant_key(defn: CalendarDefinition) -> Optional[str]:
    for key, variant in defn.variants.items():
        if variant.default:
            return key
    return None


def default_variant_id(defn: CalendarDefinition) -> Optional[str]:
    """The 'base(variant)' id of the variant flagged default, if any."""
    key = default_variant_key(defn)
    return variant_id(defn.id, key) if key is not None else None
