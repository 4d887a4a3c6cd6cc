from __future__ import annotations

import math
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .attributes import standard as _standard  # noqa: F401  (registers providers)
from .attributes.registry import compute_attributes
from .core.date import CalendarDate
from .core.parse import calendar_from_json
from .core.types import DayInfo
from .engines.calendar import CalendarEngine
from .engines.factory import make_engine
from .engines.variants import apply_variant, default_variant_key


def day_info(
    engine: CalendarEngine,
    seconds: float,
    *,
    attributes: Sequence[str] = (),
    anchor_timestamp: Optional[float] = None,
) -> DayInfo:
    date = engine.clock_to_date(seconds, anchor_timestamp)
    info = DayInfo(clock=math.floor(seconds), calendar_id=engine.id, date=date)
    if attributes:
        info = replace(info, attributes=compute_attributes(engine, info, attributes))
    return info


def get_calendar(name: str, *, variant: Optional[str] = None) -> CalendarEngine:
    """
    Fresh engine for a built-in calendar. Calendars with a default variant
    resolve to it unless `variant` names another one.
    """
    from .engines.specs import like

    defn = like(name)
    if variant is None:
        variant = default_variant_key(defn)
    if variant is not None:
        defn = apply_variant(defn, variant)
    return make_engine(defn)


def load_calendar(path: Union[str, Path]) -> CalendarEngine:
    return make_engine(calendar_from_json(Path(path)))


def engine_info(engine: CalendarEngine) -> Dict[str, Any]:
    return engine.info()


# ============================================================
# Month / year helpers
# ============================================================

def new_year_day(engine: CalendarEngine, year: int) -> CalendarDate:
    return engine.days_to_date(engine.resolver.days_before_year(year))


def first_day_of_month(engine: CalendarEngine, year: int, month: int) -> CalendarDate:
    return engine.make_date(year, month, 1)


def last_day_of_month(engine: CalendarEngine, year: int, month: int) -> CalendarDate:
    return engine.make_date(year, month, engine.month_length(month, year))


def days_in_month(engine: CalendarEngine, year: int, month: int) -> List[CalendarDate]:
    first = first_day_of_month(engine, year, month)
    return [engine.add_days(first, i) for i in range(engine.month_length(month, year))]


def year_layout(engine: CalendarEngine, year: int) -> List[Dict[str, Any]]:
    """Chronological months and intercalary periods of `year` with their first elapsed day."""
    rows = []
    day = engine.resolver.days_before_year(year)
    for seg in engine.resolver.layout(year):
        if seg.entry is None:
            label = engine.definition.months[seg.month - 1].name
        else:
            label = seg.entry.name
        rows.append({
            "label": label,
            "month": seg.month,
            "intercalary": seg.entry is not None,
            "days": seg.length,
            "first_day": day,
        })
        day += seg.length
    return rows
