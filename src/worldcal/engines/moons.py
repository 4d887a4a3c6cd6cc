"""
worldcal.engines.moons
----------------------
Moon phase lookup. A moon's position in its cycle is the number of days since
its reference new moon modulo the (possibly fractional) cycle length; the
phase table is then walked in order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from ..core.date import CalendarDate
from ..core.types import Moon, MoonPhase
from .calendar import CalendarEngine

logger = logging.getLogger(__name__)

PHASE_BOUNDARY_TOLERANCE = 1e-6
_PRECISION = 1_000_000


def normalize_fraction(value: float) -> float:
    """Round to 1e-6 so accumulated float error does not leak into results."""
    if not math.isfinite(value):
        return 0.0
    rounded = round(value * _PRECISION) / _PRECISION
    return rounded if rounded != 0 else 0.0


@dataclass(frozen=True)
class MoonPhaseInfo:
    moon: Moon
    phase: MoonPhase
    phase_index: int
    day_in_phase: int
    day_in_phase_exact: float
    days_until_next: int
    days_until_next_exact: float
    phase_progress: float


def reference_date(engine: CalendarEngine, moon: Moon) -> CalendarDate:
    ref = moon.first_new_moon
    n = len(engine.definition.months)
    month = min(max(ref.month, 1), n)
    day = min(max(ref.day, 1), engine.month_length(month, ref.year))
    if (month, day) != (ref.month, ref.day):
        logger.debug(
            "Moon '%s': reference %d-%d-%d clamped to %d-%d-%d",
            moon.name, ref.year, ref.month, ref.day, ref.year, month, day,
        )
    return engine.make_date(ref.year, month, day)


def moon_phase(engine: CalendarEngine, moon: Moon, date: CalendarDate) -> MoonPhaseInfo:
    elapsed = engine.date_to_days(date) - engine.date_to_days(reference_date(engine, moon))
    position = elapsed % moon.cycle_length

    start = 0.0
    index = 0
    for i, phase in enumerate(moon.phases):
        end = start + phase.length
        if position < end - PHASE_BOUNDARY_TOLERANCE or i == len(moon.phases) - 1:
            index = i
            break
        start = end

    phase = moon.phases[index]
    in_phase = min(max(normalize_fraction(position - start), 0.0), phase.length)
    until_next = max(normalize_fraction(phase.length - in_phase), 0.0)
    progress = min(max(in_phase / phase.length, 0.0), 1.0) if phase.length > 0 else 0.0

    return MoonPhaseInfo(
        moon=moon,
        phase=phase,
        phase_index=index,
        day_in_phase=math.floor(in_phase),
        day_in_phase_exact=in_phase,
        days_until_next=max(math.ceil(until_next), 0),
        days_until_next_exact=until_next,
        phase_progress=progress,
    )


def moon_phases(engine: CalendarEngine, date: CalendarDate, name: Optional[str] = None) -> List[MoonPhaseInfo]:
    """Phase of every moon (or only the moon called `name`) on `date`."""
    moons = engine.definition.moons
    if name is not None:
        moons = tuple(m for m in moons if m.name == name)
    return [moon_phase(engine, m, date) for m in moons]


def moon_phases_at_clock(engine: CalendarEngine, seconds: float, name: Optional[str] = None) -> List[MoonPhaseInfo]:
    return moon_phases(engine, engine.clock_to_date(seconds), name)
