from __future__ import annotations
from typing import Any, Dict

from ..engines.moons import moon_phases
from ..engines.seasons import season_for
from ..engines.sunrise import sun_times
from ..engines.weeks import week_info, week_of_month
from .registry import register_attribute

def season(engine, info) -> Dict[str, Any]:
    s = season_for(engine, info.date)
    return {"season": s.name if s is not None else None}

def moons(engine, info) -> Dict[str, Any]:
    return {
        "moons": [
            {
                "moon": p.moon.name,
                "phase": p.phase.name,
                "phase_index": p.phase_index,
                "day_in_phase": p.day_in_phase,
                "days_until_next": p.days_until_next,
            }
            for p in moon_phases(engine, info.date)
        ]
    }

def sun(engine, info) -> Dict[str, Any]:
    st = sun_times(engine, info.date)
    rise, set_ = st.as_strings(engine.time.minutes_in_hour)
    return {"sunrise": rise, "sunset": set_}

def week(engine, info) -> Dict[str, Any]:
    named = week_info(engine, info.date)
    return {
        "week": week_of_month(engine, info.date),
        "week_name": named.name if named is not None else None,
    }

def day_of_year(engine, info) -> Dict[str, Any]:
    return {"day_of_year": engine.day_of_year(info.date)}

register_attribute("season", season)
register_attribute("moons", moons)
register_attribute("sun", sun)
register_attribute("week", week)
register_attribute("day_of_year", day_of_year)
