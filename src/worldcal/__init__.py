"""worldcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    day_info,
    get_calendar,
    load_calendar,
    engine_info,
    new_year_day,
    first_day_of_month,
    last_day_of_month,
    days_in_month,
    year_layout,
)
from .bootstrap import build_registry
from .core.date import CalendarDate
from .core.engine import EngineRegistry
from .core.errors import CalendarValidationError, InvalidDateError, UnknownVariantError, WorldcalError
from .core.parse import calendar_from_dict, calendar_from_json
from .core.time import decimal_hours_to_time, hours_to_time_string
from .core.types import CalendarDefinition, DayInfo, TimeOfDay
from .engines.calendar import CalendarEngine
from .engines.factory import make_engine, try_make_engine
from .engines.validation import ValidationReport, validate_definition
from .engines.variants import apply_variant, default_variant_id, expand_variants

__all__ = [
    "day_info",
    "get_calendar",
    "load_calendar",
    "engine_info",
    "new_year_day",
    "first_day_of_month",
    "last_day_of_month",
    "days_in_month",
    "year_layout",
    "build_registry",
    "CalendarDate",
    "EngineRegistry",
    "CalendarValidationError",
    "InvalidDateError",
    "UnknownVariantError",
    "WorldcalError",
    "calendar_from_dict",
    "calendar_from_json",
    "decimal_hours_to_time",
    "hours_to_time_string",
    "CalendarDefinition",
    "DayInfo",
    "TimeOfDay",
    "CalendarEngine",
    "make_engine",
    "try_make_engine",
    "ValidationReport",
    "validate_definition",
    "apply_variant",
    "default_variant_id",
    "expand_variants",
]
