from __future__ import annotations

from typing import Sequence, Tuple


class WorldcalError(Exception):
    """Base error."""


class CalendarValidationError(WorldcalError):
    """Raised when a calendar definition cannot back an engine.

    Carries every validation message, not just the first one, so a caller can
    show the full list to whoever authored the calendar.
    """

    def __init__(self, calendar_id: str, errors: Sequence[str]):
        self.calendar_id = calendar_id
        self.errors: Tuple[str, ...] = tuple(errors)
        joined = "; ".join(self.errors) if self.errors else "unknown validation failure"
        super().__init__(f"Calendar '{calendar_id}' is invalid: {joined}")


class InvalidDateError(WorldcalError, ValueError):
    """Raised when a date or timestamp handed to an engine is outside the calendar."""


class UnknownVariantError(WorldcalError, KeyError):
    """Raised when a variant id is not defined on a calendar."""
