"""
worldcal.engines.factory
------------------------
Transforms pure data definitions into live, executable engines.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..core.errors import CalendarValidationError
from ..core.types import CalendarDefinition
from .calendar import CalendarEngine
from .validation import ValidationReport, validate_definition

logger = logging.getLogger(__name__)


def make_engine(defn: CalendarDefinition) -> CalendarEngine:
    """The universal entry point. Raises CalendarValidationError on a bad definition."""
    return CalendarEngine(defn)


def try_make_engine(defn: CalendarDefinition) -> Tuple[Optional[CalendarEngine], ValidationReport]:
    """
    Like make_engine, but reports failure as a value so the caller can keep
    whatever calendar it already has.
    """
    report = validate_definition(defn)
    if not report.is_valid:
        logger.warning(
            "Calendar '%s' failed validation: %s", defn.id, "; ".join(report.errors)
        )
        return None, report
    try:
        return CalendarEngine(defn), report
    except CalendarValidationError as e:
        report.errors.extend(e.errors)
        return None, report
