from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from .date import CalendarDate
from .types import CalendarDefinition

logger = logging.getLogger(__name__)


class CalendarEngine(Protocol):
    id: str
    definition: CalendarDefinition

    def info(self) -> Dict[str, Any]: ...
    def clock_to_date(self, seconds: float, anchor_timestamp: Optional[float] = None) -> CalendarDate: ...
    def date_to_clock(self, date: CalendarDate, anchor_timestamp: Optional[float] = None) -> int: ...


@dataclass
class EngineRegistry:
    """
    Engines by calendar id, plus which one is active. Callers own their
    registry; there is no process-wide instance.
    """
    _engines: Dict[str, CalendarEngine] = field(default_factory=dict)
    _active: Optional[str] = None

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine

    def __contains__(self, name: object) -> bool:
        return name in self._engines

    # ---------------------------------------------------------
    # Active calendar
    # ---------------------------------------------------------

    @property
    def active(self) -> Optional[CalendarEngine]:
        return self._engines.get(self._active) if self._active is not None else None

    def set_active(self, name: str) -> CalendarEngine:
        eng = self.get(name)
        self._active = name
        logger.info("Active calendar: %s", name)
        return eng

    def activate(self, defn: CalendarDefinition):
        """
        Build an engine for `defn`, register it under its id and make it active.
        Returns the ValidationReport; when the definition is invalid nothing
        changes and the previously active engine stays active.
        """
        from ..engines.factory import try_make_engine

        engine, report = try_make_engine(defn)
        if engine is None:
            logger.warning(
                "Keeping calendar '%s' active; '%s' is invalid", self._active, defn.id
            )
            return report
        self.register(defn.id, engine, overwrite=True)
        self.set_active(defn.id)
        return report
