"""
Per-scenario calculation results.

A scenario whose market data is missing or malformed does not abort the
whole calculation: its value is None and a CalculationFailure records why.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from scenariocalc.box import DoubleScenarioArray
from scenariocalc.errors import (
    MarketDataError,
    MarketDataNotFoundError,
    ScenarioIndexError,
)


class FailureReason(Enum):
    """Category of a failed scenario calculation."""

    MISSING_DATA = "missing_data"
    INVALID_SCENARIO = "invalid_scenario"
    INVALID_DATA = "invalid_data"

    @classmethod
    def of(cls, error: MarketDataError) -> FailureReason:
        if isinstance(error, MarketDataNotFoundError):
            return cls.MISSING_DATA
        if isinstance(error, ScenarioIndexError):
            return cls.INVALID_SCENARIO
        return cls.INVALID_DATA


@dataclass(frozen=True)
class CalculationFailure:
    """Why one scenario produced no value."""

    scenario_index: int
    reason: FailureReason
    message: str

    @classmethod
    def of(cls, scenario_index: int, error: MarketDataError) -> CalculationFailure:
        return cls(scenario_index, FailureReason.of(error), str(error))


@dataclass(frozen=True)
class ScenarioResult:
    """Values of one calculation, one per scenario, plus the failures."""

    values: tuple[Optional[float], ...]
    failures: tuple[CalculationFailure, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        object.__setattr__(
            self, "failures", tuple(sorted(self.failures, key=lambda f: f.scenario_index))
        )

    @property
    def scenario_count(self) -> int:
        return len(self.values)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def to_array(self) -> DoubleScenarioArray:
        """Pack the values; failed scenarios become NaN."""
        return DoubleScenarioArray.of(
            float("nan") if v is None else v for v in self.values
        )
