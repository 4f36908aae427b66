"""
Exceptions raised by market data access and curve group construction.

Each exception also subclasses the builtin a caller would naturally catch:
a missing key is a ``KeyError``, a bad scenario index is an ``IndexError``,
a bad configuration is a ``ValueError``. Code that only knows about the
builtins keeps working; code that wants to attribute a failed calculation
to market data catches ``MarketDataError``.
"""

from __future__ import annotations

from typing import Any


class MarketDataError(Exception):
    """Base class for failures while reading market data."""


class MarketDataNotFoundError(MarketDataError, KeyError):
    """No market data is stored for the requested key."""

    def __init__(self, key: Any, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"Market data not found for key {key}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ScenarioIndexError(MarketDataError, IndexError):
    """A scenario index is negative or beyond the scenario count."""

    def __init__(self, scenario_index: int, scenario_count: int | None) -> None:
        self.scenario_index = scenario_index
        self.scenario_count = scenario_count
        if scenario_count is None:
            message = f"Scenario index must be >= 0, got {scenario_index}"
        else:
            message = (
                f"Scenario index {scenario_index} is out of range "
                f"for {scenario_count} scenario(s)"
            )
        super().__init__(message)


class SingleValueBoxError(MarketDataError, ValueError):
    """A scenario value was requested from a box holding a single value."""


class CurveGroupError(ValueError):
    """A curve group definition is inconsistent."""


class CurveNameMismatchError(CurveGroupError):
    """Two curve group entries with different curve names were merged."""

    def __init__(self, curve_name: str, other_curve_name: str) -> None:
        self.curve_name = curve_name
        self.other_curve_name = other_curve_name
        super().__init__(
            "A CurveGroupEntry can only be merged with an entry with the same "
            f"curve name. name: {curve_name}, other name: {other_curve_name}"
        )
