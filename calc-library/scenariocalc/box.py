"""
Market data boxes: one value for all scenarios, or one value per scenario.

Most items of market data do not vary across scenarios (an FX spot shared by
stress scenarios that only move curves). Storing those as a single value
avoids building N copies, and lets callers special-case the common case via
`MarketDataBox.is_single_value`.

A box is a two-case tagged variant rather than a class hierarchy: the `kind`
field says which case applies and every accessor branches on it explicitly.

Scenario values come in two stock representations:
- `ScenarioArray`: a tuple of arbitrary objects (curves, dates, ...).
- `DoubleScenarioArray`: a read-only numpy array of floats, the packed form
  used by vectorized pricing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

import numpy as np

from scenariocalc.errors import ScenarioIndexError, SingleValueBoxError
from scenariocalc.interfaces import ScenarioMarketDataValue

T = TypeVar("T")
R = TypeVar("R")


def check_scenario_index(scenario_index: int, scenario_count: int | None) -> int:
    """Validate a scenario index; `scenario_count=None` only rejects negatives."""
    if scenario_index < 0:
        raise ScenarioIndexError(scenario_index, scenario_count)
    if scenario_count is not None and scenario_index >= scenario_count:
        raise ScenarioIndexError(scenario_index, scenario_count)
    return scenario_index


@dataclass(frozen=True)
class ScenarioArray(Generic[T]):
    """Per-scenario values stored as a tuple, one element per scenario."""

    values: tuple[T, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError("ScenarioArray requires at least one scenario value")

    @classmethod
    def of(cls, values: Iterable[T]) -> ScenarioArray[T]:
        return cls(tuple(values))

    @classmethod
    def from_box(cls, box: MarketDataBox[T], scenario_count: int) -> ScenarioArray[T]:
        """Build an array from any box; a single value is repeated for every scenario."""
        return cls(tuple(box.get_value(i) for i in range(scenario_count)))

    @property
    def scenario_count(self) -> int:
        return len(self.values)

    def get_value(self, scenario_index: int) -> T:
        check_scenario_index(scenario_index, len(self.values))
        return self.values[scenario_index]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)


@dataclass(frozen=True, eq=False)
class DoubleScenarioArray:
    """
    Per-scenario floats packed in a read-only numpy array.

    Pricing code that works on whole vectors (one element per scenario)
    asks for this representation through a scenario key; market data
    producers are free to store plain sequences instead.
    """

    values: np.ndarray

    def __post_init__(self) -> None:
        array = np.array(self.values, dtype=np.float64)
        if array.ndim != 1:
            raise ValueError(
                f"DoubleScenarioArray requires a 1-D array, got shape {array.shape}"
            )
        if array.size == 0:
            raise ValueError("DoubleScenarioArray requires at least one scenario value")
        array.setflags(write=False)
        object.__setattr__(self, "values", array)

    @classmethod
    def of(cls, values: Iterable[float]) -> DoubleScenarioArray:
        return cls(np.fromiter(values, dtype=np.float64))

    @classmethod
    def from_box(cls, box: MarketDataBox[float], scenario_count: int) -> DoubleScenarioArray:
        """Pack any box of floats; a single value is broadcast to every scenario."""
        if box.is_single_value:
            return cls(np.full(scenario_count, float(box.get_single_value())))
        return cls(
            np.fromiter(
                (box.get_value(i) for i in range(scenario_count)),
                dtype=np.float64,
                count=scenario_count,
            )
        )

    @property
    def scenario_count(self) -> int:
        return int(self.values.size)

    def get_value(self, scenario_index: int) -> float:
        check_scenario_index(scenario_index, self.scenario_count)
        return float(self.values[scenario_index])

    def __len__(self) -> int:
        return self.scenario_count

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DoubleScenarioArray):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    def __hash__(self) -> int:
        return hash(self.values.tobytes())

    def __repr__(self) -> str:
        return f"DoubleScenarioArray({self.values.tolist()})"


class BoxKind(Enum):
    """Which case of MarketDataBox applies."""

    SINGLE = "single"
    SCENARIO = "scenario"


@dataclass(frozen=True)
class MarketDataBox(Generic[T]):
    """
    A value of market data for every scenario of a calculation.

    Build boxes through the `of_*` factories; the variant is fixed at
    construction.
    """

    kind: BoxKind
    _single: Any = field(default=None)
    _scenario: ScenarioMarketDataValue[T] | None = field(default=None)

    def __post_init__(self) -> None:
        if self.kind is BoxKind.SINGLE:
            if self._scenario is not None:
                raise ValueError("A single value box cannot hold a scenario value")
        elif self.kind is BoxKind.SCENARIO:
            if self._scenario is None:
                raise ValueError("A scenario box requires a scenario value")
            if self._scenario.scenario_count < 1:
                raise ValueError("A scenario box requires at least one scenario")
        else:
            raise ValueError(f"Unknown box kind: {self.kind!r}")

    @classmethod
    def of_single_value(cls, value: T) -> MarketDataBox[T]:
        """Box one value shared by all scenarios."""
        return cls(BoxKind.SINGLE, _single=value)

    @classmethod
    def of_scenario_values(cls, values: Iterable[T]) -> MarketDataBox[T]:
        """Box one value per scenario, in scenario order."""
        return cls(BoxKind.SCENARIO, _scenario=ScenarioArray.of(values))

    @classmethod
    def of_scenario_value(cls, scenario_value: ScenarioMarketDataValue[T]) -> MarketDataBox[T]:
        """Box a pre-built scenario value (e.g. a DoubleScenarioArray)."""
        return cls(BoxKind.SCENARIO, _scenario=scenario_value)

    @property
    def is_single_value(self) -> bool:
        return self.kind is BoxKind.SINGLE

    @property
    def scenario_count(self) -> int | None:
        """Number of scenarios, or None for a single value (it fits any count)."""
        if self.kind is BoxKind.SINGLE:
            return None
        return self._scenario.scenario_count

    def get_value(self, scenario_index: int) -> T:
        """Return the value for one scenario. Raises ScenarioIndexError if out of range."""
        if self.kind is BoxKind.SINGLE:
            check_scenario_index(scenario_index, None)
            return self._single
        check_scenario_index(scenario_index, self._scenario.scenario_count)
        return self._scenario.get_value(scenario_index)

    def get_single_value(self) -> T:
        """Return the shared value. Raises ValueError for a scenario box."""
        if self.kind is BoxKind.SINGLE:
            return self._single
        raise ValueError("This box holds one value per scenario, not a single value")

    def get_scenario_value(self) -> ScenarioMarketDataValue[T]:
        """
        Return the per-scenario representation.

        A single value box has no scenario variation and raises
        SingleValueBoxError; check `is_single_value` first.
        """
        if self.kind is BoxKind.SINGLE:
            raise SingleValueBoxError(
                "A single value box has no scenario value; check is_single_value first"
            )
        return self._scenario

    def map(self, fn: Callable[[T], R]) -> MarketDataBox[R]:
        """Apply fn to the value of every scenario, keeping the variant."""
        if self.kind is BoxKind.SINGLE:
            return MarketDataBox.of_single_value(fn(self._single))
        count = self._scenario.scenario_count
        return MarketDataBox.of_scenario_values(
            fn(self._scenario.get_value(i)) for i in range(count)
        )
