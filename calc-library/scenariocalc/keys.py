"""
Keys identifying items of market data.

Keys are frozen dataclasses, so equality and hashing follow the defining
attributes (and the concrete key class), never object identity. Two
`CurveKey("USD-OIS")` instances find the same curve.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from scenariocalc.box import MarketDataBox

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class MarketDataKey(Generic[T]):
    """Base class for keys of market data values of type T."""


@dataclass(frozen=True)
class CurveKey(MarketDataKey[Any]):
    """Identifies a curve by name (e.g. "USD-OIS")."""

    curve_name: str

    def __post_init__(self) -> None:
        if not self.curve_name:
            raise ValueError("curve_name must not be empty")

    def __str__(self) -> str:
        return f"CurveKey:{self.curve_name}"


@dataclass(frozen=True)
class FxRateKey(MarketDataKey[float]):
    """Identifies an FX spot rate by currency pair, e.g. 'EURUSD' (quote per base)."""

    pair: str

    def __post_init__(self) -> None:
        if len(self.pair) != 6 or not self.pair.isalpha():
            raise ValueError(f"FX pair must be six letters like 'EURUSD', got '{self.pair}'")
        object.__setattr__(self, "pair", self.pair.upper())

    @property
    def base(self) -> str:
        return self.pair[:3]

    @property
    def quote(self) -> str:
        return self.pair[3:]

    def inverse(self) -> FxRateKey:
        return FxRateKey(self.quote + self.base)

    def __str__(self) -> str:
        return f"FxRateKey:{self.pair}"


@dataclass(frozen=True)
class QuoteKey(MarketDataKey[float]):
    """Identifies a single market quote (a rate, price or volatility)."""

    identifier: str

    def __str__(self) -> str:
        return f"QuoteKey:{self.identifier}"


@dataclass(frozen=True)
class ObservableKey:
    """
    Identifies a time series of observations, e.g. the fixings of an index.

    Time series are shared by all scenarios, so this is deliberately not a
    MarketDataKey: nothing looked up with it is ever boxed.
    """

    name: str

    def __str__(self) -> str:
        return f"ObservableKey:{self.name}"


@dataclass(frozen=True)
class ScenarioMarketDataKey(Generic[T, U]):
    """
    Key for a composite value U holding the data of every scenario.

    Wraps the key of the single-scenario value T together with the type tag
    of U and a factory that builds a U from a box of T values. The factory
    takes the scenario count so a single value can be broadcast. Keys are
    equal when they name the same market data and type; the factory is not
    compared.
    """

    market_data_key: MarketDataKey[T]
    scenario_value_type: type
    factory: Callable[[MarketDataBox[T], int], U] = field(compare=False)

    @classmethod
    def of(
        cls,
        market_data_key: MarketDataKey[T],
        scenario_value_type: type,
        factory: Callable[[MarketDataBox[T], int], U] | None = None,
    ) -> ScenarioMarketDataKey[T, U]:
        """Create a key; the factory defaults to `scenario_value_type.from_box`."""
        if factory is None:
            factory = scenario_value_type.from_box
        return cls(market_data_key, scenario_value_type, factory)

    def matches(self, scenario_value: object) -> bool:
        """True if scenario_value already has the requested representation."""
        return type(scenario_value) is self.scenario_value_type

    def create_scenario_value(self, box: MarketDataBox[T], scenario_count: int) -> U:
        return self.factory(box, scenario_count)
