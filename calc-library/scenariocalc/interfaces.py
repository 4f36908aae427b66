"""
Protocol-based interfaces for the extension points of the library.

Using typing.Protocol enables structural subtyping: any class that implements
the required methods satisfies the protocol without explicit inheritance.
Curves, packed scenario representations, market data snapshots and pricers
can be supplied by callers without touching the core.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    import pandas as pd

    from scenariocalc.keys import MarketDataKey, ObservableKey
    from scenariocalc.rates import RatesMarketData

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Curve(Protocol):
    """Protocol for discount and forward curve implementations.

    Any class implementing df() can be stored in market data as a curve,
    so ZeroRateCurve is one option among others.
    """

    name: str

    def df(self, t: float) -> float:
        """Return discount factor to time t (year-fraction)."""
        ...


@runtime_checkable
class ScenarioMarketDataValue(Protocol[T_co]):
    """Protocol for an object holding one value per scenario.

    The representation is free: a tuple of objects, a packed numpy array,
    or anything else that can hand out the value of one scenario.
    """

    @property
    def scenario_count(self) -> int:
        """Number of scenarios represented."""
        ...

    def get_value(self, scenario_index: int) -> T_co:
        """Return the value for one scenario."""
        ...


class MarketData(Protocol):
    """Protocol for market data of a single scenario.

    This is the view pricing functions are written against. It knows nothing
    about scenarios.
    """

    @property
    def valuation_date(self) -> date:
        ...

    def contains_value(self, key: MarketDataKey[Any]) -> bool:
        ...

    def get_value(self, key: MarketDataKey[T]) -> T:
        """Return the value for key. Raises MarketDataNotFoundError if absent."""
        ...

    def contains_time_series(self, key: ObservableKey) -> bool:
        ...

    def get_time_series(self, key: ObservableKey) -> pd.Series:
        """Return the time series for key, empty if absent."""
        ...


@runtime_checkable
class Instrument(Protocol):
    """Marker protocol for all priceable instruments.

    Instruments are data-only; pricing logic lives in Pricer implementations.
    """

    pass


class Pricer(Protocol):
    """Protocol for instrument pricing implementations.

    Each pricer handles one or more instrument types and can be registered
    with the PricingEngine for dispatch.
    """

    def can_price(self, instrument: Instrument) -> bool:
        """Return True if this pricer handles the given instrument type."""
        ...

    def npv(self, instrument: Instrument, market: RatesMarketData) -> float:
        """Compute present value in the appropriate currency."""
        ...
