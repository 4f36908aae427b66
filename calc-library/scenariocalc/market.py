"""
Single-scenario market data.

Pricing functions read market data through the `MarketData` protocol and
never see scenarios. Two implementations live here:

- `ImmutableMarketData`: a plain snapshot (valuation date, values by key,
  time series by observable). Immutable-style: `with_value` /
  `with_time_series` return new instances.
- `SingleScenarioMarketData`: a projection of one scenario out of a
  `ScenarioMarketData`. It only holds the wrapped instance and the index,
  so it is cheap to build per scenario per calculation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Mapping, TypeVar

import pandas as pd

from scenariocalc.box import check_scenario_index
from scenariocalc.errors import MarketDataNotFoundError
from scenariocalc.keys import MarketDataKey, ObservableKey
from scenariocalc.timeseries import as_time_series, empty_time_series

if TYPE_CHECKING:
    from scenariocalc.scenario_market import ScenarioMarketData

T = TypeVar("T")


class ImmutableMarketData:
    """
    Market data snapshot for one scenario.
    Immutable-style: with_value / with_time_series return new instances.
    """

    def __init__(
        self,
        valuation_date: date,
        values: Mapping[MarketDataKey[Any], Any] | None = None,
        time_series: Mapping[ObservableKey, pd.Series] | None = None,
    ) -> None:
        # Copies: callers can keep their own dicts without risking
        # accidental mutation of the snapshot (and vice-versa).
        self._valuation_date = valuation_date
        self._values: dict[MarketDataKey[Any], Any] = dict(values) if values else {}
        self._time_series: dict[ObservableKey, pd.Series] = {
            key: as_time_series(series) for key, series in (time_series or {}).items()
        }

    @property
    def valuation_date(self) -> date:
        return self._valuation_date

    @property
    def values(self) -> Mapping[MarketDataKey[Any], Any]:
        return dict(self._values)

    @property
    def time_series(self) -> Mapping[ObservableKey, pd.Series]:
        return dict(self._time_series)

    def contains_value(self, key: MarketDataKey[Any]) -> bool:
        return key in self._values

    def get_value(self, key: MarketDataKey[T]) -> T:
        """Return value by key. Raises MarketDataNotFoundError if not found."""
        try:
            return self._values[key]
        except KeyError:
            raise MarketDataNotFoundError(key) from None

    def contains_time_series(self, key: ObservableKey) -> bool:
        return key in self._time_series

    def get_time_series(self, key: ObservableKey) -> pd.Series:
        """Return time series by key, or an empty series if there is none."""
        series = self._time_series.get(key)
        if series is None:
            return empty_time_series(key.name)
        return series

    def with_value(self, key: MarketDataKey[T], value: T) -> "ImmutableMarketData":
        """Return a new snapshot with the given value updated/added."""
        new_values = dict(self._values)
        new_values[key] = value
        return ImmutableMarketData(self._valuation_date, new_values, self._time_series)

    def with_time_series(self, key: ObservableKey, series: pd.Series) -> "ImmutableMarketData":
        """Return a new snapshot with the given time series updated/added."""
        new_series = dict(self._time_series)
        new_series[key] = series
        return ImmutableMarketData(self._valuation_date, self._values, new_series)


@dataclass(frozen=True)
class SingleScenarioMarketData:
    """
    One scenario of a ScenarioMarketData, seen through the MarketData protocol.

    Borrows the wrapped instance: nothing is copied or cached here, and every
    failure is the failure of the underlying call.
    """

    market_data: ScenarioMarketData
    scenario_index: int

    def __post_init__(self) -> None:
        check_scenario_index(self.scenario_index, self.market_data.scenario_count)

    @property
    def valuation_date(self) -> date:
        return self.market_data.valuation_date.get_value(self.scenario_index)

    def contains_value(self, key: MarketDataKey[Any]) -> bool:
        return self.market_data.contains_value(key)

    def get_value(self, key: MarketDataKey[T]) -> T:
        return self.market_data.get_value(key).get_value(self.scenario_index)

    def contains_time_series(self, key: ObservableKey) -> bool:
        return self.market_data.contains_time_series(key)

    def get_time_series(self, key: ObservableKey) -> pd.Series:
        return self.market_data.get_time_series(key)
