"""
Market data for a calculation spanning several scenarios.

`ScenarioMarketData` is the N-scenario counterpart of `MarketData`: every
value is a `MarketDataBox` (shared or per scenario), while time series are
stored once and shared by all scenarios. Instances are built once, before any
calculation reads them, and are never mutated afterwards; the only internal
state that changes is the cache of scenario values derived on demand.
"""

from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Any, Iterator, Mapping, TypeVar

import pandas as pd

from scenariocalc.box import MarketDataBox
from scenariocalc.config import get_settings
from scenariocalc.errors import MarketDataNotFoundError
from scenariocalc.keys import MarketDataKey, ObservableKey, ScenarioMarketDataKey
from scenariocalc.market import ImmutableMarketData, SingleScenarioMarketData
from scenariocalc.timeseries import as_time_series, empty_time_series

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class ScenarioMarketData:
    """
    Market data for `scenario_count` scenarios.

    - values: market data key -> box; a scenario box must hold exactly
      `scenario_count` values.
    - time_series: observable key -> series, shared by all scenarios.
    - valuation_date: a date (same for all scenarios) or a box of dates.

    Safe for concurrent reads. Scenario values built by `get_scenario_value`
    are cached per key for the lifetime of the instance.
    """

    def __init__(
        self,
        scenario_count: int,
        valuation_date: date | MarketDataBox[date],
        values: Mapping[MarketDataKey[Any], MarketDataBox[Any]] | None = None,
        time_series: Mapping[ObservableKey, pd.Series] | None = None,
        cache_scenario_values: bool | None = None,
    ) -> None:
        if scenario_count < 1:
            raise ValueError(f"scenario_count must be >= 1, got {scenario_count}")
        self._scenario_count = scenario_count
        if not isinstance(valuation_date, MarketDataBox):
            valuation_date = MarketDataBox.of_single_value(valuation_date)
        self._check_box("valuation_date", valuation_date)
        self._valuation_date = valuation_date

        self._values: dict[MarketDataKey[Any], MarketDataBox[Any]] = {}
        for key, box in (values or {}).items():
            self._check_box(key, box)
            self._values[key] = box
        self._time_series: dict[ObservableKey, pd.Series] = {
            key: as_time_series(series) for key, series in (time_series or {}).items()
        }

        if cache_scenario_values is None:
            cache_scenario_values = get_settings().cache_scenario_values
        self._cache_enabled = cache_scenario_values
        self._scenario_value_cache: dict[ScenarioMarketDataKey[Any, Any], Any] = {}
        self._cache_lock = threading.Lock()

    def _check_box(self, label: object, box: MarketDataBox[Any]) -> None:
        if not isinstance(box, MarketDataBox):
            raise ValueError(
                f"Market data for {label} must be a MarketDataBox, got {type(box).__name__}"
            )
        count = box.scenario_count
        if count is not None and count != self._scenario_count:
            raise ValueError(
                f"Market data for {label} has {count} scenario value(s), "
                f"expected {self._scenario_count}"
            )

    @classmethod
    def from_market_data(
        cls, market_data: ImmutableMarketData, scenario_count: int = 1
    ) -> ScenarioMarketData:
        """Wrap a single-scenario snapshot: every value is shared by all scenarios."""
        return cls(
            scenario_count,
            market_data.valuation_date,
            {key: MarketDataBox.of_single_value(v) for key, v in market_data.values.items()},
            market_data.time_series,
        )

    @property
    def scenario_count(self) -> int:
        return self._scenario_count

    @property
    def valuation_date(self) -> MarketDataBox[date]:
        """Box providing the valuation date of each scenario."""
        return self._valuation_date

    @property
    def value_keys(self) -> frozenset[MarketDataKey[Any]]:
        return frozenset(self._values)

    def contains_value(self, key: MarketDataKey[Any]) -> bool:
        return key in self._values

    def get_value(self, key: MarketDataKey[T]) -> MarketDataBox[T]:
        """Return the box for key. Raises MarketDataNotFoundError if not found."""
        try:
            return self._values[key]
        except KeyError:
            raise MarketDataNotFoundError(key) from None

    def get_scenario_value(self, key: ScenarioMarketDataKey[T, U]) -> U:
        """
        Return the data of every scenario in the representation named by key.

        If the stored box already holds a scenario value of the requested
        type it is returned as is. Otherwise (a single value, or another
        representation such as a plain tuple) the key's factory builds one.
        Built values are cached per key; two threads racing on the first
        access may both build it, and the first stored value wins.
        """
        box = self.get_value(key.market_data_key)
        if not box.is_single_value:
            scenario_value = box.get_scenario_value()
            if key.matches(scenario_value):
                return scenario_value

        cached = self._scenario_value_cache.get(key)
        if cached is not None:
            logger.debug("Scenario value cache hit for %s", key.market_data_key)
            return cached

        logger.debug(
            "Creating %s for %s from %s box",
            key.scenario_value_type.__name__,
            key.market_data_key,
            box.kind.value,
        )
        created = key.create_scenario_value(box, self._scenario_count)
        created_count = getattr(created, "scenario_count", self._scenario_count)
        if created_count != self._scenario_count:
            raise ValueError(
                f"Scenario value for {key.market_data_key} has {created_count} "
                f"scenario(s), expected {self._scenario_count}"
            )
        if not self._cache_enabled:
            return created
        with self._cache_lock:
            return self._scenario_value_cache.setdefault(key, created)

    def contains_time_series(self, key: ObservableKey) -> bool:
        return key in self._time_series

    def get_time_series(self, key: ObservableKey) -> pd.Series:
        """Return the time series for key, or an empty series if there is none."""
        series = self._time_series.get(key)
        if series is None:
            return empty_time_series(key.name)
        return series

    def with_value(self, key: MarketDataKey[T], box: MarketDataBox[T]) -> ScenarioMarketData:
        """Return new market data with the given box updated/added."""
        new_values = dict(self._values)
        new_values[key] = box
        return ScenarioMarketData(
            self._scenario_count,
            self._valuation_date,
            new_values,
            self._time_series,
            self._cache_enabled,
        )

    def with_time_series(self, key: ObservableKey, series: pd.Series) -> ScenarioMarketData:
        """Return new market data with the given time series updated/added."""
        new_series = dict(self._time_series)
        new_series[key] = series
        return ScenarioMarketData(
            self._scenario_count,
            self._valuation_date,
            self._values,
            new_series,
            self._cache_enabled,
        )

    def scenario(self, scenario_index: int) -> SingleScenarioMarketData:
        """Single-scenario view of one scenario."""
        return SingleScenarioMarketData(self, scenario_index)

    def scenarios(self) -> Iterator[SingleScenarioMarketData]:
        """Single-scenario views of every scenario, in order."""
        for scenario_index in range(self._scenario_count):
            yield SingleScenarioMarketData(self, scenario_index)

    def __repr__(self) -> str:
        return (
            f"ScenarioMarketData(scenario_count={self._scenario_count}, "
            f"values={len(self._values)}, time_series={len(self._time_series)})"
        )
