"""
Rates view of market data.

`RatesMarketDataLookup` records which curve to use for discounting each
currency and forwarding each index, usually derived from a finalized
`CurveGroup`. `RatesMarketData` applies a lookup to one scenario of market
data, which is what pricers consume.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping

import pandas as pd

from scenariocalc.curve_group import CurveGroup
from scenariocalc.errors import MarketDataNotFoundError
from scenariocalc.interfaces import Curve, MarketData
from scenariocalc.keys import CurveKey, FxRateKey, ObservableKey
from scenariocalc.market import SingleScenarioMarketData
from scenariocalc.scenario_market import ScenarioMarketData


@dataclass(frozen=True)
class RatesMarketDataLookup:
    """Currency -> discount curve key, index -> forward curve key."""

    discount_curves: Mapping[str, CurveKey] = field(default_factory=dict)
    forward_curves: Mapping[str, CurveKey] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "discount_curves", dict(self.discount_curves))
        object.__setattr__(self, "forward_curves", dict(self.forward_curves))

    @classmethod
    def of_group(cls, group: CurveGroup) -> RatesMarketDataLookup:
        discount_curves: dict[str, CurveKey] = {}
        forward_curves: dict[str, CurveKey] = {}
        for entry in group.entries:
            for currency in entry.discount_currencies:
                discount_curves[currency] = entry.curve_key
            for index in entry.indices:
                forward_curves[index] = entry.curve_key
        return cls(discount_curves, forward_curves)

    def discount_key(self, currency: str) -> CurveKey:
        try:
            return self.discount_curves[currency]
        except KeyError:
            raise MarketDataNotFoundError(
                currency, f"No discount curve configured for currency {currency}"
            ) from None

    def forward_key(self, index: str) -> CurveKey:
        try:
            return self.forward_curves[index]
        except KeyError:
            raise MarketDataNotFoundError(
                index, f"No forward curve configured for index {index}"
            ) from None

    def market_view(self, market_data: MarketData) -> RatesMarketData:
        return RatesMarketData(self, market_data)

    def scenario_view(
        self, market_data: ScenarioMarketData, scenario_index: int
    ) -> RatesMarketData:
        """Rates view of one scenario of multi-scenario market data."""
        return RatesMarketData(self, SingleScenarioMarketData(market_data, scenario_index))


@dataclass(frozen=True)
class RatesMarketData:
    """Market data of one scenario, addressed by currency and index."""

    lookup: RatesMarketDataLookup
    market_data: MarketData

    @property
    def valuation_date(self) -> date:
        return self.market_data.valuation_date

    def discount_curve(self, currency: str) -> Curve:
        return self.market_data.get_value(self.lookup.discount_key(currency))

    def forward_curve(self, index: str) -> Curve:
        return self.market_data.get_value(self.lookup.forward_key(index))

    def fx_rate(self, pair: str) -> float:
        """Spot rate for pair (quote per base); falls back to 1 / inverse pair."""
        key = FxRateKey(pair)
        if key.base == key.quote:
            return 1.0
        if self.market_data.contains_value(key):
            return float(self.market_data.get_value(key))
        inverse = key.inverse()
        if self.market_data.contains_value(inverse):
            return 1.0 / float(self.market_data.get_value(inverse))
        raise MarketDataNotFoundError(key, f"No FX rate found for {key.pair} or {inverse.pair}")

    def fixings(self, index: str) -> pd.Series:
        """Historical fixings of index; empty if none are stored."""
        return self.market_data.get_time_series(ObservableKey(index))

    def with_market_data(self, market_data: MarketData) -> RatesMarketData:
        return RatesMarketData(self.lookup, market_data)
