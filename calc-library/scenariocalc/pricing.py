"""
Pricing entrypoints.

Most users of the library should only need `price(trade, market)` for one
scenario and `price_scenarios(trade, market_data, lookup)` for many. Both
delegate to a default `PricingEngine` instance.
"""

from typing import TypeAlias

from scenariocalc.engine import create_default_engine
from scenariocalc.products.bond import ZeroCouponBond
from scenariocalc.products.fx import FXForward
from scenariocalc.products.swap import FixedFloatSwap
from scenariocalc.rates import RatesMarketData, RatesMarketDataLookup
from scenariocalc.results import ScenarioResult
from scenariocalc.scenario_market import ScenarioMarketData

Trade: TypeAlias = ZeroCouponBond | FixedFloatSwap | FXForward

_default_engine = create_default_engine()


def price(trade: Trade, market: RatesMarketData) -> float:
    """Return present value of trade in one scenario."""
    return _default_engine.npv(trade, market)


def price_scenarios(
    trade: Trade,
    market_data: ScenarioMarketData,
    lookup: RatesMarketDataLookup,
) -> ScenarioResult:
    """Return present value of trade in every scenario of market_data."""
    return _default_engine.npv_scenarios(trade, market_data, lookup)
