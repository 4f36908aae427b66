"""Scenario calculation library: boxed market data, scenario views, curve groups, pricing."""

from scenariocalc.box import BoxKind, DoubleScenarioArray, MarketDataBox, ScenarioArray
from scenariocalc.config import Settings, get_settings, reset_settings
from scenariocalc.curve_group import CurveGroup, CurveGroupEntry, merge_entries
from scenariocalc.curves import ZeroRateCurve
from scenariocalc.engine import PricingEngine, create_default_engine
from scenariocalc.errors import (
    CurveGroupError,
    CurveNameMismatchError,
    MarketDataError,
    MarketDataNotFoundError,
    ScenarioIndexError,
    SingleValueBoxError,
)
from scenariocalc.interfaces import Curve, Instrument, MarketData, Pricer, ScenarioMarketDataValue
from scenariocalc.keys import (
    CurveKey,
    FxRateKey,
    MarketDataKey,
    ObservableKey,
    QuoteKey,
    ScenarioMarketDataKey,
)
from scenariocalc.market import ImmutableMarketData, SingleScenarioMarketData
from scenariocalc.pricers import BasePricer
from scenariocalc.pricing import Trade, price, price_scenarios
from scenariocalc.products import FixedFloatSwap, FXForward, ZeroCouponBond
from scenariocalc.rates import RatesMarketData, RatesMarketDataLookup
from scenariocalc.results import CalculationFailure, FailureReason, ScenarioResult
from scenariocalc.scenario_market import ScenarioMarketData
from scenariocalc.timeseries import time_series

__version__ = "0.1.0"

__all__ = [
    "BoxKind",
    "DoubleScenarioArray",
    "MarketDataBox",
    "ScenarioArray",
    "ScenarioMarketDataValue",
    "MarketDataKey",
    "CurveKey",
    "FxRateKey",
    "QuoteKey",
    "ObservableKey",
    "ScenarioMarketDataKey",
    "MarketData",
    "ImmutableMarketData",
    "ScenarioMarketData",
    "SingleScenarioMarketData",
    "time_series",
    "Curve",
    "ZeroRateCurve",
    "CurveGroupEntry",
    "CurveGroup",
    "merge_entries",
    "RatesMarketData",
    "RatesMarketDataLookup",
    "Instrument",
    "Pricer",
    "BasePricer",
    "PricingEngine",
    "create_default_engine",
    "price",
    "price_scenarios",
    "Trade",
    "ZeroCouponBond",
    "FixedFloatSwap",
    "FXForward",
    "ScenarioResult",
    "CalculationFailure",
    "FailureReason",
    "Settings",
    "get_settings",
    "reset_settings",
    "MarketDataError",
    "MarketDataNotFoundError",
    "ScenarioIndexError",
    "SingleValueBoxError",
    "CurveGroupError",
    "CurveNameMismatchError",
]
