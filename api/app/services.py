"""Service layer: convert GraphQL inputs to scenariocalc objects and run scenario pricing."""

from __future__ import annotations

import logging
from typing import Any

from scenariocalc.box import MarketDataBox
from scenariocalc.curve_group import CurveGroup
from scenariocalc.curve_group import CurveGroupEntry as LibCurveGroupEntry
from scenariocalc.curve_group import merge_entries
from scenariocalc.curves import ZeroRateCurve
from scenariocalc.keys import CurveKey, FxRateKey, ObservableKey
from scenariocalc.pricing import price_scenarios
from scenariocalc.products.bond import ZeroCouponBond
from scenariocalc.products.fx import FXForward
from scenariocalc.products.swap import FixedFloatSwap
from scenariocalc.rates import RatesMarketDataLookup
from scenariocalc.results import ScenarioResult
from scenariocalc.scenario_market import ScenarioMarketData
from scenariocalc.timeseries import time_series

from app.types import (
    CurveGroupEntry,
    CurveGroupEntryInput,
    CurveInput,
    FXForwardInput,
    FixedFloatSwapInput,
    ScenarioFailure,
    ScenarioMarketInput,
    ScenarioPricingResult,
    ZeroCouponBondInput,
)

logger = logging.getLogger(__name__)


def _box(rows: list[Any]) -> MarketDataBox[Any]:
    """One row is shared by every scenario; several rows are one per scenario."""
    if not rows:
        raise ValueError("at least one scenario row is required")
    if len(rows) == 1:
        return MarketDataBox.of_single_value(rows[0])
    return MarketDataBox.of_scenario_values(rows)


def _curves_from_input(c: CurveInput) -> list[ZeroRateCurve]:
    """Build one ZeroRateCurve per scenario row of a CurveInput."""
    return [
        ZeroRateCurve(name=c.name, pillars=list(c.pillars), zero_rates_cc=list(row))
        for row in c.zero_rates_cc
    ]


def _entry_from_input(e: CurveGroupEntryInput) -> LibCurveGroupEntry:
    return LibCurveGroupEntry(
        curve_name=e.curve_name,
        discount_currencies=e.discount_currencies or (),
        indices=e.indices or (),
    )


def _entry_to_output(e: LibCurveGroupEntry) -> CurveGroupEntry:
    return CurveGroupEntry(
        curve_name=e.curve_name,
        discount_currencies=sorted(e.discount_currencies),
        indices=sorted(e.indices),
    )


def merge_curve_group_entries(entries: list[CurveGroupEntryInput]) -> list[CurveGroupEntry]:
    """Merge entries naming the same curve; curves keep their first-seen order."""
    merged = merge_entries(_entry_from_input(e) for e in entries)
    return [_entry_to_output(e) for e in merged]


def curve_group_from_input(entries: list[CurveGroupEntryInput]) -> CurveGroup:
    if not entries:
        raise ValueError("curve_group must not be empty")
    return CurveGroup("request", tuple(_entry_from_input(e) for e in entries))


def market_data_from_input(m: ScenarioMarketInput) -> ScenarioMarketData:
    """Build ScenarioMarketData from GraphQL ScenarioMarketInput."""
    if not m.curves:
        raise ValueError("market.curves must not be empty")
    values: dict[Any, MarketDataBox[Any]] = {}
    for c in m.curves:
        key = CurveKey(c.name)
        if key in values:
            raise ValueError(f"market.curves: curve '{c.name}' is defined twice")
        values[key] = _box(_curves_from_input(c))
    for fx in m.fx_spots or []:
        values[FxRateKey(fx.pair)] = _box(list(fx.spots))
    series = {}
    for f in m.fixings or []:
        if len(f.dates) != len(f.values):
            raise ValueError(f"fixings for {f.index}: dates and values must have the same length")
        series[ObservableKey(f.index)] = time_series(zip(f.dates, f.values), name=f.index)
    return ScenarioMarketData(m.scenario_count, m.valuation_date, values, series)


def _validate_discounting(group: CurveGroup, currency: str, context: str) -> None:
    if group.discount_curve_name(currency) is None:
        raise ValueError(
            f"{context}: no curve in the curve group discounts {currency}. "
            f"Discounted currencies: {sorted(group.discount_currencies)}"
        )


def _result_to_output(result: ScenarioResult) -> ScenarioPricingResult:
    return ScenarioPricingResult(
        scenario_count=result.scenario_count,
        npvs=list(result.values),
        failures=[
            ScenarioFailure(
                scenario_index=f.scenario_index,
                reason=f.reason.value,
                message=f.message,
            )
            for f in result.failures
        ],
    )


def _price(
    instrument: Any,
    market: ScenarioMarketInput,
    group: CurveGroup,
) -> ScenarioPricingResult:
    md = market_data_from_input(market)
    logger.info(
        "Pricing %s in %d scenario(s) with curves %s",
        type(instrument).__name__,
        md.scenario_count,
        list(group.curve_names),
    )
    result = price_scenarios(instrument, md, RatesMarketDataLookup.of_group(group))
    return _result_to_output(result)


def price_zero_coupon_bond_scenarios(
    bond: ZeroCouponBondInput,
    market: ScenarioMarketInput,
    curve_group: list[CurveGroupEntryInput],
) -> ScenarioPricingResult:
    """Price a zero-coupon bond in every scenario."""
    if bond.maturity < 0:
        raise ValueError("bond.maturity must be >= 0")
    group = curve_group_from_input(curve_group)
    _validate_discounting(group, bond.currency, "ZeroCouponBond")
    instrument = ZeroCouponBond(
        currency=bond.currency,
        maturity=bond.maturity,
        notional=bond.notional,
    )
    return _price(instrument, market, group)


def price_swap_scenarios(
    swap: FixedFloatSwapInput,
    market: ScenarioMarketInput,
    curve_group: list[CurveGroupEntryInput],
) -> ScenarioPricingResult:
    """Price a fixed-float swap in every scenario."""
    if not swap.pay_times:
        raise ValueError("swap.pay_times must not be empty")
    group = curve_group_from_input(curve_group)
    _validate_discounting(group, swap.currency, "FixedFloatSwap")
    if group.forward_curve_name(swap.index) is None:
        raise ValueError(
            f"FixedFloatSwap: no curve in the curve group forwards {swap.index}. "
            f"Forwarded indices: {sorted(group.indices)}"
        )
    instrument = FixedFloatSwap(
        currency=swap.currency,
        index=swap.index,
        notional=swap.notional,
        fixed_rate=swap.fixed_rate,
        pay_times=tuple(swap.pay_times),
        t0=swap.t0,
    )
    return _price(instrument, market, group)


def price_fx_forward_scenarios(
    forward: FXForwardInput,
    market: ScenarioMarketInput,
    curve_group: list[CurveGroupEntryInput],
) -> ScenarioPricingResult:
    """Price an FX forward (CIP) in every scenario."""
    if forward.maturity < 0:
        raise ValueError("forward.maturity must be >= 0")
    group = curve_group_from_input(curve_group)
    instrument = FXForward(
        pair=FxRateKey(forward.pair).pair,
        maturity=forward.maturity,
        notional_base=forward.notional_base,
        strike=forward.strike,
    )
    _validate_discounting(group, instrument.base_currency, "FXForward base currency")
    _validate_discounting(group, instrument.quote_currency, "FXForward quote currency")
    return _price(instrument, market, group)
