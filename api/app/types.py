"""GraphQL types for the scenario pricing API."""

from __future__ import annotations

from datetime import date
from typing import Optional

import strawberry


# --- Input types (request payloads) ---


@strawberry.input
class CurveInput:
    """
    Curve definition: name, pillars (year fractions) and zero rates (continuously compounded).

    zero_rates_cc holds one row of rates per scenario. A single row is shared
    by every scenario.
    """

    name: str
    pillars: list[float]
    zero_rates_cc: list[list[float]]


@strawberry.input
class FxSpotInput:
    """FX spot rate for a pair (e.g. EURUSD); one spot per scenario, or one shared spot."""

    pair: str
    spots: list[float]


@strawberry.input
class FixingInput:
    """Historical fixings of an index; dates and values are paired by position."""

    index: str
    dates: list[date]
    values: list[float]


@strawberry.input
class ScenarioMarketInput:
    """Market data for scenario_count scenarios sharing one valuation date."""

    valuation_date: date
    scenario_count: int
    curves: list[CurveInput]
    fx_spots: Optional[list[FxSpotInput]] = None
    fixings: Optional[list[FixingInput]] = None


@strawberry.input
class CurveGroupEntryInput:
    """Roles of one curve: currencies it discounts and indices it forwards."""

    curve_name: str
    discount_currencies: Optional[list[str]] = None
    indices: Optional[list[str]] = None


@strawberry.input
class ZeroCouponBondInput:
    """Zero-coupon bond: single cashflow at maturity."""

    currency: str
    maturity: float
    notional: float


@strawberry.input
class FixedFloatSwapInput:
    """Fixed-float interest rate swap (receive float, pay fixed). Negative t0 = seasoned."""

    currency: str
    index: str
    notional: float
    fixed_rate: float
    pay_times: list[float]
    t0: float = 0.0


@strawberry.input
class FXForwardInput:
    """FX forward: notional in base currency, strike (quote per base), settle at maturity. Uses CIP."""

    pair: str
    maturity: float
    notional_base: float
    strike: float


# --- Output types (response payloads) ---


@strawberry.type
class CurveGroupEntry:
    """A merged curve group entry."""

    curve_name: str
    discount_currencies: list[str]
    indices: list[str]


@strawberry.type
class ScenarioFailure:
    """A scenario that produced no NPV, and why."""

    scenario_index: int
    reason: str
    message: str


@strawberry.type
class ScenarioPricingResult:
    """NPV per scenario (null where the scenario failed) and the failures."""

    scenario_count: int
    npvs: list[Optional[float]]
    failures: list[ScenarioFailure]
