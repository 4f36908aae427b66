"""GraphQL schema: curve group and scenario pricing queries."""

import strawberry

from app.services import (
    merge_curve_group_entries,
    price_fx_forward_scenarios,
    price_swap_scenarios,
    price_zero_coupon_bond_scenarios,
)
from app.types import (
    CurveGroupEntry,
    CurveGroupEntryInput,
    FXForwardInput,
    FixedFloatSwapInput,
    ScenarioMarketInput,
    ScenarioPricingResult,
    ZeroCouponBondInput,
)
from scenariocalc import __version__


@strawberry.type
class Query:
    @strawberry.field
    def version(self) -> str:
        return __version__

    @strawberry.field
    def merge_curve_group_entries(
        self, entries: list[CurveGroupEntryInput]
    ) -> list[CurveGroupEntry]:
        """Merge curve group entries that name the same curve."""
        return merge_curve_group_entries(entries)

    @strawberry.field
    def price_zero_coupon_bond_scenarios(
        self,
        bond: ZeroCouponBondInput,
        market: ScenarioMarketInput,
        curve_group: list[CurveGroupEntryInput],
    ) -> ScenarioPricingResult:
        """Price a zero-coupon bond in every scenario of the market."""
        return price_zero_coupon_bond_scenarios(
            bond=bond, market=market, curve_group=curve_group
        )

    @strawberry.field
    def price_swap_scenarios(
        self,
        swap: FixedFloatSwapInput,
        market: ScenarioMarketInput,
        curve_group: list[CurveGroupEntryInput],
    ) -> ScenarioPricingResult:
        """Price a fixed-float interest rate swap in every scenario of the market."""
        return price_swap_scenarios(swap=swap, market=market, curve_group=curve_group)

    @strawberry.field
    def price_fx_forward_scenarios(
        self,
        forward: FXForwardInput,
        market: ScenarioMarketInput,
        curve_group: list[CurveGroupEntryInput],
    ) -> ScenarioPricingResult:
        """Price an FX forward in every scenario of the market."""
        return price_fx_forward_scenarios(
            forward=forward, market=market, curve_group=curve_group
        )


schema = strawberry.Schema(query=Query)
