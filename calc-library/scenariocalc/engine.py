"""
Pricing engine: computes NPV for instruments given market data.

Design intent:
- Instruments/products are **data only** (no market access, no pricing methods).
- Pricers see one scenario at a time through `RatesMarketData`; the engine
  projects each scenario of a `ScenarioMarketData` and collects the results.
- A registry of pricers is used for dispatch, so new instruments need no
  change to engine code.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from scenariocalc.config import get_settings
from scenariocalc.errors import MarketDataError
from scenariocalc.interfaces import Instrument
from scenariocalc.pricers import BasePricer
from scenariocalc.rates import RatesMarketData, RatesMarketDataLookup
from scenariocalc.results import CalculationFailure, ScenarioResult
from scenariocalc.scenario_market import ScenarioMarketData

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Registry-based pricing engine.

    Pricers are registered at initialization and dispatched based on
    can_price() checks. First matching pricer wins.
    """

    def __init__(self) -> None:
        self._pricers: list[BasePricer] = []

    def register(self, pricer: BasePricer) -> None:
        """Register a pricer for dispatch.

        Order matters: first matching pricer wins.
        """
        self._pricers.append(pricer)

    def _pricer_for(self, instrument: Instrument) -> BasePricer:
        for pricer in self._pricers:
            if pricer.can_price(instrument):
                return pricer
        raise ValueError(
            f"No pricer registered for {type(instrument).__name__}. "
            "Register a pricer with engine.register(pricer)."
        )

    def npv(self, instrument: Instrument, market: RatesMarketData) -> float:
        """Dispatch to appropriate pricer."""
        return self._pricer_for(instrument).npv(instrument, market)

    def npv_scenarios(
        self,
        instrument: Instrument,
        market_data: ScenarioMarketData,
        lookup: RatesMarketDataLookup,
        max_workers: Optional[int] = None,
    ) -> ScenarioResult:
        """
        Price instrument in every scenario of market_data.

        Missing or malformed market data in one scenario is recorded as a
        CalculationFailure for that scenario; any other error propagates.
        Values are ordered by scenario index.
        """
        pricer = self._pricer_for(instrument)
        if max_workers is None:
            max_workers = get_settings().max_workers
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        def run(scenario_index: int) -> float | CalculationFailure:
            market = lookup.scenario_view(market_data, scenario_index)
            try:
                return pricer.npv(instrument, market)
            except MarketDataError as e:
                logger.warning(
                    "Scenario %d of %s failed: %s",
                    scenario_index,
                    type(instrument).__name__,
                    e,
                )
                return CalculationFailure.of(scenario_index, e)

        indices = range(market_data.scenario_count)
        if max_workers == 1 or market_data.scenario_count == 1:
            outcomes = [run(i) for i in indices]
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                outcomes = list(executor.map(run, indices))

        values: list[Optional[float]] = []
        failures: list[CalculationFailure] = []
        for outcome in outcomes:
            if isinstance(outcome, CalculationFailure):
                values.append(None)
                failures.append(outcome)
            else:
                values.append(outcome)
        logger.debug(
            "Priced %s in %d scenario(s), %d failure(s)",
            type(instrument).__name__,
            len(values),
            len(failures),
        )
        return ScenarioResult(tuple(values), tuple(failures))


def create_default_engine() -> PricingEngine:
    """Factory for default engine with all built-in pricers registered."""
    from scenariocalc.pricers import BondPricer, FXPricer, SwapPricer

    engine = PricingEngine()
    engine.register(BondPricer())
    engine.register(SwapPricer())
    engine.register(FXPricer())
    return engine
