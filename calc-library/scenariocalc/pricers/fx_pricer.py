"""Pricer for FX forwards (CIP-based valuation)."""

from __future__ import annotations

from scenariocalc.interfaces import Instrument
from scenariocalc.pricers.base import BasePricer
from scenariocalc.products.fx import FXForward
from scenariocalc.rates import RatesMarketData


class FXPricer(BasePricer):
    """Pricer for FX forwards (covered interest rate parity)."""

    def can_price(self, instrument: Instrument) -> bool:
        return isinstance(instrument, FXForward)

    def npv(self, instrument: Instrument, market: RatesMarketData) -> float:
        """
        FX forward: F = spot * DF_base(T) / DF_quote(T), PV = notional_base * DF_quote(T) * (F - strike).
        """
        assert isinstance(instrument, FXForward)
        fwd = instrument
        spot = market.fx_rate(fwd.pair)
        df_base = market.discount_curve(fwd.base_currency).df(fwd.maturity)
        df_quote = market.discount_curve(fwd.quote_currency).df(fwd.maturity)
        fwd_rate = spot * df_base / df_quote
        return (
            fwd.notional_base
            * df_quote
            * (fwd_rate - fwd.strike)
        )
