"""Pricer for zero-coupon bonds."""

from __future__ import annotations

from scenariocalc.interfaces import Instrument
from scenariocalc.pricers.base import BasePricer
from scenariocalc.products.bond import ZeroCouponBond
from scenariocalc.rates import RatesMarketData


class BondPricer(BasePricer):
    """Pricer for zero-coupon bonds."""

    def can_price(self, instrument: Instrument) -> bool:
        return isinstance(instrument, ZeroCouponBond)

    def npv(self, instrument: Instrument, market: RatesMarketData) -> float:
        """Zero-coupon bond: PV = notional * DF(maturity)."""
        assert isinstance(instrument, ZeroCouponBond)
        bond = instrument
        c = market.discount_curve(bond.currency)
        return bond.notional * c.df(bond.maturity)
