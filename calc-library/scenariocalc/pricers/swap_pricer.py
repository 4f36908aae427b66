"""Pricer for fixed-float interest rate swaps (discount and forward curves)."""

from __future__ import annotations

from scenariocalc.errors import MarketDataNotFoundError
from scenariocalc.interfaces import Curve, Instrument
from scenariocalc.keys import ObservableKey
from scenariocalc.pricers.base import BasePricer
from scenariocalc.products.swap import FixedFloatSwap
from scenariocalc.rates import RatesMarketData
from scenariocalc.timeseries import latest_on_or_before


class SwapPricer(BasePricer):
    """Pricer for fixed-float interest rate swaps."""

    def can_price(self, instrument: Instrument) -> bool:
        return isinstance(instrument, FixedFloatSwap)

    def npv(self, instrument: Instrument, market: RatesMarketData) -> float:
        """
        Fixed-float swap.
        Convention: receive float, pay fixed. PV = PV(float leg) - PV(fixed leg).
        """
        assert isinstance(instrument, FixedFloatSwap)
        swap = instrument
        discount = market.discount_curve(swap.currency)
        forward = market.forward_curve(swap.index)
        first_rate = self._first_fixing(swap, market) if swap.t0 < 0 else None
        pv_fixed = self._pv_fixed_leg(swap, discount)
        pv_float = self._pv_float_leg(swap, discount, forward, first_rate)
        return pv_float - pv_fixed

    @staticmethod
    def _first_fixing(swap: FixedFloatSwap, market: RatesMarketData) -> float:
        """Rate of a period that started before the valuation date: the latest fixing."""
        fixing = latest_on_or_before(market.fixings(swap.index), market.valuation_date)
        if fixing is None:
            raise MarketDataNotFoundError(
                ObservableKey(swap.index),
                f"No fixing of {swap.index} on or before {market.valuation_date}",
            )
        return fixing

    @staticmethod
    def _pv_fixed_leg(swap: FixedFloatSwap, discount: Curve) -> float:
        """
        Fixed leg PV.
        We infer accrual fractions from successive pay times.
        CF_i = notional * fixed_rate * accrual_i, PV = sum_i CF_i * DF(t_i).
        """
        pv = 0.0
        prev = swap.t0
        for t in swap.pay_times:
            accrual = t - prev
            pv += swap.notional * swap.fixed_rate * accrual * discount.df(t)
            prev = t
        return pv

    @staticmethod
    def _pv_float_leg(
        swap: FixedFloatSwap,
        discount: Curve,
        forward: Curve,
        first_rate: float | None,
    ) -> float:
        """
        Float leg PV.
        Forward rate from the forward curve: f = (P(prev)/P(t) - 1) / accrual,
        cashflows discounted on the discount curve. first_rate, when given,
        replaces the projected rate of the first period only.
        """
        pv = 0.0
        prev = swap.t0
        for i, t in enumerate(swap.pay_times):
            accrual = t - prev
            if i == 0 and first_rate is not None:
                fwd = first_rate
            else:
                fwd = (forward.df(prev) / forward.df(t) - 1.0) / accrual
            pv += swap.notional * fwd * accrual * discount.df(t)
            prev = t
        return pv
