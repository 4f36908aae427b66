"""Zero-coupon bond product (instrument data only; pricing via PricingEngine)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ZeroCouponBond:
    """
    Zero-coupon bond: single cashflow at maturity.
    PV = notional * DF(maturity) on the discount curve of `currency`.
    """

    currency: str
    maturity: float
    notional: float
