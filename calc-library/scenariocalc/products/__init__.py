"""Products: zero-coupon bond, fixed-float swap, FX forward."""

from scenariocalc.products.bond import ZeroCouponBond
from scenariocalc.products.fx import FXForward
from scenariocalc.products.swap import FixedFloatSwap

__all__ = ["ZeroCouponBond", "FixedFloatSwap", "FXForward"]
