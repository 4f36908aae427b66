"""Pricer implementations for the registry-based pricing engine."""

from scenariocalc.pricers.base import BasePricer
from scenariocalc.pricers.bond_pricer import BondPricer
from scenariocalc.pricers.fx_pricer import FXPricer
from scenariocalc.pricers.swap_pricer import SwapPricer

__all__ = [
    "BasePricer",
    "BondPricer",
    "FXPricer",
    "SwapPricer",
]
