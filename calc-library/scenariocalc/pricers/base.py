"""Base pricer abstract class for instrument pricing implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scenariocalc.interfaces import Instrument
from scenariocalc.rates import RatesMarketData


class BasePricer(ABC):
    """Abstract base class for instrument pricers.

    Subclasses implement can_price() and npv() for specific instrument types.
    Pricers only ever see one scenario: the engine hands them a RatesMarketData
    view, whichever scenario it projects.
    """

    @abstractmethod
    def can_price(self, instrument: Instrument) -> bool:
        """Return True if this pricer handles the instrument type."""
        ...

    @abstractmethod
    def npv(self, instrument: Instrument, market: RatesMarketData) -> float:
        """Compute present value."""
        ...
