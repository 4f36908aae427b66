"""FX forward product (instrument data only; pricing via PricingEngine)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FXForward:
    """
    FX forward: notional_base in base currency, strike (quote per base), settle at maturity.
    Valuation uses covered interest rate parity (CIP): F = spot * DF_base(T) / DF_quote(T),
    PV in quote currency = notional_base * DF_quote(T) * (F - strike).
    pair is e.g. 'EURUSD' (base EUR, quote USD); each currency is discounted on
    its own curve from the curve group.
    """

    pair: str
    maturity: float
    notional_base: float
    strike: float

    @property
    def base_currency(self) -> str:
        return self.pair[:3]

    @property
    def quote_currency(self) -> str:
        return self.pair[3:]
