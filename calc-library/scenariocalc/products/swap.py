"""Fixed-float interest rate swap (instrument data only; pricing via PricingEngine)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FixedFloatSwap:
    """
    Fixed vs float swap, receive float, pay fixed.
    PV = PV_float_leg - PV_fixed_leg (computed by PricingEngine).

    Cashflows are discounted on the curve of `currency`; floating rates are
    projected from the curve forwarding `index`. pay_times are year-fractions
    and accruals are differences from t0. A negative t0 means the first period
    has already started and its rate is the latest fixing of `index`.
    """

    currency: str
    index: str
    notional: float
    fixed_rate: float
    pay_times: tuple[float, ...]
    t0: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "pay_times", tuple(float(t) for t in self.pay_times))
        if not self.pay_times:
            raise ValueError("pay_times must not be empty")
        if self.pay_times[0] <= 0:
            raise ValueError("pay_times must be > 0")
        if self.t0 >= self.pay_times[0]:
            raise ValueError("t0 must be before the first pay time")
        for i in range(1, len(self.pay_times)):
            if self.pay_times[i] <= self.pay_times[i - 1]:
                raise ValueError("pay_times must be strictly increasing")
