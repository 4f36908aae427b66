"""
Interest-rate curve primitive.

Curve math stays minimal and explicit:
- Times are **year fractions** from the valuation date (2.0 = 2Y).
- Rates are **continuously compounded zero rates**.
- Interpolation is **linear in zero rates** between pillar points, flat
  beyond the end pillars.

Curves are frozen: one instance is shared by every worker pricing a scenario.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ZeroRateCurve:
    """
    Zero rate curve (continuously compounded) with linear interpolation.

    - **Pillars** are increasing times (year fractions) where the curve is defined.
    - `zero_rates_cc[i]` is the CC zero rate at `pillars[i]`.

    Implements the Curve protocol structurally (no explicit inheritance), so it
    can serve as a discount curve, a forward curve, or both.
    """

    name: str
    pillars: tuple[float, ...]
    zero_rates_cc: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pillars", tuple(float(p) for p in self.pillars))
        object.__setattr__(self, "zero_rates_cc", tuple(float(r) for r in self.zero_rates_cc))
        self._validate()

    def _validate(self) -> None:
        if len(self.pillars) != len(self.zero_rates_cc):
            raise ValueError("pillars and zero_rates_cc must have the same length")
        if not self.pillars:
            raise ValueError("curve has no pillars")
        for i in range(1, len(self.pillars)):
            if self.pillars[i] <= self.pillars[i - 1]:
                raise ValueError("pillars must be strictly increasing")

    def zero_rate_cc(self, t: float) -> float:
        """
        Continuously compounded zero rate at time t (year-fraction).
        Linear interpolation in zero rates. t must be >= 0.
        """
        if t < 0:
            raise ValueError("t must be >= 0")
        if t <= self.pillars[0]:
            return self.zero_rates_cc[0]
        if t >= self.pillars[-1]:
            return self.zero_rates_cc[-1]
        for i in range(len(self.pillars) - 1):
            t0, t1 = self.pillars[i], self.pillars[i + 1]
            if t0 <= t <= t1:
                r0, r1 = self.zero_rates_cc[i], self.zero_rates_cc[i + 1]
                return r0 + (r1 - r0) * (t - t0) / (t1 - t0)
        return self.zero_rates_cc[-1]

    def df(self, t: float) -> float:
        r"""
        Discount factor to time t.

        With CC zero rate r(t), the discount factor is:
        DF(t) = exp(-r(t)*t).
        """
        r = self.zero_rate_cc(t)
        return math.exp(-r * t)
