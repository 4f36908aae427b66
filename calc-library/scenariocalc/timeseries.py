"""
Time series helpers.

A time series is a pandas Series of float64 observations indexed by a sorted
DatetimeIndex without duplicates. Historical observations do not depend on
the scenario, so one series is shared by every scenario of a calculation.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping

import pandas as pd


def time_series(
    points: Mapping[date, float] | Iterable[tuple[date, float]] = (),
    name: str | None = None,
) -> pd.Series:
    """Build a time series from (date, value) pairs in any order."""
    items = list(points.items()) if isinstance(points, Mapping) else list(points)
    if not items:
        return empty_time_series(name)
    dates, values = zip(*items)
    index = pd.DatetimeIndex(pd.to_datetime(list(dates)))
    series = pd.Series(list(values), index=index, dtype="float64", name=name)
    if series.index.has_duplicates:
        duplicated = sorted({d.date() for d in series.index[series.index.duplicated()]})
        raise ValueError(f"time series has duplicate dates: {duplicated}")
    return series.sort_index()


def as_time_series(series: pd.Series) -> pd.Series:
    """Validate a caller-built series and return a sorted float64 copy."""
    if series.empty:
        return empty_time_series(series.name)
    if not isinstance(series.index, pd.DatetimeIndex):
        raise ValueError(
            f"time series must be indexed by dates, got {type(series.index).__name__}"
        )
    if series.index.has_duplicates:
        raise ValueError("time series has duplicate dates")
    return series.astype("float64").sort_index()


def empty_time_series(name: str | None = None) -> pd.Series:
    """A series with no observations: "no history" rather than an error."""
    return pd.Series([], index=pd.DatetimeIndex([]), dtype="float64", name=name)


def latest_on_or_before(series: pd.Series, on: date) -> float | None:
    """Return the last observation dated on or before `on`, or None if there is none."""
    if series.empty:
        return None
    eligible = series.loc[: pd.Timestamp(on)]
    if eligible.empty:
        return None
    return float(eligible.iloc[-1])
