"""Shared fixtures for library tests."""

from datetime import date

import pytest

from scenariocalc.config import reset_settings
from scenariocalc.curves import ZeroRateCurve


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings, whatever the environment says."""
    for name in ("MAX_WORKERS", "CACHE_SCENARIO_VALUES", "LOG_LEVEL"):
        monkeypatch.delenv(f"SCENARIOCALC_{name}", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def valuation_date() -> date:
    return date(2024, 1, 15)


@pytest.fixture
def usd_ois() -> ZeroRateCurve:
    return ZeroRateCurve(
        name="USD-OIS",
        pillars=[0.5, 1.0, 2.0, 5.0],
        zero_rates_cc=[0.045, 0.043, 0.04, 0.038],
    )


@pytest.fixture
def usd_3m() -> ZeroRateCurve:
    return ZeroRateCurve(
        name="USD-3M",
        pillars=[0.5, 1.0, 2.0, 5.0],
        zero_rates_cc=[0.048, 0.046, 0.043, 0.041],
    )


@pytest.fixture
def eur_estr() -> ZeroRateCurve:
    return ZeroRateCurve(
        name="EUR-ESTR",
        pillars=[0.5, 1.0, 2.0],
        zero_rates_cc=[0.04, 0.038, 0.036],
    )
