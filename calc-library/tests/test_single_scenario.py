"""Tests for single-scenario views of scenario market data."""

from datetime import date

import pytest

from scenariocalc.box import MarketDataBox
from scenariocalc.errors import MarketDataNotFoundError, ScenarioIndexError
from scenariocalc.keys import ObservableKey, QuoteKey
from scenariocalc.market import ImmutableMarketData, SingleScenarioMarketData
from scenariocalc.scenario_market import ScenarioMarketData
from scenariocalc.timeseries import time_series


@pytest.fixture
def scenario_md(valuation_date) -> ScenarioMarketData:
    return ScenarioMarketData(
        3,
        valuation_date,
        {
            QuoteKey("K"): MarketDataBox.of_scenario_values([10, 20, 30]),
            QuoteKey("S"): MarketDataBox.of_single_value(1.08),
        },
        {ObservableKey("IDX"): time_series({date(2024, 1, 12): 0.05})},
    )


def test_view_returns_value_of_its_scenario(scenario_md) -> None:
    """Adapter at 2 -> 30; shared values are the same in every scenario."""
    view = SingleScenarioMarketData(scenario_md, 2)
    assert view.get_value(QuoteKey("K")) == 30
    assert view.get_value(QuoteKey("S")) == 1.08
    assert [v.get_value(QuoteKey("K")) for v in scenario_md.scenarios()] == [10, 20, 30]


def test_view_valuation_date(scenario_md, valuation_date) -> None:
    assert scenario_md.scenario(0).valuation_date == valuation_date


def test_view_valuation_date_per_scenario() -> None:
    dates = [date(2024, 1, 15), date(2024, 1, 16)]
    md = ScenarioMarketData(2, MarketDataBox.of_scenario_values(dates))
    assert [view.valuation_date for view in md.scenarios()] == dates


def test_view_rejects_bad_index(scenario_md) -> None:
    with pytest.raises(ScenarioIndexError, match="out of range"):
        SingleScenarioMarketData(scenario_md, 3)
    with pytest.raises(ScenarioIndexError):
        scenario_md.scenario(-1)


def test_view_delegates_lookups(scenario_md) -> None:
    view = scenario_md.scenario(1)
    assert view.contains_value(QuoteKey("K"))
    assert not view.contains_value(QuoteKey("missing"))
    with pytest.raises(MarketDataNotFoundError):
        view.get_value(QuoteKey("missing"))


def test_view_time_series(scenario_md) -> None:
    """Time series are shared; absent ones are empty in every scenario."""
    for view in scenario_md.scenarios():
        assert view.contains_time_series(ObservableKey("IDX"))
        assert view.get_time_series(ObservableKey("IDX")).iloc[0] == 0.05
        assert view.get_time_series(ObservableKey("absent")).empty


def test_immutable_market_data(valuation_date) -> None:
    md = ImmutableMarketData(valuation_date, {QuoteKey("q"): 1.0})
    updated = md.with_value(QuoteKey("r"), 2.0)
    assert md.get_value(QuoteKey("q")) == 1.0
    assert not md.contains_value(QuoteKey("r"))
    assert updated.get_value(QuoteKey("r")) == 2.0
    assert md.get_time_series(ObservableKey("IDX")).empty
    with pytest.raises(MarketDataNotFoundError):
        md.get_value(QuoteKey("r"))
