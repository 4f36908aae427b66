"""Tests for ScenarioMarketData and scenario value derivation."""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pandas as pd
import pytest

from scenariocalc.box import DoubleScenarioArray, MarketDataBox, ScenarioArray
from scenariocalc.errors import MarketDataNotFoundError
from scenariocalc.keys import CurveKey, ObservableKey, QuoteKey, ScenarioMarketDataKey
from scenariocalc.market import ImmutableMarketData
from scenariocalc.scenario_market import ScenarioMarketData
from scenariocalc.timeseries import time_series


def test_get_value_returns_box(valuation_date) -> None:
    """N=3, K -> [10, 20, 30]: the box for K yields 20 at index 1."""
    key = QuoteKey("K")
    md = ScenarioMarketData(3, valuation_date, {key: MarketDataBox.of_scenario_values([10, 20, 30])})
    assert md.scenario_count == 3
    assert md.contains_value(key)
    assert md.get_value(key).get_value(1) == 20


def test_missing_key_raises(valuation_date) -> None:
    md = ScenarioMarketData(2, valuation_date)
    assert not md.contains_value(QuoteKey("missing"))
    with pytest.raises(MarketDataNotFoundError, match="QuoteKey:missing") as exc_info:
        md.get_value(QuoteKey("missing"))
    assert exc_info.value.key == QuoteKey("missing")
    assert isinstance(exc_info.value, KeyError)


def test_construction_rejects_wrong_scenario_count(valuation_date) -> None:
    with pytest.raises(ValueError, match="expected 3"):
        ScenarioMarketData(3, valuation_date, {QuoteKey("K"): MarketDataBox.of_scenario_values([1, 2])})


def test_construction_rejects_unboxed_values(valuation_date) -> None:
    with pytest.raises(ValueError, match="must be a MarketDataBox"):
        ScenarioMarketData(1, valuation_date, {QuoteKey("K"): 1.0})


def test_construction_rejects_zero_scenarios(valuation_date) -> None:
    with pytest.raises(ValueError, match=">= 1"):
        ScenarioMarketData(0, valuation_date)


def test_valuation_date_is_a_box() -> None:
    dates = MarketDataBox.of_scenario_values([date(2024, 1, 15), date(2024, 1, 16)])
    md = ScenarioMarketData(2, dates)
    assert md.valuation_date.get_value(1) == date(2024, 1, 16)

    shared = ScenarioMarketData(2, date(2024, 1, 15))
    assert shared.valuation_date.is_single_value


def test_absent_time_series_is_empty(valuation_date) -> None:
    md = ScenarioMarketData(2, valuation_date)
    assert not md.contains_time_series(ObservableKey("USD-LIBOR-3M"))
    assert md.get_time_series(ObservableKey("USD-LIBOR-3M")).empty


def test_time_series_shared(valuation_date) -> None:
    key = ObservableKey("USD-LIBOR-3M")
    series = time_series({date(2024, 1, 12): 0.0531})
    md = ScenarioMarketData(2, valuation_date, time_series={key: series})
    assert md.contains_time_series(key)
    assert md.get_time_series(key).iloc[-1] == 0.0531


def test_scenario_value_returned_as_stored(valuation_date) -> None:
    """A stored value of the requested type is returned without conversion."""
    stored = DoubleScenarioArray.of([0.1, 0.2, 0.3])
    quote = QuoteKey("vol")
    md = ScenarioMarketData(3, valuation_date, {quote: MarketDataBox.of_scenario_value(stored)})
    key = ScenarioMarketDataKey.of(quote, DoubleScenarioArray)
    assert md.get_scenario_value(key) is stored


def test_scenario_value_adapted_from_other_representation(valuation_date) -> None:
    quote = QuoteKey("vol")
    md = ScenarioMarketData(3, valuation_date, {quote: MarketDataBox.of_scenario_values([0.1, 0.2, 0.3])})
    key = ScenarioMarketDataKey.of(quote, DoubleScenarioArray)
    array = md.get_scenario_value(key)
    assert isinstance(array, DoubleScenarioArray)
    assert list(array) == [0.1, 0.2, 0.3]


def test_scenario_value_broadcasts_single_value(valuation_date) -> None:
    """A single value becomes a scenario value with the same value everywhere."""
    quote = QuoteKey("spot")
    md = ScenarioMarketData(4, valuation_date, {quote: MarketDataBox.of_single_value(1.08)})
    key = ScenarioMarketDataKey.of(quote, DoubleScenarioArray)
    array = md.get_scenario_value(key)
    assert array.scenario_count == 4
    assert all(array.get_value(i) == 1.08 for i in range(4))


def test_scenario_value_is_cached(valuation_date) -> None:
    """Requesting the same key twice gives equal (here: the same) values."""
    calls = []

    def factory(box, n):
        calls.append(n)
        return ScenarioArray.from_box(box, n)

    curve = CurveKey("USD-OIS")
    md = ScenarioMarketData(2, valuation_date, {curve: MarketDataBox.of_single_value("c")})
    key = ScenarioMarketDataKey.of(curve, ScenarioArray, factory)
    first = md.get_scenario_value(key)
    second = md.get_scenario_value(key)
    assert first == second
    assert first is second
    assert calls == [2]


def test_scenario_value_cache_disabled(valuation_date) -> None:
    calls = []

    def factory(box, n):
        calls.append(n)
        return ScenarioArray.from_box(box, n)

    curve = CurveKey("USD-OIS")
    md = ScenarioMarketData(
        2, valuation_date, {curve: MarketDataBox.of_single_value("c")}, cache_scenario_values=False
    )
    key = ScenarioMarketDataKey.of(curve, ScenarioArray, factory)
    assert md.get_scenario_value(key) == md.get_scenario_value(key)
    assert calls == [2, 2]


def test_scenario_value_cache_disabled_from_env(monkeypatch, valuation_date) -> None:
    from scenariocalc.config import reset_settings

    monkeypatch.setenv("SCENARIOCALC_CACHE_SCENARIO_VALUES", "false")
    reset_settings()
    calls = []

    def factory(box, n):
        calls.append(n)
        return ScenarioArray.from_box(box, n)

    quote = QuoteKey("q")
    md = ScenarioMarketData(2, valuation_date, {quote: MarketDataBox.of_single_value(1.0)})
    key = ScenarioMarketDataKey.of(quote, ScenarioArray, factory)
    md.get_scenario_value(key)
    md.get_scenario_value(key)
    assert len(calls) == 2


def test_scenario_value_wrong_count_raises(valuation_date) -> None:
    quote = QuoteKey("q")
    md = ScenarioMarketData(3, valuation_date, {quote: MarketDataBox.of_single_value(1.0)})
    key = ScenarioMarketDataKey.of(quote, DoubleScenarioArray, lambda box, n: DoubleScenarioArray.of([1.0]))
    with pytest.raises(ValueError, match="expected 3"):
        md.get_scenario_value(key)


def test_scenario_value_missing_key(valuation_date) -> None:
    md = ScenarioMarketData(2, valuation_date)
    key = ScenarioMarketDataKey.of(QuoteKey("nope"), DoubleScenarioArray)
    with pytest.raises(MarketDataNotFoundError):
        md.get_scenario_value(key)


def test_concurrent_scenario_value_requests_agree(valuation_date) -> None:
    """Racing first requests all observe one stored value."""
    start = threading.Barrier(8)
    quote = QuoteKey("q")
    md = ScenarioMarketData(5, valuation_date, {quote: MarketDataBox.of_scenario_values(range(5))})
    key = ScenarioMarketDataKey.of(quote, DoubleScenarioArray)

    def request(_):
        start.wait()
        return md.get_scenario_value(key)

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(request, range(8)))
    assert all(r == results[0] for r in results)
    assert md.get_scenario_value(key) is md.get_scenario_value(key)


def test_from_market_data_boxes_single_values(valuation_date) -> None:
    snapshot = ImmutableMarketData(valuation_date, {QuoteKey("q"): 2.5})
    md = ScenarioMarketData.from_market_data(snapshot, 3)
    box = md.get_value(QuoteKey("q"))
    assert box.is_single_value
    assert md.scenario(2).get_value(QuoteKey("q")) == 2.5


def test_with_value_returns_new_instance(valuation_date) -> None:
    md = ScenarioMarketData(2, valuation_date)
    updated = md.with_value(QuoteKey("q"), MarketDataBox.of_scenario_values([1.0, 2.0]))
    assert not md.contains_value(QuoteKey("q"))
    assert updated.get_value(QuoteKey("q")).get_value(1) == 2.0
    with pytest.raises(ValueError, match="expected 2"):
        md.with_value(QuoteKey("q"), MarketDataBox.of_scenario_values([1.0]))


def test_with_time_series_returns_new_instance(valuation_date) -> None:
    key = ObservableKey("IDX")
    md = ScenarioMarketData(2, valuation_date)
    updated = md.with_time_series(key, time_series({date(2024, 1, 2): 0.01}))
    assert md.get_time_series(key).empty
    assert len(updated.get_time_series(key)) == 1


def test_scenario_value_cached_across_fresh_keys(valuation_date) -> None:
    """A key rebuilt with a new factory on every request still hits the cache."""
    calls = []
    quote = QuoteKey("q")
    md = ScenarioMarketData(2, valuation_date, {quote: MarketDataBox.of_single_value(1.0)})

    def request():
        def factory(box, n):
            calls.append(n)
            return DoubleScenarioArray.from_box(box, n)

        return md.get_scenario_value(ScenarioMarketDataKey.of(quote, DoubleScenarioArray, factory))

    results = [request() for _ in range(100)]
    assert len(calls) == 1
    assert all(r is results[0] for r in results)


def test_empty_time_series_accepted(valuation_date) -> None:
    key = ObservableKey("IDX")
    md = ScenarioMarketData(2, valuation_date, time_series={key: pd.Series(dtype="float64")})
    assert md.contains_time_series(key)
    assert md.scenario(1).get_time_series(key).empty
