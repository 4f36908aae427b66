"""Tests for MarketDataBox and the stock scenario value representations."""

import numpy as np
import pytest

from scenariocalc.box import BoxKind, DoubleScenarioArray, MarketDataBox, ScenarioArray
from scenariocalc.errors import ScenarioIndexError, SingleValueBoxError


def test_single_box_same_value_for_every_index() -> None:
    """A single value box returns its value whatever the scenario index."""
    box = MarketDataBox.of_single_value(1.08)
    assert box.is_single_value
    assert box.kind is BoxKind.SINGLE
    assert box.scenario_count is None
    for i in (0, 1, 7, 10_000):
        assert box.get_value(i) == 1.08


def test_single_box_rejects_negative_index() -> None:
    box = MarketDataBox.of_single_value("x")
    with pytest.raises(ScenarioIndexError, match=">= 0"):
        box.get_value(-1)


def test_scenario_box_values_in_order() -> None:
    """A scenario box returns the i-th value and rejects index N."""
    box = MarketDataBox.of_scenario_values([10, 20, 30])
    assert not box.is_single_value
    assert box.scenario_count == 3
    assert [box.get_value(i) for i in range(3)] == [10, 20, 30]
    with pytest.raises(ScenarioIndexError, match="out of range for 3 scenario"):
        box.get_value(3)
    with pytest.raises(IndexError):
        box.get_value(-1)


def test_scenario_box_requires_values() -> None:
    with pytest.raises(ValueError, match="at least one"):
        MarketDataBox.of_scenario_values([])


def test_get_single_value_on_scenario_box_raises() -> None:
    box = MarketDataBox.of_scenario_values([1.0, 2.0])
    with pytest.raises(ValueError, match="one value per scenario"):
        box.get_single_value()


def test_get_scenario_value_on_single_box_fails_fast() -> None:
    """A single box has no scenario value; callers must check is_single_value."""
    box = MarketDataBox.of_single_value(1.0)
    assert box.get_single_value() == 1.0
    with pytest.raises(SingleValueBoxError, match="is_single_value"):
        box.get_scenario_value()


def test_scenario_box_holds_prebuilt_representation() -> None:
    """A box can hold any scenario value, e.g. a packed array."""
    array = DoubleScenarioArray.of([0.01, 0.02])
    box = MarketDataBox.of_scenario_value(array)
    assert box.get_scenario_value() is array
    assert box.scenario_count == 2
    assert box.get_value(1) == 0.02


def test_map_keeps_variant() -> None:
    single = MarketDataBox.of_single_value(2.0).map(lambda v: v * 10)
    assert single.is_single_value
    assert single.get_single_value() == 20.0

    scenario = MarketDataBox.of_scenario_values([1.0, 2.0, 3.0]).map(lambda v: v + 1)
    assert scenario.scenario_count == 3
    assert [scenario.get_value(i) for i in range(3)] == [2.0, 3.0, 4.0]


def test_scenario_array_from_single_box_repeats_value() -> None:
    box = MarketDataBox.of_single_value("curve")
    array = ScenarioArray.from_box(box, 4)
    assert array.scenario_count == 4
    assert list(array) == ["curve"] * 4


def test_double_scenario_array_is_read_only() -> None:
    array = DoubleScenarioArray.of([1.0, 2.0, 3.0])
    assert array.values.dtype == np.float64
    with pytest.raises(ValueError):
        array.values[0] = 99.0


def test_double_scenario_array_broadcasts_single_value() -> None:
    array = DoubleScenarioArray.from_box(MarketDataBox.of_single_value(1.5), 3)
    assert array == DoubleScenarioArray.of([1.5, 1.5, 1.5])
    assert [array.get_value(i) for i in range(3)] == [1.5, 1.5, 1.5]


def test_double_scenario_array_validation() -> None:
    with pytest.raises(ValueError, match="at least one"):
        DoubleScenarioArray.of([])
    with pytest.raises(ValueError, match="1-D"):
        DoubleScenarioArray(np.zeros((2, 2)))
    with pytest.raises(ScenarioIndexError):
        DoubleScenarioArray.of([1.0]).get_value(1)
