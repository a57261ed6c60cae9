from collections import Counter

import numpy as np
import numpy.testing as npt
import pytest

from cyclecount.helper import (
    counter_to_range_mean_df,
    cycles_to_array,
    cycles_to_counter,
    cycles_to_df,
    merge_cycle_counters,
    range_histogram,
    total_weight,
)
from cyclecount.rainflow import CycleRecord, rainflow


def test_cycles_to_array():
    cycles = rainflow([0.0, 2.0, 1.0, 2.0, 1.0, 4.0])
    table = cycles_to_array(cycles)

    assert table.shape == (3, 3)
    npt.assert_array_equal(table[:, 0], [1.0, 1.0, 0.5])

    assert cycles_to_array([]).shape == (0, 3)


def test_cycles_to_df():
    df = cycles_to_df([CycleRecord(1.0, 2.0, 0.0), CycleRecord(0.5, 4.0, 1.0)])

    assert list(df.columns) == ["weight", "range", "mean"]
    assert df["weight"].sum() == 1.5
    assert df.loc[1, "range"] == 4.0


def test_cycles_to_counter_keeps_duplicates():
    cycles = rainflow([0.0, 2.0, 1.0, 2.0, 1.0, 4.0])
    counter = cycles_to_counter(cycles)

    assert counter == {(1.0, 1.5): 2.0, (4.0, 2.0): 0.5}
    assert total_weight(cycles) == 2.5


def test_merge_cycle_counters():
    c1 = {(1.0, 0.0): 1, (2.0, 0.5): 2}
    c2 = {(1.0, 0.0): 3, (3.0, 1.0): 0.5}

    merged = merge_cycle_counters([c1, Counter(c2)])
    assert merged == {(1.0, 0.0): 4, (2.0, 0.5): 2, (3.0, 1.0): 0.5}


def test_range_histogram():
    cycles = [CycleRecord(1.0, 2.0, 0.0), CycleRecord(0.5, 4.0, 0.0)]

    hist = range_histogram(cycles, bin_size=1.0)
    npt.assert_allclose(hist.edges, [0, 1, 2, 3, 4, 5])
    npt.assert_allclose(hist.weights, [0, 0, 1, 0, 0.5])
    npt.assert_allclose(hist.lower, [0, 1, 2, 3, 4])
    npt.assert_allclose(hist.upper, [1, 2, 3, 4, 5])

    hist = range_histogram(cycles, bin_size=3.0)
    npt.assert_allclose(hist.edges, [0, 3, 6])
    npt.assert_allclose(hist.weights, [1, 0.5])


def test_range_histogram_preserves_total_weight():
    rng = np.random.default_rng(1)
    cycles = rainflow(rng.normal(scale=10.0, size=2000))

    hist = range_histogram(cycles, bin_size=0.5)
    assert np.isclose(hist.weights.sum(), total_weight(cycles))


def test_range_histogram_empty_and_invalid():
    hist = range_histogram([])
    assert hist.weights.size == 0

    with pytest.raises(ValueError):
        range_histogram([CycleRecord(1.0, 2.0, 0.0)], bin_size=0.0)


def test_counter_to_range_mean_df():
    counter = {(1.0, 0.0): 2, (2.0, 0.0): 1, (1.0, 1.0): 0.5}

    df = counter_to_range_mean_df(counter, range_bin_size=1.0, mean_bin_size=1.0)

    # Basic shape checks: MultiIndex with two levels
    assert df.index.nlevels == 2
    assert df.shape == (4, 1)

    range_levels, mean_levels = (
        df.index.levels  # pyright: ignore[reportAttributeAccessIssue]
    )

    assert df.loc[(range_levels[0], mean_levels[0]), "value"] == 2
    assert df.loc[(range_levels[0], mean_levels[1]), "value"] == 0.5

    # Ensure zeros are present where no cycles exist
    zero_pos = (range_levels[1], mean_levels[1])
    assert df.loc[zero_pos, "value"] == 0


def test_counter_to_range_mean_df_empty():
    df = counter_to_range_mean_df({})
    assert df.empty
    assert df.index.nlevels == 2


@pytest.mark.parametrize(
    "kwargs",
    [{"range_bin_size": 0.0}, {"mean_bin_size": 0.0}, {"range_bin_size": -1.0}],
)
def test_counter_to_range_mean_df_invalid_bin_size(kwargs):
    with pytest.raises(ValueError, match="bin_size must be > 0"):
        counter_to_range_mean_df({(1.0, 0.0): 1.0}, **kwargs)


def test_range_histogram_bin_limit():
    cycles = [CycleRecord(1.0, 2.0e8, 0.0)]

    with pytest.raises(ValueError, match="max_bins"):
        range_histogram(cycles, bin_size=1.0)

    hist = range_histogram(cycles, bin_size=1.0e7)
    assert hist.weights.size == 21
    assert hist.weights[-1] == 1.0
