from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Literal, Mapping, Sequence, Tuple, cast

import numpy as np
import pandas as pd

from .rainflow import CycleRecord


CycleKey = Tuple[float, float]
CycleCounter = Counter

_DEFAULT_BIN_SIZE = 1.0
_DEFAULT_MAX_BINS = 1_000_000
_COLUMNS = ["weight", "range", "mean"]


@dataclass
class HistogramBins:
    edges: np.ndarray
    weights: np.ndarray

    @property
    def lower(self) -> np.ndarray:
        return self.edges[:-1]

    @property
    def upper(self) -> np.ndarray:
        return self.edges[1:]


def total_weight(cycles: Iterable[CycleRecord]) -> float:
    """Return the number of counted cycles, half cycles counting 0.5."""

    return float(sum(c.weight for c in cycles))


def cycles_to_array(cycles: Sequence[CycleRecord]) -> np.ndarray:
    """Return the cycle table as an ``(n, 3)`` array of weight, range, mean."""

    if not cycles:
        return np.empty((0, 3), dtype=float)
    return np.asarray(cycles, dtype=float).reshape(-1, 3)


def cycles_to_df(cycles: Sequence[CycleRecord]) -> pd.DataFrame:
    return pd.DataFrame(cycles_to_array(cycles), columns=_COLUMNS)


def cycles_to_counter(cycles: Iterable[CycleRecord]) -> CycleCounter:
    """Sum cycle weights per ``(range, mean)`` key."""

    result: CycleCounter = Counter()
    for weight, rng, mean in cycles:
        key: CycleKey = (float(rng), float(mean))
        result[key] += weight  # type: ignore
    return result


def merge_cycle_counters(counters: Iterable[Mapping[CycleKey, float]]) -> CycleCounter:
    """Merge multiple cycle counters using Counter.

    Each input mapping should be like the return value of
    :func:`cycles_to_counter`: ``{(range, mean): weight}``.
    """

    total: CycleCounter = Counter()
    for c in counters:
        total.update(c)
    return total


def range_histogram(
    cycles: Sequence[CycleRecord],
    bin_size: float = _DEFAULT_BIN_SIZE,
    max_bins: int = _DEFAULT_MAX_BINS,
) -> HistogramBins:
    """Sum cycle weights into range bins ``[k * bin_size, (k + 1) * bin_size)``.

    Bins run from zero up to the bin holding the largest range; empty bins
    hold zero. The zero-filled array holds ``max_range / bin_size + 1`` bins,
    so a ``bin_size`` far below the range scale (e.g. 1.0 for stresses in Pa)
    raises ``ValueError`` once more than ``max_bins`` bins would be needed.
    """

    if bin_size <= 0.0:
        raise ValueError("bin_size must be > 0")

    table = cycles_to_array(cycles)
    if table.shape[0] == 0:
        return HistogramBins(edges=np.zeros(1), weights=np.zeros(0))

    weights, ranges = table[:, 0], table[:, 1]
    bin_locs = np.floor(ranges / bin_size).astype(int)
    num_bins = int(bin_locs.max()) + 1
    if num_bins > max_bins:
        raise ValueError(
            f"bin_size {bin_size} needs {num_bins} bins, more than max_bins={max_bins}"
        )

    binned = np.bincount(bin_locs, weights=weights, minlength=num_bins)
    edges = np.arange(num_bins + 1) * bin_size

    return HistogramBins(edges=edges, weights=binned.astype(float))


def counter_to_range_mean_df(
    counter: Mapping[CycleKey, float],
    range_bin_size: float = _DEFAULT_BIN_SIZE,
    mean_bin_size: float = _DEFAULT_BIN_SIZE,
    closed: Literal["left", "right"] = "right",
    round_decimals: int = 12,
) -> pd.DataFrame:
    """Convert a (range, mean): weight mapping to a full 2D interval DataFrame.

    The returned DataFrame has a MultiIndex of (range_interval, mean_interval)
    covering every bin between the smallest and largest key on each axis,
    with zero counts where no cycles exist.
    """

    if range_bin_size <= 0.0:
        raise ValueError("range_bin_size must be > 0")
    if mean_bin_size <= 0.0:
        raise ValueError("mean_bin_size must be > 0")

    if not counter:
        # Return empty but well-formed DataFrame
        return pd.DataFrame(
            [],
            index=pd.MultiIndex.from_arrays(
                [pd.IntervalIndex([], name="range"), pd.IntervalIndex([], name="mean")]
            ),
            columns=["value"],
        )

    def make_interval(c: float, size: float) -> pd.Interval:
        half = size / 2.0
        left = round(c - half, round_decimals)
        right = round(c + half, round_decimals)
        return pd.Interval(left, right, closed=closed)

    def centers(values: Iterable[float], size: float) -> np.ndarray:
        vals = sorted(values)
        lo = vals[0]
        steps = np.round((np.asarray(vals) - lo) / size)
        return lo + np.arange(int(steps.max()) + 1) * size

    def snap(value: float, lo: float, size: float) -> float:
        return lo + round((value - lo) / size) * size

    range_centers = centers({r for (r, _) in counter.keys()}, range_bin_size)
    mean_centers = centers({m for (_, m) in counter.keys()}, mean_bin_size)

    range_bins = pd.IntervalIndex(
        [make_interval(cast(float, c), range_bin_size) for c in range_centers],
        name="range",
    )
    mean_bins = pd.IntervalIndex(
        [make_interval(cast(float, c), mean_bin_size) for c in mean_centers],
        name="mean",
    )

    full_idx = pd.MultiIndex.from_product([range_bins, mean_bins], names=["range", "mean"])

    data: dict = {}
    for (r, m), v in counter.items():
        key = (
            make_interval(snap(r, range_centers[0], range_bin_size), range_bin_size),
            make_interval(snap(m, mean_centers[0], mean_bin_size), mean_bin_size),
        )
        data[key] = data.get(key, 0.0) + float(v)

    s = pd.Series(data, name="value", dtype="float64")
    s = s.reindex(full_idx, fill_value=0.0)

    return s.to_frame()
