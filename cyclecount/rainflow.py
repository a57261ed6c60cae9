"""Rainflow cycle counting according to ASTM E1049-85.

Let X denote the range under consideration, Y the previous range adjacent to
X, and S the starting point in the history:

1. Read next peak or valley. If out of data, go to step 6.
2. If there are less than three points, go to step 1. Form ranges X and Y
   using the three most recent peaks and valleys that have not been
   discarded.
3. If X < Y, go to step 1. If X >= Y, go to step 4.
4. If range Y contains the starting point S, go to step 5; otherwise count
   range Y as one cycle, discard the peak and valley of Y and go to step 2.
5. Count range Y as one-half cycle, discard the first point of Y, move the
   starting point to the second point of Y and go to step 2.
6. Count each range that has not been previously counted as one-half cycle.

The central entry points are:

* :func:`rainflow` – validate a history and return its cycle table.
* :func:`extrema` – reduce a history to its peaks and valleys.
* :func:`count_cycles` – count the cycles of a peak/valley sequence.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, NamedTuple

import numpy as np


logger = logging.getLogger(__name__)


class RainflowError(Exception):
    """Base class for errors raised while counting cycles."""


class NonFiniteSampleError(RainflowError, ValueError):
    def __init__(self, index: int, value: float) -> None:
        super().__init__(f"history must be finite, got {value} at index {index}")
        self.index = index
        self.value = value


class StackInvariantError(RainflowError, RuntimeError):
    pass


class CycleRecord(NamedTuple):
    weight: float
    range: float
    mean: float


CycleTable = List[CycleRecord]


def validate_history(history: Iterable[float] | np.ndarray) -> np.ndarray:
    """Return ``history`` as a 1D float array, rejecting NaN and infinity.

    NaN compares neither ``<`` nor ``>=`` to anything and would silently
    break the counting loop, so non-finite samples raise
    :class:`NonFiniteSampleError` instead.
    """

    arr = np.asarray(
        history if isinstance(history, np.ndarray) else list(history), dtype=float
    )
    if arr.ndim != 1:
        raise ValueError("history must be 1D")

    bad = np.flatnonzero(~np.isfinite(arr))
    if bad.size:
        index = int(bad[0])
        logger.warning(
            "Rejecting history with %d non-finite sample(s), first at index %d",
            bad.size,
            index,
        )
        raise NonFiniteSampleError(index, float(arr[index]))

    return arr


def _extrema(values: List[float]) -> List[float]:
    n = len(values)
    if n < 2:
        return list(values)

    kept = [values[0]]
    for i in range(1, n - 1):
        x = values[i]
        ref = kept[-1]
        nxt = values[i + 1]
        if (x > ref and x > nxt) or (x < ref and x < nxt):
            kept.append(x)
    kept.append(values[-1])

    return kept


def extrema(history: Iterable[float] | np.ndarray) -> np.ndarray:
    """Return the peaks and valleys of ``history``.

    Points that are neither a peak nor a valley are removed. A point is
    compared with the last point that was kept, not with its raw
    predecessor, so monotone runs and plateaus collapse. The first and last
    samples are always kept.

    Raises :class:`NonFiniteSampleError` for NaN or infinite samples and
    ``ValueError`` for input that is not 1D.
    """

    values = validate_history(history).tolist()
    return np.asarray(_extrema(values), dtype=float)


def _record(weight: float, a: float, b: float) -> CycleRecord:
    return CycleRecord(weight, abs(a - b), 0.5 * (a + b))


def _count_cycles(e: List[float]) -> CycleTable:
    # points is an index stack preallocated to the number of extrema, top
    # points at its last valid slot; stack size three means the oldest
    # entry is the current starting point S
    n = len(e)
    cycles: CycleTable = []
    if n < 2:
        return cycles

    points = [0] * n
    top = -1

    for idx in range(n):
        if top + 1 >= n:
            raise StackInvariantError("cycle stack overflow")
        top += 1
        points[top] = idx

        while top >= 2:
            a = e[points[top - 2]]
            b = e[points[top - 1]]
            x_range = abs(b - e[points[top]])
            y_range = abs(a - b)
            if x_range < y_range:
                break

            if top == 2:
                # Y contains S: count half, S moves to b
                cycles.append(_record(0.5, a, b))
                points[0] = points[1]
                points[1] = points[2]
                top = 1
            else:
                cycles.append(_record(1.0, a, b))
                points[top - 2] = points[top]
                top -= 2

    if top < 0:
        raise StackInvariantError("cycle stack underflow")

    for i in range(top):
        cycles.append(_record(0.5, e[points[i]], e[points[i + 1]]))

    return cycles


def count_cycles(peaks: Iterable[float] | np.ndarray) -> CycleTable:
    """Count the cycles of a peak/valley sequence (three-point method).

    ``peaks`` is expected to be the output of :func:`extrema` and is
    validated the same way. The returned list holds one
    :class:`CycleRecord` per counted cycle in the order the cycles were
    closed, followed by the residual half cycles.
    """

    return _count_cycles(validate_history(peaks).tolist())


def rainflow(history: Iterable[float] | np.ndarray) -> CycleTable:
    """Return the rainflow cycle table of a stress-time history.

    Parameters
    ----------
    history:
        Samples in chronological order. Must be 1D and finite.

    Returns
    -------
    list of CycleRecord
        ``(weight, range, mean)`` records where ``weight`` is ``1.0`` for a
        full cycle and ``0.5`` for a half cycle. Empty for histories with
        fewer than two samples.
    """

    values = validate_history(history).tolist()
    peaks = _extrema(values)
    cycles = _count_cycles(peaks)

    logger.debug(
        "Counted %d cycle record(s) from %d sample(s) and %d extrema",
        len(cycles),
        len(values),
        len(peaks),
    )
    return cycles
