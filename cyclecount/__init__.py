import logging

from .rainflow import (
    CycleRecord,
    CycleTable,
    NonFiniteSampleError,
    RainflowError,
    StackInvariantError,
    count_cycles,
    extrema,
    rainflow,
    validate_history,
)
from .helper import (
    CycleKey,
    CycleCounter,
    HistogramBins,
    counter_to_range_mean_df,
    cycles_to_array,
    cycles_to_counter,
    cycles_to_df,
    merge_cycle_counters,
    range_histogram,
    total_weight,
)
from .tracing import init_tracing

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CycleRecord",
    "CycleTable",
    "NonFiniteSampleError",
    "RainflowError",
    "StackInvariantError",
    "count_cycles",
    "extrema",
    "rainflow",
    "validate_history",
    "CycleKey",
    "CycleCounter",
    "HistogramBins",
    "counter_to_range_mean_df",
    "cycles_to_array",
    "cycles_to_counter",
    "cycles_to_df",
    "merge_cycle_counters",
    "range_histogram",
    "total_weight",
    "init_tracing",
]
