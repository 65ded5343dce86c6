"""
Numeric helper functions shared by the aggregation pipelines.

Provides utilities for:
- Min/max/mean summaries over raw values
- Percentage change between two values
- Defined-value filtering (None / NaN removal)
"""
import math
from typing import Iterable, NamedTuple, Optional, Sequence

import numpy as np


class ValueSummary(NamedTuple):
    """Min, max and arithmetic mean of a non-empty set of values."""
    minimum: float
    maximum: float
    mean: float
    count: int


def summarize_values(values: Sequence[float]) -> ValueSummary:
    """
    Summarize a non-empty sequence of values.

    Args:
        values: Raw values (must contain at least one element)

    Returns:
        ValueSummary with min, max, mean and count

    Raises:
        ValueError: If values is empty
    """
    if len(values) == 0:
        raise ValueError("Cannot summarize an empty sequence")

    array = np.asarray(values, dtype=float)
    minimum = float(array.min())
    maximum = float(array.max())
    # Clamp guards the min <= mean <= max invariant against float rounding
    mean = min(max(float(array.mean()), minimum), maximum)
    return ValueSummary(minimum=minimum, maximum=maximum, mean=mean, count=len(array))


def mean_or_zero(values: Sequence[float]) -> float:
    """Arithmetic mean, or 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def percentage_change(first: float, last: float, absolute_base: bool = False) -> Optional[float]:
    """
    Percent change from first to last.

    Args:
        first: Baseline value
        last: Final value
        absolute_base: Divide by |first| instead of first

    Returns:
        Percent change, or None when the baseline is 0
    """
    base = abs(first) if absolute_base else first
    if base == 0:
        return None
    return (last - first) / base * 100


def is_defined(value: Optional[float]) -> bool:
    """True for a real number that is neither None nor NaN."""
    return value is not None and not math.isnan(value)


def defined_values(values: Iterable[Optional[float]]) -> list[float]:
    """Keep only defined values, preserving order."""
    return [v for v in values if is_defined(v)]
