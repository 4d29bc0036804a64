"""Statistics primitives shared by the analysis pipeline."""

import math
from typing import Iterable, List, Optional


def _valid(values: Optional[Iterable[Optional[float]]]) -> List[float]:
    """Drop missing and NaN entries."""
    if not values:
        return []
    return [v for v in values if v is not None and not math.isnan(v)]


def average(values: Optional[Iterable[Optional[float]]]) -> float:
    """Mean of the valid entries.

    Args:
        values: Sequence that may contain None or NaN

    Returns:
        Arithmetic mean, or 0 when nothing valid remains
    """
    valid = _valid(values)
    if not valid:
        return 0
    return sum(valid) / len(valid)


def std_dev(values: Optional[Iterable[Optional[float]]]) -> float:
    """Population standard deviation of the valid entries.

    Args:
        values: Sequence that may contain None or NaN

    Returns:
        Standard deviation, or 0 with fewer than two valid entries
    """
    valid = _valid(values)
    if len(valid) < 2:
        return 0
    mean = average(valid)
    return math.sqrt(average([(v - mean) ** 2 for v in valid]))


def celsius_to_fahrenheit(celsius: Optional[float]) -> Optional[float]:
    """Convert Celsius to Fahrenheit, passing missing values through as None."""
    if celsius is None or math.isnan(celsius):
        return None
    return celsius * 9 / 5 + 32
