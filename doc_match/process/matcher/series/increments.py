# Path: doc_match/process/matcher/series/increments.py
"""
Increment Classification

Describes how regularly a run of numbers progresses. Shared by
series detection (sorted item numbers) and context tracking
(path numbers in confirmation order).
"""

from collections import Counter
from typing import Sequence

from ....constants import IncrementPattern


def classify_increment(numbers: Sequence[int]) -> tuple[int, IncrementPattern]:
    """
    Detect the dominant step between consecutive numbers.

    SEQUENTIAL when every step is the same, GAPPED when the most
    common step covers at least half of the steps, IRREGULAR
    otherwise. Fewer than two numbers count as sequential by 1.

    Args:
        numbers: Numbers in the order to compare

    Returns:
        Tuple of (increment, pattern)

    Example:
        classify_increment([1, 2, 3])      # (1, SEQUENTIAL)
        classify_increment([1, 2, 3, 7])   # (1, GAPPED)
    """
    if len(numbers) < 2:
        return 1, IncrementPattern.SEQUENTIAL

    steps = [b - a for a, b in zip(numbers, numbers[1:])]
    increment, count = Counter(steps).most_common(1)[0]

    if count == len(steps):
        return increment, IncrementPattern.SEQUENTIAL
    if count * 2 >= len(steps):
        return increment, IncrementPattern.GAPPED
    return increment, IncrementPattern.IRREGULAR


__all__ = ['classify_increment']
