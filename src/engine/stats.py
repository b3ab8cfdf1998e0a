"""
Audience Dice - Stats Calculator

Computes round statistics from an ordered sequence of roll results.

Rounding: halves round toward positive infinity (2.5 -> 3, -2.5 -> -2),
for both the average and the even-length median.

Mode tie-break: when several values share the highest frequency, the
winner is the first value whose running count reaches that frequency
while scanning in submission order.

All methods are stateless class methods operating on immutable data.
"""

import math
from collections import Counter
from typing import Sequence

from src.engine.base import AggregationMode, Number, RollStats


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def _mean(values: Sequence[Number], total: Number) -> float:
    """Arithmetic mean; divides first when the plain sum overflows a float."""
    mean = total / len(values)
    if math.isfinite(mean):
        return mean
    return sum(v / len(values) for v in values)


class StatsCalculator:
    """
    Stateless calculator for round statistics.

    State is passed in and returned, never stored.
    """

    @classmethod
    def summarize(
        cls,
        results: Sequence[Number],
        mode: AggregationMode = AggregationMode.MEAN,
    ) -> RollStats:
        """Compute count, total, average, extremes and the mode's result.

        Args:
            results: Roll results in submission order
            mode: Aggregation mode selecting computed_result

        Returns:
            RollStats (all zeros for an empty sequence)
        """
        if not results:
            return RollStats()

        values = tuple(results)
        total = sum(values)
        average = round_half_up(_mean(values, total))

        if mode == AggregationMode.MEDIAN:
            computed = cls.median(values)
        elif mode == AggregationMode.MODE:
            computed = cls.mode(values)
        else:
            computed = average

        return RollStats(
            count=len(values),
            total=total,
            average=average,
            highest=max(values),
            lowest=min(values),
            computed_result=computed,
        )

    @classmethod
    def median(cls, values: Sequence[Number]) -> Number:
        """Middle value; rounded mean of the two middle values for even lengths."""
        if not values:
            return 0
        ordered = sorted(values)
        mid = len(ordered) // 2
        if len(ordered) % 2:
            return ordered[mid]
        middle = ordered[mid - 1 : mid + 1]
        return round_half_up(_mean(middle, sum(middle)))

    @classmethod
    def mode(cls, values: Sequence[Number]) -> Number:
        """Most frequent value, ties broken by first to reach the top count."""
        if not values:
            return 0
        max_freq = max(Counter(values).values())

        running: Counter = Counter()
        for value in values:
            running[value] += 1
            if running[value] == max_freq:
                return value
        return 0  # unreachable for non-empty input
