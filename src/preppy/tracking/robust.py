"""Outlier-resistant averaging for calorie intake.

A single holiday binge or fasting day should not drag a two-week calorie
average around. Values outside the Tukey fences (1.5 × IQR beyond the
quartiles) are dropped before averaging. When the fences would throw away
more than 30% of the data the fences themselves are not trustworthy, and
the median of the full set is used instead.

Quartiles use plain index truncation on the sorted values (no
interpolation between ranks).
"""

from __future__ import annotations

import math

import numpy as np

IQR_FENCE_MULTIPLIER = 1.5
MIN_INLIER_FRACTION = 0.7


def iqr_bounds(values: list[float]) -> tuple[float, float]:
    """
    Tukey fences for a list of values.

    Args:
        values: At least one value

    Returns:
        (lower_bound, upper_bound)
    """
    ordered = sorted(values)
    n = len(ordered)
    q1 = ordered[math.floor(n * 0.25)]
    q3 = ordered[math.floor(n * 0.75)]
    iqr = q3 - q1
    return q1 - IQR_FENCE_MULTIPLIER * iqr, q3 + IQR_FENCE_MULTIPLIER * iqr


def robust_mean(values: list[float]) -> float:
    """
    Mean of values with IQR outliers removed.

    Args:
        values: Numeric values (e.g. daily calories)

    Returns:
        0.0 for no values; the plain mean for one or two values; otherwise
        the inlier mean, or the median if fewer than 70% are inliers

    Example:
        >>> robust_mean([2000, 2010, 1995, 2005, 1998])
        2001.6
    """
    n = len(values)
    if n == 0:
        return 0.0
    if n <= 2:
        return sum(values) / n

    lower, upper = iqr_bounds(values)
    inliers = [v for v in values if lower <= v <= upper]

    if len(inliers) < n * MIN_INLIER_FRACTION:
        return float(sorted(values)[n // 2])

    return sum(inliers) / len(inliers)


def coefficient_of_variation(values: list[float]) -> float:
    """Population standard deviation divided by the mean."""
    return float(np.std(values) / np.mean(values))
