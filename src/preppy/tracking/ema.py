"""Adaptive exponentially smoothed trend weight.

Each day's trend is an exponential moving average of scale weight:
    T_n = α × W_n + (1 - α) × T_{n-1}

Unlike a fixed Hacker's Diet style smoothing factor, α adapts to how noisy
the recent data is. It starts at 0.1 and grows with the population standard
deviation of the last 14 weights:
    α = 0.1 + min(σ / 2, 0.3)      so α ∈ [0.1, 0.4]

The smoothed series is returned most recent first. Callers that need
chronological order should go through ascending().
"""

from __future__ import annotations

from dataclasses import replace

import numpy as np

from preppy.tracking.gap_fill import sort_by_date
from preppy.tracking.models import WeightLogEntry
from preppy.tracking.rounding import round_places

# Base smoothing factor for perfectly stable data
BASE_SMOOTHING = 0.1

# Cap on the variability boost, keeps α <= 0.4
MAX_VARIABILITY_BOOST = 0.3

# Number of raw weights (including today) used to measure variability
VARIABILITY_WINDOW = 14

# Fewer points than this and no trend is computed
MIN_TREND_POINTS = 3


def adaptive_alpha(weights: list[float]) -> float:
    """
    Smoothing factor for a window of raw weights.

    Args:
        weights: Raw weights in the variability window

    Returns:
        α in [0.1, 0.4]

    Example:
        >>> adaptive_alpha([80.0, 80.0, 80.0])
        0.1
        >>> adaptive_alpha([78.0, 82.0])  # σ = 2.0, boost capped at 0.3
        0.4
    """
    std_dev = float(np.std(weights))
    return BASE_SMOOTHING + min(std_dev / 2, MAX_VARIABILITY_BOOST)


def update_trend(prev_trend: float, today_weight: float, alpha: float) -> float:
    """
    Calculate today's trend value, rounded to 0.01 kg.

    Args:
        prev_trend: Previous trend value (T_{n-1})
        today_weight: Today's scale weight (W_n)
        alpha: Smoothing factor from adaptive_alpha()

    Returns:
        Today's trend value (T_n)
    """
    return round_places(alpha * today_weight + (1 - alpha) * prev_trend, 2)


def calculate_adaptive_trend(entries: list[WeightLogEntry]) -> list[WeightLogEntry]:
    """
    Annotate a weight series with adaptive trend weights.

    Input may be in any order. The earliest entry seeds the trend with its
    own weight. Series shorter than three entries come back with
    trend_weight_kg set to None.

    Args:
        entries: Weight log entries, typically after gap filling

    Returns:
        New entries with trend_weight_kg set, sorted DESCENDING by date
        (most recent first)
    """
    if len(entries) < MIN_TREND_POINTS:
        return [replace(e, trend_weight_kg=None) for e in entries]

    ordered = sort_by_date(entries)
    raw = [e.weight_kg for e in ordered]

    result = [replace(ordered[0], trend_weight_kg=ordered[0].weight_kg)]
    for i in range(1, len(ordered)):
        window = raw[max(0, i - VARIABILITY_WINDOW + 1) : i + 1]
        alpha = adaptive_alpha(window)
        trend = update_trend(result[-1].trend_weight_kg, raw[i], alpha)  # type: ignore[arg-type]
        result.append(replace(ordered[i], trend_weight_kg=trend))

    result.reverse()
    return result


def ascending(entries: list[WeightLogEntry]) -> list[WeightLogEntry]:
    """Chronological view of a trend series returned by calculate_adaptive_trend."""
    return sort_by_date(entries)


def trend_value(entry: WeightLogEntry) -> float:
    """Trend weight of an entry, falling back to its raw weight."""
    if entry.trend_weight_kg is None:
        return entry.weight_kg
    return entry.trend_weight_kg
