"""Adaptive TDEE estimation from weight trend and calorie intake.

Energy balance says that whatever you ate and did not burn shows up on the
scale. Over a window of N days:

    TDEE ≈ mean intake - (trend change per day × 7700 kcal/kg)

Three overlapping windows (14, 21 and 28 days, most recent data) each give
an estimate. Short windows react faster and get more say in the blend
(0.5 / 0.3 / 0.2); windows without enough data simply drop out and the
remaining weights renormalize. How closely the windows agree is the
confidence rating.
"""

from __future__ import annotations

import logging
from typing import Optional

from preppy.tracking.ema import ascending, calculate_adaptive_trend, trend_value
from preppy.tracking.gap_fill import MAX_INTERPOLATION_GAP_DAYS, fill_weight_gaps
from preppy.tracking.models import (
    AnalysisWindow,
    Confidence,
    DataQualityMetrics,
    MacroLogEntry,
    QualityLevel,
    TDEECalculationResult,
    WeightLogEntry,
)
from preppy.tracking.robust import coefficient_of_variation, robust_mean
from preppy.tracking.rounding import round_half_up, round_places

logger = logging.getLogger(__name__)

# Energy density of body mass change (kcal per kg)
KCAL_PER_KG = 7700

DEFAULT_MIN_DAYS = 14

# Window length (days) -> blending weight
ANALYSIS_WINDOWS: dict[int, float] = {14: 0.5, 21: 0.3, 28: 0.2}

# Calorie average reported alongside the estimate
AVG_CALORIES_DAYS = 14

# Trend points used for the reported weekly change
WEEKLY_CHANGE_POINTS = 7

HIGH_CONFIDENCE_CV = 0.05
MEDIUM_CONFIDENCE_CV = 0.10

HIGH_QUALITY_COMPLETENESS = 0.8
MEDIUM_QUALITY_COMPLETENESS = 0.6


class InsufficientDataError(ValueError):
    """Raised when the logs are too short for a TDEE estimate."""

    def __init__(self, min_days: int, weight_days: int, macro_days: int):
        self.min_days = min_days
        self.weight_days = weight_days
        self.macro_days = macro_days
        super().__init__(
            f"Need at least {min_days} days of data for accurate calculation "
            f"(have {weight_days} weight and {macro_days} calorie entries)"
        )


def estimate_window(
    trend_points: list[WeightLogEntry],
    macros: list[MacroLogEntry],
    window_days: int,
    weight: float,
) -> AnalysisWindow:
    """
    TDEE estimate from the most recent window_days of data.

    Args:
        trend_points: Trend-annotated weights, ascending by date
        macros: Macro log, ascending by date
        window_days: Window length
        weight: Blending weight recorded with the estimate

    Returns:
        AnalysisWindow for this window
    """
    recent_weights = trend_points[-window_days:]
    recent_macros = macros[-window_days:]

    # Positive means weight was gained across the window
    weight_change_kg = trend_value(recent_weights[-1]) - trend_value(recent_weights[0])
    weekly_change_kg = weight_change_kg / window_days * 7

    avg_calories = robust_mean([m.calories for m in recent_macros])
    calorie_equivalent_per_day = weekly_change_kg * KCAL_PER_KG / 7

    return AnalysisWindow(
        days=window_days,
        tdee_estimate=avg_calories - calorie_equivalent_per_day,
        weight=weight,
    )


def calculate_weekly_change(trend_points: list[WeightLogEntry]) -> float:
    """
    Trend change across the most recent seven points, in kg.

    The daily rate is scaled back up by seven, so the seven-point delta is
    reported as-is.

    Args:
        trend_points: Trend-annotated weights, ascending by date

    Returns:
        Signed change rounded to 3 decimals, 0.0 with fewer than 7 points
    """
    if len(trend_points) < WEEKLY_CHANGE_POINTS:
        return 0.0
    recent = trend_points[-WEEKLY_CHANGE_POINTS:]
    start = trend_value(recent[0])
    end = trend_value(recent[-1])
    return round_places((end - start) / 7 * 7, 3)


def calculate_confidence(estimates: list[float]) -> Confidence:
    """
    Confidence from agreement between window estimates.

    Args:
        estimates: Per-window TDEE estimates

    Returns:
        HIGH if CV < 5%, MEDIUM if CV < 10%, LOW otherwise or with fewer
        than two estimates
    """
    if len(estimates) < 2:
        return Confidence.LOW

    cv = coefficient_of_variation(estimates)
    if cv < HIGH_CONFIDENCE_CV:
        return Confidence.HIGH
    if cv < MEDIUM_CONFIDENCE_CV:
        return Confidence.MEDIUM
    return Confidence.LOW


def assess_data_quality(
    filled_weights: list[WeightLogEntry], macros: list[MacroLogEntry]
) -> DataQualityMetrics:
    """
    Completeness of the logs relative to the gap-filled weight series.

    Args:
        filled_weights: Weight log after gap filling
        macros: Macro log

    Returns:
        DataQualityMetrics with percentages rounded to one decimal
    """
    total = len(filled_weights)
    logged = sum(1 for w in filled_weights if not w.is_interpolated)
    interpolated = total - logged

    weight_completeness = logged / total
    macro_completeness = len(macros) / total

    if (
        weight_completeness > HIGH_QUALITY_COMPLETENESS
        and macro_completeness > HIGH_QUALITY_COMPLETENESS
    ):
        overall = QualityLevel.HIGH
    elif (
        weight_completeness > MEDIUM_QUALITY_COMPLETENESS
        and macro_completeness > MEDIUM_QUALITY_COMPLETENESS
    ):
        overall = QualityLevel.MEDIUM
    else:
        overall = QualityLevel.LOW

    return DataQualityMetrics(
        weight_completeness=round_places(weight_completeness * 100, 1),
        macro_completeness=round_places(macro_completeness * 100, 1),
        overall_quality=overall,
        missing_days=total - logged,
        interpolated_days=interpolated,
    )


def calculate_dynamic_tdee(
    weight_log: list[WeightLogEntry],
    macro_log: list[MacroLogEntry],
    min_days: int = DEFAULT_MIN_DAYS,
    window_weights: Optional[dict[int, float]] = None,
    max_gap_days: int = MAX_INTERPOLATION_GAP_DAYS,
) -> TDEECalculationResult:
    """
    Estimate TDEE from weight and calorie logs.

    Args:
        weight_log: Logged weights, any order
        macro_log: Logged daily intake, any order
        min_days: Minimum entries required in each log
        window_weights: Window length -> blending weight, defaults to
                        ANALYSIS_WINDOWS
        max_gap_days: Largest weight-log gap bridged by interpolation

    Returns:
        TDEECalculationResult

    Raises:
        InsufficientDataError: If either log has fewer than min_days entries,
            or no analysis window has enough data
    """
    if len(weight_log) < min_days or len(macro_log) < min_days:
        raise InsufficientDataError(min_days, len(weight_log), len(macro_log))

    windows = window_weights if window_weights is not None else ANALYSIS_WINDOWS

    filled = fill_weight_gaps(weight_log, max_gap_days=max_gap_days)
    trend_points = ascending(calculate_adaptive_trend(filled))
    macros = sorted(macro_log, key=lambda m: m.date)

    estimates: list[AnalysisWindow] = []
    for window_days, weight in sorted(windows.items()):
        if len(trend_points) >= window_days and len(macros) >= window_days:
            window = estimate_window(trend_points, macros, window_days, weight)
            logger.debug(
                "%d-day window: TDEE %.0f kcal (weight %.2f)",
                window_days,
                window.tdee_estimate,
                weight,
            )
            estimates.append(window)

    if not estimates:
        shortest = min(windows)
        raise InsufficientDataError(shortest, len(trend_points), len(macros))

    total_weight = sum(e.weight for e in estimates)
    weighted_tdee = sum(e.tdee_estimate * e.weight for e in estimates) / total_weight

    result = TDEECalculationResult(
        dynamic_tdee=round_half_up(weighted_tdee),
        weekly_weight_change_kg=calculate_weekly_change(trend_points),
        avg_daily_calories=round_half_up(
            robust_mean([m.calories for m in macros[-AVG_CALORIES_DAYS:]])
        ),
        confidence=calculate_confidence([e.tdee_estimate for e in estimates]),
        data_quality=assess_data_quality(filled, macro_log),
        analysis_windows=estimates,
    )
    logger.info(
        "Dynamic TDEE %d kcal from %d windows (confidence %s)",
        result.dynamic_tdee,
        len(estimates),
        result.confidence.value,
    )
    return result
