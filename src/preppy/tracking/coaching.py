"""Weekly coaching: when to change targets, and what to change them to.

The gate keeps users from being whiplashed by week-to-week noise in the TDEE
estimate. Recommendations change at most once a week, and only when the
estimate moved by more than a threshold that grows as data quality drops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from preppy.tracking.gap_fill import MAX_INTERPOLATION_GAP_DAYS
from preppy.tracking.models import (
    DataQualityMetrics,
    MacroLogEntry,
    QualityLevel,
    TDEECalculationResult,
    WeightLogEntry,
)
from preppy.tracking.rounding import round_half_up
from preppy.tracking.tdee_calc import (
    DEFAULT_MIN_DAYS,
    KCAL_PER_KG,
    InsufficientDataError,
    calculate_dynamic_tdee,
)

logger = logging.getLogger(__name__)

MIN_DAYS_BETWEEN_UPDATES = 7

# Minimum relative TDEE change required to act, by data quality
CHANGE_THRESHOLDS: dict[QualityLevel, float] = {
    QualityLevel.HIGH: 0.03,
    QualityLevel.MEDIUM: 0.05,
    QualityLevel.LOW: 0.08,
}

# Atwater factors (kcal per gram)
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


@dataclass
class MacroTargets:
    """Daily calorie and macro targets."""

    calories: int
    protein: float
    carbs: int
    fat: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


@dataclass
class WeeklyCheckInResult:
    """Outcome of a weekly check-in."""

    success: bool
    should_update: bool
    message: str = ""
    tdee_result: Optional[TDEECalculationResult] = None
    recommendation: Optional[MacroTargets] = None
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "shouldUpdate": self.should_update,
            "message": self.message,
            "tdeeResult": self.tdee_result.to_dict() if self.tdee_result else None,
            "recommendation": (
                self.recommendation.to_dict() if self.recommendation else None
            ),
            "summary": self.summary,
        }


def _quality_level(
    data_quality: Union[DataQualityMetrics, QualityLevel, str]
) -> QualityLevel:
    if isinstance(data_quality, DataQualityMetrics):
        return data_quality.overall_quality
    if isinstance(data_quality, QualityLevel):
        return data_quality
    return QualityLevel(data_quality)


def should_update_recommendations(
    current_tdee: float,
    previous_tdee: float,
    data_quality: Union[DataQualityMetrics, QualityLevel, str],
    days_since_last_update: int,
    min_days_between_updates: int = MIN_DAYS_BETWEEN_UPDATES,
    thresholds: Optional[dict[QualityLevel, float]] = None,
) -> bool:
    """
    Decide whether a new TDEE should trigger new targets.

    Args:
        current_tdee: Freshly computed TDEE
        previous_tdee: TDEE behind the current targets
        data_quality: Quality report (or just its overall level)
        days_since_last_update: Days since targets last changed
        min_days_between_updates: Hard floor between updates
        thresholds: Quality level -> minimum relative change

    Returns:
        True if the change is large enough for the data quality

    Raises:
        ValueError: If previous_tdee is not positive
    """
    if days_since_last_update < min_days_between_updates:
        return False

    if previous_tdee <= 0:
        raise ValueError(f"previous_tdee must be positive, got {previous_tdee}")

    level = _quality_level(data_quality)
    threshold = (thresholds or CHANGE_THRESHOLDS)[level]
    change_percent = abs(current_tdee - previous_tdee) / previous_tdee

    logger.debug(
        "TDEE change %.1f%% vs %.0f%% threshold (%s quality)",
        change_percent * 100,
        threshold * 100,
        level.value,
    )
    return change_percent > threshold


def recommend_macro_targets(
    dynamic_tdee: float,
    target_weekly_change_kg: float,
    protein_g: float,
    fat_g: float,
) -> MacroTargets:
    """
    New daily targets for a desired rate of weight change.

    Protein and fat stay where they are; carbohydrates absorb the calorie
    adjustment.

    Args:
        dynamic_tdee: Estimated maintenance calories
        target_weekly_change_kg: Desired change per week (negative to lose)
        protein_g: Current protein target
        fat_g: Current fat target

    Returns:
        MacroTargets

    Example:
        >>> recommend_macro_targets(2500, -0.5, 150, 70)
        MacroTargets(calories=1950, protein=150, carbs=180, fat=70)
    """
    if dynamic_tdee <= 0:
        raise ValueError(f"dynamic_tdee must be positive, got {dynamic_tdee}")

    daily_adjustment = target_weekly_change_kg * KCAL_PER_KG / 7
    calories = round_half_up(dynamic_tdee + daily_adjustment)

    carb_calories = (
        calories - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
    )
    carbs = max(0, round_half_up(carb_calories / KCAL_PER_G_CARBS))

    return MacroTargets(calories=calories, protein=protein_g, carbs=carbs, fat=fat_g)


def build_coaching_summary(
    result: TDEECalculationResult, targets: Optional[MacroTargets] = None
) -> str:
    """Adherence-neutral summary of the week's numbers."""
    lines = [
        "Looking at your progress over the last couple of weeks, your weight "
        f"trend changed by about {result.weekly_weight_change_kg:.2f} kg/week on "
        f"an average intake of {result.avg_daily_calories:.0f} kcal/day."
    ]
    if targets is not None:
        lines.append(
            f"Based on this, your updated TDEE is now estimated at "
            f"{result.dynamic_tdee} kcal. To keep you on track for your goal, "
            f"your targets for the week ahead are {targets.calories} kcal."
        )
        lines.append("Let's have a great week!")
    else:
        lines.append(
            f"Your TDEE estimate of {result.dynamic_tdee} kcal is close to what "
            "your current targets are built on, so they stay the same this week."
        )
        lines.append("Keep up the consistent effort!")
    return " ".join(lines)


def run_weekly_check_in(
    weight_log: list[WeightLogEntry],
    macro_log: list[MacroLogEntry],
    previous_tdee: Optional[float],
    days_since_last_update: int,
    target_weekly_change_kg: float = 0.0,
    protein_g: float = 0.0,
    fat_g: float = 0.0,
    min_days: int = DEFAULT_MIN_DAYS,
    min_days_between_updates: int = MIN_DAYS_BETWEEN_UPDATES,
    thresholds: Optional[dict[QualityLevel, float]] = None,
    window_weights: Optional[dict[int, float]] = None,
    max_gap_days: int = MAX_INTERPOLATION_GAP_DAYS,
) -> WeeklyCheckInResult:
    """
    Estimate TDEE, apply the coaching gate and build new targets.

    With no previous TDEE (first check-in) only the weekly floor applies.
    Insufficient data yields an unsuccessful result rather than an error.

    Args:
        weight_log: Logged weights
        macro_log: Logged daily intake
        previous_tdee: TDEE behind the current targets, None on first check-in
        days_since_last_update: Days since targets last changed
        target_weekly_change_kg: Desired change per week
        protein_g: Current protein target
        fat_g: Current fat target
        min_days: Minimum log length for an estimate
        min_days_between_updates: Hard floor between updates
        thresholds: Quality level -> minimum relative change
        window_weights: Window length -> blending weight for the estimate
        max_gap_days: Largest weight-log gap bridged by interpolation

    Returns:
        WeeklyCheckInResult
    """
    try:
        tdee_result = calculate_dynamic_tdee(
            weight_log,
            macro_log,
            min_days=min_days,
            window_weights=window_weights,
            max_gap_days=max_gap_days,
        )
    except InsufficientDataError as e:
        logger.info("Check-in skipped: %s", e)
        return WeeklyCheckInResult(success=False, should_update=False, message=str(e))

    if previous_tdee is None:
        should_update = days_since_last_update >= min_days_between_updates
    else:
        should_update = should_update_recommendations(
            tdee_result.dynamic_tdee,
            previous_tdee,
            tdee_result.data_quality,
            days_since_last_update,
            min_days_between_updates=min_days_between_updates,
            thresholds=thresholds,
        )

    recommendation = None
    if should_update:
        recommendation = recommend_macro_targets(
            tdee_result.dynamic_tdee, target_weekly_change_kg, protein_g, fat_g
        )
        message = "Targets updated"
    else:
        message = "Targets unchanged"

    return WeeklyCheckInResult(
        success=True,
        should_update=should_update,
        message=message,
        tdee_result=tdee_result,
        recommendation=recommendation,
        summary=build_coaching_summary(tdee_result, recommendation),
    )
