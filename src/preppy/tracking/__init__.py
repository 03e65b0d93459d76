"""Adaptive TDEE estimation from weight and calorie logs.

Pipeline stages, leaves first:
- Gap filling (linear interpolation across gaps of up to 3 days)
- Adaptive EMA trend weight (smoothing grows with recent variability)
- Robust mean (IQR outlier filtering, median fallback)
- Multi-window TDEE estimate with confidence and data-quality report
- Coaching gate (weekly floor, quality-scaled change threshold)
"""

from __future__ import annotations

from preppy.tracking.coaching import (
    MacroTargets,
    WeeklyCheckInResult,
    recommend_macro_targets,
    run_weekly_check_in,
    should_update_recommendations,
)
from preppy.tracking.ema import calculate_adaptive_trend
from preppy.tracking.gap_fill import fill_weight_gaps
from preppy.tracking.models import (
    AnalysisWindow,
    Confidence,
    DataQualityMetrics,
    MacroLogEntry,
    QualityLevel,
    TDEECalculationResult,
    WeightLogEntry,
)
from preppy.tracking.robust import robust_mean
from preppy.tracking.tdee_calc import InsufficientDataError, calculate_dynamic_tdee

__all__ = [
    "AnalysisWindow",
    "Confidence",
    "DataQualityMetrics",
    "InsufficientDataError",
    "MacroLogEntry",
    "MacroTargets",
    "QualityLevel",
    "TDEECalculationResult",
    "WeeklyCheckInResult",
    "WeightLogEntry",
    "calculate_adaptive_trend",
    "calculate_dynamic_tdee",
    "fill_weight_gaps",
    "recommend_macro_targets",
    "robust_mean",
    "run_weekly_check_in",
    "should_update_recommendations",
]
