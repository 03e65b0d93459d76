"""Data models for weight/calorie logs and adaptive TDEE results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class Confidence(Enum):
    """Agreement level across the TDEE analysis windows."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class QualityLevel(Enum):
    """Overall completeness rating for the input logs."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class WeightLogEntry:
    """A single weight measurement, either logged or gap-filled.

    trend_weight_kg is only populated by the trend smoother. Interpolated
    entries are produced fresh on every computation and never persisted.
    """

    date: date
    weight_kg: float
    trend_weight_kg: Optional[float] = None
    is_interpolated: bool = False
    notes: Optional[str] = None
    entry_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.weight_kg > 0:
            raise ValueError(f"weight_kg must be positive, got {self.weight_kg}")


@dataclass
class MacroLogEntry:
    """One day of recorded calorie and macro intake."""

    date: date
    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    notes: Optional[str] = None
    entry_id: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("calories", "protein", "carbs", "fat"):
            value = getattr(self, name)
            # NaN fails both comparisons
            if not value >= 0:
                raise ValueError(f"{name} must be nonnegative, got {value}")


@dataclass
class DataQualityMetrics:
    """Completeness of the weight and macro logs used for an estimate."""

    weight_completeness: float  # 0-100%
    macro_completeness: float  # 0-100%
    overall_quality: QualityLevel
    missing_days: int
    interpolated_days: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "weightCompleteness": self.weight_completeness,
            "macroCompleteness": self.macro_completeness,
            "overallQuality": self.overall_quality.value,
            "missingDays": self.missing_days,
            "interpolatedDays": self.interpolated_days,
        }


@dataclass
class AnalysisWindow:
    """TDEE estimate from one sliding window and its blending weight."""

    days: int
    tdee_estimate: float
    weight: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "days": self.days,
            "tdeeEstimate": self.tdee_estimate,
            "weight": self.weight,
        }


@dataclass
class TDEECalculationResult:
    """Output of the adaptive TDEE estimator."""

    dynamic_tdee: int
    weekly_weight_change_kg: float
    avg_daily_calories: int
    confidence: Confidence
    data_quality: DataQualityMetrics
    analysis_windows: list[AnalysisWindow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "dynamicTdee": self.dynamic_tdee,
            "weeklyWeightChangeKg": self.weekly_weight_change_kg,
            "avgDailyCalories": self.avg_daily_calories,
            "confidence": self.confidence.value,
            "dataQuality": self.data_quality.to_dict(),
            "analysisWindows": [w.to_dict() for w in self.analysis_windows],
        }
