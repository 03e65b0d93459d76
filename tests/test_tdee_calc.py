"""Tests for the multi-window TDEE estimator."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from preppy.tracking.models import Confidence, QualityLevel, WeightLogEntry
from preppy.tracking.tdee_calc import (
    InsufficientDataError,
    assess_data_quality,
    calculate_confidence,
    calculate_dynamic_tdee,
    calculate_weekly_change,
)
from preppy.tracking.rounding import round_half_up


class TestCalculateDynamicTdee:
    """Tests for calculate_dynamic_tdee function."""

    def test_insufficient_weight_data(self, weight_log, macro_log) -> None:
        """Ten days of weights with min_days=14 always fails."""
        weights = weight_log([80.0] * 10)
        macros = macro_log([2500.0] * 20)

        with pytest.raises(InsufficientDataError) as exc_info:
            calculate_dynamic_tdee(weights, macros, min_days=14)

        assert exc_info.value.weight_days == 10
        assert "at least 14 days" in str(exc_info.value)

    def test_insufficient_macro_data(self, weight_log, macro_log) -> None:
        weights = weight_log([80.0] * 20)
        macros = macro_log([2500.0] * 13)

        with pytest.raises(InsufficientDataError):
            calculate_dynamic_tdee(weights, macros)

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            calculate_dynamic_tdee([], [])

    def test_no_window_with_enough_data(self, weight_log, macro_log) -> None:
        """Lowering min_days below the shortest window still gives no partial result."""
        weights = weight_log([80.0] * 10)
        macros = macro_log([2500.0] * 10)

        with pytest.raises(InsufficientDataError):
            calculate_dynamic_tdee(weights, macros, min_days=7)

    def test_steady_state(self, steady_logs) -> None:
        """Constant weight means TDEE equals intake, with full agreement."""
        result = calculate_dynamic_tdee(*steady_logs)

        assert result.dynamic_tdee == 2500
        assert result.avg_daily_calories == 2500
        assert result.weekly_weight_change_kg == 0.0
        assert result.confidence == Confidence.HIGH
        assert [w.days for w in result.analysis_windows] == [14, 21, 28]
        assert [w.weight for w in result.analysis_windows] == [0.5, 0.3, 0.2]

    def test_gaining_weight_tdee_below_intake(self, gaining_logs) -> None:
        result = calculate_dynamic_tdee(*gaining_logs)

        assert result.weekly_weight_change_kg > 0
        assert result.dynamic_tdee < result.avg_daily_calories
        for window in result.analysis_windows:
            assert window.tdee_estimate < 2800

    def test_losing_weight_tdee_above_intake(self, losing_logs) -> None:
        result = calculate_dynamic_tdee(*losing_logs)

        assert result.weekly_weight_change_kg < 0
        assert result.dynamic_tdee > result.avg_daily_calories

    def test_partial_windows_renormalize(self, make_logs) -> None:
        """With 21 days only the 14- and 21-day windows vote, divided by 0.8."""
        weights, macros = make_logs(
            [round(85.0 - 0.04 * i, 2) for i in range(21)], [2200.0] * 21
        )
        result = calculate_dynamic_tdee(weights, macros)

        windows = {w.days: w for w in result.analysis_windows}
        assert set(windows) == {14, 21}
        expected = (
            windows[14].tdee_estimate * 0.5 + windows[21].tdee_estimate * 0.3
        ) / 0.8
        assert result.dynamic_tdee == round_half_up(expected)

    def test_window_uses_most_recent_data(self, make_logs) -> None:
        """Old calorie history outside the 14-day window does not affect it."""
        weights, macros = make_logs([80.0] * 28, [3500.0] * 14 + [2500.0] * 14)
        result = calculate_dynamic_tdee(weights, macros)

        window_14 = result.analysis_windows[0]
        assert window_14.days == 14
        assert window_14.tdee_estimate == pytest.approx(2500)
        assert result.avg_daily_calories == 2500

    def test_window_energy_balance(self, make_logs) -> None:
        """Window estimate is robust mean minus trend change × 7700 / days."""
        weights, macros = make_logs(
            [round(80.0 + 0.1 * i, 2) for i in range(14)], [3000.0] * 14
        )
        result = calculate_dynamic_tdee(weights, macros)

        from preppy.tracking.ema import ascending, calculate_adaptive_trend

        trend = ascending(calculate_adaptive_trend(weights))
        change = trend[-1].trend_weight_kg - trend[0].trend_weight_kg
        expected = 3000 - (change / 14 * 7) * 7700 / 7

        assert len(result.analysis_windows) == 1
        assert result.analysis_windows[0].tdee_estimate == pytest.approx(expected)
        # A single window can never be high confidence
        assert result.confidence == Confidence.LOW

    def test_unsorted_macro_log(self, make_logs) -> None:
        weights, macros = make_logs([80.0] * 28, [3500.0] * 14 + [2500.0] * 14)
        macros.reverse()

        result = calculate_dynamic_tdee(weights, macros)
        assert result.analysis_windows[0].tdee_estimate == pytest.approx(2500)

    def test_gap_filled_weights_count_toward_windows(self, macro_log) -> None:
        """Weights logged every other day are filled to a daily series."""
        start = date(2025, 1, 1)
        weights = [
            WeightLogEntry(date=start + timedelta(days=2 * i), weight_kg=80.0)
            for i in range(14)
        ]
        macros = macro_log([2400.0] * 27)
        result = calculate_dynamic_tdee(weights, macros)

        # 14 logged + 13 interpolated = 27 points: 14- and 21-day windows
        assert [w.days for w in result.analysis_windows] == [14, 21]
        assert result.data_quality.interpolated_days == 13
        assert result.data_quality.overall_quality == QualityLevel.LOW

    def test_custom_window_weights(self, steady_logs) -> None:
        result = calculate_dynamic_tdee(*steady_logs, window_weights={14: 1.0})

        assert [w.days for w in result.analysis_windows] == [14]

    def test_deterministic(self, gaining_logs) -> None:
        assert calculate_dynamic_tdee(*gaining_logs) == calculate_dynamic_tdee(
            *gaining_logs
        )

    def test_to_dict_shape(self, steady_logs) -> None:
        data = calculate_dynamic_tdee(*steady_logs).to_dict()

        assert data["dynamicTdee"] == 2500
        assert data["confidence"] == "high"
        assert data["dataQuality"]["overallQuality"] == "high"
        assert data["analysisWindows"][0] == {
            "days": 14,
            "tdeeEstimate": 2500.0,
            "weight": 0.5,
        }


class TestCalculateWeeklyChange:
    """Tests for calculate_weekly_change function."""

    def _points(self, trends: list[float]) -> list[WeightLogEntry]:
        start = date(2025, 1, 1)
        return [
            WeightLogEntry(
                date=start + timedelta(days=i), weight_kg=80.0, trend_weight_kg=t
            )
            for i, t in enumerate(trends)
        ]

    def test_seven_point_delta_reported_as_is(self) -> None:
        points = self._points([81.0, 80.0, 79.9, 79.8, 79.7, 79.6, 79.5, 79.4])
        # Uses the last 7 points only: 79.4 - 80.0
        assert calculate_weekly_change(points) == pytest.approx(-0.6)

    def test_fewer_than_seven_points(self) -> None:
        assert calculate_weekly_change(self._points([80.0, 79.0])) == 0.0

    def test_rounded_to_three_decimals(self) -> None:
        points = self._points([80.0, 80.0, 80.0, 80.0, 80.0, 80.0, 80.12345])
        assert calculate_weekly_change(points) == 0.123


class TestCalculateConfidence:
    """Tests for calculate_confidence function."""

    def test_single_estimate_is_low(self) -> None:
        assert calculate_confidence([2500]) == Confidence.LOW

    def test_no_estimates_is_low(self) -> None:
        assert calculate_confidence([]) == Confidence.LOW

    def test_agreement_is_high(self) -> None:
        assert calculate_confidence([2500, 2510, 2490]) == Confidence.HIGH

    def test_moderate_spread_is_medium(self) -> None:
        # CV = 200 / 2200 = 0.091
        assert calculate_confidence([2000, 2400]) == Confidence.MEDIUM

    def test_wide_spread_is_low(self) -> None:
        # CV = 500 / 2500 = 0.2
        assert calculate_confidence([2000, 3000]) == Confidence.LOW


class TestAssessDataQuality:
    """Tests for assess_data_quality function."""

    def _filled(self, logged: int, interpolated: int) -> list[WeightLogEntry]:
        start = date(2025, 1, 1)
        return [
            WeightLogEntry(
                date=start + timedelta(days=i),
                weight_kg=80.0,
                is_interpolated=i >= logged,
            )
            for i in range(logged + interpolated)
        ]

    def test_complete_data_is_high(self, macro_log) -> None:
        quality = assess_data_quality(self._filled(9, 1), macro_log([2000.0] * 9))

        assert quality.weight_completeness == 90.0
        assert quality.macro_completeness == 90.0
        assert quality.overall_quality == QualityLevel.HIGH
        assert quality.missing_days == 1
        assert quality.interpolated_days == 1

    def test_exactly_80_percent_is_not_high(self, macro_log) -> None:
        quality = assess_data_quality(self._filled(8, 2), macro_log([2000.0] * 7))

        assert quality.weight_completeness == 80.0
        assert quality.macro_completeness == 70.0
        assert quality.overall_quality == QualityLevel.MEDIUM

    def test_sparse_macros_is_low(self, macro_log) -> None:
        quality = assess_data_quality(self._filled(10, 0), macro_log([2000.0] * 5))

        assert quality.macro_completeness == 50.0
        assert quality.overall_quality == QualityLevel.LOW
