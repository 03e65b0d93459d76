"""Tests for outlier-resistant calorie averaging."""

from __future__ import annotations

import pytest

from preppy.tracking.robust import coefficient_of_variation, iqr_bounds, robust_mean


class TestRobustMean:
    """Tests for robust_mean function."""

    def test_empty_is_zero(self) -> None:
        assert robust_mean([]) == 0.0

    def test_one_or_two_values_plain_mean(self) -> None:
        assert robust_mean([2000]) == 2000
        assert robust_mean([2000, 8000]) == 5000

    def test_clean_data_equals_mean(self) -> None:
        values = [2000, 2010, 1995, 2005, 1998]
        assert robust_mean(values) == pytest.approx(sum(values) / len(values))

    def test_outliers_dropped(self) -> None:
        """Fences [1992.5, 2012.5] drop 1990 and 9000; 8 of 10 remain."""
        values = [1990, 2000, 2010, 2000, 1995, 2005, 2000, 9000, 2000, 2000]
        assert robust_mean(values) == pytest.approx(2001.25)

    def test_extreme_outlier_resisted(self) -> None:
        """One 8000 kcal day among clustered values barely moves the result."""
        values = [2000, 2010, 1995, 2005] + [2000] * 8 + [8000]
        plain = sum(values) / len(values)
        robust = robust_mean(values)

        assert robust == pytest.approx(2001, abs=5)
        assert plain - robust > 400

    def test_falls_back_to_median(self) -> None:
        """Zero IQR flags too many values, so the (upper) median is used."""
        values = [2000, 2010, 1995, 2005] + [2000] * 8 + [8000]
        # Only the nine 2000s survive fences of [2000, 2000]: 9 < 0.7 * 13
        assert robust_mean(values) == 2000

    def test_median_fallback_even_length(self) -> None:
        values = [3100, 1000, 2000, 2000, 2000, 2000, 2000, 2000, 1100, 3000]
        lower, upper = iqr_bounds(values)
        kept = [v for v in values if lower <= v <= upper]
        assert len(kept) < 7  # forces the fallback
        assert robust_mean(values) == 2000

    def test_input_not_mutated(self) -> None:
        values = [2100, 1900, 2000, 5000]
        robust_mean(values)
        assert values == [2100, 1900, 2000, 5000]


class TestIqrBounds:
    """Tests for iqr_bounds function."""

    def test_index_truncation_quartiles(self) -> None:
        # n=5: q1 = sorted[1] = 1998, q3 = sorted[3] = 2005, IQR 7
        lower, upper = iqr_bounds([2000, 2010, 1995, 2005, 1998])
        assert lower == pytest.approx(1987.5)
        assert upper == pytest.approx(2015.5)


class TestCoefficientOfVariation:
    """Tests for coefficient_of_variation function."""

    def test_identical_values(self) -> None:
        assert coefficient_of_variation([2500, 2500, 2500]) == 0.0

    def test_population_std(self) -> None:
        # mean 2200, population std 200
        assert coefficient_of_variation([2000, 2400]) == pytest.approx(200 / 2200)
