"""Pytest fixtures for preppy tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from preppy.tracking.models import MacroLogEntry, WeightLogEntry

START_DATE = date(2025, 1, 1)


def _weight_log(
    weights: list[float], start: date = START_DATE
) -> list[WeightLogEntry]:
    """Daily weight entries starting at start."""
    return [
        WeightLogEntry(date=start + timedelta(days=i), weight_kg=w, entry_id=f"w{i}")
        for i, w in enumerate(weights)
    ]


def _macro_log(
    calories: list[float], start: date = START_DATE
) -> list[MacroLogEntry]:
    """Daily calorie entries with a fixed macro split."""
    return [
        MacroLogEntry(
            date=start + timedelta(days=i),
            calories=c,
            protein=150.0,
            carbs=250.0,
            fat=70.0,
        )
        for i, c in enumerate(calories)
    ]


@pytest.fixture
def weight_log():
    """Builder for a daily weight log."""
    return _weight_log


@pytest.fixture
def macro_log():
    """Builder for a daily calorie log."""
    return _macro_log


@pytest.fixture
def make_logs():
    """Factory for matching daily weight and macro logs."""

    def _make(weights: list[float], calories: list[float]):
        return _weight_log(weights), _macro_log(calories)

    return _make


@pytest.fixture
def steady_logs(make_logs):
    """28 days at constant weight and intake (maintenance at 2500 kcal)."""
    return make_logs([80.0] * 28, [2500.0] * 28)


@pytest.fixture
def gaining_logs(make_logs):
    """28 days gaining 0.05 kg/day on a steady 2800 kcal."""
    return make_logs([round(80.0 + 0.05 * i, 2) for i in range(28)], [2800.0] * 28)


@pytest.fixture
def losing_logs(make_logs):
    """28 days losing 0.05 kg/day on a steady 2000 kcal."""
    return make_logs([round(90.0 - 0.05 * i, 2) for i in range(28)], [2000.0] * 28)
