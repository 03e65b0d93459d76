"""Synthetic weight and calorie logs for demos and tests."""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Optional

from preppy.tracking.models import MacroLogEntry, WeightLogEntry
from preppy.tracking.rounding import round_half_up, round_places

# Goal -> (daily weight drift kg, calorie offset from TDEE)
GOAL_PROFILES: dict[str, tuple[float, float]] = {
    "fat_loss": (-0.05, -350.0),  # ~0.35 kg/week loss
    "muscle_gain": (0.03, 250.0),  # ~0.21 kg/week gain
    "maintenance": (0.0, 0.0),
}

WEIGHT_NOISE_KG = 1.0  # total spread, +/- 0.5 kg
CALORIE_NOISE_KCAL = 300.0  # total spread, +/- 150 kcal

# Macro split of calories: protein 30%, carbs 40%, fat 30%
PROTEIN_SHARE = 0.30
CARB_SHARE = 0.40
FAT_SHARE = 0.30


def generate_sample_logs(
    start_weight_kg: float,
    tdee: float,
    goal: str = "maintenance",
    days: int = 21,
    end_date: Optional[date] = None,
    seed: Optional[int] = None,
) -> tuple[list[WeightLogEntry], list[MacroLogEntry]]:
    """
    Generate realistic daily logs ending on end_date.

    Args:
        start_weight_kg: Underlying weight on the first day
        tdee: True maintenance calories of the simulated user
        goal: "fat_loss", "muscle_gain" or "maintenance"
        days: Number of days to generate
        end_date: Last logged day (default: today)
        seed: Random seed for reproducible output

    Returns:
        (weight_log, macro_log), both ascending by date

    Raises:
        ValueError: If goal is unknown
    """
    if goal not in GOAL_PROFILES:
        raise ValueError(
            f"goal must be one of {tuple(GOAL_PROFILES)}, got '{goal}'"
        )

    rng = random.Random(seed)
    daily_drift, calorie_offset = GOAL_PROFILES[goal]
    calorie_target = tdee + calorie_offset
    last_day = end_date or date.today()
    first_day = last_day - timedelta(days=days - 1)

    weights: list[WeightLogEntry] = []
    macros: list[MacroLogEntry] = []
    underlying = start_weight_kg

    for i in range(days):
        day = first_day + timedelta(days=i)

        fluctuation = (rng.random() - 0.5) * WEIGHT_NOISE_KG
        weights.append(
            WeightLogEntry(date=day, weight_kg=round_places(underlying + fluctuation, 2))
        )

        calories = round_half_up(
            calorie_target + (rng.random() - 0.5) * CALORIE_NOISE_KCAL
        )
        macros.append(
            MacroLogEntry(
                date=day,
                calories=calories,
                protein=round_half_up(calories * PROTEIN_SHARE / 4),
                carbs=round_half_up(calories * CARB_SHARE / 4),
                fat=round_half_up(calories * FAT_SHARE / 9),
            )
        )

        underlying += daily_drift

    return weights, macros
