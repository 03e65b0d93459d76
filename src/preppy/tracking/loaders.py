"""Load weight and macro logs from CSV or JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from preppy.tracking.models import MacroLogEntry, WeightLogEntry

logger = logging.getLogger(__name__)

WEIGHT_REQUIRED_COLUMNS = ["date", "weight_kg"]
MACRO_REQUIRED_COLUMNS = ["date", "calories"]
MACRO_OPTIONAL_COLUMNS = ["protein", "carbs", "fat"]

# camelCase keys used by the app's exported documents
COLUMN_ALIASES = {
    "weightKg": "weight_kg",
    "trendWeightKg": "trend_weight_kg",
    "isInterpolated": "is_interpolated",
    "id": "entry_id",
}


def _read_frame(path: Path) -> pd.DataFrame:
    """Read a CSV or JSON (list of records) file into a DataFrame."""
    if path.suffix.lower() == ".json":
        with open(path) as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"{path}: expected a JSON list of records")
        df = pd.DataFrame.from_records(records)
    else:
        df = pd.read_csv(path)
    return df.rename(columns=COLUMN_ALIASES)


def _require_columns(df: pd.DataFrame, required: list[str], path: Path) -> None:
    missing = set(required) - set(df.columns)
    if missing:
        raise ValueError(
            f"{path}: missing required columns: {sorted(missing)}. "
            f"Required columns are: {required}"
        )


def _prepare(df: pd.DataFrame, required: list[str], path: Path) -> pd.DataFrame:
    """Drop incomplete rows, parse dates and keep the last row per date."""
    complete = df.dropna(subset=required)
    skipped = len(df) - len(complete)
    if skipped:
        logger.warning("%s: skipped %d rows with missing values", path, skipped)

    complete = complete.assign(date=pd.to_datetime(complete["date"]).dt.date)
    return complete.drop_duplicates(subset="date", keep="last").sort_values("date")


def _optional_str(row: pd.Series, column: str) -> Any:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return str(value)


def load_weight_log(path: Path) -> list[WeightLogEntry]:
    """Load a weight log.

    CSV format:
        date,weight_kg,notes
        2025-01-15,82.4,after run

    Args:
        path: CSV or JSON file

    Returns:
        Entries ascending by date

    Raises:
        ValueError: If required columns are missing
    """
    df = _read_frame(path)
    _require_columns(df, WEIGHT_REQUIRED_COLUMNS, path)
    df = _prepare(df, WEIGHT_REQUIRED_COLUMNS, path)

    return [
        WeightLogEntry(
            date=row["date"],
            weight_kg=float(row["weight_kg"]),
            notes=_optional_str(row, "notes"),
            entry_id=_optional_str(row, "entry_id"),
        )
        for _, row in df.iterrows()
    ]


def load_macro_log(path: Path) -> list[MacroLogEntry]:
    """Load a calorie/macro log.

    CSV format:
        date,calories,protein,carbs,fat
        2025-01-15,2350,160,240,80

    Protein, carbs and fat default to 0 when absent.

    Args:
        path: CSV or JSON file

    Returns:
        Entries ascending by date

    Raises:
        ValueError: If required columns are missing
    """
    df = _read_frame(path)
    _require_columns(df, MACRO_REQUIRED_COLUMNS, path)
    df = _prepare(df, MACRO_REQUIRED_COLUMNS, path)

    for column in MACRO_OPTIONAL_COLUMNS:
        if column not in df.columns:
            df[column] = 0.0
    df[MACRO_OPTIONAL_COLUMNS] = df[MACRO_OPTIONAL_COLUMNS].fillna(0.0)

    return [
        MacroLogEntry(
            date=row["date"],
            calories=float(row["calories"]),
            protein=float(row["protein"]),
            carbs=float(row["carbs"]),
            fat=float(row["fat"]),
            notes=_optional_str(row, "notes"),
            entry_id=_optional_str(row, "entry_id"),
        )
        for _, row in df.iterrows()
    ]


def save_weight_log(entries: list[WeightLogEntry], path: Path) -> None:
    """Write a weight log as CSV."""
    df = pd.DataFrame(
        [{"date": e.date.isoformat(), "weight_kg": e.weight_kg} for e in entries]
    )
    df.to_csv(path, index=False)


def save_macro_log(entries: list[MacroLogEntry], path: Path) -> None:
    """Write a macro log as CSV."""
    df = pd.DataFrame(
        [
            {
                "date": e.date.isoformat(),
                "calories": e.calories,
                "protein": e.protein,
                "carbs": e.carbs,
                "fat": e.fat,
            }
            for e in entries
        ]
    )
    df.to_csv(path, index=False)
