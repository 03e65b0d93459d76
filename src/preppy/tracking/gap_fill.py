"""Linear gap filling for sparse weight logs.

Short gaps (2-3 days between logged weights) are assumed to be missed
logging days and are bridged with linearly interpolated entries. Longer
gaps are left alone: a week without logging usually means something
actually changed, and a straight line would hide it.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from preppy.tracking.models import WeightLogEntry
from preppy.tracking.rounding import round_places

logger = logging.getLogger(__name__)

MAX_INTERPOLATION_GAP_DAYS = 3
INTERPOLATED_NOTE = "Interpolated"


def sort_by_date(entries: list[WeightLogEntry]) -> list[WeightLogEntry]:
    """Return a new list of entries sorted ascending by date."""
    return sorted(entries, key=lambda e: e.date)


def interpolate_between(
    start: WeightLogEntry, end: WeightLogEntry
) -> list[WeightLogEntry]:
    """
    Build the synthetic entries strictly between two logged weights.

    Args:
        start: Earlier logged entry
        end: Later logged entry

    Returns:
        One entry per missing day, weights on the straight line between
        start and end rounded to 0.1 kg

    Example:
        >>> a = WeightLogEntry(date(2025, 1, 1), 70.0)
        >>> b = WeightLogEntry(date(2025, 1, 4), 73.0)
        >>> [e.weight_kg for e in interpolate_between(a, b)]
        [71.0, 72.0]
    """
    days_diff = (end.date - start.date).days
    step = (end.weight_kg - start.weight_kg) / days_diff

    return [
        WeightLogEntry(
            date=start.date + timedelta(days=day),
            weight_kg=round_places(start.weight_kg + step * day, 1),
            is_interpolated=True,
            notes=INTERPOLATED_NOTE,
            entry_id=f"interpolated-{start.entry_id or start.date.isoformat()}-{day}",
        )
        for day in range(1, days_diff)
    ]


def fill_weight_gaps(
    entries: list[WeightLogEntry],
    max_gap_days: int = MAX_INTERPOLATION_GAP_DAYS,
) -> list[WeightLogEntry]:
    """
    Fill short gaps in a weight log with interpolated entries.

    The input may be in any order and is not modified. Logged entries are
    kept as-is; for each adjacent pair whose gap d satisfies
    1 < d <= max_gap_days, d-1 interpolated entries are inserted.

    Args:
        entries: Weight log entries
        max_gap_days: Largest gap (in days) that will be bridged

    Returns:
        New list sorted ascending by date
    """
    ordered = sort_by_date(entries)
    if len(ordered) < 2:
        return ordered

    filled: list[WeightLogEntry] = []
    for current, following in zip(ordered, ordered[1:]):
        filled.append(current)
        gap = (following.date - current.date).days
        if 1 < gap <= max_gap_days:
            filled.extend(interpolate_between(current, following))
        elif gap > max_gap_days:
            logger.debug(
                "Leaving %d-day gap after %s unfilled", gap, current.date.isoformat()
            )
    filled.append(ordered[-1])

    return filled
