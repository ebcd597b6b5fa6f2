"""Pure stateless goal helpers — math only, never raises."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta

from weightgoals.engine.types import Direction, Goal, RecentChange, WeightSample

DEFAULT_TOLERANCE = 0.5  # kg
DEFAULT_GOAL_DAYS = 28


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------

def round_to_tenth(value: float) -> float:
    """Round to the nearest 0.1, halves away from zero (61.25 -> 61.3)."""
    scaled = math.floor(abs(value) * 10.0 + 0.5)
    return math.copysign(scaled / 10.0, value)


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


def band_progress(distance: float, tolerance: float) -> float:
    """Closeness to a target inside the tolerance band: 1 at the target, 0 at the edge or beyond.

    A non-positive tolerance has no band, so only a distance within it scores 1.
    """
    if tolerance <= 0.0:
        return 1.0 if distance <= tolerance else 0.0
    return 1.0 - min(distance / tolerance, 1.0)


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def start_of_day(value: datetime | date) -> datetime:
    """Midnight of the same calendar day. tzinfo is preserved."""
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end. Negative when end precedes start."""
    return (end - start).days


# ---------------------------------------------------------------------------
# Sample selection
# ---------------------------------------------------------------------------

def sort_samples(samples: Iterable[WeightSample]) -> list[WeightSample]:
    """Chronological copy. Stable, so equal dates keep input order."""
    return sorted(samples, key=lambda s: s.date)


def latest_on_or_before(
    ordered: Sequence[WeightSample],
    cutoff: datetime,
) -> WeightSample | None:
    """Last sample with date <= cutoff in an already sorted series.

    With duplicate dates the later one in the series wins.
    """
    found: WeightSample | None = None
    for sample in ordered:
        if sample.date > cutoff:
            break
        found = sample
    return found


# ---------------------------------------------------------------------------
# Direction & target date
# ---------------------------------------------------------------------------

def resolve_direction(baseline: float, target: float, tolerance: float) -> Direction:
    """Classify a goal from baseline vs target with a symmetric dead-band.

    A tolerance of 0 makes maintain mean exact equality.
    """
    if target > baseline + tolerance:
        return Direction.gain
    if target < baseline - tolerance:
        return Direction.lose
    return Direction.maintain


def resolve_target_date(goal: Goal, default_days: int = DEFAULT_GOAL_DAYS) -> datetime:
    """Goal end at start of day; open-ended goals last `default_days`."""
    if goal.target_date is not None:
        return start_of_day(goal.target_date)
    return start_of_day(goal.start_date + timedelta(days=default_days))


# ---------------------------------------------------------------------------
# Recent change between the last two records
# ---------------------------------------------------------------------------

def recent_change(samples: Iterable[WeightSample], threshold: float = 0.01) -> RecentChange | None:
    """Compare the latest sample with the one before it.

    Returns None with fewer than two samples.
    Changes smaller than `threshold` in magnitude are "flat".
    """
    ordered = sort_samples(samples)
    if len(ordered) < 2:
        return None
    previous, latest = ordered[-2], ordered[-1]
    change = latest.value - previous.value
    if abs(change) < threshold:
        trend = "flat"
    elif change > 0:
        trend = "up"
    else:
        trend = "down"
    return RecentChange(
        latest=latest,
        previous=previous,
        change=change,
        days_between=days_between(start_of_day(previous.date), start_of_day(latest.date)),
        trend=trend,
    )
