"""Snapshot evaluation — progress of a single current weight against the goal."""

from __future__ import annotations

from weightgoals.engine.features import DEFAULT_TOLERANCE, band_progress, clamp, resolve_direction
from weightgoals.engine.types import Direction, Goal, SnapshotEvaluation, Status

# Below this total change a gain/lose goal has no measurable distance to cover.
_MIN_TOTAL_CHANGE = 0.0001
_NOT_STARTED_PROGRESS = 0.01


def _gain(baseline: float, current: float, target: float, tolerance: float) -> tuple[float, Status]:
    total_change = target - baseline

    if total_change <= _MIN_TOTAL_CHANGE:
        raw_progress = 1.0 if current >= target else 0.0
        if abs(current - target) <= tolerance:
            return raw_progress, Status.on_track
        if current > target + tolerance:
            return raw_progress, Status.ahead
        if current <= baseline - tolerance:
            return raw_progress, Status.behind
        return raw_progress, Status.in_progress

    raw_progress = (current - baseline) / total_change
    if target - tolerance <= current <= target + tolerance:
        status = Status.on_track
    elif current > target + tolerance:
        status = Status.ahead
    elif current <= baseline - tolerance:
        status = Status.behind
    elif raw_progress <= _NOT_STARTED_PROGRESS:
        status = Status.not_started
    else:
        status = Status.in_progress
    return raw_progress, status


def _lose(baseline: float, current: float, target: float, tolerance: float) -> tuple[float, Status]:
    total_change = baseline - target

    if total_change <= _MIN_TOTAL_CHANGE:
        raw_progress = 1.0 if current <= target else 0.0
        if abs(current - target) <= tolerance:
            return raw_progress, Status.on_track
        if current < target - tolerance:
            return raw_progress, Status.ahead
        if current >= baseline + tolerance:
            return raw_progress, Status.behind
        return raw_progress, Status.in_progress

    raw_progress = (baseline - current) / total_change
    if target - tolerance <= current <= target + tolerance:
        status = Status.on_track
    elif current < target - tolerance:
        status = Status.ahead
    elif current >= baseline + tolerance:
        status = Status.behind
    elif raw_progress <= _NOT_STARTED_PROGRESS:
        status = Status.not_started
    else:
        status = Status.in_progress
    return raw_progress, status


def _maintain(current: float, target: float, tolerance: float) -> tuple[float, Status]:
    distance = abs(current - target)
    raw_progress = band_progress(distance, tolerance)
    if distance <= tolerance:
        status = Status.on_track
    elif current < target - tolerance:
        status = Status.ahead
    else:
        status = Status.behind
    return raw_progress, status


def evaluate_snapshot(
    goal: Goal,
    baseline_weight: float | None = None,
    current_weight: float | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> SnapshotEvaluation | None:
    """Evaluate one current weight against baseline and target.

    - baseline_weight overrides goal.start_weight when given
    - direction is inferred from baseline vs target within tolerance
    - progress is clamped to [0, 1]
    Returns None when there is no current weight yet.
    """
    if current_weight is None:
        return None

    baseline = baseline_weight if baseline_weight is not None else goal.start_weight
    target = goal.target_weight
    direction = resolve_direction(baseline, target, tolerance)

    if direction is Direction.gain:
        raw_progress, status = _gain(baseline, current_weight, target, tolerance)
    elif direction is Direction.lose:
        raw_progress, status = _lose(baseline, current_weight, target, tolerance)
    else:
        raw_progress, status = _maintain(current_weight, target, tolerance)

    return SnapshotEvaluation(
        direction=direction,
        status=status,
        progress=clamp(raw_progress),
        baseline=baseline,
        current=current_weight,
        target=target,
        tolerance=tolerance,
    )
