"""Weekly trajectory evaluation.

The goal duration is split into 7-day weeks counted from the goal start day.
A straight line from baseline to target is sampled at week boundaries to get
the planned weight range for the current week, and the latest measurement
available in that week is compared against it.

Progress is measured from the *planned* week-start weight, not from the
weight actually recorded at week start (that one is reported only).
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from weightgoals.engine.features import (
    DEFAULT_TOLERANCE,
    band_progress,
    clamp,
    days_between,
    latest_on_or_before,
    resolve_direction,
    resolve_target_date,
    round_to_tenth,
    sort_samples,
    start_of_day,
)
from weightgoals.engine.types import Direction, Goal, Status, WeeklyEvaluation, WeightSample

DAYS_PER_WEEK = 7
_NOT_STARTED_PROGRESS = 0.05

# (progress, achieved, remaining, status)
_Outcome = tuple[float, float, float, Status]


def _planned_bounds(
    direction: Direction,
    baseline: float,
    target: float,
    week_index: int,
    total_weeks: int,
) -> tuple[float, float]:
    """Planned weight at the start and end of a week, rounded to 0.1 kg.

    The first week always starts at the baseline and the last week always ends
    on the target, whatever rounding happened in between.
    """
    if direction is Direction.maintain:
        flat = round_to_tenth(target)
        return flat, flat

    change_per_week = (target - baseline) / total_weeks
    planned_start = round_to_tenth(baseline + week_index * change_per_week)
    planned_end = round_to_tenth(baseline + (week_index + 1) * change_per_week)
    if week_index == 0:
        planned_start = round_to_tenth(baseline)
    if week_index == total_weeks - 1:
        planned_end = round_to_tenth(target)
    return planned_start, planned_end


def _gain_outcome(latest: float, planned_start: float, planned_end: float, target_delta: float, tolerance: float) -> _Outcome:
    achieved = max(0.0, latest - planned_start)
    if target_delta > 0.0:
        progress = clamp(achieved / target_delta)
        remaining = max(0.0, target_delta - achieved)
    else:
        progress = 1.0 if latest >= planned_end else 0.0
        remaining = max(0.0, planned_end - latest)

    if abs(latest - planned_end) <= tolerance:
        status = Status.on_track
    elif latest > planned_end + tolerance:
        status = Status.ahead
    elif latest <= planned_start - tolerance:
        status = Status.behind
    elif progress <= _NOT_STARTED_PROGRESS:
        status = Status.not_started
    else:
        status = Status.in_progress
    return progress, achieved, remaining, status


def _lose_outcome(latest: float, planned_start: float, planned_end: float, target_delta: float, tolerance: float) -> _Outcome:
    achieved = max(0.0, planned_start - latest)
    if target_delta > 0.0:
        progress = clamp(achieved / target_delta)
        remaining = max(0.0, target_delta - achieved)
    else:
        progress = 1.0 if latest <= planned_end else 0.0
        remaining = max(0.0, latest - planned_end)

    if abs(latest - planned_end) <= tolerance:
        status = Status.on_track
    elif latest < planned_end - tolerance:
        status = Status.ahead
    elif latest >= planned_start + tolerance:
        status = Status.behind
    elif progress <= _NOT_STARTED_PROGRESS:
        status = Status.not_started
    else:
        status = Status.in_progress
    return progress, achieved, remaining, status


def _maintain_outcome(latest: float, planned_end: float, tolerance: float) -> _Outcome:
    distance = abs(latest - planned_end)
    progress = max(0.0, band_progress(distance, tolerance))
    achieved = max(0.0, tolerance - distance)
    remaining = max(0.0, distance - tolerance)

    if distance <= tolerance:
        status = Status.on_track
    elif latest < planned_end - tolerance:
        status = Status.ahead
    else:
        status = Status.behind
    return progress, achieved, remaining, status


def evaluate_weekly(
    goal: Goal,
    baseline_weight: float | None = None,
    metrics: Iterable[WeightSample] = (),
    reference_date: datetime | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> WeeklyEvaluation | None:
    """Compare the latest measurement of the current goal week with the plan.

    `reference_date` defaults to now in the goal start timezone and selects the
    current week. An explicit one must use the same timezone convention
    (naive or aware) as the goal and samples.
    Returns None when there are no measurements at all.
    """
    ordered = sort_samples(metrics)
    if not ordered:
        return None
    if reference_date is None:
        reference_date = datetime.now(goal.start_date.tzinfo)

    baseline = baseline_weight if baseline_weight is not None else goal.start_weight
    target = goal.target_weight
    direction = resolve_direction(baseline, target, tolerance)

    plan_start = start_of_day(goal.start_date)
    today = start_of_day(reference_date)
    target_end = resolve_target_date(goal)

    duration_days = max(1, days_between(plan_start, target_end))
    total_weeks = max(1, math.ceil(duration_days / DAYS_PER_WEEK))
    # Same as target_end unless the target does not come after the start.
    plan_end = plan_start + timedelta(days=duration_days)

    elapsed_days = max(0, days_between(plan_start, today))
    week_index = min(total_weeks - 1, elapsed_days // DAYS_PER_WEEK)
    week_start = plan_start + timedelta(days=week_index * DAYS_PER_WEEK)
    week_end = min(plan_start + timedelta(days=(week_index + 1) * DAYS_PER_WEEK), plan_end)

    planned_start, planned_end = _planned_bounds(direction, baseline, target, week_index, total_weeks)
    planned_change = planned_end - planned_start
    target_delta = abs(planned_change)

    cutoff = min(reference_date, week_end)
    latest = latest_on_or_before(ordered, cutoff) or ordered[-1]
    has_record_this_week = week_start <= latest.date <= week_end

    start_sample = latest_on_or_before(ordered, week_start)
    actual_start = round_to_tenth(start_sample.value if start_sample is not None else baseline)

    if not has_record_this_week:
        remaining = 0.0 if direction is Direction.maintain else target_delta
        progress, achieved, status = 0.0, 0.0, Status.not_started
    elif direction is Direction.gain:
        progress, achieved, remaining, status = _gain_outcome(
            latest.value, planned_start, planned_end, target_delta, tolerance
        )
    elif direction is Direction.lose:
        progress, achieved, remaining, status = _lose_outcome(
            latest.value, planned_start, planned_end, target_delta, tolerance
        )
    else:
        progress, achieved, remaining, status = _maintain_outcome(latest.value, planned_end, tolerance)

    return WeeklyEvaluation(
        direction=direction,
        status=status,
        progress=progress,
        week_index=week_index,
        total_weeks=total_weeks,
        week_start_date=week_start,
        week_end_date=week_end,
        planned_start_weight=planned_start,
        planned_end_weight=planned_end,
        planned_change=planned_change,
        target_delta_magnitude=target_delta,
        actual_start_weight=actual_start,
        latest_record_weight=latest.value,
        latest_record_date=latest.date,
        has_record_this_week=has_record_this_week,
        achieved_delta_magnitude=achieved,
        remaining_delta_magnitude=remaining,
        tolerance=tolerance,
    )
