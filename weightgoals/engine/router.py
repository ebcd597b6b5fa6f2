"""Goals HTTP router — snapshot & weekly evaluation."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from weightgoals.auth import verify_api_key
from weightgoals.config import settings
from weightgoals.db import get_session
from weightgoals.engine import connector, features
from weightgoals.engine.models import (
    GoalIn,
    RecentChangeOut,
    SnapshotOut,
    SnapshotRequest,
    SnapshotResponse,
    WeeklyOut,
    WeeklyRequest,
    WeeklyResponse,
)
from weightgoals.engine.snapshot import evaluate_snapshot
from weightgoals.engine.trajectory import evaluate_weekly
from weightgoals.engine.types import Goal, WeightSample

router = APIRouter(prefix="/goals", tags=["goals"])


def _local_naive(value: datetime, tz: ZoneInfo) -> datetime:
    """Aware datetimes are moved to the configured zone, then tzinfo is dropped."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def _goal(goal_in: GoalIn, tz: ZoneInfo) -> Goal:
    """Engine goal in local naive time, open-ended goals closed with the configured length."""
    goal = goal_in.to_goal()
    local = Goal(
        start_weight=goal.start_weight,
        start_date=_local_naive(goal.start_date, tz),
        target_weight=goal.target_weight,
        target_date=_local_naive(goal.target_date, tz) if goal.target_date is not None else None,
    )
    if local.target_date is None:
        target_date = features.resolve_target_date(local, settings.goal_default_days)
        local = replace(local, target_date=target_date)
    return local


def _tolerance(value: float | None) -> float:
    return settings.goal_tolerance_kg if value is None else value


# ---------------------------------------------------------------------------
# /goals/defaults
# ---------------------------------------------------------------------------


@router.get("/defaults")
async def goal_defaults(
    _: str = Depends(verify_api_key),
) -> dict:
    return {
        "tolerance": settings.goal_tolerance_kg,
        "default_goal_days": settings.goal_default_days,
        "timezone": settings.default_tz,
    }


# ---------------------------------------------------------------------------
# /goals/snapshot
# ---------------------------------------------------------------------------


@router.post("/snapshot", response_model=SnapshotResponse)
async def goal_snapshot(
    body: SnapshotRequest,
    _: str = Depends(verify_api_key),
) -> SnapshotResponse:
    tz = ZoneInfo(settings.default_tz)
    tolerance = _tolerance(body.tolerance)
    evaluation = evaluate_snapshot(
        _goal(body.goal, tz),
        baseline_weight=body.baseline_weight,
        current_weight=body.current_weight,
        tolerance=tolerance,
    )
    if evaluation is None:
        logger.debug("Snapshot skipped: no current weight")
        return SnapshotResponse()

    logger.debug(f"Snapshot {evaluation.direction.value}: {evaluation.status.value} ({evaluation.progress:.2f})")
    return SnapshotResponse(evaluation=SnapshotOut.model_validate(evaluation))


# ---------------------------------------------------------------------------
# /goals/weekly
# ---------------------------------------------------------------------------


@router.post("/weekly", response_model=WeeklyResponse)
async def goal_weekly(
    body: WeeklyRequest,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
) -> WeeklyResponse:
    tz = ZoneInfo(settings.default_tz)
    tolerance = _tolerance(body.tolerance)
    goal = _goal(body.goal, tz)
    if body.reference_date is not None:
        reference = _local_naive(body.reference_date, tz)
    else:
        reference = datetime.now(tz).replace(tzinfo=None)

    samples: list[WeightSample]
    if body.samples is not None:
        samples = [
            WeightSample(date=_local_naive(s.date, tz), value=s.value)
            for s in body.samples
        ]
    else:
        start = features.start_of_day(goal.start_date).date()
        samples = await connector.fetch_weight_samples(
            session, start, reference.date() + timedelta(days=1), body.device_id
        )

    evaluation = evaluate_weekly(
        goal,
        baseline_weight=body.baseline_weight,
        metrics=samples,
        reference_date=reference,
        tolerance=tolerance,
    )
    if evaluation is None:
        logger.debug("Weekly evaluation skipped: no weight samples")
        return WeeklyResponse()

    logger.debug(
        f"Week {evaluation.week_number}/{evaluation.total_weeks} {evaluation.direction.value}: "
        f"{evaluation.status.value} ({evaluation.progress:.2f})"
    )
    change = features.recent_change([s for s in samples if s.date <= reference])
    return WeeklyResponse(
        evaluation=WeeklyOut.model_validate(evaluation),
        recent_change=RecentChangeOut.model_validate(change) if change is not None else None,
        sample_count=len(samples),
    )
