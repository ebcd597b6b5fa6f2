"""Goal evaluation HTTP contract — Pydantic v2 models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from weightgoals.engine.types import Direction, Goal, Status


class GoalIn(BaseModel):
    start_weight: float = Field(gt=0)
    start_date: datetime
    target_weight: float = Field(gt=0)
    target_date: datetime | None = None

    def to_goal(self) -> Goal:
        return Goal(
            start_weight=self.start_weight,
            start_date=self.start_date,
            target_weight=self.target_weight,
            target_date=self.target_date,
        )


class WeightSampleIO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    value: float = Field(gt=0)


class SnapshotRequest(BaseModel):
    goal: GoalIn
    baseline_weight: float | None = Field(default=None, gt=0)
    current_weight: float | None = Field(default=None, gt=0)
    tolerance: float | None = Field(default=None, ge=0)


class WeeklyRequest(BaseModel):
    goal: GoalIn
    baseline_weight: float | None = Field(default=None, gt=0)
    samples: list[WeightSampleIO] | None = None  # None = load from the database
    reference_date: datetime | None = None
    tolerance: float | None = Field(default=None, ge=0)
    device_id: str | None = None


class SnapshotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    direction: Direction
    status: Status
    progress: float  # 0–1
    baseline: float
    current: float
    target: float
    tolerance: float
    delta_to_target: float
    delta_from_baseline: float
    is_completed: bool


class WeeklyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    direction: Direction
    status: Status
    progress: float  # 0–1
    week_index: int
    week_number: int
    total_weeks: int
    week_start_date: datetime
    week_end_date: datetime
    planned_start_weight: float
    planned_end_weight: float
    planned_change: float
    target_delta_magnitude: float
    actual_start_weight: float
    latest_record_weight: float
    latest_record_date: datetime
    has_record_this_week: bool
    achieved_delta_magnitude: float
    remaining_delta_magnitude: float
    tolerance: float


class RecentChangeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    latest: WeightSampleIO
    previous: WeightSampleIO
    change: float
    days_between: int
    trend: str  # "up" | "down" | "flat"


class SnapshotResponse(BaseModel):
    """`evaluation` is null until there is a current weight to evaluate."""

    evaluation: SnapshotOut | None = None


class WeeklyResponse(BaseModel):
    """`evaluation` is null when no weight samples exist."""

    evaluation: WeeklyOut | None = None
    recent_change: RecentChangeOut | None = None
    sample_count: int = 0
