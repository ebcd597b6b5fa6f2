"""Value types for goal progress evaluation.

Everything here is immutable and created fresh per evaluation call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Direction(str, Enum):
    gain = "gain"
    lose = "lose"
    maintain = "maintain"


class Status(str, Enum):
    not_started = "notStarted"
    in_progress = "inProgress"
    on_track = "onTrack"
    ahead = "ahead"
    behind = "behind"


@dataclass(frozen=True, slots=True)
class Goal:
    start_weight: float  # kg
    start_date: datetime
    target_weight: float  # kg
    target_date: datetime | None = None  # None = open-ended, resolved to start + 28 days


@dataclass(frozen=True, slots=True)
class WeightSample:
    date: datetime
    value: float  # kg


@dataclass(frozen=True, slots=True)
class SnapshotEvaluation:
    direction: Direction
    status: Status
    progress: float  # 0–1
    baseline: float
    current: float
    target: float
    tolerance: float

    @property
    def delta_to_target(self) -> float:
        return self.current - self.target

    @property
    def delta_from_baseline(self) -> float:
        return self.current - self.baseline

    @property
    def is_completed(self) -> bool:
        if self.direction is Direction.maintain:
            return self.status is Status.on_track
        return self.status in (Status.on_track, Status.ahead)


@dataclass(frozen=True, slots=True)
class WeeklyEvaluation:
    direction: Direction
    status: Status
    progress: float  # 0–1
    week_index: int  # 0-based
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

    @property
    def week_number(self) -> int:
        return self.week_index + 1


@dataclass(frozen=True, slots=True)
class RecentChange:
    """Difference between the two most recent weight samples."""

    latest: WeightSample
    previous: WeightSample
    change: float
    days_between: int
    trend: str  # "up" | "down" | "flat"
