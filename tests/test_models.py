"""Tests for the goal evaluation HTTP contract."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from weightgoals.engine.features import recent_change
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
from tests.conftest import day, make_goal, make_sample


class TestRequests:
    def test_goal_in_to_goal(self):
        goal = GoalIn(start_weight=80.0, start_date=datetime(2026, 1, 5), target_weight=70.0).to_goal()
        assert goal.start_weight == 80.0
        assert goal.target_date is None

    def test_rejects_non_positive_weight(self):
        with pytest.raises(ValidationError):
            GoalIn(start_weight=0.0, start_date=datetime(2026, 1, 5), target_weight=70.0)

    def test_rejects_negative_tolerance(self):
        with pytest.raises(ValidationError):
            SnapshotRequest(
                goal={"start_weight": 80.0, "start_date": "2026-01-05T00:00:00", "target_weight": 70.0},
                current_weight=75.0,
                tolerance=-1.0,
            )

    def test_weekly_samples_optional(self):
        req = WeeklyRequest(goal={"start_weight": 80.0, "start_date": "2026-01-05T00:00:00", "target_weight": 70.0})
        assert req.samples is None
        assert req.tolerance is None


class TestSnapshotOut:
    def test_from_evaluation_includes_derived(self):
        ev = evaluate_snapshot(make_goal(80.0, 70.0), current_weight=70.2)
        out = SnapshotOut.model_validate(ev)
        assert out.is_completed is True
        assert out.delta_to_target == pytest.approx(0.2)
        assert out.delta_from_baseline == pytest.approx(-9.8)

    def test_status_serialized_as_camel_case(self):
        ev = evaluate_snapshot(make_goal(80.0, 70.0), current_weight=80.0)
        data = SnapshotOut.model_validate(ev).model_dump(mode="json")
        assert data["status"] == "notStarted"
        assert data["direction"] == "lose"

    def test_empty_response(self):
        assert SnapshotResponse().model_dump(mode="json") == {"evaluation": None}


class TestWeeklyOut:
    def test_from_evaluation(self):
        ev = evaluate_weekly(make_goal(60.0, 65.0), metrics=[make_sample(2, 61.4)], reference_date=day(3))
        data = WeeklyOut.model_validate(ev).model_dump(mode="json")
        assert data["week_number"] == 1
        assert data["week_index"] == 0
        assert data["status"] == "onTrack"
        assert data["planned_end_weight"] == 61.3
        assert data["has_record_this_week"] is True

    def test_recent_change_out(self):
        change = recent_change([make_sample(1, 71.0), make_sample(3, 70.4)])
        out = RecentChangeOut.model_validate(change)
        assert out.trend == "down"
        assert out.latest.value == 70.4
        assert out.days_between == 2

    def test_empty_response(self):
        data = WeeklyResponse().model_dump(mode="json")
        assert data == {"evaluation": None, "recent_change": None, "sample_count": 0}
