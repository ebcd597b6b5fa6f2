"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from weightgoals.db import get_session
from weightgoals.engine.types import Goal, WeightSample
from weightgoals.main import app

# Monday morning; start_of_day gives 2026-01-05 00:00.
PLAN_START = datetime(2026, 1, 5, 8, 30)
DAY0 = datetime(2026, 1, 5)


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used in connector and endpoint tests."""

    def __init__(self, rows: list[dict[str, Any]] | None = None):
        self._rows = rows or []
        self.calls: list[tuple[Any, Any]] = []

    async def execute(self, stmt, params=None):
        self.calls.append((stmt, params))
        return FakeResult(self._rows)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (override _rows in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def make_goal(
    start_weight: float,
    target_weight: float,
    days: int | None = 28,
    start: datetime = PLAN_START,
) -> Goal:
    """Goal starting at PLAN_START lasting `days` (None = open-ended)."""
    target_date = start + timedelta(days=days) if days is not None else None
    return Goal(
        start_weight=start_weight,
        start_date=start,
        target_weight=target_weight,
        target_date=target_date,
    )


def day(n: int, hour: int = 12) -> datetime:
    """`n` days after the plan start day, at `hour`."""
    return DAY0 + timedelta(days=n, hours=hour)


def make_sample(n: int, value: float, hour: int = 7) -> WeightSample:
    return WeightSample(date=day(n, hour), value=value)


def make_daily_row(
    row_date: date,
    device_id: str = "dev-1",
    **raw_data: Any,
) -> dict[str, Any]:
    """Helper to build a fake health_connect_daily row dict."""
    return {
        "device_id": device_id,
        "date": row_date,
        "raw_data": raw_data,
    }
