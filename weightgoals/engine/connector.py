"""Database connector — read-only access to weight samples in health_connect_daily.

Rows carry the metric inside raw_data (JSONB) at body_metrics.weight_kg.
Import and storage of those rows happen elsewhere; this module only reads.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from weightgoals.engine.types import WeightSample

WEIGHT_PATH = "body_metrics.weight_kg"


def _resolve_key(data: Any, key: str) -> Any:
    """Resolve a dot-path key like 'foo.bar' in nested dicts."""
    current = data
    for part in key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def weight_from_raw(raw_data: dict[str, Any] | None) -> float | None:
    """Extract the weight in kg from a raw_data payload. None if missing or not numeric."""
    if not raw_data:
        return None
    value = _resolve_key(raw_data, WEIGHT_PATH)
    if value is None or isinstance(value, bool):
        return None
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return None
    return weight if weight > 0 else None


def rows_to_samples(rows: list[dict[str, Any]]) -> list[WeightSample]:
    """Convert daily rows into weight samples, skipping rows without a usable weight."""
    samples: list[WeightSample] = []
    for row in rows:
        row_date = row.get("date")
        weight = weight_from_raw(row.get("raw_data"))
        if weight is None or row_date is None:
            continue
        if not isinstance(row_date, datetime):
            row_date = datetime.combine(row_date, time.min)
        samples.append(WeightSample(date=row_date, value=weight))
    return samples


async def fetch_weight_samples(
    session: AsyncSession,
    start: date,
    end_exclusive: date,
    device_id: str | None = None,
) -> list[WeightSample]:
    """Fetch weight samples for date range [start, end_exclusive), ordered by date.

    Returns an empty list when nothing is found; never raises on missing data.
    """
    query = (
        "SELECT device_id, date, raw_data "
        "FROM health_connect_daily "
        "WHERE date >= :start AND date < :end "
        "AND source_type = 'daily'"
    )
    params: dict[str, Any] = {"start": start, "end": end_exclusive}
    if device_id is not None:
        query += " AND device_id = :device_id"
        params["device_id"] = device_id
    query += " ORDER BY date"

    result = await session.execute(text(query), params)
    columns = result.keys()
    rows = [dict(zip(columns, r)) for r in result.fetchall()]

    samples = rows_to_samples(rows)
    skipped = len(rows) - len(samples)
    if skipped:
        logger.debug(f"Skipped {skipped} of {len(rows)} rows without a weight between {start} and {end_exclusive}")
    logger.info(f"Loaded {len(samples)} weight samples between {start} and {end_exclusive}")
    return samples
