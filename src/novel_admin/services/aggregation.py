"""Roll flat timestamped events up into per-day buckets."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Any, Hashable

from novel_admin.services.errors import InvalidRangeError

TRAFFIC_WINDOWS = {"7d": 7, "30d": 30}


@dataclass(frozen=True)
class Event:
    """Something that happened at ``occurred_at`` on behalf of ``actor_id``."""

    occurred_at: datetime
    actor_id: Hashable


@dataclass(frozen=True)
class DailyBucket:
    date: date
    event_count: int
    distinct_actor_count: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "event_count": self.event_count,
            "distinct_actor_count": self.distinct_actor_count,
        }


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def bucket_events(
    start: datetime,
    end: datetime,
    events: Iterable[Event],
) -> list[DailyBucket]:
    """Aggregate ``events`` into one bucket per UTC calendar day.

    Every day from ``start``'s date through ``end``'s date gets a bucket, also
    days without events. Only events with ``start <= occurred_at <= end``
    are counted; the rest are dropped. Naive timestamps are read as UTC.

    Raises:
        InvalidRangeError: If ``start`` is after ``end``.
    """
    start_utc = _as_utc(start)
    end_utc = _as_utc(end)
    if start_utc > end_utc:
        raise InvalidRangeError(f"start {start.isoformat()} is after end {end.isoformat()}")

    first_day = start_utc.date()
    span = (end_utc.date() - first_day).days + 1
    counts = [0] * span
    actors: list[set[Hashable]] = [set() for _ in range(span)]

    for event in events:
        moment = _as_utc(event.occurred_at)
        if moment < start_utc or moment > end_utc:
            continue
        slot = (moment.date() - first_day).days
        counts[slot] += 1
        actors[slot].add(event.actor_id)

    return [
        DailyBucket(
            date=first_day + timedelta(days=offset),
            event_count=counts[offset],
            distinct_actor_count=len(actors[offset]),
        )
        for offset in range(span)
    ]


def traffic_window(range_key: str, now: datetime) -> tuple[datetime, datetime]:
    """Resolve ``"7d"`` / ``"30d"`` into a ``(start, end)`` pair ending at ``now``."""
    try:
        days = TRAFFIC_WINDOWS[range_key]
    except KeyError as err:
        raise InvalidRangeError(f"Unknown traffic range {range_key!r}") from err
    return now - timedelta(days=days), now


def rollup_by_month(buckets: Iterable[DailyBucket]) -> list[dict[str, Any]]:
    """Sum daily event counts per ``YYYY-MM`` month, ascending."""
    months: dict[str, int] = {}
    for bucket in buckets:
        key = bucket.date.strftime("%Y-%m")
        months[key] = months.get(key, 0) + bucket.event_count
    return [{"month": key, "count": months[key]} for key in sorted(months)]
