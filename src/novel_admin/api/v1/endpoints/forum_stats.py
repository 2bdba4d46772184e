"""Forum activity statistics."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from novel_admin.db.time import utcnow
from novel_admin.schemas.forum import ForumStatsResponse
from novel_admin.services.aggregation import Event, bucket_events, rollup_by_month
from novel_admin.services.gateway import DataGateway, Where

from ..dependencies import GatewayDep, get_admin_session

router = APIRouter(prefix="/forum/stats", tags=["forum"], dependencies=[Depends(get_admin_session)])

SeriesRange = Literal["week", "month", "year"]


def _series_start(series_range: str, now: datetime) -> datetime:
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if series_range == "week":
        return today - timedelta(days=6)
    if series_range == "month":
        return today - timedelta(days=29)
    month_index = today.year * 12 + today.month - 1 - 11
    return today.replace(year=month_index // 12, month=month_index % 12 + 1, day=1)


def _events(gateway: DataGateway, collection: str, start: datetime, end: datetime) -> list[Event]:
    rows, _ = gateway.select(
        collection,
        [Where("created_at", "gte", start), Where("created_at", "lte", end)],
        columns=["created_at", "author_id"],
    )
    return [Event(occurred_at=row["created_at"], actor_id=row["author_id"]) for row in rows]


def _series(gateway: DataGateway, series_range: str, now: datetime) -> list[dict]:
    start = _series_start(series_range, now)
    threads = bucket_events(start, now, _events(gateway, "forum_threads", start, now))
    posts = bucket_events(start, now, _events(gateway, "forum_posts", start, now))
    if series_range == "year":
        return [
            {"label": thread_month["month"], "threads": thread_month["count"], "posts": post_month["count"]}
            for thread_month, post_month in zip(rollup_by_month(threads), rollup_by_month(posts))
        ]
    return [
        {"label": thread_day.date.isoformat(), "threads": thread_day.event_count, "posts": post_day.event_count}
        for thread_day, post_day in zip(threads, posts)
    ]


@router.get("/", response_model=ForumStatsResponse)
async def forum_stats(
    gateway: GatewayDep,
    series_range: Annotated[SeriesRange, Query(alias="range")] = "month",
) -> dict:
    """Totals, per-category counts and a thread/post time series."""
    now = utcnow()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    totals = {
        "total_threads": gateway.count("forum_threads"),
        "total_posts": gateway.count("forum_posts"),
        "total_users": gateway.count("user_profiles"),
        "active_threads": gateway.count(
            "forum_threads",
            [Where("last_reply_at", "gte", now - timedelta(days=30))],
        ),
        "posts_today": gateway.count("forum_posts", [Where("created_at", "gte", today)]),
        "posts_week": gateway.count("forum_posts", [Where("created_at", "gte", now - timedelta(days=7))]),
        "posts_month": gateway.count("forum_posts", [Where("created_at", "gte", now - timedelta(days=30))]),
    }
    return {
        "totals": totals,
        "categories": gateway.invoke_procedure("forum_category_stats"),
        "series": _series(gateway, series_range, now),
    }
