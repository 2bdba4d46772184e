"""Dashboard metrics and sign-in traffic statistics."""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from novel_admin.db.time import utcnow
from novel_admin.schemas.stats import DashboardMetrics, TrafficPoint, TrafficResponse
from novel_admin.services.aggregation import Event, bucket_events, traffic_window
from novel_admin.services.gateway import Where

from ..dependencies import GatewayDep, get_admin_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"], dependencies=[Depends(get_admin_session)])

COIN_FLOW_TYPES = ("recharge", "unlock")


@router.get("/dashboard/metrics", response_model=DashboardMetrics)
async def dashboard_metrics(gateway: GatewayDep) -> DashboardMetrics:
    """Headline numbers: books, registered users and coin flow."""
    total_books = gateway.count("books")
    users = gateway.invoke_procedure("get_total_users")
    flows, _ = gateway.select(
        "coin_transactions",
        [Where("type", "in", COIN_FLOW_TYPES)],
        columns=["amount"],
    )
    total_coins = sum(row["amount"] or 0 for row in flows)
    return DashboardMetrics(
        total_books=total_books,
        total_users=users["count"],
        total_coins=total_coins,
    )


@router.get("/stats/traffic", response_model=TrafficResponse)
async def traffic_stats(
    gateway: GatewayDep,
    range_key: Annotated[Literal["7d", "30d"], Query(alias="range")] = "7d",
) -> TrafficResponse:
    """Daily visits and distinct users derived from the sign-in log."""
    start, end = traffic_window(range_key, utcnow())
    logs, _ = gateway.select(
        "user_login_logs",
        [Where("logged_in_at", "gte", start), Where("logged_in_at", "lte", end)],
        columns=["logged_in_at", "user_id"],
    )
    buckets = bucket_events(
        start,
        end,
        (Event(occurred_at=row["logged_in_at"], actor_id=row["user_id"]) for row in logs),
    )
    points = [
        TrafficPoint(
            date=bucket.date.isoformat(),
            visits=bucket.event_count,
            unique_users=bucket.distinct_actor_count,
        )
        for bucket in buckets
    ]
    logger.debug("Traffic %s: %d sign-ins over %d days", range_key, len(logs), len(points))
    return TrafficResponse(
        range=range_key,
        points=points,
        total_visits=sum(point.visits for point in points),
        peak_unique_users=max((point.unique_users for point in points), default=0),
    )
