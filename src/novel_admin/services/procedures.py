"""Server-side procedures callable through ``DataGateway.invoke_procedure``.

Each procedure receives the open session and keyword arguments; the gateway
commits after it returns and rolls back if it raises, so every procedure is
one transaction. Multi-row writes that must land together live here rather
than in the API layer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from novel_admin.models import (
    CoinPackage,
    ForumCategory,
    ForumPost,
    ForumReport,
    ForumThread,
    HomepageBanner,
    UserProfile,
    UserStats,
)
from novel_admin.models.forum import REPORT_TARGET_POST
from novel_admin.services.errors import ProcedureError, RecordNotFoundError

logger = logging.getLogger(__name__)

ProcedureFn = Callable[..., Any]

# Collections whose rows carry a dense ``sort_order`` column.
ORDERABLE_COLLECTIONS: dict[str, type] = {
    "forum_categories": ForumCategory,
    "homepage_banners": HomepageBanner,
    "coin_packages": CoinPackage,
}

BALANCE_COLUMNS = {
    "gold": "gold_balance",
    "silver": "silver_balance",
    "popularity_ticket": "popularity_ticket_balance",
}


class ProcedureRegistry:
    """Name -> callable table for stored procedures."""

    def __init__(self) -> None:
        self._procedures: dict[str, ProcedureFn] = {}

    def register(self, name: str) -> Callable[[ProcedureFn], ProcedureFn]:
        """Decorator registering ``fn`` under ``name``."""

        def decorator(fn: ProcedureFn) -> ProcedureFn:
            self._procedures[name] = fn
            return fn

        return decorator

    def get(self, name: str) -> ProcedureFn:
        try:
            return self._procedures[name]
        except KeyError as err:
            raise ProcedureError(f"Unknown procedure {name!r}") from err

    def names(self) -> list[str]:
        return sorted(self._procedures)


registry = ProcedureRegistry()


@registry.register("get_total_users")
def get_total_users(db: Session) -> dict[str, int]:
    """Return the number of registered user profiles."""
    total = db.query(func.count(UserProfile.id)).scalar() or 0
    return {"count": int(total)}


@registry.register("update_user_balance")
def update_user_balance(
    db: Session,
    p_user_id: str,
    p_balance_type: str,
    p_new_value: int,
) -> bool:
    """Overwrite one wallet balance of a user.

    Returns:
        False when the user has no profile, True once the balance is staged.

    Raises:
        ProcedureError: Unknown balance type or a negative / non-integer value.
    """
    column = BALANCE_COLUMNS.get(p_balance_type)
    if column is None:
        raise ProcedureError(f"Unsupported balance type {p_balance_type!r}")
    if isinstance(p_new_value, bool) or not isinstance(p_new_value, int) or p_new_value < 0:
        raise ProcedureError("Balance must be a non-negative integer")

    profile = db.get(UserProfile, p_user_id)
    if profile is None:
        return False

    if profile.stats is None:
        profile.stats = UserStats(user_id=profile.id)
    setattr(profile.stats, column, p_new_value)
    db.flush()
    logger.info("Set %s of user %s to %d", column, p_user_id, p_new_value)
    return True


@registry.register("swap_sort_order")
def swap_sort_order(
    db: Session,
    p_collection: str,
    p_first_id: str,
    p_second_id: str,
) -> dict[str, int]:
    """Exchange the ``sort_order`` values of two rows in one transaction."""
    model = ORDERABLE_COLLECTIONS.get(p_collection)
    if model is None:
        raise ProcedureError(f"Collection {p_collection!r} is not orderable")

    rows = (
        db.query(model)
        .filter(model.id.in_([p_first_id, p_second_id]))
        .with_for_update()
        .all()
    )
    by_id = {row.id: row for row in rows}
    for record_id in (p_first_id, p_second_id):
        if record_id not in by_id:
            raise RecordNotFoundError(p_collection, record_id)

    first, second = by_id[p_first_id], by_id[p_second_id]
    first.sort_order, second.sort_order = second.sort_order, first.sort_order
    db.flush()
    return {first.id: first.sort_order, second.id: second.sort_order}


@registry.register("delete_reported_content")
def delete_reported_content(db: Session, p_report_id: str) -> dict[str, Any]:
    """Delete a forum report together with the post it points at."""
    report = db.get(ForumReport, p_report_id)
    if report is None:
        raise RecordNotFoundError("forum_reports", p_report_id)

    deleted_target = False
    if report.target_type == REPORT_TARGET_POST:
        post = db.get(ForumPost, report.target_id)
        if post is not None:
            db.delete(post)
            deleted_target = True

    db.delete(report)
    db.flush()
    return {"report_id": p_report_id, "deleted_target": deleted_target}


@registry.register("forum_category_stats")
def forum_category_stats(db: Session) -> list[dict[str, Any]]:
    """Per-category thread and post totals, in display order."""
    thread_counts = (
        db.query(
            ForumThread.category_id.label("category_id"),
            func.count(ForumThread.id).label("total"),
        )
        .group_by(ForumThread.category_id)
        .subquery()
    )
    post_counts = (
        db.query(
            ForumThread.category_id.label("category_id"),
            func.count(ForumPost.id).label("total"),
        )
        .join(ForumPost, ForumPost.thread_id == ForumThread.id)
        .group_by(ForumThread.category_id)
        .subquery()
    )
    rows = (
        db.query(
            ForumCategory.id,
            ForumCategory.name,
            thread_counts.c.total,
            post_counts.c.total,
        )
        .outerjoin(thread_counts, thread_counts.c.category_id == ForumCategory.id)
        .outerjoin(post_counts, post_counts.c.category_id == ForumCategory.id)
        .order_by(ForumCategory.sort_order, ForumCategory.id)
        .all()
    )
    return [
        {
            "id": category_id,
            "name": name,
            "thread_count": int(threads or 0),
            "post_count": int(posts or 0),
        }
        for (category_id, name, threads, posts) in rows
    ]
