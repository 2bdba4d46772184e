"""User listing and balance management endpoints."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, status

from novel_admin.core.settings import settings
from novel_admin.schemas.common import Page
from novel_admin.schemas.user import BalanceUpdate, UserResponse
from novel_admin.services.gateway import DataGateway, Where

from ..dependencies import GatewayDep, PageQuery, SortOrder, get_admin_session, page_of, search_pattern

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_admin_session)])

STATS_FIELDS = (
    "total_recharge",
    "total_spent",
    "total_comments",
    "gold_balance",
    "silver_balance",
    "popularity_ticket_balance",
)
StatsSortField = Literal[
    "total_recharge",
    "total_spent",
    "total_comments",
    "gold_balance",
    "silver_balance",
    "popularity_ticket_balance",
]


def _with_stats(gateway: DataGateway, profiles: list[dict]) -> list[dict]:
    """Attach stats to each profile, zero-filled when the stats row is missing."""
    gateway.embed(
        profiles,
        collection="user_stats",
        foreign_key="id",
        into="stats",
        key="user_id",
        columns=list(STATS_FIELDS),
    )
    for profile in profiles:
        stats = profile["stats"] or {}
        profile["stats"] = {field: stats.get(field) or 0 for field in STATS_FIELDS}
    return profiles


@router.get("/", response_model=Page[UserResponse])
async def list_users(
    gateway: GatewayDep,
    page: PageQuery = 1,
    search: str | None = None,
    level: int | None = None,
    sort: StatsSortField = "total_spent",
    order: SortOrder = "desc",
) -> dict:
    """Page through users ordered by one of their stats."""
    filters: list = []
    if search:
        filters.append(Where("username", "ilike", search_pattern(search)))
    if level is not None:
        filters.append(Where("level", "eq", level))

    profiles, total = gateway.select("user_profiles", filters, ordering=[("created_at", False)])
    users = _with_stats(gateway, profiles)
    users.sort(key=lambda user: user["stats"][sort], reverse=order == "desc")

    page_size = settings.page_size_default
    first = (page - 1) * page_size
    return page_of(users[first:first + page_size], total, page, page_size)


@router.put("/{user_id}/balance", response_model=UserResponse)
async def update_balance(user_id: str, payload: BalanceUpdate, gateway: GatewayDep) -> dict:
    """Overwrite one balance of a user.

    ``current_votes`` lives on the profile; wallet balances go through the
    ``update_user_balance`` procedure.
    """
    if payload.balance_type == "current_votes":
        gateway.get("user_profiles", user_id)
        gateway.update("user_profiles", {"current_votes": payload.value}, {"id": user_id})
    else:
        updated = gateway.invoke_procedure(
            "update_user_balance",
            {
                "p_user_id": user_id,
                "p_balance_type": payload.balance_type,
                "p_new_value": payload.value,
            },
        )
        if not updated:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
    logger.info("Set %s of user %s to %d", payload.balance_type, user_id, payload.value)
    return _with_stats(gateway, [gateway.get("user_profiles", user_id)])[0]
