"""Forum thread moderation endpoints."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from novel_admin.core.settings import settings
from novel_admin.schemas.common import DeleteResponse, Page
from novel_admin.schemas.forum import ForumThreadResponse
from novel_admin.services.gateway import DataGateway, Where

from ..dependencies import (
    ConfirmDep,
    GatewayDep,
    PageQuery,
    delete_one,
    get_admin_session,
    page_of,
    page_window,
    search_pattern,
    toggle_flag,
)

router = APIRouter(
    prefix="/forum/threads",
    tags=["forum"],
    dependencies=[Depends(get_admin_session)],
)

COLLECTION = "forum_threads"


def _with_relations(gateway: DataGateway, rows: list[dict]) -> list[dict]:
    gateway.embed(
        rows,
        collection="forum_categories",
        foreign_key="category_id",
        into="category",
        columns=["id", "name"],
    )
    return gateway.embed(
        rows,
        collection="user_profiles",
        foreign_key="author_id",
        into="author",
        columns=["id", "username"],
    )


@router.get("/", response_model=Page[ForumThreadResponse])
async def list_threads(
    gateway: GatewayDep,
    page: PageQuery = 1,
    search: str | None = None,
    status_filter: Annotated[Literal["all", "active", "inactive"], Query(alias="status")] = "all",
) -> dict:
    """Page through threads, newest first."""
    filters: list = []
    if search:
        filters.append(Where("title", "ilike", search_pattern(search)))
    if status_filter != "all":
        filters.append(Where("is_active", "eq", status_filter == "active"))

    page_size = settings.page_size_forum_threads
    rows, total = gateway.select(
        COLLECTION,
        filters,
        ordering=[("created_at", False)],
        window=page_window(page, page_size),
    )
    return page_of(_with_relations(gateway, rows), total, page, page_size)


def _toggle(gateway: DataGateway, thread_id: str, column: str) -> dict:
    row = toggle_flag(gateway, COLLECTION, thread_id, column)
    return _with_relations(gateway, [row])[0]


@router.post("/{thread_id}/toggle-pinned", response_model=ForumThreadResponse)
async def toggle_pinned(thread_id: str, gateway: GatewayDep) -> dict:
    return _toggle(gateway, thread_id, "is_pinned")


@router.post("/{thread_id}/toggle-featured", response_model=ForumThreadResponse)
async def toggle_featured(thread_id: str, gateway: GatewayDep) -> dict:
    return _toggle(gateway, thread_id, "is_featured")


@router.post("/{thread_id}/toggle-active", response_model=ForumThreadResponse)
async def toggle_active(thread_id: str, gateway: GatewayDep) -> dict:
    return _toggle(gateway, thread_id, "is_active")


@router.delete("/{thread_id}", response_model=DeleteResponse, dependencies=[ConfirmDep])
async def delete_thread(thread_id: str, gateway: GatewayDep) -> dict:
    """Delete a thread; its posts are removed in the same transaction."""
    return delete_one(gateway, COLLECTION, thread_id)
