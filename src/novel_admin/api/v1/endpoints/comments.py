"""Reader comment moderation endpoints."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from novel_admin.core.settings import settings
from novel_admin.schemas.book import CommentResponse
from novel_admin.schemas.common import DeleteResponse, Page
from novel_admin.services.gateway import Where

from ..dependencies import (
    ConfirmDep,
    GatewayDep,
    PageQuery,
    SortOrder,
    delete_one,
    get_admin_session,
    page_of,
    page_window,
    search_pattern,
)

router = APIRouter(prefix="/comments", tags=["comments"], dependencies=[Depends(get_admin_session)])


@router.get("/", response_model=Page[CommentResponse])
async def list_comments(
    gateway: GatewayDep,
    page: PageQuery = 1,
    search: str | None = None,
    comment_type: Annotated[Literal["all", "book", "chapter"], Query(alias="type")] = "all",
    sort: Literal["created_at", "likes"] = "created_at",
    order: SortOrder = "desc",
) -> dict:
    """Page through comments; chapter comments are those with a ``chapter_id``."""
    filters: list = []
    if search:
        filters.append(Where("content", "ilike", search_pattern(search)))
    if comment_type == "book":
        filters.append(Where("chapter_id", "is", None))
    elif comment_type == "chapter":
        filters.append(Where("chapter_id", "isnot", None))

    page_size = settings.page_size_default
    rows, total = gateway.select(
        "book_comments",
        filters,
        ordering=[(sort, order == "asc")],
        window=page_window(page, page_size),
    )
    gateway.embed(rows, collection="books", foreign_key="book_id", into="book", columns=["id", "title"])
    gateway.embed(
        rows,
        collection="user_profiles",
        foreign_key="user_id",
        into="user",
        columns=["id", "username"],
    )
    return page_of(rows, total, page, page_size)


@router.delete("/{comment_id}", response_model=DeleteResponse, dependencies=[ConfirmDep])
async def delete_comment(comment_id: str, gateway: GatewayDep) -> dict:
    return delete_one(gateway, "book_comments", comment_id)
