"""Book management endpoints."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from novel_admin.core.settings import settings
from novel_admin.schemas.book import BookResponse
from novel_admin.schemas.common import DeleteResponse, Page
from novel_admin.services.gateway import Where, any_of

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
    toggle_flag,
)

router = APIRouter(prefix="/books", tags=["books"], dependencies=[Depends(get_admin_session)])

BookSortField = Literal[
    "created_at",
    "title",
    "author_name",
    "status",
    "total_chapters",
    "total_words",
    "views",
    "votes",
    "rating",
    "likes",
    "favorites",
    "shares",
    "gold_income",
    "silver_income",
    "last_updated_at",
]


@router.get("/", response_model=Page[BookResponse])
async def list_books(
    gateway: GatewayDep,
    page: PageQuery = 1,
    search: str | None = None,
    status_filter: Annotated[Literal["all", "ongoing", "completed"], Query(alias="status")] = "all",
    sort: BookSortField = "created_at",
    order: SortOrder = "desc",
) -> dict:
    """Page through books, matching ``search`` against title or author."""
    filters: list = []
    if search:
        pattern = search_pattern(search)
        filters.append(any_of(Where("title", "ilike", pattern), Where("author_name", "ilike", pattern)))
    if status_filter != "all":
        filters.append(Where("status", "eq", status_filter))

    page_size = settings.page_size_books
    rows, total = gateway.select(
        "books",
        filters,
        ordering=[(sort, order == "asc")],
        window=page_window(page, page_size),
    )
    return page_of(rows, total, page, page_size)


@router.delete("/{book_id}", response_model=DeleteResponse, dependencies=[ConfirmDep])
async def delete_book(book_id: str, gateway: GatewayDep) -> dict:
    """Delete a book together with its chapters."""
    return delete_one(gateway, "books", book_id)


@router.post("/{book_id}/toggle-internal", response_model=BookResponse)
async def toggle_internal(book_id: str, gateway: GatewayDep) -> dict:
    """Flip whether the book is hidden from public listings."""
    return toggle_flag(gateway, "books", book_id, "is_internal")
