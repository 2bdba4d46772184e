"""Book report handling endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from novel_admin.core.settings import settings
from novel_admin.schemas.book import BookReportResponse
from novel_admin.schemas.common import DeleteResponse, Page
from novel_admin.services.gateway import DataGateway, Where, any_of

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

router = APIRouter(prefix="/reports", tags=["reports"], dependencies=[Depends(get_admin_session)])

RESOLVED_MARKER = " [已处理]"


def _with_relations(gateway: DataGateway, rows: list[dict]) -> list[dict]:
    gateway.embed(rows, collection="books", foreign_key="book_id", into="book", columns=["id", "title"])
    return gateway.embed(
        rows,
        collection="user_profiles",
        foreign_key="user_id",
        into="user",
        columns=["id", "username"],
    )


@router.get("/", response_model=Page[BookReportResponse])
async def list_reports(
    gateway: GatewayDep,
    page: PageQuery = 1,
    search: str | None = None,
    order: SortOrder = "desc",
) -> dict:
    """Page through reports; ``search`` matches report text or book title."""
    filters: list = []
    if search:
        pattern = search_pattern(search)
        books, _ = gateway.select("books", [Where("title", "ilike", pattern)], columns=["id"])
        clauses = [Where("text", "ilike", pattern)]
        if books:
            clauses.append(Where("book_id", "in", [book["id"] for book in books]))
        filters.append(any_of(*clauses))

    page_size = settings.page_size_default
    rows, total = gateway.select(
        "book_reports",
        filters,
        ordering=[("created_at", order == "asc")],
        window=page_window(page, page_size),
    )
    return page_of(_with_relations(gateway, rows), total, page, page_size)


@router.post("/{report_id}/resolve", response_model=BookReportResponse)
async def resolve_report(report_id: str, gateway: GatewayDep) -> dict:
    """Mark a report as handled by tagging its text."""
    report = gateway.get("book_reports", report_id)
    text = report["text"] or ""
    if not text.endswith(RESOLVED_MARKER):
        rows = gateway.update("book_reports", {"text": f"{text}{RESOLVED_MARKER}"}, {"id": report_id})
        report = rows[0]
    return _with_relations(gateway, [report])[0]


@router.delete("/{report_id}", response_model=DeleteResponse, dependencies=[ConfirmDep])
async def delete_report(report_id: str, gateway: GatewayDep) -> dict:
    return delete_one(gateway, "book_reports", report_id)
