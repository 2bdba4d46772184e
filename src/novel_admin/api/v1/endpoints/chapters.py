"""Chapter management endpoints, including CSV bulk import."""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from novel_admin.core.settings import settings
from novel_admin.db.time import utcnow
from novel_admin.schemas.book import (
    BookSummary,
    ChapterCreate,
    ChapterImportResponse,
    ChapterResponse,
)
from novel_admin.schemas.common import DeleteResponse, Page
from novel_admin.services.chapter_import import parse_chapter_csv
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

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chapters", tags=["chapters"], dependencies=[Depends(get_admin_session)])

CHAPTER_COLUMNS = [
    "id",
    "book_id",
    "title",
    "order",
    "is_vip",
    "publish_at",
    "word_count",
    "created_at",
]


def _with_book(gateway: DataGateway, rows: list[dict]) -> list[dict]:
    return gateway.embed(
        rows,
        collection="books",
        foreign_key="book_id",
        into="book",
        columns=["id", "title"],
    )


@router.get("/", response_model=Page[ChapterResponse])
async def list_chapters(
    gateway: GatewayDep,
    page: PageQuery = 1,
    search: str | None = None,
    vip: Literal["all", "vip", "free"] = "all",
    sort: Literal["created_at", "publish_at", "order"] = "created_at",
    order: SortOrder = "desc",
) -> dict:
    """Page through chapters; ``search`` matches chapter or book title."""
    filters: list = []
    if search:
        pattern = search_pattern(search)
        books, _ = gateway.select("books", [Where("title", "ilike", pattern)], columns=["id"])
        clauses = [Where("title", "ilike", pattern)]
        if books:
            clauses.append(Where("book_id", "in", [book["id"] for book in books]))
        filters.append(any_of(*clauses))
    if vip != "all":
        filters.append(Where("is_vip", "eq", vip == "vip"))

    page_size = settings.page_size_default
    rows, total = gateway.select(
        "chapters",
        filters,
        ordering=[(sort, order == "asc")],
        window=page_window(page, page_size),
        columns=CHAPTER_COLUMNS,
    )
    return page_of(_with_book(gateway, rows), total, page, page_size)


@router.get("/books", response_model=list[BookSummary])
async def list_book_choices(gateway: GatewayDep) -> list[dict]:
    """Books available as chapter targets, by title."""
    rows, _ = gateway.select("books", ordering=[("title", True)], columns=["id", "title"])
    return rows


@router.post("/", response_model=ChapterResponse, status_code=status.HTTP_201_CREATED)
async def create_chapter(payload: ChapterCreate, gateway: GatewayDep) -> dict:
    """Add one chapter to a book."""
    gateway.get("books", payload.book_id)
    row = payload.model_dump()
    row["word_count"] = len(payload.content.split())
    created = gateway.insert("chapters", [row])
    return _with_book(gateway, created)[0]


@router.post("/import", response_model=ChapterImportResponse, status_code=status.HTTP_201_CREATED)
async def import_chapters(
    gateway: GatewayDep,
    file: Annotated[UploadFile, File(description="CSV with order,title,content,is_vip,publish_at")],
    book_id: Annotated[str | None, Form()] = None,
) -> ChapterImportResponse:
    """Bulk-insert chapters parsed from an uploaded CSV file."""
    raw = await file.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as err:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="CSV file must be UTF-8 encoded",
        ) from err

    chapters = parse_chapter_csv(text, book_id)
    if book_id:
        gateway.get("books", book_id)
    if chapters:
        gateway.insert("chapters", chapters)
    logger.info("Imported %d chapters into book %s", len(chapters), book_id)
    return ChapterImportResponse(book_id=book_id or "", imported=len(chapters))


@router.delete("/{chapter_id}", response_model=DeleteResponse, dependencies=[ConfirmDep])
async def delete_chapter(chapter_id: str, gateway: GatewayDep) -> dict:
    return delete_one(gateway, "chapters", chapter_id)


@router.post("/{chapter_id}/vip", response_model=ChapterResponse)
async def mark_vip(chapter_id: str, gateway: GatewayDep) -> dict:
    """Put a chapter behind the paywall."""
    gateway.get("chapters", chapter_id)
    rows = gateway.update("chapters", {"is_vip": True}, {"id": chapter_id})
    return _with_book(gateway, [{key: rows[0][key] for key in CHAPTER_COLUMNS}])[0]


@router.post("/{chapter_id}/publish", response_model=ChapterResponse)
async def publish_now(chapter_id: str, gateway: GatewayDep) -> dict:
    """Set the chapter's publish time to the current instant."""
    gateway.get("chapters", chapter_id)
    rows = gateway.update("chapters", {"publish_at": utcnow()}, {"id": chapter_id})
    return _with_book(gateway, [{key: rows[0][key] for key in CHAPTER_COLUMNS}])[0]
