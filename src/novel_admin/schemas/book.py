"""Schemas for books, chapters, taxonomy labels and reader feedback."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class BookSummary(BaseModel):
    id: str
    title: str


class BookResponse(BaseModel):
    """Book row with its denormalized metrics."""

    id: str
    title: str
    author_id: str | None
    author_name: str
    cover_url: str | None
    is_internal: bool
    status: str
    review_status: str
    total_chapters: int
    total_words: int
    silver_income: int
    gold_income: int
    views: int
    total_rewards: int
    reward_gold_sum: int
    votes: int
    rating: float
    likes: int
    favorites: int
    shares: int
    created_at: datetime
    last_updated_at: datetime


class ChapterCreate(BaseModel):
    """Payload for adding a single chapter."""

    book_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    content: str = ""
    order: int = Field(1, ge=0)
    is_vip: bool = False
    publish_at: datetime | None = None


class ChapterResponse(BaseModel):
    id: str
    book_id: str
    title: str
    order: int
    is_vip: bool
    publish_at: datetime | None
    word_count: int
    created_at: datetime
    book: BookSummary | None = None


class ChapterImportResponse(BaseModel):
    """Number of chapters inserted from an uploaded CSV file."""

    book_id: str
    imported: int


class TaxonomyPayload(BaseModel):
    """Create or edit payload shared by genres and short-story tags."""

    name: str = Field(..., min_length=1)
    description: str = ""


class TaxonomyResponse(BaseModel):
    id: str
    name: str
    description: str


class UserSummary(BaseModel):
    id: str
    username: str


class CommentResponse(BaseModel):
    id: str
    book_id: str
    chapter_id: str | None
    user_id: str
    content: str
    is_pinned: bool
    likes: int
    created_at: datetime
    book: BookSummary | None = None
    user: UserSummary | None = None


class BookReportResponse(BaseModel):
    id: str
    book_id: str
    user_id: str | None
    type: str
    text: str
    created_at: datetime
    book: BookSummary | None = None
    user: UserSummary | None = None
