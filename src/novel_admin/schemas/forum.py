"""Schemas for forum categories, threads, reports and statistics."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .book import UserSummary


class ForumCategoryPayload(BaseModel):
    """Create or edit payload for a category; both text fields are required."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    icon: str = "message-square"
    is_active: bool = True

    @field_validator("name", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class ForumCategoryResponse(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    sort_order: int
    is_active: bool
    created_at: datetime


class CategorySummary(BaseModel):
    id: str
    name: str


class ForumThreadResponse(BaseModel):
    id: str
    category_id: str
    author_id: str | None
    title: str
    is_pinned: bool
    is_featured: bool
    is_active: bool
    view_count: int
    reply_count: int
    created_at: datetime
    last_reply_at: datetime | None
    category: CategorySummary | None = None
    author: UserSummary | None = None


class ForumReportResponse(BaseModel):
    """Report row; ``target_info`` carries the reported post when it still exists."""

    id: str
    reporter_id: str | None
    target_id: str
    target_type: str
    reason: str
    created_at: datetime
    reporter: UserSummary | None = None
    target_info: dict | None = None


class ForumReportDeleteResponse(BaseModel):
    report_id: str
    deleted_target: bool


class CategoryStat(BaseModel):
    id: str
    name: str
    thread_count: int
    post_count: int


class ForumTotals(BaseModel):
    total_threads: int
    total_posts: int
    total_users: int
    active_threads: int
    posts_today: int
    posts_week: int
    posts_month: int


class ForumSeriesPoint(BaseModel):
    label: str
    threads: int
    posts: int


class ForumStatsResponse(BaseModel):
    totals: ForumTotals
    categories: list[CategoryStat]
    series: list[ForumSeriesPoint]
