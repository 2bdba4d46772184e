"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
    """One page of a list view plus the unpaginated total."""

    items: list[ItemT]
    total: int = Field(..., ge=0, description="Rows matching the filters across all pages.")
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class DeleteResponse(BaseModel):
    """Outcome of a confirmed delete."""

    id: str
    deleted: int


class MoveResponse(BaseModel, Generic[ItemT]):
    """Result of a move-up / move-down request and the re-read collection."""

    moved: bool
    items: list[ItemT]
