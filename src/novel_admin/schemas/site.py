"""Schemas for banners, platform settings and site notifications."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class BannerPayload(BaseModel):
    """Homepage banner; image, title and link are all required."""

    image_url: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    link_url: str = Field(..., min_length=1)
    is_active: bool = True

    @field_validator("image_url", "title", "link_url")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class BannerResponse(BaseModel):
    id: str
    image_url: str
    title: str
    link_url: str
    sort_order: int
    is_active: bool
    created_at: datetime


class PlatformSettingsPayload(BaseModel):
    coin_to_usd: float = Field(..., gt=0)
    author_share_percent: int = Field(..., ge=0, le=100)


class PlatformSettingsResponse(PlatformSettingsPayload):
    updated_at: datetime | None = None


class NotificationCreate(BaseModel):
    """In-site message; omit ``user_id`` to address every user."""

    title: str
    content: str
    type: Literal["system", "review", "alert"] = "system"
    user_id: str | None = None

    @field_validator("title", "content")
    @classmethod
    def _required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class NotificationResponse(BaseModel):
    id: str
    user_id: str | None
    title: str
    content: str
    type: str
    is_read: bool
    created_at: datetime
