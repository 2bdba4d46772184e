"""Schemas for coin transactions and coin packages."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .book import UserSummary


class CoinTransactionResponse(BaseModel):
    id: str
    user_id: str
    amount: int
    type: str
    type_label: str
    description: str
    created_at: datetime
    user: UserSummary | None = None


class CoinPackagePayload(BaseModel):
    """Create or edit payload for a coin package.

    New packages are appended after the existing ones; position changes only
    through move-up and move-down.
    """

    price_usd: float = Field(..., gt=0)
    coin_amount: int = Field(..., gt=0)
    bonus_coins: int = Field(0, ge=0)
    is_active: bool = True
    icon_url: str | None = None


class CoinPackageResponse(BaseModel):
    id: str
    price_usd: float
    coin_amount: int
    bonus_coins: int
    is_active: bool
    sort_order: int
    icon_url: str | None


class UploadResponse(BaseModel):
    """Public URL of a stored file."""

    bucket: str
    key: str
    url: str
