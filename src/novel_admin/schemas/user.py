"""User-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

BalanceType = Literal["gold", "silver", "popularity_ticket", "current_votes"]


class UserStatsResponse(BaseModel):
    total_recharge: int = 0
    total_spent: int = 0
    total_comments: int = 0
    gold_balance: int = 0
    silver_balance: int = 0
    popularity_ticket_balance: int = 0


class UserResponse(BaseModel):
    """Profile merged with its stats row (zeroes when the row is missing)."""

    id: str
    username: str
    role: str
    level: int
    current_votes: int
    avatar_url: str | None
    created_at: datetime
    stats: UserStatsResponse


class BalanceUpdate(BaseModel):
    """Overwrite one balance of a user with a non-negative integer."""

    balance_type: BalanceType
    value: int = Field(..., ge=0)


class RecipientResponse(BaseModel):
    id: str
    username: str
