"""Schemas for author withdrawal requests."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PaymentAccountResponse(BaseModel):
    id: str
    account_type: str
    account_name: str
    account_id: str


class WithdrawAuthor(BaseModel):
    id: str
    username: str
    payment_accounts: list[PaymentAccountResponse] = []


class WithdrawRequestResponse(BaseModel):
    id: str
    author_id: str
    amount: int
    status: str
    created_at: datetime
    reviewed_at: datetime | None
    review_note: str | None
    paid_at: datetime | None
    payment_method: str | None
    payment_reference: str | None
    author: WithdrawAuthor | None = None


class MarkPaidRequest(BaseModel):
    payment_method: str = Field(..., min_length=1)
    payment_reference: str = Field(..., min_length=1)
