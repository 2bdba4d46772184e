"""Schemas for admin sign-in."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class ActorResponse(BaseModel):
    """The signed-in administrator."""

    user_id: str
    email: str
    role: str | None
    username: str | None = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime | None = None
    actor: ActorResponse
