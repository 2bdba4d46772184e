"""Schemas for dashboard metrics and traffic statistics."""
from __future__ import annotations

from pydantic import BaseModel


class DashboardMetrics(BaseModel):
    total_books: int
    total_users: int
    total_coins: int


class TrafficPoint(BaseModel):
    """Daily sign-in visits and distinct users."""

    date: str
    visits: int
    unique_users: int


class TrafficResponse(BaseModel):
    range: str
    points: list[TrafficPoint]
    total_visits: int
    peak_unique_users: int
