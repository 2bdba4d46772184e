"""Time and identifier utilities for database models."""

import uuid
from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def new_id() -> str:
    """Return a fresh string identifier for primary keys."""
    return str(uuid.uuid4())
