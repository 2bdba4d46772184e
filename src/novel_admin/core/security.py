"""Password hashing and access-token helpers."""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from jose import jwt

from novel_admin.core.settings import settings
from novel_admin.db.time import utcnow

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Return an argon2 hash for ``password``."""
    return _hasher.hash(password)


def verify_password(stored_hash: str | None, password: str) -> bool:
    """Check ``password`` against a stored argon2 hash."""
    if not stored_hash:
        return False
    try:
        return _hasher.verify(stored_hash, password)
    except (VerifyMismatchError, InvalidHash, VerificationError):
        return False


def create_access_token(
    subject: str,
    *,
    expires_delta: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    """Issue a signed bearer token for ``subject``.

    Every token carries a ``jti`` so that signing out can revoke it before it
    expires.
    """
    issued_at = now or utcnow()
    expire = issued_at + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": subject,
        "jti": uuid.uuid4().hex,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate a bearer token.

    Raises:
        jose.JWTError: If the signature or expiry is invalid.
    """
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
