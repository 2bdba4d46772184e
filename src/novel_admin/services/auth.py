"""Sign-in, sign-out and admin-session resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from jose import JWTError
from sqlalchemy.orm import Session

from novel_admin.core.security import create_access_token, decode_access_token, verify_password
from novel_admin.core.settings import settings
from novel_admin.db.time import utcnow
from novel_admin.models import AuthUser, RevokedToken, UserProfile
from novel_admin.services.errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


@dataclass
class AdminSession:
    """The signed-in actor for the duration of one request."""

    user_id: str
    email: str
    role: str | None
    username: str | None = None
    token_id: str | None = None
    expires_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == settings.admin_role

    def refresh(self, db: Session) -> AdminSession:
        """Re-read the role from the profile table."""
        profile = db.get(UserProfile, self.user_id)
        self.role = profile.role if profile else None
        self.username = profile.username if profile else None
        return self


class AuthService:
    """Credential checks and bearer-token lifecycle for the admin console."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def sign_in(self, email: str, password: str) -> tuple[str, AdminSession]:
        """Verify credentials and issue a token for an admin.

        Raises:
            AuthenticationError: Unknown email or wrong password.
            AuthorizationError: Valid credentials without the admin role.
        """
        user = self.db.query(AuthUser).filter(AuthUser.email == email.strip().lower()).first()
        if user is None or not verify_password(user.password_hash, password):
            logger.info("Rejected sign-in for %s", email)
            raise AuthenticationError("Invalid email or password")

        session = AdminSession(user_id=user.id, email=user.email, role=None).refresh(self.db)
        if not session.is_admin:
            logger.warning("Non-admin account %s attempted to sign in", user.id)
            raise AuthorizationError("Administrator access required")

        user.last_sign_in_at = utcnow()
        self.db.commit()

        token = create_access_token(user.id)
        claims = decode_access_token(token)
        session.token_id = claims["jti"]
        session.expires_at = datetime.fromtimestamp(claims["exp"], UTC)
        logger.info("Admin %s signed in", user.id)
        return token, session

    def _claims(self, token: str) -> dict[str, Any] | None:
        try:
            claims = decode_access_token(token)
        except JWTError:
            return None
        if not claims.get("sub") or not claims.get("jti"):
            return None
        return claims

    def get_current_actor(self, token: str) -> AdminSession | None:
        """Resolve a bearer token to its actor, or None if it is not usable."""
        claims = self._claims(token)
        if claims is None:
            return None
        if self.db.get(RevokedToken, claims["jti"]) is not None:
            return None
        user = self.db.get(AuthUser, claims["sub"])
        if user is None:
            return None
        session = AdminSession(
            user_id=user.id,
            email=user.email,
            role=None,
            token_id=claims["jti"],
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )
        return session.refresh(self.db)

    def sign_out(self, token: str) -> None:
        """Revoke ``token`` so later requests carrying it are rejected."""
        claims = self._claims(token)
        if claims is None:
            raise AuthenticationError("Could not validate credentials")
        if self.db.get(RevokedToken, claims["jti"]) is None:
            self.db.add(
                RevokedToken(
                    jti=claims["jti"],
                    user_id=claims["sub"],
                    expires_at=datetime.fromtimestamp(claims["exp"], UTC),
                )
            )
            self.db.commit()
        logger.info("Revoked token for %s", claims["sub"])
