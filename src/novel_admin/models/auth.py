"""SQLAlchemy models for sign-in identities and revoked tokens."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from novel_admin.db.session import Base
from novel_admin.db.time import new_id, utcnow


class AuthUser(Base):
    """Credentials record owned by the auth layer; the profile holds the role."""

    __tablename__ = "auth_users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    last_sign_in_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )


class RevokedToken(Base):
    """Token identifiers invalidated by signing out."""

    __tablename__ = "revoked_tokens"

    jti: Mapped[str] = mapped_column(Text, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    # Rows past this instant can be purged; the token is expired anyway.
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
