"""SQLAlchemy models for platform users, balances and login history."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from novel_admin.db.session import Base
from novel_admin.db.time import new_id, utcnow


class UserProfile(Base):
    """Public profile of a platform user; ``role`` gates the admin console."""

    __tablename__ = "user_profiles"

    id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("auth_users.id", ondelete="CASCADE"),
        primary_key=True,
        default=new_id,
    )
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False, default="user")
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    current_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    stats: Mapped[UserStats | None] = relationship(
        "UserStats",
        back_populates="profile",
        cascade="all, delete-orphan",
        uselist=False,
    )


class UserStats(Base):
    """Per-user counters and wallet balances."""

    __tablename__ = "user_stats"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    total_recharge: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_spent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    gold_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    silver_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    popularity_ticket_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    profile: Mapped[UserProfile] = relationship("UserProfile", back_populates="stats")


class UserLoginLog(Base):
    """One row per platform sign-in; the source of traffic statistics."""

    __tablename__ = "user_login_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    logged_in_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
