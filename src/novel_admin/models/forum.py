"""SQLAlchemy models for forum categories, threads, posts and reports."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from novel_admin.db.session import Base
from novel_admin.db.time import new_id, utcnow

REPORT_TARGET_POST = "post"
REPORT_TARGET_COMMENT = "comment"


class ForumCategory(Base):
    """Forum board; ``sort_order`` is a dense zero-based display position."""

    __tablename__ = "forum_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    icon: Mapped[str] = mapped_column(Text, nullable=False, default="message-square")
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    threads: Mapped[list[ForumThread]] = relationship(
        "ForumThread",
        back_populates="category",
        cascade="all, delete-orphan",
    )


class ForumThread(Base):
    """Discussion thread inside a category."""

    __tablename__ = "forum_threads"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reply_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    last_reply_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    category: Mapped[ForumCategory] = relationship("ForumCategory", back_populates="threads")
    # Deleting a thread removes its posts in the same unit of work.
    posts: Mapped[list[ForumPost]] = relationship(
        "ForumPost",
        back_populates="thread",
        cascade="all, delete-orphan",
    )


class ForumPost(Base):
    """Reply posted inside a thread."""

    __tablename__ = "forum_posts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    thread_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_threads.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        index=True,
    )

    thread: Mapped[ForumThread] = relationship("ForumThread", back_populates="posts")


class ForumReport(Base):
    """User report against a forum post or comment."""

    __tablename__ = "forum_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    reporter_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Polymorphic target; no foreign key because it may point at posts or comments.
    target_id: Mapped[str] = mapped_column(String(36), nullable=False)
    target_type: Mapped[str] = mapped_column(Text, nullable=False, default=REPORT_TARGET_POST)
    reason: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
