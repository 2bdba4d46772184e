"""SQLAlchemy models for homepage content, notifications and platform settings."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from novel_admin.db.session import Base
from novel_admin.db.time import new_id, utcnow

GLOBAL_SETTINGS_KEY = "global"


class HomepageBanner(Base):
    """Carousel slide on the homepage."""

    __tablename__ = "homepage_banners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    link_url: Mapped[str] = mapped_column(Text, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class PlatformSetting(Base):
    """Key/value settings row.

    Older rows keep their values inside the JSON ``value`` column; newer rows
    also carry dedicated text columns. Readers fall back from one to the other.
    """

    __tablename__ = "platform_settings"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    coin_to_usd: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_share_percent: Mapped[str | None] = mapped_column(Text, nullable=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )


class SiteNotification(Base):
    """In-site message; ``user_id`` of ``None`` addresses every user."""

    __tablename__ = "site_notifications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False, default="system")
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
