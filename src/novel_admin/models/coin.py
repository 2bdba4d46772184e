"""SQLAlchemy models for the coin economy."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from novel_admin.db.session import Base
from novel_admin.db.time import new_id, utcnow

TRANSACTION_TYPES = ("recharge", "unlock", "gift", "system")


class CoinTransaction(Base):
    """Ledger entry; positive amounts credit the user, negative amounts debit."""

    __tablename__ = "coin_transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        index=True,
    )


class CoinPackage(Base):
    """Purchasable coin bundle shown on the recharge page."""

    __tablename__ = "coin_packages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    price_usd: Mapped[float] = mapped_column(Float, nullable=False)
    coin_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    bonus_coins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    icon_url: Mapped[str | None] = mapped_column(Text, nullable=True)
