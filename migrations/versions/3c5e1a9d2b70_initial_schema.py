"""initial schema

Revision ID: 3c5e1a9d2b70
Revises:
Create Date: 2026-10-19 09:12:41.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c5e1a9d2b70"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(length=36), nullable=False)


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=True)


def _user_fk(name: str, *, nullable: bool, ondelete: str) -> tuple[sa.Column, sa.ForeignKeyConstraint]:
    return (
        sa.Column(name, sa.String(length=36), nullable=nullable),
        sa.ForeignKeyConstraint([name], ["user_profiles.id"], ondelete=ondelete),
    )


def upgrade() -> None:
    """Create every table of the admin schema."""
    op.create_table(
        "auth_users",
        _id(),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        _created_at(),
        sa.Column("last_sign_in_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "revoked_tokens",
        sa.Column("jti", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("jti"),
    )
    op.create_table(
        "user_profiles",
        _id(),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("current_votes", sa.Integer(), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["id"], ["auth_users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "user_stats",
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("total_recharge", sa.Integer(), nullable=False),
        sa.Column("total_spent", sa.Integer(), nullable=False),
        sa.Column("total_comments", sa.Integer(), nullable=False),
        sa.Column("gold_balance", sa.Integer(), nullable=False),
        sa.Column("silver_balance", sa.Integer(), nullable=False),
        sa.Column("popularity_ticket_balance", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )
    user_column, user_fk = _user_fk("user_id", nullable=False, ondelete="CASCADE")
    op.create_table(
        "user_login_logs",
        _id(),
        user_column,
        sa.Column("logged_in_at", sa.DateTime(timezone=True), nullable=False),
        user_fk,
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_login_logs_logged_in_at", "user_login_logs", ["logged_in_at"])

    author_column, author_fk = _user_fk("author_id", nullable=True, ondelete="SET NULL")
    op.create_table(
        "books",
        _id(),
        sa.Column("title", sa.Text(), nullable=False),
        author_column,
        sa.Column("author_name", sa.Text(), nullable=False),
        sa.Column("cover_url", sa.Text(), nullable=True),
        sa.Column("is_internal", sa.Boolean(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column("review_status", sa.Text(), nullable=False),
        *(
            sa.Column(name, sa.Integer(), nullable=False)
            for name in (
                "total_chapters",
                "total_words",
                "silver_income",
                "gold_income",
                "views",
                "total_rewards",
                "reward_gold_sum",
                "votes",
            )
        ),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False),
        sa.Column("favorites", sa.Integer(), nullable=False),
        sa.Column("shares", sa.Integer(), nullable=False),
        _created_at(),
        sa.Column("last_updated_at", sa.DateTime(timezone=True), nullable=True),
        author_fk,
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "chapters",
        _id(),
        sa.Column("book_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("is_vip", sa.Boolean(), nullable=False),
        sa.Column("publish_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("word_count", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    for table in ("genres", "short_story_tags"):
        op.create_table(
            table,
            _id(),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("name"),
        )

    user_column, user_fk = _user_fk("user_id", nullable=False, ondelete="CASCADE")
    op.create_table(
        "book_comments",
        _id(),
        sa.Column("book_id", sa.String(length=36), nullable=False),
        sa.Column("chapter_id", sa.String(length=36), nullable=True),
        user_column,
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["chapter_id"], ["chapters.id"], ondelete="CASCADE"),
        user_fk,
        sa.PrimaryKeyConstraint("id"),
    )
    user_column, user_fk = _user_fk("user_id", nullable=True, ondelete="SET NULL")
    op.create_table(
        "book_reports",
        _id(),
        sa.Column("book_id", sa.String(length=36), nullable=False),
        user_column,
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="CASCADE"),
        user_fk,
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "forum_categories",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    author_column, author_fk = _user_fk("author_id", nullable=True, ondelete="SET NULL")
    op.create_table(
        "forum_threads",
        _id(),
        sa.Column("category_id", sa.String(length=36), nullable=False),
        author_column,
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("view_count", sa.Integer(), nullable=False),
        sa.Column("reply_count", sa.Integer(), nullable=False),
        _created_at(),
        sa.Column("last_reply_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["category_id"], ["forum_categories.id"], ondelete="CASCADE"),
        author_fk,
        sa.PrimaryKeyConstraint("id"),
    )
    author_column, author_fk = _user_fk("author_id", nullable=True, ondelete="SET NULL")
    op.create_table(
        "forum_posts",
        _id(),
        sa.Column("thread_id", sa.String(length=36), nullable=False),
        author_column,
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["thread_id"], ["forum_threads.id"], ondelete="CASCADE"),
        author_fk,
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forum_posts_created_at", "forum_posts", ["created_at"])
    reporter_column, reporter_fk = _user_fk("reporter_id", nullable=True, ondelete="SET NULL")
    op.create_table(
        "forum_reports",
        _id(),
        reporter_column,
        sa.Column("target_id", sa.String(length=36), nullable=False),
        sa.Column("target_type", sa.Text(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        _created_at(),
        reporter_fk,
        sa.PrimaryKeyConstraint("id"),
    )

    user_column, user_fk = _user_fk("user_id", nullable=False, ondelete="CASCADE")
    op.create_table(
        "coin_transactions",
        _id(),
        user_column,
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        _created_at(),
        user_fk,
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_coin_transactions_created_at", "coin_transactions", ["created_at"])
    op.create_table(
        "coin_packages",
        _id(),
        sa.Column("price_usd", sa.Float(), nullable=False),
        sa.Column("coin_amount", sa.Integer(), nullable=False),
        sa.Column("bonus_coins", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("icon_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "homepage_banners",
        _id(),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("link_url", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "platform_settings",
        sa.Column("key", sa.Text(), nullable=False),
        sa.Column("coin_to_usd", sa.Text(), nullable=True),
        sa.Column("author_share_percent", sa.Text(), nullable=True),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("key"),
    )
    user_column, user_fk = _user_fk("user_id", nullable=True, ondelete="CASCADE")
    op.create_table(
        "site_notifications",
        _id(),
        user_column,
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        _created_at(),
        user_fk,
        sa.PrimaryKeyConstraint("id"),
    )

    author_column, author_fk = _user_fk("author_id", nullable=False, ondelete="CASCADE")
    op.create_table(
        "withdraw_requests",
        _id(),
        author_column,
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        _created_at(),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("review_note", sa.Text(), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("payment_method", sa.Text(), nullable=True),
        sa.Column("payment_reference", sa.Text(), nullable=True),
        author_fk,
        sa.PrimaryKeyConstraint("id"),
    )
    author_column, author_fk = _user_fk("author_id", nullable=False, ondelete="CASCADE")
    op.create_table(
        "author_payment_accounts",
        _id(),
        author_column,
        sa.Column("account_type", sa.Text(), nullable=False),
        sa.Column("account_name", sa.Text(), nullable=False),
        sa.Column("account_id", sa.Text(), nullable=False),
        author_fk,
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop every table of the admin schema."""
    op.drop_table("author_payment_accounts")
    op.drop_table("withdraw_requests")
    op.drop_table("site_notifications")
    op.drop_table("platform_settings")
    op.drop_table("homepage_banners")
    op.drop_index("ix_coin_transactions_created_at", table_name="coin_transactions")
    op.drop_table("coin_packages")
    op.drop_table("coin_transactions")
    op.drop_table("forum_reports")
    op.drop_index("ix_forum_posts_created_at", table_name="forum_posts")
    op.drop_table("forum_posts")
    op.drop_table("forum_threads")
    op.drop_table("forum_categories")
    op.drop_table("book_reports")
    op.drop_table("book_comments")
    op.drop_table("short_story_tags")
    op.drop_table("genres")
    op.drop_table("chapters")
    op.drop_table("books")
    op.drop_index("ix_user_login_logs_logged_in_at", table_name="user_login_logs")
    op.drop_table("user_login_logs")
    op.drop_table("user_stats")
    op.drop_table("user_profiles")
    op.drop_table("revoked_tokens")
    op.drop_table("auth_users")
