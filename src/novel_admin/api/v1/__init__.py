"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    banners_router,
    books_router,
    chapters_router,
    coins_router,
    comments_router,
    dashboard_router,
    forum_categories_router,
    forum_reports_router,
    forum_stats_router,
    forum_threads_router,
    genres_router,
    platform_router,
    reports_router,
    short_story_tags_router,
    users_router,
    withdrawals_router,
)

ROUTERS = (
    auth_router,
    dashboard_router,
    books_router,
    chapters_router,
    genres_router,
    short_story_tags_router,
    comments_router,
    reports_router,
    forum_categories_router,
    forum_threads_router,
    forum_reports_router,
    forum_stats_router,
    users_router,
    coins_router,
    banners_router,
    platform_router,
    withdrawals_router,
)

__all__ = ["ROUTERS"]
