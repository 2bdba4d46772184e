"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .banners import router as banners_router
from .books import router as books_router
from .chapters import router as chapters_router
from .coins import router as coins_router
from .comments import router as comments_router
from .dashboard import router as dashboard_router
from .forum_categories import router as forum_categories_router
from .forum_reports import router as forum_reports_router
from .forum_stats import router as forum_stats_router
from .forum_threads import router as forum_threads_router
from .platform import router as platform_router
from .reports import router as reports_router
from .taxonomy import genres_router, short_story_tags_router
from .users import router as users_router
from .withdrawals import router as withdrawals_router

__all__ = [
    "auth_router",
    "banners_router",
    "books_router",
    "chapters_router",
    "coins_router",
    "comments_router",
    "dashboard_router",
    "forum_categories_router",
    "forum_reports_router",
    "forum_stats_router",
    "forum_threads_router",
    "genres_router",
    "platform_router",
    "reports_router",
    "short_story_tags_router",
    "users_router",
    "withdrawals_router",
]
