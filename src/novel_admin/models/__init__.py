"""SQLAlchemy models for the novel platform admin API."""

from .auth import AuthUser, RevokedToken
from .book import Book, BookComment, BookReport, Chapter, Genre, ShortStoryTag
from .coin import CoinPackage, CoinTransaction
from .forum import ForumCategory, ForumPost, ForumReport, ForumThread
from .site import HomepageBanner, PlatformSetting, SiteNotification
from .user import UserLoginLog, UserProfile, UserStats
from .withdraw import AuthorPaymentAccount, WithdrawRequest

__all__ = [
    "AuthUser", "RevokedToken",
    "Book", "BookComment", "BookReport", "Chapter", "Genre", "ShortStoryTag",
    "CoinPackage", "CoinTransaction",
    "ForumCategory", "ForumPost", "ForumReport", "ForumThread",
    "HomepageBanner", "PlatformSetting", "SiteNotification",
    "UserLoginLog", "UserProfile", "UserStats",
    "AuthorPaymentAccount", "WithdrawRequest",
]
