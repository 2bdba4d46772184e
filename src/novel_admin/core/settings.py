"""Application settings and configuration.

This module defines all configuration options for the novel platform admin API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Novel Platform Admin", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 12,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    admin_role: str = Field(default="admin", alias="ADMIN_ROLE")

    # Database configuration
    database_url: str = Field(default="sqlite:///./novel_admin.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Object storage for banner images and coin package icons
    storage_root: str = Field(default="./storage", alias="STORAGE_ROOT")
    storage_public_base_url: str = Field(
        default="http://localhost:8000/storage",
        alias="STORAGE_PUBLIC_BASE_URL",
    )
    banner_bucket: str = Field(default="banners", alias="BANNER_BUCKET")
    coin_icon_bucket: str = Field(default="coin-icons", alias="COIN_ICON_BUCKET")
    banner_max_bytes: int = Field(default=5 * 1024 * 1024, alias="BANNER_MAX_BYTES")
    coin_icon_max_bytes: int = Field(default=2 * 1024 * 1024, alias="COIN_ICON_MAX_BYTES")

    # Page sizes mirror the list views of the admin console
    page_size_default: int = Field(default=10, alias="PAGE_SIZE_DEFAULT")
    page_size_books: int = Field(default=20, alias="PAGE_SIZE_BOOKS")
    page_size_forum_threads: int = Field(default=20, alias="PAGE_SIZE_FORUM_THREADS")
    recipient_search_limit: int = Field(default=5, alias="RECIPIENT_SEARCH_LIMIT")

    # Platform defaults used when the global settings row is missing fields
    default_coin_to_usd: float = Field(default=0.01, alias="DEFAULT_COIN_TO_USD")
    default_author_share_percent: int = Field(default=70, alias="DEFAULT_AUTHOR_SHARE_PERCENT")

    # CORS configuration for the admin frontend
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
