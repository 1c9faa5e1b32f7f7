"""Application settings and configuration.

This module defines all configuration options for QuotesDecode, covering both
the local data API and the client-side synchronization layer.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="QuotesDecode", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Local data API: database
    database_url: str = Field(default="sqlite:///./quotes_decode.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Local data API: access tokens
    jwt_secret: str = Field(alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Client: remote store and authentication service
    store_url: str = Field(default="http://localhost:8000", alias="QUOTESDECODE_STORE_URL")
    auth_url: str | None = Field(default=None, alias="QUOTESDECODE_AUTH_URL")
    anon_key: str = Field(default="", alias="QUOTESDECODE_ANON_KEY")
    oauth_provider: str = Field(default="google", alias="OAUTH_PROVIDER")
    site_url: str = Field(default="http://localhost:3000", alias="SITE_URL")

    # Posting and ownership rules
    require_sign_in_to_post: bool = Field(default=True, alias="REQUIRE_SIGN_IN_TO_POST")
    display_name_ownership_fallback: bool = Field(
        default=True,
        alias="DISPLAY_NAME_OWNERSHIP_FALLBACK",
    )
    anonymous_author_name: str = Field(default="Anonymous", alias="ANONYMOUS_AUTHOR_NAME")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def effective_auth_url(self) -> str:
        """Return the authentication service base URL.

        Falls back to the store URL's ``/auth/v1`` prefix when no dedicated
        auth URL is configured.
        """
        if self.auth_url:
            return self.auth_url.rstrip("/")
        return f"{self.store_url.rstrip('/')}/auth/v1"


settings = Settings()  # type: ignore[call-arg]
