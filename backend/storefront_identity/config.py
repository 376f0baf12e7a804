"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in production)
    - get_settings() is cached (lru_cache): one instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box locally
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storefront API
    storefront_domain: str = "example.myshopify.com"
    storefront_api_version: str = "2024-01"
    storefront_public_token: str = "public-token-placeholder"
    storefront_timeout_seconds: float = 10.0
    storefront_query_max_retries: int = 2
    storefront_base_delay_ms: int = 200
    storefront_max_delay_ms: int = 2_000
    storefront_long_cache_seconds: int = 3600

    @field_validator("storefront_domain", mode="before")
    @classmethod
    def strip_scheme(cls, v: str) -> str:
        """Accept "https://shop.myshopify.com/" as well as the bare host."""
        if isinstance(v, str):
            v = v.removeprefix("https://").removeprefix("http://")
            return v.rstrip("/")
        return v

    # Session cookie
    session_secret: str = "dev-session-secret-change-me"
    session_cookie_name: str = "session"
    session_max_age_seconds: int = 60 * 60 * 24 * 30
    session_cookie_secure: bool = True

    # Cart cookie
    cart_cookie_name: str = "cart"
    cart_max_age_seconds: int = 60 * 60 * 24 * 14

    # Storefront
    shop_name: str = "Hydrogen"
    default_locale: str = "en"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
