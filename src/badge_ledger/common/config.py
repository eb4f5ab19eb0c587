"""Badge-Ledger configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_EPHEMERAL_DB_URLS = {"sqlite+aiosqlite://", "sqlite+aiosqlite:///:memory:"}


class BadgeSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BADGE_")

    environment: str = "development"
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/badges.db"

    # API
    api_title: str = "Badge-Ledger"
    api_version: str = "0.1.0"
    api_prefix: str = ""
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Registry limits
    max_uri_length: int = 256
    max_batch_size: int = 100

    # Event log pagination
    default_page_size: int = 20
    max_page_size: int = 100

    @property
    def uses_ephemeral_db(self) -> bool:
        """True when the ledger lives in an in-memory SQLite database."""
        return self.db_url in _EPHEMERAL_DB_URLS

    def validate_for_production(self) -> None:
        """Raise if the ledger would not survive a restart outside development."""
        if self.max_uri_length < 1 or self.max_batch_size < 1:
            raise RuntimeError(
                "BADGE_MAX_URI_LENGTH and BADGE_MAX_BATCH_SIZE must be positive"
            )

        if self.environment != "development" and self.uses_ephemeral_db:
            raise RuntimeError(
                f"In-memory database configured in '{self.environment}' environment. "
                "Set BADGE_DB_URL to a persistent database URL."
            )

        if self.uses_ephemeral_db:
            warnings.warn(
                "Using an in-memory database — badges are lost on restart",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> BadgeSettings:
    settings = BadgeSettings()
    settings.validate_for_production()
    return settings
