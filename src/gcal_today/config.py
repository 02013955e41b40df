"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Every variable is prefixed with ``GCAL_TODAY_``. OAuth secrets are never read
from the environment; they live in the data directory (see ``gcal-today setup``).

## Optional Environment Variables

- GCAL_TODAY_CALENDAR_ID: Calendar listed by default (default: primary)
- GCAL_TODAY_DATA_DIR: Where secret.json and the token cache are kept
  (default: $XDG_DATA_HOME/gcal-today or ~/.local/share/gcal-today)
- GCAL_TODAY_SOON_WINDOW_MINUTES: Lookahead for the plain listing (default: 15)
- GCAL_TODAY_INDEX_SOON_WINDOW_MINUTES: Lookahead for the numbered listing
  (default: 30)
- GCAL_TODAY_LOG_LEVEL: Logging level (default: WARNING)

## Example .env file

```
GCAL_TODAY_CALENDAR_ID=team@group.calendar.google.com
GCAL_TODAY_LOG_LEVEL=DEBUG
```
"""

from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "gcal-today"


def default_data_dir() -> Path:
    """Platform data directory for the application."""
    base = os.environ.get("XDG_DATA_HOME")
    if base:
        return Path(base) / APP_DIR_NAME
    return Path.home() / ".local" / "share" / APP_DIR_NAME


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GCAL_TODAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "gcal-today"
    app_version: str = "0.1.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Calendar
    calendar_id: str = Field(
        default="primary",
        description="Calendar ID used when --id is not given",
    )
    calendar_scopes: list[str] = Field(
        default=["https://www.googleapis.com/auth/calendar.readonly"],
        description="Google Calendar API scopes",
    )
    request_retries: int = Field(default=3, ge=1, le=10)

    # Storage
    data_dir: Path = Field(
        default_factory=default_data_dir,
        description="Directory holding the client secret and token cache",
    )
    secret_file_name: str = "secret.json"
    token_cache_file_name: str = "tokencache.json"

    # Listing
    soon_window_minutes: int = Field(default=15, ge=1, le=240)
    index_soon_window_minutes: int = Field(default=30, ge=1, le=240)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("data_dir", mode="after")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Expand ~ in user supplied paths."""
        return v.expanduser()

    @property
    def secret_path(self) -> Path:
        """Location of the OAuth client secret."""
        return self.data_dir / self.secret_file_name

    @property
    def token_cache_path(self) -> Path:
        """Location of the cached user token."""
        return self.data_dir / self.token_cache_file_name

    @property
    def soon_window(self) -> timedelta:
        """Lookahead used by the plain listing."""
        return timedelta(minutes=self.soon_window_minutes)

    @property
    def index_soon_window(self) -> timedelta:
        """Lookahead used by the index-annotated listing."""
        return timedelta(minutes=self.index_soon_window_minutes)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()
