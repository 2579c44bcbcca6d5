"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache

import httpx
from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="MovieScroll", alias="APP_NAME")

    tmdb_api_token: str | None = Field(default=None, alias="TMDB_API_TOKEN")
    tmdb_api_url: HttpUrl = Field(
        default="https://api.themoviedb.org/3", alias="TMDB_API_URL"
    )
    tmdb_image_url: HttpUrl = Field(
        default="https://image.tmdb.org/t/p/", alias="TMDB_IMAGE_URL"
    )
    tmdb_language: str = Field(default="en-US", alias="TMDB_LANGUAGE")
    tmdb_include_adult: bool = Field(default=False, alias="TMDB_INCLUDE_ADULT")

    request_timeout_seconds: float = Field(
        default=20.0, alias="REQUEST_TIMEOUT", gt=0, le=300
    )
    connect_timeout_seconds: float = Field(
        default=10.0, alias="CONNECT_TIMEOUT", gt=0, le=60
    )

    search_debounce_ms: int = Field(
        default=400, alias="SEARCH_DEBOUNCE_MS", ge=0, le=5_000
    )
    suggestion_limit: int = Field(default=5, alias="SUGGESTION_LIMIT", ge=1, le=20)
    min_query_length: int = Field(default=2, alias="MIN_QUERY_LENGTH", ge=1, le=10)
    prefetch_threshold: int = Field(
        default=5, alias="PREFETCH_THRESHOLD", ge=1, le=50
    )

    @field_validator("tmdb_api_token", mode="before")
    @classmethod
    def _strip_blank(cls, value: object) -> object:
        """Treat blank tokens as missing so the client can reject them."""

        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("tmdb_language")
    @classmethod
    def _normalise_language(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("TMDB_LANGUAGE must not be blank")
        return cleaned

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000

    @property
    def api_base_url(self) -> str:
        """Return the API root without a trailing slash."""

        return str(self.tmdb_api_url).rstrip("/")

    @property
    def image_base_url(self) -> str:
        """Return the image root, always ending with a slash."""

        return str(self.tmdb_image_url).rstrip("/") + "/"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared HTTP client used by :class:`TMDBClient`."""

    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(
            settings.request_timeout_seconds,
            connect=settings.connect_timeout_seconds,
        ),
    )
