"""Configuration settings behaviour tests."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from moviescroll.config import Settings, build_http_client


def test_defaults_match_catalog_behaviour() -> None:
    """Defaults should mirror the TMDB client and search timing."""

    settings = Settings(_env_file=None)

    assert settings.api_base_url == "https://api.themoviedb.org/3"
    assert settings.image_base_url == "https://image.tmdb.org/t/p/"
    assert settings.search_debounce_seconds == pytest.approx(0.4)
    assert settings.suggestion_limit == 5
    assert settings.min_query_length == 2
    assert settings.prefetch_threshold == 5


def test_blank_token_is_treated_as_missing() -> None:
    settings = Settings(_env_file=None, TMDB_API_TOKEN="  ")

    assert settings.tmdb_api_token is None


def test_token_is_trimmed() -> None:
    settings = Settings(_env_file=None, TMDB_API_TOKEN=" abc ")

    assert settings.tmdb_api_token == "abc"


def test_debounce_bounds_are_enforced() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, SEARCH_DEBOUNCE_MS=-1)


def test_blank_language_rejected() -> None:
    with pytest.raises(ValueError, match="TMDB_LANGUAGE must not be blank"):
        Settings(_env_file=None, TMDB_LANGUAGE="  ")


@pytest.mark.anyio("asyncio")
async def test_build_http_client_uses_configured_base_url_and_timeouts() -> None:
    settings = Settings(
        _env_file=None,
        TMDB_API_URL="https://api.example.com/3/",
        REQUEST_TIMEOUT=7,
        CONNECT_TIMEOUT=2,
    )

    async with build_http_client(settings) as client:
        assert str(client.base_url) == "https://api.example.com/3/"
        assert client.timeout == httpx.Timeout(7.0, connect=2.0)
