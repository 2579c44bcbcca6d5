"""HTTP client for The Movie Database (TMDB) listing, search and detail endpoints."""

from __future__ import annotations

import logging
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..errors import (
    CatalogDecodeError,
    CatalogHTTPStatusError,
    CatalogNetworkError,
    CatalogTimeoutError,
)
from ..models import MovieDetail, Page
from ..utils import ImageSize, image_url, merge_query_params, normalize_query

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

NOW_PLAYING_PATH = "/movie/now_playing"
SEARCH_MOVIES_PATH = "/search/movie"
MOVIE_DETAIL_PATH = "/movie/{movie_id}"

_BODY_EXCERPT_CHARS = 500


class TMDBClient:
    """Client issuing typed requests against the TMDB v3 API."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        if not settings.tmdb_api_token:
            raise ValueError("TMDB API token is required when initialising TMDBClient")
        self._settings = settings
        self._client = http_client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.tmdb_api_token}",
            "accept": "application/json",
            "User-Agent": f"{self._settings.app_name} (moviescroll)",
        }

    def _params(
        self,
        endpoint_defaults: Mapping[str, object] | None = None,
        dynamic: Mapping[str, object] | None = None,
    ) -> dict[str, str]:
        return merge_query_params(
            [("language", self._settings.tmdb_language)],
            (endpoint_defaults or {}).items(),
            (dynamic or {}).items(),
        )

    def image_url(self, path: str | None, size: ImageSize = "w500") -> str | None:
        """Build an artwork URL against the configured image host."""

        return image_url(path, size, base_url=self._settings.image_base_url)

    async def fetch_browse_page(self, page_number: int) -> Page:
        """Fetch one page of the "now playing" listing."""

        params = self._params(dynamic={"page": page_number})
        return await self._get(NOW_PLAYING_PATH, params, Page)

    async def fetch_search_page(self, query: str, page_number: int) -> Page:
        """Fetch one page of movie search results for ``query``."""

        trimmed = normalize_query(query)
        if not trimmed:
            return Page.empty()
        params = self._params(
            {"include_adult": self._settings.tmdb_include_adult},
            {"query": trimmed, "page": page_number},
        )
        return await self._get(SEARCH_MOVIES_PATH, params, Page)

    async def fetch_movie_detail(self, movie_id: int) -> MovieDetail:
        """Fetch a movie record with credits and videos appended."""

        params = self._params({"append_to_response": "videos,credits"})
        path = MOVIE_DETAIL_PATH.format(movie_id=movie_id)
        return await self._get(path, params, MovieDetail)

    async def _get(
        self, path: str, params: Mapping[str, str], model: type[ModelT]
    ) -> ModelT:
        try:
            response = await self._client.get(path, params=params, headers=self._headers())
        except httpx.TimeoutException as exc:
            logger.warning("TMDB request to %s timed out: %s", path, exc)
            raise CatalogTimeoutError("The request timed out.") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "TMDB request to %s failed (%s): %s", path, exc.__class__.__name__, exc
            )
            raise CatalogNetworkError(f"Request failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "TMDB returned HTTP %s for %s: %s",
                response.status_code,
                response.request.url,
                response.text[:_BODY_EXCERPT_CHARS],
            )
            raise CatalogHTTPStatusError(response.status_code)

        try:
            payload: Any = response.json()
            return model.model_validate(payload)
        except (ValueError, ValidationError) as exc:
            logger.warning(
                "Failed to decode TMDB response for %s (first %s chars): %s",
                response.request.url,
                _BODY_EXCERPT_CHARS,
                response.text[:_BODY_EXCERPT_CHARS],
            )
            raise CatalogDecodeError(f"Decoding error: {exc}") from exc
