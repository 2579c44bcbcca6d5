"""Wiring of settings, HTTP client and controllers."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator

from .config import Settings, build_http_client, get_settings
from .screen import MovieListScreen
from .services.tmdb import TMDBClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_catalog(settings: Settings | None = None) -> AsyncIterator[TMDBClient]:
    """Yield a :class:`TMDBClient` whose HTTP client is closed on exit."""

    resolved = settings or get_settings()
    exit_stack = AsyncExitStack()
    http_client = await exit_stack.enter_async_context(build_http_client(resolved))
    try:
        catalog = TMDBClient(resolved, http_client)
        logger.info("Catalog client ready for %s", resolved.api_base_url)
        yield catalog
    finally:
        await exit_stack.aclose()


@asynccontextmanager
async def open_screen(settings: Settings | None = None) -> AsyncIterator[MovieListScreen]:
    """Yield a fully wired :class:`MovieListScreen`."""

    resolved = settings or get_settings()
    async with open_catalog(resolved) as catalog:
        yield MovieListScreen.from_settings(catalog, resolved)
