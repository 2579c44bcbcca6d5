"""Pytest configuration and test helpers."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Iterable

import pytest


# Ensure the package is importable when running tests without an editable
# install. This mirrors the expected runtime layout where ``moviescroll`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from moviescroll.errors import CatalogHTTPStatusError  # noqa: E402
from moviescroll.models import MovieDetail, MovieSummary, Page  # noqa: E402


def make_page(ids: Iterable[int], number: int = 1, total: int = 1) -> Page:
    """Build a page whose movies are titled after their ids."""

    items = tuple(MovieSummary(id=movie_id, title=f"Movie {movie_id}") for movie_id in ids)
    return Page(items=items, page_number=number, total_pages=total, total_results=len(items))


class FakeCatalog:
    """In-memory transport with per-request gates for ordering tests.

    Responses are registered by key, ``("browse", page)`` or
    ``("search", query, page)``; an exception registered as a response is
    raised instead of returned. :meth:`hold` makes the matching request wait
    until the returned event is set.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple, Page | MovieDetail | Exception] = {}
        self.calls: list[tuple] = []
        self._gates: dict[tuple, asyncio.Event] = {}
        self._started: dict[tuple, asyncio.Event] = {}

    def hold(self, *key: object) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[key] = gate
        return gate

    async def wait_called(self, *key: object) -> None:
        await asyncio.wait_for(self._started_event(key).wait(), timeout=1)

    def _started_event(self, key: tuple) -> asyncio.Event:
        return self._started.setdefault(key, asyncio.Event())

    async def _respond(self, key: tuple):
        self.calls.append(key)
        self._started_event(key).set()
        gate = self._gates.get(key)
        if gate is not None:
            await gate.wait()
        result = self.responses.get(key)
        if result is None:
            raise CatalogHTTPStatusError(404)
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_browse_page(self, page_number: int) -> Page:
        return await self._respond(("browse", page_number))

    async def fetch_search_page(self, query: str, page_number: int) -> Page:
        return await self._respond(("search", query, page_number))

    async def fetch_movie_detail(self, movie_id: int) -> MovieDetail:
        return await self._respond(("detail", movie_id))


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()
