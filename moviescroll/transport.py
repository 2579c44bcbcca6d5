"""Abstract transport contract consumed by the controllers."""

from __future__ import annotations

from typing import Protocol

from .models import MovieDetail, Page


class CatalogTransport(Protocol):
    """Anything that can fetch catalog pages.

    Implementations raise :class:`~moviescroll.errors.CatalogError`
    subclasses on failure and enforce their own timeouts.
    """

    async def fetch_browse_page(self, page_number: int) -> Page: ...

    async def fetch_search_page(self, query: str, page_number: int) -> Page: ...

    async def fetch_movie_detail(self, movie_id: int) -> MovieDetail: ...
