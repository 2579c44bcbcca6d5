"""Infinite-scroll listing of the default "now playing" catalog."""

from __future__ import annotations

import logging

from ..config import Settings
from ..errors import ErrorInfo
from ..models import MovieSummary
from ..observable import Observable
from ..transport import CatalogTransport
from .pagination import LoadOutcome, PageAccumulator

logger = logging.getLogger(__name__)


class BrowseController(Observable):
    """Loads the browse listing page by page as the user scrolls."""

    def __init__(self, catalog: CatalogTransport, *, prefetch_threshold: int = 5) -> None:
        super().__init__()
        self._catalog = catalog
        self.prefetch_threshold = prefetch_threshold
        self.listing = PageAccumulator("browse")
        self.listing.subscribe(lambda _: self._publish())

    @classmethod
    def from_settings(cls, catalog: CatalogTransport, settings: Settings) -> "BrowseController":
        return cls(catalog, prefetch_threshold=settings.prefetch_threshold)

    @property
    def items(self) -> tuple[MovieSummary, ...]:
        return self.listing.items

    @property
    def is_loading(self) -> bool:
        return self.listing.is_loading and not len(self.listing)

    @property
    def is_loading_more(self) -> bool:
        return self.listing.is_loading and bool(len(self.listing))

    @property
    def has_more(self) -> bool:
        return self.listing.has_more

    @property
    def error_info(self) -> ErrorInfo | None:
        return self.listing.error

    @property
    def error(self) -> str | None:
        info = self.listing.error
        return info.message if info else None

    async def load_initial(self) -> LoadOutcome:
        """Load the first page on a cold start; no-op once items exist."""

        if len(self.listing) or self.listing.is_loading:
            return LoadOutcome.SKIPPED
        self.listing.reset()
        return await self.listing.load_next(self._catalog.fetch_browse_page)

    async def load_more_if_needed(self, last_visible_item_id: int) -> LoadOutcome:
        """Prefetch the next page when a row near the end becomes visible."""

        if self.listing.is_loading or not self.listing.has_more:
            return LoadOutcome.SKIPPED
        index = self.listing.index_of(last_visible_item_id)
        if index is None:
            return LoadOutcome.SKIPPED
        if index < len(self.listing) - self.prefetch_threshold:
            return LoadOutcome.SKIPPED
        return await self.listing.load_next(self._catalog.fetch_browse_page)

    async def refresh(self) -> LoadOutcome:
        """Start over from page 1, abandoning any fetch still in flight."""

        logger.info("Refreshing browse listing")
        self.listing.reset()
        return await self.listing.load_next(self._catalog.fetch_browse_page)

    async def retry(self) -> LoadOutcome:
        if self.listing.error is None:
            return LoadOutcome.SKIPPED
        return await self.listing.load_next(self._catalog.fetch_browse_page)

    async def on_reached_end_of_list(self, item: MovieSummary) -> LoadOutcome:
        return await self.load_more_if_needed(item.id)

    async def on_pull_to_refresh(self) -> LoadOutcome:
        return await self.refresh()
