"""Composition of the browse and search controllers behind one movie list."""

from __future__ import annotations

from .config import Settings
from .models import MovieSummary
from .observable import Observable
from .services.browse import BrowseController
from .services.pagination import LoadOutcome
from .services.search import SearchController
from .transport import CatalogTransport

BROWSE_TITLE = "Now Playing"


class MovieListScreen(Observable):
    """Routes presentation events to browse or search depending on state.

    While a search is committed the list shows its full results; otherwise
    it shows the browse listing.
    """

    def __init__(self, browse: BrowseController, search: SearchController) -> None:
        super().__init__()
        self.browse = browse
        self.search = search
        browse.subscribe(lambda _: self._publish())
        search.subscribe(lambda _: self._publish())

    @classmethod
    def from_settings(cls, catalog: CatalogTransport, settings: Settings) -> "MovieListScreen":
        return cls(
            BrowseController.from_settings(catalog, settings),
            SearchController.from_settings(catalog, settings),
        )

    @property
    def is_searching(self) -> bool:
        return bool(self.search.committed_query)

    @property
    def title(self) -> str:
        if self.is_searching:
            return f"Results for '{self.search.committed_query}'"
        return BROWSE_TITLE

    @property
    def items(self) -> tuple[MovieSummary, ...]:
        return self.search.items if self.is_searching else self.browse.items

    @property
    def error(self) -> str | None:
        return self.search.error if self.is_searching else self.browse.error

    async def on_appear(self) -> LoadOutcome:
        if self.is_searching:
            return LoadOutcome.SKIPPED
        return await self.browse.load_initial()

    async def on_item_shown(self, item: MovieSummary) -> LoadOutcome:
        if self.is_searching:
            return await self.search.on_reached_end_of_list(item)
        return await self.browse.on_reached_end_of_list(item)

    async def on_pull_to_refresh(self) -> LoadOutcome:
        if self.is_searching:
            return await self.search.on_pull_to_refresh()
        return await self.browse.on_pull_to_refresh()

    async def on_retry(self) -> LoadOutcome:
        if self.is_searching:
            return await self.search.retry()
        return await self.browse.retry()
