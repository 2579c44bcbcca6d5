"""Two-phase movie search: type-ahead suggestions and committed full results."""

from __future__ import annotations

import enum
import logging
from functools import partial

from ..config import Settings
from ..errors import CatalogError, ErrorInfo
from ..models import MovieSummary, Page
from ..observable import Observable
from ..transport import CatalogTransport
from ..utils import normalize_query
from .debounce import DEFAULT_DEBOUNCE_SECONDS, DebouncedQuery
from .pagination import LoadOutcome, PageAccumulator

logger = logging.getLogger(__name__)

SHORT_QUERY_ADVISORY = "Type at least {count} characters..."
NO_RESULTS_ADVISORY = "No results found for '{query}'."


class SuggestionState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class SearchController(Observable):
    """Drives the search screen.

    Typing produces debounced suggestion lookups (page 1 only, truncated to
    ``suggestion_limit``). Submitting the text or picking a suggestion commits
    the query and starts a paginated full search. Every response is checked
    against the state it was requested for and silently dropped when the
    user has moved on.
    """

    def __init__(
        self,
        catalog: CatalogTransport,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        suggestion_limit: int = 5,
        min_query_length: int = 2,
    ) -> None:
        super().__init__()
        self._catalog = catalog
        self.suggestion_limit = suggestion_limit
        self.min_query_length = min_query_length

        self.raw_text = ""
        self.committed_query = ""
        self.suggestions: tuple[MovieSummary, ...] = ()
        self.suggestion_state = SuggestionState.IDLE
        self.advisory: str | None = None

        self.full_results = PageAccumulator("search")
        self.full_results.subscribe(lambda _: self._publish())
        self._debouncer = DebouncedQuery(
            self._on_query_settled, delay=debounce_seconds, name="suggestions"
        )

    @classmethod
    def from_settings(cls, catalog: CatalogTransport, settings: Settings) -> "SearchController":
        return cls(
            catalog,
            debounce_seconds=settings.search_debounce_seconds,
            suggestion_limit=settings.suggestion_limit,
            min_query_length=settings.min_query_length,
        )

    # Read-only view -----------------------------------------------------

    @property
    def items(self) -> tuple[MovieSummary, ...]:
        return self.full_results.items

    @property
    def is_loading(self) -> bool:
        return self.full_results.is_loading and not len(self.full_results)

    @property
    def is_loading_more(self) -> bool:
        return self.full_results.is_loading and bool(len(self.full_results))

    @property
    def has_more(self) -> bool:
        return bool(self.committed_query) and self.full_results.has_more

    @property
    def error_info(self) -> ErrorInfo | None:
        return self.full_results.error

    @property
    def error(self) -> str | None:
        info = self.full_results.error
        return info.message if info else None

    @property
    def is_loading_suggestions(self) -> bool:
        return self.suggestion_state is SuggestionState.LOADING

    @property
    def debouncer(self) -> DebouncedQuery:
        return self._debouncer

    @property
    def _short_query_advisory(self) -> str:
        return SHORT_QUERY_ADVISORY.format(count=self.min_query_length)

    # Presentation events ------------------------------------------------

    def on_text_changed(self, text: str) -> None:
        """Handle a keystroke in the search field."""

        if text == self.raw_text:
            return
        self.raw_text = text
        trimmed = normalize_query(text)
        self._debouncer.cancel()

        if not trimmed:
            self._clear_all()
        elif len(trimmed) < self.min_query_length:
            self._debouncer.reset()
            self.suggestions = ()
            self.suggestion_state = SuggestionState.IDLE
            self.advisory = self._short_query_advisory
        else:
            if self.advisory == self._short_query_advisory:
                self.advisory = None
            self._debouncer.push(trimmed)
        self._publish()

    async def on_submit(self) -> LoadOutcome:
        return await self.commit(self.raw_text)

    async def on_suggestion_picked(self, item: MovieSummary) -> LoadOutcome:
        return await self.commit(item.display_title())

    async def on_reached_end_of_list(self, item: MovieSummary | None = None) -> LoadOutcome:
        """Load the next page once the last full result has been rendered."""

        last = self.full_results.last_item
        if not self.committed_query or last is None:
            return LoadOutcome.SKIPPED
        if item is not None and item.id != last.id:
            return LoadOutcome.SKIPPED
        return await self._load_full_results()

    async def on_pull_to_refresh(self) -> LoadOutcome:
        """Re-run the committed query from its first page."""

        if not self.committed_query:
            return LoadOutcome.SKIPPED
        logger.info("Refreshing search results for %r", self.committed_query)
        self.advisory = None
        self.full_results.reset()
        return await self._load_full_results()

    async def retry(self) -> LoadOutcome:
        """Retry the page that failed last, keeping accumulated results."""

        if not self.committed_query or self.full_results.error is None:
            return LoadOutcome.SKIPPED
        return await self._load_full_results()

    def on_clear(self) -> None:
        self.raw_text = ""
        self._clear_all()
        self._publish()

    async def wait_for_suggestions(self) -> None:
        """Wait for the pending debounce timer and suggestion lookup, if any."""

        await self._debouncer.join()

    # State transitions --------------------------------------------------

    async def commit(self, text: str) -> LoadOutcome:
        """Promote ``text`` to the committed query and load its first page."""

        self._debouncer.reset()
        self.suggestions = ()
        self.suggestion_state = SuggestionState.IDLE

        trimmed = normalize_query(text)
        if not trimmed:
            self._clear_all()
            self._publish()
            return LoadOutcome.SKIPPED

        logger.info("Committing search for %r", trimmed)
        self.committed_query = trimmed
        self.raw_text = trimmed
        self.advisory = None
        self.full_results.reset()
        return await self._load_full_results()

    async def _on_query_settled(self, query: str, token: int) -> None:
        self.suggestion_state = SuggestionState.LOADING
        if query != self.committed_query:
            self.advisory = None
            self.full_results.reset()
        self._publish()

        logger.debug("Fetching suggestions for %r", query)
        try:
            page = await self._catalog.fetch_search_page(query, 1)
        except CatalogError as exc:
            self._suggestions_failed(query, token, exc.message)
            return
        except Exception as exc:
            self._suggestions_failed(query, token, repr(exc))
            return

        if not self._debouncer.is_current(token):
            return
        self.suggestions = tuple(page.items[: self.suggestion_limit])
        self.suggestion_state = SuggestionState.LOADED
        logger.debug("Got %s suggestions for %r", len(self.suggestions), query)
        self._publish()

    def _suggestions_failed(self, query: str, token: int, reason: str) -> None:
        if not self._debouncer.is_current(token):
            return
        # Suggestion failures never replace the primary error.
        logger.warning("Suggestion lookup for %r failed: %s", query, reason)
        self.suggestions = ()
        self.suggestion_state = SuggestionState.ERROR
        self._publish()

    async def _load_full_results(self) -> LoadOutcome:
        query = self.committed_query
        if not query:
            return LoadOutcome.SKIPPED

        page_number = self.full_results.next_page
        outcome = await self.full_results.load_next(
            partial(self._fetch_full_page, query),
            is_current=lambda: self.committed_query == query,
        )
        if outcome is LoadOutcome.LOADED and page_number == 1 and not len(self.full_results):
            logger.info("No full results found for %r", query)
            self.advisory = NO_RESULTS_ADVISORY.format(query=query)
            self._publish()
        return outcome

    async def _fetch_full_page(self, query: str, page_number: int) -> Page:
        return await self._catalog.fetch_search_page(query, page_number)

    def _clear_all(self) -> None:
        self._debouncer.reset()
        self.suggestions = ()
        self.suggestion_state = SuggestionState.IDLE
        self.committed_query = ""
        self.advisory = None
        self.full_results.reset()
