"""Incremental, deduplicated page accumulation."""

from __future__ import annotations

import enum
import logging
import math
from typing import Awaitable, Callable

from ..errors import UNEXPECTED_ERROR_MESSAGE, CatalogError, ErrorInfo
from ..models import MovieSummary, Page
from ..observable import Observable

logger = logging.getLogger(__name__)

PageFetcher = Callable[[int], Awaitable[Page]]

UNKNOWN_TOTAL_PAGES = math.inf


class LoadOutcome(str, enum.Enum):
    """Result of a :meth:`PageAccumulator.load_next` call."""

    LOADED = "loaded"
    FAILED = "failed"
    SKIPPED = "skipped"
    STALE = "stale"


class PageAccumulator(Observable):
    """Holds a growing list of movies assembled from consecutive pages.

    Items are deduplicated by id in first-seen order. At most one fetch is
    outstanding per generation; :meth:`reset` starts a new generation so that
    any fetch still in flight is discarded when it completes.
    """

    def __init__(self, name: str = "accumulator") -> None:
        super().__init__()
        self.name = name
        self.generation = 0
        self._items: list[MovieSummary] = []
        self._seen_ids: set[int] = set()
        self.next_page = 1
        self.total_pages: float = UNKNOWN_TOTAL_PAGES
        self.is_loading = False
        self.error: ErrorInfo | None = None

    @property
    def items(self) -> tuple[MovieSummary, ...]:
        return tuple(self._items)

    @property
    def has_more(self) -> bool:
        return self.next_page <= self.total_pages

    @property
    def last_item(self) -> MovieSummary | None:
        return self._items[-1] if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def index_of(self, movie_id: int) -> int | None:
        if movie_id not in self._seen_ids:
            return None
        for index, item in enumerate(self._items):
            if item.id == movie_id:
                return index
        return None

    def reset(self) -> None:
        """Clear all items and cursors and invalidate in-flight fetches."""

        self.generation += 1
        self._items = []
        self._seen_ids = set()
        self.next_page = 1
        self.total_pages = UNKNOWN_TOTAL_PAGES
        self.is_loading = False
        self.error = None
        self._publish()

    async def load_next(
        self,
        fetch_page: PageFetcher,
        *,
        is_current: Callable[[], bool] | None = None,
    ) -> LoadOutcome:
        """Fetch and merge the next page unless a fetch is running or no pages remain.

        ``is_current`` lets the caller attach its own token check (for example
        the query a search page was requested for). When it returns ``False``
        at completion time the response is discarded like a stale generation.
        """

        if self.is_loading or not self.has_more:
            return LoadOutcome.SKIPPED

        generation = self.generation
        page_number = self.next_page
        self.is_loading = True
        self._publish()

        error: ErrorInfo | None = None
        try:
            page = await fetch_page(page_number)
        except CatalogError as exc:
            logger.warning(
                "%s: page %s failed: %s", self.name, page_number, exc.message
            )
            error = exc.to_info()
        except Exception:
            logger.exception("%s: unexpected failure loading page %s", self.name, page_number)
            error = ErrorInfo(kind="unexpected", message=UNEXPECTED_ERROR_MESSAGE)
        except BaseException:
            # Cancelled: release the single-flight slot before propagating.
            if generation == self.generation:
                self.is_loading = False
                self._publish()
            raise

        if self._discard_if_stale(generation, page_number, is_current):
            return LoadOutcome.STALE

        if error is not None:
            self.error = error
            self.is_loading = False
            self._publish()
            return LoadOutcome.FAILED

        self._merge(page.items)
        self.total_pages = page.total_pages
        if page_number < page.total_pages:
            self.next_page = page_number + 1
        else:
            self.next_page = page.total_pages + 1
        self.error = None
        self.is_loading = False
        logger.debug(
            "%s: merged page %s/%s, %s items total",
            self.name,
            page_number,
            page.total_pages,
            len(self._items),
        )
        self._publish()
        return LoadOutcome.LOADED

    def _merge(self, items: tuple[MovieSummary, ...] | list[MovieSummary]) -> None:
        for item in items:
            if item.id in self._seen_ids:
                continue
            self._seen_ids.add(item.id)
            self._items.append(item)

    def _discard_if_stale(
        self,
        generation: int,
        page_number: int,
        is_current: Callable[[], bool] | None,
    ) -> bool:
        if generation != self.generation:
            logger.debug(
                "%s: discarding page %s from generation %s (now %s)",
                self.name,
                page_number,
                generation,
                self.generation,
            )
            return True
        if is_current is not None and not is_current():
            logger.debug("%s: discarding page %s for a superseded request", self.name, page_number)
            self.is_loading = False
            self._publish()
            return True
        return False
