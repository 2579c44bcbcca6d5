"""Tests for the browse listing controller."""

from __future__ import annotations

import asyncio

import pytest

from conftest import FakeCatalog, make_page
from moviescroll.errors import CatalogHTTPStatusError
from moviescroll.services.browse import BrowseController
from moviescroll.services.pagination import LoadOutcome


@pytest.mark.anyio("asyncio")
async def test_scrolling_merges_overlapping_pages(catalog: FakeCatalog) -> None:
    catalog.responses[("browse", 1)] = make_page([1, 2, 3], number=1, total=2)
    catalog.responses[("browse", 2)] = make_page([3, 4], number=2, total=2)
    controller = BrowseController(catalog)

    assert await controller.load_initial() is LoadOutcome.LOADED
    assert await controller.load_more_if_needed(3) is LoadOutcome.LOADED

    assert [item.id for item in controller.items] == [1, 2, 3, 4]
    assert controller.has_more is False
    assert await controller.load_more_if_needed(4) is LoadOutcome.SKIPPED
    assert catalog.calls == [("browse", 1), ("browse", 2)]


@pytest.mark.anyio("asyncio")
async def test_load_initial_only_runs_on_empty_listing(catalog: FakeCatalog) -> None:
    catalog.responses[("browse", 1)] = make_page([1, 2], number=1, total=3)
    controller = BrowseController(catalog)

    await controller.load_initial()
    assert await controller.load_initial() is LoadOutcome.SKIPPED
    assert catalog.calls == [("browse", 1)]


@pytest.mark.anyio("asyncio")
async def test_prefetch_waits_for_the_tail_of_the_list(catalog: FakeCatalog) -> None:
    catalog.responses[("browse", 1)] = make_page(range(1, 11), number=1, total=3)
    catalog.responses[("browse", 2)] = make_page(range(11, 21), number=2, total=3)
    controller = BrowseController(catalog)
    await controller.load_initial()

    assert await controller.load_more_if_needed(5) is LoadOutcome.SKIPPED
    assert await controller.load_more_if_needed(999) is LoadOutcome.SKIPPED
    assert await controller.load_more_if_needed(6) is LoadOutcome.LOADED
    assert len(controller.items) == 20
    assert controller.has_more is True


@pytest.mark.anyio("asyncio")
async def test_redundant_triggers_share_one_request(catalog: FakeCatalog) -> None:
    catalog.responses[("browse", 1)] = make_page(range(1, 6), number=1, total=2)
    catalog.responses[("browse", 2)] = make_page(range(6, 11), number=2, total=2)
    gate = catalog.hold("browse", 2)
    controller = BrowseController(catalog)
    await controller.load_initial()

    first = asyncio.create_task(controller.on_reached_end_of_list(controller.items[-1]))
    await catalog.wait_called("browse", 2)
    assert controller.is_loading_more is True
    assert await controller.load_more_if_needed(5) is LoadOutcome.SKIPPED
    gate.set()

    assert await first is LoadOutcome.LOADED
    assert catalog.calls == [("browse", 1), ("browse", 2)]


@pytest.mark.anyio("asyncio")
async def test_refresh_ignores_response_from_previous_generation(catalog: FakeCatalog) -> None:
    catalog.responses[("browse", 1)] = make_page(range(1, 6), number=1, total=2)
    catalog.responses[("browse", 2)] = make_page(range(6, 11), number=2, total=2)
    gate = catalog.hold("browse", 2)
    controller = BrowseController(catalog)
    await controller.load_initial()

    stale = asyncio.create_task(controller.load_more_if_needed(5))
    await catalog.wait_called("browse", 2)
    assert await controller.on_pull_to_refresh() is LoadOutcome.LOADED
    gate.set()

    assert await stale is LoadOutcome.STALE
    assert [item.id for item in controller.items] == [1, 2, 3, 4, 5]
    assert controller.listing.next_page == 2


@pytest.mark.anyio("asyncio")
async def test_error_is_surfaced_and_cleared_by_retry(catalog: FakeCatalog) -> None:
    catalog.responses[("browse", 1)] = CatalogHTTPStatusError(503)
    controller = BrowseController(catalog)

    assert await controller.load_initial() is LoadOutcome.FAILED
    assert controller.error == "HTTP error: 503."
    assert controller.error_info is not None and controller.error_info.status_code == 503
    assert controller.items == ()
    assert controller.is_loading is False

    catalog.responses[("browse", 1)] = make_page([1], number=1, total=1)
    assert await controller.retry() is LoadOutcome.LOADED
    assert controller.error is None
    assert await controller.retry() is LoadOutcome.SKIPPED
