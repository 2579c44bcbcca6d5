"""MovieScroll catalog browsing and search client package."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "BrowseController": "moviescroll.services.browse",
    "DebouncedQuery": "moviescroll.services.debounce",
    "LoadOutcome": "moviescroll.services.pagination",
    "MovieDetailController": "moviescroll.services.detail",
    "MovieListScreen": "moviescroll.screen",
    "PageAccumulator": "moviescroll.services.pagination",
    "SearchController": "moviescroll.services.search",
    "TMDBClient": "moviescroll.services.tmdb",
    "open_catalog": "moviescroll.main",
    "open_screen": "moviescroll.main",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module = import_module(_EXPORTS[name])
        return getattr(module, name)
    raise AttributeError(f"module 'moviescroll' has no attribute {name}")
