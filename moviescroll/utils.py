"""Utility helpers for the MovieScroll client."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Literal

ImageSize = Literal["original", "w200", "w300", "w500", "w780"]

DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"


def normalize_query(value: str | None) -> str:
    """Return the query with surrounding whitespace removed."""

    return (value or "").strip()


def image_url(
    path: str | None,
    size: ImageSize = "w500",
    *,
    base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> str | None:
    """Build a full artwork URL from a TMDB image path."""

    if not path:
        return None
    if path.startswith("http"):
        return path
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}/{size}{path}"


def parse_release_date(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` release date, returning ``None`` when invalid."""

    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def merge_query_params(*groups: Iterable[tuple[str, object]]) -> dict[str, str]:
    """Combine query parameter groups; later groups win on duplicate names."""

    merged: dict[str, str] = {}
    for group in groups:
        for name, value in group:
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            merged.pop(name, None)
            merged[name] = str(value)
    return merged
