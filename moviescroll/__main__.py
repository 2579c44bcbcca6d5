"""Module executed when running ``python -m moviescroll [query]``."""

from __future__ import annotations

import asyncio
import logging
import sys

from .main import open_screen


async def _run(query: str) -> int:
    async with open_screen() as screen:
        if query:
            await screen.search.commit(query)
        else:
            await screen.on_appear()

        print(screen.title)
        for item in screen.items:
            year = item.release_year or "----"
            print(f"  {item.id:>8}  {year}  {item.display_title()}")
        if screen.search.advisory:
            print(screen.search.advisory)
        if screen.error:
            print(f"error: {screen.error}", file=sys.stderr)
            return 1
    return 0


def main() -> None:
    """Print the first page of the browse listing or of a search."""

    logging.basicConfig(level=logging.INFO)
    query = " ".join(sys.argv[1:])
    raise SystemExit(asyncio.run(_run(query)))


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
