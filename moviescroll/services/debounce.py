"""Debouncing of rapidly changing query text."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Awaitable, Callable

from ..utils import normalize_query

logger = logging.getLogger(__name__)

SettleHandler = Callable[[str, int], Awaitable[None]]

DEFAULT_DEBOUNCE_SECONDS = 0.4


class DebouncedQuery:
    """Turn a stream of raw text values into settled, deduplicated queries.

    Every :meth:`push` supersedes the previous value: its timer is cancelled
    and, if the previous value had already settled, the work started for it is
    cancelled too. A value settles once ``delay`` seconds pass without a newer
    push, and is handed to ``on_settle`` together with a generation token.
    Consumers call :meth:`is_current` with that token after each ``await`` to
    decide whether their result may still be applied.

    A settled value identical to the previous settled value is suppressed,
    unless the work for the previous value was cancelled before it finished.
    """

    def __init__(
        self,
        on_settle: SettleHandler,
        *,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        name: str = "query",
    ) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        self._on_settle = on_settle
        self.delay = delay
        self.name = name
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._working = False
        self._last_settled: str | None = None
        self.pending_value: str | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_settled(self) -> str | None:
        return self._last_settled

    @property
    def is_pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def push(self, value: str) -> None:
        """Start a new quiet period for ``value``."""

        self.cancel()
        token = self._generation
        self.pending_value = normalize_query(value)
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(self.pending_value, token))

    def cancel(self) -> None:
        """Drop the pending timer and invalidate work for the current value."""

        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done():
            if self._working:
                # The superseded value never finished; allow it to settle again.
                self._last_settled = None
            task.cancel()
        self._working = False
        self.pending_value = None

    def reset(self) -> None:
        """Cancel pending work and forget the last settled value."""

        self.cancel()
        self._last_settled = None

    async def join(self) -> None:
        """Wait until the pending timer and its settle work have finished."""

        task = self._task
        if task is None:
            return
        with suppress(asyncio.CancelledError):
            await task

    async def _run(self, value: str, token: int) -> None:
        await asyncio.sleep(self.delay)
        if not self.is_current(token):
            return
        if value == self._last_settled:
            logger.debug("%s: suppressing repeated value %r", self.name, value)
            self._task = None
            self.pending_value = None
            return

        self._last_settled = value
        self._working = True
        try:
            await self._on_settle(value, token)
        except Exception:
            logger.exception("%s: settle handler failed for %r", self.name, value)
        finally:
            if self.is_current(token):
                self._working = False
                self._task = None
                self.pending_value = None
