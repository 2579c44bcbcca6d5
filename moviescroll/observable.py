"""Minimal change-notification support for controller state."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[object], None]


class Observable:
    """Publish-on-mutation base for state holders.

    Subscribers receive the publishing object after every mutation batch and
    read whatever fields they render. Listener failures are logged and do not
    interrupt state updates.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""

        self._listeners.append(callback)

        def _unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unsubscribe

    def _publish(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception:  # pragma: no cover - listener bugs must not corrupt state
                logger.exception("State listener %r failed", callback)
