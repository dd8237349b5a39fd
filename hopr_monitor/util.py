"""Small asyncio helpers shared across the monitor."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import suppress
import logging
from typing import Any

_LOGGER = logging.getLogger(__name__)


async def async_gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Run ``aws`` concurrently and return their results in order.

    The first failure cancels the remaining awaitables, waits for them to
    unwind and is then re-raised unchanged.
    """

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        with suppress(asyncio.CancelledError):
            await asyncio.gather(*tasks, return_exceptions=True)
        raise


class Observable:
    """Version counter plus change listeners for the in-memory stores."""

    def __init__(self) -> None:
        """Initialise with version zero and no listeners."""

        self._version = 0
        self._listeners: list[Callable[[], None]] = []

    @property
    def version(self) -> int:
        """Return the number of changes applied so far."""

        return self._version

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def _remove() -> None:
            with suppress(ValueError):
                self._listeners.remove(listener)

        return _remove

    def _changed(self) -> None:
        """Bump the version and notify listeners in registration order."""

        self._version += 1
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:  # noqa: BLE001
                _LOGGER.exception("%s listener raised", type(self).__name__)
