"""In-memory store of the latest fleet per host."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .domain import Fleet
from .util import Observable


class FleetStore(Observable):
    """Mapping of host identifier to its most recently completed fleet."""

    def __init__(self) -> None:
        """Initialise an empty store."""

        super().__init__()
        self._fleets: dict[str, Fleet] = {}

    def snapshot(self) -> Mapping[str, Fleet]:
        """Return a read-only copy of every stored fleet."""

        return MappingProxyType(dict(self._fleets))

    def get(self, identifier: str) -> Fleet | None:
        """Return the fleet stored for ``identifier``."""

        return self._fleets.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._fleets

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._fleets))

    def __len__(self) -> int:
        return len(self._fleets)

    def merge(self, identifier: str, fleet: Fleet) -> None:
        """Store ``fleet`` for ``identifier``, replacing any earlier fleet."""

        self._fleets[identifier] = tuple(fleet)
        self._changed()

    def discard(self, identifier: str) -> None:
        """Drop the fleet stored for ``identifier`` if present."""

        if identifier not in self._fleets:
            return
        del self._fleets[identifier]
        self._changed()

    def clear(self) -> None:
        """Drop every stored fleet."""

        if not self._fleets:
            return
        self._fleets = {}
        self._changed()
