"""Registry of user-supplied node hosts."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
from types import MappingProxyType

from yarl import URL

from .domain import Host, environment_of
from .util import Observable

_LOGGER = logging.getLogger(__name__)


def parse_host_input(raw_input: str) -> URL | None:
    """Return the URL typed by the user, or ``None`` when it does not parse.

    Input without a scheme is treated as a bare hostname served over HTTP.
    """

    candidate = raw_input.strip()
    if not candidate or any(char.isspace() for char in candidate):
        return None
    if "://" not in candidate:
        candidate = f"http://{candidate}"
    try:
        url = URL(candidate)
        url.port  # noqa: B018 - invalid ports only raise on access
    except (TypeError, ValueError):
        return None
    if not url.scheme or not url.host:
        return None
    return url


class HostRegistry(Observable):
    """Mapping of raw host input to :class:`Host`, most recent first."""

    def __init__(self) -> None:
        """Initialise an empty registry."""

        super().__init__()
        self._hosts: dict[str, Host] = {}

    def hosts(self) -> Mapping[str, Host]:
        """Return a read-only view of the registered hosts."""

        return MappingProxyType(dict(self._hosts))

    def get(self, identifier: str) -> Host | None:
        """Return the host registered under ``identifier``."""

        return self._hosts.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._hosts

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._hosts))

    def __len__(self) -> int:
        return len(self._hosts)

    def register(self, raw_input: str, access_token: str) -> Host | None:
        """Register ``raw_input`` as a host; ignore input that is not a URL.

        Re-registering an identifier replaces the host with a fresh record,
        which in turn triggers a reload for listeners.
        """

        url = parse_host_input(raw_input)
        if url is None:
            _LOGGER.debug("Ignoring host input that is not a URL")
            return None

        host = Host(
            identifier=raw_input,
            url=url,
            environment=environment_of(url.host or ""),
            access_token=access_token,
        )
        others = {key: value for key, value in self._hosts.items() if key != raw_input}
        self._hosts = {raw_input: host, **others}
        _LOGGER.info(
            "Registered host %s (environment=%s)", url.host, host.environment
        )
        self._changed()
        return host

    def clear(self) -> None:
        """Remove every registered host."""

        self._hosts = {}
        _LOGGER.info("Cleared host registry")
        self._changed()
