"""Registered host records."""

from __future__ import annotations

from dataclasses import dataclass

from yarl import URL


def environment_of(hostname: str) -> str:
    """Return the last two dot-separated labels of ``hostname``."""

    return ".".join(hostname.split(".")[-2:])


@dataclass(frozen=True, slots=True)
class Host:
    """A user-registered node host keyed by its raw input string."""

    identifier: str
    url: URL
    environment: str
    access_token: str

    @property
    def hostname(self) -> str:
        """Return the hostname used to derive instance endpoints."""

        return self.url.host or ""
