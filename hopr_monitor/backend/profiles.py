"""Addressing profiles mapping a host URL to its node instances."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from yarl import URL

from ..const import (
    LOCAL_HEALTH_PORT,
    LOCAL_HTTP_PORT,
    LOCAL_NODES,
    LOCAL_WS_PORT,
    MANAGED_CLOUD_DOMAINS,
    MANAGED_CLOUD_NODES,
    MANAGED_CLOUD_TOKEN,
    MANAGED_HEALTH_PREFIX,
    MANAGED_HTTP_PREFIX,
    MANAGED_WS_PREFIX,
)


def _endpoint_host(url: URL) -> str:
    """Return the host of ``url`` as it appears in a URL authority."""

    host = url.host or ""
    # IPv6 literals need their brackets back
    if ":" in host:
        return f"[{host}]"
    return host


class AddressingProfile(ABC):
    """Base class for environment-specific addressing schemes.

    Instance indices passed to the endpoint methods are 1-based, matching the
    port numbering used by the node deployments.
    """

    name: str = "base"

    def __init__(self, *, instance_count: int) -> None:
        """Initialise the profile with its fixed instance count."""

        if instance_count < 1:
            msg = "instance_count must be >= 1"
            raise ValueError(msg)
        self._instance_count = instance_count

    @property
    def instance_count(self) -> int:
        """Return the number of instances served behind one host."""

        return self._instance_count

    @abstractmethod
    def matches(self, environment: str) -> bool:
        """Return True when this profile addresses ``environment``."""

    @abstractmethod
    def access_token(self, user_token: str) -> str:
        """Return the token used to authenticate against the instances."""

    @abstractmethod
    def http_endpoint(self, hostname: str, index: int) -> str:
        """Return the REST base URL of instance ``index``."""

    @abstractmethod
    def ws_endpoint(self, hostname: str, index: int) -> str:
        """Return the websocket base URL of instance ``index``."""

    @abstractmethod
    def health_endpoint(self, hostname: str, index: int) -> str:
        """Return the healthcheck base URL of instance ``index``."""

    def resolve(self, url: URL, user_token: str) -> ResolvedEndpoints:
        """Bind this profile to ``url`` and the effective access token."""

        return ResolvedEndpoints(
            profile=self,
            hostname=_endpoint_host(url),
            access_token=self.access_token(user_token),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(instance_count={self._instance_count})"


@dataclass(frozen=True, slots=True)
class ResolvedEndpoints:
    """Endpoint functions for every instance of one host."""

    profile: AddressingProfile
    hostname: str
    access_token: str

    @property
    def instance_count(self) -> int:
        """Return the number of instances to poll."""

        return self.profile.instance_count

    def indices(self) -> range:
        """Return the 1-based instance indices."""

        return range(1, self.instance_count + 1)

    def _check(self, index: int) -> None:
        if not 1 <= index <= self.instance_count:
            raise IndexError(
                f"instance index {index} outside 1..{self.instance_count}"
            )

    def http_endpoint(self, index: int) -> str:
        """Return the REST base URL of instance ``index``."""

        self._check(index)
        return self.profile.http_endpoint(self.hostname, index)

    def ws_endpoint(self, index: int) -> str:
        """Return the websocket base URL of instance ``index``."""

        self._check(index)
        return self.profile.ws_endpoint(self.hostname, index)

    def health_endpoint(self, index: int) -> str:
        """Return the healthcheck base URL of instance ``index``."""

        self._check(index)
        return self.profile.health_endpoint(self.hostname, index)


class ManagedCloudProfile(AddressingProfile):
    """Cloud workspaces exposing each port as a ``<port>-<hostname>`` subdomain."""

    name = "managed_cloud"

    def __init__(
        self,
        *,
        domains: Iterable[str] = MANAGED_CLOUD_DOMAINS,
        token: str = MANAGED_CLOUD_TOKEN,
        instance_count: int = MANAGED_CLOUD_NODES,
    ) -> None:
        """Initialise the profile for the given workspace domains."""

        super().__init__(instance_count=instance_count)
        self._domains = frozenset(domain.strip().lower() for domain in domains)
        self._token = token

    @property
    def domains(self) -> frozenset[str]:
        """Return the environments served by this profile."""

        return self._domains

    def matches(self, environment: str) -> bool:
        return environment.lower() in self._domains

    def access_token(self, user_token: str) -> str:
        # Workspaces run with a fixed development token.
        return self._token

    def http_endpoint(self, hostname: str, index: int) -> str:
        return f"https://{MANAGED_HTTP_PREFIX}{index}-{hostname}"

    def ws_endpoint(self, hostname: str, index: int) -> str:
        return f"wss://{MANAGED_WS_PREFIX}{index}-{hostname}"

    def health_endpoint(self, hostname: str, index: int) -> str:
        return f"https://{MANAGED_HEALTH_PREFIX}{index}-{hostname}"


class LocalCustomProfile(AddressingProfile):
    """Single node reachable on fixed ports of the registered hostname."""

    name = "local_custom"

    def __init__(self, *, instance_count: int = LOCAL_NODES) -> None:
        """Initialise the fallback profile."""

        super().__init__(instance_count=instance_count)

    def matches(self, environment: str) -> bool:
        return True

    def access_token(self, user_token: str) -> str:
        return user_token

    def http_endpoint(self, hostname: str, index: int) -> str:
        return f"http://{hostname}:{LOCAL_HTTP_PORT}"

    def ws_endpoint(self, hostname: str, index: int) -> str:
        return f"ws://{hostname}:{LOCAL_WS_PORT}"

    def health_endpoint(self, hostname: str, index: int) -> str:
        return f"http://{hostname}:{LOCAL_HEALTH_PORT}"
