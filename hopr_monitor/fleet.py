"""Load every instance behind a host into an ordered fleet."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
import logging

import aiohttp
from yarl import URL

from .backend import DEFAULT_PROFILES, AddressingProfile, resolve_endpoints
from .const import DEFAULT_REQUEST_TIMEOUT
from .domain import Fleet, Host, build_fleet
from .poller import async_poll_instance
from .util import async_gather_or_cancel

_LOGGER = logging.getLogger(__name__)


async def async_load_fleet(
    session: aiohttp.ClientSession,
    environment: str,
    url: URL,
    access_token: str,
    *,
    profiles: Sequence[AddressingProfile] = DEFAULT_PROFILES,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> Fleet:
    """Poll all instances of the host at ``url`` concurrently.

    Any failing instance fails the whole load; ``timeout`` bounds the entire
    fan-out and surfaces as :class:`TimeoutError`.
    """

    endpoints = resolve_endpoints(environment, url, access_token, profiles=profiles)
    _LOGGER.debug(
        "Loading %d instance(s) of %s with profile %s",
        endpoints.instance_count,
        endpoints.hostname,
        endpoints.profile.name,
    )
    async with asyncio.timeout(timeout):
        snapshots = await async_gather_or_cancel(
            *(
                async_poll_instance(session, endpoints, index, timeout=timeout)
                for index in range(endpoints.instance_count)
            )
        )
    return build_fleet(snapshots)


async def async_load_host(
    session: aiohttp.ClientSession,
    host: Host,
    *,
    profiles: Sequence[AddressingProfile] = DEFAULT_PROFILES,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> Fleet:
    """Load the fleet of a registered :class:`Host`."""

    return await async_load_fleet(
        session,
        host.environment,
        host.url,
        host.access_token,
        profiles=profiles,
        timeout=timeout,
    )
