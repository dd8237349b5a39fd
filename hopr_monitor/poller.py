"""Poll a single node instance into an immutable snapshot."""

from __future__ import annotations

import logging

import aiohttp

from .api import NodeRESTClient, build_auth_headers
from .backend.profiles import ResolvedEndpoints
from .backend.sanitize import mask_identifier
from .domain import Balance, Identity, NodeSnapshot
from .util import async_gather_or_cancel

_LOGGER = logging.getLogger(__name__)


async def async_poll_instance(
    session: aiohttp.ClientSession,
    endpoints: ResolvedEndpoints,
    index: int,
    *,
    timeout: float | None = None,
) -> NodeSnapshot:
    """Query instance ``index`` (0-based) and return its snapshot.

    All queries share one set of auth headers and run concurrently. The
    snapshot is all-or-nothing: the first failing query cancels the others
    and its exception propagates to the caller.
    """

    slot = index + 1
    http_endpoint = endpoints.http_endpoint(slot)
    headers = build_auth_headers(endpoints.access_token)
    client = NodeRESTClient(session, http_endpoint, headers, timeout=timeout)

    (
        hopr_address,
        native_address,
        hopr_balance,
        native_balance,
        version,
        info,
        channels,
        tickets,
    ) = await async_gather_or_cancel(
        client.get_hopr_address(),
        client.get_native_address(),
        client.get_hopr_balance(),
        client.get_native_balance(),
        client.get_version(),
        client.get_info(),
        client.get_channels(),
        client.get_tickets(),
    )

    _LOGGER.debug(
        "Polled instance %d at %s (hopr=%s, version=%s)",
        index,
        http_endpoint,
        mask_identifier(hopr_address),
        version,
    )
    return NodeSnapshot(
        instance_index=index,
        http_endpoint=http_endpoint,
        ws_endpoint=endpoints.ws_endpoint(slot),
        health_endpoint=endpoints.health_endpoint(slot),
        identity=Identity(hopr_address=hopr_address, native_address=native_address),
        balance=Balance(hopr=hopr_balance, native=native_balance),
        version=version,
        info=info,
        channels=channels,
        tickets=tickets,
    )
