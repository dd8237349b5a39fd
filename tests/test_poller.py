from __future__ import annotations

import asyncio

import aiohttp
import pytest
from yarl import URL

from hopr_monitor import poller
from hopr_monitor.api import NodeAuthError, build_auth_headers
from hopr_monitor.backend import resolve_endpoints
from hopr_monitor.domain import Balance, Identity

from conftest import (
    CHANNELS,
    HOPR_ADDRESS,
    NATIVE_ADDRESS,
    TICKETS,
    BlockedResponse,
    FakeSession,
    MockResponse,
    route_node,
)

LOCAL = resolve_endpoints("localhost", URL("http://localhost"), "secret")


@pytest.mark.asyncio
async def test_poll_instance_builds_complete_snapshot(session: FakeSession) -> None:
    route_node(session, "http://localhost:3001", version="2.0.0")

    snapshot = await poller.async_poll_instance(session, LOCAL, 0)

    assert snapshot.instance_index == 0
    assert snapshot.http_endpoint == "http://localhost:3001"
    assert snapshot.ws_endpoint == "ws://localhost:3000"
    assert snapshot.health_endpoint == "http://localhost:8080"
    assert snapshot.identity == Identity(HOPR_ADDRESS, NATIVE_ADDRESS)
    assert snapshot.balance == Balance("1234000000000000000", "2345000000000000000")
    assert snapshot.version == "2.0.0"
    assert snapshot.info == {"network": "hardhat"}
    assert snapshot.channels == CHANNELS
    assert snapshot.tickets == TICKETS


@pytest.mark.asyncio
async def test_poll_instance_builds_headers_once(
    session: FakeSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    route_node(session, "http://localhost:3001")
    calls: list[str] = []

    def _headers(token: str) -> dict[str, str]:
        calls.append(token)
        return build_auth_headers(token)

    monkeypatch.setattr(poller, "build_auth_headers", _headers)

    await poller.async_poll_instance(session, LOCAL, 0)

    assert calls == ["secret"]
    expected = build_auth_headers("secret")
    assert len(session.request_calls) == 8
    assert all(headers == expected for _m, _u, headers in session.request_calls)


@pytest.mark.asyncio
async def test_snapshot_is_immutable(session: FakeSession) -> None:
    route_node(session, "http://localhost:3001")

    snapshot = await poller.async_poll_instance(session, LOCAL, 0)

    with pytest.raises(AttributeError):
        snapshot.version = "other"  # type: ignore[misc]


@pytest.mark.asyncio
async def test_any_failing_query_fails_the_poll(session: FakeSession) -> None:
    route_node(session, "http://localhost:3001")
    session.route_json(
        "http://localhost:3001/api/v2/tickets/statistics", {}, status=401
    )

    with pytest.raises(NodeAuthError):
        await poller.async_poll_instance(session, LOCAL, 0)


@pytest.mark.asyncio
async def test_failing_query_cancels_in_flight_siblings(session: FakeSession) -> None:
    route_node(session, "http://localhost:3001")
    release = asyncio.Event()
    blocked = BlockedResponse(MockResponse(200, {"network": "x"}), release)
    session.route("http://localhost:3001/api/v2/node/info", lambda url: blocked)
    session.route_error(
        "http://localhost:3001/api/v2/channels",
        aiohttp.ClientConnectionError("refused"),
    )

    with pytest.raises(aiohttp.ClientConnectionError):
        await poller.async_poll_instance(session, LOCAL, 0)

    assert blocked.entered
    assert not release.is_set()
