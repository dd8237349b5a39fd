from __future__ import annotations

import asyncio
from collections.abc import Callable
import json
from typing import Any

import pytest

HOPR_ADDRESS = "16Uiu2HAmE9b3TSHeF25uJS1Ecf2Js3TutnaSnipdV9otEpxbRN8Q"
NATIVE_ADDRESS = "0xEA9eDAE5CfC794B75C45c8fa89b605508A03742a"

CHANNELS = {
    "incoming": [
        {
            "type": "incoming",
            "channelId": "0x04e5",
            "peerId": "16Uiu2HAmVfV4GKQhdECMqYmUMGLy84RjTJQxTWDcmUX5847roBar",
            "status": "Open",
            "balance": "10000000000000000000",
        }
    ],
    "outgoing": [],
}

TICKETS = {
    "pending": 0,
    "unredeemed": 1,
    "unredeemedValue": "100",
    "redeemed": 2,
    "redeemedValue": "200",
    "losingTickets": 3,
    "winProportion": 0.4,
    "neglected": 0,
    "rejected": 0,
    "rejectedValue": "0",
}


class _StubRequestInfo:
    def __init__(self, method: str, url: str) -> None:
        self.method = method
        self._url = url

    @property
    def real_url(self) -> str:
        return self._url


class MockResponse:
    def __init__(
        self,
        status: int,
        json_data: Any = None,
        *,
        text_data: str | None = None,
        content_type: str = "application/json",
        url: str = "",
    ) -> None:
        self.status = status
        self._json = json_data
        self._text = text_data if text_data is not None else json.dumps(json_data)
        self.headers = {"Content-Type": content_type}
        self.request_info = _StubRequestInfo("GET", url)
        self.history = ()

    async def __aenter__(self) -> MockResponse:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def text(self) -> str:
        return self._text


class BlockedResponse:
    """Response whose context never enters until ``release`` is set."""

    def __init__(self, response: MockResponse, release: asyncio.Event) -> None:
        self._response = response
        self._release = release
        self.entered = False

    async def __aenter__(self) -> MockResponse:
        self.entered = True
        await self._release.wait()
        return self._response

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


Route = Callable[[str], Any]


class FakeSession:
    """Route GET requests by exact URL to canned responses."""

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}
        self.request_calls: list[tuple[str, str, dict[str, str]]] = []

    def route(self, url: str, handler: Route) -> None:
        self._routes[url] = handler

    def route_json(self, url: str, data: Any, *, status: int = 200) -> None:
        self.route(url, lambda requested: MockResponse(status, data, url=requested))

    def route_text(self, url: str, text: str, *, status: int = 200) -> None:
        self.route(
            url,
            lambda requested: MockResponse(
                status, text_data=text, content_type="text/plain", url=requested
            ),
        )

    def route_error(self, url: str, exc: BaseException) -> None:
        def _raise(requested: str) -> Any:
            raise exc

        self.route(url, _raise)

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: Any = None,
    ) -> Any:
        self.request_calls.append((method, url, dict(headers or {})))
        handler = self._routes.get(url)
        if handler is None:
            return MockResponse(404, {"error": "not found"}, url=url)
        return handler(url)

    def urls(self) -> list[str]:
        return [url for _method, url, _headers in self.request_calls]


def route_node(
    session: FakeSession,
    endpoint: str,
    *,
    hopr: str = HOPR_ADDRESS,
    native: str = NATIVE_ADDRESS,
    hopr_balance: str = "1234000000000000000",
    native_balance: str = "2345000000000000000",
    version: str = "1.87.0",
    info: Any = None,
) -> None:
    """Serve a healthy node API under ``endpoint``."""

    session.route_json(
        f"{endpoint}/api/v2/account/addresses", {"hopr": hopr, "native": native}
    )
    session.route_json(
        f"{endpoint}/api/v2/account/balances",
        {"hopr": hopr_balance, "native": native_balance},
    )
    session.route_json(f"{endpoint}/api/v2/node/version", version)
    session.route_json(
        f"{endpoint}/api/v2/node/info",
        info if info is not None else {"network": "hardhat"},
    )
    session.route_json(f"{endpoint}/api/v2/channels", CHANNELS)
    session.route_json(f"{endpoint}/api/v2/tickets/statistics", TICKETS)


async def never_sleep(_delay: float) -> None:
    """Sleep replacement that parks samplers forever."""

    await asyncio.Event().wait()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
