"""Async client for the HOPR node REST and healthcheck APIs."""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from .backend.sanitize import redact_text
from .codecs.models import AddressesResponse, BalancesResponse
from .const import (
    ADDRESSES_PATH,
    BALANCES_PATH,
    CHANNELS_PATH,
    DEFAULT_REQUEST_TIMEOUT,
    INFO_PATH,
    TICKETS_PATH,
    UPTIME_PATH,
    VERSION_PATH,
)

_LOGGER = logging.getLogger(__name__)

# Toggle to preview bodies in debug logs (redacted). Leave False by default.
API_LOG_PREVIEW = False

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class NodeAuthError(Exception):
    """The node rejected the access token."""


class NodePayloadError(Exception):
    """The node answered with a payload of unexpected shape."""


def build_auth_headers(token: str, *, is_post: bool = False) -> dict[str, str]:
    """Return request headers carrying ``token`` as a Basic credential."""

    encoded = base64.b64encode(token.encode("utf-8")).decode("ascii")
    headers = {"Authorization": f"Basic {encoded}"}
    if is_post:
        headers["Content-Type"] = "application/json"
        headers["Accept-Content"] = "application/json"
    return headers


def _client_timeout(timeout: float | aiohttp.ClientTimeout | None) -> aiohttp.ClientTimeout:
    """Return an aiohttp timeout for ``timeout`` seconds."""

    if isinstance(timeout, aiohttp.ClientTimeout):
        return timeout
    return aiohttp.ClientTimeout(total=timeout or DEFAULT_REQUEST_TIMEOUT)


async def async_request(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout: float | aiohttp.ClientTimeout | None = None,
) -> Any:
    """Perform an HTTP request and return JSON when possible, otherwise text.

    Statuses 401 and 403 raise :class:`NodeAuthError`; any other status
    ``>= 400`` raises :class:`aiohttp.ClientResponseError`. Errors are logged
    WITHOUT secrets.
    """

    _LOGGER.debug("HTTP %s %s", method, url)
    try:
        async with session.request(
            method, url, headers=headers or {}, timeout=_client_timeout(timeout)
        ) as resp:
            ctype = resp.headers.get("Content-Type", "")
            body_text: str
            try:
                body_text = await resp.text()
            except (aiohttp.ClientError, UnicodeDecodeError):
                body_text = "<no body>"

            if resp.status >= 400:
                _LOGGER.error(
                    "HTTP error %s %s -> %s; body=%s",
                    method,
                    url,
                    resp.status,
                    redact_text(body_text),
                )
            elif API_LOG_PREVIEW:
                _LOGGER.debug(
                    "HTTP %s -> %s, ctype=%s, body[0:200]=%r",
                    url,
                    resp.status,
                    ctype,
                    redact_text(body_text)[:200],
                )
            else:
                _LOGGER.debug("HTTP %s -> %s, ctype=%s", url, resp.status, ctype)

            if resp.status in (401, 403):
                raise NodeAuthError(f"Unauthorized (status {resp.status})")
            if resp.status >= 400:
                raise aiohttp.ClientResponseError(
                    resp.request_info,
                    resp.history,
                    status=resp.status,
                    message=body_text,
                    headers=resp.headers,
                )

            # Try JSON first; fall back to text
            if "application/json" in ctype or (
                body_text and body_text[:1] in ("{", "[", '"')
            ):
                try:
                    return json.loads(body_text)
                except ValueError:
                    return body_text
            return body_text

    except (NodeAuthError, aiohttp.ClientResponseError, asyncio.CancelledError):
        raise
    except (aiohttp.ClientError, TimeoutError) as err:
        _LOGGER.error(
            "Request %s %s failed (sanitized): %s",
            method,
            url,
            redact_text(str(err)) or type(err).__name__,
        )
        raise


def _validate(model: type[_ModelT], data: Any, path: str) -> _ModelT:
    """Validate ``data`` against ``model`` raising :class:`NodePayloadError`."""

    try:
        return model.model_validate(data)
    except ValidationError as err:
        raise NodePayloadError(f"Unexpected payload from {path}: {err}") from err


def _require_mapping(data: Any, path: str) -> dict[str, Any]:
    """Return ``data`` unchanged when it is a JSON object."""

    if not isinstance(data, dict):
        raise NodePayloadError(f"Unexpected payload from {path}: {data!r}")
    return data


class NodeRESTClient:
    """Thin async client for one HOPR node instance."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        endpoint: str,
        headers: dict[str, str],
        *,
        timeout: float | None = None,
    ) -> None:
        """Bind the client to ``endpoint`` using prebuilt auth ``headers``."""

        self._session = session
        self._endpoint = endpoint.rstrip("/")
        self._headers = headers
        self._timeout = _client_timeout(timeout)

    @property
    def endpoint(self) -> str:
        """Return the REST base URL of the instance."""

        return self._endpoint

    async def _get(self, path: str) -> Any:
        """GET ``path`` relative to the instance endpoint."""

        return await async_request(
            self._session,
            "GET",
            f"{self._endpoint}{path}",
            headers=dict(self._headers),
            timeout=self._timeout,
        )

    # ----------------- Public API -----------------

    async def get_addresses(self) -> AddressesResponse:
        """Return both account addresses of the node."""

        data = await self._get(ADDRESSES_PATH)
        return _validate(AddressesResponse, data, ADDRESSES_PATH)

    async def get_hopr_address(self) -> str:
        """Return the HOPR (peer) address of the node."""

        return (await self.get_addresses()).hopr

    async def get_native_address(self) -> str:
        """Return the native (on-chain) address of the node."""

        return (await self.get_addresses()).native

    async def get_balances(self) -> BalancesResponse:
        """Return both balances of the node in base units."""

        data = await self._get(BALANCES_PATH)
        return _validate(BalancesResponse, data, BALANCES_PATH)

    async def get_hopr_balance(self) -> str:
        """Return the HOPR token balance in base units."""

        return (await self.get_balances()).hopr

    async def get_native_balance(self) -> str:
        """Return the native token balance in base units."""

        return (await self.get_balances()).native

    async def get_version(self) -> str:
        """Return the node software version string."""

        data = await self._get(VERSION_PATH)
        if isinstance(data, dict) and isinstance(data.get("version"), str):
            return data["version"]
        if isinstance(data, str) and data.strip():
            return data.strip()
        raise NodePayloadError(f"Unexpected payload from {VERSION_PATH}: {data!r}")

    async def get_info(self) -> Any:
        """Return the general node info document as-is."""

        return await self._get(INFO_PATH)

    async def get_channels(self) -> Any:
        """Return the channel listing document as-is."""

        return _require_mapping(await self._get(CHANNELS_PATH), CHANNELS_PATH)

    async def get_tickets(self) -> Any:
        """Return the ticket statistics document as-is."""

        return _require_mapping(await self._get(TICKETS_PATH), TICKETS_PATH)


async def async_get_uptime(
    session: aiohttp.ClientSession,
    health_endpoint: str,
    *,
    timeout: float | None = None,
) -> float:
    """Return the uptime reported by an instance healthcheck (no auth)."""

    url = f"{health_endpoint.rstrip('/')}{UPTIME_PATH}"
    data = await async_request(session, "GET", url, timeout=timeout)
    if isinstance(data, dict):
        data = data.get("uptime")
    if isinstance(data, bool):
        raise NodePayloadError(f"Unexpected uptime payload: {data!r}")
    try:
        return float(data)
    except (TypeError, ValueError) as err:
        raise NodePayloadError(f"Unexpected uptime payload: {data!r}") from err
