"""Wire the host registry, fleet store and liveness samplers together."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from contextlib import suppress
from functools import partial
import logging

import aiohttp

from .api import NodeAuthError, NodePayloadError, async_get_uptime
from .backend.sanitize import redact_text
from .config import DashboardConfig
from .domain import Fleet, Host
from .example import example_fleet
from .fleet import async_load_host
from .liveness import LivenessSampler, SleepCallable
from .registry import HostRegistry
from .store import FleetStore

_LOGGER = logging.getLogger(__name__)

SamplerKey = tuple[str, int]


class Dashboard:
    """Keep one fleet per registered host and one sampler per shown instance.

    Every registry change reloads all registered hosts. Hosts load
    independently: a failing host keeps its previous fleet (or none) and
    never prevents the others from being merged.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        config: DashboardConfig | None = None,
        *,
        registry: HostRegistry | None = None,
        store: FleetStore | None = None,
        sleep: SleepCallable | None = None,
    ) -> None:
        """Initialise the dashboard and subscribe to registry/store changes."""

        self._session = session
        self._config = config or DashboardConfig()
        self._profiles = self._config.profiles()
        self.registry = registry if registry is not None else HostRegistry()
        self.store = store if store is not None else FleetStore()
        self._sleep = sleep
        self._token = ""
        self._tasks: set[asyncio.Task[None]] = set()
        self._samplers: dict[SamplerKey, tuple[str, LivenessSampler]] = {}
        self._unsubscribe = [
            self.registry.add_listener(self._on_registry_changed),
            self.store.add_listener(self._sync_samplers),
        ]

    @property
    def config(self) -> DashboardConfig:
        """Return the active configuration."""

        return self._config

    @property
    def token(self) -> str:
        """Return the custom access token used for new registrations."""

        return self._token

    @token.setter
    def token(self, value: str) -> None:
        self._token = value

    # ----------------- User actions -----------------

    def submit_host(self, raw_input: str) -> Host | None:
        """Register ``raw_input`` with the current token; ignore non-URLs."""

        return self.registry.register(raw_input, self._token)

    def clear(self) -> None:
        """Forget every host, fleet and sampler."""

        for task in list(self._tasks):
            task.cancel()
        self.registry.clear()

    # ----------------- Reads -----------------

    def fleets(self) -> Mapping[str, Fleet]:
        """Return the fleets of every host that loaded successfully."""

        return self.store.snapshot()

    def example_fleet(self) -> Fleet:
        """Return the placeholder fleet shown alongside the loaded ones."""

        return example_fleet()

    def samples(self, identifier: str, index: int) -> tuple[float, ...] | None:
        """Return the liveness samples of one displayed instance."""

        entry = self._samplers.get((identifier, index))
        if entry is None:
            return None
        return entry[1].window.samples()

    def sampler(self, identifier: str, index: int) -> LivenessSampler | None:
        """Return the sampler bound to one displayed instance."""

        entry = self._samplers.get((identifier, index))
        return entry[1] if entry is not None else None

    # ----------------- Loading -----------------

    async def async_refresh(self) -> None:
        """Reload every registered host and merge each result as it lands."""

        hosts = list(self.registry.hosts().values())
        if not hosts:
            return
        _LOGGER.debug("Refreshing %d host(s)", len(hosts))
        await asyncio.gather(*(self._async_load_and_merge(host) for host in hosts))

    async def _async_load_and_merge(self, host: Host) -> bool:
        """Load ``host`` and merge its fleet; return True on success."""

        try:
            fleet = await async_load_host(
                self._session,
                host,
                profiles=self._profiles,
                timeout=self._config.request_timeout,
            )
        except asyncio.CancelledError:
            raise
        except (
            NodeAuthError,
            NodePayloadError,
            aiohttp.ClientError,
            TimeoutError,
        ) as err:
            _LOGGER.warning(
                "Loading host %s failed: %s",
                host.url.host,
                redact_text(str(err)) or type(err).__name__,
            )
            return False
        except Exception:  # noqa: BLE001
            _LOGGER.exception("Unexpected error loading host %s", host.url.host)
            return False

        if host.identifier not in self.registry:
            _LOGGER.debug("Dropping fleet of unregistered host %s", host.url.host)
            return False
        self.store.merge(host.identifier, fleet)
        _LOGGER.debug(
            "Merged %d node(s) for host %s", len(fleet), host.url.host
        )
        return True

    def _on_registry_changed(self) -> None:
        """Prune fleets of removed hosts and schedule a full reload."""

        for identifier in list(self.store):
            if identifier not in self.registry:
                self.store.discard(identifier)
        if not len(self.registry):
            return
        try:
            task = asyncio.get_running_loop().create_task(self.async_refresh())
        except RuntimeError:
            _LOGGER.error("Host refresh requested outside a running event loop")
            return
        self._tasks.add(task)
        task.add_done_callback(self._finalise_task)

    def _finalise_task(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            _LOGGER.debug("Host refresh cancelled")
            return
        exception = task.exception()
        if exception is not None:
            _LOGGER.error("Host refresh raised an exception", exc_info=exception)

    async def async_wait_idle(self) -> None:
        """Wait until no scheduled refresh is in flight."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ----------------- Liveness -----------------

    def _sync_samplers(self) -> None:
        """Start samplers for new instances and cancel orphaned ones."""

        wanted: dict[SamplerKey, str] = {
            (identifier, node.instance_index): node.health_endpoint
            for identifier, fleet in self.store.snapshot().items()
            for node in fleet
        }

        for key, (endpoint, sampler) in list(self._samplers.items()):
            if wanted.get(key) != endpoint:
                sampler.cancel()
                del self._samplers[key]

        for key, endpoint in wanted.items():
            if key in self._samplers:
                continue
            sampler = LivenessSampler(
                partial(
                    async_get_uptime,
                    self._session,
                    endpoint,
                    timeout=self._config.request_timeout,
                ),
                interval=self._config.sample_interval,
                capacity=self._config.window_capacity,
                name=f"{key[0]}#{key[1]}",
                sleep=self._sleep,
            )
            self._samplers[key] = (endpoint, sampler)
            try:
                sampler.start()
            except RuntimeError:
                _LOGGER.error("Liveness sampler started outside a running event loop")

    async def async_shutdown(self) -> None:
        """Cancel pending refreshes and stop every sampler."""

        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            with suppress(asyncio.CancelledError):
                await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

        samplers = [sampler for _endpoint, sampler in self._samplers.values()]
        self._samplers.clear()
        for sampler in samplers:
            await sampler.async_stop()
