"""Rolling liveness samples per node instance."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable, Iterable, Iterator
from contextlib import suppress
import logging
import random

from .const import (
    DEFAULT_SAMPLE_INTERVAL,
    DEFAULT_WINDOW_CAPACITY,
    SYNTHETIC_SAMPLE_SCALE,
)

_LOGGER = logging.getLogger(__name__)

UptimeProbe = Callable[[], Awaitable[float]]
SleepCallable = Callable[[float], Awaitable[object]]


class LivenessWindow:
    """Bounded sample buffer that drops the oldest value once full."""

    def __init__(
        self,
        capacity: int = DEFAULT_WINDOW_CAPACITY,
        *,
        initial: Iterable[float] = (0.0,),
    ) -> None:
        """Initialise the window, seeded with ``initial`` samples."""

        if capacity < 1:
            msg = "capacity must be >= 1"
            raise ValueError(msg)
        self._samples: deque[float] = deque(initial, maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Return the maximum number of retained samples."""

        return self._samples.maxlen or 0

    def append(self, value: float) -> None:
        """Append ``value``, trimming the oldest sample beyond capacity."""

        self._samples.append(float(value))

    def samples(self) -> tuple[float, ...]:
        """Return the samples oldest first."""

        return tuple(self._samples)

    @property
    def latest(self) -> float | None:
        """Return the most recent sample."""

        return self._samples[-1] if self._samples else None

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[float]:
        return iter(tuple(self._samples))


class LivenessSampler:
    """Periodically probe one instance and record the result.

    Without a probe the sampler records synthetic values so a chart still
    moves for placeholder rows.
    """

    def __init__(
        self,
        probe: UptimeProbe | None = None,
        *,
        interval: float = DEFAULT_SAMPLE_INTERVAL,
        capacity: int = DEFAULT_WINDOW_CAPACITY,
        name: str = "",
        sleep: SleepCallable | None = None,
        rng: Callable[[], float] | None = None,
    ) -> None:
        """Initialise the sampler; call :meth:`start` to begin ticking."""

        if interval <= 0:
            msg = "interval must be > 0"
            raise ValueError(msg)
        self._probe = probe
        self._interval = interval
        self._name = name
        self._sleep = sleep or asyncio.sleep
        self._rng = rng or random.random
        self._window = LivenessWindow(capacity)
        self._task: asyncio.Task[None] | None = None

    @property
    def window(self) -> LivenessWindow:
        """Return the rolling sample window."""

        return self._window

    @property
    def running(self) -> bool:
        """Return True while the periodic task is alive."""

        return self._task is not None and not self._task.done()

    async def async_sample_once(self) -> float | None:
        """Take one sample; return it, or ``None`` when the probe failed."""

        if self._probe is None:
            value = self._rng() * SYNTHETIC_SAMPLE_SCALE
        else:
            try:
                value = float(await self._probe())
            except asyncio.CancelledError:
                raise
            except Exception as err:  # noqa: BLE001
                _LOGGER.debug("Liveness probe %s failed: %s", self._name, err)
                return None
        self._window.append(value)
        return value

    async def _run(self) -> None:
        while True:
            await self._sleep(self._interval)
            await self.async_sample_once()

    def start(self) -> asyncio.Task[None]:
        """Start the periodic task if it is not already running."""

        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(
                self._run(), name=f"liveness-{self._name}"
            )
        return self._task

    def cancel(self) -> None:
        """Request cancellation without waiting for the task to unwind."""

        task = self._task
        if task is not None and not task.done():
            task.cancel()

    async def async_stop(self) -> None:
        """Cancel the periodic task and wait for it to finish."""

        task = self._task
        self._task = None
        if task is None:
            return
        if not task.done():
            task.cancel()
        with suppress(asyncio.CancelledError):
            await task
