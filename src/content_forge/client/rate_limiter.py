"""Request gate for calls to the generative service"""  # noqa: D415

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
import logging
import time
from typing import TYPE_CHECKING, Any

from content_forge.constants import RATE_LIMIT_WINDOW

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from content_forge.config import FrozenConfig

log = logging.getLogger(__name__)


class RequestGate:
    """Bounds in-flight requests and requests per minute for one client.

    A zero for either bound disables it; with both at zero the gate admits
    every request immediately.
    """

    def __init__(
        self,
        max_concurrent: int = 0,
        requests_per_minute: int = 0,
        *,
        window_seconds: float = RATE_LIMIT_WINDOW,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):  # noqa: D107
        if max_concurrent < 0 or requests_per_minute < 0:
            raise ValueError("Gate bounds must be >= 0")
        self.max_concurrent = max_concurrent
        self.requests_per_minute = requests_per_minute
        self.window_seconds = window_seconds
        self._semaphore = (
            asyncio.Semaphore(max_concurrent) if max_concurrent > 0 else None
        )
        self._window_lock = asyncio.Lock()
        self.request_timestamps: deque[float] = deque()
        self._clock = clock
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: FrozenConfig) -> RequestGate:
        return cls(
            max_concurrent=config.max_concurrent_requests,
            requests_per_minute=config.requests_per_minute,
        )

    @property
    def is_unbounded(self) -> bool:
        return self._semaphore is None and self.requests_per_minute == 0

    @asynccontextmanager
    async def request_context(self) -> AsyncIterator[None]:
        """Hold a slot for the duration of one remote request"""  # noqa: D415
        if self._semaphore is not None:
            await self._semaphore.acquire()
        try:
            await self._wait_if_needed()
            yield
        finally:
            if self._semaphore is not None:
                self._semaphore.release()

    async def _wait_if_needed(self) -> None:
        """Wait until the request window has room, then record this request"""  # noqa: D415
        if self.requests_per_minute == 0:
            return
        async with self._window_lock:
            now = self._evict_expired()
            if len(self.request_timestamps) >= self.requests_per_minute:
                sleep_time = self.window_seconds - (now - self.request_timestamps[0])
                if sleep_time > 0:
                    log.info(
                        "Request window full. Waiting %.2f seconds...", sleep_time
                    )
                    await self._sleep(sleep_time)
                now = self._evict_expired()
                # A stalled clock cannot free the window; drop the oldest entry.
                while len(self.request_timestamps) >= self.requests_per_minute:
                    self.request_timestamps.popleft()
            self.request_timestamps.append(now)

    def _evict_expired(self) -> float:
        now = self._clock()
        while (
            self.request_timestamps
            and now - self.request_timestamps[0] >= self.window_seconds
        ):
            self.request_timestamps.popleft()
        return now
