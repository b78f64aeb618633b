"""Long-running operation poller for video compilation.

Submits a job and polls it at a fixed interval until the service reports it
done, or until the wall-clock timeout passes. Each submit and poll request
goes through the backoff policy and the request gate like any other call.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

from content_forge.client.backoff import BackoffPolicy
from content_forge.constants import POLL_INTERVAL, POLL_TIMEOUT
from content_forge.exceptions import OperationTimeoutError, ProductionFailureError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from content_forge.client.rate_limiter import RequestGate
    from content_forge.core.types import OperationHandle, VideoJob
    from content_forge.pipeline.adapters.base import GenerationAdapter

log = logging.getLogger(__name__)


class OperationPoller:
    """Drives a video job to completion and returns its result URI."""

    def __init__(
        self,
        adapter: GenerationAdapter,
        *,
        interval: float = POLL_INTERVAL,
        timeout: float = POLL_TIMEOUT,
        policy: BackoffPolicy | None = None,
        gate: RequestGate | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0 or timeout <= 0:
            raise ValueError("interval and timeout must be > 0")
        self._adapter = adapter
        self.interval = interval
        self.timeout = timeout
        self._policy = policy or BackoffPolicy()
        self._gate = gate
        self._sleep = sleep
        self._clock = clock

    async def submit(self, job: VideoJob) -> str:
        """Submit ``job`` and wait for its result URI.

        Raises:
            OperationTimeoutError: If the job is still running after
                ``timeout`` seconds.
            ProductionFailureError: If the job finishes with an error or
                without a result URI.
        """
        handle = await self._request(
            lambda: self._adapter.submit_video(job), operation="video.submit"
        )
        deadline = self._clock() + self.timeout
        polls = 0
        while not handle.done:
            if self._clock() >= deadline:
                log.error(
                    "Video job %s still running after %.0fs (%d polls)",
                    handle.name,
                    self.timeout,
                    polls,
                )
                raise OperationTimeoutError(
                    f"Video job did not finish within {self.timeout:.0f} seconds",
                    operation_name=handle.name,
                )
            await self._sleep(self.interval)
            current = handle
            handle = await self._request(
                lambda: self._adapter.poll(current), operation="video.poll"
            )
            polls += 1
            log.debug("Polled %s (%d): done=%s", handle.name, polls, handle.done)

        return self._result_uri(handle)

    async def _request(
        self, call: Callable[[], Awaitable[OperationHandle]], *, operation: str
    ) -> OperationHandle:
        async def gated() -> OperationHandle:
            if self._gate is None:
                return await call()
            async with self._gate.request_context():
                return await call()

        return await self._policy.execute(gated, operation=operation)

    def _result_uri(self, handle: OperationHandle) -> str:
        if handle.error:
            raise ProductionFailureError(
                f"Video production failed: {handle.error}"
            )
        if not handle.result_uri:
            raise ProductionFailureError("Video production returned no download link")
        log.info("Video job %s finished", handle.name)
        return handle.result_uri
