"""Retry and backoff for calls to the generative service.

Rate-limit errors are retried with a growing, jittered delay. Other service
errors are retried only when ``retry_all_errors`` is set; errors raised by
this library itself are never retried.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import StrEnum
import logging
import random
from typing import TYPE_CHECKING, Any

from content_forge.constants import (
    CAPACITY_REACHED_MESSAGE,
    MAX_ATTEMPTS,
    RATE_LIMIT_MARKERS,
    RATE_LIMIT_MULTIPLIER,
    RATE_LIMIT_STATUS,
    RETRY_BASE_DELAY,
    RETRY_GROWTH_FACTOR,
    RETRY_MAX_JITTER,
)
from content_forge.core.types import RetryState, _require
from content_forge.exceptions import ContentForgeError, TransientRateLimitedError
from content_forge.telemetry import TelemetryContext

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from content_forge.config import FrozenConfig
    from content_forge.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

T_RETRY = "backoff.retry"


class ErrorClass(StrEnum):
    RATE_LIMITED = "rate_limited"
    OTHER = "other"
    FATAL = "fatal"


@dataclass(frozen=True, slots=True)
class RetryDecision:
    """Outcome of one failed attempt: wait ``delay`` seconds and retry, or stop."""

    retry: bool
    error_class: ErrorClass
    delay: float = 0.0


def _status_codes(error: BaseException) -> list[Any]:
    return [
        getattr(error, attr, None) for attr in ("code", "status", "status_code")
    ]


def is_rate_limited(error: BaseException) -> bool:
    """Return True if the error signals throttling or an exhausted quota."""
    for value in _status_codes(error):
        if value == RATE_LIMIT_STATUS:
            return True
        if isinstance(value, str) and value.lower() in RATE_LIMIT_MARKERS:
            return True
    text = str(error).lower()
    return any(marker in text for marker in RATE_LIMIT_MARKERS)


class BackoffPolicy:
    """Decides whether a failed call is retried and how long to wait.

    Each logical call gets its own ``RetryState`` from ``new_state()``; the
    policy itself holds only settings and can be shared across concurrent
    operations.
    """

    def __init__(
        self,
        *,
        max_attempts: int = MAX_ATTEMPTS,
        base_delay: float = RETRY_BASE_DELAY,
        max_jitter: float = RETRY_MAX_JITTER,
        rate_limit_multiplier: float = RATE_LIMIT_MULTIPLIER,
        growth_factor: float = RETRY_GROWTH_FACTOR,
        retry_all_errors: bool = False,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        _require(
            condition=max_attempts >= 1,
            message="must be >= 1",
            field_name="max_attempts",
        )
        _require(
            condition=base_delay > 0, message="must be > 0", field_name="base_delay"
        )
        _require(
            condition=max_jitter >= 0, message="must be >= 0", field_name="max_jitter"
        )
        _require(
            condition=rate_limit_multiplier >= 1,
            message="must be >= 1",
            field_name="rate_limit_multiplier",
        )
        _require(
            condition=growth_factor >= 1,
            message="must be >= 1",
            field_name="growth_factor",
        )
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_jitter = max_jitter
        self.rate_limit_multiplier = rate_limit_multiplier
        self.growth_factor = growth_factor
        self.retry_all_errors = retry_all_errors
        self._rng = rng or random.Random()  # noqa: S311
        self._sleep = sleep
        self._telemetry = telemetry or TelemetryContext()

    @classmethod
    def from_config(cls, config: FrozenConfig, **overrides: Any) -> BackoffPolicy:
        settings: dict[str, Any] = {
            "max_attempts": config.max_attempts,
            "base_delay": config.retry_base_delay,
            "max_jitter": config.retry_max_jitter,
            "rate_limit_multiplier": config.rate_limit_multiplier,
            "retry_all_errors": config.retry_all_errors,
        }
        settings.update(overrides)
        return cls(**settings)

    def classify(self, error: BaseException) -> ErrorClass:
        if isinstance(error, ContentForgeError):
            return ErrorClass.FATAL
        if is_rate_limited(error):
            return ErrorClass.RATE_LIMITED
        return ErrorClass.OTHER

    def new_state(self) -> RetryState:
        return RetryState(
            attempts_remaining=self.max_attempts,
            current_base_delay=self.base_delay,
        )

    def decide(self, error: BaseException, state: RetryState) -> RetryDecision:
        """Consume one attempt from ``state`` and decide what happens next.

        The delay is the current base (multiplied for rate-limit errors) plus
        jitter in ``[0, max_jitter)``, never less than the previous delay for
        the same call; the base then grows by ``growth_factor``.
        """
        error_class = self.classify(error)
        if error_class is ErrorClass.FATAL or (
            error_class is ErrorClass.OTHER and not self.retry_all_errors
        ):
            return RetryDecision(retry=False, error_class=error_class)

        state.attempts_remaining = max(state.attempts_remaining - 1, 0)
        if state.attempts_remaining == 0:
            return RetryDecision(retry=False, error_class=error_class)

        rate_limited = error_class is ErrorClass.RATE_LIMITED
        multiplier = self.rate_limit_multiplier if rate_limited else 1.0
        computed = state.current_base_delay * multiplier + self._jitter()
        delay = max(computed, state.last_delay)
        state.last_delay = delay
        state.current_base_delay *= self.growth_factor
        return RetryDecision(retry=True, error_class=error_class, delay=delay)

    async def execute[T](
        self, call: Callable[[], Awaitable[T]], *, operation: str
    ) -> T:
        """Run ``call`` until it succeeds or the policy gives up.

        Raises:
            TransientRateLimitedError: When the budget runs out on rate-limit
                errors.
            Exception: The last error otherwise, unchanged.
        """
        state = self.new_state()
        attempt = 0
        while True:
            attempt += 1
            try:
                return await call()
            except Exception as e:
                decision = self.decide(e, state)
                if not decision.retry:
                    if decision.error_class is ErrorClass.RATE_LIMITED:
                        log.error(
                            "%s: rate limited after %d attempts", operation, attempt
                        )
                        raise TransientRateLimitedError(CAPACITY_REACHED_MESSAGE) from e
                    raise
                log.warning(
                    "%s: attempt %d failed (%s: %s); retrying in %.2fs",
                    operation,
                    attempt,
                    decision.error_class.value,
                    e,
                    decision.delay,
                )
                self._telemetry.count(
                    T_RETRY,
                    operation=operation,
                    attempt=attempt,
                    delay=decision.delay,
                    error_class=decision.error_class.value,
                )
                await self._sleep(decision.delay)

    def _jitter(self) -> float:
        if self.max_jitter == 0:
            return 0.0
        return self._rng.random() * self.max_jitter
