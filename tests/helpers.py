"""Fakes shared across the test suite."""

import dataclasses
from typing import Any


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep stand-in that records requested delays.

    When given a clock, each sleep advances it by the requested delay.
    """

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.delays: list[float] = []
        self._clock = clock

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self._clock is not None:
            self._clock.advance(delay)


class RateLimited(Exception):
    """Looks like a throttled SDK error."""

    def __init__(self, message: str = "429 RESOURCE_EXHAUSTED") -> None:
        super().__init__(message)
        self.code = 429


class ServerHiccup(Exception):
    """Looks like a transient 5xx SDK error."""

    def __init__(self, message: str = "503 UNAVAILABLE") -> None:
        super().__init__(message)
        self.code = 503


def _replay(outcomes: list[Any]) -> Any:
    outcome = outcomes.pop(0)
    if isinstance(outcome, BaseException):
        raise outcome
    return outcome


class ScriptedAdapter:
    """Adapter that replays scripted outcomes in order.

    Each outcome is a value to return or an exception to raise. ``polls``
    entries may be plain booleans, meaning "done" for the submitted handle.
    """

    def __init__(
        self,
        *outcomes: Any,
        submit: Any = None,
        polls: list[Any] | None = None,
    ) -> None:
        self.outcomes = list(outcomes)
        self.submit_outcomes = [submit] if submit is not None else []
        self.poll_outcomes = list(polls or [])
        self.calls: list[Any] = []
        self.jobs: list[Any] = []
        self.poll_count = 0

    async def generate(self, descriptor):
        self.calls.append(descriptor)
        return _replay(self.outcomes)

    async def submit_video(self, job):
        self.jobs.append(job)
        return _replay(self.submit_outcomes)

    async def poll(self, handle):
        self.poll_count += 1
        outcome = _replay(self.poll_outcomes)
        if isinstance(outcome, bool):
            uri = "https://files.example/video.mp4?alt=media" if outcome else None
            return dataclasses.replace(handle, done=outcome, result_uri=uri)
        return outcome
