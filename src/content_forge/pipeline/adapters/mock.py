"""Deterministic adapter used for tests and examples (no network)."""

from __future__ import annotations

import base64
import dataclasses
import json
import logging
from typing import TYPE_CHECKING

from content_forge.constants import TTS_MIME_TYPE
from content_forge.core.types import (
    ABSENT,
    MediaPart,
    OperationHandle,
    OperationKind,
    RawResponse,
    WebCitation,
)

if TYPE_CHECKING:
    from content_forge.core.types import CallDescriptor, VideoJob

log = logging.getLogger(__name__)

# 1x1 transparent PNG.
_MOCK_PNG = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42"
    "mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)
# 0.1 s of silence at 24 kHz, 16-bit mono.
_MOCK_PCM = base64.b64encode(b"\x00\x00" * 2400).decode("ascii")

_MOCK_TRENDING = [
    {"name": "AI Tools Explained", "trendScore": 9},
    {"name": "Personal Finance Stories", "trendScore": 8},
]


class MockAdapter:
    """Returns shape-conforming example payloads.

    Video jobs finish after ``polls_until_done`` polls.
    """

    def __init__(self, *, polls_until_done: int = 1) -> None:
        self.polls_until_done = polls_until_done
        self.calls: list[CallDescriptor] = []
        self._polls: dict[str, int] = {}

    async def generate(self, descriptor: CallDescriptor) -> RawResponse:
        self.calls.append(descriptor)
        citations = (
            (WebCitation(uri="https://example.com/mock-source", title="Mock Source"),)
            if descriptor.tools.web_grounding
            else ABSENT
        )
        match descriptor.kind:
            case OperationKind.IMAGE:
                return RawResponse(media=(MediaPart("image/png", _MOCK_PNG),))
            case OperationKind.VOICEOVER:
                return RawResponse(media=(MediaPart(TTS_MIME_TYPE, _MOCK_PCM),))
            case OperationKind.SCRIPT:
                return RawResponse(
                    text=f"[SCENE: opening shot]\nmock script for: {descriptor.prompt}"
                )
            case OperationKind.TRENDING_NICHES:
                return RawResponse(text=json.dumps(_MOCK_TRENDING), citations=citations)
            case _ if descriptor.shape is not None:
                return RawResponse(
                    text=json.dumps(descriptor.shape.example()), citations=citations
                )
            case _:
                return RawResponse(
                    text=f"echo: {descriptor.prompt}", citations=citations
                )

    async def submit_video(self, job: VideoJob) -> OperationHandle:
        name = f"operations/mock-{len(self._polls)}"
        self._polls[name] = 0
        log.debug("Mock video job %s for model %s", name, job.model)
        return OperationHandle(name=name)

    async def poll(self, handle: OperationHandle) -> OperationHandle:
        count = self._polls.get(handle.name, 0) + 1
        self._polls[handle.name] = count
        if count < self.polls_until_done:
            return dataclasses.replace(handle, done=False)
        file_id = handle.name.rsplit("/", 1)[-1]
        return dataclasses.replace(
            handle,
            done=True,
            result_uri=f"https://mock.invalid/files/{file_id}:download?alt=media",
        )
