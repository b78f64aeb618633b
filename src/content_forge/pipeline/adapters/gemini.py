"""Google GenAI adapter.

Maps call descriptors onto ``google.genai`` request types and converts SDK
responses into the provider-neutral ``RawResponse`` / ``OperationHandle``.
SDK exceptions propagate unchanged so the backoff policy can classify them.
"""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING, Any

from google import genai
from google.genai import types

from content_forge.core.types import (
    ABSENT,
    MediaPart,
    OperationHandle,
    OtherCitation,
    RawResponse,
    WebCitation,
)
from content_forge.exceptions import MissingKeyError

if TYPE_CHECKING:
    from content_forge.core.types import (
        CallDescriptor,
        CitationCandidate,
        VideoJob,
    )

log = logging.getLogger(__name__)

# Non-web grounding chunk attributes, checked in order.
_OTHER_CHUNK_KINDS = ("retrieved_context", "maps")


class GoogleGenAIAdapter:
    """Adapter over ``genai.Client(...).aio``."""

    def __init__(self, api_key: str | None, *, client: Any | None = None) -> None:
        if client is None:
            if not api_key:
                raise MissingKeyError(
                    "An API key is required for real API calls. "
                    "Set GEMINI_API_KEY or pass api_key."
                )
            client = genai.Client(api_key=api_key)
        self._client = client

    # --- Requests ---

    async def generate(self, descriptor: CallDescriptor) -> RawResponse:
        response = await self._client.aio.models.generate_content(
            model=descriptor.model,
            contents=descriptor.prompt,
            config=build_generate_config(descriptor),
        )
        return to_raw_response(response)

    async def submit_video(self, job: VideoJob) -> OperationHandle:
        operation = await self._client.aio.models.generate_videos(
            model=job.model,
            prompt=job.prompt,
            config=types.GenerateVideosConfig(
                aspect_ratio=job.aspect_ratio,
                resolution=job.resolution,
                number_of_videos=job.number_of_videos,
            ),
        )
        log.info("Submitted video job %s", getattr(operation, "name", "?"))
        return to_operation_handle(operation)

    async def poll(self, handle: OperationHandle) -> OperationHandle:
        operation = await self._client.aio.operations.get(operation=handle.raw)
        return to_operation_handle(operation)


# --- Request translation ---


def build_generate_config(descriptor: CallDescriptor) -> types.GenerateContentConfig:
    """Translate a descriptor into ``GenerateContentConfig``."""
    config: dict[str, Any] = {}
    if descriptor.system_instruction:
        config["system_instruction"] = descriptor.system_instruction
    if descriptor.response_mime_type:
        config["response_mime_type"] = descriptor.response_mime_type
    if descriptor.shape is not None:
        config["response_schema"] = descriptor.shape.to_schema()
    if descriptor.tools.web_grounding:
        config["tools"] = [types.Tool(google_search=types.GoogleSearch())]

    media = descriptor.media
    if media is not None:
        if media.thinking_budget is not None:
            config["thinking_config"] = types.ThinkingConfig(
                thinking_budget=media.thinking_budget
            )
        if media.response_modalities:
            config["response_modalities"] = list(media.response_modalities)
        if media.aspect_ratio:
            config["image_config"] = types.ImageConfig(aspect_ratio=media.aspect_ratio)
        if media.voice_name:
            config["speech_config"] = types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(
                        voice_name=media.voice_name
                    )
                )
            )
    return types.GenerateContentConfig(**config)


# --- Response translation ---


def to_raw_response(response: Any) -> RawResponse:
    """Convert a ``GenerateContentResponse`` into a ``RawResponse``.

    Only the first candidate is read. Sections the SDK did not send become
    ``ABSENT``.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return RawResponse(text=getattr(response, "text", None))
    candidate = candidates[0]

    parts = getattr(getattr(candidate, "content", None), "parts", None) or []
    texts: list[str] = []
    media: list[MediaPart] = []
    for part in parts:
        if getattr(part, "thought", False):
            continue
        text = getattr(part, "text", None)
        if text:
            texts.append(text)
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            data = inline.data
            if isinstance(data, str):
                encoded = data
            else:
                encoded = base64.b64encode(data).decode("ascii")
            media.append(
                MediaPart(
                    mime_type=inline.mime_type or "application/octet-stream",
                    data_base64=encoded,
                )
            )

    metadata = getattr(candidate, "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None)
    citations = (
        tuple(_to_citation(c) for c in chunks) if chunks is not None else ABSENT
    )

    return RawResponse(
        text="".join(texts) if texts else None,
        citations=citations,
        media=tuple(media) if media else ABSENT,
    )


def _to_citation(chunk: Any) -> CitationCandidate:
    web = getattr(chunk, "web", None)
    if web is not None:
        return WebCitation(
            uri=getattr(web, "uri", None), title=getattr(web, "title", None)
        )
    for kind in _OTHER_CHUNK_KINDS:
        if getattr(chunk, kind, None) is not None:
            return OtherCitation(kind=kind)
    return OtherCitation(kind="unknown")


def to_operation_handle(operation: Any) -> OperationHandle:
    """Snapshot a video generation operation."""
    error = getattr(operation, "error", None)
    result_uri = None
    response = getattr(operation, "response", None) or getattr(
        operation, "result", None
    )
    videos = getattr(response, "generated_videos", None) or []
    if videos:
        video = getattr(videos[0], "video", None)
        result_uri = getattr(video, "uri", None)
    return OperationHandle(
        name=getattr(operation, "name", None) or "",
        done=bool(getattr(operation, "done", False)),
        result_uri=result_uri,
        error=str(error) if error else None,
        raw=operation,
    )
