"""Core data types that flow through a generation call.

This module defines the immutable structures that describe a request as it
moves from the contract builder, through the provider adapter, and into the
decoder. Each call owns its own instances; nothing here is shared between
concurrent operations.
"""

from __future__ import annotations

import dataclasses
from enum import StrEnum
import typing

if typing.TYPE_CHECKING:
    from content_forge.core.models import GroundingSource
    from content_forge.prompts.shapes import Shape

# --- Minimal guard helpers ---


def _is_tuple_of(value: object, typ: type | tuple[type, ...]) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, typ) for v in value)


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Operation kinds ---


class OperationKind(StrEnum):
    """Logical operations the client facade exposes."""

    NICHE_ANALYSIS = "niche_analysis"
    STRATEGY_PLAN = "strategy_plan"
    VIDEO_CONCEPTS = "video_concepts"
    SCRIPT = "script"
    STORYBOARD = "storyboard"
    VIRAL_HOOKS = "viral_hooks"
    TRENDING_NICHES = "trending_niches"
    IMAGE = "image"
    VOICEOVER = "voiceover"
    VIDEO = "video"


# --- Call descriptor ---


@dataclasses.dataclass(frozen=True, slots=True)
class ToolFlags:
    """Provider tools enabled for a call."""

    web_grounding: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class MediaConfig:
    """Media and reasoning settings attached to a call."""

    aspect_ratio: str | None = None
    voice_name: str | None = None
    thinking_budget: int | None = None
    resolution: str | None = None
    number_of_videos: int = 1
    response_modalities: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate MediaConfig invariants."""
        _require(
            condition=self.thinking_budget is None or self.thinking_budget >= 0,
            message="must be >= 0",
            field_name="thinking_budget",
        )
        _require(
            condition=isinstance(self.number_of_videos, int)
            and self.number_of_videos >= 1,
            message="must be an int >= 1",
            field_name="number_of_videos",
        )
        _require(
            condition=_is_tuple_of(self.response_modalities, str),
            message="must be a tuple[str, ...]",
            field_name="response_modalities",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class CallDescriptor:
    """Everything needed to issue one remote call for a logical operation.

    Built once by the contract builder and never mutated; the adapter reads it
    and translates it into the provider's request format.
    """

    kind: OperationKind
    model: str
    prompt: str
    system_instruction: str | None = None
    shape: Shape | None = None
    response_mime_type: str | None = None
    tools: ToolFlags = dataclasses.field(default_factory=ToolFlags)
    media: MediaConfig | None = None

    def __post_init__(self) -> None:
        """Validate CallDescriptor invariants."""
        _require(
            condition=isinstance(self.kind, OperationKind),
            message="must be an OperationKind",
            field_name="kind",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.model, str) and self.model.strip() != "",
            message="must be a non-empty str",
            field_name="model",
        )
        _require(
            condition=isinstance(self.prompt, str) and self.prompt.strip() != "",
            message="must be a non-empty str",
            field_name="prompt",
        )
        if self.shape is not None:
            _require(
                condition=self.response_mime_type == "application/json",
                message="a shape requires response_mime_type='application/json'",
                field_name="shape",
            )

    @property
    def expects_json(self) -> bool:
        return self.response_mime_type == "application/json"


# --- Response envelope ---


@dataclasses.dataclass(frozen=True, slots=True)
class Absent:
    """Marker for an envelope section the service did not send."""


ABSENT = Absent()


@dataclasses.dataclass(frozen=True, slots=True)
class WebCitation:
    """A citation that points at a web page."""

    uri: str | None
    title: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class OtherCitation:
    """A citation of a non-web kind (retrieved context, maps, ...)."""

    kind: str


type CitationCandidate = WebCitation | OtherCitation


@dataclasses.dataclass(frozen=True, slots=True)
class MediaPart:
    """An inline binary payload, base64 encoded."""

    mime_type: str
    data_base64: str

    def __post_init__(self) -> None:
        """Validate MediaPart invariants."""
        _require(
            condition=isinstance(self.mime_type, str) and self.mime_type != "",
            message="must be a non-empty str",
            field_name="mime_type",
        )
        _require(
            condition=isinstance(self.data_base64, str),
            message="must be a str",
            field_name="data_base64",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class RawResponse:
    """Provider-neutral view of a generation response.

    Optional sections are either a tuple or ``ABSENT``; consumers resolve them
    with ``match`` instead of probing attributes.
    """

    text: str | None = None
    citations: tuple[CitationCandidate, ...] | Absent = ABSENT
    media: tuple[MediaPart, ...] | Absent = ABSENT

    def __post_init__(self) -> None:
        """Validate RawResponse invariants."""
        _require(
            condition=isinstance(self.citations, Absent)
            or _is_tuple_of(self.citations, WebCitation | OtherCitation),
            message="must be ABSENT or a tuple of citations",
            field_name="citations",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.media, Absent)
            or _is_tuple_of(self.media, MediaPart),
            message="must be ABSENT or a tuple[MediaPart, ...]",
            field_name="media",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class DecodedResult[T]:
    """A decoded domain value plus the grounding sources that came with it."""

    value: T
    sources: tuple[GroundingSource, ...] = ()


# --- Retry state ---


@dataclasses.dataclass(slots=True)
class RetryState:
    """Per-call retry bookkeeping; only the backoff policy mutates it."""

    attempts_remaining: int
    current_base_delay: float
    last_delay: float = 0.0

    def __post_init__(self) -> None:
        """Validate RetryState invariants."""
        _require(
            condition=isinstance(self.attempts_remaining, int)
            and self.attempts_remaining >= 0,
            message="must be an int >= 0",
            field_name="attempts_remaining",
        )
        _require(
            condition=self.current_base_delay > 0,
            message="must be > 0",
            field_name="current_base_delay",
        )
        _require(
            condition=self.last_delay >= 0,
            message="must be >= 0",
            field_name="last_delay",
        )


# --- Long-running operations ---


@dataclasses.dataclass(frozen=True, slots=True)
class VideoJob:
    """Parameters for an asynchronous video compilation."""

    model: str
    prompt: str
    aspect_ratio: str | None = None
    resolution: str | None = None
    number_of_videos: int = 1

    @classmethod
    def from_descriptor(cls, descriptor: CallDescriptor) -> VideoJob:
        media = descriptor.media or MediaConfig()
        return cls(
            model=descriptor.model,
            prompt=descriptor.prompt,
            aspect_ratio=media.aspect_ratio,
            resolution=media.resolution,
            number_of_videos=media.number_of_videos,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class OperationHandle:
    """Snapshot of a long-running operation as last reported by the service."""

    name: str
    done: bool = False
    result_uri: str | None = None
    error: str | None = None
    # Provider object needed to poll again; opaque to everything but the adapter.
    raw: typing.Any = dataclasses.field(default=None, compare=False, repr=False)
