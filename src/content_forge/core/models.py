"""Domain records returned to callers.

The service speaks camelCase JSON; these pydantic models accept those keys
(and the snake_case field names) and freeze the result so a record handed to
a caller cannot change underneath it.
"""

from __future__ import annotations

import base64
import binascii
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from content_forge.constants import (
    DEFAULT_SOURCE_TITLE,
    TREND_SCORE_MAX,
    TREND_SCORE_MIN,
)


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    def to_payload(self) -> dict[str, Any]:
        """Dump in the service's camelCase form."""
        return self.model_dump(mode="json", by_alias=True)


class Platform(StrEnum):
    YOUTUBE = "YouTube"
    FACEBOOK = "Facebook"
    BOTH = "Both"


class Competition(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class GroundingSource(_Record):
    """A web page cited by a grounded response."""

    title: str = DEFAULT_SOURCE_TITLE
    uri: str = Field(min_length=1)


class NicheAnalysis(_Record):
    """Market read-out for a content niche."""

    name: str
    trend_score: float
    competition: Competition
    monetization: str
    longevity: str
    platform_fit: str
    sources: tuple[GroundingSource, ...] = ()

    @field_validator("trend_score", mode="after")
    @classmethod
    def clamp_trend_score(cls, v: float) -> float:
        """Keep the score inside the 0-10 scale the service is asked for."""
        return min(max(v, TREND_SCORE_MIN), TREND_SCORE_MAX)


class WeekPlan(_Record):
    range: str
    phase: str
    focus: tuple[str, ...]


class StrategyPlan(_Record):
    """A phased growth roadmap."""

    weeks: tuple[WeekPlan, ...]


class SeoMetadata(_Record):
    description: str
    tags: tuple[str, ...]


class VideoConcept(_Record):
    """One video idea with its hook, structure and SEO block."""

    title: str
    hook: str
    structure: str
    visual_direction: str
    seo: SeoMetadata
    sources: tuple[GroundingSource, ...] = ()


class StoryboardScene(_Record):
    id: str
    text: str
    visual_prompt: str
    duration: float = Field(ge=0)
    image_url: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        # Scene ids regularly come back as bare numbers.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ViralHook(_Record):
    hook: str
    reason: str


class MediaReference(_Record):
    """Where a generated media asset lives.

    Inline payloads are carried as ``data:`` URIs; remote assets keep the
    provider's URI.
    """

    uri: str = Field(min_length=1)
    mime_type: str

    @classmethod
    def inline(cls, mime_type: str, data_base64: str) -> MediaReference:
        return cls(uri=f"data:{mime_type};base64,{data_base64}", mime_type=mime_type)

    @property
    def is_inline(self) -> bool:
        return self.uri.startswith("data:")

    def payload_bytes(self) -> bytes:
        """Decode the bytes of an inline reference.

        Raises:
            ValueError: If the reference is remote or its payload is not base64.
        """
        if not self.is_inline:
            raise ValueError("Only inline (data:) references carry a payload")
        _, _, encoded = self.uri.partition(";base64,")
        try:
            return base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Inline payload is not valid base64: {e}") from e


class ChannelBlueprint(_Record):
    """Everything produced when a channel is initialized for a niche."""

    analysis: NicheAnalysis
    strategy: StrategyPlan
    concepts: tuple[VideoConcept, ...]
