"""Request contract builder.

Turns an operation kind plus caller parameters into an immutable
``CallDescriptor``: prompt text, system instruction, expected response shape,
tool flags and media settings. Blank parameters are rejected here, before any
remote call is issued.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from content_forge.constants import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_VIDEO_RESOLUTION,
)
from content_forge.core.types import (
    CallDescriptor,
    MediaConfig,
    OperationKind,
    ToolFlags,
)
from content_forge.exceptions import ValidationError

from .shapes import shape_for
from .templates import INSTRUCTIONS, PROMPTS

if TYPE_CHECKING:
    from content_forge.config import FrozenConfig

log = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"

# Parameters each kind needs before a descriptor can be built.
REQUIRED_PARAMS: dict[OperationKind, tuple[str, ...]] = {
    OperationKind.NICHE_ANALYSIS: ("niche",),
    OperationKind.STRATEGY_PLAN: ("niche", "platform"),
    OperationKind.VIDEO_CONCEPTS: ("niche",),
    OperationKind.SCRIPT: ("title", "hook", "structure"),
    OperationKind.STORYBOARD: ("script",),
    OperationKind.VIRAL_HOOKS: ("title",),
    OperationKind.TRENDING_NICHES: (),
    OperationKind.IMAGE: ("visual_prompt",),
    OperationKind.VOICEOVER: ("text",),
    OperationKind.VIDEO: ("prompt",),
}

GROUNDED_KINDS = frozenset(
    {
        OperationKind.NICHE_ANALYSIS,
        OperationKind.VIDEO_CONCEPTS,
        OperationKind.TRENDING_NICHES,
    }
)

# Structured kinds without a fixed shape still ask for JSON.
JSON_KINDS = frozenset(
    {
        OperationKind.NICHE_ANALYSIS,
        OperationKind.STRATEGY_PLAN,
        OperationKind.VIDEO_CONCEPTS,
        OperationKind.STORYBOARD,
        OperationKind.VIRAL_HOOKS,
        OperationKind.TRENDING_NICHES,
    }
)


class RequestContractBuilder:
    """Builds call descriptors from the resolved configuration."""

    def __init__(self, config: FrozenConfig) -> None:
        self._config = config

    def build(self, kind: OperationKind, **params: Any) -> CallDescriptor:
        """Build the descriptor for ``kind``.

        Args:
            kind: The logical operation.
            **params: Prompt parameters. ``concept`` may be passed for the
                script and viral-hook kinds in place of its individual fields.

        Returns:
            An immutable CallDescriptor.

        Raises:
            ValidationError: If a required parameter is missing or blank.
        """
        params = self._expand_concept(params)
        values = self._require_params(kind, params)

        shape = shape_for(kind)
        descriptor = CallDescriptor(
            kind=kind,
            model=self._model_for(kind),
            prompt=PROMPTS[kind].format(**values),
            system_instruction=INSTRUCTIONS[kind],
            shape=shape,
            response_mime_type=JSON_MIME_TYPE if kind in JSON_KINDS else None,
            tools=ToolFlags(web_grounding=kind in GROUNDED_KINDS),
            media=self._media_for(kind),
        )
        log.debug(
            "Built %s descriptor (model=%s, shape=%s, grounding=%s)",
            kind.value,
            descriptor.model,
            shape is not None,
            descriptor.tools.web_grounding,
        )
        return descriptor

    # --- helpers ---

    def _expand_concept(self, params: dict[str, Any]) -> dict[str, Any]:
        concept = params.pop("concept", None)
        if concept is None:
            return params
        expanded = {
            "title": getattr(concept, "title", None),
            "hook": getattr(concept, "hook", None),
            "structure": getattr(concept, "structure", None),
        }
        if isinstance(concept, dict):
            expanded = {k: concept.get(k) for k in expanded}
        return {**expanded, **params}

    def _require_params(
        self, kind: OperationKind, params: dict[str, Any]
    ) -> dict[str, str]:
        values: dict[str, str] = {}
        for name in REQUIRED_PARAMS[kind]:
            value = params.get(name)
            text = str(value).strip() if value is not None else ""
            if not text:
                raise ValidationError(
                    f"{kind.value}: '{name}' must be a non-empty string"
                )
            values[name] = text
        return values

    def _model_for(self, kind: OperationKind) -> str:
        cfg = self._config
        match kind:
            case OperationKind.IMAGE:
                return cfg.image_model
            case OperationKind.VOICEOVER:
                return cfg.voice_model
            case OperationKind.VIDEO:
                return cfg.video_model
            case (
                OperationKind.SCRIPT
                | OperationKind.VIRAL_HOOKS
                | OperationKind.VIDEO_CONCEPTS
                | OperationKind.TRENDING_NICHES
            ):
                return cfg.reasoning_model
            case _:
                return cfg.text_model

    def _media_for(self, kind: OperationKind) -> MediaConfig | None:
        cfg = self._config
        match kind:
            case OperationKind.SCRIPT:
                return MediaConfig(thinking_budget=cfg.thinking_budget)
            case OperationKind.IMAGE:
                return MediaConfig(
                    aspect_ratio=DEFAULT_ASPECT_RATIO,
                    response_modalities=("IMAGE",),
                )
            case OperationKind.VOICEOVER:
                return MediaConfig(
                    voice_name=cfg.voice_name, response_modalities=("AUDIO",)
                )
            case OperationKind.VIDEO:
                return MediaConfig(
                    aspect_ratio=DEFAULT_ASPECT_RATIO,
                    resolution=DEFAULT_VIDEO_RESOLUTION,
                    number_of_videos=1,
                )
            case _:
                return None
