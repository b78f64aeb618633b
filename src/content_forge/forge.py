"""The user-facing client.

``ContentForgeClient`` exposes one coroutine per content operation. Each
operation builds a call descriptor, sends it through the request gate and the
backoff policy, then decodes and validates the reply into a domain record.
Operations share nothing but the gate, so they can run concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from content_forge.client.backoff import BackoffPolicy
from content_forge.client.error_handler import GenerationErrorHandler
from content_forge.client.rate_limiter import RequestGate
from content_forge.config import FrozenConfig, resolve_config
from content_forge.constants import VIDEO_MIME_TYPE
from content_forge.core.models import (
    ChannelBlueprint,
    MediaReference,
    NicheAnalysis,
    Platform,
    StoryboardScene,
    StrategyPlan,
    VideoConcept,
    ViralHook,
)
from content_forge.core.types import (
    Absent,
    DecodedResult,
    OperationKind,
    RawResponse,
    VideoJob,
)
from content_forge.exceptions import MissingKeyError, ProductionFailureError
from content_forge.pipeline.adapters.mock import MockAdapter
from content_forge.pipeline.poller import OperationPoller
from content_forge.prompts.builder import RequestContractBuilder
from content_forge.response.processor import ResponseProcessor
from content_forge.telemetry import TelemetryContext

if TYPE_CHECKING:
    from content_forge.core.types import CallDescriptor
    from content_forge.pipeline.adapters.base import GenerationAdapter
    from content_forge.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

# --- Telemetry scopes ---
T_CALL = "forge.call"
T_VIDEO = "forge.video"


def _default_adapter(config: FrozenConfig) -> GenerationAdapter:
    if not config.use_real_api:
        return MockAdapter()
    from content_forge.pipeline.adapters.gemini import GoogleGenAIAdapter

    return GoogleGenAIAdapter(config.api_key)


class ContentForgeClient:
    """Async client for niche research, planning and media production.

    Args:
        config: Frozen configuration. Resolved from the environment and config
            files when omitted.
        adapter: Provider adapter. Defaults to the mock adapter unless
            ``use_real_api`` is set.
        policy: Backoff policy shared by all operations of this client.
        gate: Request gate shared by all operations of this client.
        telemetry: Telemetry context; a no-op unless enabled.
    """

    def __init__(
        self,
        config: FrozenConfig | None = None,
        *,
        adapter: GenerationAdapter | None = None,
        policy: BackoffPolicy | None = None,
        gate: RequestGate | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self.config = config if config is not None else resolve_config().to_frozen()
        self._telemetry = telemetry or TelemetryContext()
        self._adapter = adapter or _default_adapter(self.config)
        self._policy = policy or BackoffPolicy.from_config(
            self.config, telemetry=self._telemetry
        )
        self._gate = gate or RequestGate.from_config(self.config)
        self._builder = RequestContractBuilder(self.config)
        self._processor = ResponseProcessor()
        self._errors = GenerationErrorHandler()
        self._poller = OperationPoller(
            self._adapter,
            interval=self.config.poll_interval,
            timeout=self.config.poll_timeout,
            policy=self._policy,
            gate=self._gate,
        )
        log.debug(
            "ContentForgeClient ready (adapter=%s, real_api=%s)",
            type(self._adapter).__name__,
            self.config.use_real_api,
        )

    # --- Research and planning ---

    async def analyze_niche(self, niche: str) -> NicheAnalysis:
        """Market analysis for ``niche``, with the web sources it cites."""
        descriptor = self._builder.build(OperationKind.NICHE_ANALYSIS, niche=niche)
        raw = await self._call(descriptor)
        return self._processor.to_record(raw, NicheAnalysis, grounded=True).value

    async def build_strategy(
        self, niche: str, platform: Platform | str
    ) -> StrategyPlan:
        """Phased growth roadmap for ``niche`` on ``platform``."""
        descriptor = self._builder.build(
            OperationKind.STRATEGY_PLAN, niche=niche, platform=_platform_name(platform)
        )
        raw = await self._call(descriptor)
        return self._processor.to_record(raw, StrategyPlan).value

    async def generate_video_concepts(self, niche: str) -> tuple[VideoConcept, ...]:
        """Video concepts for ``niche``; each carries the response's sources."""
        descriptor = self._builder.build(OperationKind.VIDEO_CONCEPTS, niche=niche)
        raw = await self._call(descriptor)
        return self._processor.to_record(
            raw, tuple[VideoConcept, ...], grounded=True
        ).value

    async def trending_niches(self) -> DecodedResult[Any]:
        """Currently trending niches as free-form JSON, plus cited sources."""
        raw = await self._call(self._builder.build(OperationKind.TRENDING_NICHES))
        return self._processor.decode(raw, grounded=True)

    async def initialize_channel(
        self, niche: str, platform: Platform | str
    ) -> ChannelBlueprint:
        """Analysis, strategy and concepts for a new channel, fetched concurrently."""
        analysis, strategy, concepts = await asyncio.gather(
            self.analyze_niche(niche),
            self.build_strategy(niche, platform),
            self.generate_video_concepts(niche),
        )
        return ChannelBlueprint(analysis=analysis, strategy=strategy, concepts=concepts)

    # --- Writing ---

    async def generate_script(self, concept: VideoConcept) -> str:
        """Full voiceover script for ``concept`` with ``[SCENE: ...]`` cues.

        Raises:
            ProductionFailureError: If the model returns no text.
        """
        descriptor = self._builder.build(OperationKind.SCRIPT, concept=concept)
        raw = await self._call(descriptor)
        text = (raw.text or "").strip()
        if not text:
            raise ProductionFailureError("Script generation returned no text")
        return text

    async def split_script_into_storyboard(
        self, script: str
    ) -> tuple[StoryboardScene, ...]:
        descriptor = self._builder.build(OperationKind.STORYBOARD, script=script)
        raw = await self._call(descriptor)
        return self._processor.to_record(raw, tuple[StoryboardScene, ...]).value

    async def generate_viral_hooks(
        self, concept: VideoConcept | str
    ) -> tuple[ViralHook, ...]:
        """Alternative hooks for a concept (or a bare title)."""
        if isinstance(concept, str):
            params = {"title": concept}
        else:
            params = {"concept": concept}
        raw = await self._call(self._builder.build(OperationKind.VIRAL_HOOKS, **params))
        return self._processor.to_record(raw, tuple[ViralHook, ...]).value

    # --- Media ---

    async def generate_scene_image(self, visual_prompt: str) -> MediaReference:
        """16:9 still for a storyboard scene, as an inline data URI."""
        descriptor = self._builder.build(
            OperationKind.IMAGE, visual_prompt=visual_prompt
        )
        return _first_media(await self._call(descriptor), "Image generation")

    async def generate_voiceover(self, text: str) -> MediaReference:
        """Narration for ``text`` as inline 24 kHz 16-bit mono PCM."""
        descriptor = self._builder.build(OperationKind.VOICEOVER, text=text)
        return _first_media(await self._call(descriptor), "Voiceover generation")

    async def compile_video(self, prompt: str) -> MediaReference:
        """Render a short video and wait for it to finish.

        The returned URI needs the API key to download; see
        ``authenticated_download_uri``.

        Raises:
            OperationTimeoutError: If the job outlives ``poll_timeout``.
            ProductionFailureError: If the job fails or returns no link.
        """
        descriptor = self._builder.build(OperationKind.VIDEO, prompt=prompt)
        job = VideoJob.from_descriptor(descriptor)
        with self._telemetry(T_VIDEO, model=job.model):
            try:
                uri = await self._poller.submit(job)
            except Exception as e:
                self._translate(e, operation=OperationKind.VIDEO.value)
                raise
        return MediaReference(uri=uri, mime_type=VIDEO_MIME_TYPE)

    # --- Internals ---

    async def _call(self, descriptor: CallDescriptor) -> RawResponse:
        async def attempt() -> RawResponse:
            async with self._gate.request_context():
                return await self._adapter.generate(descriptor)

        operation = descriptor.kind.value
        with self._telemetry(T_CALL, kind=operation, model=descriptor.model):
            try:
                return await self._policy.execute(attempt, operation=operation)
            except Exception as e:
                self._translate(
                    e, operation=operation, structured=descriptor.expects_json
                )
                raise

    def _translate(
        self, error: Exception, *, operation: str, structured: bool = False
    ) -> None:
        if self._errors.should_translate(error):
            self._errors.handle_generation_error(
                error, operation=operation, structured=structured
            )


def _platform_name(platform: Platform | str) -> str:
    return platform.value if isinstance(platform, Platform) else platform


def _first_media(raw: RawResponse, what: str) -> MediaReference:
    match raw.media:
        case Absent() | ():
            raise ProductionFailureError(f"{what} returned no media payload")
        case (part, *_):
            return MediaReference.inline(part.mime_type, part.data_base64)


def authenticated_download_uri(
    reference: MediaReference | str, api_key: str | None
) -> str:
    """Append the API key query parameter a remote media link needs.

    Raises:
        MissingKeyError: If ``api_key`` is empty.
        ValueError: If ``reference`` is an inline data URI.
    """
    if not api_key:
        raise MissingKeyError("An API key is required to download generated media")
    uri = reference.uri if isinstance(reference, MediaReference) else reference
    if uri.startswith("data:"):
        raise ValueError("Inline media has no download link")
    parts = urlsplit(uri)
    query = [
        (k, v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if k != "key"
    ]
    query.append(("key", api_key))
    return urlunsplit(parts._replace(query=urlencode(query)))


def create_client(
    config: FrozenConfig | None = None, **overrides: Any
) -> ContentForgeClient:
    """Create a client, resolving configuration when none is given.

    Keyword overrides are applied with programmatic precedence, e.g.
    ``create_client(use_real_api=True, api_key=key)``.
    """
    if config is None:
        config = resolve_config(overrides or None).to_frozen()
    elif overrides:
        raise ValueError("Pass either a config or overrides, not both")
    return ContentForgeClient(config)
