"""End-to-end behavior of ``ContentForgeClient`` over fake adapters."""

import base64
import json

import pytest

from content_forge import (
    APIError,
    ChannelBlueprint,
    ContentForgeClient,
    InvalidCredentialsError,
    MalformedPayloadError,
    MissingKeyError,
    OperationTimeoutError,
    Platform,
    ProductionFailureError,
    TransientRateLimitedError,
    ValidationError,
    VideoConcept,
    authenticated_download_uri,
    create_client,
)
from content_forge.client.backoff import BackoffPolicy
from content_forge.core.models import MediaReference
from content_forge.core.types import (
    ABSENT,
    MediaPart,
    OperationHandle,
    OperationKind,
    RawResponse,
    WebCitation,
)
from content_forge.media import pcm_to_wav
from content_forge.pipeline import MockAdapter
from content_forge.telemetry import MemoryReporter, TelemetryContext
from tests.fixtures.api_responses import (
    MESSY_NICHE_TEXT,
    NICHE_ANALYSIS_JSON,
    STORYBOARD_JSON,
    STRATEGY_PLAN_JSON,
    VIDEO_CONCEPTS_JSON,
    VIRAL_HOOKS_JSON,
)
from tests.helpers import RateLimited, RecordingSleep, ScriptedAdapter, ServerHiccup

pytestmark = pytest.mark.integration

SOURCES = (WebCitation(uri="https://trends.example/fitness", title="Fitness 2025"),)


def _json(payload, citations=ABSENT) -> RawResponse:
    return RawResponse(text=json.dumps(payload), citations=citations)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(frozen_config, sleep):
    def make(adapter, **policy_kwargs) -> ContentForgeClient:
        policy_kwargs.setdefault("max_jitter", 0.0)
        client = ContentForgeClient(
            frozen_config,
            adapter=adapter,
            policy=BackoffPolicy(sleep=sleep, **policy_kwargs),
        )
        client._poller._sleep = RecordingSleep()
        return client

    return make


@pytest.fixture
def concept() -> VideoConcept:
    return VideoConcept.model_validate(VIDEO_CONCEPTS_JSON[0])


# --- Research and planning ---


@pytest.mark.asyncio
async def test_fitness_analysis_is_clamped_and_grounded(make_client):
    adapter = ScriptedAdapter(RawResponse(text=MESSY_NICHE_TEXT, citations=SOURCES))

    analysis = await make_client(adapter).analyze_niche("Fitness")

    assert analysis.name == "Fitness"
    assert analysis.trend_score == 10.0
    assert [s.title for s in analysis.sources] == ["Fitness 2025"]
    (descriptor,) = adapter.calls
    assert descriptor.kind is OperationKind.NICHE_ANALYSIS
    assert descriptor.tools.web_grounding


@pytest.mark.asyncio
async def test_strategy_sends_the_platform_name(make_client):
    adapter = ScriptedAdapter(_json(STRATEGY_PLAN_JSON))

    plan = await make_client(adapter).build_strategy("Fitness", Platform.BOTH)

    assert len(plan.weeks) == 2
    assert "on Both" in adapter.calls[0].prompt


@pytest.mark.asyncio
async def test_concepts_share_the_response_sources(make_client):
    adapter = ScriptedAdapter(_json(VIDEO_CONCEPTS_JSON * 3, citations=SOURCES))

    concepts = await make_client(adapter).generate_video_concepts("Fitness")

    assert len(concepts) == 3
    assert all(c.sources[0].uri == "https://trends.example/fitness" for c in concepts)


@pytest.mark.asyncio
async def test_trending_returns_raw_json_with_sources(make_client):
    adapter = ScriptedAdapter(_json(["Cooking", "Finance"], citations=SOURCES))

    result = await make_client(adapter).trending_niches()

    assert result.value == ["Cooking", "Finance"]
    assert result.sources[0].title == "Fitness 2025"


@pytest.mark.asyncio
async def test_initialize_channel_gathers_three_operations(frozen_config):
    client = ContentForgeClient(frozen_config, adapter=MockAdapter())

    blueprint = await client.initialize_channel("Fitness", "YouTube")

    assert isinstance(blueprint, ChannelBlueprint)
    assert blueprint.analysis.sources
    assert blueprint.concepts
    kinds = {d.kind for d in client._adapter.calls}
    assert kinds == {
        OperationKind.NICHE_ANALYSIS,
        OperationKind.STRATEGY_PLAN,
        OperationKind.VIDEO_CONCEPTS,
    }


# --- Writing ---


@pytest.mark.asyncio
async def test_script_keeps_scene_markers(make_client, concept):
    adapter = ScriptedAdapter(RawResponse(text="  [SCENE: gym]\nWelcome back.\n"))

    script = await make_client(adapter).generate_script(concept)

    assert script == "[SCENE: gym]\nWelcome back."
    assert concept.title in adapter.calls[0].prompt


@pytest.mark.asyncio
async def test_empty_script_is_a_production_failure(make_client, concept):
    adapter = ScriptedAdapter(RawResponse(text="   "))
    with pytest.raises(ProductionFailureError):
        await make_client(adapter).generate_script(concept)


@pytest.mark.asyncio
async def test_storyboard_scene_ids_are_strings(make_client):
    adapter = ScriptedAdapter(_json(STORYBOARD_JSON))

    scenes = await make_client(adapter).split_script_into_storyboard("[SCENE: gym]")

    assert [s.id for s in scenes] == ["1", "2"]
    assert scenes[1].duration == 3.5


@pytest.mark.asyncio
async def test_viral_hooks_accept_a_concept_or_a_title(make_client, concept):
    adapter = ScriptedAdapter(_json(VIRAL_HOOKS_JSON), _json(VIRAL_HOOKS_JSON))
    client = make_client(adapter)

    from_concept = await client.generate_viral_hooks(concept)
    from_title = await client.generate_viral_hooks("Gym myths")

    assert from_concept == from_title
    assert concept.title in adapter.calls[0].prompt
    assert "Gym myths" in adapter.calls[1].prompt


@pytest.mark.asyncio
async def test_blank_input_fails_before_any_call(make_client):
    adapter = ScriptedAdapter()
    with pytest.raises(ValidationError):
        await make_client(adapter).analyze_niche("")
    assert adapter.calls == []


@pytest.mark.asyncio
async def test_malformed_payload_is_not_retried(make_client, sleep):
    adapter = ScriptedAdapter(RawResponse(text="I would rather not."))

    with pytest.raises(MalformedPayloadError) as exc_info:
        await make_client(adapter, retry_all_errors=True).analyze_niche("Fitness")

    assert exc_info.value.fragment == "I would rather not."
    assert len(adapter.calls) == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_missing_field_is_malformed(make_client):
    payload = {k: v for k, v in NICHE_ANALYSIS_JSON.items() if k != "platformFit"}
    with pytest.raises(MalformedPayloadError):
        await make_client(ScriptedAdapter(_json(payload))).analyze_niche("Fitness")


# --- Media ---


@pytest.mark.asyncio
async def test_scene_image_is_an_inline_reference(make_client):
    png = base64.b64encode(b"\x89PNG").decode()
    adapter = ScriptedAdapter(RawResponse(media=(MediaPart("image/png", png),)))

    image = await make_client(adapter).generate_scene_image("Empty gym at dawn")

    assert image.mime_type == "image/png"
    assert image.payload_bytes() == b"\x89PNG"
    assert adapter.calls[0].media.aspect_ratio == "16:9"


@pytest.mark.asyncio
@pytest.mark.parametrize("media", [ABSENT, ()])
async def test_missing_media_is_a_production_failure(make_client, media):
    adapter = ScriptedAdapter(RawResponse(text="no image", media=media))
    with pytest.raises(ProductionFailureError, match="Image generation"):
        await make_client(adapter).generate_scene_image("gym")


@pytest.mark.asyncio
async def test_voiceover_pcm_converts_to_wav(frozen_config):
    client = ContentForgeClient(frozen_config, adapter=MockAdapter())

    voice = await client.generate_voiceover("Welcome back to the channel.")

    assert voice.mime_type.startswith("audio/L16")
    assert pcm_to_wav(voice)[:4] == b"RIFF"


@pytest.mark.asyncio
async def test_compile_video_returns_a_remote_reference(make_client):
    adapter = ScriptedAdapter(
        submit=OperationHandle(name="operations/v1"), polls=[False, True]
    )
    client = make_client(adapter)

    video = await client.compile_video("Slow pan across a gym")

    assert video == MediaReference(
        uri="https://files.example/video.mp4?alt=media", mime_type="video/mp4"
    )
    (job,) = adapter.jobs
    assert (job.aspect_ratio, job.resolution, job.number_of_videos) == ("16:9", "720p", 1)


@pytest.mark.asyncio
async def test_compile_video_times_out(make_client):
    adapter = ScriptedAdapter(submit=OperationHandle(name="operations/slow"), polls=[False] * 100)
    client = make_client(adapter)
    ticks = iter(range(1000))
    client._poller._clock = lambda: float(next(ticks))

    with pytest.raises(OperationTimeoutError) as exc_info:
        await client.compile_video("pan")
    assert exc_info.value.operation_name == "operations/slow"


@pytest.mark.asyncio
async def test_inactive_key_during_video_maps_to_invalid_credentials(make_client):
    adapter = ScriptedAdapter()
    adapter.submit_outcomes = [Exception("404 Requested entity was not found.")]

    with pytest.raises(InvalidCredentialsError):
        await make_client(adapter).compile_video("pan")


# --- Resilience ---


@pytest.mark.asyncio
async def test_rate_limits_are_retried_then_succeed(make_client, sleep):
    adapter = ScriptedAdapter(RateLimited(), RateLimited(), _json(VIRAL_HOOKS_JSON))

    hooks = await make_client(adapter).generate_viral_hooks("Gym myths")

    assert hooks[0].hook == "Stop doing crunches."
    assert len(adapter.calls) == 3
    assert sleep.delays == [9.0, 18.0]


@pytest.mark.asyncio
async def test_persistent_rate_limits_surface_capacity_error(make_client):
    adapter = ScriptedAdapter(RateLimited(), RateLimited(), RateLimited())

    with pytest.raises(TransientRateLimitedError, match="60 seconds"):
        await make_client(adapter).analyze_niche("Fitness")


@pytest.mark.asyncio
async def test_rejected_key_maps_to_invalid_credentials(make_client):
    adapter = ScriptedAdapter(Exception("400 API key not valid. Please pass a valid API key."))
    with pytest.raises(InvalidCredentialsError):
        await make_client(adapter).analyze_niche("Fitness")


@pytest.mark.asyncio
async def test_other_service_errors_become_api_errors(make_client):
    adapter = ScriptedAdapter(ServerHiccup())

    with pytest.raises(APIError) as exc_info:
        await make_client(adapter).build_strategy("Fitness", "YouTube")

    assert isinstance(exc_info.value.__cause__, ServerHiccup)
    assert len(adapter.calls) == 1


@pytest.mark.asyncio
async def test_retry_all_errors_retries_service_errors(make_client, sleep):
    adapter = ScriptedAdapter(ServerHiccup(), _json(STRATEGY_PLAN_JSON))

    plan = await make_client(adapter, retry_all_errors=True).build_strategy(
        "Fitness", "YouTube"
    )

    assert plan.weeks
    assert sleep.delays == [3.0]


@pytest.mark.asyncio
async def test_calls_are_timed_when_telemetry_is_on(frozen_config, monkeypatch):
    monkeypatch.setenv("CONTENT_FORGE_TELEMETRY", "1")
    reporter = MemoryReporter()
    client = ContentForgeClient(
        frozen_config, adapter=MockAdapter(), telemetry=TelemetryContext(reporter)
    )

    await client.analyze_niche("Fitness")

    ((_, metadata),) = reporter.timings["forge.call"]
    assert metadata["kind"] == "niche_analysis"


# --- Construction and download links ---


def test_default_client_uses_the_mock_adapter():
    assert isinstance(create_client()._adapter, MockAdapter)


def test_create_client_rejects_config_and_overrides(frozen_config):
    with pytest.raises(ValueError):
        create_client(frozen_config, max_attempts=2)


def test_real_api_without_key_fails_resolution():
    with pytest.raises(ValueError, match="api_key"):
        create_client(use_real_api=True)


def test_download_uri_gets_the_key_appended():
    ref = MediaReference(
        uri="https://files.example/v.mp4?alt=media&key=old", mime_type="video/mp4"
    )
    assert (
        authenticated_download_uri(ref, "secret")
        == "https://files.example/v.mp4?alt=media&key=secret"
    )


def test_download_uri_needs_a_key_and_a_remote_reference():
    with pytest.raises(MissingKeyError):
        authenticated_download_uri("https://files.example/v.mp4", None)
    with pytest.raises(ValueError):
        authenticated_download_uri("data:video/mp4;base64,AAAA", "secret")
