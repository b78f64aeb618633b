import pytest

from content_forge.core.models import VideoConcept
from content_forge.core.types import OperationKind
from content_forge.exceptions import ValidationError
from content_forge.prompts import RequestContractBuilder
from content_forge.prompts.builder import GROUNDED_KINDS, REQUIRED_PARAMS
from tests.fixtures.api_responses import VIDEO_CONCEPTS_JSON

pytestmark = pytest.mark.unit

SAMPLE_PARAMS = {
    "niche": "Fitness",
    "platform": "YouTube",
    "title": "5 Habits",
    "hook": "You are training wrong.",
    "structure": "Hook, list, recap",
    "script": "[SCENE: gym] Welcome back.",
    "visual_prompt": "Empty gym at dawn",
    "text": "Welcome back to the channel.",
    "prompt": "Slow pan across a gym",
}


@pytest.fixture
def builder(frozen_config) -> RequestContractBuilder:
    return RequestContractBuilder(frozen_config)


@pytest.mark.parametrize("kind", list(OperationKind))
def test_every_kind_builds_from_its_parameters(builder, kind):
    descriptor = builder.build(kind, **SAMPLE_PARAMS)
    assert descriptor.kind is kind
    assert descriptor.prompt.strip()
    assert descriptor.tools.web_grounding == (kind in GROUNDED_KINDS)


def test_niche_analysis_is_grounded_json_with_a_shape(builder, frozen_config):
    descriptor = builder.build(OperationKind.NICHE_ANALYSIS, niche="Fitness")
    assert "Fitness" in descriptor.prompt
    assert descriptor.expects_json
    assert descriptor.shape is not None
    assert descriptor.shape.required_fields == (
        "name",
        "trendScore",
        "competition",
        "monetization",
        "longevity",
        "platformFit",
    )
    assert descriptor.model == frozen_config.text_model
    assert descriptor.system_instruction


def test_trending_asks_for_json_without_a_fixed_shape(builder):
    descriptor = builder.build(OperationKind.TRENDING_NICHES)
    assert descriptor.expects_json
    assert descriptor.shape is None
    assert descriptor.system_instruction is None


def test_script_uses_reasoning_model_and_thinking_budget(builder, frozen_config):
    descriptor = builder.build(
        OperationKind.SCRIPT, title="T", hook="H", structure="S"
    )
    assert descriptor.model == frozen_config.reasoning_model
    assert descriptor.media.thinking_budget == frozen_config.thinking_budget
    assert not descriptor.expects_json
    assert "[SCENE:" in descriptor.prompt


def test_concept_record_expands_into_script_fields(builder):
    concept = VideoConcept.model_validate(VIDEO_CONCEPTS_JSON[0])
    descriptor = builder.build(OperationKind.SCRIPT, concept=concept)
    assert concept.title in descriptor.prompt
    assert concept.hook in descriptor.prompt
    assert concept.structure in descriptor.prompt


def test_concept_mapping_expands_and_explicit_params_win(builder):
    descriptor = builder.build(
        OperationKind.SCRIPT,
        concept={"title": "From dict", "hook": "h", "structure": "s"},
        title="Override",
    )
    assert "Override" in descriptor.prompt
    assert "From dict" not in descriptor.prompt


def test_media_kinds_carry_media_settings(builder, frozen_config):
    image = builder.build(OperationKind.IMAGE, visual_prompt="gym")
    voice = builder.build(OperationKind.VOICEOVER, text="hello")
    video = builder.build(OperationKind.VIDEO, prompt="pan")

    assert image.media.aspect_ratio == "16:9"
    assert image.media.response_modalities == ("IMAGE",)
    assert voice.media.voice_name == frozen_config.voice_name
    assert voice.media.response_modalities == ("AUDIO",)
    assert (video.media.resolution, video.media.number_of_videos) == ("720p", 1)
    assert video.model == frozen_config.video_model


@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_required_parameters_are_rejected(builder, value):
    with pytest.raises(ValidationError, match="niche"):
        builder.build(OperationKind.NICHE_ANALYSIS, niche=value)


def test_strategy_requires_a_platform(builder):
    with pytest.raises(ValidationError, match="platform"):
        builder.build(OperationKind.STRATEGY_PLAN, niche="Fitness")


def test_every_kind_declares_its_required_parameters():
    assert set(REQUIRED_PARAMS) == set(OperationKind)
