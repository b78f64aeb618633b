"""Prompt text and system instructions for each operation.

The wording is an editorial choice and not part of the request contract; only
the placeholders matter to the builder.
"""

from content_forge.core.types import OperationKind

SYSTEM_INSTRUCTION = (
    "You are ContentForge AI, a digital marketing strategist and viral content "
    "engineer.\n"
    "Your specialty is the 'Faceless Empire' framework: high-CPM, high-retention "
    "channels that never show a face.\n"
    "Output MUST be strict JSON matching the provided schema. No markdown "
    "wrapping, no chatter.\n"
    "Focus on psychological triggers, engagement hooks, and SEO optimization."
)

STORYBOARD_INSTRUCTION = "You are a professional cinematographer."

PROMPTS: dict[OperationKind, str] = {
    OperationKind.NICHE_ANALYSIS: (
        "Execute a deep market intelligence report for: {niche}"
    ),
    OperationKind.STRATEGY_PLAN: (
        "Generate a 90-day growth roadmap for {niche} on {platform}"
    ),
    OperationKind.VIDEO_CONCEPTS: (
        "Engineer 5 viral faceless video concepts for niche: {niche}"
    ),
    OperationKind.SCRIPT: (
        'Compose a high-retention script for concept: "{title}".\n'
        "Hook: {hook}. Structure: {structure}.\n"
        "Format: use [SCENE: description] markers for visual cues."
    ),
    OperationKind.STORYBOARD: "Convert this script into storyboard scenes:\n\n{script}",
    OperationKind.VIRAL_HOOKS: "Engineer 5 viral hooks for: {title}",
    OperationKind.TRENDING_NICHES: (
        "Identify the top 5 highest-growth faceless YouTube/Facebook niches "
        "based on current trends."
    ),
    OperationKind.IMAGE: (
        "Cinematic 4k high-definition faceless stock footage style: {visual_prompt}. "
        "Moody, professional, shallow depth of field."
    ),
    OperationKind.VOICEOVER: "Tone: Enthusiastic & Professional. Content: {text}",
    OperationKind.VIDEO: "Cinematic faceless video production: {prompt}",
}

INSTRUCTIONS: dict[OperationKind, str | None] = {
    OperationKind.NICHE_ANALYSIS: SYSTEM_INSTRUCTION,
    OperationKind.STRATEGY_PLAN: SYSTEM_INSTRUCTION,
    OperationKind.VIDEO_CONCEPTS: SYSTEM_INSTRUCTION,
    OperationKind.SCRIPT: SYSTEM_INSTRUCTION,
    OperationKind.STORYBOARD: STORYBOARD_INSTRUCTION,
    OperationKind.VIRAL_HOOKS: SYSTEM_INSTRUCTION,
    OperationKind.TRENDING_NICHES: None,
    OperationKind.IMAGE: None,
    OperationKind.VOICEOVER: None,
    OperationKind.VIDEO: None,
}
