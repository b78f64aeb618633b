"""
API tests for the research and media operations.
"""

import pytest

from content_forge import authenticated_download_uri
from content_forge.media import pcm_to_wav


@pytest.mark.api
class TestAPIContent:
    """Exercise the client against the real service with small requests."""

    @pytest.mark.asyncio
    async def test_niche_analysis_is_grounded(self, real_api_client, api_rate_limiter):
        analysis = await real_api_client.analyze_niche("home espresso")

        assert analysis.name
        assert 0 <= analysis.trend_score <= 10
        assert all(s.uri.startswith("http") for s in analysis.sources)

    @pytest.mark.asyncio
    async def test_viral_hooks_for_a_title(self, real_api_client, api_rate_limiter):
        hooks = await real_api_client.generate_viral_hooks("Why your espresso is sour")

        assert hooks
        assert all(h.hook and h.reason for h in hooks)

    @pytest.mark.asyncio
    async def test_short_voiceover_is_pcm(self, real_api_client, api_rate_limiter):
        voice = await real_api_client.generate_voiceover("Welcome back.")

        assert voice.is_inline
        assert pcm_to_wav(voice)[:4] == b"RIFF"

    @pytest.mark.asyncio
    async def test_download_link_carries_the_key(self, real_api_client):
        link = authenticated_download_uri(
            "https://generativelanguage.googleapis.com/v1beta/files/x:download?alt=media",
            real_api_client.config.api_key,
        )
        assert "key=" in link
