"""
Configuration for real API integration tests.
"""

import os

import pytest

from content_forge import create_client


@pytest.fixture
def real_api_client():
    """Client wired to the real Gemini service, one per test event loop."""
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        pytest.skip("GEMINI_API_KEY required for API tests")

    return create_client(use_real_api=True, api_key=api_key)


@pytest.fixture
def api_rate_limiter():
    """Ensure API tests don't exceed rate limits."""
    import time

    # Add delay between tests to stay well under limit
    time.sleep(5)
    yield
    time.sleep(1)
