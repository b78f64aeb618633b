"""
Global test configuration: environment isolation, markers and shared fakes.
"""

import os
import random

import pytest

from content_forge.config import resolve_config
from tests.helpers import FakeClock, RecordingSleep

# --- Environment Isolation (Autouse) ---


@pytest.fixture(autouse=True)
def isolate_gemini_env(request, monkeypatch):
    """Ensure a clean GEMINI_* environment for each test.

    Tests marked ``api`` keep the real environment so they can reach the
    service; ``@pytest.mark.allow_env_pollution`` does the same on demand.
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return
    for key in list(os.environ):
        if key.startswith("GEMINI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("CONTENT_FORGE_TELEMETRY", raising=False)


@pytest.fixture(autouse=True)
def neutral_home_config(request, monkeypatch, tmp_path):
    """Point the home config file at an isolated temp path."""
    if request.node.get_closest_marker("allow_real_home_config"):
        return
    fake_home_dir = tmp_path / "home_config_isolated"
    fake_home_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv(
        "CONTENT_FORGE_CONFIG_HOME", str(fake_home_dir / "content_forge.toml")
    )


@pytest.fixture(autouse=True)
def neutral_project_root(request, monkeypatch, tmp_path):
    """Run from an empty directory so no real pyproject.toml is picked up."""
    if request.node.get_closest_marker("allow_real_project_config"):
        return
    project = tmp_path / "project_isolated"
    project.mkdir(exist_ok=True)
    (project / "pyproject.toml").write_text("[project]\nname = 'x'\n")
    monkeypatch.chdir(project)


# --- Test Environment Markers ---


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Protocol and wire-format conformance tests",
        "integration: Component integration tests with fake adapters",
        "api: Real API integration tests (requires API key)",
        "allow_env_pollution: Keep the real GEMINI_* environment",
        "allow_real_home_config: Read the developer's home config file",
        "allow_real_project_config: Read the real pyproject.toml",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


def pytest_collection_modifyitems(config, items):  # noqa: ARG001
    """Automatically skip API tests when API key is unavailable."""
    if not (os.getenv("GEMINI_API_KEY") and os.getenv("ENABLE_API_TESTS")):
        skip_api = pytest.mark.skip(
            reason="API tests require GEMINI_API_KEY and ENABLE_API_TESTS=1",
        )
        for item in items:
            if "api" in item.keywords:
                item.add_marker(skip_api)


# --- Shared fixtures ---


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def frozen_config():
    """Default configuration with fast polling, frozen."""
    return resolve_config({"poll_interval": 1.0, "poll_timeout": 30.0}).to_frozen()

