"""Resilient generative-content client for faceless video channels."""

import importlib.metadata
import logging

from content_forge.config import (
    FrozenConfig,
    ResolvedConfig,
    config_override,
    config_scope,
    resolve_config,
)
from content_forge.core.models import (
    ChannelBlueprint,
    Competition,
    GroundingSource,
    MediaReference,
    NicheAnalysis,
    Platform,
    SeoMetadata,
    StoryboardScene,
    StrategyPlan,
    VideoConcept,
    ViralHook,
    WeekPlan,
)
from content_forge.core.types import DecodedResult, OperationKind
from content_forge.exceptions import (
    APIError,
    ContentForgeError,
    InvalidCredentialsError,
    MalformedPayloadError,
    MissingKeyError,
    OperationTimeoutError,
    ProductionFailureError,
    TransientRateLimitedError,
    ValidationError,
)
from content_forge.forge import (
    ContentForgeClient,
    authenticated_download_uri,
    create_client,
)
from content_forge.telemetry import TelemetryContext, TelemetryReporter

try:
    __version__ = importlib.metadata.version("content-forge")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Library logging stays silent unless the application configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Client
    "ContentForgeClient",
    "create_client",
    "authenticated_download_uri",
    # Configuration
    "FrozenConfig",
    "ResolvedConfig",
    "resolve_config",
    "config_scope",
    "config_override",
    # Records
    "ChannelBlueprint",
    "Competition",
    "DecodedResult",
    "GroundingSource",
    "MediaReference",
    "NicheAnalysis",
    "OperationKind",
    "Platform",
    "SeoMetadata",
    "StoryboardScene",
    "StrategyPlan",
    "VideoConcept",
    "ViralHook",
    "WeekPlan",
    # Errors
    "ContentForgeError",
    "APIError",
    "TransientRateLimitedError",
    "InvalidCredentialsError",
    "MalformedPayloadError",
    "MissingKeyError",
    "OperationTimeoutError",
    "ProductionFailureError",
    "ValidationError",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
]
