"""Configuration for content-forge.

Resolve once, freeze, then hand the ``FrozenConfig`` to a client:

    config = resolve_config().to_frozen()
"""

from .api import check_environment, list_available_profiles, resolve_config
from .audit import SourceTracker, generate_telemetry_summary
from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver
from .schema import FIELD_NAMES, ForgeSettings
from .scope import config_override, config_scope, get_ambient_resolved_config
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [  # noqa: RUF022
    # Main API
    "resolve_config",
    "list_available_profiles",
    "check_environment",
    # Scoping
    "config_scope",
    "config_override",
    "get_ambient_resolved_config",
    # Core types
    "ResolvedConfig",
    "FrozenConfig",
    "SourceMap",
    "ConfigOrigin",
    # Advanced usage
    "FIELD_NAMES",
    "ForgeSettings",
    "ConfigResolver",
    "FileConfigLoader",
    "ConfigFileError",
    "SourceTracker",
    "generate_telemetry_summary",
]
