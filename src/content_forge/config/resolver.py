"""Configuration resolution with precedence handling.

Programmatic > Environment > Project file > Home file > Defaults
"""

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .audit import SourceTracker
from .env_loader import EnvironmentConfigLoader
from .file_loader import ConfigFileError, FileConfigLoader
from .schema import ForgeSettings
from .types import ResolvedConfig

log = logging.getLogger(__name__)

PROFILE_ENV = "GEMINI_PROFILE"


def _schema_defaults() -> dict[str, Any]:
    # Read field defaults directly; instantiating BaseSettings would read env.
    return {
        name: field.get_default(call_default_factory=True)
        for name, field in ForgeSettings.model_fields.items()
    }


class ConfigResolver:
    """Merges configuration sources in precedence order."""

    def __init__(self) -> None:
        """Create the file and environment loaders."""
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        profile: str | None = None,
        use_env_file: str | Path | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources.

        Raises:
            ValueError: If validation fails or an environment value is invalid.
            ConfigFileError: If the project file is malformed.
        """
        tracker = SourceTracker()
        merged = _schema_defaults()
        tracker.set_multiple(merged, "default")

        if profile is None:
            profile = os.getenv(PROFILE_ENV)

        def apply(values: dict[str, Any], origin: Any) -> None:
            for field, value in values.items():
                if field in merged:  # Only known fields
                    merged[field] = value
                    tracker.set_origin(field, origin)
                else:
                    log.debug("Ignoring unknown config field %r from %s", field, origin)

        try:
            apply(self.file_loader.load_home_config(profile=profile), "file")
        except ConfigFileError as e:
            log.warning("Skipping home config: %s", e)

        try:
            apply(
                self.file_loader.load_project_config(
                    project_root=project_root, profile=profile
                ),
                "file",
            )
        except ConfigFileError as e:
            if profile is None:
                raise
            log.warning("Skipping project profile %r: %s", profile, e)

        try:
            apply(self.env_loader.load_env_config(env_file=use_env_file), "env")
        except (ValueError, FileNotFoundError) as e:
            raise ValueError(f"Environment configuration error: {e}") from e

        if programmatic:
            apply(programmatic, "programmatic")

        try:
            validated = ForgeSettings(**merged)
        except PydanticValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

        resolved = ResolvedConfig(
            **validated.to_dict(), origin=tracker.get_source_map()
        )
        log.debug("Resolved configuration: %s", resolved)
        return resolved

    def list_available_profiles(
        self, project_root: Path | None = None
    ) -> dict[str, list[str]]:
        return self.file_loader.list_available_profiles(project_root)

