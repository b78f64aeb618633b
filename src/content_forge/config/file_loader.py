"""File-based configuration loading with profile support.

Two TOML sources are read: ``[tool.content_forge]`` in the nearest
``pyproject.toml`` and the home file ``~/.config/content_forge.toml``. Either
may define named profiles under ``profiles.<name>``.
"""

import logging
import os
from pathlib import Path
import tomllib
from typing import Any

log = logging.getLogger(__name__)

HOME_CONFIG_ENV = "CONTENT_FORGE_CONFIG_HOME"
HOME_CONFIG_NAME = "content_forge.toml"
TOOL_SECTION = "content_forge"


class ConfigFileError(Exception):
    """Raised when configuration file loading fails."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        """Keep the failing path and underlying cause for callers."""
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(f"Config file error in {file_path}: {message}")


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open(mode="rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, f"Failed to parse TOML: {e}", cause=e) from e


def _select_profile(
    section: dict[str, Any], profile: str | None, path: Path
) -> dict[str, Any]:
    if profile:
        profiles = section.get("profiles", {})
        if profile not in profiles:
            raise ConfigFileError(
                path,
                f"Profile '{profile}' not found. Available profiles: {list(profiles)}",
            )
        return dict(profiles[profile])
    config = dict(section)
    config.pop("profiles", None)
    return config


class FileConfigLoader:
    """Loads configuration from the project and home TOML files."""

    def load_project_config(
        self, project_root: Path | None = None, profile: str | None = None
    ) -> dict[str, Any]:
        """Load ``[tool.content_forge]`` (or one of its profiles).

        Returns:
            The section's values, or an empty dict when there is no
            pyproject.toml or no section.

        Raises:
            ConfigFileError: If the file cannot be parsed or the profile is
                missing.
        """
        pyproject_path = self._find_pyproject_toml(project_root)
        if not pyproject_path:
            return {}
        section = _read_toml(pyproject_path).get("tool", {}).get(TOOL_SECTION, {})
        if not section:
            return {}
        return _select_profile(section, profile, pyproject_path)

    def load_home_config(self, profile: str | None = None) -> dict[str, Any]:
        """Load the home configuration file (or one of its profiles)."""
        path = self.home_config_path()
        if not path.exists():
            return {}
        return _select_profile(_read_toml(path), profile, path)

    def list_available_profiles(
        self, project_root: Path | None = None
    ) -> dict[str, list[str]]:
        """Return profile names per source; unreadable files list none."""
        profiles: dict[str, list[str]] = {"project": [], "home": []}
        pyproject_path = self._find_pyproject_toml(project_root)
        if pyproject_path:
            try:
                section = (
                    _read_toml(pyproject_path).get("tool", {}).get(TOOL_SECTION, {})
                )
                profiles["project"] = list(section.get("profiles", {}))
            except ConfigFileError as e:
                self._note_unreadable(e)
        home = self.home_config_path()
        if home.exists():
            try:
                profiles["home"] = list(_read_toml(home).get("profiles", {}))
            except ConfigFileError as e:
                self._note_unreadable(e)
        return profiles

    def home_config_path(self) -> Path:
        """Return the home config path; ``CONTENT_FORGE_CONFIG_HOME`` overrides it."""
        override = os.getenv(HOME_CONFIG_ENV)
        if override:
            return Path(override)
        return Path.home() / ".config" / HOME_CONFIG_NAME

    def _find_pyproject_toml(self, start_dir: Path | None = None) -> Path | None:
        current = Path(start_dir or Path.cwd()).resolve()
        while True:
            candidate = current / "pyproject.toml"
            if candidate.exists():
                return candidate
            if current == current.parent:
                return None
            current = current.parent

    def _note_unreadable(self, error: ConfigFileError) -> None:
        log.warning("Skipping unreadable config: %s", error)
