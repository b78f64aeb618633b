"""Public entry points for configuration resolution."""

from pathlib import Path
from typing import Any

from .resolver import ConfigResolver
from .scope import get_ambient_resolved_config
from .types import ResolvedConfig

_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    profile: str | None = None,
    use_env_file: str | Path | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources.

    Precedence: programmatic > environment (``GEMINI_*``) > project file
    (``[tool.content_forge]``) > home file > defaults. Inside a
    ``config_scope`` the scoped config is the base and only ``programmatic``
    is applied on top.

    Args:
        programmatic: Overrides with the highest precedence. Unknown fields
            are ignored.
        profile: Profile to read from the config files. Defaults to
            ``GEMINI_PROFILE``.
        use_env_file: Optional ``.env`` file loaded before reading the
            environment.
        project_root: Where to start looking for pyproject.toml.

    Returns:
        ResolvedConfig with per-field origins.

    Raises:
        ValueError: If validation fails or an environment value is invalid.
        ConfigFileError: If the project config file is malformed.

    Example:
        config = resolve_config({"use_real_api": True, "api_key": key})
        print(config.audit())
    """
    ambient = get_ambient_resolved_config()
    if ambient is not None:
        return ambient.with_overrides(**programmatic) if programmatic else ambient
    return _resolver.resolve(
        programmatic=programmatic,
        profile=profile,
        use_env_file=use_env_file,
        project_root=project_root,
    )


def list_available_profiles(project_root: Path | None = None) -> dict[str, list[str]]:
    """Return profile names found in the project and home files."""
    return _resolver.list_available_profiles(project_root)


def check_environment() -> dict[str, str]:
    """Return the ``GEMINI_*`` variables currently set, secrets redacted."""
    return _resolver.env_loader.get_env_summary()
