"""Environment variable configuration loading.

Reads ``GEMINI_<FIELD>`` for every settings field, optionally after loading a
``.env`` file, and coerces each value to the field's type.
"""

import os
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .schema import FIELD_NAMES, ForgeSettings

ENV_PREFIX = "GEMINI_"


def env_var_for(field_name: str) -> str:
    return f"{ENV_PREFIX}{field_name.upper()}"


class EnvironmentConfigLoader:
    """Loads configuration from ``GEMINI_*`` environment variables."""

    def load_env_config(self, env_file: str | Path | None = None) -> dict[str, Any]:
        """Return the fields set in the environment, coerced to their types.

        Only variables that are actually set are returned; defaults are left
        to the resolver.

        Raises:
            ValueError: If a variable holds a value its field cannot accept.
        """
        if env_file:
            self._load_env_file(env_file)

        result: dict[str, Any] = {}
        errors: list[str] = []
        for field_name in FIELD_NAMES:
            env_var = env_var_for(field_name)
            if env_var not in os.environ:
                continue
            annotation = ForgeSettings.model_fields[field_name].annotation
            try:
                result[field_name] = TypeAdapter(annotation).validate_python(
                    os.environ[env_var]
                )
            except PydanticValidationError as e:
                shown = "<redacted>" if field_name == "api_key" else os.environ[env_var]
                errors.append(f"{env_var}={shown} ({e.errors()[0]['msg']})")

        if errors:
            joined = ", ".join(errors)
            raise ValueError(f"Invalid environment variable values: {joined}")
        return result

    def _load_env_file(self, env_file: str | Path) -> None:
        """Load ``KEY=VALUE`` lines into ``os.environ`` without overriding.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If a line is not ``KEY=VALUE``.
        """
        env_path = Path(env_file)
        if not env_path.exists():
            raise FileNotFoundError(f"Environment file not found: {env_path}")

        with env_path.open(encoding="utf-8") as f:
            for line_num, raw_line in enumerate(f, 1):
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    raise ValueError(
                        f"Invalid format at line {line_num}: {line}. "
                        "Expected KEY=VALUE format."
                    )
                key, value = (part.strip() for part in line.split("=", 1))
                if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                    value = value[1:-1]
                os.environ.setdefault(key, value)

    def get_env_summary(self) -> dict[str, str]:
        """Return the ``GEMINI_*`` variables currently set, secrets redacted."""
        summary = {}
        for field_name in FIELD_NAMES:
            env_var = env_var_for(field_name)
            if env_var in os.environ:
                summary[env_var] = (
                    "<redacted>" if field_name == "api_key" else os.environ[env_var]
                )
        return summary
