"""Configuration data types.

Configuration is resolved once into a ``ResolvedConfig`` (values plus where
each came from), then frozen into a ``FrozenConfig`` that the client holds for
its lifetime.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Literal, NamedTuple

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

SENSITIVE_FIELDS = frozenset({"api_key"})


class ResolvedConfig(NamedTuple):
    """Configuration after merging every source, before freezing."""

    api_key: str | None
    use_real_api: bool
    text_model: str
    reasoning_model: str
    image_model: str
    voice_model: str
    video_model: str
    max_attempts: int
    retry_base_delay: float
    retry_max_jitter: float
    rate_limit_multiplier: float
    retry_all_errors: bool
    poll_interval: float
    poll_timeout: float
    max_concurrent_requests: int
    requests_per_minute: int
    thinking_budget: int
    voice_name: str

    # Where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        values = ", ".join(
            f"{name}={value!r}" for name, value in self.values_dict(redact=True).items()
        )
        return f"ResolvedConfig({values}, origin={dict(self.origin)!r})"

    def __repr__(self) -> str:
        """Repr with redacted API key for safe debugging."""
        return self.__str__()

    def values_dict(self, *, redact: bool = False) -> dict[str, object]:
        values = self._asdict()
        values.pop("origin")
        if redact:
            for name in SENSITIVE_FIELDS:
                if values.get(name):
                    values[name] = "[REDACTED]"
        return values

    def to_frozen(self) -> "FrozenConfig":
        """Drop the audit metadata and return the immutable form."""
        return FrozenConfig(**self.values_dict())

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Return a copy with ``overrides`` applied and marked programmatic.

        Unknown fields are ignored.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)
        for field, value in overrides.items():
            if field in new_values and field != "origin":
                new_values[field] = value
                new_origin[field] = "programmatic"
        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Return one ``field: origin:value`` line per field, secrets redacted."""
        lines = []
        for field, value in self.values_dict().items():
            origin = self.origin.get(field, "default")
            if field in SENSITIVE_FIELDS:
                if value is None:
                    display = f"{origin}:None"
                elif origin == "env":
                    display = f"env:GEMINI_{field.upper()}"
                else:
                    display = f"{origin}:<redacted>"
            elif origin == "env":
                display = f"env:GEMINI_{field.upper()}={value}"
            else:
                display = f"{origin}:{value}"
            lines.append(f"{field}: {display}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration held by a client instance."""

    api_key: str | None
    use_real_api: bool
    text_model: str
    reasoning_model: str
    image_model: str
    voice_model: str
    video_model: str
    max_attempts: int
    retry_base_delay: float
    retry_max_jitter: float
    rate_limit_multiplier: float
    retry_all_errors: bool
    poll_interval: float
    poll_timeout: float
    max_concurrent_requests: int
    requests_per_minute: int
    thinking_budget: int
    voice_name: str

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        values = asdict(self)
        if values["api_key"]:
            values["api_key"] = "[REDACTED]"
        fields = ", ".join(f"{k}={v!r}" for k, v in values.items())
        return f"FrozenConfig({fields})"

    def __repr__(self) -> str:
        """Representation with redacted API key for safe debugging."""
        return self.__str__()
