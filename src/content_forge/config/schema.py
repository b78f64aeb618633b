"""Configuration schema and validation using Pydantic.

Every setting the client reads lives here, with its default, bounds and
environment variable (``GEMINI_<FIELD>``).
"""

from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from content_forge import constants as c


class ForgeSettings(BaseSettings):
    """Pydantic settings schema for content-forge.

    Values are validated and coerced here whatever source they came from.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Credentials and mode ---

    api_key: str | None = Field(default=None, description="Google Gemini API key")
    use_real_api: bool = Field(
        default=False, description="Call the real service instead of the mock adapter"
    )

    # --- Models ---

    text_model: str = Field(default=c.DEFAULT_TEXT_MODEL, min_length=1)
    reasoning_model: str = Field(default=c.DEFAULT_REASONING_MODEL, min_length=1)
    image_model: str = Field(default=c.DEFAULT_IMAGE_MODEL, min_length=1)
    voice_model: str = Field(default=c.DEFAULT_VOICE_MODEL, min_length=1)
    video_model: str = Field(default=c.DEFAULT_VIDEO_MODEL, min_length=1)

    # --- Retry ---

    max_attempts: int = Field(default=c.MAX_ATTEMPTS, ge=1)
    retry_base_delay: float = Field(default=c.RETRY_BASE_DELAY, gt=0)
    retry_max_jitter: float = Field(default=c.RETRY_MAX_JITTER, ge=0)
    rate_limit_multiplier: float = Field(default=c.RATE_LIMIT_MULTIPLIER, ge=1)
    retry_all_errors: bool = Field(
        default=False, description="Also retry errors that are not rate limits"
    )

    # --- Long-running operations ---

    poll_interval: float = Field(default=c.POLL_INTERVAL, gt=0)
    poll_timeout: float = Field(default=c.POLL_TIMEOUT, gt=0)

    # --- Request gate (0 disables a bound) ---

    max_concurrent_requests: int = Field(default=c.MAX_CONCURRENT_REQUESTS, ge=0)
    requests_per_minute: int = Field(default=c.REQUESTS_PER_MINUTE, ge=0)

    # --- Media ---

    thinking_budget: int = Field(default=c.DEFAULT_THINKING_BUDGET, ge=0)
    voice_name: str = Field(default=c.DEFAULT_VOICE_NAME, min_length=1)

    @model_validator(mode="after")
    def validate_api_key_requirement(self) -> "ForgeSettings":
        """Ensure api_key is provided when use_real_api is True."""
        if self.use_real_api and not self.api_key:
            raise ValueError(
                "api_key is required when use_real_api=True. "
                "Set GEMINI_API_KEY, provide it in a config file, "
                "or pass it programmatically."
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Field values keyed by name, in declaration order."""
        return {name: getattr(self, name) for name in type(self).model_fields}


FIELD_NAMES: tuple[str, ...] = tuple(ForgeSettings.model_fields)
