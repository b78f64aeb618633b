"""Error handling for generative service requests"""

from typing import NoReturn

from ..exceptions import APIError, ContentForgeError, InvalidCredentialsError
from .backoff import is_rate_limited


class GenerationErrorHandler:
    """Translates raw SDK errors into the library's exception hierarchy"""

    def handle_generation_error(
        self,
        error: Exception,
        operation: str = "unknown",
        structured: bool = False,
    ) -> NoReturn:
        """Raise the library exception that best describes ``error``"""
        if isinstance(error, ContentForgeError):
            raise error

        error_str = str(error).lower()

        if "requested entity was not found" in error_str:
            raise InvalidCredentialsError(
                "API key rejected or its project is not active. "
                "Select a key from a paid project and try again. "
                f"Original error: {error}",
            ) from error

        if "api key not valid" in error_str or "permission_denied" in error_str:
            raise InvalidCredentialsError(
                f"API key is not authorized for {operation}. Original error: {error}",
            ) from error

        if structured and ("json" in error_str or "schema" in error_str):
            raise APIError(
                f"Structured output generation failed for {operation}. "
                f"Check the response schema. Original error: {error}",
            ) from error

        if "safety" in error_str or "blocked" in error_str:
            raise APIError(
                f"Request for {operation} was blocked by the safety filter. "
                f"Original error: {error}",
            ) from error

        raise APIError(f"Content generation failed for {operation}: {error}") from error

    def should_translate(self, error: Exception) -> bool:
        """Rate-limit errors pass through untouched so the backoff can see them"""
        return not is_rate_limited(error) and not isinstance(error, ContentForgeError)
