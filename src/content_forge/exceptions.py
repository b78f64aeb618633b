"""Exceptions raised by the content-forge client"""  # noqa: D415


class ContentForgeError(Exception):
    """Base exception for content-forge errors"""  # noqa: D415


class APIError(ContentForgeError):
    """Raised when a call to the generative service fails"""  # noqa: D415


class TransientRateLimitedError(APIError):
    """Raised when the service keeps throttling after the retry budget is spent"""  # noqa: D415


class InvalidCredentialsError(APIError):
    """Raised when the API key is rejected or its project is not active"""  # noqa: D415


class MissingKeyError(ContentForgeError):
    """Raised when a real API call is requested without an API key"""  # noqa: D415


class ValidationError(ContentForgeError):
    """Raised when request parameters fail validation"""  # noqa: D415


class ProductionFailureError(ContentForgeError):
    """Raised when a media job or media call returns no usable payload"""  # noqa: D415


class OperationTimeoutError(ContentForgeError):
    """Raised when a long-running operation outlives its polling deadline"""  # noqa: D415

    def __init__(self, message: str, *, operation_name: str | None = None) -> None:
        """Keep the name of the operation that timed out for diagnostics."""
        super().__init__(message)
        self.operation_name = operation_name


class MalformedPayloadError(ContentForgeError):
    """Raised when a response cannot be recovered into structured data.

    The offending text is kept on ``fragment`` for diagnostics only; it is
    never part of the message shown to end users.
    """

    def __init__(self, message: str, *, fragment: str | None = None) -> None:
        """Store the best-matched fragment alongside the message."""
        super().__init__(message)
        self.fragment = fragment
