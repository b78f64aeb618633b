"""Call-level resilience: backoff, request gating and error translation"""  # noqa: D415

from .backoff import BackoffPolicy, ErrorClass, RetryDecision, is_rate_limited
from .error_handler import GenerationErrorHandler
from .rate_limiter import RequestGate

__all__ = [
    "BackoffPolicy",
    "ErrorClass",
    "GenerationErrorHandler",
    "RequestGate",
    "RetryDecision",
    "is_rate_limited",
]
