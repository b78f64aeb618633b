"""Provider adapters."""

from .base import GenerationAdapter
from .mock import MockAdapter

__all__ = ["GenerationAdapter", "MockAdapter"]
