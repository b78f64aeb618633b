"""Provider adapters and the long-running operation poller."""

from .adapters import GenerationAdapter, MockAdapter
from .poller import OperationPoller

__all__ = ["GenerationAdapter", "MockAdapter", "OperationPoller"]
