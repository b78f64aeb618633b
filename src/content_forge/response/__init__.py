"""Response handling: JSON recovery, grounding sources and record validation."""

from .decoder import decode
from .grounding import extract
from .processor import ResponseProcessor

__all__ = ["ResponseProcessor", "decode", "extract"]
