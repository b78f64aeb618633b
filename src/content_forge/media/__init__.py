"""Media payload helpers."""

from .audio import duration_seconds, pcm_to_wav

__all__ = ["duration_seconds", "pcm_to_wav"]
