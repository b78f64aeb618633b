"""Helpers for the raw PCM audio returned by the speech model."""

from __future__ import annotations

import io
import wave

from content_forge.constants import TTS_SAMPLE_RATE
from content_forge.core.models import MediaReference

SAMPLE_WIDTH = 2  # bytes, 16-bit signed little-endian
CHANNELS = 1


def pcm_to_wav(
    audio: MediaReference | bytes,
    *,
    sample_rate: int = TTS_SAMPLE_RATE,
    channels: int = CHANNELS,
) -> bytes:
    """Wrap 16-bit PCM samples in a WAV container.

    Args:
        audio: Raw PCM bytes, or an inline ``MediaReference`` holding them.
        sample_rate: Samples per second.
        channels: Interleaved channel count.

    Raises:
        ValueError: If the reference is not inline or the byte count is not a
            whole number of frames.
    """
    pcm = audio.payload_bytes() if isinstance(audio, MediaReference) else audio
    frame_size = SAMPLE_WIDTH * channels
    if len(pcm) % frame_size:
        raise ValueError(
            f"PCM payload of {len(pcm)} bytes is not a multiple of {frame_size}"
        )

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(SAMPLE_WIDTH)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return buffer.getvalue()


def duration_seconds(
    audio: MediaReference | bytes,
    *,
    sample_rate: int = TTS_SAMPLE_RATE,
    channels: int = CHANNELS,
) -> float:
    """Playback length of a PCM payload."""
    pcm = audio.payload_bytes() if isinstance(audio, MediaReference) else audio
    return len(pcm) / (SAMPLE_WIDTH * channels * sample_rate)
