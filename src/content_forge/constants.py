"""
Project-wide constants for content-forge
"""  # noqa: D200, D212, D415

# ==============================================================================
# Models
# ==============================================================================

DEFAULT_TEXT_MODEL = "gemini-3-flash-preview"
DEFAULT_REASONING_MODEL = "gemini-3-pro-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_VOICE_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_VIDEO_MODEL = "veo-3.1-fast-generate-preview"

# ==============================================================================
# Retry and backoff
# ==============================================================================

MAX_ATTEMPTS = 3  # total attempts, first call included
RETRY_BASE_DELAY = 3.0  # seconds
RETRY_MAX_JITTER = 1.0  # seconds, exclusive upper bound
RATE_LIMIT_MULTIPLIER = 3.0
RETRY_GROWTH_FACTOR = 2.0

RATE_LIMIT_STATUS = 429
RATE_LIMIT_MARKERS = ("429", "quota", "resource_exhausted")

CAPACITY_REACHED_MESSAGE = (
    "AI capacity reached. Please wait 60 seconds for the service to cool down "
    "and try again."
)

# ==============================================================================
# Long-running operations
# ==============================================================================

POLL_INTERVAL = 10.0  # seconds
POLL_TIMEOUT = 600.0  # seconds

# ==============================================================================
# Media
# ==============================================================================

DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_VIDEO_RESOLUTION = "720p"
DEFAULT_VOICE_NAME = "Kore"
DEFAULT_THINKING_BUDGET = 8000

TTS_SAMPLE_RATE = 24_000  # Hz, 16-bit mono PCM
TTS_MIME_TYPE = f"audio/L16;rate={TTS_SAMPLE_RATE}"
VIDEO_MIME_TYPE = "video/mp4"

# ==============================================================================
# Grounding
# ==============================================================================

DEFAULT_SOURCE_TITLE = "Reference"

# ==============================================================================
# Rate gate (0 disables a bound)
# ==============================================================================

MAX_CONCURRENT_REQUESTS = 0
REQUESTS_PER_MINUTE = 0
RATE_LIMIT_WINDOW = 60  # seconds

# ==============================================================================
# Trend score bounds
# ==============================================================================

TREND_SCORE_MIN = 0.0
TREND_SCORE_MAX = 10.0
