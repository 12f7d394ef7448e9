"""Application-level constants for Biblia.

Retry and sampling values here are the defaults; ``config.ChatSettings``
may override the model and retry knobs from the environment.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "biblia"
ASSISTANT_NAME = "Biblia AI"

# ============================================================================
# Provider defaults
# ============================================================================

DEFAULT_MODEL = "gemini-2.5-flash"

# Low temperature keeps quoting and citations close to the source text.
CHAT_TEMPERATURE = 0.3

# Environment variable holding the provider credential.
DEFAULT_API_KEY_ENV = "API_KEY"

# ============================================================================
# Streaming retry policy
# ============================================================================

MAX_RETRIES = 3
RETRY_BASE_DELAY_MS = 2000
RETRY_BACKOFF_EXP_BASE = 2

RETRYABLE_MESSAGE_MARKERS = ("503", "500", "overloaded", "unavailable")
RETRYABLE_STATUS_CODES = frozenset({500, 503})

# ============================================================================
# Summary
# ============================================================================

SUMMARY_EMPTY_TEXT = "No conversation to summarize."
SUMMARY_FALLBACK_TEXT = "Could not generate summary."

# ============================================================================
# Logging
# ============================================================================

USER_DATA_DIR = f"~/.{APP_NAME}"
DEFAULT_LOGS_DIR = f"{USER_DATA_DIR}/logs"
LOG_FILE_EXTENSION = ".log"
DATETIME_FORMAT_FILENAME = "%Y-%m-%d_%H-%M-%S"

# Per-request HTTP timeout handed to the provider SDK (0 = no timeout).
DEFAULT_REQUEST_TIMEOUT_SEC = 120.0
