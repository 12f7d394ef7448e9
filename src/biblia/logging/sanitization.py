"""Sensitive-data sanitization helpers for logs and user-visible errors."""

import re


def sanitize_error_message(error_msg: str) -> str:
    """Sanitize error messages to remove sensitive information."""
    sanitized = re.sub(r"AIza[0-9A-Za-z_\-]{30,}", "[REDACTED_API_KEY]", error_msg)
    sanitized = re.sub(
        r"([?&]key=)[A-Za-z0-9_\-]{10,}",
        r"\1[REDACTED_API_KEY]",
        sanitized,
    )
    sanitized = re.sub(
        r"Bearer\s+[A-Za-z0-9_\-\.]{20,}",
        "Bearer [REDACTED_TOKEN]",
        sanitized,
    )
    sanitized = re.sub(
        r"eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+",
        "[REDACTED_JWT]",
        sanitized,
    )
    return sanitized
