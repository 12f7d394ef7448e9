"""Custom exception types for Biblia.

Provider failures are not wrapped: the SDK exception reaches the caller as-is,
and transient/fatal is decided by ``ai.retry.is_retryable_error``.
"""

from __future__ import annotations


class BibliaError(Exception):
    """Base class for all Biblia errors."""


class ConfigurationError(BibliaError, ValueError):
    """Missing credential or invalid setting. Never retried."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
