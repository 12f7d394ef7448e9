"""Failure classification and backoff policy for streaming sends."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import (
    MAX_RETRIES,
    RETRY_BACKOFF_EXP_BASE,
    RETRY_BASE_DELAY_MS,
    RETRYABLE_MESSAGE_MARKERS,
    RETRYABLE_STATUS_CODES,
)
from ..logging import before_sleep_log_event

ErrorPredicate = Callable[[BaseException], bool]
SleepFunc = Callable[[float], Awaitable[None]]


def error_status_code(error: BaseException) -> int | None:
    """Return an integer HTTP-ish status carried by the error, if any.

    Gemini's ``APIError`` uses ``code`` (``status`` is the text form such as
    ``"UNAVAILABLE"``); other clients use ``status_code`` or ``status``.
    """
    for attr in ("code", "status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def is_retryable_error(error: BaseException) -> bool:
    """Classify a provider failure as transient (server overload/unavailable)."""
    if not isinstance(error, Exception):
        return False

    message = str(error)
    if any(marker in message for marker in RETRYABLE_MESSAGE_MARKERS):
        return True

    return error_status_code(error) in RETRYABLE_STATUS_CODES


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Exponential backoff for one streaming send.

    ``max_retries`` counts extra attempts after the first, so the default
    allows four sends with waits of 2 s, 4 s and 8 s between them.
    """

    max_retries: int = MAX_RETRIES
    base_delay_sec: float = RETRY_BASE_DELAY_MS / 1000
    is_retryable: ErrorPredicate = is_retryable_error

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def build_retrying(
        self,
        *,
        operation: str,
        sleep: SleepFunc = asyncio.sleep,
    ) -> AsyncRetrying:
        """Build the tenacity controller; the last error is re-raised as-is."""
        return AsyncRetrying(
            retry=retry_if_exception(self.is_retryable),
            wait=wait_exponential(
                multiplier=self.base_delay_sec,
                exp_base=RETRY_BACKOFF_EXP_BASE,
            ),
            stop=stop_after_attempt(self.max_attempts),
            sleep=sleep,
            before_sleep=before_sleep_log_event(
                operation=operation,
                max_attempts=self.max_attempts,
                level=logging.WARNING,
            ),
            reraise=True,
        )
