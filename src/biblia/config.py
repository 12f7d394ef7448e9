"""Runtime settings for the chat client, resolved from the environment."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import (
    CHAT_TEMPERATURE,
    DEFAULT_API_KEY_ENV,
    DEFAULT_MODEL,
    MAX_RETRIES,
    RETRY_BASE_DELAY_MS,
)
from .errors import ConfigurationError

ENV_MODEL = "BIBLIA_MODEL"
ENV_API_KEY_ENV = "BIBLIA_API_KEY_ENV"
ENV_MAX_RETRIES = "BIBLIA_MAX_RETRIES"
ENV_RETRY_BASE_DELAY_MS = "BIBLIA_RETRY_BASE_DELAY_MS"


def normalize_non_negative_int(value: object, name: str) -> int:
    """Normalize an int-like setting and reject negatives or garbage."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a non-negative integer")
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ConfigurationError(
                f"{name} must be a non-negative integer, got '{value}'"
            )
        return int(text)
    if isinstance(value, int):
        if value < 0:
            raise ConfigurationError(f"{name} must be a non-negative integer")
        return value
    raise ConfigurationError(f"{name} must be a non-negative integer")


@dataclass(slots=True, frozen=True)
class ChatSettings:
    """Resolved settings shared by the session factory and dispatcher."""

    model: str = DEFAULT_MODEL
    temperature: float = CHAT_TEMPERATURE
    max_retries: int = MAX_RETRIES
    retry_base_delay_ms: int = RETRY_BASE_DELAY_MS
    api_key_env: str = DEFAULT_API_KEY_ENV

    def __post_init__(self) -> None:
        if not self.model or not self.model.strip():
            raise ConfigurationError("Model name must not be empty")
        if not math.isfinite(self.temperature) or self.temperature < 0:
            raise ConfigurationError("Temperature must be a non-negative finite number")
        normalize_non_negative_int(self.max_retries, "max_retries")
        normalize_non_negative_int(self.retry_base_delay_ms, "retry_base_delay_ms")

    @property
    def retry_base_delay_sec(self) -> float:
        return self.retry_base_delay_ms / 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ChatSettings:
        """Build settings from ``BIBLIA_*`` environment variables.

        Unset variables fall back to the package defaults. Invalid values
        raise ``ConfigurationError``.
        """
        env = os.environ if environ is None else environ

        model = env.get(ENV_MODEL, "").strip() or DEFAULT_MODEL
        api_key_env = env.get(ENV_API_KEY_ENV, "").strip() or DEFAULT_API_KEY_ENV

        max_retries = MAX_RETRIES
        raw_retries = env.get(ENV_MAX_RETRIES)
        if raw_retries is not None and raw_retries.strip():
            max_retries = normalize_non_negative_int(raw_retries, ENV_MAX_RETRIES)

        base_delay_ms = RETRY_BASE_DELAY_MS
        raw_delay = env.get(ENV_RETRY_BASE_DELAY_MS)
        if raw_delay is not None and raw_delay.strip():
            base_delay_ms = normalize_non_negative_int(raw_delay, ENV_RETRY_BASE_DELAY_MS)

        return cls(
            model=model,
            max_retries=max_retries,
            retry_base_delay_ms=base_delay_ms,
            api_key_env=api_key_env,
        )
