"""Gemini (Google) provider implementation for Biblia."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence

from google import genai
from google.genai import types
from google.genai.chats import AsyncChat
from google.genai.errors import ClientError, ServerError

from ..constants import DEFAULT_REQUEST_TIMEOUT_SEC
from ..domain.messages import HistoryEntry
from ..logging import log_event, sanitize_error_message
from .types import SessionConfig

PROVIDER_NAME = "gemini"


def _log_provider_error(error: Exception) -> None:
    """Emit a provider_log event with a hint for common client errors."""
    if isinstance(error, ClientError):
        message = f"Client error ({error.code}): {error}"
        if error.code == 400:
            message += " Bad request - check message format and parameters."
        elif error.code in (401, 403):
            message += " Permission denied - check API key and access."
        elif error.code == 429:
            message += " Rate limit or quota exceeded."
    elif isinstance(error, ServerError):
        message = f"Server error ({error.code}): {error}"
    else:
        message = f"Unexpected error: {type(error).__name__}: {error}"

    log_event(
        "provider_log",
        level=logging.ERROR,
        provider=PROVIDER_NAME,
        message=sanitize_error_message(message),
    )


class GeminiChatSession:
    """Session handle wrapping one ``AsyncChat``."""

    def __init__(self, chat: AsyncChat):
        self._chat = chat

    async def send_stream(self, message: str) -> AsyncIterator[types.GenerateContentResponse]:
        """Send one user message and return the chunk iterator."""
        try:
            stream = await self._chat.send_message_stream(message)
        except Exception as e:
            _log_provider_error(e)
            raise
        return self._guard(stream)

    @staticmethod
    async def _guard(
        stream: AsyncIterator[types.GenerateContentResponse],
    ) -> AsyncIterator[types.GenerateContentResponse]:
        try:
            async for chunk in stream:
                yield chunk
        except Exception as e:
            _log_provider_error(e)
            raise


class GeminiProvider:
    """Gemini (Google) provider implementation."""

    name = PROVIDER_NAME

    def __init__(self, api_key: str, timeout: float = DEFAULT_REQUEST_TIMEOUT_SEC):
        """Initialize Gemini provider.

        Args:
            api_key: Google API key
            timeout: Request timeout in seconds (0 = no timeout)
        """
        # Gemini SDK uses milliseconds; 0 means no timeout.
        timeout_ms = int(timeout * 1000) if timeout > 0 else None

        # No retry_options: the streaming dispatcher is the only retry layer.
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_ms),
        )
        self.timeout = timeout

    @staticmethod
    def format_history(history: Sequence[HistoryEntry]) -> list[types.Content]:
        """Convert role/content pairs to Gemini contents.

        Gemini uses "user" and "model" roles.
        """
        formatted = []
        for entry in history:
            role = "model" if entry["role"] == "assistant" else "user"
            formatted.append(
                types.Content(role=role, parts=[types.Part(text=entry["content"])])
            )
        return formatted

    def create_session(self, config: SessionConfig, *, model: str) -> GeminiChatSession:
        """Open a new chat bound to the system instruction and history."""
        chat = self.client.aio.chats.create(
            model=model,
            config=types.GenerateContentConfig(
                system_instruction=config["system_instruction"],
                temperature=config["temperature"],
            ),
            history=self.format_history(config["history"]),
        )
        return GeminiChatSession(chat)

    async def generate_once(self, prompt: str, *, model: str) -> str | None:
        """Issue a single non-streaming request and return its text."""
        try:
            response = await self.client.aio.models.generate_content(
                model=model,
                contents=prompt,
            )
        except Exception as e:
            _log_provider_error(e)
            raise
        return response.text
