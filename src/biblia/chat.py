"""Chat client: session factory, streaming dispatcher and session slot."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from typing import Optional

from .ai.retry import RetryPolicy, SleepFunc, error_status_code
from .ai.types import ChatProvider, ChatSession, ProviderFactory, SessionConfig
from .config import ChatSettings
from .domain.messages import Message, TranslationPreference
from .formatting.history import format_history
from .logging import describe_error, log_event
from .prompts.templates import build_system_instruction
from .summary import generate_chat_summary as _generate_summary

ChunkCallback = Callable[[str], None]
RestartCallback = Callable[[int], None]


class ChatClient:
    """Owns one conversation with the model provider.

    The client holds at most one live session. ``initialize_chat`` replaces
    it, ``reset_chat`` clears it, and ``send_message_stream`` creates a default
    one on demand. Sends against one client must not overlap; use separate
    clients for independent conversations.
    """

    def __init__(
        self,
        provider_factory: ProviderFactory,
        settings: ChatSettings | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.settings = settings or ChatSettings()
        self.retry_policy = retry_policy or RetryPolicy(
            max_retries=self.settings.max_retries,
            base_delay_sec=self.settings.retry_base_delay_sec,
        )
        self._provider_factory = provider_factory
        self._provider: ChatProvider | None = None
        self._sleep = sleep
        self.session: ChatSession | None = None

    @property
    def provider(self) -> ChatProvider:
        """Provider used for chat sessions, created on first use."""
        if self._provider is None:
            self._provider = self._provider_factory()
        return self._provider

    # ------------------------------------------------------------------
    # Session factory / lifecycle
    # ------------------------------------------------------------------

    def initialize_chat(
        self,
        translation: TranslationPreference = TranslationPreference.ESV,
        history: Iterable[Message] = (),
    ) -> ChatSession:
        """Open a fresh session and make it the current one.

        Provider errors propagate unchanged; nothing is retried here.
        """
        translation = TranslationPreference(translation)
        formatted_history = format_history(history)
        config: SessionConfig = {
            "system_instruction": build_system_instruction(translation),
            "temperature": self.settings.temperature,
            "history": formatted_history,
        }

        session = self.provider.create_session(config, model=self.settings.model)
        self.session = session

        log_event(
            "chat_session_create",
            model=self.settings.model,
            translation=translation.value,
            temperature=self.settings.temperature,
            history_count=len(formatted_history),
        )
        return session

    def reset_chat(self) -> None:
        """Drop the current session; the next send starts a new one."""
        had_session = self.session is not None
        self.session = None
        log_event("chat_reset", had_session=had_session)

    # ------------------------------------------------------------------
    # Streaming dispatcher
    # ------------------------------------------------------------------

    async def send_message_stream(
        self,
        message: str,
        on_chunk: ChunkCallback,
        on_restart: Optional[RestartCallback] = None,
    ) -> None:
        """Send one message and stream response text to ``on_chunk``.

        Transient failures (during the send or mid-stream) re-issue the whole
        send with exponential backoff. Text already handed to ``on_chunk`` is
        never retracted: when a failed attempt had delivered fragments and
        another attempt follows, ``on_restart(next_attempt)`` is called first
        so the caller can discard that partial output.

        Raises:
            Exception: The last provider error once it is fatal or retries
                are exhausted.
        """
        if self.session is None:
            self.initialize_chat()
        session = self.session
        assert session is not None

        policy = self.retry_policy
        started = time.perf_counter()
        attempt_number = 0
        fragments = 0
        output_chars = 0
        partial_pending = False

        log_event(
            "chat_request",
            model=self.settings.model,
            input_chars=len(message),
            max_attempts=policy.max_attempts,
        )

        try:
            retrying = policy.build_retrying(
                operation="send_message_stream",
                sleep=self._sleep,
            )
            async for attempt in retrying:
                with attempt:
                    attempt_number = attempt.retry_state.attempt_number
                    if partial_pending and on_restart is not None:
                        on_restart(attempt_number)
                    partial_pending = False
                    fragments = 0
                    output_chars = 0

                    stream = await session.send_stream(message)
                    async for fragment in stream:
                        text = fragment.text
                        if not text:
                            continue
                        fragments += 1
                        output_chars += len(text)
                        partial_pending = True
                        on_chunk(text)
        except Exception as e:
            log_event(
                "chat_error",
                level=logging.ERROR,
                model=self.settings.model,
                attempts=attempt_number,
                retryable=policy.is_retryable(e),
                latency_ms=round((time.perf_counter() - started) * 1000, 1),
                http_status=error_status_code(e),
                **describe_error(e),
            )
            raise

        log_event(
            "chat_response",
            model=self.settings.model,
            attempts=attempt_number,
            fragments=fragments,
            output_chars=output_chars,
            latency_ms=round((time.perf_counter() - started) * 1000, 1),
        )

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    async def generate_chat_summary(self, messages: Iterable[Message]) -> str:
        """Summarize a transcript on a fresh provider; the session is untouched."""
        return await _generate_summary(
            list(messages),
            self._provider_factory,
            model=self.settings.model,
        )
