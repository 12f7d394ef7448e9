"""Conversation summary generation on an independent provider instance."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from .ai.retry import error_status_code
from .ai.types import ProviderFactory
from .constants import SUMMARY_EMPTY_TEXT, SUMMARY_FALLBACK_TEXT
from .domain.messages import Message
from .formatting.history import render_transcript
from .logging import describe_error, log_event
from .prompts.templates import build_summary_prompt


async def generate_chat_summary(
    messages: Sequence[Message],
    provider_factory: ProviderFactory,
    *,
    model: str,
) -> str:
    """Summarize a full transcript with one non-streaming request.

    A new provider is built for every call so summarization never touches the
    live chat session. Provider errors propagate after a single attempt.
    """
    if not messages:
        return SUMMARY_EMPTY_TEXT

    conversation_text = render_transcript(messages)
    prompt = build_summary_prompt(conversation_text)

    log_event(
        "summary_request",
        model=model,
        message_count=len(messages),
        input_chars=len(conversation_text),
    )

    started = time.perf_counter()
    provider = provider_factory()
    try:
        text = await provider.generate_once(prompt, model=model)
    except Exception as e:
        log_event(
            "summary_error",
            level=logging.ERROR,
            model=model,
            latency_ms=round((time.perf_counter() - started) * 1000, 1),
            http_status=error_status_code(e),
            **describe_error(e),
        )
        raise

    latency_ms = round((time.perf_counter() - started) * 1000, 1)
    if not text:
        log_event(
            "summary_response",
            level=logging.WARNING,
            model=model,
            latency_ms=latency_ms,
            output_chars=0,
            empty=True,
        )
        return SUMMARY_FALLBACK_TEXT

    log_event(
        "summary_response",
        model=model,
        latency_ms=latency_ms,
        output_chars=len(text),
        empty=False,
    )
    return text
