"""Message-history filtering and transcript rendering."""

from __future__ import annotations

from collections.abc import Iterable

from ..domain.messages import HistoryEntry, Message, MessageStatus


def is_context_message(msg: Message) -> bool:
    """Return True when a message is a finalized conversational turn.

    In-flight streams, blank content and queued (pending) messages never
    reach the provider.
    """
    if msg.is_streaming:
        return False
    if msg.status == MessageStatus.PENDING:
        return False
    return bool(msg.content.strip())


def format_history(messages: Iterable[Message]) -> list[HistoryEntry]:
    """Convert stored messages into ordered role/content pairs."""
    return [
        {"role": msg.role, "content": msg.content}
        for msg in messages
        if is_context_message(msg)
    ]


def format_message_for_transcript(msg: Message) -> str:
    return f"{msg.role.upper()}: {msg.content}"


def render_transcript(messages: Iterable[Message]) -> str:
    """Render context messages as ``ROLE: content`` blocks separated by blank lines."""
    return "\n\n".join(
        format_message_for_transcript(msg)
        for msg in messages
        if is_context_message(msg)
    )
