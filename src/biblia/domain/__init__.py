"""Typed domain models for Biblia."""

from .messages import (
    HistoryEntry,
    Message,
    MessageRole,
    MessageStatus,
    TranslationPreference,
)

__all__ = [
    "HistoryEntry",
    "Message",
    "MessageRole",
    "MessageStatus",
    "TranslationPreference",
]
