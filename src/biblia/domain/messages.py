"""Chat message and translation models shared with the front-end."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, TypedDict

MessageRole = Literal["user", "assistant"]

VALID_ROLES: tuple[str, ...] = ("user", "assistant")


class MessageStatus:
    """Known delivery states. The set is open; other strings pass through."""

    PENDING = "pending"
    SENT = "sent"
    ERROR = "error"


class HistoryEntry(TypedDict):
    """Provider-agnostic conversational turn."""

    role: str
    content: str


class TranslationPreference(str, Enum):
    """Supported scripture translations."""

    ESV = "ESV"
    NIV = "NIV"
    KJV = "KJV"
    NKJV = "NKJV"
    NASB = "NASB"
    NLT = "NLT"
    CSB = "CSB"

    @classmethod
    def default(cls) -> TranslationPreference:
        return cls.ESV

    @classmethod
    def parse(cls, value: str) -> TranslationPreference:
        """Resolve a case-insensitive translation code."""
        code = value.strip().upper()
        try:
            return cls(code)
        except ValueError:
            supported = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown translation '{value}'. Supported: {supported}"
            ) from None

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class Message:
    """One chat turn as stored by the caller.

    Instances are treated as read-only here; the caller replaces them as a
    stream completes or a queued message is delivered.
    """

    role: MessageRole
    content: str
    is_streaming: bool = False
    status: str = MessageStatus.SENT

    @classmethod
    def from_raw(cls, raw_message: Any, *, index: int | None = None) -> Message:
        """Create a typed message from a front-end dict payload.

        Accepts both ``is_streaming`` and the camel-case ``isStreaming`` key.
        """
        idx = f" at index {index}" if index is not None else ""
        if not isinstance(raw_message, dict):
            raise ValueError(f"Invalid message{idx}: expected object")

        role = raw_message.get("role")
        if role not in VALID_ROLES:
            raise ValueError(f"Invalid message{idx}: unknown role '{role}'")

        content = raw_message.get("content", "")
        if not isinstance(content, str):
            raise ValueError(f"Invalid message{idx}: content must be a string")

        streaming = raw_message.get("is_streaming", raw_message.get("isStreaming", False))
        status = raw_message.get("status") or MessageStatus.SENT

        return cls(
            role=role,
            content=content,
            is_streaming=bool(streaming),
            status=str(status),
        )

    @classmethod
    def user(cls, content: str, *, status: str = MessageStatus.SENT) -> Message:
        return cls(role="user", content=content, status=status)

    @classmethod
    def assistant(cls, content: str, *, is_streaming: bool = False) -> Message:
        return cls(role="assistant", content=content, is_streaming=is_streaming)
