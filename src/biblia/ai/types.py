"""Provider-agnostic capability contracts consumed by the chat core."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Protocol, TypedDict

from ..domain.messages import HistoryEntry


class Fragment(Protocol):
    """One incremental piece of a streamed response."""

    @property
    def text(self) -> str | None: ...


class SessionConfig(TypedDict):
    """Everything a provider needs to open a conversation."""

    system_instruction: str
    temperature: float
    history: list[HistoryEntry]


class ChatSession(Protocol):
    """Open conversation accumulating provider-side history."""

    async def send_stream(self, message: str) -> AsyncIterator[Fragment]:
        """Send one user message; iterate the result for fragments.

        Errors may surface from the await or from any pull of the iterator.
        """
        ...


class ChatProvider(Protocol):
    """Model provider able to open sessions and answer one-shot prompts."""

    name: str

    def create_session(self, config: SessionConfig, *, model: str) -> ChatSession: ...

    async def generate_once(self, prompt: str, *, model: str) -> str | None: ...


ProviderFactory = Callable[[], ChatProvider]
