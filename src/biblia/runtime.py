"""Process-wide default chat client and module-level operations.

Front-ends that only need one conversation can call these functions directly;
anything needing several independent conversations should hold its own
``ChatClient``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .ai.gemini_provider import GeminiProvider
from .ai.types import ChatSession, ProviderFactory
from .chat import ChatClient, ChunkCallback, RestartCallback
from .config import ChatSettings
from .domain.messages import Message, TranslationPreference
from .keys.loader import KeyConfig, load_api_key

_default_client: ChatClient | None = None


def build_gemini_factory(api_key: str) -> ProviderFactory:
    """Return a factory producing independent Gemini providers for one key."""

    def _factory() -> GeminiProvider:
        return GeminiProvider(api_key)

    return _factory


def create_client(
    settings: ChatSettings | None = None,
    key_config: KeyConfig | None = None,
) -> ChatClient:
    """Build a Gemini-backed client, loading the credential up front.

    Raises:
        ConfigurationError: If the credential is missing or invalid
    """
    settings = settings or ChatSettings.from_env()
    if key_config is None:
        key_config = {"type": "env", "key": settings.api_key_env}
    api_key = load_api_key(key_config)
    return ChatClient(build_gemini_factory(api_key), settings)


def get_default_client() -> ChatClient:
    """Return the process-wide client, creating it from the environment."""
    global _default_client
    if _default_client is None:
        _default_client = create_client()
    return _default_client


def set_default_client(client: ChatClient | None) -> None:
    """Install (or clear, with None) the process-wide client."""
    global _default_client
    _default_client = client


def initialize_chat(
    translation: TranslationPreference = TranslationPreference.ESV,
    history: Iterable[Message] = (),
) -> ChatSession:
    return get_default_client().initialize_chat(translation, history)


async def send_message_stream(
    message: str,
    on_chunk: ChunkCallback,
    on_restart: Optional[RestartCallback] = None,
) -> None:
    await get_default_client().send_message_stream(message, on_chunk, on_restart)


def reset_chat() -> None:
    # Nothing to reset before the first client exists.
    if _default_client is not None:
        _default_client.reset_chat()


async def generate_chat_summary(messages: Iterable[Message]) -> str:
    return await get_default_client().generate_chat_summary(messages)
