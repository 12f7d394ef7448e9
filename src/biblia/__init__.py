"""Biblia - scripture-grounded streaming chat over Gemini."""

__version__ = "0.1.0"

from .chat import ChatClient
from .domain.messages import Message, TranslationPreference
from .errors import BibliaError, ConfigurationError
from .runtime import (
    generate_chat_summary,
    initialize_chat,
    reset_chat,
    send_message_stream,
)

__all__ = [
    "__version__",
    "BibliaError",
    "ChatClient",
    "ConfigurationError",
    "Message",
    "TranslationPreference",
    "generate_chat_summary",
    "initialize_chat",
    "reset_chat",
    "send_message_stream",
]
