"""Provider capability contracts, implementations and retry policy."""

from .retry import RetryPolicy, is_retryable_error
from .types import ChatProvider, ChatSession, Fragment, ProviderFactory, SessionConfig

__all__ = [
    "ChatProvider",
    "ChatSession",
    "Fragment",
    "ProviderFactory",
    "RetryPolicy",
    "SessionConfig",
    "is_retryable_error",
]
