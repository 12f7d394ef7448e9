"""Formatting helpers for provider context and transcripts."""

from .history import format_history, is_context_message, render_transcript

__all__ = ["format_history", "is_context_message", "render_transcript"]
