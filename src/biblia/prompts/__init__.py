"""Prompt template builders."""

from .templates import build_summary_prompt, build_system_instruction

__all__ = ["build_summary_prompt", "build_system_instruction"]
