"""Shared date/time utilities."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return a high-precision UTC timestamp with explicit ``Z`` marker.

    Format: ``2026-01-15T12:34:56.789012Z``
    """
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace(
        "+00:00", "Z"
    )
