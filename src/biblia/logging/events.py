"""Structured event emission and logging helpers."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from ..constants import APP_NAME, DATETIME_FORMAT_FILENAME, LOG_FILE_EXTENSION
from .formatter import StructuredTextFormatter
from .sanitization import sanitize_error_message
from .schema import LOG_PATH_FIELDS


def _to_log_safe(value: Any) -> Any:
    """Convert values to JSON-serializable, log-safe representations."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _to_log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_log_safe(v) for v in value]
    return str(value)


def _resolve_log_path(path_value: str) -> str:
    """Resolve a path-ish string to absolute form for log readability."""
    value = path_value.strip()
    if not value:
        return path_value
    return str(Path(value).expanduser().resolve())


def extract_http_error_context(error: BaseException) -> dict[str, Any]:
    """Extract safe HTTP context from an exception when available.

    ``google.genai.errors.APIError`` carries the status as ``code``; httpx
    errors expose it on ``response.status_code``.
    """
    context: dict[str, Any] = {}

    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None) if response is not None else None
    if status is None:
        status = getattr(error, "code", None)
    if status is None:
        status = getattr(error, "status_code", None)
    if isinstance(status, int) and not isinstance(status, bool):
        context["http_status"] = status

    if response is not None:
        reason = getattr(response, "reason_phrase", None)
        if reason:
            context["http_reason"] = str(reason)

    return context


def describe_error(error: BaseException) -> dict[str, Any]:
    """Return ``error_type``/``error`` fields with secrets redacted."""
    return {
        "error_type": type(error).__name__,
        "error": sanitize_error_message(str(error)),
    }


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event."""
    payload = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        if key in LOG_PATH_FIELDS and isinstance(value, str):
            value = _resolve_log_path(value)
        payload[key] = _to_log_safe(value)
    logging.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def before_sleep_log_event(
    *,
    operation: str,
    max_attempts: int,
    level: int = logging.WARNING,
):
    """Build a tenacity before_sleep callback that emits structured retry logs."""

    def _callback(retry_state: Any) -> None:
        try:
            outcome = getattr(retry_state, "outcome", None)
            next_action = getattr(retry_state, "next_action", None)
            if outcome is None or next_action is None:
                return

            sleep_sec = getattr(next_action, "sleep", None)
            payload: dict[str, Any] = {
                "operation": operation,
                "attempt": getattr(retry_state, "attempt_number", None),
                "max_attempts": max_attempts,
                "delay_ms": round(sleep_sec * 1000) if sleep_sec is not None else None,
            }

            if getattr(outcome, "failed", False):
                error = outcome.exception()
                if error is not None:
                    payload.update(describe_error(error))
                    payload.update(extract_http_error_context(error))

            log_event("chat_retry", level=level, **payload)
        except Exception:
            # Retry logging must never break request flow.
            return

    return _callback


def build_run_log_path(logs_dir: str) -> str:
    """Build a unique run log path in the configured logs directory."""
    logs_dir_path = Path(logs_dir).expanduser()
    logs_dir_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime(DATETIME_FORMAT_FILENAME)
    base_name = f"{APP_NAME}_{timestamp}"
    candidate = logs_dir_path / f"{base_name}{LOG_FILE_EXTENSION}"

    suffix = 1
    while candidate.exists():
        candidate = logs_dir_path / f"{base_name}_{suffix}{LOG_FILE_EXTENSION}"
        suffix += 1

    return str(candidate)


def setup_logging(log_file: Optional[str] = None) -> None:
    """Set up logging configuration."""
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_path), encoding="utf-8")
        handler.setFormatter(StructuredTextFormatter())
        logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
    else:
        logging.disable(logging.CRITICAL)
