"""Preferred key order per structured log event."""

from __future__ import annotations

DEFAULT_EVENT_KEY_ORDER: list[str] = ["ts_utc", "level", "logger"]

EVENT_KEY_ORDER: dict[str, list[str]] = {
    "app_start": ["ts_utc", "level", "version", "model", "translation", "log_file"],
    "app_stop": ["ts_utc", "level", "reason", "uptime_ms", "error_type", "error"],
    "chat_session_create": [
        "ts_utc",
        "level",
        "model",
        "translation",
        "temperature",
        "history_count",
    ],
    "chat_reset": ["ts_utc", "level", "had_session"],
    "chat_request": ["ts_utc", "level", "model", "input_chars", "max_attempts"],
    "chat_retry": [
        "ts_utc",
        "level",
        "operation",
        "attempt",
        "max_attempts",
        "delay_ms",
        "error_type",
        "error",
    ],
    "chat_response": [
        "ts_utc",
        "level",
        "model",
        "attempts",
        "fragments",
        "output_chars",
        "latency_ms",
    ],
    "chat_error": [
        "ts_utc",
        "level",
        "model",
        "attempts",
        "retryable",
        "latency_ms",
        "http_status",
        "error_type",
        "error",
    ],
    "summary_request": ["ts_utc", "level", "model", "message_count", "input_chars"],
    "summary_response": ["ts_utc", "level", "model", "latency_ms", "output_chars", "empty"],
    "summary_error": [
        "ts_utc",
        "level",
        "model",
        "latency_ms",
        "http_status",
        "error_type",
        "error",
    ],
    "provider_log": ["ts_utc", "level", "provider", "message"],
    "httpx_request": [
        "ts_utc",
        "level",
        "logger",
        "http_method",
        "http_url",
        "http_version",
        "http_status",
        "http_reason",
    ],
}

LOG_PATH_FIELDS = {"log_file", "logs_dir"}
