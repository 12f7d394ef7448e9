"""CLI bootstrap entry point for Biblia."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from dataclasses import replace

from . import __version__
from .config import ChatSettings
from .constants import DEFAULT_LOGS_DIR
from .domain.messages import TranslationPreference
from .errors import ConfigurationError
from .keys.loader import KeyConfig
from .logging import (
    build_run_log_path,
    log_event,
    sanitize_error_message,
    setup_logging,
)
from .repl import ChatRepl, repl_loop
from .runtime import create_client

__all__ = ["build_parser", "main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="biblia",
        description="Biblia - scripture-grounded Bible study chat",
    )
    parser.add_argument(
        "-t",
        "--translation",
        default=TranslationPreference.default().value,
        help="Bible translation code (default: %(default)s)",
    )
    parser.add_argument("-m", "--model", help="Model name (overrides BIBLIA_MODEL)")
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-l", "--log", help="Path to log file (logging is off if omitted)")
    log_group.add_argument(
        "--log-dir",
        nargs="?",
        const=DEFAULT_LOGS_DIR,
        help="Write a timestamped log file into this directory (default: %(const)s)",
    )
    parser.add_argument(
        "--key-file",
        help="JSON file holding the API key (read with --key-name)",
    )
    parser.add_argument(
        "--key-name",
        default="gemini",
        help="Key inside --key-file, dot notation allowed (default: %(default)s)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the Biblia CLI."""
    args = build_parser().parse_args(argv)
    app_started = time.perf_counter()

    try:
        translation = TranslationPreference.parse(args.translation)
        settings = ChatSettings.from_env()
        if args.model:
            settings = replace(settings, model=args.model)

        key_config: KeyConfig | None = None
        if args.key_file:
            key_config = {"type": "json", "path": args.key_file, "key": args.key_name}

        log_file = args.log
        if args.log_dir:
            log_file = build_run_log_path(args.log_dir)
        setup_logging(log_file)
        client = create_client(settings, key_config)
    except (ConfigurationError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    log_event(
        "app_start",
        version=__version__,
        model=settings.model,
        translation=translation.value,
        log_file=log_file,
    )

    print(f"Biblia {__version__} | {settings.model} | {translation.value}")
    print("Type /help for commands, /exit to quit.")

    reason = "user_exit"
    exit_code = 0
    try:
        asyncio.run(repl_loop(ChatRepl(client, translation)))
    except KeyboardInterrupt:
        reason = "interrupted"
    except Exception as e:
        reason = "error"
        exit_code = 1
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason=reason,
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
            error_type=type(e).__name__,
            error=sanitize_error_message(str(e)),
        )
        print(f"Error: {sanitize_error_message(str(e))}")
        sys.exit(exit_code)

    log_event(
        "app_stop",
        reason=reason,
        uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
    )
