"""Interactive chat loop driving a ChatClient from the terminal."""

from __future__ import annotations

import sys
from collections.abc import Callable

from prompt_toolkit import PromptSession
from prompt_toolkit.history import DummyHistory

from .chat import ChatClient
from .domain.messages import Message, MessageStatus, TranslationPreference
from .logging import sanitize_error_message

HELP_TEXT = """\
Commands:
  /translation CODE   switch translation and reopen the session with the transcript
  /summary            summarize the conversation so far
  /reset              start over with an empty conversation
  /help               show this help
  /exit               quit"""


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class ChatRepl:
    """Keeps the local transcript and turns input lines into client calls."""

    def __init__(
        self,
        client: ChatClient,
        translation: TranslationPreference = TranslationPreference.ESV,
        write: Callable[[str], None] = _write_stdout,
    ):
        self.client = client
        self.translation = translation
        self.transcript: list[Message] = []
        self._write = write

    def start(self) -> None:
        self._open_session()

    def _open_session(self) -> bool:
        """Open a session in the current translation with the transcript so far."""
        try:
            self.client.initialize_chat(self.translation, self.transcript)
        except Exception as e:
            self._write(f"Error starting session: {sanitize_error_message(str(e))}\n")
            return False
        return True

    async def handle_line(self, line: str) -> bool:
        """Process one input line. Returns False when the loop should stop."""
        text = line.strip()
        if not text:
            return True

        if not text.startswith("/"):
            await self.send(text)
            return True

        command, _, args = text[1:].partition(" ")
        command = command.lower()
        args = args.strip()

        if command in ("exit", "quit"):
            return False
        if command == "help":
            self._write(HELP_TEXT + "\n")
        elif command == "reset":
            self.transcript.clear()
            self.client.reset_chat()
            self._write("Conversation cleared.\n")
        elif command == "summary":
            await self.summarize()
        elif command == "translation":
            self.switch_translation(args)
        else:
            self._write(f"Unknown command: /{command}. Type /help for commands.\n")
        return True

    async def send(self, text: str) -> None:
        # After /reset or a failed start, reopen in the chosen translation.
        if self.client.session is None and not self._open_session():
            self.transcript.append(Message.user(text, status=MessageStatus.ERROR))
            return

        user_index = len(self.transcript)
        self.transcript.append(Message.user(text))
        self.transcript.append(Message.assistant("", is_streaming=True))

        parts: list[str] = []

        def on_chunk(chunk: str) -> None:
            parts.append(chunk)
            self._write(chunk)

        def on_restart(attempt: int) -> None:
            parts.clear()
            self._write(f"\n[Connection interrupted, retrying (attempt {attempt})]\n")

        try:
            await self.client.send_message_stream(text, on_chunk, on_restart)
        except Exception as e:
            del self.transcript[user_index + 1]
            self.transcript[user_index] = Message.user(
                text, status=MessageStatus.ERROR
            )
            self._write(f"\nError: {sanitize_error_message(str(e))}\n")
            return

        self.transcript[user_index + 1] = Message.assistant("".join(parts))
        self._write("\n")

    async def summarize(self) -> None:
        try:
            summary = await self.client.generate_chat_summary(self.transcript)
        except Exception as e:
            self._write(f"Error generating summary: {sanitize_error_message(str(e))}\n")
            return
        self._write(summary + "\n")

    def switch_translation(self, code: str) -> None:
        if not code:
            self._write(f"Current translation: {self.translation.value}\n")
            return
        try:
            translation = TranslationPreference.parse(code)
        except ValueError as e:
            self._write(f"{e}\n")
            return
        self.translation = translation
        if not self._open_session():
            # Drop the old session so the next send reopens in the new translation.
            self.client.reset_chat()
            return
        self._write(f"Translation set to {translation.value}.\n")


async def repl_loop(repl: ChatRepl) -> None:
    """Read lines until /exit or EOF."""
    session: PromptSession[str] = PromptSession(
        # Conversations may be personal; keep them out of on-disk history.
        history=DummyHistory(),
    )
    repl.start()
    while True:
        try:
            line = await session.prompt_async("you> ")
        except (EOFError, KeyboardInterrupt):
            break
        if not await repl.handle_line(line):
            break
