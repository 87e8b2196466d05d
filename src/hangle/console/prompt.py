"""Interactive operator prompt.

Reads commands from the terminal, sends them through the broker and
prints the bridge's answer. Supports:

- ``exit`` to end the session
- ``command >>>file`` to write the result to a file instead of printing it
- tab completion of ``value.attr`` chains, answered by ``__DESCRIBE``
- a persistent history file
- a prompt counting down the remaining session time
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections.abc import AsyncGenerator, Iterable
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout
from pydantic import TypeAdapter, ValidationError

from hangle.console.broker import CommandBroker
from hangle.domain.models import DESCRIBE_PREFIX, PropertyDescriptor

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"

# Characters that end a completion chain: "a.b" in "print(a.b" is one chain
CHAIN_SEPARATORS = " \t!@#$%^&*()+-={}|\\:;<>?,/~"

# "cmd >>>out.txt", "cmd >>>'my out.txt'" or 'cmd >>>"it\'s.txt"'
_REDIRECT_RE = re.compile(
    r"""(.*)>>>(?:([a-zA-Z0-9./\\:_-]+)|'([a-zA-Z0-9./\\:_ -]+)'|"([a-zA-Z0-9./\\:_ '-]+)")"""
)
# Stable prefix the operator won't complete, then the partial member name
_CHAIN_RE = re.compile(r"(.+)\.(.*)")

_DESCRIPTORS = TypeAdapter(list[PropertyDescriptor])


def split_output_file(line: str) -> tuple[str, str] | None:
    """Split ``command >>>file`` into ``(command, file)``.

    Returns None if the line has no output redirection.
    """
    match = _REDIRECT_RE.fullmatch(line)
    if not match:
        return None
    command, bare, single_quoted, double_quoted = match.groups()
    return command, bare or single_quoted or double_quoted


def format_duration(seconds: float) -> str:
    """Format a duration as ``MM:SS``."""
    return f"{int(seconds // 60):02d}:{int(seconds) % 60:02d}"


def word_before_cursor(text: str, separators: str) -> str:
    """Return the trailing part of ``text`` after the last separator."""
    cut = max((text.rfind(sep) for sep in separators), default=-1)
    return text[cut + 1:]


def split_chain(before_cursor: str) -> tuple[str, str] | None:
    """Split the chain ending the text into ``(value, partial member)``."""
    match = _CHAIN_RE.fullmatch(word_before_cursor(before_cursor, CHAIN_SEPARATORS))
    if not match:
        return None
    return match.group(1), match.group(2)


class DescribeCompleter(Completer):
    """Completes ``value.member`` chains with the members the bridge reports."""

    def __init__(self, console: OperatorConsole) -> None:
        self._console = console

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        # Members come from the bridge, so only the async path can answer
        return []

    async def get_completions_async(
        self, document: Document, complete_event: CompleteEvent
    ) -> AsyncGenerator[Completion, None]:
        chain = split_chain(document.text_before_cursor)
        if chain is None:
            return
        partial = chain[1]
        for prop in await self._console.complete(document.text_before_cursor):
            yield Completion(prop.name, start_position=-len(partial), display_meta=prop.kind)


class OperatorConsole:
    """Terminal front end driving the bridge through a CommandBroker."""

    def __init__(
        self,
        broker: CommandBroker,
        history_path: Path | None = None,
        session_limit: float = 30 * 60,
    ) -> None:
        self._broker = broker
        self._history_path = history_path
        self._session_limit = session_limit
        self._deadline: float | None = None
        # Describe results per chain prefix; stale once any command runs
        self._properties: dict[str, list[PropertyDescriptor]] = {}

    def prompt(self) -> str:
        """Prompt text, prefixed with the remaining session time."""
        if self._deadline is None:
            return "> "
        remaining = self._deadline - time.monotonic()
        if remaining <= 0:
            return "> "
        return f"{format_duration(remaining)}> "

    def history(self) -> History:
        """Line history, kept in the history file when one is configured."""
        if self._history_path is None:
            return InMemoryHistory()
        return FileHistory(str(self._history_path))

    async def handle_line(self, line: str) -> bool:
        """Run one operator line. Returns False once the session is over."""
        if not line.strip():
            return True

        if line == EXIT_COMMAND:
            await self._broker.disconnect()
            return False

        redirect = split_output_file(line)
        if redirect is not None:
            command, output_file = redirect
            response = await self._broker.submit(command)
            try:
                Path(output_file).write_text(response + "\n", encoding="utf-8")
            except OSError as e:
                print(e)
            else:
                print("Wrote output to file", output_file)
        else:
            print(await self._broker.submit(line))

        # The command may have changed remote state
        self._properties.clear()
        return True

    async def complete(self, before_cursor: str) -> list[PropertyDescriptor]:
        """Suggest members for the ``value.partial`` chain ending the text.

        Members are fetched with ``__DESCRIBE value`` once per chain prefix
        and filtered by case-insensitive substring match on ``partial``.
        """
        chain = split_chain(before_cursor)
        if chain is None:
            return []
        context, partial = chain

        properties = self._properties.get(context)
        if properties is None:
            # A cancelled completion must still collect its own result
            raw = await asyncio.shield(self._broker.submit(DESCRIBE_PREFIX + context))
            try:
                properties = _DESCRIPTORS.validate_json(raw)
            except ValidationError:
                logger.debug("Unparseable description for %s: %s", context, raw[:100])
                properties = []
            self._properties[context] = properties

        needle = partial.lower()
        return [p for p in properties if needle in p.name.lower()]

    async def run(self) -> None:
        """Wait for the bridge, then read and run commands until ``exit``."""
        session: PromptSession[str] = PromptSession(
            self.prompt,
            history=self.history(),
            completer=DescribeCompleter(self),
            complete_while_typing=False,
            refresh_interval=1.0,
        )

        with patch_stdout():
            await self._broker.wait_ready()
            self._deadline = time.monotonic() + self._session_limit

            while True:
                try:
                    line = await session.prompt_async()
                except KeyboardInterrupt:
                    continue
                except EOFError:
                    line = EXIT_COMMAND
                if not await self.handle_line(line):
                    break
