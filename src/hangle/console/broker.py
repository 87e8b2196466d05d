"""Pairs operator commands with bridge results.

The bridge never receives a request from us; it only ever answers. So
every command the operator types waits in a queue until the bridge's
next POST picks it up, and the result arrives as the body of the POST
after that.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from hangle.domain.models import DISCONNECT, KEEPALIVE, LOG_PREFIX, USER_INPUT_TIMEOUT

logger = logging.getLogger(__name__)


class CommandBroker:
    """Queues commands for the bridge and hands results back to the operator.

    Example usage::

        broker = CommandBroker(input_timeout=45.0)
        await broker.wait_ready()          # bridge sent __READY
        result = await broker.submit("1 + 1")
        await broker.disconnect()
    """

    def __init__(
        self,
        input_timeout: float = 45.0,
        echo: Callable[[str], None] = print,
    ) -> None:
        self._input_timeout = input_timeout
        self._echo = echo
        self._commands: asyncio.Queue[str] = asyncio.Queue()
        self._results: asyncio.Queue[str] = asyncio.Queue()

    @property
    def pending_commands(self) -> int:
        """Commands queued but not yet collected by the bridge."""
        return self._commands.qsize()

    async def handle_post(self, body: str) -> str:
        """Process one request body from the bridge and return the reply.

        ``__LOG`` messages are echoed and answered with an empty body
        without handing out a command, since the bridge is still busy.
        Keepalives carry no result. Anything else is the result of the
        previous command. The reply is the next queued command, or the
        timeout sentinel if the operator typed nothing in time.
        """
        if body.startswith(LOG_PREFIX):
            self._echo(body[len(LOG_PREFIX):])
            return ""
        if body != KEEPALIVE:
            await self._results.put(body)

        try:
            command = await asyncio.wait_for(self._commands.get(), self._input_timeout)
        except asyncio.TimeoutError:
            return USER_INPUT_TIMEOUT
        self._commands.task_done()
        logger.debug("Handing command to bridge: %s", command[:100])
        return command

    async def wait_ready(self) -> str:
        """Wait for the bridge's first POST and return its body."""
        ready = await self._results.get()
        logger.info("Bridge connected")
        return ready

    async def submit(self, command: str) -> str:
        """Queue a command and wait for the bridge to return its result."""
        await self._commands.put(command)
        return await self._results.get()

    async def disconnect(self, timeout: float = 5.0) -> None:
        """Queue the disconnect sentinel and wait for the bridge to collect it."""
        await self._commands.put(DISCONNECT)
        try:
            await asyncio.wait_for(self._commands.join(), timeout)
        except asyncio.TimeoutError:
            logger.warning("Bridge did not collect disconnect within %.1fs", timeout)
