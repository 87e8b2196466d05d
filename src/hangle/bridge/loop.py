"""The bridge loop that drives the remote evaluation session.

Sends the current value to the console, classifies the command that
comes back, executes it against the environment and carries the result
into the next turn until the console disconnects.
"""

from __future__ import annotations

import asyncio
import logging

from hangle.bridge.commands import classify_command
from hangle.bridge.environment import Environment
from hangle.domain.models import (
    KEEPALIVE,
    READY,
    Command,
    Describe,
    Disconnect,
    LoopState,
    SessionSummary,
    Timeout,
    Turn,
)
from hangle.errors import HangleError
from hangle.transport.base import Transport

logger = logging.getLogger(__name__)


class BridgeLoop:
    """Long-poll read-eval-print loop over a transport.

    Coordinates: send -> receive -> classify -> execute -> repeat

    Errors raised by evaluated code never leave the loop; they become the
    next payload. Transport errors are not handled and end the run.
    """

    def __init__(
        self,
        transport: Transport,
        environment: Environment | None = None,
    ) -> None:
        self._transport = transport
        self._environment = environment if environment is not None else Environment()
        self._state = LoopState.READY
        self._pending_logs: set[asyncio.Task[None]] = set()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._environment.setdefault("log", self.log)

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def environment(self) -> Environment:
        return self._environment

    async def run(self) -> SessionSummary:
        """Run turns until the console sends the disconnect sentinel.

        Raises:
            TransportError: If an exchange with the console fails.
        """
        summary = SessionSummary()
        payload = READY
        self._loop = asyncio.get_running_loop()

        logger.info("Bridge loop starting")

        async with self._transport:
            try:
                while self._state != LoopState.DISCONNECTED:
                    self._state = LoopState.AWAITING_COMMAND
                    response = await self._transport.exchange(payload)
                    summary.turns += 1

                    turn = Turn(outgoing_payload=payload, incoming_command=response)
                    logger.debug(
                        "Turn %d | sent: %s | received: %s",
                        summary.turns,
                        turn.outgoing_payload[:100],
                        turn.incoming_command[:100],
                    )

                    # Off the event loop so evaluated code can block on log()
                    payload = await self._loop.run_in_executor(
                        None, self._execute, classify_command(response), summary
                    )
            finally:
                await self._drain_logs()
                self._loop = None

        summary.state = self._state
        logger.info(
            "Bridge loop finished: turns=%d, evaluations=%d, describes=%d",
            summary.turns, summary.evaluations, summary.describes,
        )
        return summary

    def log(self, message: object) -> None:
        """Forward a message to the console.

        Registered as ``log`` in the environment so evaluated code can
        report progress while a command is still running. Called from
        evaluated code, it returns once the console has the message, so
        logs always arrive before the result of the command that sent
        them. Called on the event loop itself, it schedules the send and
        returns immediately. Delivery failures are logged, not raised.

        Raises:
            HangleError: If the loop is not running.
        """
        if self._loop is None or self._loop.is_closed():
            raise HangleError("Bridge loop is not running")

        coro = self._transport.send_log(str(message))
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self._loop:
            task = self._loop.create_task(coro)
            self._pending_logs.add(task)
            task.add_done_callback(self._log_sent)
            return

        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            future.result()
        except Exception as e:
            logger.warning("Failed to forward log message: %s", e)

    def _execute(self, command: Command, summary: SessionSummary) -> str:
        """Handle one classified command and return the next payload."""
        if isinstance(command, Disconnect):
            self._state = LoopState.DISCONNECTED
            logger.info("Console requested disconnect")
            return ""
        if isinstance(command, Timeout):
            self._state = LoopState.KEEPALIVE
            summary.keepalives += 1
            return KEEPALIVE
        if isinstance(command, Describe):
            self._state = LoopState.DESCRIBING
            summary.describes += 1
            return self._environment.describe(command.target)
        self._state = LoopState.EVALUATING
        summary.evaluations += 1
        return self._environment.evaluate(command.expression)

    def _log_sent(self, task: asyncio.Task[None]) -> None:
        self._pending_logs.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning("Failed to forward log message: %s", task.exception())

    async def _drain_logs(self) -> None:
        """Wait for log messages still in flight."""
        if self._pending_logs:
            await asyncio.gather(*list(self._pending_logs), return_exceptions=True)
