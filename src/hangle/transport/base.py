"""Abstract base class for the bridge's tunnel to the console.

The bridge only ever needs two operations from its transport: a single
request/response exchange per turn, and a fire-and-forget diagnostic
message. Keeping them behind an interface lets the loop be driven by a
scripted transport in tests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from hangle.errors import HangleError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Abstract interface for exchanging payloads with the console.

    Example usage::

        async with HttpTransport("http://console.local:8080/") as tunnel:
            command = await tunnel.exchange("__READY")
    """

    @abstractmethod
    async def connect(self) -> None:
        """Prepare the transport for use.

        Raises:
            TransportError: If the transport cannot be set up.
        """
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release transport resources. Safe to call more than once."""
        ...

    @abstractmethod
    async def exchange(self, payload: str) -> str:
        """Send the current payload and return the next command.

        This call waits for as long as the console takes to answer; the
        console, not the transport, decides when a long-poll times out.

        Args:
            payload: The previous turn's result or a control token.

        Returns:
            The console's response body.

        Raises:
            TransportError: If the request fails or is not answered with
                a success status.
        """
        ...

    @abstractmethod
    async def send_log(self, message: str) -> None:
        """Forward a diagnostic message to the console.

        The message travels in its own request and is not part of the
        turn sequence; the console answers it without issuing a command.

        Raises:
            TransportError: If the request fails.
        """
        ...

    async def __aenter__(self) -> Transport:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


class TransportError(HangleError):
    """Raised when the tunnel to the console fails."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url
