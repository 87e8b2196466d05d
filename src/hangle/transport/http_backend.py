"""HTTP transport backend.

Each turn is one plain-text POST to the console endpoint; the response
body is the next command.
"""

from __future__ import annotations

import logging

import httpx

from hangle.domain.models import LOG_PREFIX
from hangle.transport.base import Transport, TransportError

logger = logging.getLogger(__name__)

_TEXT_HEADERS = {"Content-Type": "text/plain; charset=utf-8"}


class HttpTransport(Transport):
    """Exchanges payloads with the console over HTTP POST."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self._url

    async def connect(self) -> None:
        """Create the HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        )
        logger.info("Tunnel ready for %s", self._url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Tunnel closed")

    async def exchange(self, payload: str) -> str:
        """POST the payload and return the response body."""
        resp = await self._post(payload)
        return resp.text

    async def send_log(self, message: str) -> None:
        """POST ``__LOG <message>``; the response body is ignored."""
        await self._post(LOG_PREFIX + message)
        logger.debug("Forwarded log message: %s", message[:50])

    async def _post(self, content: str) -> httpx.Response:
        if self._client is None:
            raise TransportError("Tunnel is not connected", url=self._url)
        try:
            resp = await self._client.post(
                self._url,
                content=content.encode("utf-8"),
                headers=_TEXT_HEADERS,
            )
            resp.raise_for_status()
            return resp
        except httpx.HTTPError as e:
            raise TransportError(
                f"POST to {self._url} failed: {e}", url=self._url
            ) from e
