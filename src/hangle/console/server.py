"""FastAPI HTTP server the bridge polls.

Every request body is a result, a keepalive or a log line from the
bridge; every response body is the next command for it.

    GET  /health   -> {"status": "ok", "pending_commands": 0}
    POST /         <- plain text payload, -> plain text command
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from hangle import __version__
from hangle.console.broker import CommandBroker

logger = logging.getLogger(__name__)


class ConsoleStatus(BaseModel):
    status: str = "ok"
    pending_commands: int = 0


def create_app(broker: CommandBroker) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="hangle console",
        description="Long-poll endpoint serving operator commands to the bridge",
        version=__version__,
    )

    app.state.broker = broker

    @app.get("/health")
    async def health_check() -> ConsoleStatus:
        return ConsoleStatus(pending_commands=app.state.broker.pending_commands)

    @app.post("/", response_class=PlainTextResponse)
    async def exchange(request: Request) -> str:
        body = (await request.body()).decode("utf-8")
        return await app.state.broker.handle_post(body)

    return app
