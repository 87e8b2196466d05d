"""Command-line interface for hangle.

Provides the entry points for running the bridge (the side that
evaluates commands) and the operator console (the side that types them).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="hangle",
        description="Remote evaluation bridge tunneled over HTTP",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/hangle.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    bridge_parser = subparsers.add_parser("bridge", help="Poll the console and evaluate its commands")
    bridge_parser.add_argument(
        "--url", type=str, default=None,
        help="Console endpoint URL (overrides bridge.endpoint_url)",
    )

    console_parser = subparsers.add_parser("console", help="Serve the operator console")
    console_parser.add_argument(
        "--port", type=int, default=None,
        help="Port to listen on (overrides console.port)",
    )

    return parser.parse_args(argv)


async def _run_bridge(settings) -> None:
    """Build the environment and transport, then run the bridge loop."""
    from hangle.bridge.environment import Environment
    from hangle.bridge.loop import BridgeLoop
    from hangle.transport.http_backend import HttpTransport

    environment = Environment({"settings": settings})
    environment.preload(settings.bridge.preload_modules)

    transport = HttpTransport(
        url=settings.bridge.endpoint_url,
        timeout=settings.bridge.request_timeout,
    )

    loop = BridgeLoop(transport=transport, environment=environment)
    summary = await loop.run()
    print(f"Session ended after {summary.turns} turns ({summary.evaluations} evaluations)")


async def _run_console(settings) -> None:
    """Serve the long-poll endpoint and run the operator prompt beside it."""
    import uvicorn

    from hangle.console.broker import CommandBroker
    from hangle.console.prompt import OperatorConsole
    from hangle.console.server import create_app

    cfg = settings.console
    broker = CommandBroker(input_timeout=cfg.input_timeout)
    server = uvicorn.Server(
        uvicorn.Config(
            create_app(broker),
            host=cfg.host,
            port=cfg.port,
            log_level="warning",
            timeout_graceful_shutdown=5,
        )
    )
    serve_task = asyncio.create_task(server.serve())
    print(f"Waiting for connection on port {cfg.port}")

    console = OperatorConsole(
        broker,
        history_path=cfg.history_file,
        session_limit=cfg.session_limit,
    )
    try:
        await console.run()
    finally:
        server.should_exit = True
        await serve_task


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the hangle CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from hangle.config.settings import load_settings
    from hangle.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "bridge":
        if args.url:
            settings.bridge.endpoint_url = args.url
        logger.info("Starting bridge against %s", settings.bridge.endpoint_url)
        asyncio.run(_run_bridge(settings))

    elif args.command == "console":
        if args.port:
            settings.console.port = args.port
        logger.info("Starting operator console")
        asyncio.run(_run_console(settings))


if __name__ == "__main__":
    main()
