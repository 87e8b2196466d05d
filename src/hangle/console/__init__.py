"""Operator console module for hangle.

The other end of the tunnel: an HTTP endpoint the bridge polls, and an
interactive prompt that feeds it commands.

Public API:
    CommandBroker -- Pairs operator commands with bridge results
    OperatorConsole -- Interactive prompt
    create_app -- FastAPI application for the bridge to poll
"""

from hangle.console.broker import CommandBroker

__all__ = ["CommandBroker", "OperatorConsole", "create_app"]


def __getattr__(name: str) -> object:
    """Lazy import for components that require external deps."""
    if name == "OperatorConsole":
        from hangle.console.prompt import OperatorConsole
        return OperatorConsole
    if name == "create_app":
        from hangle.console.server import create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
