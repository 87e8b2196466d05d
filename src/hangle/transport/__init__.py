"""Transport module for hangle.

Carries the bridge's payloads to the console and brings back commands.

Public API:
    Transport -- Abstract base class
    TransportError -- Raised when the tunnel fails
    HttpTransport -- Plain-text HTTP POST backend
"""

from hangle.transport.base import Transport, TransportError

__all__ = ["Transport", "TransportError", "HttpTransport"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "HttpTransport":
        from hangle.transport.http_backend import HttpTransport
        return HttpTransport
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
