"""Domain models for hangle.

This package contains the reserved protocol tokens and the data
structures exchanged between the bridge and the console. All models use
Pydantic v2 for validation and serialization.
"""

from hangle.domain.models import (
    DESCRIBE_PREFIX,
    DISCONNECT,
    EMPTY_DESCRIPTION,
    KEEPALIVE,
    LOG_PREFIX,
    READY,
    USER_INPUT_TIMEOUT,
    Command,
    Describe,
    Disconnect,
    Evaluate,
    LoopState,
    PropertyDescriptor,
    SessionSummary,
    Timeout,
    Turn,
)

__all__ = [
    "DESCRIBE_PREFIX",
    "DISCONNECT",
    "EMPTY_DESCRIPTION",
    "KEEPALIVE",
    "LOG_PREFIX",
    "READY",
    "USER_INPUT_TIMEOUT",
    "Command",
    "Describe",
    "Disconnect",
    "Evaluate",
    "LoopState",
    "PropertyDescriptor",
    "SessionSummary",
    "Timeout",
    "Turn",
]
