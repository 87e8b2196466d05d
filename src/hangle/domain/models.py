"""Core domain models for the hangle system.

These models represent the data flowing over the tunnel: the reserved
control tokens, the classified commands the bridge receives, the
property descriptors it reports for introspection requests, and the
bookkeeping of a bridge session.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Reserved tokens
# ---------------------------------------------------------------------------

READY = "__READY"
KEEPALIVE = "__KEEPALIVE"
USER_INPUT_TIMEOUT = "__USER_INPUT_TIMEOUT"
DISCONNECT = "__DISCONNECT"
DESCRIBE_PREFIX = "__DESCRIBE "
LOG_PREFIX = "__LOG "

# Payload sent for a describe request whose target cannot be introspected
EMPTY_DESCRIPTION = "[]"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class LoopState(str, enum.Enum):
    """Where the bridge loop currently is in its turn cycle."""

    READY = "ready"  # Nothing sent yet
    AWAITING_COMMAND = "awaiting_command"  # Request in flight
    EVALUATING = "evaluating"
    DESCRIBING = "describing"
    KEEPALIVE = "keepalive"  # Console had no command for us
    DISCONNECTED = "disconnected"  # Terminal


# ---------------------------------------------------------------------------
# Command Models (discriminated union)
# ---------------------------------------------------------------------------


class Disconnect(BaseModel):
    """The console ended the session."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["disconnect"] = "disconnect"


class Timeout(BaseModel):
    """The console had no operator input before its long-poll expired."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["timeout"] = "timeout"


class Describe(BaseModel):
    """Request to list the own members of a value and their kinds."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["describe"] = "describe"
    target: str = Field(description="Expression naming the value to introspect")


class Evaluate(BaseModel):
    """Arbitrary text to evaluate against the bridge environment."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["evaluate"] = "evaluate"
    expression: str = Field(description="Source text received from the console")


Command = Annotated[
    Union[Disconnect, Timeout, Describe, Evaluate],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Introspection Models
# ---------------------------------------------------------------------------


class PropertyDescriptor(BaseModel):
    """One member of a described value.

    Serialized as ``{"name": ..., "type": ...}`` on the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Member name")
    kind: str = Field(alias="type", description="Run-time kind, e.g. 'number'")


# ---------------------------------------------------------------------------
# Session Models
# ---------------------------------------------------------------------------


class Turn(BaseModel):
    """A single send/receive exchange between bridge and console."""

    model_config = ConfigDict(frozen=True)

    outgoing_payload: str
    incoming_command: str


class SessionSummary(BaseModel):
    """Counters accumulated by the bridge loop over one session."""

    turns: int = Field(default=0, ge=0, description="Exchanges completed")
    evaluations: int = Field(default=0, ge=0)
    describes: int = Field(default=0, ge=0)
    keepalives: int = Field(default=0, ge=0)
    state: LoopState = Field(default=LoopState.READY)
