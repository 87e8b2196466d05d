"""Bridge module for hangle.

Contains the long-poll loop that fetches commands from the console,
classifies them, and evaluates or describes them against a local
environment.

Public API:
    BridgeLoop -- The turn-taking loop
    Environment -- Names commands are evaluated against
    classify_command -- Response body to command variant
"""

from hangle.bridge.commands import classify_command
from hangle.bridge.environment import Environment
from hangle.bridge.loop import BridgeLoop

__all__ = ["BridgeLoop", "Environment", "classify_command"]
