"""Classification of text received from the console.

Every response body maps to exactly one command variant. Sentinels are
matched first; anything that is neither a sentinel nor a well-formed
describe request is handed to the evaluator.
"""

from __future__ import annotations

import re

from hangle.domain.models import (
    DISCONNECT,
    USER_INPUT_TIMEOUT,
    Command,
    Describe,
    Disconnect,
    Evaluate,
    Timeout,
)

# Single-line, non-empty target after the prefix
_DESCRIBE_RE = re.compile(r"__DESCRIBE (.+)")


def classify_command(text: str) -> Command:
    """Parse a response body into a command variant.

    Priority: timeout sentinel, disconnect sentinel, describe request,
    then plain evaluation as the fallback.
    """
    if text == USER_INPUT_TIMEOUT:
        return Timeout()
    if text == DISCONNECT:
        return Disconnect()
    match = _DESCRIBE_RE.fullmatch(text)
    if match:
        return Describe(target=match.group(1))
    return Evaluate(expression=text)
