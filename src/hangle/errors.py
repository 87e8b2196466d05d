"""Exception hierarchy shared across hangle packages."""

from __future__ import annotations


class HangleError(Exception):
    """Base class for errors raised by hangle itself."""
