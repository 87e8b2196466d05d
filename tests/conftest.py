"""Shared test fixtures for the hangle test suite.

Provides a populated evaluation environment, a scripted transport that
plays back console responses, and a mock broker for console tests.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from hangle.bridge.environment import Environment
from hangle.console.broker import CommandBroker
from hangle.domain.models import DISCONNECT
from hangle.transport.base import Transport


class Sample:
    """Plain object with instance attributes, for describe tests."""

    def __init__(self) -> None:
        self.count = 3
        self.label = "sample"
        self.enabled = True
        self.parent = None


# ---------------------------------------------------------------------------
# Environment Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def environment() -> Environment:
    """An environment with a few values of known shape."""
    return Environment(
        {
            "some_object": {"a": 1, "b": "x"},
            "sample": Sample(),
            "numbers": [1, 2, 3],
        }
    )


# ---------------------------------------------------------------------------
# Transport Fixtures
# ---------------------------------------------------------------------------


def scripted_transport(*responses: str) -> AsyncMock:
    """A mock Transport whose exchange() returns ``responses`` in order."""
    transport = AsyncMock(spec=Transport)
    transport.exchange.side_effect = list(responses)
    return transport


@pytest.fixture
def make_transport():
    """Factory for scripted transports: ``make_transport("1+1", DISCONNECT)``."""
    return scripted_transport


@pytest.fixture
def disconnecting_transport() -> AsyncMock:
    """A transport whose console disconnects on the first turn."""
    return scripted_transport(DISCONNECT)


# ---------------------------------------------------------------------------
# Console Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_broker() -> AsyncMock:
    """A mock CommandBroker for testing the prompt without a bridge."""
    broker = AsyncMock(spec=CommandBroker)
    broker.submit.return_value = "2"
    return broker
