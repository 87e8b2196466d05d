"""Tests for the Transport abstract base class."""

from __future__ import annotations

import pytest

from hangle.errors import HangleError
from hangle.transport.base import Transport, TransportError


class TestTransportInterface:
    def test_cannot_instantiate_abstract_class(self) -> None:
        """Transport should not be instantiable directly."""
        with pytest.raises(TypeError):
            Transport()  # type: ignore[abstract]

    def test_transport_error(self) -> None:
        """TransportError should store the URL it failed on."""
        error = TransportError("connection refused", url="http://console/")
        assert str(error) == "connection refused"
        assert error.url == "http://console/"
        assert isinstance(error, HangleError)

    def test_lazy_http_transport_export(self) -> None:
        import hangle.transport
        from hangle.transport.http_backend import HttpTransport

        assert hangle.transport.HttpTransport is HttpTransport
