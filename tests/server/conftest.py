"""Pytest fixtures for server module testing."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from navlink.nmea.interpreter import NmeaInterpreter
from server.main import app


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """Run the app without a serial receiver; NMEA is fed by the test."""
    monkeypatch.delenv("NAVLINK_PORT", raising=False)
    monkeypatch.delenv("NAVLINK_BAUD", raising=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def interpreter(client: TestClient) -> NmeaInterpreter:
    """The running interpreter; requires the app lifespan to be active."""
    return app.state.interpreter
