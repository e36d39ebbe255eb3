"""Tests for the JSON messages streamed to websocket clients."""

import json
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from navlink.errors import ConfigError, TransportError
from navlink.nmea.interpreter import NmeaInterpreter
from navlink.nmea.signals import Signal, SignalKind
from navlink.nmea.types import LinkQuality, Position, PositionUpdate
from server.formatters import format_error_message, format_position_message
from server.receiver import ReceiverSettings, load_settings
from tests.helpers import GGA_REFERENCE, RMC_REFERENCE, nmea


def test_rmc_position(client: TestClient, interpreter: NmeaInterpreter) -> None:
    with client.websocket_connect("/ws") as websocket:
        interpreter.receive(RMC_REFERENCE + "\r\n")
        data = websocket.receive_json()
    assert data["source"] == "RMC"
    assert data["fix"] == "A"
    assert data["lat"] == pytest.approx(48.1173)
    assert data["lon"] == pytest.approx(11.5166667)
    assert data["speed_kmh"] == pytest.approx(41.4848)
    assert data["timestamp"] == "2094-03-23T12:35:19+00:00"


def test_messages_follow_sentence_order(client: TestClient, interpreter: NmeaInterpreter) -> None:
    with client.websocket_connect("/ws") as websocket:
        interpreter.receive(GGA_REFERENCE + "\r\n" + nmea("GPHDT,274.07,T") + "\r\n")
        first = websocket.receive_json()
        second = websocket.receive_json()
    assert first["source"] == "GGA"
    assert first["satellite_count"] == 8
    assert second["source"] == "HDT"
    assert second["lat"] is None


def test_invalid_sentence_is_not_forwarded(client: TestClient, interpreter: NmeaInterpreter) -> None:
    with client.websocket_connect("/ws") as websocket:
        interpreter.receive(RMC_REFERENCE[:-2] + "00\r\n" + GGA_REFERENCE + "\r\n")
        assert websocket.receive_json()["source"] == "GGA"


def test_transport_error_message(client: TestClient, interpreter: NmeaInterpreter) -> None:
    with client.websocket_connect("/ws") as websocket:
        interpreter.dispatcher.emit(
            Signal(SignalKind.TRANSPORT_ERROR, TransportError("device unplugged"))
        )
        data = websocket.receive_json()
    assert data == {
        "type": "error",
        "error": "TransportError",
        "message": "device unplugged",
    }


class TestFormatPositionMessage:
    def test_all_fields(self):
        update = PositionUpdate(
            source="GGA",
            fix="A",
            position=Position(lat=1.5, lon=-2.5),
            altitude_m=100.0,
            timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            link_quality=LinkQuality.RTK,
            satellite_count=12,
            hdop=0.7,
        )
        data = json.loads(format_position_message(update))
        assert data["type"] == "position"
        assert data["lat"] == 1.5
        assert data["lon"] == -2.5
        assert data["timestamp"] == "2024-01-02T03:04:05+00:00"
        assert data["link_quality"] == 4
        assert data["pdop"] is None

    def test_empty_update(self):
        data = json.loads(format_position_message(PositionUpdate(source="GSV")))
        assert data["fix"] is None
        assert data["lat"] is None
        assert data["timestamp"] is None

    def test_error(self):
        data = json.loads(format_error_message(ConfigError("bad")))
        assert data["error"] == "ConfigError"


class TestLoadSettings:
    def test_defaults(self):
        assert load_settings({}) == ReceiverSettings(port=None, baud=4800)

    def test_port_and_baud(self):
        settings = load_settings({"NAVLINK_PORT": "/dev/ttyUSB0", "NAVLINK_BAUD": "9600"})
        assert settings == ReceiverSettings(port="/dev/ttyUSB0", baud=9600)

    @pytest.mark.parametrize("baud", ["fast", "0", "-4800"])
    def test_invalid_baud(self, baud):
        with pytest.raises(ConfigError):
            load_settings({"NAVLINK_BAUD": baud})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("NAVLINK_PORT", "COM3")
        monkeypatch.delenv("NAVLINK_BAUD", raising=False)
        assert load_settings().port == "COM3"
