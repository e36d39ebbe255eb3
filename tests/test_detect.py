"""Tests for serial port detection."""

import threading
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from navlink import detect
from navlink.detect import DetectedPort, available_ports, scan_ports
from navlink.errors import TransportError
from navlink.nmea.signals import Signal, SignalKind
from tests.helpers import RMC_REFERENCE


class FakeInterpreter:
    """Stands in for NmeaInterpreter; "hears" a sentence on chosen ports."""

    def __init__(self, dispatcher, talking, unavailable=()):
        self.dispatcher = dispatcher
        self.talking = set(talking)
        self.unavailable = set(unavailable)
        self.started = []
        self.stopped = 0

    def start(self, port, baud):
        if port in self.unavailable:
            raise TransportError(f"Cannot open {port}")
        self.started.append((port, baud))
        if (port, baud) in self.talking:
            self.dispatcher.emit(Signal(SignalKind.RAW_SENTENCE, RMC_REFERENCE))

    def stop(self):
        self.stopped += 1


@pytest.fixture
def fake_interpreter():
    """Returns a SimpleNamespace with a factory and the interpreter it built."""
    state = SimpleNamespace(interpreter=None, talking=set(), unavailable=set())

    def factory(dispatcher):
        state.interpreter = FakeInterpreter(dispatcher, state.talking, state.unavailable)
        return state.interpreter

    state.factory = factory
    return state


class TestScanPorts:
    def test_finds_talking_port(self, fake_interpreter):
        fake_interpreter.talking.add(("COM4", 4800))
        found = scan_ports(["COM3", "COM4"], wait=0.01, interpreter_factory=fake_interpreter.factory)
        assert found == [DetectedPort(name="COM4", baud=4800)]

    def test_tries_every_baud_on_every_port(self, fake_interpreter):
        scan_ports(["COM3", "COM4"], wait=0.01, interpreter_factory=fake_interpreter.factory)
        assert fake_interpreter.interpreter.started == [
            ("COM3", 9600),
            ("COM4", 9600),
            ("COM3", 4800),
            ("COM4", 4800),
        ]
        assert fake_interpreter.interpreter.stopped == 4

    def test_found_port_is_not_probed_again(self, fake_interpreter):
        fake_interpreter.talking.add(("COM3", 9600))
        found = scan_ports(["COM3"], wait=0.01, interpreter_factory=fake_interpreter.factory)
        assert found == [DetectedPort(name="COM3", baud=9600)]
        assert fake_interpreter.interpreter.started == [("COM3", 9600)]

    def test_stop_on_first(self, fake_interpreter):
        fake_interpreter.talking.update({("COM3", 9600), ("COM4", 9600)})
        found = scan_ports(
            ["COM3", "COM4"],
            wait=0.01,
            stop_on_first=True,
            interpreter_factory=fake_interpreter.factory,
        )
        assert found == [DetectedPort(name="COM3", baud=9600)]

    def test_unavailable_port_is_skipped(self, fake_interpreter):
        fake_interpreter.unavailable.add("COM3")
        fake_interpreter.talking.add(("COM4", 9600))
        found = scan_ports(["COM3", "COM4"], wait=0.01, interpreter_factory=fake_interpreter.factory)
        assert found == [DetectedPort(name="COM4", baud=9600)]

    def test_cancel(self, fake_interpreter):
        cancel = threading.Event()
        cancel.set()
        found = scan_ports(["COM3"], wait=0.01, cancel=cancel, interpreter_factory=fake_interpreter.factory)
        assert found == []
        assert fake_interpreter.interpreter.started == []

    def test_defaults_to_machine_ports(self, fake_interpreter, monkeypatch):
        monkeypatch.setattr(detect, "available_ports", MagicMock(return_value=["ttyS0"]))
        scan_ports(baud_rates=[4800], wait=0.01, interpreter_factory=fake_interpreter.factory)
        assert fake_interpreter.interpreter.started == [("ttyS0", 4800)]


def test_available_ports(monkeypatch):
    ports = [SimpleNamespace(device="/dev/ttyUSB0"), SimpleNamespace(device="/dev/ttyS0")]
    monkeypatch.setattr(detect.list_ports, "comports", MagicMock(return_value=ports))
    assert available_ports() == ["/dev/ttyUSB0", "/dev/ttyS0"]
