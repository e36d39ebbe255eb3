"""Serial port scan for NMEA receivers.

Tries each candidate baud rate on each serial port and keeps the ports on
which a checksum-valid NMEA sentence arrives within a short window.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from serial.tools import list_ports

from navlink.errors import TransportError
from navlink.nmea.dispatcher import NmeaDispatcher
from navlink.nmea.interpreter import NmeaInterpreter
from navlink.nmea.signals import SignalKind

__all__ = ["DetectedPort", "available_ports", "scan_ports"]

logger = logging.getLogger(__name__)

# --- Scan defaults ------------------------------------------------------------

_BAUD_RATES = (9600, 4800)
_WAIT = 1.7  # seconds to wait for the first valid sentence on a port

InterpreterFactory = Callable[[NmeaDispatcher], NmeaInterpreter]


@dataclass(frozen=True)
class DetectedPort:
    """A serial port with a talking NMEA receiver."""

    name: str
    baud: int


def available_ports() -> list[str]:
    """List the device names of the serial ports present on this machine."""
    return [port.device for port in list_ports.comports()]


def _default_interpreter(dispatcher: NmeaDispatcher) -> NmeaInterpreter:
    return NmeaInterpreter(dispatcher=dispatcher)


def _probe(
    interpreter: NmeaInterpreter,
    heard: threading.Event,
    name: str,
    baud: int,
    wait: float,
) -> bool:
    heard.clear()
    try:
        interpreter.start(name, baud)
    except TransportError as exc:
        logger.warning("Cannot open %s: %s", name, exc)
        return False
    try:
        return heard.wait(wait)
    finally:
        interpreter.stop()


def scan_ports(
    ports: Iterable[str] | None = None,
    baud_rates: Iterable[int] = _BAUD_RATES,
    wait: float = _WAIT,
    stop_on_first: bool = False,
    cancel: threading.Event | None = None,
    interpreter_factory: InterpreterFactory = _default_interpreter,
) -> list[DetectedPort]:
    """Find the serial ports on which an NMEA receiver is talking.

    Every baud rate is tried on every port, in order; a port already found
    at an earlier baud rate is not probed again.

    Args:
        ports: Device names to try (default: every port on the machine).
        baud_rates: Candidate baud rates (default: ``(9600, 4800)``).
        wait: Seconds to wait for a valid sentence on each port/baud pair.
        stop_on_first: Return as soon as one port is found.
        cancel: Set this event from another thread to end the scan early;
            the ports found so far are returned.
        interpreter_factory: Builds the interpreter used for probing.

    Returns:
        The ports found, in discovery order.
    """
    names = list(ports) if ports is not None else available_ports()
    heard = threading.Event()
    dispatcher = NmeaDispatcher()
    dispatcher.subscribe(SignalKind.RAW_SENTENCE, lambda _signal: heard.set())
    interpreter = interpreter_factory(dispatcher)

    logger.info("Scanning %d port(s)", len(names))
    found: list[DetectedPort] = []
    for baud in baud_rates:
        for name in names:
            if cancel is not None and cancel.is_set():
                logger.info("Port scan cancelled")
                return found
            if any(port.name == name for port in found):
                continue
            if _probe(interpreter, heard, name, baud, wait):
                logger.info("NMEA receiver found on %s at %d baud", name, baud)
                found.append(DetectedPort(name=name, baud=baud))
                if stop_on_first:
                    return found
    return found
