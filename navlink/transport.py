"""SerialTransport: pyserial-backed byte transport for GPS receivers.

Both protocols run over the same kind of link: an RS-232 or USB serial
port, 8N1. NMEA receivers usually talk at 4800 baud, Garmin track
transfers at 9600. Every pyserial failure is re-raised as
``navlink.errors.TransportError`` so callers never have to tell transport
problems apart from protocol errors by exception type.
"""

import logging
from types import TracebackType

import serial

from navlink.errors import TransportError

__all__ = ["SerialTransport"]

logger = logging.getLogger(__name__)

# --- Serial defaults ----------------------------------------------------------

_BAUD = 4800
_TIMEOUT = 0.1  # read timeout; bounds how long read() blocks with no data


class SerialTransport:
    """Context manager owning one open serial port.

    Usage::

        with SerialTransport("/dev/ttyUSB0", 9600) as transport:
            transport.write(b"...")
            data = transport.read()

    ``open()`` and ``close()`` may also be called directly; ``close()`` is
    idempotent.

    Args:
        port: Device name (e.g. ``"/dev/ttyUSB0"`` or ``"COM3"``).
        baud: Baud rate (default: ``4800``).
        timeout: Read timeout in seconds (default: ``0.1``).
    """

    def __init__(
        self,
        port: str | None = None,
        baud: int = _BAUD,
        timeout: float = _TIMEOUT,
    ) -> None:
        self._port = port
        self._baud = baud
        self._timeout = timeout
        self._serial: serial.Serial | None = None

    @property
    def port(self) -> str | None:
        return self._port

    @property
    def baud(self) -> int:
        return self._baud

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self, port: str | None = None, baud: int | None = None) -> None:
        """Open the port, optionally overriding the constructor settings.

        Raises:
            TransportError: If no port was given or pyserial cannot open it.
        """
        if port is not None:
            self._port = port
        if baud is not None:
            self._baud = baud
        if self._port is None:
            raise TransportError("No serial port given.")

        logger.info("Opening %s at %d baud", self._port, self._baud)
        try:
            self._serial = serial.Serial(self._port, self._baud, timeout=self._timeout)
        except serial.SerialException as exc:
            raise TransportError(f"Cannot open {self._port}: {exc}") from exc

    def close(self) -> None:
        """Close the port if it is open."""
        if self._serial is None:
            return
        logger.info("Closing %s", self._port)
        try:
            self._serial.close()
        except serial.SerialException as exc:
            raise TransportError(f"Cannot close {self._port}: {exc}") from exc
        finally:
            self._serial = None

    def _require_open(self) -> serial.Serial:
        if self._serial is None:
            raise RuntimeError("SerialTransport is not open.")
        return self._serial

    def write(self, data: bytes) -> None:
        """Write all of ``data`` to the port.

        Raises:
            RuntimeError: If the port is not open.
            TransportError: If the write fails.
        """
        port = self._require_open()
        try:
            port.write(data)
            port.flush()
        except serial.SerialException as exc:
            raise TransportError(f"Write to {self._port} failed: {exc}") from exc

    def read(self) -> bytes:
        """Return whatever bytes are waiting, blocking up to the timeout.

        Returns:
            The waiting bytes, or ``b""`` if none arrived within the timeout.

        Raises:
            RuntimeError: If the port is not open.
            TransportError: If the read fails or the device disappears.
        """
        port = self._require_open()
        try:
            return port.read(port.in_waiting or 1)
        except serial.SerialException as exc:
            raise TransportError(f"Read from {self._port} failed: {exc}") from exc

    def __enter__(self) -> "SerialTransport":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
