"""GPS receiver wiring for the WebSocket server.

The receiver is configured from the environment:

* ``NAVLINK_PORT``: serial device of the NMEA receiver. When unset the
  interpreter runs without a transport and only decodes what is passed to
  ``NmeaInterpreter.receive``.
* ``NAVLINK_BAUD``: baud rate (default: ``4800``).
"""

import asyncio
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from navlink.errors import ConfigError
from navlink.nmea.dispatcher import NmeaDispatcher
from navlink.nmea.interpreter import NmeaInterpreter
from navlink.nmea.signals import Signal, SignalKind
from server.broadcaster import broadcast_message
from server.formatters import format_error_message, format_position_message

__all__ = ["ReceiverSettings", "create_interpreter", "load_settings"]

logger = logging.getLogger(__name__)

_PORT_VARIABLE = "NAVLINK_PORT"
_BAUD_VARIABLE = "NAVLINK_BAUD"
_DEFAULT_BAUD = 4800


@dataclass(frozen=True)
class ReceiverSettings:
    port: str | None = None
    baud: int = _DEFAULT_BAUD


def load_settings(environ: Mapping[str, str] | None = None) -> ReceiverSettings:
    """Read the receiver settings from the environment.

    Raises:
        ConfigError: If ``NAVLINK_BAUD`` is not a positive integer.
    """
    environ = os.environ if environ is None else environ
    port = environ.get(_PORT_VARIABLE) or None
    raw_baud = environ.get(_BAUD_VARIABLE, "")
    if not raw_baud:
        return ReceiverSettings(port=port)
    try:
        baud = int(raw_baud)
    except ValueError as exc:
        raise ConfigError(f"{_BAUD_VARIABLE} must be an integer, got {raw_baud!r}.") from exc
    if baud <= 0:
        raise ConfigError(f"{_BAUD_VARIABLE} must be positive, got {baud}.")
    return ReceiverSettings(port=port, baud=baud)


def create_interpreter(
    settings: ReceiverSettings,
    loop: asyncio.AbstractEventLoop,
) -> NmeaInterpreter:
    """Build an interpreter that broadcasts position updates and errors.

    The interpreter is returned unstarted; the caller owns its lifetime.
    """

    def _on_position(signal: Signal) -> None:
        broadcast_message(format_position_message(signal.value), loop)

    def _on_transport_error(signal: Signal) -> None:
        broadcast_message(format_error_message(signal.value), loop)

    dispatcher = NmeaDispatcher()
    dispatcher.subscribe(SignalKind.POSITION_UPDATE, _on_position)
    dispatcher.subscribe(SignalKind.TRANSPORT_ERROR, _on_transport_error)

    if settings.port is None:
        logger.warning("%s is not set; no serial receiver will be opened", _PORT_VARIABLE)
    return NmeaInterpreter(settings.port, settings.baud, dispatcher=dispatcher)
