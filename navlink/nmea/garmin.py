"""Garmin proprietary sentence decoders (PGRMM, PGRMZ, PGRME).

PGRMM (map datum):
    $PGRMM,WGS 84*06

PGRMZ (altitude):
    $PGRMZ,246,f,3*1B
           |   | |
           |   | +-- Fix dimension (2 = 2D, 3 = 3D)
           |   +-- Unit (f = feet)
           +-- Altitude

PGRME (estimated error):
    $PGRME,15.0,M,45.0,M,25.0,M*1C
           |      |      |
           |      |      +-- Spherical equivalent position error (EPE)
           |      +-- Vertical position error (VPE)
           +-- Horizontal position error (HPE)
"""

from navlink.nmea.fields import (
    parse_altitude,
    parse_float_field,
    parse_int_field,
    parse_string_field,
)
from navlink.nmea.signals import Signal, SignalKind, update_signals
from navlink.nmea.types import EstimatedError, PositionUpdate

__all__ = ["decode_pgrme", "decode_pgrmm", "decode_pgrmz"]


def decode_pgrmm(fields: list[str]) -> list[Signal]:
    """Decode the currently active horizontal map datum."""
    signals: list[Signal] = []
    datum = parse_string_field(fields[1])
    if datum is not None:
        signals.append(Signal(SignalKind.MAP_DATUM, datum))
    return signals + update_signals(PositionUpdate(source="RMM"))


def decode_pgrmz(fields: list[str]) -> list[Signal]:
    """Decode barometric/GPS altitude, reported in feet."""
    signals: list[Signal] = []
    dimension = parse_int_field(fields[3]) if len(fields) > 3 else None
    if dimension is not None:
        signals.append(Signal(SignalKind.FIX_TYPE, dimension))

    update = PositionUpdate(source="RMZ", altitude_m=parse_altitude(fields[1], fields[2]))
    return signals + update_signals(update)


def decode_pgrme(fields: list[str]) -> list[Signal]:
    """Decode the receiver's estimated position error, in metres."""
    error = EstimatedError(
        horizontal_m=parse_float_field(fields[1]),
        vertical_m=parse_float_field(fields[3]),
        spherical_m=parse_float_field(fields[5]),
    )
    signals = [Signal(SignalKind.ESTIMATED_ERROR, error)]
    return signals + update_signals(PositionUpdate(source="RME"))
