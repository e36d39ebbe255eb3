"""Heading sentence decoders (HDG from a compass, HDT from a GNSS receiver).

HDG (Heading, Deviation and Variation):
    $HCHDG,98.3,0.0,E,12.6,W*57
           |    |   | |    |
           |    |   | +----+-- Magnetic variation + E/W
           |    +---+-- Magnetic deviation + E/W
           +-- Magnetic sensor heading (degrees)

HDT (Heading, True):
    $GPHDT,274.07,T*03
           |      |
           |      +-- T = true
           +-- Heading (degrees)
"""

from navlink.nmea.fields import parse_bearing, parse_declination
from navlink.nmea.signals import Signal, SignalKind, update_signals
from navlink.nmea.types import PositionUpdate

__all__ = ["decode_hdg", "decode_hdt"]


def _heading_signals(heading: float | None, update: PositionUpdate) -> list[Signal]:
    signals: list[Signal] = []
    if heading is not None:
        signals.append(Signal(SignalKind.HEADING, heading))
    return signals + update_signals(update)


def decode_hdg(fields: list[str]) -> list[Signal]:
    """Decode an HDG sentence: heading plus magnetic variation."""
    update = PositionUpdate(
        source="HDG",
        declination_deg=parse_declination(fields[4], fields[5]),
    )
    return _heading_signals(parse_bearing(fields[1]), update)


def decode_hdt(fields: list[str]) -> list[Signal]:
    """Decode an HDT sentence: true heading in degrees."""
    return _heading_signals(parse_bearing(fields[1]), PositionUpdate(source="HDT"))
