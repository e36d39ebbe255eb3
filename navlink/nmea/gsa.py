"""GSA sentence decoder.

GSA (GNSS DOP and Active Satellites):
    $GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39
           | | |                      |   |   |
           | | |                      |   |   +-- VDOP
           | | |                      |   +-- HDOP
           | | |                      +-- PDOP
           | | +-- PRNs of the satellites used in the fix (12 slots)
           | +-- Fix type (1 = none, 2 = 2D, 3 = 3D)
           +-- Selection mode (A = automatic, M = manual)
"""

from navlink.nmea.fields import parse_float_field, parse_int_field
from navlink.nmea.signals import Signal, SignalKind, update_signals
from navlink.nmea.types import PositionUpdate

__all__ = ["decode_gsa"]

_PDOP_INDEX = 15
_HDOP_INDEX = 16
_VDOP_INDEX = 17


def decode_gsa(fields: list[str]) -> list[Signal]:
    """Decode the fields of a GSA sentence.

    The DOP triplet is reported only when all three values are present.
    """
    signals: list[Signal] = []

    fix_type = parse_int_field(fields[2])
    if fix_type is not None:
        signals.append(Signal(SignalKind.FIX_TYPE, fix_type))

    pdop = parse_float_field(fields[_PDOP_INDEX])
    hdop = parse_float_field(fields[_HDOP_INDEX])
    vdop = parse_float_field(fields[_VDOP_INDEX])
    if pdop is None or hdop is None or vdop is None:
        pdop = hdop = vdop = None

    update = PositionUpdate(source="GSA", pdop=pdop, hdop=hdop, vdop=vdop)
    return signals + update_signals(update)
