"""GLL sentence decoder.

GLL (Geographic Position - Latitude/Longitude):
    $GPGLL,4916.45,N,12311.12,W,225444,A*31
           |       | |        | |      |
           |       | |        | |      +-- Status (A = valid, V = void, NMEA 2.0+)
           |       | |        | +-- UTC time
           |       | +--------+-- Longitude + E/W
           +-------+-- Latitude + N/S
"""

from navlink.nmea.fields import parse_datetime, parse_fix_flag, parse_position
from navlink.nmea.signals import Signal, check_position, update_signals
from navlink.nmea.types import PositionUpdate

__all__ = ["decode_gll"]


def decode_gll(fields: list[str]) -> list[Signal]:
    """Decode the fields of a GLL sentence.

    The time field and the status flag are optional in older receivers.
    """
    position = parse_position(fields[1], fields[2], fields[3], fields[4])
    time_field = fields[5] if len(fields) > 5 else ""
    status = fields[6] if len(fields) > 6 else ""
    update = PositionUpdate(
        source="GLL",
        fix=parse_fix_flag(status),
        position=position,
        timestamp=parse_datetime("", time_field),
    )
    return check_position("GLL", fields[1:5], position) + update_signals(update)
