"""GNS sentence decoder.

GNS (GNSS Fix Data) is the multi-constellation successor of GGA.

GNS Sentence Format:
    $GNGNS,014035.00,4332.69262,S,17235.48549,E,RR,13,0.9,25.63,11.24,,*70
           |         |          | |           | |  |  |   |     |
           |         |          | |           | |  |  |   |     +-- Geoid separation
           |         |          | |           | |  |  |   +-- Altitude above MSL (metres)
           |         |          | |           | |  |  +-- HDOP
           |         |          | |           | |  +-- Satellites in use
           |         |          | |           | +-- Mode indicator per constellation
           |         |          | +-----------+-- Longitude + E/W
           |         +----------+-- Latitude + N/S
           +-- UTC time
"""

from navlink.nmea.fields import (
    parse_altitude,
    parse_datetime,
    parse_float_field,
    parse_int_field,
    parse_position,
)
from navlink.nmea.signals import Signal, check_position, update_signals
from navlink.nmea.types import PositionUpdate

__all__ = ["decode_gns"]


def decode_gns(fields: list[str]) -> list[Signal]:
    """Decode the fields of a GNS sentence. Altitude is always in metres."""
    position = parse_position(fields[2], fields[3], fields[4], fields[5])
    update = PositionUpdate(
        source="GNS",
        position=position,
        timestamp=parse_datetime("", fields[1]),
        satellite_count=parse_int_field(fields[7]),
        hdop=parse_float_field(fields[8]),
        altitude_m=parse_altitude(fields[9], "M"),
    )
    return check_position("GNS", fields[2:6], position) + update_signals(update)
