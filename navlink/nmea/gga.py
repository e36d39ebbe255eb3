"""GGA sentence decoder.

GGA (Global Positioning System Fix Data) is one of the most important NMEA
sentences, providing position fix information including coordinates, altitude,
fix quality, and satellite/accuracy metrics.

GGA Sentence Format:
    $GNGGA,123519.00,4807.038,N,01131.000,E,1,08,0.9,545.4,M,47.0,M,,*7F
           |         |        | |         | | |  |   |     | |     |
           |         |        | |         | | |  |   |     | |     +-- DGPS info (optional)
           |         |        | |         | | |  |   |     | +-- Geoid height (M=meters)
           |         |        | |         | | |  |   +-----+-- Altitude above MSL
           |         |        | |         | | |  +-- HDOP (horizontal dilution)
           |         |        | |         | | +-- Number of satellites
           |         |        | |         | +-- Fix quality (0-8)
           |         |        | +---------+-- Longitude + E/W
           |         +--------+-- Latitude + N/S
           +-- UTC time (HHMMSS.ss)

Fix Quality Values:
    0 = Invalid (no fix)
    1 = GPS fix (SPS - Standard Positioning Service)
    2 = DGPS fix (Differential GPS)
    3 = PPS fix
    4 = RTK Fixed (Real-Time Kinematic, cm-level accuracy)
    5 = RTK Float (RTK converging, dm-level accuracy)
    6 = Estimated (dead reckoning)
    7 = Manual input
    8 = Simulation
"""

from navlink.nmea.fields import (
    parse_altitude,
    parse_datetime,
    parse_float_field,
    parse_int_field,
    parse_link_quality,
    parse_position,
)
from navlink.nmea.signals import Signal, check_position, update_signals
from navlink.nmea.types import PositionUpdate

__all__ = ["decode_gga"]


def decode_gga(fields: list[str]) -> list[Signal]:
    """Decode the fields of a GGA sentence.

    GGA carries only a time of day, so the timestamp is placed on today's
    UTC date.

    Raises:
        IndexError: If the sentence has fewer than 11 fields.
    """
    position = parse_position(fields[2], fields[3], fields[4], fields[5])
    update = PositionUpdate(
        source="GGA",
        position=position,
        timestamp=parse_datetime("", fields[1]),
        link_quality=parse_link_quality(fields[6]),
        satellite_count=parse_int_field(fields[7]),
        hdop=parse_float_field(fields[8]),
        altitude_m=parse_altitude(fields[9], fields[10]),
    )
    return check_position("GGA", fields[2:6], position) + update_signals(update)
