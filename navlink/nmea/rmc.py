"""RMC sentence decoder.

RMC (Recommended Minimum Specific GNSS Data) carries the essentials of a fix:
time, date, status, position, speed and course over ground, and magnetic
variation.

RMC Sentence Format:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
           |      | |        | |         | |     |     |      |     |
           |      | |        | |         | |     |     |      +-----+-- Magnetic variation + E/W
           |      | |        | |         | |     |     +-- Date (ddmmyy)
           |      | |        | |         | |     +-- Course over ground (degrees true)
           |      | |        | |         | +-- Speed over ground (knots)
           |      | |        | +---------+-- Longitude + E/W
           |      | +--------+-- Latitude + N/S
           |      +-- Status (A = active, V = void)
           +-- UTC time (HHMMSS.ss)
"""

from navlink.nmea.fields import (
    parse_bearing,
    parse_datetime,
    parse_declination,
    parse_fix_flag,
    parse_position,
    parse_speed,
)
from navlink.nmea.signals import Signal, check_position, update_signals
from navlink.nmea.types import PositionUpdate

__all__ = ["decode_rmc"]


def decode_rmc(fields: list[str]) -> list[Signal]:
    """Decode the fields of an RMC sentence.

    Maps field indices to PositionUpdate attributes:
        fields[1]     -> timestamp (time of day, combined with fields[9])
        fields[2]     -> fix ('A' or 'V')
        fields[3..6]  -> position
        fields[7]     -> speed_kmh (from knots)
        fields[8]     -> bearing_deg
        fields[9]     -> timestamp (date, ddmmyy)
        fields[10..11] -> declination_deg

    Args:
        fields: Output of ``split_fields`` for one RMC sentence.

    Returns:
        Discrete signals followed by the aggregate POSITION_UPDATE.

    Raises:
        IndexError: If the sentence has fewer than 12 fields.
    """
    position = parse_position(fields[3], fields[4], fields[5], fields[6])
    update = PositionUpdate(
        source="RMC",
        fix=parse_fix_flag(fields[2]),
        position=position,
        timestamp=parse_datetime(fields[9], fields[1]),
        speed_kmh=parse_speed(fields[7]),
        bearing_deg=parse_bearing(fields[8]),
        declination_deg=parse_declination(fields[10], fields[11]),
    )
    return check_position("RMC", fields[3:7], position) + update_signals(update)
