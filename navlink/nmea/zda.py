"""ZDA sentence decoder.

ZDA (Time and Date):
    $GPZDA,201530.00,04,07,2002,00,00*60
           |         |  |  |    |  |
           |         |  |  |    |  +-- Local zone minutes
           |         |  |  |    +-- Local zone hours
           |         |  |  +-- Year (4 digits)
           |         |  +-- Month
           |         +-- Day
           +-- UTC time
"""

from navlink.nmea.fields import parse_datetime_parts, parse_int_field
from navlink.nmea.signals import Signal, malformed_field, update_signals
from navlink.nmea.types import PositionUpdate

__all__ = ["decode_zda"]


def decode_zda(fields: list[str]) -> list[Signal]:
    """Decode the fields of a ZDA sentence.

    The local zone fields are ignored; the timestamp is always UTC.
    """
    day = parse_int_field(fields[2]) or 0
    month = parse_int_field(fields[3]) or 0
    year = parse_int_field(fields[4]) or 0
    timestamp = parse_datetime_parts(day, month, year, fields[1])

    signals: list[Signal] = []
    if timestamp is None and all(fields[1:5]):
        signals.append(malformed_field("ZDA", "date", ",".join(fields[1:5])))

    update = PositionUpdate(source="ZDA", timestamp=timestamp)
    return signals + update_signals(update)
