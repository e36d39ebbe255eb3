"""NMEA field parsing utilities.

This module provides utilities for parsing individual fields from NMEA sentences.
NMEA fields are comma-separated and may be empty (consecutive commas indicate
missing data). Every parser here fails soft: empty or malformed input returns
None instead of raising, so callers can distinguish "no data" from "zero value"
and a single bad field never aborts a sentence.
"""

from datetime import date, datetime, timezone

from navlink.nmea.types import LinkQuality, Position

__all__ = [
    "parse_altitude",
    "parse_bearing",
    "parse_datetime",
    "parse_datetime_parts",
    "parse_declination",
    "parse_fix_flag",
    "parse_float_field",
    "parse_int_field",
    "parse_latitude",
    "parse_link_quality",
    "parse_longitude",
    "parse_position",
    "parse_speed",
    "parse_string_field",
]

# --- unit conversions ---------------------------------------------------------

_KNOTS_TO_KPH = 1.852
_FEET_TO_METERS = 0.3048

# Two-digit years in RMC dates are offset from this century.
_CENTURY = 2000


def parse_float_field(value: str) -> float | None:
    """Parse a string field to float, returning None if empty or invalid.

    Example:
        >>> parse_float_field("545.4")
        545.4
        >>> parse_float_field("")  # empty field
        None
    """
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def parse_int_field(value: str) -> int | None:
    """Parse a string field to int, returning None if empty or invalid.

    Example:
        >>> parse_int_field("08")
        8
        >>> parse_int_field("")
        None
    """
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_string_field(value: str) -> str | None:
    """Parse a string field, returning None if empty."""
    if not value:
        return None
    return value


# --- coordinates --------------------------------------------------------------


def _parse_coordinate_parts(value: str) -> tuple[int, float] | None:
    """Parse NMEA coordinate into degrees and minutes components.

    NMEA coordinates use DDDMM.MMMM format where:
    - DDD (or DD for latitude) = degrees
    - MM.MMMM = decimal minutes

    The decimal point position determines the split between degrees and minutes:
    the 2 digits before the decimal point are always minutes.

    Args:
        value: Coordinate string in DDDMM.MMMM format

    Returns:
        Tuple of (degrees, minutes) or None if parsing fails

    Example:
        >>> _parse_coordinate_parts("4807.038")  # 48° 07.038'
        (48, 7.038)
        >>> _parse_coordinate_parts("01131.000")  # 11° 31.000'
        (11, 31.0)
    """
    dot_position = value.find(".")
    # Minutes are always 2 digits before the decimal point
    split = dot_position - 2
    if dot_position == -1 or split < 0:
        return None
    try:
        degrees = int(value[:split])
        minutes = float(value[split:])
    except ValueError:
        return None
    return degrees, minutes


def _convert_to_decimal_degrees(value: str, negative: bool) -> float | None:
    parts = _parse_coordinate_parts(value)
    if parts is None:
        return None

    degrees, minutes = parts
    decimal_degrees = degrees + minutes / 60.0
    return -decimal_degrees if negative else decimal_degrees


def parse_latitude(value: str, hemisphere: str) -> float | None:
    """Convert an NMEA latitude (DDMM.MMMM) to decimal degrees.

    A hemisphere letter glued to the value ("4807.038N") is tolerated and
    stripped. Only "S" makes the result negative.

    Example:
        >>> parse_latitude("4807.038", "N")
        48.1173
        >>> parse_latitude("4807.038", "S")
        -48.1173
    """
    if not value:
        return None
    value = value.rstrip("NS")
    return _convert_to_decimal_degrees(value, hemisphere == "S")


def parse_longitude(value: str, hemisphere: str) -> float | None:
    """Convert an NMEA longitude (DDDMM.MMMM) to decimal degrees.

    Example:
        >>> parse_longitude("01131.000", "W")
        -11.5166667
    """
    if not value:
        return None
    return _convert_to_decimal_degrees(value, hemisphere == "W")


def parse_position(
    latitude: str,
    north_south: str,
    longitude: str,
    east_west: str,
) -> Position | None:
    """Build a Position from the four coordinate fields.

    All four fields must be present; a receiver without a fix sends them
    empty.
    """
    if not (latitude and north_south and longitude and east_west):
        return None

    lat = parse_latitude(latitude, north_south)
    lon = parse_longitude(longitude, east_west)
    if lat is None or lon is None:
        return None
    return Position(lat=lat, lon=lon)


# --- date and time ------------------------------------------------------------


def _parse_time_of_day(value: str) -> tuple[int, int, int, int] | None:
    """Split HHMMSS[.sss] into hours, minutes, seconds and milliseconds.

    Characters after position 7 are read as an integer millisecond count,
    so "123519.5" gives 5 ms and "123519.500" gives 500 ms.
    """
    if len(value) < 6:
        return None
    try:
        hours = int(value[0:2])
        minutes = int(value[2:4])
        seconds = int(value[4:6])
        milliseconds = int(value[7:]) if len(value) > 7 else 0
    except ValueError:
        return None
    return hours, minutes, seconds, milliseconds


def _build_datetime(
    day: date,
    time_parts: tuple[int, int, int, int],
) -> datetime | None:
    hours, minutes, seconds, milliseconds = time_parts
    try:
        return datetime(
            day.year,
            day.month,
            day.day,
            hours,
            minutes,
            seconds,
            milliseconds * 1000,
            tzinfo=timezone.utc,
        )
    except ValueError:
        return None


def parse_datetime(date_field: str, time_field: str) -> datetime | None:
    """Combine a ddmmyy date and an HHMMSS[.sss] time into a UTC datetime.

    Sentences that carry only a time of day (GGA, GNS, GLL) pass an empty
    date; today's UTC date is used for them.

    Example:
        >>> parse_datetime("230394", "123519")
        datetime.datetime(2094, 3, 23, 12, 35, 19, tzinfo=datetime.timezone.utc)
    """
    time_parts = _parse_time_of_day(time_field)
    if time_parts is None:
        return None

    if not date_field:
        return _build_datetime(datetime.now(timezone.utc).date(), time_parts)

    if len(date_field) < 6:
        return None
    try:
        day = int(date_field[0:2])
        month = int(date_field[2:4])
        year = int(date_field[4:6]) + _CENTURY
        calendar_day = date(year, month, day)
    except ValueError:
        return None
    return _build_datetime(calendar_day, time_parts)


def parse_datetime_parts(
    day: int,
    month: int,
    year: int,
    time_field: str,
) -> datetime | None:
    """Build a UTC datetime from separate day, month and year values (ZDA).

    Day, month and year must all be nonzero.
    """
    if not (day and month and year):
        return None

    time_parts = _parse_time_of_day(time_field)
    if time_parts is None:
        return None
    try:
        calendar_day = date(year, month, day)
    except ValueError:
        return None
    return _build_datetime(calendar_day, time_parts)


# --- motion -------------------------------------------------------------------


def parse_speed(knots: str) -> float | None:
    """Convert a speed over ground in knots to km/h."""
    value = parse_float_field(knots)
    if value is None:
        return None
    return value * _KNOTS_TO_KPH


def parse_bearing(value: str) -> float | None:
    """Parse a course in degrees; values outside [0, 360] are absent."""
    bearing = parse_float_field(value)
    if bearing is None or not 0.0 <= bearing <= 360.0:
        return None
    return bearing


def parse_declination(value: str, hemisphere: str) -> float | None:
    """Parse a magnetic variation; west is negative."""
    declination = parse_float_field(value)
    if declination is None:
        return None
    if hemisphere == "W":
        return -declination
    return declination


def parse_altitude(value: str, unit: str) -> float | None:
    """Parse an altitude in metres.

    Feet ("f" or "F") are converted; "M" and any other unit pass through
    unchanged.

    Example:
        >>> parse_altitude("100", "f")
        30.48
    """
    altitude = parse_float_field(value)
    if altitude is None:
        return None
    if unit.lower() == "f":
        return altitude * _FEET_TO_METERS
    return altitude


# --- status -------------------------------------------------------------------


def parse_link_quality(value: str) -> LinkQuality | None:
    """Map a GGA fix quality digit (0-8) to LinkQuality."""
    quality = parse_int_field(value)
    if quality is None:
        return None
    try:
        return LinkQuality(quality)
    except ValueError:
        return None


def parse_fix_flag(value: str) -> str:
    """Return 'A' or 'V' from an RMC status field, otherwise ' '."""
    if value in ("A", "V"):
        return value
    return " "
