"""NMEA data types shared by the field parsers, decoders and dispatcher.

Design Decisions:
    1. Optional fields (float | None): NMEA fields may be empty, indicated by
       consecutive commas. Using None distinguishes "no data received" from
       "measured zero".

    2. Frozen dataclasses: a PositionUpdate is created fresh for every decoded
       sentence and handed to the caller, so no two signals ever share
       mutable state.

    3. Single-character fix flag: RMC reports 'A' (fix obtained) or 'V'
       (fix lost). Sentences without a status field use ' ' (unknown).
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from navlink.nmea.signals import Signal

__all__ = [
    "DOP",
    "DecodeFn",
    "EstimatedError",
    "LinkQuality",
    "Position",
    "PositionUpdate",
    "Satellite",
    "SentenceDescriptor",
]

# Multiplier from dilution of precision to an estimated error in metres.
_DOP_ERROR_FACTOR = 1.5


class LinkQuality(IntEnum):
    """GGA fix quality indicator (field 6)."""

    NO_FIX = 0
    SPS = 1
    DGPS = 2
    PPS = 3
    RTK = 4
    FLOAT_RTK = 5
    ESTIMATE = 6
    MANUAL = 7
    SIMULATED = 8


@dataclass(frozen=True)
class Position:
    """A point on the WGS84 ellipsoid in decimal degrees.

    Attributes:
        lat: Latitude, positive north.
        lon: Longitude, positive east.
    """

    lat: float
    lon: float

    def is_valid(self) -> bool:
        return abs(self.lat) <= 90.0 and abs(self.lon) <= 180.0

    def is_zero(self) -> bool:
        return self.lat == 0.0 and self.lon == 0.0

    def __str__(self) -> str:
        return f"{self.lat:.6f}, {self.lon:.6f}"


@dataclass(frozen=True)
class DOP:
    """Dilution of precision triplet from a GSA sentence (unitless)."""

    pdop: float
    hdop: float
    vdop: float


@dataclass(frozen=True)
class EstimatedError:
    """Garmin PGRME estimated position error, in metres.

    Attributes:
        horizontal_m: Estimated horizontal position error (HPE).
        vertical_m: Estimated vertical position error (VPE).
        spherical_m: Overall spherical equivalent position error (EPE).
    """

    horizontal_m: float | None
    vertical_m: float | None
    spherical_m: float | None


@dataclass(frozen=True)
class Satellite:
    """One satellite block of a GSV sentence.

    Attributes:
        prn: Pseudo-random noise code identifying the satellite.
        azimuth_deg: Azimuth in degrees from true north (0-359).
        elevation_deg: Elevation in degrees above the horizon (0-90).
        snr_db: Signal-to-noise ratio in dB-Hz; 0 when not tracked.
    """

    prn: int
    azimuth_deg: int
    elevation_deg: int
    snr_db: int


@dataclass(frozen=True)
class PositionUpdate:
    """The contribution of one decoded sentence to the navigation state.

    Every field except ``source`` and ``fix`` is optional: a sentence only
    fills in what it carries. RMC supplies position, time, speed, bearing and
    declination; GGA supplies position, altitude, link quality, satellite
    count and HDOP; GLL supplies position only.

    Attributes:
        source: Three-character id of the sentence that produced the update
            (e.g. "RMC").

        fix: 'A' when the receiver reports a valid fix, 'V' when it reports
            a lost fix, ' ' when the sentence carries no status.

        position: Latitude/longitude, or None when the fields were empty.

        altitude_m: Altitude above mean sea level in metres.

        timestamp: UTC timestamp (timezone-aware), or None.

        speed_kmh: Ground speed in km/h, converted from knots.

        bearing_deg: Course over ground in degrees, 0-360.

        declination_deg: Magnetic variation in degrees, west negative.

        link_quality: GGA fix quality.

        satellite_count: Number of satellites used in the solution.

        hdop, pdop, vdop: Dilution of precision values.

    Example:
        >>> update = PositionUpdate(source="GGA", hdop=0.9)
        >>> update.horizontal_error
        1.35
    """

    source: str
    fix: str = " "
    position: Position | None = None
    altitude_m: float | None = None
    timestamp: datetime | None = None
    speed_kmh: float | None = None
    bearing_deg: float | None = None
    declination_deg: float | None = None
    link_quality: LinkQuality | None = None
    satellite_count: int | None = None
    hdop: float | None = None
    pdop: float | None = None
    vdop: float | None = None

    @property
    def horizontal_error(self) -> float | None:
        """Estimated horizontal error in metres (HDOP x 1.5)."""
        if self.hdop is None:
            return None
        return self.hdop * _DOP_ERROR_FACTOR

    @property
    def vertical_error(self) -> float | None:
        """Estimated vertical error in metres (VDOP x 1.5)."""
        if self.vdop is None:
            return None
        return self.vdop * _DOP_ERROR_FACTOR


DecodeFn = Callable[[list[str]], "list[Signal]"]


@dataclass(frozen=True)
class SentenceDescriptor:
    """A registered sentence type.

    Attributes:
        id: Three-character sentence identifier, the registry key.
        description: Human-readable name.
        decode_fn: Called with the split fields of a sentence; returns the
            signals it produced.
        talker: Two-character talker prefix given at registration, if any.
    """

    id: str
    description: str
    decode_fn: DecodeFn
    talker: str | None = None
