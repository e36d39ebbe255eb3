"""Garmin track transfer data types and fixed command frames.

Frame layout on the wire (before de-stuffing)::

    10 <cmd> <size> <data ...> <checksum> 10 03
    |                                     |  |
    DLE start marker                      DLE ETX terminator

A literal 0x10 inside size, data or checksum is sent twice. After
de-stuffing, offset 1 holds the command code and offset 2 the data size.
"""

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "ACK_COMMAND",
    "CMD_ACK",
    "CMD_RECORD_COUNT",
    "CMD_TRACK",
    "CMD_TRACK_POINT",
    "DLE",
    "END_OF_TRANSFER",
    "ETX",
    "TRACK_REQUEST",
    "Track",
    "TrackPoint",
    "TransferState",
]

DLE = 0x10
ETX = 0x03

CMD_ACK = 0x06
CMD_RECORD_COUNT = 0x1B
CMD_TRACK_POINT = 0x22
CMD_TRACK = 0x63

# The only two frames ever written to the device.
TRACK_REQUEST = bytes([0x10, 0x0A, 0x02, 0x06, 0x00, 0xEE, 0x10, 0x03])
ACK_COMMAND = bytes([0x10, 0x06, 0x02, 0x22, 0x00, 0xD6, 0x10, 0x03])

END_OF_TRANSFER = bytes([0x10, 0x0C, 0x02, 0x06, 0x00, 0xEC, 0x10, 0x03])


class TransferState(Enum):
    """Lifecycle of one bulk track download."""

    IDLE = "idle"
    AWAITING_FIRST_BYTE = "awaiting_first_byte"
    RECEIVING = "receiving"
    COMPLETE = "complete"
    TIMED_OUT = "timed_out"
    ABORTED = "aborted"


@dataclass(frozen=True)
class TrackPoint:
    """One recorded point of a track log.

    Attributes:
        lat: Latitude in decimal degrees, from semicircles.
        lon: Longitude in decimal degrees, from semicircles.
        height_m: Altitude in metres, from the device's packed float.
        time: Device timestamp in seconds (Garmin epoch, 1989-12-31 UTC).
        is_new_segment: True when the device started a new track segment
            at this point (e.g. after losing the fix).
    """

    lat: float
    lon: float
    height_m: float
    time: int
    is_new_segment: bool = False

    def __str__(self) -> str:
        return f"Lat: {self.lat} Lon: {self.lon} Elev: {self.height_m} Time: {self.time}"


@dataclass
class Track:
    """A named track log made of segments of points.

    Attributes:
        name: Track name as stored on the device; may be empty.
        segments: Ordered segments, each an ordered list of points.

    Example:
        >>> track = Track("ACTIVE LOG")
        >>> track.add_point(TrackPoint(48.1, 11.5, 545.0, 0, is_new_segment=True))
        >>> len(track.segments), len(track.points)
        (1, 1)
    """

    name: str = ""
    segments: list[list[TrackPoint]] = field(default_factory=list)

    def add_point(self, point: TrackPoint) -> None:
        """Append a point, opening a new segment when the point asks for one.

        A point arriving before any segment exists opens the first one.
        """
        if point.is_new_segment or not self.segments:
            self.segments.append([])
        self.segments[-1].append(point)

    @property
    def points(self) -> list[TrackPoint]:
        """All points of all segments, in order."""
        return [point for segment in self.segments for point in segment]
