"""Decoding of Garmin track transfer frames into Track and TrackPoint values.

A track download is a sequence of frames::

    1B  record count announcement (tracks + points to follow)
    63  track header        -> starts a new Track
    22  track point         -> appended to the current Track
    ...
    0C  end of transfer (fixed frame 10 0C 02 06 00 EC 10 03)

Acknowledgement frames (06) may be interleaved and are ignored.

Track point payload after de-stuffing (30 bytes)::

    offset  0     1     2     3-6   7-10  11-14  15-18   19-22  23     24-26  27  28-29
            10    22    size  lat   lon   time   height  depth  new    pad    cs  10 03
                                                                 seg
"""

import logging
import struct

from navlink.errors import FrameCorrupt, RecordCountMismatch
from navlink.garmin.framing import destuff, split_frames
from navlink.garmin.types import (
    CMD_ACK,
    CMD_RECORD_COUNT,
    CMD_TRACK,
    CMD_TRACK_POINT,
    DLE,
    END_OF_TRANSFER,
    Track,
    TrackPoint,
)

__all__ = [
    "GarminRecordDecoder",
    "decode_height",
    "decode_record_count",
    "decode_track",
    "decode_track_point",
    "decode_tracks",
]

logger = logging.getLogger(__name__)

# --- Frame geometry -----------------------------------------------------------

_MIN_FRAME_LENGTH = 7
_MIN_TRACK_LENGTH = 4
_TRACK_POINT_LENGTH = 30
_EMPTY_NAME_SIZE = 4  # track header carrying only its flags, no name
_NAME_OFFSET = 5
_NEW_SEGMENT_OFFSET = 23

_SEMICIRCLE_TO_DEGREES = 180.0 / 2**31

# --- Packed height word -------------------------------------------------------

_EXPONENT_MASK = 0x7F800000
_FRACTION_MASK = 0x7FFFFF
_FRACTION_SCALE = 2 << 22
_EXPONENT_BIAS = 128


def decode_height(word: int) -> float:
    """Decode the device's packed 4-byte height value, in metres.

    The layout matches a single-precision float (8-bit exponent, 23-bit
    fraction, sign ignored) but the exponent bias is 128, not 127. Values
    are rounded to single precision like the device's own.
    """
    exponent = (word & _EXPONENT_MASK) // _FRACTION_SCALE
    fraction = word & _FRACTION_MASK
    height = (1 + fraction / _FRACTION_SCALE) * 2.0 ** (exponent - _EXPONENT_BIAS)
    return struct.unpack("<f", struct.pack("<f", height))[0]


def decode_record_count(frame: bytes) -> int:
    """Read the record count announced by a 0x1B frame.

    The size byte at offset 2 gives the number of count bytes, which are
    little-endian from offset 3.

    Raises:
        FrameCorrupt: If the frame is shorter than its size byte claims.
    """
    data = destuff(frame)
    if len(data) < 3:
        raise FrameCorrupt("Record count frame is truncated.")

    last = 2 + data[2]
    if last >= len(data):
        raise FrameCorrupt(f"Record count frame claims {data[2]} byte(s) but has {len(data)}.")

    value = 0
    for offset in range(last, 2, -1):
        value = value << 8 | data[offset]
    return value


def decode_track(frame: bytes) -> Track:
    """Create an empty Track from a 0x63 track header frame.

    Raises:
        FrameCorrupt: If the frame is too short, is not a track header, or
            its name runs past the end of the frame.
    """
    data = destuff(frame)
    if len(data) < _MIN_TRACK_LENGTH or data[1] != CMD_TRACK:
        raise FrameCorrupt("Information received to initialize track is invalid.")

    size = data[2]
    if size == _EMPTY_NAME_SIZE:
        return Track(name="")

    end = size + 2
    if end > len(data):
        raise FrameCorrupt(f"Track name runs past the end of a {len(data)}-byte frame.")
    return Track(name=data[_NAME_OFFSET:end].decode("ascii", errors="replace"))


def decode_track_point(frame: bytes) -> TrackPoint:
    """Create a TrackPoint from a 0x22 track point frame.

    Raises:
        FrameCorrupt: If the de-stuffed frame is not exactly 30 bytes or is
            not a track point.
    """
    data = destuff(frame)
    if len(data) != _TRACK_POINT_LENGTH or data[1] != CMD_TRACK_POINT:
        raise FrameCorrupt("Information received to initialize track point is invalid.")

    lat, lon, time, height = struct.unpack_from("<iiII", data, 3)
    return TrackPoint(
        lat=lat * _SEMICIRCLE_TO_DEGREES,
        lon=lon * _SEMICIRCLE_TO_DEGREES,
        height_m=decode_height(height),
        time=time,
        is_new_segment=data[_NEW_SEGMENT_OFFSET] == 1,
    )


class GarminRecordDecoder:
    """Turns the frames of one transfer into a list of tracks.

    Only track points count as received records; track headers do not.
    When the end-of-transfer frame arrives the count is reconciled against
    the announcement; a difference is logged and kept in ``mismatch`` but the
    decoded tracks are still returned.

    Attributes:
        expected: Record count announced by the device, or None.
        received: Track points seen so far.
        mismatch: The reconciliation error, if any.

    Example:
        >>> decoder = GarminRecordDecoder()
        >>> tracks = decoder.decode(frames)
        >>> decoder.mismatch is None
        True
    """

    def __init__(self) -> None:
        self.expected: int | None = None
        self.received = 0
        self.mismatch: RecordCountMismatch | None = None
        self._tracks: list[Track] = []
        self._current: Track | None = None

    def decode_frame(self, frame: bytes) -> None:
        """Apply one raw (still stuffed) frame.

        Raises:
            FrameCorrupt: If the frame is structurally invalid.
        """
        if len(frame) < _MIN_FRAME_LENGTH or frame[0] != DLE:
            raise FrameCorrupt(f"Invalid frame {frame.hex(' ')}")

        command = frame[1]
        if command == CMD_RECORD_COUNT:
            self.expected = decode_record_count(frame)
            logger.debug("Device announced %d record(s)", self.expected)
        elif command == CMD_ACK:
            pass
        elif command == CMD_TRACK_POINT:
            self.received += 1
            if self._current is None:
                logger.debug("Dropping track point received before any track header")
            else:
                self._current.add_point(decode_track_point(frame))
        elif command == CMD_TRACK:
            if self._current is not None:
                self._tracks.append(self._current)
            self._current = decode_track(frame)
            logger.debug("New track %r", self._current.name)
        elif frame == END_OF_TRANSFER:
            self._finish()
        else:
            logger.debug("Ignoring frame with command 0x%02X", command)

    def _finish(self) -> None:
        if self._current is not None:
            self._tracks.append(self._current)
            self._current = None

        if self.expected is None:
            logger.warning("Transfer ended without a record count announcement")
        elif self.expected != self.received:
            self.mismatch = RecordCountMismatch(self.expected, self.received)
            logger.warning("%s", self.mismatch)

    @property
    def tracks(self) -> list[Track]:
        """Tracks decoded so far, including one still receiving points."""
        if self._current is None:
            return list(self._tracks)
        return [*self._tracks, self._current]

    def decode(self, frames: list[bytes]) -> list[Track]:
        """Apply every frame and return the decoded tracks.

        Raises:
            FrameCorrupt: If any frame is invalid; no tracks are returned.
        """
        for frame in frames:
            self.decode_frame(frame)
        return self.tracks


def decode_tracks(data: bytes) -> list[Track]:
    """Frame and decode a complete captured transfer.

    An unterminated tail after the last complete frame is ignored.

    Raises:
        FrameCorrupt: If any frame is invalid.
    """
    frames, remainder = split_frames(data)
    if remainder:
        logger.warning("Ignoring %d byte(s) of unterminated frame data", len(remainder))
    return GarminRecordDecoder().decode(frames)
