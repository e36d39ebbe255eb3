"""DLE framing for the Garmin serial protocol.

Frames start with 0x10 and end with 0x10 0x03. Because a literal 0x10 in
the payload is always doubled by the sender, the closing 0x10 is the only
one that is unpaired: a 0x03 ends the frame exactly when it follows an odd
run of 0x10 bytes. An even run means the 0x03 is ordinary payload data.

Example (literal 0x10 in the data, sent as 10 10)::

    10 22 18 ... 10 10 03 ... 7A 10 03
                 ^^^^^ ^^        ^^^^^
                 even  data      odd run + 03 = end of frame
"""

import logging

from navlink.garmin.types import DLE, ETX

__all__ = ["GarminFramer", "destuff", "split_frames"]

logger = logging.getLogger(__name__)


def _find_frame_end(data: bytes, start: int) -> int | None:
    """Return the index of the 0x03 that closes the frame starting at ``start``.

    Returns None when the frame is not terminated yet.
    """
    count = 0
    for index in range(start + 1, len(data)):
        byte = data[index]
        if byte == DLE:
            count += 1
        elif byte == ETX:
            if count % 2 == 1:
                return index
        else:
            count = 0
    return None


def split_frames(data: bytes) -> tuple[list[bytes], bytes]:
    """Split a byte stream into complete DLE frames.

    Bytes before a start marker are skipped. Frames are returned raw (still
    stuffed), each including its leading 0x10 and trailing 0x10 0x03.

    Args:
        data: Raw bytes as received from the device.

    Returns:
        A tuple of (frames, remainder) where remainder is the unterminated
        tail starting at the last start marker, or ``b""``.

    Example:
        >>> split_frames(bytes.fromhex("10 06 02 22 00 d6 10 03 10 1b"))
        ([b'\\x10\\x06\\x02"\\x00\\xd6\\x10\\x03'], b'\\x10\\x1b')
    """
    frames: list[bytes] = []
    position = 0
    while True:
        start = data.find(DLE, position)
        if start == -1:
            if position < len(data):
                logger.debug("Skipping %d byte(s) outside any frame", len(data) - position)
            return frames, b""
        if start > position:
            logger.debug("Skipping %d byte(s) before frame start", start - position)

        end = _find_frame_end(data, start)
        if end is None:
            return frames, data[start:]

        frames.append(data[start : end + 1])
        position = end + 1


def destuff(frame: bytes) -> bytes:
    """Collapse doubled 0x10 bytes inside a frame.

    Only the bytes between the start marker and the closing 0x10 0x03 are
    examined. The compaction keeps a read cursor that visits every byte and
    a write cursor that moves only when a byte survives. A 0x10 directly
    after a kept 0x10 is the second half of an escaped pair and is dropped,
    so ``10 10`` becomes ``10`` and ``10 10 10 10`` becomes ``10 10``.

    Example:
        >>> destuff(bytes.fromhex("10 22 10 10 05 7a 10 03"))
        b'\\x10"\\x10\\x05z\\x10\\x03'
    """
    if len(frame) < 3:
        return bytes(frame)

    buffer = bytearray(frame)
    stop = len(buffer) - 2
    write = 1
    previous_was_escape = False
    for read in range(1, stop):
        byte = buffer[read]
        if byte == DLE and previous_was_escape:
            previous_was_escape = False
            continue
        previous_was_escape = byte == DLE
        buffer[write] = byte
        write += 1

    return bytes(buffer[:write]) + bytes(buffer[stop:])


class GarminFramer:
    """Incremental framer holding the unterminated tail between feeds.

    Example:
        >>> framer = GarminFramer()
        >>> framer.feed(b"\\x10\\x06\\x02\\x22")
        []
        >>> framer.feed(b"\\x00\\xd6\\x10\\x03")
        [b'\\x10\\x06\\x02"\\x00\\xd6\\x10\\x03']
    """

    def __init__(self) -> None:
        self._remainder = b""

    @property
    def remainder(self) -> bytes:
        return self._remainder

    def feed(self, data: bytes) -> list[bytes]:
        """Add received bytes and return the frames they complete."""
        frames, self._remainder = split_frames(self._remainder + data)
        return frames

    def reset(self) -> None:
        self._remainder = b""
