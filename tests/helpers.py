"""Builders for NMEA sentences and Garmin frames used across the tests."""

import struct

from navlink.nmea.checksum import checksum

DLE = 0x10

# Well-known sentences with checksums computed by real receivers.
RMC_REFERENCE = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"
GGA_REFERENCE = "$GNGGA,123519.00,4807.038,N,01131.000,E,1,08,0.9,545.4,M,47.0,M,,*7F"


def nmea(body: str) -> str:
    """Wrap a sentence body ("GPGGA,...") with '$' and its checksum."""
    return f"${body}*{checksum(body)}"


# --- Garmin frames ------------------------------------------------------------


def _stuff(payload: bytes) -> bytes:
    return payload.replace(bytes([DLE]), bytes([DLE, DLE]))


def garmin_frame(command: int, data: bytes) -> bytes:
    """Build a stuffed frame: 10 <cmd> <size> <data> <checksum> 10 03."""
    body = bytes([command, len(data)]) + data
    check = -sum(body) & 0xFF
    return bytes([DLE]) + bytes([command]) + _stuff(bytes([len(data)]) + data + bytes([check])) + b"\x10\x03"


def record_count_frame(count: int) -> bytes:
    return garmin_frame(0x1B, struct.pack("<H", count))


def track_frame(name: str) -> bytes:
    # display flag, color, name, NUL terminator
    return garmin_frame(0x63, bytes([0x01, 0xFF]) + name.encode("ascii") + b"\x00")


def height_word(height_m: float) -> int:
    """Pack a height the way the device does (float layout, bias 128)."""
    return struct.unpack("<I", struct.pack("<f", height_m * 2))[0]


def track_point_frame(
    lat: float,
    lon: float,
    height_m: float = 0.0,
    time: int = 0,
    new_segment: bool = False,
) -> bytes:
    data = struct.pack(
        "<iiIIi",
        round(lat * 2**31 / 180),
        round(lon * 2**31 / 180),
        time,
        height_word(height_m),
        0,
    )
    data += bytes([1 if new_segment else 0, 0, 0, 0])
    return garmin_frame(0x22, data)


END_FRAME = bytes([0x10, 0x0C, 0x02, 0x06, 0x00, 0xEC, 0x10, 0x03])
