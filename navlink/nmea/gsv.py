"""GSV sentence decoder.

GSV (GNSS Satellites in View) reports up to four satellites per sentence;
a full sky view spans several sentences.

GSV Sentence Format:
    $GPGSV,2,1,08,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75
           | | |  |  |  |   |  |
           | | |  |  |  |   |  +-- Next satellite block (4 fields each)
           | | |  |  |  |   +-- SNR (dB-Hz, empty when not tracked)
           | | |  |  |  +-- Azimuth (degrees)
           | | |  |  +-- Elevation (degrees)
           | | |  +-- Satellite PRN
           | | +-- Total satellites in view
           | +-- Sentence number
           +-- Total number of sentences
"""

from navlink.nmea.fields import parse_int_field
from navlink.nmea.signals import Signal, SignalKind, malformed_field, update_signals
from navlink.nmea.types import PositionUpdate, Satellite

__all__ = ["decode_gsv"]

_BLOCKS_PER_SENTENCE = 4
_BLOCK_WIDTH = 4


def _decode_block(fields: list[str], index: int) -> Signal | None:
    """Decode the satellite block starting at ``index``.

    Returns None when the block is missing or any of its four fields is
    empty, a MalformedField error signal when a field is not an integer.
    """
    if index + 3 >= len(fields):
        return None

    block = fields[index : index + _BLOCK_WIDTH]
    if not all(block):
        return None

    prn, elevation, azimuth, snr = (parse_int_field(value) for value in block)
    if prn is None or elevation is None or azimuth is None or snr is None:
        return malformed_field("GSV", "satellite", ",".join(block))

    satellite = Satellite(
        prn=prn,
        azimuth_deg=azimuth,
        elevation_deg=elevation,
        snr_db=snr,
    )
    return Signal(SignalKind.SATELLITE, satellite)


def decode_gsv(fields: list[str]) -> list[Signal]:
    """Decode the fields of a GSV sentence.

    Yields the satellites-in-view count and one SATELLITE signal per
    complete block, in sentence order.
    """
    signals: list[Signal] = []

    in_view = parse_int_field(fields[3])
    if in_view is not None:
        signals.append(Signal(SignalKind.SATELLITES_IN_VIEW, in_view))

    for block_number in range(1, _BLOCKS_PER_SENTENCE + 1):
        signal = _decode_block(fields, block_number * _BLOCK_WIDTH)
        if signal is not None:
            signals.append(signal)

    return signals + update_signals(PositionUpdate(source="GSV"))
