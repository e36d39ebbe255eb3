"""Decoded signals emitted by the NMEA dispatcher.

Every observation the dispatcher makes is a ``Signal`` whose ``kind`` tells
the observer how to read ``value``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from navlink.errors import MalformedField
from navlink.nmea.types import DOP, Position, PositionUpdate

__all__ = [
    "Signal",
    "SignalKind",
    "check_position",
    "malformed_field",
    "update_signals",
]


class SignalKind(Enum):
    """What a ``Signal`` carries, with the type of its ``value``."""

    RAW_SENTENCE = "raw_sentence"  # str
    POSITION = "position"  # Position
    DATETIME = "datetime"  # datetime (UTC)
    SPEED = "speed"  # float, km/h
    BEARING = "bearing"  # float, degrees
    DECLINATION = "declination"  # float, degrees, west negative
    FIX_OBTAINED = "fix_obtained"  # None
    FIX_LOST = "fix_lost"  # None
    ALTITUDE = "altitude"  # float, metres
    LINK_QUALITY = "link_quality"  # LinkQuality
    SATELLITE_COUNT = "satellite_count"  # int, used in the solution
    SATELLITES_IN_VIEW = "satellites_in_view"  # int
    SATELLITE = "satellite"  # Satellite
    DOP = "dop"  # DOP
    FIX_TYPE = "fix_type"  # int, 1 = none, 2 = 2D, 3 = 3D
    MAP_DATUM = "map_datum"  # str
    HEADING = "heading"  # float, degrees
    ESTIMATED_ERROR = "estimated_error"  # EstimatedError
    POSITION_UPDATE = "position_update"  # PositionUpdate
    ERROR = "error"  # NmeaError
    TRANSPORT_ERROR = "transport_error"  # TransportError


@dataclass(frozen=True)
class Signal:
    """One decoded observation.

    Example:
        >>> Signal(SignalKind.SPEED, 41.48)
        Signal(kind=<SignalKind.SPEED: 'speed'>, value=41.48)
    """

    kind: SignalKind
    value: Any = None


def update_signals(update: PositionUpdate) -> list[Signal]:
    """Expand a PositionUpdate into its discrete signals.

    One signal is produced for each field the sentence filled in, followed
    by the fix transition ('A' obtained, 'V' lost) and finally the aggregate
    ``POSITION_UPDATE`` itself, which is always last.
    """
    signals: list[Signal] = []
    if update.position is not None:
        signals.append(Signal(SignalKind.POSITION, update.position))
    if update.timestamp is not None:
        signals.append(Signal(SignalKind.DATETIME, update.timestamp))
    if update.speed_kmh is not None:
        signals.append(Signal(SignalKind.SPEED, update.speed_kmh))
    if update.bearing_deg is not None:
        signals.append(Signal(SignalKind.BEARING, update.bearing_deg))
    if update.declination_deg is not None:
        signals.append(Signal(SignalKind.DECLINATION, update.declination_deg))
    if update.altitude_m is not None:
        signals.append(Signal(SignalKind.ALTITUDE, update.altitude_m))
    if update.link_quality is not None:
        signals.append(Signal(SignalKind.LINK_QUALITY, update.link_quality))
    if update.satellite_count is not None:
        signals.append(Signal(SignalKind.SATELLITE_COUNT, update.satellite_count))
    if update.pdop is not None and update.hdop is not None and update.vdop is not None:
        signals.append(
            Signal(SignalKind.DOP, DOP(pdop=update.pdop, hdop=update.hdop, vdop=update.vdop))
        )

    if update.fix == "A":
        signals.append(Signal(SignalKind.FIX_OBTAINED))
    elif update.fix == "V":
        signals.append(Signal(SignalKind.FIX_LOST))

    signals.append(Signal(SignalKind.POSITION_UPDATE, update))
    return signals


def malformed_field(sentence_id: str, field_name: str, raw: str) -> Signal:
    """Report a present but unparsable field without failing the sentence."""
    return Signal(SignalKind.ERROR, MalformedField(sentence_id, field_name, raw))


def check_position(
    sentence_id: str,
    raw_fields: list[str],
    position: Position | None,
) -> list[Signal]:
    """Flag coordinate fields that were all present yet gave no valid position.

    Args:
        sentence_id: Id of the sentence being decoded, for the error message.
        raw_fields: The four raw fields (latitude, N/S, longitude, E/W).
        position: What ``parse_position`` made of them.

    Returns:
        An empty list, or a single ``MalformedField`` error signal.
    """
    if not all(raw_fields):
        return []
    if position is not None and position.is_valid():
        return []
    return [malformed_field(sentence_id, "position", ",".join(raw_fields))]
