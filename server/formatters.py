"""JSON formatting of decoded NMEA data for WebSocket transmission."""

import json

from navlink.nmea.types import PositionUpdate

__all__ = ["format_error_message", "format_position_message"]


def format_position_message(update: PositionUpdate) -> str:
    """Serialize one aggregate position update.

    Fields the sentence did not carry are sent as ``null``.
    """
    position = update.position
    timestamp = update.timestamp.isoformat() if update.timestamp is not None else None
    link_quality = int(update.link_quality) if update.link_quality is not None else None

    return json.dumps({
        "type": "position",
        "source": update.source,
        "fix": update.fix.strip() or None,
        "lat": position.lat if position is not None else None,
        "lon": position.lon if position is not None else None,
        "altitude_m": update.altitude_m,
        "timestamp": timestamp,
        "speed_kmh": update.speed_kmh,
        "bearing_deg": update.bearing_deg,
        "declination_deg": update.declination_deg,
        "link_quality": link_quality,
        "satellite_count": update.satellite_count,
        "hdop": update.hdop,
        "pdop": update.pdop,
        "vdop": update.vdop,
    })


def format_error_message(error: Exception) -> str:
    """Serialize a receiver failure, e.g. the serial port disappearing."""
    return json.dumps({
        "type": "error",
        "error": type(error).__name__,
        "message": str(error),
    })
