"""navlink: NMEA 0183 and Garmin track transfer decoding for GPS receivers."""

from navlink.detect import DetectedPort, available_ports, scan_ports
from navlink.errors import (
    ChecksumMismatch,
    ConfigError,
    DecoderFault,
    FrameCorrupt,
    GarminError,
    MalformedField,
    NavlinkError,
    NmeaError,
    RecordCountMismatch,
    TransferError,
    TransferNoResponse,
    TransferTimeout,
    TransportError,
    UnrecognizedSentence,
)
from navlink.garmin import (
    Track,
    TrackPoint,
    TrackTransfer,
    get_tracks,
    get_tracks_from_file,
)
from navlink.nmea import (
    NmeaDispatcher,
    NmeaInterpreter,
    PositionUpdate,
    SentenceRegistry,
    Signal,
    SignalKind,
)
from navlink.transport import SerialTransport

__all__ = [
    "ChecksumMismatch",
    "ConfigError",
    "DecoderFault",
    "DetectedPort",
    "FrameCorrupt",
    "GarminError",
    "MalformedField",
    "NavlinkError",
    "NmeaDispatcher",
    "NmeaError",
    "NmeaInterpreter",
    "PositionUpdate",
    "RecordCountMismatch",
    "SentenceRegistry",
    "SerialTransport",
    "Signal",
    "SignalKind",
    "Track",
    "TrackPoint",
    "TrackTransfer",
    "TransferError",
    "TransferNoResponse",
    "TransferTimeout",
    "TransportError",
    "UnrecognizedSentence",
    "available_ports",
    "get_tracks",
    "get_tracks_from_file",
    "scan_ports",
]
