"""NMEA 0183 sentence decoding and serial listening."""

from navlink.nmea.checksum import checksum, is_valid, split_fields
from navlink.nmea.dispatcher import NmeaDispatcher
from navlink.nmea.interpreter import NmeaInterpreter
from navlink.nmea.reassembler import SentenceReassembler
from navlink.nmea.registry import SentenceRegistry
from navlink.nmea.signals import Signal, SignalKind
from navlink.nmea.types import (
    DOP,
    EstimatedError,
    LinkQuality,
    Position,
    PositionUpdate,
    Satellite,
    SentenceDescriptor,
)

__all__ = [
    "DOP",
    "EstimatedError",
    "LinkQuality",
    "NmeaDispatcher",
    "NmeaInterpreter",
    "Position",
    "PositionUpdate",
    "Satellite",
    "SentenceDescriptor",
    "SentenceReassembler",
    "SentenceRegistry",
    "Signal",
    "SignalKind",
    "checksum",
    "is_valid",
    "split_fields",
]
