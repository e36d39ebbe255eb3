"""Error taxonomy shared by the NMEA and Garmin decoders.

NMEA-side failures are local: the dispatcher logs them, reports them as
``ERROR`` signals and carries on with the next sentence. Garmin-side
structural failures abort the whole transfer and no partial track list is
returned. ``TransportError`` is raised only by the serial transport, never
by protocol decoding.
"""

__all__ = [
    "ChecksumMismatch",
    "ConfigError",
    "DecoderFault",
    "FrameCorrupt",
    "GarminError",
    "MalformedField",
    "NavlinkError",
    "NmeaError",
    "RecordCountMismatch",
    "TransferError",
    "TransferNoResponse",
    "TransferTimeout",
    "TransportError",
    "UnrecognizedSentence",
]


class NavlinkError(Exception):
    """Base class for every error raised by navlink."""


class ConfigError(NavlinkError, ValueError):
    """Invalid registration or constructor argument."""


# --- NMEA ---------------------------------------------------------------------


class NmeaError(NavlinkError):
    """Base class for NMEA sentence failures."""


class ChecksumMismatch(NmeaError):
    """Sentence has no checksum or the checksum does not match."""


class UnrecognizedSentence(NmeaError):
    """Sentence identifier is malformed or not registered."""


class MalformedField(NmeaError):
    """A field was present but could not be parsed.

    Soft error: the sentence is still decoded with the field left as ``None``.
    """

    def __init__(self, sentence_id: str, field_name: str, raw: str) -> None:
        super().__init__(f"{sentence_id}: malformed {field_name} field {raw!r}")
        self.sentence_id = sentence_id
        self.field_name = field_name
        self.raw = raw


class DecoderFault(NmeaError):
    """A sentence decoder raised unexpectedly; the cause is chained."""


# --- Garmin -------------------------------------------------------------------


class GarminError(NavlinkError):
    """Base class for Garmin binary protocol failures."""


class FrameCorrupt(GarminError):
    """A frame failed a structural check; the batch is discarded."""


class RecordCountMismatch(GarminError):
    """Number of records received differs from the announced count.

    Soft error: logged, decoded tracks are still returned.
    """

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Record count mismatch: expected {expected}, received {received}"
        )
        self.expected = expected
        self.received = received


class TransferError(GarminError):
    """A track transfer was aborted."""


class TransferNoResponse(TransferError):
    """The device did not answer the track request."""


class TransferTimeout(TransferError, TimeoutError):
    """The device stopped sending before the end-of-transfer frame."""


# --- Transport ----------------------------------------------------------------


class TransportError(NavlinkError, OSError):
    """The serial transport failed to open, read or write."""
