"""TrackTransfer: bulk download of the track log from a Garmin receiver.

The host sends one track request, then answers every chunk the device
sends with an acknowledgement until the buffer ends with the
end-of-transfer frame::

    IDLE --request--> AWAITING_FIRST_BYTE --data--> RECEIVING --END--> COMPLETE
                             |                          |
                         no reply                   idle too long
                             v                          v
                          ABORTED                   TIMED_OUT

Only the complete buffer is decoded; a transfer that stops half way
returns nothing.
"""

import logging
import time
from collections.abc import Callable
from os import PathLike
from pathlib import Path

from navlink.errors import (
    FrameCorrupt,
    GarminError,
    RecordCountMismatch,
    TransferNoResponse,
    TransferTimeout,
    TransportError,
)
from navlink.garmin.framing import split_frames
from navlink.garmin.records import GarminRecordDecoder, decode_record_count, decode_tracks
from navlink.garmin.types import (
    ACK_COMMAND,
    CMD_RECORD_COUNT,
    END_OF_TRANSFER,
    TRACK_REQUEST,
    Track,
    TransferState,
)
from navlink.transport import SerialTransport

__all__ = [
    "TrackTransfer",
    "get_tracks",
    "get_tracks_from_bytes",
    "get_tracks_from_file",
]

logger = logging.getLogger(__name__)

# --- Transfer defaults --------------------------------------------------------

_BAUD = 9600
_FIRST_BYTE_TIMEOUT = 0.2  # seconds to wait for the device to answer the request
_IDLE_TIMEOUT = 2.0  # seconds of silence that abort a running transfer
_BYTES_PER_RECORD = 30  # approximate wire size of one record, for progress only

ProgressCallback = Callable[[float], None]
CompleteCallback = Callable[[list[Track]], None]
ErrorCallback = Callable[[Exception], None]


class TrackTransfer:
    """Runs one track download over an open transport.

    The transport only needs ``write(data)`` and ``read() -> bytes``;
    ``read()`` is polled and should block briefly when no data is waiting,
    as ``SerialTransport.read`` does.

    Args:
        transport: Open byte transport to the device.
        first_byte_timeout: Seconds to wait for the first reply.
        idle_timeout: Seconds without data before the transfer times out.
        bytes_per_record: Bytes per record used for the progress estimate.
        clock: Monotonic clock in seconds.
        on_progress: Called with the estimated percentage after each chunk.
        on_complete: Called with the decoded tracks.
        on_error: Called with the exception before it is raised.

    Example:
        >>> with SerialTransport("/dev/ttyUSB0", 9600) as transport:
        ...     tracks = TrackTransfer(transport).run()
    """

    def __init__(
        self,
        transport: SerialTransport,
        first_byte_timeout: float = _FIRST_BYTE_TIMEOUT,
        idle_timeout: float = _IDLE_TIMEOUT,
        bytes_per_record: int = _BYTES_PER_RECORD,
        clock: Callable[[], float] = time.monotonic,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._transport = transport
        self._first_byte_timeout = first_byte_timeout
        self._idle_timeout = idle_timeout
        self._bytes_per_record = bytes_per_record
        self._clock = clock
        self._on_progress = on_progress
        self._on_complete = on_complete
        self._on_error = on_error

        self._state = TransferState.IDLE
        self._buffer = bytearray()
        self._estimated_size: int | None = None
        self._scanned = 0
        self._last_receipt = 0.0
        self.mismatch: RecordCountMismatch | None = None

    @property
    def state(self) -> TransferState:
        return self._state

    @property
    def progress(self) -> float:
        """Estimated completion in percent, 0 until the record count is known."""
        if not self._estimated_size:
            return 0.0
        return min(len(self._buffer) * 100 / self._estimated_size, 100.0)

    def run(self) -> list[Track]:
        """Request the track log and block until it is received and decoded.

        Raises:
            RuntimeError: If this transfer has already been run.
            TransferNoResponse: If the device does not answer the request.
            TransferTimeout: If the device goes silent before the end frame.
            FrameCorrupt: If the received data cannot be decoded.
            TransportError: If the transport fails.
        """
        if self._state is not TransferState.IDLE:
            raise RuntimeError("A TrackTransfer can only be run once.")

        try:
            self._request()
            self._await_first_byte()
            self._receive_until_end()
            tracks = self._decode()
        except (GarminError, TransportError) as exc:
            if self._state not in (TransferState.TIMED_OUT, TransferState.ABORTED):
                self._state = TransferState.ABORTED
            logger.error("Track transfer failed: %s", exc, exc_info=True)
            if self._on_error is not None:
                self._on_error(exc)
            raise

        logger.info("Track transfer complete: %d track(s)", len(tracks))
        if self._on_complete is not None:
            self._on_complete(tracks)
        return tracks

    def _request(self) -> None:
        logger.info("Requesting track log")
        self._state = TransferState.AWAITING_FIRST_BYTE
        self._transport.write(TRACK_REQUEST)

    def _await_first_byte(self) -> None:
        deadline = self._clock() + self._first_byte_timeout
        while True:
            data = self._transport.read()
            if data:
                self._state = TransferState.RECEIVING
                self._receive(data)
                return
            if self._clock() >= deadline:
                self._state = TransferState.ABORTED
                raise TransferNoResponse("Device did not answer the track request.")

    def _receive_until_end(self) -> None:
        while self._state is TransferState.RECEIVING:
            data = self._transport.read()
            if data:
                self._receive(data)
            elif self._clock() - self._last_receipt > self._idle_timeout:
                self._state = TransferState.TIMED_OUT
                raise TransferTimeout(
                    f"No data for {self._idle_timeout} s after {len(self._buffer)} byte(s)."
                )

    def _receive(self, data: bytes) -> None:
        self._last_receipt = self._clock()
        self._buffer.extend(data)
        logger.debug("Received %d byte(s), %d total", len(data), len(self._buffer))

        if self._estimated_size is None:
            self._estimate_size()
        if self._on_progress is not None:
            self._on_progress(self.progress)

        if self._buffer.endswith(END_OF_TRANSFER):
            self._state = TransferState.COMPLETE
        else:
            self._transport.write(ACK_COMMAND)

    def _estimate_size(self) -> None:
        # frames before _scanned were already checked
        pending = bytes(self._buffer[self._scanned :])
        frames, remainder = split_frames(pending)
        self._scanned += len(pending) - len(remainder)
        for frame in frames:
            if len(frame) > 2 and frame[1] == CMD_RECORD_COUNT:
                try:
                    count = decode_record_count(frame)
                except FrameCorrupt:
                    logger.debug("Unreadable record count frame; no progress estimate")
                    return
                self._estimated_size = count * self._bytes_per_record
                logger.info("Expecting %d record(s)", count)
                return

    def _decode(self) -> list[Track]:
        frames, remainder = split_frames(bytes(self._buffer))
        if remainder:
            logger.warning("Ignoring %d byte(s) of unterminated frame data", len(remainder))
        decoder = GarminRecordDecoder()
        tracks = decoder.decode(frames)
        self.mismatch = decoder.mismatch
        return tracks


def get_tracks(port: str, baud: int = _BAUD, **kwargs) -> list[Track]:
    """Download the track log from the receiver on ``port``.

    The serial port is opened for the duration of the call only. Extra
    keyword arguments are passed to ``TrackTransfer``.
    """
    with SerialTransport(port, baud) as transport:
        return TrackTransfer(transport, **kwargs).run()


def get_tracks_from_bytes(data: bytes) -> list[Track]:
    """Decode a transfer captured as raw bytes."""
    return decode_tracks(data)


def get_tracks_from_file(path: str | PathLike[str]) -> list[Track]:
    """Decode a transfer previously captured to a file.

    Raises:
        FrameCorrupt: If the capture cannot be decoded.
        OSError: If the file cannot be read.
    """
    data = Path(path).read_bytes()
    logger.info("Replaying %d byte(s) from %s", len(data), path)
    return decode_tracks(data)
