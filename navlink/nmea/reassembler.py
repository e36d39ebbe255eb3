"""Reassembly of NMEA sentences from arbitrarily fragmented text chunks.

Serial reads return whatever happens to be buffered, so a sentence may be
split over several chunks and a chunk may hold several sentences. The
reassembler keeps at most one pending partial line between calls.

Resynchronisation rule: when a chunk starts with '$', the pending fragment
could never be completed and is dropped.
"""

import logging

__all__ = ["SentenceReassembler"]

logger = logging.getLogger(__name__)


class SentenceReassembler:
    """Turns a stream of text chunks into complete sentences, in order.

    Example:
        >>> reassembler = SentenceReassembler()
        >>> reassembler.feed("$GPGGA,1")
        []
        >>> reassembler.feed("23519*47\\r\\n")
        ['$GPGGA,123519*47\\r']
    """

    def __init__(self) -> None:
        self._pending = ""

    @property
    def pending(self) -> str:
        """The partial line waiting for its terminator."""
        return self._pending

    def feed(self, chunk: str) -> list[str]:
        """Consume a chunk and return the sentences it completes.

        Returned sentences keep their trailing '\\r' when the sender used
        CRLF line endings; the checksum and field parsing ignore it.
        """
        pieces = chunk.split("\n")

        if self._pending and not pieces[0].startswith("$"):
            pieces[0] = self._pending + pieces[0]
        elif self._pending:
            logger.debug("Dropping unterminated fragment %r", self._pending)
        self._pending = ""

        last = pieces[-1]
        if not last.endswith("\r"):
            self._pending = pieces.pop()

        return [piece for piece in pieces if piece and piece != "\r"]

    def reset(self) -> None:
        """Discard any pending partial line."""
        if self._pending:
            logger.debug("Discarding pending fragment %r", self._pending)
        self._pending = ""
