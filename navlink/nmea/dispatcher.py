"""Sentence dispatch: checksum, identification, decoding and signal fan-out.

``NmeaDispatcher.dispatch`` never raises for bad input. Every failure is
logged, reported to observers as an ``ERROR`` signal and turned into a
``False`` return so the caller can carry on with the next sentence.
``NmeaDispatcher.parse`` is the strict form used underneath; it raises the
``navlink.errors`` taxonomy instead.
"""

import logging
from collections import defaultdict
from collections.abc import Callable

from navlink.errors import ChecksumMismatch, DecoderFault, NmeaError, UnrecognizedSentence
from navlink.nmea.checksum import is_valid, split_fields
from navlink.nmea.registry import SentenceRegistry
from navlink.nmea.signals import Signal, SignalKind

__all__ = ["NmeaDispatcher", "SignalCallback", "sentence_id"]

_module_logger = logging.getLogger(__name__)

_ADDRESS_LENGTH = 6

SignalCallback = Callable[[Signal], None]


def sentence_id(fields: list[str]) -> str:
    """Extract the three-character sentence id from the address field.

    Raises:
        UnrecognizedSentence: If the address is not "$" + 5 characters.
    """
    address = fields[0] if fields else ""
    if not address.startswith("$"):
        address = "$" + address
    if len(address) != _ADDRESS_LENGTH:
        raise UnrecognizedSentence(f"Malformed sentence address {address!r}")
    return address[3:]


class NmeaDispatcher:
    """Validates, identifies and decodes NMEA sentences.

    Observers are notified synchronously in the calling thread, in the
    order the signals were produced. Two ways to observe are supported:

    A single callback receiving every signal::

        dispatcher = NmeaDispatcher(on_signal=print)

    Per-kind subscriptions::

        dispatcher.subscribe(SignalKind.POSITION, lambda s: plot(s.value))

    Args:
        registry: Sentence decoders to use. Defaults to
            ``SentenceRegistry.with_defaults()``; the dispatcher owns it.
        on_signal: Callback receiving every emitted signal.
        logger: Logger for diagnostics; defaults to this module's logger.
    """

    def __init__(
        self,
        registry: SentenceRegistry | None = None,
        on_signal: SignalCallback | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.registry = registry if registry is not None else SentenceRegistry.with_defaults()
        self._on_signal = on_signal
        self._subscribers: defaultdict[SignalKind, list[SignalCallback]] = defaultdict(list)
        self._logger = logger if logger is not None else _module_logger

    def subscribe(self, kind: SignalKind, callback: SignalCallback) -> None:
        """Call ``callback`` for every signal of ``kind``."""
        self._subscribers[kind].append(callback)

    def unsubscribe(self, kind: SignalKind, callback: SignalCallback) -> None:
        """Remove a callback added with ``subscribe``.

        Raises:
            ValueError: If the callback was not subscribed to ``kind``.
        """
        self._subscribers[kind].remove(callback)

    def emit(self, signal: Signal) -> None:
        """Deliver one signal to the catch-all callback and its subscribers."""
        if self._on_signal is not None:
            self._on_signal(signal)
        for callback in list(self._subscribers.get(signal.kind, ())):
            callback(signal)

    def parse(self, sentence: str) -> list[Signal]:
        """Decode one sentence, emitting the raw sentence signal on the way.

        Returns:
            The signals produced by the sentence decoder, aggregate
            POSITION_UPDATE last. They are returned, not emitted.

        Raises:
            ChecksumMismatch: If the checksum is missing or wrong.
            UnrecognizedSentence: If the address is malformed or the sentence
                id is not registered.
            DecoderFault: If the decoder raised; the original exception is
                chained as ``__cause__``.
        """
        sentence = sentence.strip()
        if not is_valid(sentence):
            raise ChecksumMismatch(f"Checksum mismatch in {sentence!r}")

        self.emit(Signal(SignalKind.RAW_SENTENCE, sentence))

        fields = split_fields(sentence)
        key = sentence_id(fields)
        descriptor = self.registry.lookup(key)
        if descriptor is None:
            raise UnrecognizedSentence(f"No decoder registered for {key!r}")

        try:
            return descriptor.decode_fn(fields)
        except Exception as exc:
            raise DecoderFault(f"{descriptor.id} decoder failed on {sentence!r}") from exc

    def dispatch(self, sentence: str) -> bool:
        """Decode one sentence and emit its signals.

        Returns:
            True if the sentence was recognized and decoded, False if it was
            dropped (bad checksum, unknown type, decoder failure).
        """
        try:
            signals = self.parse(sentence)
        except ChecksumMismatch as exc:
            self._logger.warning("%s", exc)
            self._report(exc)
            return False
        except UnrecognizedSentence as exc:
            self._logger.info("%s", exc)
            self._report(exc)
            return False
        except DecoderFault as exc:
            self._logger.error("%s", exc, exc_info=True)
            self._report(exc)
            return False

        for signal in signals:
            if signal.kind is SignalKind.ERROR:
                self._logger.debug("%s", signal.value)
            self.emit(signal)
        return True

    def _report(self, error: NmeaError) -> None:
        self.emit(Signal(SignalKind.ERROR, error))
