"""NmeaInterpreter: threaded NMEA listener for a serial GPS receiver.

Two threads cooperate through an unbounded FIFO queue:

* The producer owns the transport. It only reads raw chunks and enqueues
  them, so parsing can never stall the serial port.
* The consumer takes chunks strictly in arrival order, feeds the
  ``SentenceReassembler`` and runs the ``NmeaDispatcher`` synchronously.
  Every signal for one interpreter is therefore observed in a single order
  that matches the order the bytes arrived in.

Stopping is cooperative: ``stop()`` closes the queue with a sentinel, the
consumer drains what was already queued and exits. Chunks received after
the close are dropped, and a partial sentence still pending at that point
is discarded.
"""

import logging
import queue
import threading
from collections.abc import Callable
from types import TracebackType

from navlink.errors import TransportError
from navlink.nmea.dispatcher import NmeaDispatcher
from navlink.nmea.reassembler import SentenceReassembler
from navlink.nmea.signals import Signal, SignalKind
from navlink.transport import SerialTransport

__all__ = ["NmeaInterpreter"]

logger = logging.getLogger(__name__)

# --- Serial defaults ----------------------------------------------------------

_BAUD = 4800
_ENCODING = "ascii"

_CLOSED = object()  # queue sentinel marking the end of the stream

TransportFactory = Callable[[str, int], SerialTransport]


class NmeaInterpreter:
    """Listens to a serial port and dispatches the NMEA sentences it receives.

    Two ways to run it are supported.

    With a serial port (the interpreter owns the transport)::

        dispatcher = NmeaDispatcher(on_signal=handle)
        with NmeaInterpreter("/dev/ttyUSB0", dispatcher=dispatcher):
            wait_for_user()

    Without a port, feeding chunks from any byte source::

        interpreter = NmeaInterpreter(dispatcher=dispatcher)
        interpreter.start()
        interpreter.receive(chunk)
        interpreter.stop()

    ``start()`` on an interpreter that is already listening raises
    ``RuntimeError``; call ``stop()`` first.

    Args:
        port: Serial device to open on ``start()``; ``None`` for no transport.
        baud: Baud rate (default: ``4800``).
        dispatcher: Dispatcher that receives complete sentences. A default
            ``NmeaDispatcher`` is created when omitted.
        transport_factory: Builds the transport from ``(port, baud)``.
    """

    def __init__(
        self,
        port: str | None = None,
        baud: int = _BAUD,
        dispatcher: NmeaDispatcher | None = None,
        transport_factory: TransportFactory = SerialTransport,
    ) -> None:
        self._port = port
        self._baud = baud
        self.dispatcher = dispatcher if dispatcher is not None else NmeaDispatcher()
        self._transport_factory = transport_factory
        self._reassembler = SentenceReassembler()
        self._queue: queue.Queue[object] = queue.Queue()
        self._transport: SerialTransport | None = None
        self._producer: threading.Thread | None = None
        self._consumer: threading.Thread | None = None
        self._stopping = threading.Event()
        self._closed = True

    @property
    def is_started(self) -> bool:
        return self._consumer is not None

    def start(self, port: str | None = None, baud: int | None = None) -> None:
        """Open the transport (if a port is known) and start listening.

        Raises:
            RuntimeError: If the interpreter is already started.
            TransportError: If the serial port cannot be opened.
        """
        if self.is_started:
            raise RuntimeError("NmeaInterpreter is already started; call stop() first.")
        if port is not None:
            self._port = port
        if baud is not None:
            self._baud = baud

        if self._port is not None:
            transport = self._transport_factory(self._port, self._baud)
            transport.open()
            self._transport = transport

        self._queue = queue.Queue()
        self._reassembler.reset()
        self._stopping.clear()
        self._closed = False

        self._consumer = threading.Thread(
            target=self._consume, name="nmea-consumer", daemon=True
        )
        self._consumer.start()
        if self._transport is not None:
            self._producer = threading.Thread(
                target=self._produce, args=(self._transport,), name="nmea-producer", daemon=True
            )
            self._producer.start()
        logger.info("NMEA interpreter started on %s (%d baud)", self._port, self._baud)

    def receive(self, chunk: str | bytes) -> None:
        """Enqueue a raw chunk for the consumer. Never blocks on parsing."""
        if self._closed:
            logger.debug("Dropping chunk received while stopped")
            return
        if isinstance(chunk, bytes):
            chunk = chunk.decode(_ENCODING, errors="replace")
        self._queue.put(chunk)

    def stop(self) -> None:
        """Stop listening, drain queued chunks and release the transport.

        Safe to call on an interpreter that is not started.
        """
        if not self.is_started:
            return

        self._closed = True
        self._stopping.set()
        try:
            if self._producer is not None:
                self._producer.join()
            self._queue.put(_CLOSED)
            if self._consumer is not None:
                self._consumer.join()
        finally:
            self._producer = None
            self._consumer = None
            self._reassembler.reset()
            if self._transport is not None:
                transport, self._transport = self._transport, None
                transport.close()
        logger.info("NMEA interpreter stopped")

    def _produce(self, transport: SerialTransport) -> None:
        while not self._stopping.is_set():
            try:
                data = transport.read()
            except TransportError as exc:
                logger.error("Transport failed: %s", exc, exc_info=True)
                self._queue.put(exc)
                return
            if data:
                self.receive(data)

    def _consume(self) -> None:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            if isinstance(item, TransportError):
                self.dispatcher.emit(Signal(SignalKind.TRANSPORT_ERROR, item))
                continue
            for sentence in self._reassembler.feed(str(item)):
                try:
                    self.dispatcher.dispatch(sentence)
                except Exception:
                    # An observer raised; keep the consumer alive for later chunks.
                    logger.exception("Signal observer failed on %r", sentence)

    def __enter__(self) -> "NmeaInterpreter":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()
