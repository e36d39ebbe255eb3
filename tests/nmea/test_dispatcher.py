"""Tests for NmeaDispatcher."""

import logging
from unittest.mock import MagicMock

import pytest

from navlink.errors import ChecksumMismatch, DecoderFault, UnrecognizedSentence
from navlink.nmea.dispatcher import NmeaDispatcher, sentence_id
from navlink.nmea.registry import SentenceRegistry
from navlink.nmea.signals import Signal, SignalKind
from tests.helpers import GGA_REFERENCE, RMC_REFERENCE, nmea


def _failing_decoder(fields):
    raise ZeroDivisionError("boom")


@pytest.fixture
def received():
    return []


@pytest.fixture
def dispatcher(received):
    return NmeaDispatcher(on_signal=received.append)


class TestSentenceId:
    def test_standard_address(self):
        assert sentence_id(["$GPRMC", "1"]) == "RMC"

    def test_missing_dollar_is_tolerated(self):
        assert sentence_id(["GPRMC"]) == "RMC"

    @pytest.mark.parametrize("address", ["$GPRM", "$GPRMCX", ""])
    def test_malformed_address(self, address):
        with pytest.raises(UnrecognizedSentence):
            sentence_id([address])


class TestDispatch:
    def test_raw_sentence_comes_first(self, dispatcher, received):
        assert dispatcher.dispatch(RMC_REFERENCE + "\r") is True
        assert received[0] == Signal(SignalKind.RAW_SENTENCE, RMC_REFERENCE)
        assert received[-1].kind is SignalKind.POSITION_UPDATE

    def test_dispatch_is_idempotent(self, dispatcher, received):
        dispatcher.dispatch(GGA_REFERENCE)
        first = list(received)
        received.clear()
        dispatcher.dispatch(GGA_REFERENCE)
        # GGA timestamps are placed on today's date, identical within a test.
        assert received == first

    def test_bad_checksum(self, dispatcher, received):
        assert dispatcher.dispatch(RMC_REFERENCE[:-2] + "00") is False
        assert [signal.kind for signal in received] == [SignalKind.ERROR]
        assert isinstance(received[0].value, ChecksumMismatch)

    def test_unknown_sentence(self, dispatcher, received):
        sentence = nmea("GPXTE,A,A,0.67,L,N")
        assert dispatcher.dispatch(sentence) is False
        assert [signal.kind for signal in received] == [SignalKind.RAW_SENTENCE, SignalKind.ERROR]
        assert isinstance(received[1].value, UnrecognizedSentence)

    def test_decoder_fault_is_contained(self, received):
        registry = SentenceRegistry().register("XYZ", "broken", _failing_decoder)
        dispatcher = NmeaDispatcher(registry=registry, on_signal=received.append)
        assert dispatcher.dispatch(nmea("GPXYZ,1")) is False
        error = received[-1].value
        assert isinstance(error, DecoderFault)
        assert isinstance(error.__cause__, ZeroDivisionError)

    def test_decoder_index_error_is_contained(self, dispatcher, received):
        assert dispatcher.dispatch(nmea("GPGGA,123519")) is False
        assert isinstance(received[-1].value, DecoderFault)

    def test_malformed_field_does_not_fail_sentence(self, dispatcher, received):
        body = "GPRMC,123519,A,48x7.038,N,01131.000,E,022.4,084.4,230394,003.1,W"
        assert dispatcher.dispatch(nmea(body)) is True
        kinds = [signal.kind for signal in received]
        assert SignalKind.ERROR in kinds
        assert kinds[-1] is SignalKind.POSITION_UPDATE

    def test_uses_injected_logger(self):
        logger = MagicMock(spec=logging.Logger)
        dispatcher = NmeaDispatcher(logger=logger)
        dispatcher.dispatch("$GPRMC,garbage*00")
        logger.warning.assert_called_once()


class TestParse:
    def test_returns_signals_without_emitting_them(self, dispatcher, received):
        signals = dispatcher.parse(RMC_REFERENCE)
        assert [signal.kind for signal in received] == [SignalKind.RAW_SENTENCE]
        assert signals[-1].kind is SignalKind.POSITION_UPDATE

    def test_raises_checksum_mismatch(self, dispatcher):
        with pytest.raises(ChecksumMismatch):
            dispatcher.parse("$GPRMC,123519,A")

    def test_raises_unrecognized(self, dispatcher):
        with pytest.raises(UnrecognizedSentence):
            dispatcher.parse(nmea("GPXTE,A"))


class TestSubscriptions:
    def test_subscribe_by_kind(self, dispatcher):
        positions = []
        dispatcher.subscribe(SignalKind.POSITION, positions.append)
        dispatcher.dispatch(RMC_REFERENCE)
        dispatcher.dispatch(GGA_REFERENCE)
        assert len(positions) == 2
        assert positions[0].value.lat == pytest.approx(48.1173)

    def test_unsubscribe(self, dispatcher):
        callback = MagicMock()
        dispatcher.subscribe(SignalKind.RAW_SENTENCE, callback)
        dispatcher.unsubscribe(SignalKind.RAW_SENTENCE, callback)
        dispatcher.dispatch(RMC_REFERENCE)
        callback.assert_not_called()

    def test_unsubscribe_unknown_callback(self, dispatcher):
        with pytest.raises(ValueError):
            dispatcher.unsubscribe(SignalKind.RAW_SENTENCE, MagicMock())

    def test_observer_exception_propagates(self, dispatcher):
        dispatcher.subscribe(SignalKind.RAW_SENTENCE, MagicMock(side_effect=RuntimeError("observer")))
        with pytest.raises(RuntimeError, match="observer"):
            dispatcher.dispatch(RMC_REFERENCE)
