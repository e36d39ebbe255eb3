"""Tests for SentenceReassembler."""

from navlink.nmea.reassembler import SentenceReassembler
from tests.helpers import RMC_REFERENCE


class TestSentenceReassembler:
    def test_complete_line(self):
        reassembler = SentenceReassembler()
        assert reassembler.feed(RMC_REFERENCE + "\r\n") == [RMC_REFERENCE + "\r"]
        assert reassembler.pending == ""

    def test_sentence_split_across_two_chunks(self):
        reassembler = SentenceReassembler()
        assert reassembler.feed(RMC_REFERENCE[:20]) == []
        assert reassembler.pending == RMC_REFERENCE[:20]
        assert reassembler.feed(RMC_REFERENCE[20:] + "\r\n") == [RMC_REFERENCE + "\r"]

    def test_split_between_cr_and_lf(self):
        reassembler = SentenceReassembler()
        assert reassembler.feed(RMC_REFERENCE + "\r") == [RMC_REFERENCE + "\r"]
        assert reassembler.feed("\n$GPGGA") == []
        assert reassembler.pending == "$GPGGA"

    def test_several_sentences_in_order(self):
        reassembler = SentenceReassembler()
        chunk = "$A*41\r\n$B*42\r\n$C"
        assert reassembler.feed(chunk) == ["$A*41\r", "$B*42\r"]
        assert reassembler.feed("*43\r\n") == ["$C*43\r"]

    def test_fragment_dropped_when_new_sentence_starts(self):
        reassembler = SentenceReassembler()
        reassembler.feed("$GPGGA,123")
        assert reassembler.feed("$GPHDT,1*00\r\n") == ["$GPHDT,1*00\r"]

    def test_blank_lines_are_skipped(self):
        reassembler = SentenceReassembler()
        assert reassembler.feed("\r\n\r\n") == []

    def test_reset_discards_pending(self):
        reassembler = SentenceReassembler()
        reassembler.feed("$GPGGA,123")
        reassembler.reset()
        assert reassembler.pending == ""
        assert reassembler.feed("519*00\r\n") == ["519*00\r"]
