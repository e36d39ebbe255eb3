"""Tests for NMEA checksum computation and validation."""

import pytest

from navlink.nmea.checksum import checksum, is_valid, split_fields
from tests.helpers import GGA_REFERENCE, RMC_REFERENCE


class TestChecksum:
    """Tests for checksum function."""

    def test_reference_rmc_checksum(self):
        assert checksum(RMC_REFERENCE) == "6A"

    def test_ignores_existing_suffix(self):
        assert checksum(RMC_REFERENCE) == checksum(RMC_REFERENCE.split("*")[0])

    def test_dollar_sign_is_optional(self):
        assert checksum(RMC_REFERENCE[1:]) == "6A"

    def test_zero_padded_uppercase(self):
        # "A" ^ "A" == 0
        assert checksum("$AA") == "00"
        # "A" ^ "K" == 0x0A
        assert checksum("$AK") == "0A"


class TestIsValid:
    """Tests for is_valid function."""

    def test_reference_rmc_is_valid(self):
        assert is_valid(RMC_REFERENCE) is True

    def test_reference_gga_is_valid(self):
        assert is_valid(GGA_REFERENCE) is True

    def test_valid_with_crlf(self):
        assert is_valid(RMC_REFERENCE + "\r\n") is True

    def test_wrong_checksum(self):
        assert is_valid(RMC_REFERENCE[:-2] + "FF") is False

    def test_lowercase_checksum_is_rejected(self):
        sentence = "$AK*0a"
        assert is_valid(sentence) is False

    def test_missing_asterisk(self):
        assert is_valid(RMC_REFERENCE.replace("*", "")) is False

    def test_truncated_checksum(self):
        assert is_valid(RMC_REFERENCE[:-1]) is False

    def test_empty_string(self):
        assert is_valid("") is False

    @pytest.mark.parametrize("position", [1, 10, 25, 40, 60])
    def test_single_bit_corruption_is_detected(self, position):
        star = RMC_REFERENCE.index("*")
        assert position < star
        corrupted = (
            RMC_REFERENCE[:position]
            + chr(ord(RMC_REFERENCE[position]) ^ 0x01)
            + RMC_REFERENCE[position + 1 :]
        )
        assert is_valid(corrupted) is False


class TestSplitFields:
    def test_stops_at_asterisk(self):
        assert split_fields("$GPHDT,123.4,T*33") == ["$GPHDT", "123.4", "T"]

    def test_keeps_empty_fields(self):
        assert split_fields("$GPGLL,,,,,,V*00") == ["$GPGLL", "", "", "", "", "", "V"]

    def test_without_checksum(self):
        assert split_fields("$GPZDA,1,2") == ["$GPZDA", "1", "2"]
