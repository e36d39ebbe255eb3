"""NMEA checksum computation and field splitting.

NMEA 0183 sentences use a simple XOR checksum for data integrity verification.
The checksum is calculated over all characters between '$' and '*' (exclusive),
then represented as a two-digit uppercase hexadecimal number after the '*'.

Example sentence structure:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
    ^                     checksum content                            ^^
    start                                                  checksum (0x6A = 106)
"""

__all__ = ["checksum", "is_valid", "split_fields"]


def _checksum_content(sentence: str) -> str:
    """Return the characters covered by the checksum.

    The leading '$' is skipped when present and the content stops at the
    first '*' (or at the end of the string when there is none).

    Example:
        >>> _checksum_content("$GPGGA,123519*47")
        'GPGGA,123519'
    """
    start = 1 if sentence.startswith("$") else 0
    end = sentence.find("*")
    if end == -1:
        end = len(sentence)
    return sentence[start:end]


def _calculate_xor_checksum(content: str) -> int:
    """Calculate the XOR checksum of a content string.

    The NMEA checksum algorithm XORs the ASCII value of each character
    in the content. Starting from zero gives the same result as seeding
    with the first character.

    Args:
        content: The string between '$' and '*' (exclusive)

    Returns:
        Integer checksum value (0-255)
    """
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def checksum(sentence: str) -> str:
    """Compute the checksum of an NMEA sentence as two uppercase hex digits.

    Args:
        sentence: NMEA sentence, with or without its '*CC' suffix.

    Returns:
        Two-character zero-padded uppercase hex string.

    Example:
        >>> checksum("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A")
        '6A'
    """
    return f"{_calculate_xor_checksum(_checksum_content(sentence)) & 0xFF:02X}"


def is_valid(sentence: str) -> bool:
    """Validate the checksum of an NMEA sentence.

    Args:
        sentence: Complete NMEA sentence including '$', '*', and checksum.
                  May include trailing whitespace/newlines (will be stripped).

    Returns:
        True if the checksum is valid, False if:
        - There is no '*' checksum delimiter
        - The two characters after '*' do not match the computed checksum

    Example:
        >>> is_valid("$GPGGA,123519")  # no checksum
        False
    """
    sentence = sentence.strip()

    star = sentence.find("*")
    if star == -1:
        return False

    provided = sentence[star + 1 : star + 3]
    return provided == checksum(sentence)


def split_fields(sentence: str) -> list[str]:
    """Split a sentence into comma-delimited fields.

    The sentence is truncated at the first '*' and the remainder is split on
    ','. Empty fields are kept so decoders can index fields by position.

    Example:
        >>> split_fields("$GPGLL,4916.45,N,12311.12,W,,A*31")
        ['$GPGLL', '4916.45', 'N', '12311.12', 'W', '', 'A']
    """
    return sentence.split("*", 1)[0].split(",")
