"""Registry of sentence decoders keyed by three-character sentence id.

The talker prefix is never part of the key, so one registration for "GGA"
serves "$GPGGA", "$GNGGA" and "$GLGGA" alike. Registration is configuration:
it is expected to be complete before sentences are dispatched.
"""

import logging
from collections.abc import Iterator

from navlink.errors import ConfigError
from navlink.nmea.garmin import decode_pgrme, decode_pgrmm, decode_pgrmz
from navlink.nmea.gga import decode_gga
from navlink.nmea.gll import decode_gll
from navlink.nmea.gns import decode_gns
from navlink.nmea.gsa import decode_gsa
from navlink.nmea.gsv import decode_gsv
from navlink.nmea.heading import decode_hdg, decode_hdt
from navlink.nmea.rmc import decode_rmc
from navlink.nmea.types import DecodeFn, SentenceDescriptor
from navlink.nmea.zda import decode_zda

__all__ = ["SentenceRegistry", "normalize_key"]

logger = logging.getLogger(__name__)

_ID_LENGTH = 3
_ADDRESS_LENGTH = 6  # "$" + 2-char talker + 3-char id

_DEFAULT_SENTENCES: tuple[tuple[str, str, DecodeFn], ...] = (
    ("RMC", "Recommended minimum", decode_rmc),
    ("GGA", "Essential fix data", decode_gga),
    ("GNS", "Fix data", decode_gns),
    ("GLL", "Lat/Lon", decode_gll),
    ("GSA", "DOP and active satellites", decode_gsa),
    ("GSV", "Satellites in view", decode_gsv),
    ("ZDA", "Date and time", decode_zda),
    ("$PGRMM", "Garmin currently active horizontal datum", decode_pgrmm),
    ("$PGRMZ", "Garmin altitude in feet", decode_pgrmz),
    ("$PGRME", "Garmin estimated error", decode_pgrme),
    ("$HCHDG", "Garmin compass output", decode_hdg),
    ("HDT", "Heading, true", decode_hdt),
)


def normalize_key(key: str) -> str:
    """Reduce a six-character address ("$GPRMC") to its sentence id ("RMC").

    Shorter keys are returned unchanged.
    """
    if len(key) == _ADDRESS_LENGTH:
        return key[-_ID_LENGTH:]
    return key


def _split_talker(sentence_id: str) -> tuple[str | None, str]:
    """Split a registration id into (talker, id).

    Accepts "RMC", "GPRMC" and "$GPRMC".
    """
    address = sentence_id.lstrip("$")
    if len(address) == _ID_LENGTH + 2:
        return address[:2], address[2:]
    return None, address


class SentenceRegistry:
    """Mapping from sentence id to its descriptor.

    Example:
        >>> registry = SentenceRegistry.with_defaults()
        >>> registry.lookup("$GPRMC").description
        'Recommended minimum'
        >>> "RMC" in registry
        True
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, SentenceDescriptor] = {}

    @classmethod
    def with_defaults(cls) -> "SentenceRegistry":
        """Create a registry holding every built-in sentence decoder."""
        registry = cls()
        for sentence_id, description, decode_fn in _DEFAULT_SENTENCES:
            registry.register(sentence_id, description, decode_fn)
        return registry

    def register(
        self,
        sentence_id: str,
        description: str,
        decode_fn: DecodeFn | None,
    ) -> "SentenceRegistry":
        """Register (or replace) the decoder for a sentence id.

        Args:
            sentence_id: "RMC", "GPRMC" or "$GPRMC"; the talker is stripped
                from the key and kept on the descriptor.
            description: Human-readable name.
            decode_fn: Called with the split fields of each matching
                sentence.

        Returns:
            The registry itself, so registrations can be chained.

        Raises:
            ConfigError: If ``sentence_id`` is empty or ``decode_fn`` is None.
        """
        if not sentence_id:
            raise ConfigError("Sentence id must not be empty.")
        if decode_fn is None:
            raise ConfigError(f"No decoder given for sentence {sentence_id!r}.")

        talker, key = _split_talker(sentence_id)
        if key in self._descriptors:
            logger.debug("Replacing decoder for %s", key)
        self._descriptors[key] = SentenceDescriptor(
            id=key,
            description=description,
            decode_fn=decode_fn,
            talker=talker,
        )
        return self

    def lookup(self, key: str) -> SentenceDescriptor | None:
        """Find the descriptor for a sentence id or six-character address."""
        return self._descriptors.get(normalize_key(key))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[SentenceDescriptor]:
        return iter(self._descriptors.values())
