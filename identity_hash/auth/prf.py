"""Registry of key derivation PRFs, their digest names and their wire markers."""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

from ..errors import UnknownAlgorithm, UnrecognizedFormatMarker


class KeyDerivationPrf(IntEnum):
    """PRF used inside PBKDF2. Values match the ids used by the identity framework."""

    HMAC_SHA1 = 0
    HMAC_SHA256 = 1
    # Reserved by the framework; no format produces or decodes it.
    HMAC_SHA512 = 2


DIGEST_NAMES: Mapping[KeyDerivationPrf, str] = MappingProxyType(
    {
        KeyDerivationPrf.HMAC_SHA1: "sha1",
        KeyDerivationPrf.HMAC_SHA256: "sha256",
        KeyDerivationPrf.HMAC_SHA512: "sha512",
    }
)

FORMAT_MARKERS: Mapping[KeyDerivationPrf, int] = MappingProxyType(
    {
        KeyDerivationPrf.HMAC_SHA1: 0x00,
        KeyDerivationPrf.HMAC_SHA256: 0x01,
    }
)

_PRF_BY_MARKER: Mapping[int, KeyDerivationPrf] = MappingProxyType(
    {marker: prf for prf, marker in FORMAT_MARKERS.items()}
)


def _coerce(prf: object) -> KeyDerivationPrf:
    if isinstance(prf, KeyDerivationPrf):
        return prf
    if isinstance(prf, bool) or not isinstance(prf, int):
        raise UnknownAlgorithm(prf)
    try:
        return KeyDerivationPrf(prf)
    except ValueError as exc:
        raise UnknownAlgorithm(prf) from exc


def digest_name(prf: object) -> str:
    """Return the hashlib digest name for ``prf``."""
    tag = _coerce(prf)
    try:
        return DIGEST_NAMES[tag]
    except KeyError as exc:
        raise UnknownAlgorithm(prf) from exc


def format_marker(prf: object) -> int:
    """Return the leading byte written for records derived with ``prf``."""
    tag = _coerce(prf)
    try:
        return FORMAT_MARKERS[tag]
    except KeyError as exc:
        raise UnknownAlgorithm(prf) from exc


def prf_for_marker(marker: int) -> KeyDerivationPrf:
    """Resolve the PRF for a record's leading byte."""
    try:
        return _PRF_BY_MARKER[marker]
    except KeyError as exc:
        raise UnrecognizedFormatMarker(marker) from exc
