"""Byte layouts of V2 and V3 identity password records."""

from __future__ import annotations

from ..errors import InvalidRecordParameters, TruncatedRecord, UnknownAlgorithm
from .formats import LEGACY_FORMAT, MODERN_FORMAT
from .layout import read_uint32_be, require_length, write_uint32_be
from .prf import KeyDerivationPrf, prf_for_marker
from .records import HashRecord, LegacyRecord, ModernRecord, ParsedRecord


def encode_legacy(salt: bytes, derived_key: bytes) -> bytes:
    fmt = LEGACY_FORMAT
    if len(salt) != fmt.salt_size:
        raise InvalidRecordParameters(
            f"V2 records carry a {fmt.salt_size}-byte salt, got {len(salt)} bytes"
        )

    output = bytearray(fmt.key_offset + len(derived_key))
    output[0] = fmt.marker
    output[fmt.salt_offset:fmt.key_offset] = salt
    output[fmt.key_offset:] = derived_key
    return bytes(output)


def decode_legacy(blob: bytes) -> LegacyRecord:
    fmt = LEGACY_FORMAT
    # At least one subkey byte past the salt.
    require_length(blob, fmt.key_offset + 1, "V2 record is too short")

    return LegacyRecord(
        prf=fmt.prf,
        salt=bytes(blob[fmt.salt_offset:fmt.key_offset]),
        iterations=fmt.iterations,
        derived_key=bytes(blob[fmt.key_offset:]),
    )


def encode_modern(salt: bytes, iterations: int, derived_key: bytes) -> bytes:
    fmt = MODERN_FORMAT
    key_offset = fmt.salt_offset + len(salt)

    output = bytearray(key_offset + len(derived_key))
    output[0] = fmt.marker
    # Do not replace with the selected PRF: existing V3 readers expect 1 here.
    write_uint32_be(output, fmt.prf_id_offset, fmt.written_prf_id)
    write_uint32_be(output, fmt.iterations_offset, iterations)
    write_uint32_be(output, fmt.salt_length_offset, len(salt))
    output[fmt.salt_offset:key_offset] = salt
    output[key_offset:] = derived_key
    return bytes(output)


def decode_modern(blob: bytes) -> ModernRecord:
    fmt = MODERN_FORMAT
    require_length(blob, fmt.header_size, "V3 record header is incomplete")

    prf_id = read_uint32_be(blob, fmt.prf_id_offset)
    iterations = read_uint32_be(blob, fmt.iterations_offset)
    salt_length = read_uint32_be(blob, fmt.salt_length_offset)

    key_offset = fmt.salt_offset + salt_length
    if key_offset >= len(blob):
        raise TruncatedRecord(
            f"V3 record declares a {salt_length}-byte salt with no room for a subkey",
            expected=key_offset + 1,
            actual=len(blob),
        )
    if iterations == 0:
        raise InvalidRecordParameters("V3 record declares an iteration count of 0")

    return ModernRecord(
        prf=fmt.prf,
        salt=bytes(blob[fmt.salt_offset:key_offset]),
        iterations=iterations,
        derived_key=bytes(blob[key_offset:]),
        prf_id=prf_id,
    )


def decode_record(blob: bytes) -> ParsedRecord:
    """Pick the layout from the marker byte and parse the rest of ``blob``."""
    require_length(blob, 1, "Record is empty")

    prf = prf_for_marker(blob[0])
    if prf is KeyDerivationPrf.HMAC_SHA1:
        return decode_legacy(blob)
    if prf is KeyDerivationPrf.HMAC_SHA256:
        return decode_modern(blob)
    raise UnknownAlgorithm(prf)


def encode_record(record: HashRecord) -> bytes:
    if record.prf is KeyDerivationPrf.HMAC_SHA1:
        if record.iterations != LEGACY_FORMAT.iterations:
            raise InvalidRecordParameters(
                f"V2 records always use {LEGACY_FORMAT.iterations} iterations, "
                f"got {record.iterations}"
            )
        return encode_legacy(record.salt, record.derived_key)
    if record.prf is KeyDerivationPrf.HMAC_SHA256:
        return encode_modern(record.salt, record.iterations, record.derived_key)
    raise UnknownAlgorithm(record.prf)
