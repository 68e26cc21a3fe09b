"""Hash and verify passwords in the identity framework's V2 and V3 formats.

``hash_v2``/``hash_v3`` return raw record bytes; the ``*_text`` variants and
``verify`` speak base64 (default) or hex at the boundary. ``verify`` reads the
format from the record's first byte, so callers never pass a format hint.

Subkeys are compared with ``hmac.compare_digest``, whose running time does not
depend on where the first differing byte is.
"""

from __future__ import annotations

import hashlib
import hmac
import os
from typing import Optional, Union

from ..errors import InvalidRecordParameters, UnencodablePassword
from ..settings import get_settings
from ..utils.logging_setup import setup_logger
from .codec import decode_record, encode_record
from .encoding import BASE64, decode_text, encode_text
from .formats import LEGACY_FORMAT, MODERN_FORMAT
from .layout import UINT32_MAX
from .prf import KeyDerivationPrf, digest_name, format_marker
from .records import HashRecord, LegacyRecord, ParsedRecord

logger = setup_logger(name=__name__)

BlobLike = Union[bytes, bytearray, memoryview, str]


def _password_bytes(password: str) -> bytes:
    try:
        return password.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise UnencodablePassword("Password is not encodable as UTF-8.") from exc


def _pbkdf2(
    password: str,
    salt: bytes,
    iterations: int,
    key_length: int,
    prf: KeyDerivationPrf,
) -> bytes:
    return hashlib.pbkdf2_hmac(
        digest_name(prf), _password_bytes(password), salt, iterations, key_length
    )


def _salt_bytes(salt: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(salt, str):
        # One byte per code point, as with a "binary" string salt.
        try:
            return salt.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise InvalidRecordParameters("String salts must be latin-1 text.") from exc
    return bytes(salt)


def hash_password(
    password: str,
    *,
    prf: KeyDerivationPrf,
    salt: Union[bytes, bytearray, str],
    iterations: int,
    key_length: int,
) -> bytes:
    """Derive a subkey with the given parameters and encode it as a record.

    ``HMAC_SHA1`` yields a V2 record and ``HMAC_SHA256`` a V3 record.
    """
    # Fails fast for PRFs that no record layout can carry.
    format_marker(prf)
    salt_bytes = _salt_bytes(salt)
    if not 0 < iterations <= UINT32_MAX:
        raise InvalidRecordParameters(f"Iteration count out of range: {iterations}")
    if prf == KeyDerivationPrf.HMAC_SHA1 and iterations != LEGACY_FORMAT.iterations:
        raise InvalidRecordParameters(
            f"V2 records always use {LEGACY_FORMAT.iterations} iterations, got {iterations}"
        )
    if key_length <= 0:
        raise InvalidRecordParameters(f"Key length must be positive, got {key_length}")

    derived_key = _pbkdf2(password, salt_bytes, iterations, key_length, prf)
    record = HashRecord(
        prf=KeyDerivationPrf(prf),
        salt=salt_bytes,
        iterations=iterations,
        derived_key=derived_key,
    )
    blob = encode_record(record)
    logger.debug(
        "Hashed password with %s (iterations=%s, salt=%s bytes, key=%s bytes).",
        record.prf.name,
        iterations,
        len(salt_bytes),
        key_length,
    )
    return blob


def hash_v2(password: str) -> bytes:
    """PBKDF2 with HMAC-SHA1, 128-bit salt, 256-bit subkey, 1000 iterations."""
    fmt = LEGACY_FORMAT
    return hash_password(
        password,
        prf=fmt.prf,
        salt=os.urandom(fmt.salt_size),
        iterations=fmt.iterations,
        key_length=fmt.key_length,
    )


def hash_v3(password: str) -> bytes:
    """PBKDF2 with HMAC-SHA256, 128-bit salt, 256-bit subkey, 10000 iterations."""
    fmt = MODERN_FORMAT
    return hash_password(
        password,
        prf=fmt.prf,
        salt=os.urandom(fmt.salt_size),
        iterations=fmt.iterations,
        key_length=fmt.key_length,
    )


def hash_v2_text(password: str, encoding: str = BASE64) -> str:
    return encode_text(hash_v2(password), encoding)


def hash_v3_text(password: str, encoding: str = BASE64) -> str:
    return encode_text(hash_v3(password), encoding)


def _blob_bytes(blob: BlobLike, encoding: str) -> bytes:
    if isinstance(blob, str):
        return decode_text(blob, encoding)
    return bytes(blob)


def parse(blob: BlobLike, encoding: str = BASE64) -> ParsedRecord:
    """Decode a record without verifying anything against it."""
    return decode_record(_blob_bytes(blob, encoding))


def verify(password: str, blob: BlobLike, encoding: str = BASE64) -> bool:
    """Check ``password`` against a V2 or V3 record.

    A mismatch returns False. Unreadable input (bad text, unknown marker,
    truncated record) raises an ``IdentityHashError`` instead.
    """
    record = parse(blob, encoding)
    candidate = _pbkdf2(
        password, record.salt, record.iterations, record.key_length, record.prf
    )
    verified = hmac.compare_digest(candidate, record.derived_key)
    logger.debug(
        "Verified %s record (iterations=%s): %s.",
        record.version,
        record.iterations,
        "match" if verified else "mismatch",
    )
    return verified


def needs_rehash(
    blob: BlobLike,
    encoding: str = BASE64,
    *,
    min_iterations: Optional[int] = None,
) -> bool:
    """True when a record should be replaced by a fresh ``hash_v3`` after login."""
    record = parse(blob, encoding)
    if isinstance(record, LegacyRecord):
        return True
    floor = get_settings().min_iterations if min_iterations is None else min_iterations
    return record.iterations < floor
