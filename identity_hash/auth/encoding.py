from __future__ import annotations

import base64
import binascii

from ..errors import MalformedEncoding

BASE64 = "base64"
HEX = "hex"

_ALIASES = {
    "base64": BASE64,
    "b64": BASE64,
    "hex": HEX,
    "hexadecimal": HEX,
}


def normalize_encoding(encoding: str) -> str:
    try:
        return _ALIASES[encoding.strip().lower()]
    except (AttributeError, KeyError) as exc:
        raise MalformedEncoding(f"Unsupported text encoding: {encoding!r}") from exc


def encode_text(blob: bytes, encoding: str = BASE64) -> str:
    """Render a record as base64 or hex text."""
    if normalize_encoding(encoding) == HEX:
        return bytes(blob).hex()
    return base64.b64encode(blob).decode("ascii")


def decode_text(text: str, encoding: str = BASE64) -> bytes:
    """Decode base64 or hex text back into record bytes.

    Decoding is strict: characters outside the encoding's alphabet (including
    whitespace between hex digits) and bad padding raise ``MalformedEncoding``
    instead of being skipped. Only leading and trailing whitespace is ignored.
    """
    name = normalize_encoding(encoding)
    stripped = text.strip()
    try:
        if name == HEX:
            return binascii.unhexlify(stripped)
        return base64.b64decode(stripped, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedEncoding(f"Input is not valid {name}: {exc}") from exc
