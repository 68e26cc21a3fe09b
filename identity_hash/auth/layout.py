"""Fixed-width integer packing used by the V3 record layout."""

from __future__ import annotations

import struct

from ..errors import InvalidRecordParameters, TruncatedRecord

UINT32_SIZE = 4
UINT32_MAX = 0xFFFFFFFF

# Network byte order, unsigned.
_UINT32_BE = struct.Struct(">I")


def write_uint32_be(buffer: bytearray, offset: int, value: int) -> None:
    if not 0 <= value <= UINT32_MAX:
        raise InvalidRecordParameters(
            f"Value {value} does not fit in an unsigned 32-bit field"
        )
    if offset < 0 or offset + UINT32_SIZE > len(buffer):
        raise IndexError(f"uint32 at offset {offset} overruns a {len(buffer)}-byte buffer")
    _UINT32_BE.pack_into(buffer, offset, value)


def read_uint32_be(data: bytes, offset: int) -> int:
    end = offset + UINT32_SIZE
    if offset < 0 or end > len(data):
        raise TruncatedRecord(
            f"Record ends inside the 4-byte field at offset {offset}",
            expected=end,
            actual=len(data),
        )
    return _UINT32_BE.unpack_from(data, offset)[0]


def require_length(data: bytes, needed: int, what: str) -> None:
    if len(data) < needed:
        raise TruncatedRecord(what, expected=needed, actual=len(data))
