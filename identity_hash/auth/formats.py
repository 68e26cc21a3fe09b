"""Named parameter sets for the two identity password formats.

Offsets are from the start of the record, marker byte included::

    V2: [0x00][salt:16][subkey]
    V3: [0x01][prf id:4][iterations:4][salt length:4][salt][subkey]

All V3 integers are unsigned 32-bit big-endian.
"""

from __future__ import annotations

from dataclasses import dataclass

from .prf import KeyDerivationPrf, format_marker


@dataclass(frozen=True)
class LegacyFormat:
    """V2: PBKDF2 with HMAC-SHA1, 128-bit salt, 256-bit subkey, 1000 iterations."""

    prf: KeyDerivationPrf = KeyDerivationPrf.HMAC_SHA1
    salt_size: int = 128 // 8
    iterations: int = 1000
    key_length: int = 256 // 8
    salt_offset: int = 1

    @property
    def marker(self) -> int:
        return format_marker(self.prf)

    @property
    def key_offset(self) -> int:
        return self.salt_offset + self.salt_size


@dataclass(frozen=True)
class ModernFormat:
    """V3: PBKDF2 with HMAC-SHA256, 128-bit salt, 256-bit subkey, 10000 iterations."""

    prf: KeyDerivationPrf = KeyDerivationPrf.HMAC_SHA256
    salt_size: int = 128 // 8
    iterations: int = 10_000
    key_length: int = 256 // 8
    prf_id_offset: int = 1
    iterations_offset: int = 5
    salt_length_offset: int = 9
    salt_offset: int = 13
    # Always written into the prf id field, whatever PRF was selected. Readers
    # pick the PRF from the marker byte and never consult this field.
    written_prf_id: int = 1

    @property
    def marker(self) -> int:
        return format_marker(self.prf)

    @property
    def header_size(self) -> int:
        return self.salt_offset


LEGACY_FORMAT = LegacyFormat()
MODERN_FORMAT = ModernFormat()
