from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from .prf import KeyDerivationPrf


@dataclass(frozen=True)
class HashRecord:
    """Parameters and subkey of one hashed password, before encoding or after parsing."""

    prf: KeyDerivationPrf
    salt: bytes
    iterations: int
    derived_key: bytes

    version: ClassVar[str] = ""

    @property
    def key_length(self) -> int:
        return len(self.derived_key)

    def describe(self) -> dict:
        """Parameters safe to show or log; salt and subkey are reduced to lengths."""
        return {
            "format": self.version,
            "prf": self.prf.name,
            "iterations": self.iterations,
            "salt_length": len(self.salt),
            "key_length": self.key_length,
        }


@dataclass(frozen=True)
class LegacyRecord(HashRecord):
    version: ClassVar[str] = "v2"


@dataclass(frozen=True)
class ModernRecord(HashRecord):
    # Value found in the prf id field. Kept for inspection only.
    prf_id: int = 1

    version: ClassVar[str] = "v3"

    def describe(self) -> dict:
        details = super().describe()
        details["prf_id"] = self.prf_id
        return details


ParsedRecord = Union[LegacyRecord, ModernRecord]
