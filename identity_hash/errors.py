"""Errors raised while hashing, parsing or verifying identity password records."""

from __future__ import annotations


class IdentityHashError(ValueError):
    """Base class for every error this package raises."""


class UnknownAlgorithm(IdentityHashError):
    """An algorithm tag has no registry entry."""

    def __init__(self, prf: object) -> None:
        super().__init__(f"Unknown key derivation prf: {prf}")
        self.prf = prf


class UnrecognizedFormatMarker(IdentityHashError):
    """The leading byte of a record matches no known format."""

    def __init__(self, marker: int) -> None:
        super().__init__(f"Unrecognized format marker: 0x{marker:02x}")
        self.marker = marker


class MalformedEncoding(IdentityHashError):
    """Text input is not valid for its declared encoding."""


class TruncatedRecord(IdentityHashError):
    """The record is shorter than its header or declared lengths require."""

    def __init__(self, message: str, *, expected: int, actual: int) -> None:
        super().__init__(f"{message} (need {expected} bytes, got {actual})")
        self.expected = expected
        self.actual = actual


class InvalidRecordParameters(IdentityHashError):
    """Parameters that a record layout cannot carry or a derivation cannot use."""


class HashTimeout(IdentityHashError):
    """A pooled hash or verify did not finish within the caller's wait bound."""


class UnencodablePassword(IdentityHashError):
    """The password cannot be encoded as UTF-8 (e.g. it holds a lone surrogate)."""
