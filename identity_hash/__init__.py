"""PBKDF2 password hashes compatible with the identity framework's V2 and V3 formats."""
from .auth import (
    HashRecord,
    KeyDerivationPrf,
    LegacyRecord,
    ModernRecord,
    hash_password,
    hash_v2,
    hash_v2_text,
    hash_v3,
    hash_v3_text,
    needs_rehash,
    parse,
    verify,
)
from .auth.encoding import decode_text, encode_text
from .errors import (
    HashTimeout,
    IdentityHashError,
    InvalidRecordParameters,
    MalformedEncoding,
    TruncatedRecord,
    UnencodablePassword,
    UnknownAlgorithm,
    UnrecognizedFormatMarker,
)

__version__ = "1.0.0"
