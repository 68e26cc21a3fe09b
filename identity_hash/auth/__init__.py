"""Identity password records: PRF registry, V2/V3 codecs and hash/verify."""
from .passwords import (
    hash_password,
    hash_v2,
    hash_v2_text,
    hash_v3,
    hash_v3_text,
    needs_rehash,
    parse,
    verify,
)
from .prf import KeyDerivationPrf
from .records import HashRecord, LegacyRecord, ModernRecord
