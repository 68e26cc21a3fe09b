import pytest

from identity_hash.auth.codec import (
    decode_legacy,
    decode_modern,
    decode_record,
    encode_legacy,
    encode_modern,
    encode_record,
)
from identity_hash.auth.formats import LEGACY_FORMAT, MODERN_FORMAT
from identity_hash.auth.prf import KeyDerivationPrf
from identity_hash.auth.records import HashRecord, LegacyRecord, ModernRecord
from identity_hash.errors import (
    InvalidRecordParameters,
    TruncatedRecord,
    UnknownAlgorithm,
    UnrecognizedFormatMarker,
)

SALT = bytes(range(16))
KEY = bytes(range(100, 132))


def test_legacy_layout():
    blob = encode_legacy(SALT, KEY)

    assert blob == b"\x00" + SALT + KEY
    record = decode_legacy(blob)
    assert record.salt == SALT
    assert record.derived_key == KEY
    assert record.iterations == LEGACY_FORMAT.iterations
    assert record.prf is KeyDerivationPrf.HMAC_SHA1


def test_legacy_subkey_is_everything_after_the_salt():
    record = decode_legacy(b"\x00" + SALT + b"abc")
    assert record.derived_key == b"abc"


def test_modern_layout_is_big_endian():
    blob = encode_modern(b"salt", 0x01020304, b"key")

    assert blob == (
        b"\x01"
        b"\x00\x00\x00\x01"
        b"\x01\x02\x03\x04"
        b"\x00\x00\x00\x04"
        b"salt"
        b"key"
    )


def test_modern_decode():
    blob = encode_modern(SALT, 10000, KEY)
    record = decode_modern(blob)

    assert record == ModernRecord(
        prf=KeyDerivationPrf.HMAC_SHA256,
        salt=SALT,
        iterations=10000,
        derived_key=KEY,
        prf_id=1,
    )


def test_modern_prf_id_is_always_written_as_one():
    record = HashRecord(
        prf=KeyDerivationPrf.HMAC_SHA256, salt=SALT, iterations=10, derived_key=KEY
    )
    assert encode_record(record)[1:5] == MODERN_FORMAT.written_prf_id.to_bytes(4, "big")


def test_modern_prf_id_field_does_not_select_prf():
    blob = bytearray(encode_modern(SALT, 10000, KEY))
    blob[1:5] = (0).to_bytes(4, "big")

    record = decode_record(bytes(blob))
    assert record.prf is KeyDerivationPrf.HMAC_SHA256
    assert record.prf_id == 0


def test_modern_rejects_salt_past_end():
    blob = encode_modern(SALT, 10000, b"")
    with pytest.raises(TruncatedRecord) as info:
        decode_modern(blob)
    assert info.value.actual == len(blob)


def test_modern_rejects_huge_salt_length():
    blob = bytearray(encode_modern(SALT, 10000, KEY))
    blob[9:13] = b"\xff\xff\xff\xff"
    with pytest.raises(TruncatedRecord):
        decode_modern(bytes(blob))


def test_modern_rejects_zero_iterations():
    with pytest.raises(InvalidRecordParameters):
        decode_modern(encode_modern(SALT, 0, KEY))


def test_modern_rejects_iterations_over_uint32():
    with pytest.raises(InvalidRecordParameters):
        encode_modern(SALT, 2**32, KEY)


def test_decode_record_variants():
    assert isinstance(decode_record(encode_legacy(SALT, KEY)), LegacyRecord)
    assert isinstance(decode_record(encode_modern(SALT, 5, KEY)), ModernRecord)


def test_decode_record_unknown_marker():
    with pytest.raises(UnrecognizedFormatMarker) as info:
        decode_record(b"\x7f" + SALT + KEY)
    assert info.value.marker == 0x7F


def test_encode_record_rejects_sha512():
    record = HashRecord(
        prf=KeyDerivationPrf.HMAC_SHA512, salt=SALT, iterations=10, derived_key=KEY
    )
    with pytest.raises(UnknownAlgorithm):
        encode_record(record)


def test_describe_hides_secrets():
    details = decode_record(encode_modern(SALT, 10000, KEY)).describe()
    assert details == {
        "format": "v3",
        "prf": "HMAC_SHA256",
        "iterations": 10000,
        "salt_length": 16,
        "key_length": 32,
        "prf_id": 1,
    }
