import pytest

from cipherfs.digest import SHA3_256_DIGEST_LENGTH, format_hash, sha3_256_hash


def test_empty_input_known_digest():
    assert sha3_256_hash(b"").hex() == (
        "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"
    )


def test_abc_known_digest():
    assert sha3_256_hash(b"abc").hex() == (
        "3a985da74fe225b2045c172d6bd390bd855f086e3e9d525b46bfe24511431532"
    )


@pytest.mark.parametrize("data", [b"", b"x", b"CFS" * 100])
def test_digest_length(data):
    assert len(sha3_256_hash(data)) == SHA3_256_DIGEST_LENGTH


def test_digest_is_deterministic_and_input_sensitive():
    assert sha3_256_hash(b"data") == sha3_256_hash(bytearray(b"data"))
    assert sha3_256_hash(b"data") != sha3_256_hash(b"datb")


def test_format_hash_octal_bytes():
    assert format_hash(bytes([8, 9, 255])) == "1011377"


def test_format_hash_zero_digest():
    assert format_hash(bytes(SHA3_256_DIGEST_LENGTH)) == "0" * SHA3_256_DIGEST_LENGTH