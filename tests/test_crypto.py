import pytest

from cipherfs.crypto import (
    AES_IVLEN,
    AES_KEYLEN,
    CryptoError,
    aes_256_decrypt,
    aes_256_encrypt,
    get_user_iv,
    get_user_key,
    parse_hex,
)

KEY = bytes(range(AES_KEYLEN))
IV = bytes(range(AES_IVLEN))


def _answers(*values):
    it = iter(values)
    return lambda prompt: next(it)


def test_nist_vector_first_block():
    key = bytes.fromhex(
        "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
    )
    iv = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
    plaintext = bytes.fromhex("6bc1bee22e409f96e93d7e117393172a")
    ciphertext = aes_256_encrypt(plaintext, key, iv)
    assert ciphertext[:16] == bytes.fromhex("f58c4c04d6e5f1ba779eabfb5f7bfbd6")


@pytest.mark.parametrize("plaintext", [b"", b"hello", b"x" * 16, b"y" * 100])
def test_round_trip(plaintext):
    ciphertext = aes_256_encrypt(plaintext, KEY, IV)
    assert len(ciphertext) % 16 == 0
    assert len(ciphertext) > len(plaintext)
    assert aes_256_decrypt(ciphertext, KEY, IV) == plaintext


def test_invalid_padding_raises():
    ciphertext = aes_256_encrypt(bytes(16), KEY, IV)
    with pytest.raises(CryptoError):
        aes_256_decrypt(ciphertext[:16], KEY, IV)


def test_partial_block_raises():
    with pytest.raises(CryptoError):
        aes_256_decrypt(b"\x00" * 10, KEY, IV)


def test_bad_key_length_raises():
    with pytest.raises(CryptoError):
        aes_256_encrypt(b"data", KEY[:16], IV)


def test_bad_iv_length_raises():
    with pytest.raises(CryptoError):
        aes_256_decrypt(b"\x00" * 16, KEY, IV[:8])


def test_parse_hex_pads_with_zeros():
    assert parse_hex("ff", 4) == b"\xff\x00\x00\x00"


def test_parse_hex_odd_length_pads_digit():
    assert parse_hex("abc", 2) == bytes.fromhex("abc0")


def test_parse_hex_truncates_excess():
    assert parse_hex("0102030405", 2) == b"\x01\x02"


def test_parse_hex_uses_first_line():
    assert parse_hex("0a\nzz", 1) == b"\x0a"


@pytest.mark.parametrize("text", ["", "xyz", "12 34"])
def test_parse_hex_rejects(text):
    with pytest.raises(ValueError):
        parse_hex(text, 4)


def test_get_user_key_full_length():
    hex_key = KEY.hex()
    assert get_user_key(_answers(hex_key)) == KEY


def test_get_user_key_retries_after_invalid():
    key = get_user_key(_answers("not-hex", "01"))
    assert key == b"\x01" + bytes(AES_KEYLEN - 1)


def test_get_user_key_empty_raises():
    with pytest.raises(CryptoError):
        get_user_key(_answers("\n"))


def test_get_user_key_eof_raises():
    def eof(prompt):
        raise EOFError

    with pytest.raises(CryptoError):
        get_user_key(eof)


def test_get_user_iv_pads():
    assert get_user_iv(_answers("ab")) == b"\xab" + bytes(AES_IVLEN - 1)


def test_get_user_iv_none_raises():
    with pytest.raises(CryptoError):
        get_user_iv(lambda prompt: None)


def test_prompt_mentions_length():
    seen = []

    def record(prompt):
        seen.append(prompt)
        return "00"

    iv = get_user_iv(record)
    assert iv == bytes(AES_IVLEN)
    assert len(seen) == 1
    assert "32 characters" in seen[0]