"""AES-256-CBC encryption and interactive key/IV entry."""

from __future__ import annotations

import logging
import string
from typing import Callable, Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

AES_KEYLEN = 32
AES_IVLEN = 16
AES_KEY_SIZE = 256
AES_IV_SIZE = 128
_BLOCK_BITS = 128

log = logging.getLogger(__name__)

PromptFunc = Callable[[str], Optional[str]]


class CryptoError(Exception):
    """Raised when encryption, decryption or key entry fails."""


def _cipher(key: bytes, iv: bytes) -> Cipher:
    if len(key) != AES_KEYLEN:
        raise CryptoError(f"key must be {AES_KEYLEN} bytes, got {len(key)}")
    if len(iv) != AES_IVLEN:
        raise CryptoError(f"IV must be {AES_IVLEN} bytes, got {len(iv)}")
    return Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv)))


def aes_256_encrypt(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt ``plaintext`` with AES-256-CBC and PKCS#7 padding."""
    encryptor = _cipher(key, iv).encryptor()
    padder = padding.PKCS7(_BLOCK_BITS).padder()
    padded = padder.update(bytes(plaintext)) + padder.finalize()
    return encryptor.update(padded) + encryptor.finalize()


def aes_256_decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt AES-256-CBC ``ciphertext`` and strip its PKCS#7 padding."""
    decryptor = _cipher(key, iv).decryptor()
    try:
        padded = decryptor.update(bytes(ciphertext)) + decryptor.finalize()
        unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise CryptoError(
            "decryption finalization failed (wrong key or corrupted data?)"
        ) from exc


def parse_hex(text: str, size: int) -> bytes:
    """Parse a hex string into ``size`` bytes, right-padding it with zero digits.

    Only the first line of ``text`` is used; digits beyond ``size`` bytes are dropped.
    """
    line = text.split("\n", 1)[0]
    if not line:
        raise ValueError("hex value cannot be empty")
    if any(ch not in string.hexdigits for ch in line):
        raise ValueError("must be hexadecimal (0-9, a-f, A-F)")
    digits = line.ljust(size * 2, "0")[: size * 2]
    return bytes.fromhex(digits)


def _prompt_hex(prompt_func: PromptFunc, label: str, size: int) -> bytes:
    prompt = (
        f"Enter a hexadecimal {label} (up to {size * 2} characters, "
        "will be zero-padded if shorter): "
    )
    while True:
        try:
            answer = prompt_func(prompt)
        except EOFError as exc:
            raise CryptoError(f"error reading {label} input") from exc
        if answer is None:
            raise CryptoError(f"error reading {label} input")
        line = answer.split("\n", 1)[0]
        if not line:
            raise CryptoError(f"{label} cannot be empty")
        try:
            value = parse_hex(line, size)
        except ValueError:
            log.error("Invalid %s format. Must be hexadecimal (0-9, a-f, A-F).", label)
            continue
        log.info("%s successfully set. Using %d bytes.", label, size)
        return value


def get_user_key(prompt_func: PromptFunc = input) -> bytes:
    """Ask for a hex AES-256 key until a valid one is given."""
    return _prompt_hex(prompt_func, "key", AES_KEYLEN)


def get_user_iv(prompt_func: PromptFunc = input) -> bytes:
    """Ask for a hex AES IV until a valid one is given."""
    return _prompt_hex(prompt_func, "IV", AES_IVLEN)