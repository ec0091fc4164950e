"""SHA3-256 hashing helpers."""

from __future__ import annotations

import hashlib

SHA3_256_DIGEST_LENGTH = 32


def sha3_256_hash(data: bytes) -> bytes:
    """Return the 32-byte SHA3-256 digest of ``data``."""
    return hashlib.sha3_256(bytes(data)).digest()


def format_hash(digest: bytes) -> str:
    """Render a digest as the concatenated octal value of each byte."""
    return "".join(format(byte, "o") for byte in digest)