"""On-disk header placed in front of every encrypted file."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from cipherfs.digest import SHA3_256_DIGEST_LENGTH

CFS_FILE_SIGNATURE = b"CFS"
CFS_FILE_SIGNATURE_SIZE = len(CFS_FILE_SIGNATURE)

# signature, key hash, iv hash, one byte of alignment padding, ciphertext length
_LAYOUT = struct.Struct(
    f"<{CFS_FILE_SIGNATURE_SIZE}s{SHA3_256_DIGEST_LENGTH}s{SHA3_256_DIGEST_LENGTH}sxi"
)
HEADER_SIZE = _LAYOUT.size


@dataclass
class FileHeaders:
    """Header of an encrypted file: signature, key and IV hashes, ciphertext length."""

    key_hash: bytes
    iv_hash: bytes
    ciphertext_len: int
    signature: bytes = CFS_FILE_SIGNATURE

    def __post_init__(self) -> None:
        if len(self.signature) != CFS_FILE_SIGNATURE_SIZE:
            raise ValueError(f"signature must be {CFS_FILE_SIGNATURE_SIZE} bytes")
        for name in ("key_hash", "iv_hash"):
            if len(getattr(self, name)) != SHA3_256_DIGEST_LENGTH:
                raise ValueError(f"{name} must be {SHA3_256_DIGEST_LENGTH} bytes")

    def pack(self) -> bytes:
        """Serialise the header to its fixed-size binary form."""
        return _LAYOUT.pack(
            bytes(self.signature),
            bytes(self.key_hash),
            bytes(self.iv_hash),
            self.ciphertext_len,
        )

    @classmethod
    def unpack(cls, buf: bytes) -> "FileHeaders":
        """Read a header from the start of ``buf``."""
        if len(buf) < HEADER_SIZE:
            raise ValueError(
                f"buffer holds {len(buf)} bytes, header needs {HEADER_SIZE}"
            )
        signature, key_hash, iv_hash, ciphertext_len = _LAYOUT.unpack_from(buf)
        return cls(
            key_hash=key_hash,
            iv_hash=iv_hash,
            ciphertext_len=ciphertext_len,
            signature=signature,
        )


def check_file_signature(buf: bytes) -> bool:
    """Tell whether ``buf`` starts with the file-system signature."""
    return bytes(buf[:CFS_FILE_SIGNATURE_SIZE]) == CFS_FILE_SIGNATURE