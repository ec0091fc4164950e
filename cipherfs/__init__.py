"""Encrypting pass-through filesystem operations with AES-256-CBC contents, SHA3-256 key checks and a self-destruct wipe."""

__version__ = "0.1.0"
__all__ = ["button", "crypto", "digest", "filesystem", "headers"]