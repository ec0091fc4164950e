"""Pass-through file system that stores file contents AES-encrypted."""

from __future__ import annotations

import errno
import hmac
import logging
import os
import stat
from typing import Optional

from cipherfs.button import delete_from_fuse_mount
from cipherfs.crypto import (
    AES_IVLEN,
    AES_KEYLEN,
    CryptoError,
    PromptFunc,
    aes_256_decrypt,
    aes_256_encrypt,
    get_user_iv,
    get_user_key,
)
from cipherfs.digest import sha3_256_hash
from cipherfs.headers import HEADER_SIZE, FileHeaders, check_file_signature

log = logging.getLogger(__name__)

SELF_DESTRUCT_DIR = "/self_destruct_dir"


class CipherFilesystem:
    """File-system operations that encrypt on write and decrypt on read.

    Paths handed to the operations are resolved below ``root``. Removing the
    self-destruct entry deletes every stamped file outside the mount point.
    """

    def __init__(
        self,
        mount_point: str,
        prompt_func: PromptFunc = input,
        self_destruct_dir: str = SELF_DESTRUCT_DIR,
        root: str = "/",
    ) -> None:
        self.mount_point = os.fspath(mount_point)
        self.prompt_func = prompt_func
        self.self_destruct_dir = self_destruct_dir
        self.root = os.fspath(root)

    def _real(self, path: str) -> str:
        return os.path.join(self.root, path.lstrip("/"))

    def _credentials(self) -> tuple[bytes, bytes]:
        key = get_user_key(self.prompt_func)
        iv = get_user_iv(self.prompt_func)
        return key, iv

    def _self_destruct(self) -> None:
        log.warning("Self-destruction activated! Deleting all user files...")
        delete_from_fuse_mount(self.mount_point, self.root)

    def init(self) -> None:
        """Make sure the self-destruct directory exists."""
        target = self._real(self.self_destruct_dir)
        try:
            info = os.lstat(target)
        except FileNotFoundError:
            try:
                os.mkdir(target, stat.S_IRUSR | stat.S_IWUSR | stat.S_IXUSR)
            except OSError as exc:
                log.error("Failed to create %s: %s", target, exc)
            else:
                log.info("Created %s directory", target)
            return
        except OSError as exc:
            log.error("Error checking %s: %s", target, exc)
            return
        if stat.S_ISDIR(info.st_mode):
            log.info("%s directory already exists", target)
        else:
            log.warning("%s exists, but it's not a directory", target)

    def getattr(self, path: str) -> os.stat_result:
        """Return the attributes of ``path`` without following symlinks."""
        return os.lstat(self._real(path))

    def utimens(self, path: str, times: Optional[tuple[int, int]] = None) -> None:
        """Set access and modification times in nanoseconds (now if omitted)."""
        if times is None:
            os.utime(self._real(path))
        else:
            os.utime(self._real(path), ns=tuple(times))

    def create(self, path: str, mode: int, flags: int) -> int:
        """Open ``path`` with ``flags`` and ``mode``; return the descriptor."""
        return os.open(self._real(path), flags, mode)

    def mkdir(self, path: str, mode: int) -> None:
        os.mkdir(self._real(path), mode)

    def open(self, path: str, flags: int) -> int:
        """Open ``path`` and return the descriptor."""
        return os.open(self._real(path), flags)

    def read(
        self, path: str, size: int, offset: int = 0, fh: Optional[int] = None
    ) -> bytes:
        """Read ``path``, decrypting it when it carries the file signature."""
        own_fd = fh is None
        fd = os.open(self._real(path), os.O_RDONLY) if own_fd else fh
        try:
            data = os.pread(fd, size, offset)
            if not check_file_signature(data):
                return data

            key, iv = self._credentials()
            if len(data) < HEADER_SIZE:
                raise OSError(errno.EIO, "truncated encrypted file", path)
            headers = FileHeaders.unpack(data)
            key_ok = hmac.compare_digest(headers.key_hash, sha3_256_hash(key))
            iv_ok = hmac.compare_digest(headers.iv_hash, sha3_256_hash(iv))
            if not (key_ok and iv_ok):
                raise OSError(errno.EACCES, "key or IV does not match", path)

            ciphertext = data[HEADER_SIZE : HEADER_SIZE + headers.ciphertext_len]
            try:
                return aes_256_decrypt(ciphertext, key, iv)
            except CryptoError as exc:
                raise OSError(errno.EIO, str(exc), path) from exc
        finally:
            if own_fd:
                os.close(fd)

    def write(
        self, path: str, data: bytes, offset: int = 0, fh: Optional[int] = None
    ) -> int:
        """Encrypt ``data`` and write header plus ciphertext at ``offset``.

        Returns the length of the plaintext, as the caller expects.
        """
        key, iv = self._credentials()
        try:
            ciphertext = aes_256_encrypt(data, key, iv)
        except CryptoError as exc:
            raise OSError(errno.EIO, str(exc), path) from exc
        headers = FileHeaders(
            key_hash=sha3_256_hash(key[:AES_KEYLEN]),
            iv_hash=sha3_256_hash(iv[:AES_IVLEN]),
            ciphertext_len=len(ciphertext),
        )
        content = headers.pack() + ciphertext

        own_fd = fh is None
        fd = os.open(self._real(path), os.O_WRONLY) if own_fd else fh
        try:
            os.pwrite(fd, content, offset)
        finally:
            if own_fd:
                os.close(fd)
        return len(data)

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(self._real(path), mode)

    def chown(self, path: str, uid: int, gid: int) -> None:
        os.lchown(self._real(path), uid, gid)

    def mknod(self, path: str, mode: int, rdev: int = 0) -> None:
        """Create a named pipe, regular file or device node."""
        if stat.S_ISFIFO(mode):
            os.mkfifo(self._real(path), stat.S_IMODE(mode))
        else:
            os.mknod(self._real(path), mode, rdev)

    def readdir(self, path: str) -> list[str]:
        """List the entries of a directory, including ``.`` and ``..``."""
        with os.scandir(self._real(path)) as entries:
            names = [entry.name for entry in entries]
        return [".", "..", *names]

    def release(self, path: str, fh: int) -> None:
        os.close(fh)

    def releasedir(self, path: str, fh: Optional[int] = None) -> None:
        """Close a directory descriptor, if one is held."""
        log.info("Releasing directory: %s", path)
        if fh:
            os.close(fh)

    def truncate(self, path: str, size: int, fh: Optional[int] = None) -> None:
        if fh is not None:
            os.ftruncate(fh, size)
        else:
            os.truncate(self._real(path), size)

    def unlink(self, path: str) -> None:
        """Delete a file; deleting the self-destruct entry triggers the wipe."""
        if path == self.self_destruct_dir:
            self._self_destruct()
            return
        os.unlink(self._real(path))

    def rmdir(self, path: str) -> None:
        """Remove a directory; removing the self-destruct entry triggers the wipe."""
        log.info("Removing directory: %s", path)
        if path == self.self_destruct_dir:
            self._self_destruct()
            return
        try:
            os.rmdir(self._real(path))
        except OSError as exc:
            log.error("Error removing directory: %s, errno: %s", path, exc.errno)
            raise