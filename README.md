# cipherfs

`cipherfs` provides the operations of an encrypting pass-through
filesystem. Every path handed to `CipherFilesystem` names a file below a
root directory on the underlying disk (by default `/`). Writes are
encrypted with AES-256-CBC before they reach the disk; reads of files that
begin with the `CFS` signature are decrypted once the user supplies the
matching key and IV.

## What it does not do

The package has no command and does not mount anything by itself. It
supplies one method per filesystem operation; connecting those methods to
a kernel filesystem interface is left to the caller.

## On-disk format

An encrypted file starts with a fixed 72-byte header, `FileHeaders`,
followed by the ciphertext:

| field            | size     | contents                               |
|------------------|----------|----------------------------------------|
| `signature`      | 3 bytes  | `CFS`                                  |
| `key_hash`       | 32 bytes | SHA3-256 of the 32-byte AES key        |
| `iv_hash`        | 32 bytes | SHA3-256 of the 16-byte IV             |
| (padding)        | 1 byte   | zero                                   |
| `ciphertext_len` | 4 bytes  | ciphertext length, little-endian int   |

`FileHeaders.pack()` produces these bytes and `FileHeaders.unpack(buf)`
reads them back (a shorter buffer raises `ValueError`, as do hashes or a
signature of the wrong length). `check_file_signature(buf)` tells whether
a buffer begins with `CFS`. The header size is `cipherfs.headers.HEADER_SIZE`.

## Modules

- `cipherfs.digest` – `sha3_256_hash(data)` returns the 32-byte digest;
  `format_hash(digest)` renders it as the octal value of each byte, run
  together.
- `cipherfs.headers` – `FileHeaders`, `check_file_signature(buf)`.
- `cipherfs.crypto` – `aes_256_encrypt(plaintext, key, iv)`,
  `aes_256_decrypt(ciphertext, key, iv)`, `parse_hex(text, size)` and the
  interactive `get_user_key(prompt_func)` / `get_user_iv(prompt_func)`.
  Failures raise `CryptoError`.
- `cipherfs.button` – the self-destruct routine: `is_user_file(path)`,
  `delete_all_user_files(dirpath, no_go_zone)` and
  `delete_from_fuse_mount(mount_point, root="/")`.
- `cipherfs.filesystem` – `CipherFilesystem`.

## Encrypting bytes directly

```python
import os

from cipherfs.crypto import aes_256_decrypt, aes_256_encrypt

key = os.urandom(32)
iv = os.urandom(16)

ciphertext = aes_256_encrypt(b"hello", key, iv)
assert aes_256_decrypt(ciphertext, key, iv) == b"hello"
```

Padding is PKCS#7. A key that is not 32 bytes, an IV that is not 16 bytes,
or ciphertext that does not decrypt to valid padding raises `CryptoError`.

## Key and IV entry

`get_user_key(prompt_func)` and `get_user_iv(prompt_func)` ask for a
hexadecimal string through `prompt_func` (by default `input`). Only the
first line of the answer is used. Input shorter than the full length is
padded with zeros on the right and extra digits are dropped. Input with
non-hex characters is asked for again; an empty answer, `None`, or
end of input raises `CryptoError`.

`parse_hex(text, size)` does the same conversion without prompting and
raises `ValueError` on empty or non-hex input.

## The filesystem layer

```python
import os

from cipherfs.filesystem import CipherFilesystem

fs = CipherFilesystem(mount_point="/mnt/secure", prompt_func=input)
fs.init()

fh = fs.create("/tmp/notes.txt", 0o644, os.O_CREAT | os.O_WRONLY)
fs.write("/tmp/notes.txt", b"meeting at noon", 0, fh)
fs.release("/tmp/notes.txt", fh)

print(fs.read("/tmp/notes.txt", 4096))
```

`CipherFilesystem(mount_point, prompt_func=input,
self_destruct_dir="/self_destruct_dir", root="/")` offers `init`,
`getattr`, `utimens` (times in nanoseconds, or now), `create`, `mkdir`,
`open`, `read`, `write`, `chmod`, `chown`, `mknod`, `readdir` (includes
`.` and `..`), `release`, `releasedir`, `truncate`, `unlink` and `rmdir`.
Errors from the disk are raised as `OSError`.

- `write(path, data, offset=0, fh=None)` asks for a key and IV, writes a
  fresh header plus ciphertext at `offset`, and returns `len(data)`.
- `read(path, size, offset=0, fh=None)` returns the bytes unchanged when
  they do not start with the signature. Otherwise it asks for a key and IV
  and returns the plaintext. A key or IV whose hash does not match the
  header raises `OSError` with `EACCES`; a truncated file or failed
  decryption raises `OSError` with `EIO`.

## Self-destruct

`init()` creates the self-destruct directory below the root, mode `0o700`,
if it is missing. Calling `unlink` or `rmdir` on that path does not remove
it; instead it walks the whole tree from the root and deletes every regular
file whose first three bytes are `CFS`, skipping the mount point, `/sys`,
`/proc` and symbolic links. `delete_all_user_files` and
`delete_from_fuse_mount` return the list of deleted paths. This is
irreversible — use it only on purpose.