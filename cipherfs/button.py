"""Self-destruct support: find and delete every file carrying the user stamp."""

from __future__ import annotations

import logging
import os
import stat

STAMP_SIZE = 3
USER_STAMP = b"CFS"
SYS_DIR = "//sys"
PROC_DIR = "//proc"

log = logging.getLogger(__name__)


def is_user_file(path: str | os.PathLike) -> bool:
    """Tell whether the file at ``path`` starts with the user stamp."""
    try:
        with open(path, "rb") as handle:
            stamp = handle.read(STAMP_SIZE)
    except OSError:
        log.error("Error opening file: %s", path)
        return False
    return stamp == USER_STAMP


def _delete_tree(dirpath: str, no_go_zone: str, deleted: list[str]) -> None:
    if not os.path.exists(dirpath):
        log.error("Mount point does not exist: %s", dirpath)
        return
    try:
        with os.scandir(dirpath) as entries:
            names = sorted(entry.name for entry in entries)
    except OSError:
        log.error("Error opening directory: %s", dirpath)
        return

    for name in names:
        full_path = f"{dirpath}/{name}"
        if full_path in (no_go_zone, SYS_DIR, PROC_DIR):
            log.info("Skipping directory: %s", full_path)
            continue
        try:
            info = os.lstat(full_path)
        except OSError:
            log.error("Error retrieving file info: %s", full_path)
            continue

        if stat.S_ISLNK(info.st_mode):
            continue
        if stat.S_ISDIR(info.st_mode):
            _delete_tree(full_path, no_go_zone, deleted)
        elif stat.S_ISREG(info.st_mode) and is_user_file(full_path):
            try:
                os.remove(full_path)
            except OSError:
                log.error("Error deleting file: %s", full_path)
            else:
                log.info("Deleted user file: %s", full_path)
                deleted.append(full_path)


def delete_all_user_files(
    dirpath: str | os.PathLike, no_go_zone: str | os.PathLike
) -> list[str]:
    """Recursively delete stamped regular files below ``dirpath``.

    Symbolic links are never followed, and the path equal to ``no_go_zone``
    (as well as the system and process pseudo file systems) is skipped.
    Returns the paths of the files that were deleted.
    """
    deleted: list[str] = []
    _delete_tree(os.fspath(dirpath), os.fspath(no_go_zone), deleted)
    return deleted


def delete_from_fuse_mount(
    mount_point: str | os.PathLike, root: str | os.PathLike = "/"
) -> list[str]:
    """Delete every stamped file under ``root``, leaving the mount point alone."""
    root_path = os.fspath(root)
    mount = os.fspath(mount_point)
    relative = os.path.relpath(os.path.join(root_path, mount), root_path)
    no_go_zone = f"{root_path}/{relative}"
    log.info("Starting deletion from: %s", mount)
    return delete_all_user_files(root_path, no_go_zone)