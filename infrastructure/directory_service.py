"""Directory listing for panels.

Reads a directory into `FileEntry` rows. Unreadable entries are kept with the
information that could be gathered; an unreadable directory raises.
"""

from __future__ import annotations

import os
import stat

from loguru import logger

from core.models import PARENT_ENTRY_NAME, FileEntry

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _entry_from_stat(name: str, full_path: str) -> FileEntry:
    try:
        lst = os.lstat(full_path)
    except OSError as ex:
        logger.debug("lstat failed for {}: {}", full_path, ex)
        return FileEntry(name=name)

    entry = FileEntry(
        name=name,
        size=lst.st_size,
        mtime=lst.st_mtime,
        mode=lst.st_mode,
        uid=lst.st_uid,
        is_dir=stat.S_ISDIR(lst.st_mode),
        is_link=stat.S_ISLNK(lst.st_mode),
    )
    entry.is_executable = bool(lst.st_mode & _EXEC_BITS) and stat.S_ISREG(lst.st_mode)

    if entry.is_link:
        try:
            entry.link_target = os.readlink(full_path)
        except OSError as ex:
            logger.debug("readlink failed for {}: {}", full_path, ex)
        try:
            st = os.stat(full_path)
        except OSError:
            entry.is_link_broken = True
        else:
            entry.is_link_to_dir = stat.S_ISDIR(st.st_mode)
    return entry


def read_directory(path: str, show_hidden: bool = True) -> list[FileEntry]:
    """Return entries of `path` in filesystem order, `..` first unless at root.

    Raises:
        OSError: The directory cannot be opened or read.
    """
    entries: list[FileEntry] = []
    if os.path.realpath(path) != os.path.realpath(os.sep):
        parent = _entry_from_stat(PARENT_ENTRY_NAME, os.path.join(path, PARENT_ENTRY_NAME))
        parent.is_dir = True
        entries.append(parent)

    with os.scandir(path) as it:
        for dirent in it:
            if not show_hidden and dirent.name.startswith("."):
                continue
            entries.append(_entry_from_stat(dirent.name, os.path.join(path, dirent.name)))
    return entries
