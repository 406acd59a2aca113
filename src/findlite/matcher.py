"""Predicate matcher: evaluates a compiled Query against one entry."""

from __future__ import annotations

import os
import stat
import time

from findlite.compiler import FileType, Query
from findlite.pattern import glob_match

SECONDS_PER_DAY = 24 * 60 * 60


class Entry:
    """A filesystem node visited during a walk.

    Metadata is fetched lazily and at most once: ``lstat`` when a size,
    age or file-emptiness check needs it, and the directory listing when
    a directory-emptiness check needs it.

    Attributes:
        path: Path as reached from the root argument.
        display_path: Root-prefixed path that is printed on a match.
        name: Base name.
        file_type: Entry type, ``None`` for anything that is neither a
            regular file, a directory nor a symlink.
    """

    __slots__ = ("path", "display_path", "name", "file_type", "_dir_entry", "_stat", "_empty")

    def __init__(
        self,
        path: str,
        display_path: str,
        name: str,
        file_type: FileType | None,
        dir_entry: os.DirEntry[str] | None = None,
        stat_result: os.stat_result | None = None,
    ) -> None:
        self.path = path
        self.display_path = display_path
        self.name = name
        self.file_type = file_type
        self._dir_entry = dir_entry
        self._stat = stat_result
        self._empty: bool | None = None

    @classmethod
    def from_dir_entry(cls, dir_entry: os.DirEntry[str], display_path: str) -> Entry:
        if dir_entry.is_symlink():
            file_type: FileType | None = FileType.SYMLINK
        elif dir_entry.is_dir(follow_symlinks=False):
            file_type = FileType.DIRECTORY
        elif dir_entry.is_file(follow_symlinks=False):
            file_type = FileType.REGULAR
        else:
            file_type = None
        return cls(dir_entry.path, display_path, dir_entry.name, file_type, dir_entry=dir_entry)

    @classmethod
    def from_stat(cls, path: str, stat_result: os.stat_result) -> Entry:
        """Build the entry for a walk root from its ``lstat`` result."""
        name = os.path.basename(path.rstrip(os.sep)) or path
        return cls(path, path, name, file_type_of(stat_result.st_mode), stat_result=stat_result)

    @property
    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    def stat(self) -> os.stat_result:
        if self._stat is None:
            if self._dir_entry is not None:
                self._stat = self._dir_entry.stat(follow_symlinks=False)
            else:
                self._stat = os.lstat(self.path)
        return self._stat

    def dir_is_empty(self) -> bool:
        if self._empty is None:
            with os.scandir(self.path) as it:
                self._empty = next(it, None) is None
        return self._empty


def file_type_of(mode: int) -> FileType | None:
    if stat.S_ISLNK(mode):
        return FileType.SYMLINK
    if stat.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat.S_ISREG(mode):
        return FileType.REGULAR
    return None


def age_in_days(mtime: float, now: float) -> int:
    """Return whole days elapsed since *mtime*; clock skew clamps to zero."""
    return int(max(now - mtime, 0.0) // SECONDS_PER_DAY)


def matches(query: Query, entry: Entry, depth: int, *, now: float | None = None) -> bool:
    """Evaluate *query* against *entry* at *depth*.

    Predicates are checked in a fixed order and the first failing one
    ends the evaluation, so cheap checks run before those that touch
    the filesystem.

    Args:
        query: Compiled query.
        entry: Entry to test.
        depth: Depth of the entry below its root (root is 0).
        now: Reference time in epoch seconds for ``-mtime``; defaults
            to the current time.

    Returns:
        bool: ``True`` when every active predicate holds.

    Raises:
        PatternError: If a name or path pattern is malformed.
        OSError: If metadata or a directory listing cannot be read.
    """
    if query.min_depth is not None and depth < query.min_depth:
        return False

    if query.file_type is not None and entry.file_type is not query.file_type:
        return False

    if query.name_pattern is not None:
        pattern, name = query.name_pattern, entry.name
        if query.ignore_case:
            pattern, name = pattern.lower(), name.lower()
        if not glob_match(pattern, name):
            return False

    if query.path_pattern is not None and not glob_match(query.path_pattern, entry.display_path):
        return False

    if query.empty_only:
        if entry.is_dir:
            if not entry.dir_is_empty():
                return False
        elif entry.stat().st_size != 0:
            return False

    if query.size is not None or query.mtime is not None:
        info = entry.stat()
        if query.size is not None and not query.size.test(info.st_size):
            return False
        if query.mtime is not None:
            if now is None:
                now = time.time()
            if not query.mtime.test(age_in_days(info.st_mtime, now)):
                return False

    return True
