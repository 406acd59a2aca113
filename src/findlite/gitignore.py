"""Walk filter that skips entries ignored by a root's ``.gitignore``."""

from __future__ import annotations

import logging
import os

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)

GITIGNORE = ".gitignore"


class GitignoreFilter:
    """Exclude root-relative paths matched by a compiled gitignore spec."""

    def __init__(self, spec: GitIgnoreSpec) -> None:
        self._spec = spec

    @classmethod
    def for_root(cls, root: str) -> GitignoreFilter | None:
        """Build a filter from ``<root>/.gitignore``.

        Returns ``None`` when the root is not a directory or has no
        ``.gitignore``. Any other read failure propagates like every
        other I/O error of the walk.

        Raises:
            OSError: If the ``.gitignore`` exists but cannot be read.
        """
        path = os.path.join(root, GITIGNORE)
        try:
            with open(path, encoding="utf-8") as fh:
                spec = GitIgnoreSpec.from_lines(fh.read().splitlines())
        except (FileNotFoundError, NotADirectoryError):
            return None
        logger.debug("Loaded %s", path)
        return cls(spec)

    def should_exclude(self, rel_path: str, is_dir: bool) -> bool:
        """Return whether *rel_path* is ignored.

        Directories get a trailing ``/`` so directory-only patterns such
        as ``build/`` apply to them and not to files of the same name.
        """
        key = rel_path.replace(os.sep, "/")
        return self._spec.match_file(key + "/" if is_dir else key)
