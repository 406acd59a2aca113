"""Tests for findlite.gitignore."""

from __future__ import annotations

import io
import os
import stat
from pathlib import Path

import pytest

from findlite.compiler import compile_query
from findlite.gitignore import GitignoreFilter
from findlite.walker import find


class TestForRoot:
    def test_without_gitignore(self, tmp_path: Path) -> None:
        assert GitignoreFilter.for_root(str(tmp_path)) is None

    def test_file_root(self, tmp_path: Path) -> None:
        (tmp_path / "f.txt").write_text("f")
        assert GitignoreFilter.for_root(str(tmp_path / "f.txt")) is None

    def test_empty_gitignore_excludes_nothing(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("")
        entry_filter = GitignoreFilter.for_root(str(tmp_path))
        assert entry_filter is not None
        assert entry_filter.should_exclude("anything.py", False) is False

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs non-root POSIX")
    def test_unreadable_gitignore_raises(self, tmp_path: Path) -> None:
        gitignore = tmp_path / ".gitignore"
        gitignore.write_text("*.pyc\n")
        gitignore.chmod(0o000)
        try:
            with pytest.raises(PermissionError):
                GitignoreFilter.for_root(str(tmp_path))
        finally:
            gitignore.chmod(stat.S_IRUSR | stat.S_IWUSR)


class TestShouldExclude:
    @pytest.mark.parametrize(
        ("rel_path", "is_dir", "expected"),
        [
            ("app.pyc", False, True),
            (os.path.join("src", "app.pyc"), False, True),
            (os.path.join("src", "app.py"), False, False),
            ("build", True, True),
            ("build", False, False),
            (os.path.join("src", "build"), True, True),
            ("# comment", False, False),
        ],
    )
    def test_patterns(self, tmp_path: Path, rel_path: str, is_dir: bool, expected: bool) -> None:
        (tmp_path / ".gitignore").write_text("# comment\n*.pyc\nbuild/\n")
        entry_filter = GitignoreFilter.for_root(str(tmp_path))
        assert entry_filter is not None
        assert entry_filter.should_exclude(rel_path, is_dir) is expected


class TestWalkWithGitignore:
    def test_ignored_entries_skipped_and_not_descended(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("*.pyc\nbuild/\n")
        (tmp_path / "build" / "lib").mkdir(parents=True)
        (tmp_path / "build" / "lib" / "out.py").write_text("out")
        (tmp_path / "app.py").write_text("app")
        (tmp_path / "app.pyc").write_bytes(b"\x00")

        out = io.StringIO()
        find(
            [str(tmp_path)],
            compile_query(["-type", "f"]),
            out,
            entry_filter_factory=GitignoreFilter.for_root,
        )
        names = [os.path.basename(line) for line in out.getvalue().splitlines()]
        assert names == [".gitignore", "app.py"]
