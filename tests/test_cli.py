"""Tests for findlite.cli."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from findlite.cli import main, split_paths_and_expressions


class TestSplitPathsAndExpressions:
    @pytest.mark.parametrize(
        ("args", "paths", "expressions"),
        [
            ([], [], []),
            (["a", "b"], ["a", "b"], []),
            (["a", "-name", "x"], ["a"], ["-name", "x"]),
            (["-type", "f"], [], ["-type", "f"]),
            (["a", "!", "-name", "x"], ["a"], ["!", "-name", "x"]),
            (["a", "(", "b"], ["a"], ["(", "b"]),
        ],
    )
    def test_split(self, args: list[str], paths: list[str], expressions: list[str]) -> None:
        assert split_paths_and_expressions(args) == (paths, expressions)


class TestMain:
    def test_no_arguments_prints_usage(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "usage" in capsys.readouterr().err

    def test_prints_matches(self, sample_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        rc = main([str(sample_tree), "-name", "*.py", "-type", "f"])
        assert rc == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            str(sample_tree / "src" / "app.py"),
            str(sample_tree / "src" / "pkg" / "mod.py"),
        ]

    def test_default_root_is_cwd(
        self, sample_tree: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(sample_tree / "docs")
        assert main(["-type", "f"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            f".{os.sep}guide.md",
            f".{os.sep}notes.TXT",
        ]

    def test_compile_error(self, sample_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(sample_tree), "-size", "abc"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "findlite: invalid -size value\n"

    def test_unsupported_expression(self, sample_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(sample_tree), "-o", "-name", "x"]) == 1
        assert "unsupported expression: -o" in capsys.readouterr().err

    def test_missing_root(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "missing")]) == 1
        assert capsys.readouterr().err.startswith("findlite: ")

    def test_gitignore_option(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / ".gitignore").write_text("*.log\n")
        (tmp_path / "a.log").write_text("log")
        (tmp_path / "a.txt").write_text("txt")
        assert main(["--gitignore", str(tmp_path), "-name", "a.*"]) == 0
        assert capsys.readouterr().out.splitlines() == [str(tmp_path / "a.txt")]

    def test_double_dash_ends_options(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "a.log").write_text("log")
        assert main(["--", str(tmp_path), "-name", "a.log"]) == 0
        assert capsys.readouterr().out.splitlines() == [str(tmp_path / "a.log")]

    def test_unknown_long_option(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["--bogus", str(tmp_path)])
