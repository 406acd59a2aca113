"""Shared fixtures for findlite tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard test directory tree.

    Structure::

        root/
        ├── docs/
        │   ├── guide.md        (5 bytes)
        │   └── notes.TXT       (0 bytes)
        ├── empty/
        ├── src/
        │   ├── app.py          (3 bytes)
        │   └── pkg/
        │       └── mod.py      (2048 bytes)
        └── README.md           (6 bytes)
    """
    root = tmp_path / "root"
    (root / "docs").mkdir(parents=True)
    (root / "docs" / "guide.md").write_text("guide")
    (root / "docs" / "notes.TXT").write_text("")
    (root / "empty").mkdir()
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "src" / "app.py").write_text("app")
    (root / "src" / "pkg" / "mod.py").write_bytes(b"x" * 2048)
    (root / "README.md").write_text("readme")
    return root
