from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

Sets up the testing environment:
1. Puts the 'src' directory on sys.path so the package imports uninstalled.
2. Provides in-memory visit entries and sample source trees shared by the
   unit and integration suites.
"""

import io
import os
import sys
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treenormalizer.domain.relative_path import RelativePath  # noqa: E402
from treenormalizer.domain.visit_models import VisitDetails  # noqa: E402


# -----------------------------------------------------------------------------
# In-memory entries
# -----------------------------------------------------------------------------
class StubVisitDetails(VisitDetails):
    """Producer-supplied entry without filesystem backing."""

    def __init__(self, relative_path: RelativePath, content: bytes = b"") -> None:
        self._relative_path = relative_path
        self._content = content
        self.stop_requested = False

    @property
    def relative_path(self) -> RelativePath:
        return self._relative_path

    @property
    def display_name(self) -> str:
        return f"stub:{self._relative_path}"

    @property
    def last_modified(self) -> float:
        return 0.0

    @property
    def is_directory(self) -> bool:
        return not self._relative_path.is_file

    @property
    def size(self) -> int:
        return len(self._content)

    def open(self) -> BinaryIO:
        return io.BytesIO(self._content)

    def get_file(self) -> str:
        return f"/stub/{self._relative_path}"

    def stop_visiting(self) -> None:
        self.stop_requested = True

    def copy_to(self, target: str, *, preserve_timestamps: bool = True) -> None:
        with open(target, "wb") as f:
            f.write(self._content)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def file_entry() -> Callable[..., StubVisitDetails]:
    """Factory building a file entry from a ``/``-separated path."""
    def _make(path: str, content: bytes = b"") -> StubVisitDetails:
        return StubVisitDetails(RelativePath.parse(True, path), content)
    return _make


@pytest.fixture
def dir_entry() -> Callable[[str], StubVisitDetails]:
    """Factory building a directory entry from a ``/``-separated path."""
    def _make(path: str) -> StubVisitDetails:
        return StubVisitDetails(RelativePath.parse(False, path))
    return _make


def _write_tree(root: Path, files: List[str], empty_dirs: Optional[List[str]] = None) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for rel in files:
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(f"content of {rel}", encoding="utf-8")
    for rel in empty_dirs or []:
        (root / rel).mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def overlapping_sources(tmp_path: Path) -> List[Path]:
    """
    Two source trees sharing directories.

    Structure:
    /src_a
      /docs
        guide.md
      /lib
        core.py
      /empty
    /src_b
      /docs
        api.md
      /lib
        /nested
          deep.py
    """
    src_a = _write_tree(
        tmp_path / "src_a",
        ["docs/guide.md", "lib/core.py"],
        empty_dirs=["empty"],
    )
    src_b = _write_tree(
        tmp_path / "src_b",
        ["docs/api.md", "lib/nested/deep.py"],
    )
    return [src_a, src_b]
