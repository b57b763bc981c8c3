from __future__ import annotations

"""
Relative Path Value Type.

A RelativePath locates a file or directory inside the tree being copied,
independently of where that tree lives on disk. The empty directory path is
the tree root; it is the only path without a parent.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

SEPARATOR = "/"


@dataclass(frozen=True, init=False)
class RelativePath:
    """
    Ordered segments plus a file/directory flag.

    Two paths are equal when both their segments and their flag are equal,
    so ``a/b`` as a file and ``a/b`` as a directory are distinct keys.

    Attributes:
        is_file: True for file paths, False for directory paths.
        segments: Path components from the tree root downwards.
    """
    is_file: bool
    segments: Tuple[str, ...]

    def __init__(self, is_file: bool, *segments: str) -> None:
        object.__setattr__(self, "is_file", bool(is_file))
        object.__setattr__(self, "segments", tuple(segments))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, is_file: bool, path: str) -> RelativePath:
        """
        Build a path from a ``/``-separated string.

        The platform separator is accepted as well; empty components
        are dropped.

        Args:
            is_file: Flag for the resulting path.
            path: Relative path string, e.g. ``"a/b/c.txt"``.

        Returns:
            RelativePath: The parsed path. An empty string yields the root.
        """
        normalized = (path or "").replace(os.sep, SEPARATOR)
        parts = [p for p in normalized.split(SEPARATOR) if p]
        return cls(is_file, *parts)

    def append(self, is_file: bool, *segments: str) -> RelativePath:
        """Return a new path with ``segments`` added below this one."""
        return RelativePath(is_file, *(self.segments + tuple(segments)))

    def append_path(self, other: RelativePath) -> RelativePath:
        """Return ``other`` re-rooted below this path, keeping its flag."""
        return RelativePath(other.is_file, *(self.segments + other.segments))

    def prepend(self, *segments: str) -> RelativePath:
        """Return a new path with ``segments`` added above this one."""
        return RelativePath(self.is_file, *(tuple(segments) + self.segments))

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def parent(self) -> Optional[RelativePath]:
        """
        The enclosing directory path.

        The parent of a single-segment path is the root; the root itself
        has no parent and returns None.
        """
        if not self.segments:
            return None
        return RelativePath(False, *self.segments[:-1])

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def name(self) -> str:
        """Last segment, or an empty string for the root."""
        return self.segments[-1] if self.segments else ""

    @property
    def path_string(self) -> str:
        return SEPARATOR.join(self.segments)

    def get_file(self, base_dir: str) -> str:
        """Resolve this path to an OS path below ``base_dir``."""
        return os.path.join(base_dir, *self.segments)

    def __str__(self) -> str:
        return self.path_string


ROOT = RelativePath(False)
