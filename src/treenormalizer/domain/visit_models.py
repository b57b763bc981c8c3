from __future__ import annotations

"""
Visit Entry Domain Models.

Defines the entries carried by visit events. Real entries are backed by a
content accessor (see treenormalizer.infra.fs); synthesized directories are
fabricated by the normalizer to fill gaps in the ancestor chain and reject
every operation that would need real filesystem backing.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO

from treenormalizer.domain.relative_path import RelativePath

KIND_DIR = "dir"
KIND_FILE = "file"

# -----------------------------------------------------------------------------
# ERRORS
# -----------------------------------------------------------------------------

class UnsupportedOperationError(NotImplementedError):
    """Raised when an entry cannot perform the requested operation."""

    def __init__(self, operation: str, entry: VisitDetails) -> None:
        self.operation = operation
        self.relative_path = entry.relative_path
        super().__init__(
            f"'{operation}' is not supported by {type(entry).__name__} "
            f"'{entry.display_name}'"
        )


# -----------------------------------------------------------------------------
# BASE ENTRY
# -----------------------------------------------------------------------------

class VisitDetails(ABC):
    """
    A file or directory reported by a visit event.

    Subclasses supply the path and the content accessors; naming helpers are
    derived from the relative path.
    """

    @property
    @abstractmethod
    def relative_path(self) -> RelativePath:
        """Location of the entry inside the copied tree."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human readable identifier used in logs and error messages."""

    @property
    @abstractmethod
    def last_modified(self) -> float:
        """Modification time in seconds since the epoch."""

    @property
    @abstractmethod
    def is_directory(self) -> bool:
        ...

    @property
    @abstractmethod
    def size(self) -> int:
        ...

    @abstractmethod
    def open(self) -> BinaryIO:
        """Open the entry content for binary reading."""

    @abstractmethod
    def get_file(self) -> str:
        """Return the OS path backing this entry."""

    @abstractmethod
    def stop_visiting(self) -> None:
        """Ask the producer to stop emitting further events."""

    @abstractmethod
    def copy_to(self, target: str, *, preserve_timestamps: bool = True) -> None:
        """Copy the entry content to the OS path ``target``."""

    @property
    def name(self) -> str:
        return self.relative_path.name

    @property
    def path(self) -> str:
        return self.relative_path.path_string

    @property
    def is_synthesized(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


# -----------------------------------------------------------------------------
# SYNTHESIZED DIRECTORY
# -----------------------------------------------------------------------------

class SynthesizedDirectory(VisitDetails):
    """
    Placeholder for a directory implied by a descendant but never visited.

    Only the path, the names and the modification time (taken when the
    placeholder is created) are available. Every content or control
    operation raises UnsupportedOperationError.
    """

    def __init__(self, relative_path: RelativePath) -> None:
        self._relative_path = relative_path
        self._last_modified = time.time()

    @property
    def relative_path(self) -> RelativePath:
        return self._relative_path

    @property
    def display_name(self) -> str:
        return str(self._relative_path)

    @property
    def last_modified(self) -> float:
        return self._last_modified

    @property
    def is_synthesized(self) -> bool:
        return True

    @property
    def is_directory(self) -> bool:
        raise UnsupportedOperationError("is_directory", self)

    @property
    def size(self) -> int:
        raise UnsupportedOperationError("size", self)

    def open(self) -> BinaryIO:
        raise UnsupportedOperationError("open", self)

    def get_file(self) -> str:
        raise UnsupportedOperationError("get_file", self)

    def stop_visiting(self) -> None:
        raise UnsupportedOperationError("stop_visiting", self)

    def copy_to(self, target: str, *, preserve_timestamps: bool = True) -> None:
        raise UnsupportedOperationError("copy_to", self)


# -----------------------------------------------------------------------------
# EVENT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class VisitEvent:
    """
    A single forwarded tree event.

    Attributes:
        kind: ``"dir"`` or ``"file"``.
        path: Relative path string of the entry.
        synthesized: True if the entry was fabricated by the normalizer.
    """
    kind: str
    path: str
    synthesized: bool = False
