from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path helpers, the per-user data directory, and the filesystem-backed visit
entries that give producers real size, content and timestamp access.
"""

import os
import shutil
from typing import BinaryIO, Callable, Optional

from treenormalizer.domain.relative_path import RelativePath
from treenormalizer.domain.visit_models import VisitDetails

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "TreeNormalizer"
UNIX_APP_DIR_NAME = ".treenormalizer"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    - Windows: %LOCALAPPDATA%/TreeNormalizer
    - Linux/Mac: ~/.treenormalizer

    The directory is not created here; writers create it on demand.

    Returns:
        str: Absolute path to the application data directory.
    """
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return os.path.abspath(os.path.join(base, APP_DIR_NAME))

    return os.path.abspath(os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME))


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and ``~``. Falls back to ``fallback`` when
    the input is empty.

    Args:
        path: Raw input path string.
        fallback: Path used when ``path`` is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


# -----------------------------------------------------------------------------
# FILESYSTEM-BACKED ENTRIES
# -----------------------------------------------------------------------------

class FileSystemVisitDetails(VisitDetails):
    """
    Visit entry backed by a real file or directory.

    Args:
        file: Absolute OS path of the entry.
        relative_path: Location of the entry inside the copied tree.
        stop_callback: Invoked by ``stop_visiting``; supplied by the producer.
    """

    def __init__(
            self,
            file: str,
            relative_path: RelativePath,
            stop_callback: Optional[Callable[[], None]] = None,
    ) -> None:
        self._file = file
        self._relative_path = relative_path
        self._stop_callback = stop_callback

    @property
    def relative_path(self) -> RelativePath:
        return self._relative_path

    @property
    def display_name(self) -> str:
        return self._file

    @property
    def last_modified(self) -> float:
        return os.path.getmtime(self._file)

    @property
    def is_directory(self) -> bool:
        return os.path.isdir(self._file)

    @property
    def size(self) -> int:
        return os.path.getsize(self._file)

    def open(self) -> BinaryIO:
        return open(self._file, "rb")

    def get_file(self) -> str:
        return self._file

    def stop_visiting(self) -> None:
        if self._stop_callback is not None:
            self._stop_callback()

    def copy_to(self, target: str, *, preserve_timestamps: bool = True) -> None:
        """
        Copy this entry to ``target``.

        Directories are created; files are copied byte for byte, with their
        modification time when ``preserve_timestamps`` is set.
        """
        if self.is_directory:
            os.makedirs(target, exist_ok=True)
            return

        parent = os.path.dirname(target)
        if parent:
            os.makedirs(parent, exist_ok=True)
        if preserve_timestamps:
            shutil.copy2(self._file, target)
        else:
            shutil.copyfile(self._file, target)
