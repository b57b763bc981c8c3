from __future__ import annotations

"""
File Copy Visitor.

Terminal consumer of a normalized copy run: recreates every forwarded
directory below the destination and copies every forwarded file into it.
It relies on the normalizer for ordering and de-duplication and only reads
the relative path of directory entries, so synthesized directories are
handled like real ones.
"""

import logging
import os
from typing import Optional

from treenormalizer.domain.visit_models import VisitDetails
from treenormalizer.domain.visitor import CopyAction, CopySpec, CopySpecVisitor

logger = logging.getLogger(__name__)


class FileCopyVisitor(CopySpecVisitor):
    """
    Writes the visited tree below ``action.destination_dir``.

    In dry-run mode entries are counted but nothing is written. OS errors
    propagate to the caller.
    """

    def __init__(self) -> None:
        self._action: Optional[CopyAction] = None
        self._did_work = False
        self.dirs_created = 0
        self.files_copied = 0
        self.bytes_copied = 0

    def start_visit(self, action: CopyAction) -> None:
        self._action = action
        self._did_work = False
        self.dirs_created = 0
        self.files_copied = 0
        self.bytes_copied = 0

        if action.dry_run:
            logger.info(f"Dry run: nothing will be written to {action.destination_dir}")
        else:
            os.makedirs(action.destination_dir, exist_ok=True)

    def end_visit(self) -> None:
        logger.info(
            f"Copy finished: {self.dirs_created} directories, "
            f"{self.files_copied} files ({self.bytes_copied} bytes)"
        )

    def visit_spec(self, spec: CopySpec) -> None:
        target = spec.into or "."
        logger.info(f"Copying from {spec.source_dir} into {target}")

    def visit_dir(self, dir_details: VisitDetails) -> None:
        target = self._target(dir_details)
        self.dirs_created += 1
        if self._action.dry_run:
            return
        os.makedirs(target, exist_ok=True)
        self._did_work = True

    def visit_file(self, file_details: VisitDetails) -> None:
        target = self._target(file_details)
        self.files_copied += 1
        self.bytes_copied += file_details.size
        if self._action.dry_run:
            return
        file_details.copy_to(target, preserve_timestamps=self._action.preserve_timestamps)
        self._did_work = True

    @property
    def did_work(self) -> bool:
        return self._did_work

    def _target(self, details: VisitDetails) -> str:
        if self._action is None:
            raise RuntimeError("visit received before start_visit")
        return details.relative_path.get_file(self._action.destination_dir)
