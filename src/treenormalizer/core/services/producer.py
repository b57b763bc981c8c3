from __future__ import annotations

"""
Source Tree Producer.

Walks the source directories of a copy run and reports their contents to a
visitor. The producer makes no attempt to clean up the stream: overlapping
sources report shared directories more than once, and the directories of an
``into`` prefix are never reported at all. Downstream normalization takes
care of both.
"""

import logging
import os
from typing import Iterable

from treenormalizer.domain.relative_path import RelativePath
from treenormalizer.domain.visitor import CopyAction, CopySpec, CopySpecVisitor
from treenormalizer.infra.fs import FileSystemVisitDetails

logger = logging.getLogger(__name__)


class VisitControl:
    """Stop flag shared by the producer and the entries it emits."""

    def __init__(self) -> None:
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True

    def reset(self) -> None:
        self.stopped = False


# ==============================================================================
# PUBLIC API
# ==============================================================================

def walk_copy_specs(
        specs: Iterable[CopySpec],
        visitor: CopySpecVisitor,
        action: CopyAction,
) -> None:
    """
    Deliver a complete copy run for ``specs`` to ``visitor``.

    Emits ``start_visit``, then for each spec ``visit_spec`` followed by the
    directories and files below its source directory, and finally
    ``end_visit``. ``end_visit`` is sent even when a walk fails, so that
    stateful visitors always release their run state.

    Args:
        specs: Source trees, visited in order.
        visitor: Receiver of the events.
        action: Run context passed to ``start_visit``.

    Raises:
        FileNotFoundError: If a source directory does not exist.
    """
    control = VisitControl()
    visitor.start_visit(action)
    try:
        for spec in specs:
            control.reset()
            visitor.visit_spec(spec)
            count = walk_source_tree(spec, visitor, control)
            logger.debug(f"Visited {count} entries below '{spec.source_dir}'")
    finally:
        visitor.end_visit()


def walk_source_tree(spec: CopySpec, visitor: CopySpecVisitor, control: VisitControl) -> int:
    """
    Emit ``visit_dir`` / ``visit_file`` events for one source directory.

    Directories and files are visited in sorted order, each directory before
    its contents. The source directory itself is not emitted.

    Args:
        spec: Source tree and destination prefix.
        visitor: Receiver of the events.
        control: Stop flag; checked after every event.

    Returns:
        int: Number of entries emitted.

    Raises:
        FileNotFoundError: If the source directory does not exist.
        OSError: If a directory below the source cannot be listed.
    """
    source_dir = os.path.abspath(spec.source_dir)
    if not os.path.isdir(source_dir):
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    prefix = RelativePath.parse(False, spec.into)
    emitted = 0

    for root, dirs, files in os.walk(source_dir, onerror=_raise_walk_error):
        dirs.sort()
        files.sort()

        rel_root = os.path.relpath(root, source_dir)
        base = prefix if rel_root == os.curdir else prefix.append_path(RelativePath.parse(False, rel_root))

        for dir_name in dirs:
            visitor.visit_dir(FileSystemVisitDetails(
                os.path.join(root, dir_name), base.append(False, dir_name), control.stop
            ))
            emitted += 1
            if control.stopped:
                logger.info(f"Visiting of '{source_dir}' stopped by consumer")
                return emitted

        for file_name in files:
            visitor.visit_file(FileSystemVisitDetails(
                os.path.join(root, file_name), base.append(True, file_name), control.stop
            ))
            emitted += 1
            if control.stopped:
                logger.info(f"Visiting of '{source_dir}' stopped by consumer")
                return emitted

    return emitted


def _raise_walk_error(error: OSError) -> None:
    """Abort the walk instead of silently skipping an unreadable subtree."""
    logger.error(f"Cannot list directory '{error.filename}': {error.strerror}")
    raise error
