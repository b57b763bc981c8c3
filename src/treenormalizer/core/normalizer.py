from __future__ import annotations

"""
Normalizing Copy Visitor.

Sits between a producer of visit events and a downstream visitor, and cleans
the stream up as it passes through:

- every directory is forwarded at most once,
- every directory is forwarded before anything below it,
- directories implied by a descendant but never visited are synthesized,
- directories that never receive a descendant are not forwarded at all.

Directory visits are buffered until a descendant needs them. Lifecycle and
spec events are forwarded untouched.
"""

import logging
from typing import Dict, FrozenSet, List, Optional, Set

from treenormalizer.domain.relative_path import RelativePath
from treenormalizer.domain.visit_models import SynthesizedDirectory, VisitDetails
from treenormalizer.domain.visitor import CopyAction, CopySpec, CopySpecVisitor

logger = logging.getLogger(__name__)


class NormalizingCopyVisitor(CopySpecVisitor):
    """
    Filter that removes duplicate and empty directories and adds missing ones.

    State is scoped to a single run and cleared by ``end_visit``. Use one
    instance per concurrently running copy.

    Args:
        visitor: Downstream visitor receiving the normalized stream.
    """

    def __init__(self, visitor: CopySpecVisitor) -> None:
        self._visitor = visitor
        self._visited: Set[RelativePath] = set()
        self._pending: Dict[RelativePath, VisitDetails] = {}

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_visit(self, action: CopyAction) -> None:
        self._visitor.start_visit(action)

    def end_visit(self) -> None:
        self.reset()
        self._visitor.end_visit()

    def visit_spec(self, spec: CopySpec) -> None:
        self._visitor.visit_spec(spec)

    @property
    def did_work(self) -> bool:
        return self._visitor.did_work

    def reset(self) -> None:
        """Forget forwarded and buffered directories."""
        if self._pending:
            logger.debug(
                f"Discarding {len(self._pending)} directories without descendants: "
                f"{sorted(str(p) for p in self._pending)}"
            )
        self._visited.clear()
        self._pending.clear()

    # -------------------------------------------------------------------------
    # Tree events
    # -------------------------------------------------------------------------

    def visit_file(self, file_details: VisitDetails) -> None:
        self._resolve(file_details.relative_path.parent)
        self._visitor.visit_file(file_details)

    def visit_dir(self, dir_details: VisitDetails) -> None:
        path = dir_details.relative_path
        if path in self._visited:
            logger.debug(f"Dropping duplicate visit of directory '{path}'")
            return
        # A repeated visit replaces the entry buffered earlier
        self._pending[path] = dir_details

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    @property
    def visited_dirs(self) -> FrozenSet[RelativePath]:
        return frozenset(self._visited)

    @property
    def pending_dirs(self) -> FrozenSet[RelativePath]:
        return frozenset(self._pending)

    # -------------------------------------------------------------------------
    # Ancestor resolution
    # -------------------------------------------------------------------------

    def _resolve(self, path: Optional[RelativePath]) -> None:
        """
        Forward ``path`` and every unforwarded ancestor, outermost first.

        The root (the only path without a parent) is never forwarded.
        """
        chain: List[RelativePath] = []
        current = path
        while current is not None and current.parent is not None and current not in self._visited:
            chain.append(current)
            current = current.parent

        for dir_path in reversed(chain):
            entry = self._pending.pop(dir_path, None)
            if entry is None:
                logger.debug(f"Synthesizing missing directory '{dir_path}'")
                entry = SynthesizedDirectory(dir_path)
            self._visited.add(dir_path)
            self._visitor.visit_dir(entry)
