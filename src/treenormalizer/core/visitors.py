from __future__ import annotations

"""
Recording Visitor.

Keeps an ordered log of the events it receives and optionally passes them on
to another visitor. The pipeline places it right after the normalizer so the
normalized stream can be reported; tests use it as a downstream probe.
"""

from typing import List, Optional

from treenormalizer.domain.visit_models import KIND_DIR, KIND_FILE, VisitDetails, VisitEvent
from treenormalizer.domain.visitor import CopyAction, CopySpec, CopySpecVisitor


class RecordingVisitor(CopySpecVisitor):
    """Visitor that records tree events and forwards them to ``delegate``."""

    def __init__(self, delegate: Optional[CopySpecVisitor] = None) -> None:
        self._delegate = delegate
        self.action: Optional[CopyAction] = None
        self.events: List[VisitEvent] = []
        self.entries: List[VisitDetails] = []
        self.specs: List[CopySpec] = []
        self.started = False
        self.ended = False

    def start_visit(self, action: CopyAction) -> None:
        self.action = action
        self.events = []
        self.entries = []
        self.specs = []
        self.started = True
        self.ended = False
        if self._delegate is not None:
            self._delegate.start_visit(action)

    def end_visit(self) -> None:
        self.ended = True
        if self._delegate is not None:
            self._delegate.end_visit()

    def visit_spec(self, spec: CopySpec) -> None:
        self.specs.append(spec)
        if self._delegate is not None:
            self._delegate.visit_spec(spec)

    def visit_dir(self, dir_details: VisitDetails) -> None:
        self._record(KIND_DIR, dir_details)
        if self._delegate is not None:
            self._delegate.visit_dir(dir_details)

    def visit_file(self, file_details: VisitDetails) -> None:
        self._record(KIND_FILE, file_details)
        if self._delegate is not None:
            self._delegate.visit_file(file_details)

    @property
    def did_work(self) -> bool:
        if self._delegate is not None:
            return self._delegate.did_work
        return bool(self.events)

    @property
    def paths(self) -> List[str]:
        """Recorded paths in forwarding order."""
        return [e.path for e in self.events]

    def _record(self, kind: str, details: VisitDetails) -> None:
        self.entries.append(details)
        self.events.append(VisitEvent(kind, details.path, details.is_synthesized))
