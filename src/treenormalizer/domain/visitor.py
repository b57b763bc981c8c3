from __future__ import annotations

"""
Visitor Protocol.

A copy run is delivered to consumers as a sequence of calls on a
CopySpecVisitor: ``start_visit`` once, then any interleaving of
``visit_spec``, ``visit_dir`` and ``visit_file``, then ``end_visit`` once.
Producers, filters (such as the normalizer) and consumers all share this
shape, so they can be chained.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from treenormalizer.domain.visit_models import VisitDetails

# -----------------------------------------------------------------------------
# RUN CONTEXT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CopySpec:
    """
    One source tree taking part in a copy run.

    Attributes:
        source_dir: Absolute directory whose contents are visited.
        into: Relative destination prefix for the contents (``/``-separated).
    """
    source_dir: str
    into: str = ""


@dataclass(frozen=True)
class CopyAction:
    """
    Run context handed to ``start_visit``.

    Attributes:
        destination_dir: Directory receiving the copied tree.
        dry_run: If True, consumers must not write anything.
        preserve_timestamps: Copy modification times along with content.
    """
    destination_dir: str
    dry_run: bool = False
    preserve_timestamps: bool = True


# -----------------------------------------------------------------------------
# VISITOR INTERFACE
# -----------------------------------------------------------------------------

class CopySpecVisitor(ABC):
    """Receiver of the events of a single copy run."""

    @abstractmethod
    def start_visit(self, action: CopyAction) -> None:
        ...

    @abstractmethod
    def end_visit(self) -> None:
        ...

    @abstractmethod
    def visit_spec(self, spec: CopySpec) -> None:
        ...

    @abstractmethod
    def visit_dir(self, dir_details: VisitDetails) -> None:
        ...

    @abstractmethod
    def visit_file(self, file_details: VisitDetails) -> None:
        ...

    @property
    @abstractmethod
    def did_work(self) -> bool:
        """True if the run produced any effect."""
