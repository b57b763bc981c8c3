from __future__ import annotations

"""
Pipeline Domain Data Models.

The result object returned by a copy run to the interface layer, and the
factory functions that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from treenormalizer.domain.visit_models import VisitEvent

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CopyResult:
    """
    Outcome of a complete copy run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        sources: Absolute source directories of the run.
        destination_dir: Absolute destination directory.
        into: Relative destination prefix applied to every source.
        dry_run: Whether writes were suppressed.
        did_work: Whether the run wrote anything.
        events: Normalized event stream, in forwarding order.
        dirs_created: Directories forwarded to the copy consumer.
        files_copied: Files forwarded to the copy consumer.
        bytes_copied: Total size of the forwarded files.
        summary: Execution statistics for reporting.
    """
    ok: bool
    error: str

    sources: List[str]
    destination_dir: str
    into: str
    dry_run: bool

    did_work: bool = False
    events: List[VisitEvent] = field(default_factory=list)

    dirs_created: int = 0
    files_copied: int = 0
    bytes_copied: int = 0

    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def synthesized_dirs(self) -> List[str]:
        return [e.path for e in self.events if e.synthesized]


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        *,
        sources: Optional[List[str]] = None,
        destination_dir: str = "",
        dry_run: bool = False,
) -> CopyResult:
    """
    Create a failed copy result.

    Args:
        error: Detailed error description.
        cfg: Configuration of the failed run.
        sources: Resolved sources, if resolution got that far.
        destination_dir: Resolved destination, if any.
        dry_run: Whether the run was a dry run.

    Returns:
        CopyResult: An immutable error result.
    """
    return CopyResult(
        ok=False,
        error=error,
        sources=list(sources if sources is not None else cfg.get("sources", [])),
        destination_dir=destination_dir or cfg.get("destination_dir", ""),
        into=cfg.get("into", ""),
        dry_run=dry_run,
    )


def create_success_result(
        cfg: Dict[str, Any],
        sources: List[str],
        destination_dir: str,
        *,
        dry_run: bool,
        did_work: bool,
        events: List[VisitEvent],
        dirs_created: int,
        files_copied: int,
        bytes_copied: int,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> CopyResult:
    """Create a successful copy result."""
    return CopyResult(
        ok=True,
        error="",
        sources=list(sources),
        destination_dir=destination_dir,
        into=cfg.get("into", ""),
        dry_run=dry_run,
        did_work=did_work,
        events=list(events),
        dirs_created=dirs_created,
        files_copied=files_copied,
        bytes_copied=bytes_copied,
        summary=summary_extra or {},
    )
