from __future__ import annotations

"""
Copy Pipeline Orchestration.

Coordinates a complete copy run:
1. Validates the configuration and resolves the source and destination paths.
2. Builds the visitor chain: normalizer, recorder, file copier.
3. Walks every source tree through the chain.
4. Packs counters and the normalized event stream into a CopyResult.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from treenormalizer.core.normalizer import NormalizingCopyVisitor
from treenormalizer.core.pipeline.validator import validate_config
from treenormalizer.core.services.copier import FileCopyVisitor
from treenormalizer.core.services.producer import walk_copy_specs
from treenormalizer.core.visitors import RecordingVisitor
from treenormalizer.domain.pipeline_models import (
    CopyResult,
    create_error_result,
    create_success_result,
)
from treenormalizer.domain.visitor import CopyAction, CopySpec
from treenormalizer.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def run_copy(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> CopyResult:
    """
    Execute a normalized copy of the configured sources.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: Normalize and report the stream without writing anything.

    Returns:
        CopyResult: Status, normalized event stream and counters.
    """
    logger.info("Copy run started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    base = os.getcwd()
    sources: List[str] = [normalize_path(s, base) for s in cfg["sources"]]

    if not sources:
        msg = "No source directories configured."
        logger.error(msg)
        return create_error_result(msg, cfg, sources=sources, dry_run=dry_run)

    for source in sources:
        if not os.path.isdir(source):
            msg = f"Invalid source directory: {source}"
            logger.error(msg)
            return create_error_result(msg, cfg, sources=sources, dry_run=dry_run)

    if not cfg["destination_dir"] and not dry_run:
        msg = "No destination directory configured."
        logger.error(msg)
        return create_error_result(msg, cfg, sources=sources, dry_run=dry_run)

    destination_dir = normalize_path(cfg["destination_dir"], base)

    if not dry_run:
        for source in sources:
            if _is_within(destination_dir, source):
                msg = f"Destination {destination_dir} lies inside source {source}"
                logger.error(msg)
                return create_error_result(
                    msg, cfg, sources=sources, destination_dir=destination_dir, dry_run=dry_run
                )

    # -------------------------------------------------------------------------
    # 2) Visitor Chain
    # -------------------------------------------------------------------------
    copier = FileCopyVisitor()
    recorder = RecordingVisitor(copier)
    normalizer = NormalizingCopyVisitor(recorder)

    specs = [CopySpec(source_dir=s, into=cfg["into"]) for s in sources]
    action = CopyAction(
        destination_dir=destination_dir,
        dry_run=dry_run,
        preserve_timestamps=cfg["preserve_timestamps"],
    )

    # -------------------------------------------------------------------------
    # 3) Execution
    # -------------------------------------------------------------------------
    try:
        walk_copy_specs(specs, normalizer, action)
    except OSError as e:
        msg = f"Copy failed: {e}"
        logger.error(msg)
        return create_error_result(
            msg, cfg, sources=sources, destination_dir=destination_dir, dry_run=dry_run
        )

    # -------------------------------------------------------------------------
    # 4) Summary
    # -------------------------------------------------------------------------
    synthesized = [e.path for e in recorder.events if e.synthesized]
    summary = {
        "destination_dir": destination_dir,
        "sources": len(sources),
        "dirs": copier.dirs_created,
        "files": copier.files_copied,
        "bytes": copier.bytes_copied,
        "synthesized_dirs": len(synthesized),
        "dry_run": dry_run,
    }

    logger.info("Copy run completed successfully.")
    return create_success_result(
        cfg,
        sources,
        destination_dir,
        dry_run=dry_run,
        did_work=normalizer.did_work,
        events=recorder.events,
        dirs_created=copier.dirs_created,
        files_copied=copier.files_copied,
        bytes_copied=copier.bytes_copied,
        summary_extra=summary,
    )


def _is_within(path: str, directory: str) -> bool:
    """True if ``path`` is ``directory`` or lies below it."""
    path = os.path.normcase(os.path.realpath(path))
    directory = os.path.normcase(os.path.realpath(directory))
    try:
        return os.path.commonpath([path, directory]) == directory
    except ValueError:
        # Different drives on Windows
        return False
