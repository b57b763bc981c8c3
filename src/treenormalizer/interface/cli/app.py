from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Drives a CLI session: logging bootstrap, configuration resolution (defaults,
saved state, command-line overrides), the copy run itself and the rendering
of its result.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from treenormalizer.core.pipeline.engine import run_copy
from treenormalizer.core.pipeline.validator import validate_config
from treenormalizer.domain.config import get_default_config, load_config, save_config
from treenormalizer.domain.pipeline_models import CopyResult
from treenormalizer.infra.fs import normalize_path
from treenormalizer.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from treenormalizer.interface.cli import args as cli_args

logger = get_logger(__name__)

MERGE_KEYS = ["sources", "destination_dir", "into", "preserve_timestamps"]

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    logger.debug("CLI execution initiated. Resolving configuration...")

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        save_config(clean_conf)

    for source in clean_conf["sources"]:
        if not os.path.isdir(normalize_path(source, os.getcwd())):
            msg = f"Source directory does not exist: {source}"
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return 2

    try:
        result = run_copy(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        msg = f"Copy run failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, list_events=bool(args.list_events))

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known, non-None override values into ``base``.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k in MERGE_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: CopyResult, *, list_events: bool = False) -> None:
    """Print a CopyResult as a terminal report."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    if list_events:
        for event in result.events:
            marker = "d" if event.kind == "dir" else "f"
            suffix = "  (synthesized)" if event.synthesized else ""
            print(f"{marker} {event.path}{suffix}")
        print()

    if result.dry_run:
        print("Dry run: nothing was written.")
    else:
        print(f"Destination: {result.destination_dir}")

    print(f"Directories: {result.dirs_created}")
    print(f"Files: {result.files_copied} ({result.bytes_copied:,} bytes)")

    synthesized = result.synthesized_dirs
    if synthesized:
        print(f"Synthesized directories: {len(synthesized)}")


if __name__ == "__main__":
    sys.exit(main())
