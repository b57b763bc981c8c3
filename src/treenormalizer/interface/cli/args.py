from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates parsed arguments into
configuration overrides understood by the pipeline.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the treenormalizer CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="treenormalizer",
        description=(
            "Copy one or more source trees into a destination, visiting every "
            "directory exactly once and before its contents."
        ),
    )

    # --- Sources and destination ---
    p.add_argument(
        "-s", "--source",
        dest="sources",
        action="append",
        default=None,
        metavar="DIR",
        help="Source directory to copy. Repeat for several overlapping trees.",
    )
    p.add_argument(
        "-o", "--output",
        dest="destination_dir",
        default=None,
        metavar="DIR",
        help="Destination directory.",
    )
    p.add_argument(
        "--into",
        dest="into",
        default=None,
        metavar="PREFIX",
        help="Relative directory below the destination receiving the sources.",
    )

    # --- Copy behaviour ---
    p.add_argument(
        "--no-timestamps",
        action="store_true",
        help="Do not carry file modification times over to the copies.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Normalize and report the tree without writing anything.",
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration and start from defaults.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the resulting configuration as the last session.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        metavar="PATH",
        help="Also write the log to a rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    # --- Output format ---
    p.add_argument(
        "--list",
        dest="list_events",
        action="store_true",
        help="Print the normalized visit stream.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options that were not given map to None and leave the base value alone.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "sources": args.sources,
        "destination_dir": args.destination_dir,
        "into": args.into,
    }

    if args.no_timestamps:
        overrides["preserve_timestamps"] = False

    return overrides
