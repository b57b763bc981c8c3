from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess: exit codes, stream output and the copied tree on
disk. HOME points to a temporary directory so saved state stays isolated.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "treenormalizer" / "main.py"


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


def run_cli(args: List[str], home: Path, cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def _source_args(sources: List[Path]) -> List[str]:
    args: List[str] = []
    for s in sources:
        args += ["-s", str(s)]
    return args


def test_cli_help(home_dir: Path) -> None:
    result = run_cli(["--help"], home_dir)

    assert result.returncode == 0
    assert "--source" in result.stdout
    assert "--into" in result.stdout


def test_cli_dump_config(overlapping_sources, home_dir: Path) -> None:
    result = run_cli(
        ["--use-defaults", "--dump-config", "--into", "./pkg/"] + _source_args(overlapping_sources),
        home_dir,
    )

    assert result.returncode == 0, result.stderr
    dumped = json.loads(result.stdout)
    assert dumped["into"] == "pkg"
    assert dumped["sources"] == [str(s) for s in overlapping_sources]


def test_cli_copies_overlapping_sources(overlapping_sources, home_dir: Path, tmp_path: Path) -> None:
    dest = tmp_path / "out"

    result = run_cli(
        ["--use-defaults", "-o", str(dest)] + _source_args(overlapping_sources),
        home_dir,
    )

    assert result.returncode == 0, result.stderr
    assert f"Destination: {dest}" in result.stdout
    assert (dest / "docs" / "guide.md").is_file()
    assert (dest / "docs" / "api.md").is_file()
    assert (dest / "lib" / "nested" / "deep.py").is_file()


def test_cli_dry_run_lists_normalized_stream(overlapping_sources, home_dir: Path, tmp_path: Path) -> None:
    dest = tmp_path / "out"

    result = run_cli(
        ["--use-defaults", "--dry-run", "--list", "--into", "pkg", "-o", str(dest)]
        + _source_args(overlapping_sources[:1]),
        home_dir,
    )

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[0] == "d pkg  (synthesized)"
    assert lines[1] == "d pkg/docs"
    assert lines[2] == "f pkg/docs/guide.md"
    assert "Dry run: nothing was written." in result.stdout
    assert not dest.exists()


def test_cli_json_output(overlapping_sources, home_dir: Path, tmp_path: Path) -> None:
    result = run_cli(
        ["--use-defaults", "--json", "--dry-run", "-o", str(tmp_path / "out")]
        + _source_args(overlapping_sources),
        home_dir,
    )

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["files_copied"] == 4
    assert {"kind": "dir", "path": "lib/nested", "synthesized": False} in payload["events"]


def test_cli_missing_source_exits_with_2(home_dir: Path, tmp_path: Path) -> None:
    result = run_cli(
        ["--use-defaults", "-s", str(tmp_path / "missing"), "-o", str(tmp_path / "out")],
        home_dir,
    )

    assert result.returncode == 2
    assert "Source directory does not exist" in result.stderr


def test_cli_without_destination_fails(overlapping_sources, home_dir: Path) -> None:
    result = run_cli(["--use-defaults"] + _source_args(overlapping_sources), home_dir)

    assert result.returncode == 1
    assert "No destination directory configured." in result.stderr


def test_cli_saved_config_is_reused(overlapping_sources, home_dir: Path, tmp_path: Path) -> None:
    dest = tmp_path / "out"
    first = run_cli(
        ["--use-defaults", "--save-config", "--dry-run", "-o", str(dest)]
        + _source_args(overlapping_sources),
        home_dir,
    )
    assert first.returncode == 0, first.stderr

    second = run_cli(["--dump-config"], home_dir)

    assert second.returncode == 0, second.stderr
    dumped = json.loads(second.stdout)
    assert dumped["destination_dir"] == str(dest)
    assert len(dumped["sources"]) == 2
