from __future__ import annotations

"""
Logging Settings.

The CLI only decides how verbose the log is and whether it is mirrored to a
rotating file; record formats are fixed by the logging core.
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings passed to configure_logging.

    Attributes:
        level: Level name such as ``"DEBUG"`` or ``"INFO"``. Unknown names
            fall back to INFO.
        console: Mirror records to stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size of a log file segment before it is rotated.
        backup_count: Rotated segments kept next to the active file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    @classmethod
    def for_cli(cls, *, debug: bool, log_file: Optional[str] = None) -> LoggingConfig:
        """Console logging at INFO, or DEBUG when ``--debug`` is given."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)

    @property
    def level_number(self) -> int:
        value = logging.getLevelName(str(self.level or "").strip().upper())
        return value if isinstance(value, int) else logging.INFO
