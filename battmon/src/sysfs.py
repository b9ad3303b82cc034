"""
Read-only access to the Linux power-supply sysfs tree.

Provides the three primitives the rest of the monitor builds on: an existence
check that never raises, a first-line reader that raises a single error type,
and the AC presence probe. Nothing here writes to the filesystem.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SYS_DIR = Path("/sys/class/power_supply")
"""Default root of the power-supply class directory."""


class SourceReadError(OSError):
    """A counter source exists (or was expected) but could not be read.

    Args:
        path: The source that failed.
        reason: Short human-readable cause.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


def source_exists(path: str | Path) -> bool:
    """Return True if *path* exists; any OS error counts as absent."""
    try:
        return Path(path).exists()
    except OSError:
        logger.debug("Existence check failed for %s", path, exc_info=True)
        return False


def read_first_line(path: str | Path) -> str:
    """Return the first line of *path* without its trailing newline.

    Raises:
        SourceReadError: If the file cannot be opened or read, or is empty.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as fh:
            line = fh.readline()
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or type(exc).__name__) from exc

    if not line:
        raise SourceReadError(path, "empty")
    return line.rstrip("\n")


def ac_online(path: str | Path) -> bool:
    """Return True iff the first line of *path* is exactly ``"1"``.

    Any read failure means "not online"; there are no retries.
    """
    try:
        return read_first_line(path) == "1"
    except SourceReadError as exc:
        logger.debug("AC presence unreadable, assuming battery: %s", exc)
        return False
