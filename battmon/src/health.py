"""
Health file writer for the battery monitor.

Writes a JSON health file at a configurable path with four fields:
- last_cycle_ts: ISO timestamp of the most recent refresh cycle.
- last_status: Consolidated status of that cycle, or "N/A".
- last_percent: Charge percentage of that cycle, or null.
- cycle_count: Number of cycles recorded since startup.

The file is rewritten after every cycle, giving a simple liveness signal
for a supervisor or a status-bar watchdog. Nothing is read back from it.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from battmon.src.models import AggregateResult, BatteryReading


class HealthWriter:
    """Writes monitor health status to a JSON file.

    Args:
        path: Filesystem path for the health JSON file. Accepts str or Path.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._last_cycle_ts: str | None = None
        self._last_status: str | None = None
        self._last_percent: float | None = None
        self._cycle_count: int = 0

    def record_cycle(self, result: AggregateResult) -> None:
        """Record the outcome of one refresh cycle and write the health file.

        Args:
            result: The aggregated result of the cycle.
        """
        self._last_cycle_ts = datetime.now(tz=UTC).isoformat()
        self._cycle_count += 1
        if isinstance(result, BatteryReading):
            self._last_status = result.status.label
            self._last_percent = round(100 * result.fraction_left, 1)
        else:
            self._last_status = "N/A"
            self._last_percent = None
        self._write()

    def _write(self) -> None:
        """Write the health JSON file with current state."""
        data = {
            "last_cycle_ts": self._last_cycle_ts,
            "last_status": self._last_status,
            "last_percent": self._last_percent,
            "cycle_count": self._cycle_count,
        }
        self.path.write_text(json.dumps(data))
