"""
Unit tests for the battery monitor health writer.

Tests verify:
- record_cycle() writes the health file with a timestamp.
- Readings record their status label and percentage.
- Unavailable results record "N/A" and a null percentage.
- The cycle counter increments on every call.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import json
from pathlib import Path

from battmon.src.health import HealthWriter
from battmon.src.models import BatteryReading, Status, Unavailable

_READING = BatteryReading(
    fraction_left=0.4567,
    net_watts=-8.0,
    time_left_s=3600.0,
    status=Status.DISCHARGING,
)


class TestRecordCycle:
    """record_cycle() rewrites the health JSON file after each cycle."""

    def test_writes_health_file(self, tmp_path: Path) -> None:
        """A reading records timestamp, status label, percent and count."""
        health_path = tmp_path / "health.json"
        writer = HealthWriter(health_path)

        writer.record_cycle(_READING)

        assert health_path.exists()
        data = json.loads(health_path.read_text())
        assert isinstance(data["last_cycle_ts"], str)
        assert "T" in data["last_cycle_ts"]
        assert data["last_status"] == "Discharging"
        assert data["last_percent"] == 45.7
        assert data["cycle_count"] == 1

    def test_unavailable_result(self, tmp_path: Path) -> None:
        """Unavailable records "N/A" and a null percentage."""
        health_path = tmp_path / "health.json"
        writer = HealthWriter(health_path)

        writer.record_cycle(Unavailable())

        data = json.loads(health_path.read_text())
        assert data["last_status"] == "N/A"
        assert data["last_percent"] is None

    def test_counts_cycles_and_keeps_latest(self, tmp_path: Path) -> None:
        """The counter grows per call and only the latest result is kept."""
        health_path = tmp_path / "health.json"
        writer = HealthWriter(health_path)

        writer.record_cycle(_READING)
        writer.record_cycle(Unavailable())
        writer.record_cycle(
            BatteryReading(
                fraction_left=1.0, net_watts=0.0, time_left_s=0.0, status=Status.FULL
            )
        )

        data = json.loads(health_path.read_text())
        assert data["cycle_count"] == 3
        assert data["last_status"] == "Full"
        assert data["last_percent"] == 100.0

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        """A string path is converted to a Path."""
        writer = HealthWriter(str(tmp_path / "health.json"))

        assert writer.path == tmp_path / "health.json"

    def test_all_fields_present(self, tmp_path: Path) -> None:
        """The file carries exactly the four health keys."""
        health_path = tmp_path / "health.json"
        HealthWriter(health_path).record_cycle(_READING)

        data = json.loads(health_path.read_text())
        assert set(data) == {"last_cycle_ts", "last_status", "last_percent", "cycle_count"}
