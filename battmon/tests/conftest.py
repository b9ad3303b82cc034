"""
Shared test fixtures for battery monitor tests.

Provides a fake power-supply sysfs tree builder and settings fixtures. All
BATT_* env vars are cleaned before each test to ensure isolation.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from battmon.src.config import BattSettings

# All BattSettings environment variable names, used for cleanup.
_ALL_BATT_ENV_VARS = tuple(f"BATT_{name.upper()}" for name in BattSettings.model_fields)


@pytest.fixture(autouse=True)
def _clean_batt_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove all BATT_* env vars and isolate from .env files before each test.

    Changes working directory to tmp_path so no .env file is accidentally
    loaded by Pydantic BaseSettings.
    """
    for var in _ALL_BATT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def sys_dir(tmp_path: Path) -> Path:
    """Empty fake ``/sys/class/power_supply`` directory."""
    root = tmp_path / "power_supply"
    root.mkdir()
    return root


@pytest.fixture()
def make_supply(sys_dir: Path) -> Callable[..., Path]:
    """Return a factory creating one fake power-supply device.

    Each keyword becomes a file named after it whose content is the value
    followed by a newline, mirroring how sysfs attributes read.
    """

    def _make(name: str, **files: str | int) -> Path:
        device = sys_dir / name
        device.mkdir()
        for attr, value in files.items():
            (device / attr).write_text(f"{value}\n")
        return device

    return _make


@pytest.fixture()
def settings(sys_dir: Path) -> BattSettings:
    """Default settings pointed at the fake sysfs tree."""
    return BattSettings(sys_dir=str(sys_dir))
