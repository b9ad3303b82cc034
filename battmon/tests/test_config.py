"""
Unit tests for battery monitor configuration (BattSettings).

Tests verify:
- Defaults match the conventional laptop layout.
- Values load from BATT_* environment variables, including list values.
- Numeric constraints are enforced.
- Settings are immutable once built.
- Thresholds are not cross-validated.
- Default devices and sysfs root are the shared module constants.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

import pytest
from battmon.src.config import BattSettings
from battmon.src.counters import DEFAULT_DEVICES
from battmon.src.sysfs import SYS_DIR
from pydantic import ValidationError


class TestBattSettingsDefaults:
    """An empty environment yields the documented defaults."""

    def test_defaults(self) -> None:
        """Every field falls back to its documented default."""
        settings = BattSettings()

        assert settings.sys_dir == "/sys/class/power_supply"
        assert settings.devices == ["BAT", "BAT0", "BAT1", "BAT2"]
        assert settings.online_file == "AC/online"
        assert settings.scale == 1e6
        assert settings.low_threshold == 10
        assert settings.high_threshold == 12
        assert settings.action_threshold == 6
        assert settings.on_low_action is None
        assert settings.on_string == "On"
        assert settings.off_string == "Off"
        assert settings.idle_string == "On"
        assert settings.template == "Batt: <watts>, <left>% / <timeleft>"
        assert settings.na_string == "N/A"
        assert settings.include_percent is False
        assert settings.health_path is None
        assert settings.log_level == "WARNING"

    def test_default_devices_come_from_counter_constants(self) -> None:
        """The default candidate list and sysfs root are the shared constants."""
        settings = BattSettings()

        assert settings.devices == list(DEFAULT_DEVICES)
        assert settings.sys_dir == str(SYS_DIR)


class TestBattSettingsLoadsFromEnv:
    """Values are read from BATT_* environment variables."""

    def test_loads_scalar_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Scalar, boolean and optional string fields parse from env."""
        monkeypatch.setenv("BATT_SCALE", "1000")
        monkeypatch.setenv("BATT_LOW_THRESHOLD", "15")
        monkeypatch.setenv("BATT_HIGH_THRESHOLD", "40")
        monkeypatch.setenv("BATT_ON_LOW_ACTION", "systemctl suspend")
        monkeypatch.setenv("BATT_INCLUDE_PERCENT", "true")
        monkeypatch.setenv("BATT_POS_COLOR", "green")

        settings = BattSettings()

        assert settings.scale == 1000
        assert settings.low_threshold == 15
        assert settings.high_threshold == 40
        assert settings.on_low_action == "systemctl suspend"
        assert settings.include_percent is True
        assert settings.pos_color == "green"

    def test_loads_device_list_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """BATT_DEVICES is read as a JSON list."""
        monkeypatch.setenv("BATT_DEVICES", '["CMB0", "BAT1"]')

        assert BattSettings().devices == ["CMB0", "BAT1"]

    def test_log_level_is_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A lowercase level name is upper-cased."""
        monkeypatch.setenv("BATT_LOG_LEVEL", "debug")

        assert BattSettings().log_level == "DEBUG"


class TestBattSettingsValidation:
    """Out-of-range values are rejected at startup."""

    @pytest.mark.parametrize("value", ["0", "-1e6"])
    def test_scale_must_be_positive(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        """A zero or negative BATT_SCALE is rejected."""
        monkeypatch.setenv("BATT_SCALE", value)

        with pytest.raises(ValidationError) as exc_info:
            BattSettings()
        assert "scale" in str(exc_info.value).lower()

    def test_negative_dec_digits_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """BATT_DEC_DIGITS below zero is rejected."""
        monkeypatch.setenv("BATT_DEC_DIGITS", "-1")

        with pytest.raises(ValidationError):
            BattSettings()

    def test_zero_bar_width_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A bar needs at least one cell."""
        monkeypatch.setenv("BATT_BAR_WIDTH", "0")

        with pytest.raises(ValidationError):
            BattSettings()

    def test_sub_second_refresh_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Refresh intervals under one second are rejected."""
        monkeypatch.setenv("BATT_REFRESH_INTERVAL_S", "0.5")

        with pytest.raises(ValidationError):
            BattSettings()

    def test_unknown_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Only standard logging level names are accepted."""
        monkeypatch.setenv("BATT_LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            BattSettings()

    def test_inverted_thresholds_are_accepted(self) -> None:
        """high below low is left to the caller, not rejected."""
        settings = BattSettings(low_threshold=50, high_threshold=20)

        assert settings.low_threshold == 50
        assert settings.high_threshold == 20


class TestBattSettingsImmutable:
    """Settings cannot be changed after construction."""

    def test_assignment_raises(self) -> None:
        """Assigning to a field raises ValidationError."""
        settings = BattSettings()

        with pytest.raises(ValidationError):
            settings.scale = 10  # type: ignore[misc]
