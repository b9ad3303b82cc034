"""
Battery monitor configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
Every variable carries the ``BATT_`` prefix (``BATT_SCALE``,
``BATT_LOW_THRESHOLD``, ...). The settings object is frozen: it is built once
at startup and handed unchanged to every refresh cycle.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Defaults for devices and sys_dir taken from shared constants

TODO:
- None
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings

from battmon.src.counters import DEFAULT_DEVICES
from battmon.src.sysfs import SYS_DIR


class BattSettings(BaseSettings):
    """Battery monitor configuration.

    All values are loaded from environment variables; every field has a
    default so the monitor runs unconfigured on a typical laptop.

    Attributes:
        sys_dir: Root of the power-supply sysfs tree.
        devices: Candidate battery device identifiers, probed in order.
        online_file: AC presence source, relative to ``sys_dir``.
        scale: Divisor converting raw counters (micro-units) to base units.
        low_threshold: Percentage below which the charge tier is Low. Also
            the watt magnitude that selects ``medium_w_color``.
        high_threshold: Percentage at or above which the tier is High. Also
            the watt magnitude that selects ``high_w_color``.
        action_threshold: Percentage at or below which ``on_low_action`` runs
            while on battery.
        on_low_action: Shell command run when the battery is low.
        on_string: Status text while charging.
        off_string: Status text while discharging (after the tier prefix).
        idle_string: Status text when idle or full.
        low_string: Tier prefix while discharging at Low charge.
        medium_string: Tier prefix while discharging at Medium charge.
        high_string: Tier prefix while discharging at High charge.
        pos_color: Watt color when the net flow is non-negative.
        low_w_color: Watt color for a small discharge.
        medium_w_color: Watt color for a discharge past ``low_threshold`` W.
        high_w_color: Watt color for a discharge past ``high_threshold`` W.
        on_icon_pattern: Icon pattern while charging (``%%`` is the level).
        off_icon_pattern: Icon pattern while discharging or unknown.
        idle_icon_pattern: Icon pattern while idle or full.
        include_percent: Append a literal ``%`` to the ``<left>`` field.
        template: Output template with ``<field>`` placeholders.
        na_string: Placeholder rendered when no reading is available.
        use_suffix: Append ``W`` to the ``<watts>`` field.
        dec_digits: Decimal digits for the ``<watts>`` field.
        bar_width: Width in cells of the ``<leftbar>`` field.
        refresh_interval_s: Seconds between refresh cycles.
        health_path: Optional JSON health file path.
        log_level: Root logger level name.
    """

    sys_dir: str = str(SYS_DIR)
    devices: list[str] = list(DEFAULT_DEVICES)
    online_file: str = "AC/online"
    scale: float = 1e6

    low_threshold: float = 10
    high_threshold: float = 12
    action_threshold: float = 6
    on_low_action: str | None = None

    on_string: str = "On"
    off_string: str = "Off"
    idle_string: str = "On"
    low_string: str = ""
    medium_string: str = ""
    high_string: str = ""

    pos_color: str | None = None
    low_w_color: str | None = None
    medium_w_color: str | None = None
    high_w_color: str | None = None

    on_icon_pattern: str | None = None
    off_icon_pattern: str | None = None
    idle_icon_pattern: str | None = None

    include_percent: bool = False
    template: str = "Batt: <watts>, <left>% / <timeleft>"
    na_string: str = "N/A"
    use_suffix: bool = False
    dec_digits: int = 0
    bar_width: int = 10

    refresh_interval_s: float = 60
    health_path: str | None = None
    log_level: str = "WARNING"

    @field_validator("scale")
    @classmethod
    def scale_must_be_positive(cls, v: float) -> float:
        """Validate the scale factor; every counter is divided by it."""
        if v <= 0:
            raise ValueError("BATT_SCALE must be > 0")
        return v

    @field_validator("dec_digits")
    @classmethod
    def dec_digits_must_be_non_negative(cls, v: int) -> int:
        """Validate the watt decimal digit count."""
        if v < 0:
            raise ValueError("BATT_DEC_DIGITS must be >= 0")
        return v

    @field_validator("bar_width")
    @classmethod
    def bar_width_must_be_positive(cls, v: int) -> int:
        """Validate the percentage bar width."""
        if v < 1:
            raise ValueError("BATT_BAR_WIDTH must be >= 1")
        return v

    @field_validator("refresh_interval_s")
    @classmethod
    def refresh_interval_must_be_sane(cls, v: float) -> float:
        """Validate the refresh interval (minimum 1 second)."""
        if v < 1:
            raise ValueError("BATT_REFRESH_INTERVAL_S must be >= 1")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"BATT_LOG_LEVEL must be a logging level name (got: '{v}')")
        return level

    model_config = {
        "env_prefix": "BATT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "frozen": True,
    }
