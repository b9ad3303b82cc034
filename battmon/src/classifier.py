"""
Charge-tier classification and status-to-display mapping.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from battmon.src.models import ChargeTier, Status

if TYPE_CHECKING:
    from battmon.src.config import BattSettings


def classify(fraction_left: float, settings: BattSettings) -> ChargeTier:
    """Bucket the charge level against the configured percentage thresholds.

    Thresholds are used as given; a ``high_threshold`` below
    ``low_threshold`` makes Medium unreachable rather than raising.
    """
    pct = 100 * min(1.0, fraction_left)
    if pct >= settings.high_threshold:
        return ChargeTier.HIGH
    if pct >= settings.low_threshold:
        return ChargeTier.MEDIUM
    return ChargeTier.LOW


def status_text(settings: BattSettings, status: Status, tier: ChargeTier) -> str:
    """Return the ``<acstatus>`` text for a status and charge tier."""
    if status in (Status.IDLE, Status.FULL):
        return settings.idle_string
    if status is Status.UNKNOWN:
        return settings.na_string
    if status is Status.CHARGING:
        return settings.on_string

    prefix = {
        ChargeTier.HIGH: settings.high_string,
        ChargeTier.MEDIUM: settings.medium_string,
        ChargeTier.LOW: settings.low_string,
    }[tier]
    return prefix + settings.off_string


def icon_pattern_for(settings: BattSettings, status: Status) -> str | None:
    """Return the icon pattern configured for *status*, if any."""
    if status is Status.CHARGING:
        return settings.on_icon_pattern
    if status in (Status.IDLE, Status.FULL):
        return settings.idle_icon_pattern
    return settings.off_icon_pattern
