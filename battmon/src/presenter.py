"""
Renders an aggregated battery result as one status-bar line.

The line comes from ``settings.template``: every ``<field>`` placeholder is
replaced by the matching formatted value, unknown placeholders are left as
they are. Available fields:

- ``left``      charge percentage (optionally with a ``%`` suffix)
- ``leftbar``   horizontal percentage bar
- ``leftvbar``  single vertical block character
- ``acstatus``  status text (tier-prefixed while discharging)
- ``timeleft``  ``H:MM`` until full or empty
- ``watts``     signed net watts, color-wrapped as ``<fc=COLOR>..</fc>``
- ``leftipat``  status icon pattern with ``%%`` replaced by a 0-8 level

An :class:`~battmon.src.models.Unavailable` result renders as
``settings.na_string``.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from battmon.src.classifier import classify, icon_pattern_for, status_text
from battmon.src.models import AggregateResult, BatteryReading

if TYPE_CHECKING:
    from battmon.src.config import BattSettings

_FIELD_RE = re.compile(r"<(\w+)>")

BAR_FORE = "#"
BAR_BACK = ":"
ICON_LEVELS = 8


# ---------------------------------------------------------------------------
# Field formatters
# ---------------------------------------------------------------------------


def _clamped_percent(fraction_left: float) -> float:
    return 100 * min(1.0, fraction_left)


def format_percent(fraction_left: float, include_percent: bool = False) -> str:
    """Integer percentage, capped at 100."""
    text = str(round(_clamped_percent(fraction_left)))
    return text + "%" if include_percent else text


def format_bar(fraction_left: float, width: int = 10) -> str:
    """Horizontal bar of *width* cells, ``#`` for the filled part."""
    filled = round(width * min(1.0, fraction_left))
    filled = max(0, min(width, filled))
    return BAR_FORE * filled + BAR_BACK * (width - filled)


def format_vbar(fraction_left: float) -> str:
    """One of eight block characters (or a space) for the percentage."""
    level = round(_clamped_percent(fraction_left) / 12.5)
    if level <= 0:
        return " "
    return chr(0x2580 + min(level, 8))


def format_time(seconds: float) -> str:
    """Format seconds as ``H:MM``; hours are unbounded."""
    total = math.floor(seconds)
    hours, rest = divmod(total, 3600)
    return f"{hours}:{rest // 60:02d}"


def _with_color(color: str | None, text: str) -> str:
    if color is None:
        return text
    return f"<fc={color}>{text}</fc>"


def watts_color(settings: BattSettings, net_watts: float) -> str | None:
    """Pick the watt color by flow direction and discharge magnitude."""
    if net_watts >= 0:
        return settings.pos_color
    if -net_watts >= settings.high_threshold:
        return settings.high_w_color
    if -net_watts >= settings.low_threshold:
        return settings.medium_w_color
    return settings.low_w_color


def format_watts(settings: BattSettings, net_watts: float) -> str:
    """Signed watts with the configured decimals, suffix and color."""
    text = f"{net_watts:.{settings.dec_digits}f}"
    if settings.use_suffix:
        text += "W"
    return _with_color(watts_color(settings, net_watts), text)


def icon_level(fraction_left: float) -> int:
    """Map the charge to an icon index in ``0..8``."""
    level = round(_clamped_percent(fraction_left)) // 12
    return max(0, min(ICON_LEVELS, level))


def format_icon(pattern: str | None, fraction_left: float) -> str:
    """Expand an icon pattern, replacing ``%%`` with the icon level."""
    if pattern is None:
        return ""
    return pattern.replace("%%", str(icon_level(fraction_left)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_template(template: str, fields: dict[str, str]) -> str:
    """Substitute ``<name>`` placeholders from *fields*."""
    return _FIELD_RE.sub(lambda m: fields.get(m.group(1), m.group(0)), template)


def reading_fields(settings: BattSettings, reading: BatteryReading) -> dict[str, str]:
    """Format every template field for *reading*."""
    x = reading.fraction_left
    tier = classify(x, settings)
    return {
        "left": format_percent(x, settings.include_percent),
        "leftbar": format_bar(x, settings.bar_width),
        "leftvbar": format_vbar(x),
        "acstatus": status_text(settings, reading.status, tier),
        "timeleft": format_time(reading.time_left_s),
        "watts": format_watts(settings, reading.net_watts),
        "leftipat": format_icon(icon_pattern_for(settings, reading.status), x),
    }


def render(settings: BattSettings, result: AggregateResult) -> str:
    """Render *result* as the status line."""
    if not isinstance(result, BatteryReading):
        return settings.na_string
    return render_template(settings.template, reading_fields(settings, result))
