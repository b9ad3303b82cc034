"""
Sample loader: reads one battery's counters into a normalized Sample.

Each field is read on its own. A missing or unparsable numeric source yields
``-1`` and a missing status yields ``"Unknown"``; one bad file never aborts the
rest of the sample.

Unit handling: raw counters are micro-units (uWh / uAh, uW / uA) divided by the
configured scale. Current readings use a tenth of the scale, and hour-based
capacities are multiplied by 3600 to give watt-seconds.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from pathlib import Path

from battmon.src.counters import CounterKind, DeviceDescriptor
from battmon.src.models import EMPTY_SAMPLE, Sample
from battmon.src.sysfs import SourceReadError, read_first_line

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR: float = 3600.0

NUMBER_FALLBACK: float = -1.0
"""Value substituted for an unreadable numeric counter."""

STATUS_FALLBACK: str = "Unknown"
"""Value substituted for an unreadable status source."""


def _read_number(path: Path | None) -> float:
    """Read a numeric counter, collapsing any failure to the fallback."""
    if path is None:
        return NUMBER_FALLBACK
    try:
        return float(read_first_line(path))
    except SourceReadError as exc:
        logger.debug("Counter unreadable, using %s: %s", NUMBER_FALLBACK, exc)
    except ValueError:
        logger.debug("Counter %s is not a number, using %s", path, NUMBER_FALLBACK)
    return NUMBER_FALLBACK


def _read_status(path: Path | None) -> str:
    """Read the status string, collapsing any failure to the fallback."""
    if path is None:
        return STATUS_FALLBACK
    try:
        return read_first_line(path)
    except SourceReadError as exc:
        logger.debug("Status unreadable, using %s: %s", STATUS_FALLBACK, exc)
        return STATUS_FALLBACK


def effective_scale(descriptor: DeviceDescriptor, scale: float) -> float:
    """Return the divisor for *descriptor*'s counters."""
    return scale / 10 if descriptor.uses_current else scale


def load_sample(descriptor: DeviceDescriptor, scale: float) -> Sample:
    """Read and normalize one battery's counters.

    Args:
        descriptor: Paths to read, as returned by ``probe_device``.
        scale: Configured micro-unit divisor (1e6 by default).

    Returns:
        The normalized :class:`Sample`; :data:`EMPTY_SAMPLE` without any reads
        when the descriptor has no counter family.
    """
    if descriptor.kind is CounterKind.NONE:
        return EMPTY_SAMPLE

    raw_full = _read_number(descriptor.full_path)
    raw_now = _read_number(descriptor.now_path)
    raw_power = _read_number(descriptor.current_path)
    raw_status = _read_status(descriptor.status_path)

    sc = effective_scale(descriptor, scale)
    # Some firmwares report a full capacity lower than the current one.
    full = max(raw_full, raw_now)

    return Sample(
        full_ws=SECONDS_PER_HOUR * full / sc,
        now_ws=SECONDS_PER_HOUR * raw_now / sc,
        power_w=raw_power / sc,
        raw_status=raw_status,
    )
