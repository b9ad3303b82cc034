"""
Aggregates per-battery samples into one consolidated reading.

Combines up to :data:`MAX_BATTERIES` samples and the AC presence flag into a
:class:`~battmon.src.models.BatteryReading`: fraction left, signed net watts,
estimated seconds remaining, and a consolidated status. While on battery the
low-battery alert is evaluated once per call.

``aggregate`` is deterministic apart from that alert side effect; the same
samples and flag always produce the same reading.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from battmon.src.alert import maybe_alert
from battmon.src.counters import DeviceDescriptor, probe_devices
from battmon.src.models import (
    AggregateResult,
    BatteryReading,
    Sample,
    Status,
    Unavailable,
)
from battmon.src.sampler import load_sample
from battmon.src.sysfs import ac_online as read_ac_online

if TYPE_CHECKING:
    from battmon.src.config import BattSettings

logger = logging.getLogger(__name__)

MAX_BATTERIES: int = 3
"""Only the first three present batteries are aggregated."""


# ---------------------------------------------------------------------------
# Status consolidation
# ---------------------------------------------------------------------------


def consensus_status(samples: Iterable[Sample]) -> Status:
    """Return the lowest-ranked known status across *samples*.

    ``UNKNOWN`` only when every sample's status is unparsable (or there are
    no samples).
    """
    known = [
        status
        for status in (Status.parse(s.raw_status) for s in samples)
        if status is not Status.UNKNOWN
    ]
    return min(known, default=Status.UNKNOWN)


def resolve_status(consensus: Status, *, time_left_s: float, ac_online: bool) -> Status:
    """Pick the final status, preferring what the devices reported."""
    if consensus is not Status.UNKNOWN:
        return consensus
    if time_left_s == 0:
        return Status.IDLE
    if ac_online:
        return Status.CHARGING
    return Status.DISCHARGING


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def aggregate(
    samples: Sequence[Sample],
    *,
    ac_online: bool,
    settings: BattSettings,
) -> AggregateResult:
    """Combine battery samples into one reading.

    Args:
        samples: Samples of present batteries, in probe order. Entries past
            :data:`MAX_BATTERIES` are ignored.
        ac_online: Whether external power is connected.
        settings: Monitor configuration (used for the low-battery alert).

    Returns:
        A :class:`BatteryReading`, or :class:`Unavailable` if the fraction
        left is not a number.
    """
    batteries = list(samples)[:MAX_BATTERIES]

    total_full = sum(b.full_ws for b in batteries)
    total_now = sum(b.now_ws for b in batteries)
    fraction_left = total_now / total_full if total_full > 0 else 0.0

    sign = 1.0 if ac_online else -1.0
    total_power = sum(b.power_w for b in batteries)
    net_watts = sign * total_power if total_power != 0 else 0.0

    if net_watts == 0:
        time_left_s = 0.0
    else:
        # Capacity still to fill on AC, capacity left to drain on battery.
        divisor = sign * net_watts
        remaining = sum(
            (b.full_ws - b.now_ws if ac_online else b.now_ws) / divisor
            for b in batteries
        )
        time_left_s = max(0.0, remaining)

    status = resolve_status(
        consensus_status(batteries),
        time_left_s=time_left_s,
        ac_online=ac_online,
    )

    if not ac_online:
        maybe_alert(settings, fraction_left)

    if math.isnan(fraction_left):
        logger.warning("Fraction left is not a number across %d batteries", len(batteries))
        return Unavailable()

    return BatteryReading(
        fraction_left=fraction_left,
        net_watts=net_watts,
        time_left_s=time_left_s,
        status=status,
    )


def select_present(descriptors: Iterable[DeviceDescriptor]) -> list[DeviceDescriptor]:
    """Drop devices without counters and keep the first :data:`MAX_BATTERIES`."""
    return [d for d in descriptors if d.present][:MAX_BATTERIES]


def read_batteries(
    settings: BattSettings,
    descriptors: Iterable[DeviceDescriptor] | None = None,
) -> AggregateResult:
    """Run one read-and-aggregate pass against the sysfs tree.

    Args:
        settings: Monitor configuration.
        descriptors: Pre-probed devices. When omitted, every device in
            ``settings.devices`` is probed under ``settings.sys_dir``.

    Returns:
        The aggregated result for this snapshot.
    """
    if descriptors is None:
        descriptors = probe_devices(settings.devices, settings.sys_dir)

    present = select_present(descriptors)
    samples = [load_sample(d, settings.scale) for d in present]
    online = read_ac_online(Path(settings.sys_dir) / settings.online_file)

    logger.debug(
        "Sampled %d batteries (%s), ac_online=%s",
        len(samples),
        ", ".join(d.device_id for d in present) or "none",
        online,
    )
    return aggregate(samples, ac_online=online, settings=settings)
