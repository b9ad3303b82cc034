"""
Counter family probing for battery devices.

Kernels expose a battery's capacity either as charge counters (``charge_now``,
``charge_full`` in uAh) or as energy counters (``energy_now``, ``energy_full``
in uWh), and its draw either as ``power_now`` (uW) or ``current_now`` (uA).
Some firmwares also omit ``*_full`` and only publish ``*_full_design``.

``probe_device`` checks which of these files exist and returns a
:class:`DeviceDescriptor` naming the paths the sampler should read.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from battmon.src.sysfs import SYS_DIR, source_exists

logger = logging.getLogger(__name__)

DEFAULT_DEVICES: tuple[str, ...] = ("BAT", "BAT0", "BAT1", "BAT2")
"""Conventional battery identifiers probed when none are configured."""


class CounterKind(Enum):
    """Which capacity counter family a device exposes."""

    CHARGE = "charge"
    ENERGY = "energy"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class DeviceDescriptor:
    """Which sysfs sources to read for one battery device.

    Attributes:
        device_id: Directory name under the power-supply root (e.g. ``BAT0``).
        kind: Counter family; ``NONE`` when the device has no usable counters.
        full_path: Full-capacity counter (``*_full`` or ``*_full_design``).
        now_path: Remaining-capacity counter.
        current_path: ``power_now`` or, failing that, ``current_now``.
        voltage_path: ``voltage_now``.
        status_path: ``status`` string source.
        uses_current: True when ``current_path`` is a current reading rather
            than a power reading.
    """

    device_id: str
    kind: CounterKind
    full_path: Path | None = None
    now_path: Path | None = None
    current_path: Path | None = None
    voltage_path: Path | None = None
    status_path: Path | None = None
    uses_current: bool = False

    @property
    def present(self) -> bool:
        return self.kind is not CounterKind.NONE


def probe_device(device_id: str, sys_dir: str | Path = SYS_DIR) -> DeviceDescriptor:
    """Detect the counter family of one battery device.

    Args:
        device_id: Directory name under *sys_dir*.
        sys_dir: Power-supply root directory.

    Returns:
        A descriptor with every path filled in, or one with
        ``kind=CounterKind.NONE`` and no paths when neither ``charge_now`` nor
        ``energy_now`` exists.
    """
    prefix = Path(sys_dir) / device_id

    if source_exists(prefix / "charge_now"):
        kind = CounterKind.CHARGE
    elif source_exists(prefix / "energy_now"):
        kind = CounterKind.ENERGY
    else:
        logger.debug("No charge or energy counters for %s", prefix)
        return DeviceDescriptor(device_id=device_id, kind=CounterKind.NONE)

    family = kind.value
    is_power = source_exists(prefix / "power_now")
    full_name = f"{family}_full"
    if not source_exists(prefix / full_name):
        full_name = f"{family}_full_design"

    return DeviceDescriptor(
        device_id=device_id,
        kind=kind,
        full_path=prefix / full_name,
        now_path=prefix / f"{family}_now",
        current_path=prefix / ("power_now" if is_power else "current_now"),
        voltage_path=prefix / "voltage_now",
        status_path=prefix / "status",
        uses_current=not is_power,
    )


def probe_devices(
    device_ids: Iterable[str],
    sys_dir: str | Path = SYS_DIR,
) -> list[DeviceDescriptor]:
    """Probe every candidate device, keeping the input order."""
    return [probe_device(device_id, sys_dir) for device_id in device_ids]
