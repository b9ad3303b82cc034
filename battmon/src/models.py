"""
Data models shared by the sampler, aggregator, classifier and presenter.

Defines the per-device ``Sample`` (raw counters converted to watt-seconds and
watts), the aggregated ``BatteryReading`` with its ``Unavailable``
counterpart, and the two small ordered enumerations used for classification.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel


class Status(IntEnum):
    """Consolidated charge/discharge status.

    Member values are priority ranks. When batteries disagree, the member
    with the lowest rank other than ``UNKNOWN`` represents them all.
    """

    DISCHARGING = 1
    CHARGING = 2
    FULL = 3
    IDLE = 4
    UNKNOWN = 5

    @classmethod
    def parse(cls, raw: str) -> Status:
        """Map an OS status string such as ``"Charging"`` to a member.

        Matching is exact on the capitalized name after stripping
        whitespace; anything else (``"Not charging"``, garbage) is
        ``UNKNOWN``.
        """
        return _STATUS_NAMES.get(raw.strip(), cls.UNKNOWN)

    @property
    def label(self) -> str:
        """Capitalized name as the kernel spells it."""
        return self.name.capitalize()


_STATUS_NAMES: dict[str, Status] = {s.label: s for s in Status}


class ChargeTier(IntEnum):
    """Coarse charge-level bucket, ordered Low < Medium < High."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Sample(BaseModel, frozen=True):
    """One battery's normalized counters at one instant.

    Capacities are in watt-seconds and power in watts. A field whose source
    could not be read carries the fallback ``-1`` before scaling, so it shows
    up as a small negative number rather than aborting the sample.

    Attributes:
        full_ws: Full capacity in watt-seconds.
        now_ws: Remaining capacity in watt-seconds.
        power_w: Instantaneous power draw in watts (unsigned here; the
            aggregator applies the sign).
        raw_status: Status string exactly as the kernel reported it.
    """

    full_ws: float
    now_ws: float
    power_w: float
    raw_status: str


EMPTY_SAMPLE = Sample(full_ws=0.0, now_ws=0.0, power_w=0.0, raw_status="Unknown")
"""Sample of a device that exposes no charge or energy counters."""


class BatteryReading(BaseModel, frozen=True):
    """Aggregated reading across all sampled batteries.

    Attributes:
        fraction_left: Remaining capacity over full capacity. Normally in
            [0, 1] but not clamped; firmware quirks can push it past 1.
        net_watts: Net power flow in watts. Positive while on AC,
            negative while on battery.
        time_left_s: Estimated seconds to full (on AC) or to empty.
        status: Consolidated status.
    """

    fraction_left: float
    net_watts: float
    time_left_s: float
    status: Status


class Unavailable(BaseModel, frozen=True):
    """No usable reading: the aggregated fraction left is not a number."""


AggregateResult = BatteryReading | Unavailable
