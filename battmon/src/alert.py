"""
Low-battery alert trigger.

Runs the configured shell command once per refresh cycle while the battery is
at or below the action threshold. The command is fire-and-forget: its exit
status and any launch failure are logged, never raised.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
import math
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from battmon.src.config import BattSettings

logger = logging.getLogger(__name__)


def should_alert(fraction_left: float, action_threshold: float) -> bool:
    """Return True when *fraction_left* is at or below the threshold percent."""
    if math.isnan(fraction_left):
        return False
    return 100 * fraction_left <= action_threshold


def maybe_alert(settings: BattSettings, fraction_left: float) -> bool:
    """Run ``settings.on_low_action`` if the battery is low.

    Args:
        settings: Monitor configuration.
        fraction_left: Aggregated fraction of capacity left.

    Returns:
        True if the action was launched, False otherwise.
    """
    action = settings.on_low_action
    if not action:
        return False
    if not should_alert(fraction_left, settings.action_threshold):
        return False

    logger.info(
        "Battery at %.1f%% (threshold %s%%), running low-battery action",
        100 * fraction_left,
        settings.action_threshold,
    )
    try:
        result = subprocess.run(action, shell=True, check=False)
    except OSError:
        logger.warning("Failed to launch low-battery action", exc_info=True)
        return True

    if result.returncode != 0:
        logger.warning("Low-battery action exited with status %d", result.returncode)
    return True
