"""
Battery monitor main loop and command-line entrypoint.

Runs one refresh cycle per interval: probe the configured batteries, read and
aggregate their counters, render the status line, and print it to stdout for
the status bar to pick up. Cycles run strictly one after another on a single
asyncio task. A failing cycle is logged and prints the N/A placeholder; it
never stops the loop. SIGTERM/SIGINT set a shared asyncio.Event, letting the
loop exit between cycles.

Structured JSON logging goes to stderr so that stdout carries nothing but
status lines. An optional HealthWriter records every cycle.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: --log-level restricted to known level names

TODO:
- None
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import signal
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

from battmon.src.aggregator import read_batteries
from battmon.src.health import HealthWriter
from battmon.src.models import AggregateResult, Unavailable
from battmon.src.presenter import render

if TYPE_CHECKING:
    from battmon.src.config import BattSettings

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


def configure_logging(level: str = "WARNING") -> None:
    """Configure structured JSON logging for the monitor.

    Sets up the root logger with a JSON-formatted handler writing to stderr.

    Args:
        level: Root logger level name.
    """

    class _JsonFormatter(logging.Formatter):
        """Minimal JSON log formatter."""

        def format(self, record: logging.LogRecord) -> str:
            log_entry = {
                "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
            }
            if record.exc_info and record.exc_info[1] is not None:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Startup config logging
# ---------------------------------------------------------------------------


def log_config_summary(settings: BattSettings) -> None:
    """Log a config summary at startup.

    Reports the low-battery action only as set/unset, never its command text.

    Args:
        settings: The monitor settings.
    """
    logger.info(
        "Battery monitor starting with config: "
        "sys_dir=%s, devices=%s, online_file=%s, scale=%s, "
        "low_threshold=%s, high_threshold=%s, action_threshold=%s, "
        "on_low_action_set=%s, refresh_interval_s=%s, health_path=%s",
        settings.sys_dir,
        settings.devices,
        settings.online_file,
        settings.scale,
        settings.low_threshold,
        settings.high_threshold,
        settings.action_threshold,
        bool(settings.on_low_action),
        settings.refresh_interval_s,
        settings.health_path,
    )
    if settings.high_threshold < settings.low_threshold:
        logger.warning(
            "high_threshold (%s) is below low_threshold (%s); "
            "the Medium charge tier is unreachable",
            settings.high_threshold,
            settings.low_threshold,
        )


# ---------------------------------------------------------------------------
# Single refresh cycle (easily testable)
# ---------------------------------------------------------------------------


def refresh_once(
    settings: BattSettings,
    *,
    out: TextIO,
    health: HealthWriter | None = None,
) -> str:
    """Execute a single read-aggregate-render cycle and print the line.

    Catches all exceptions so that the caller's loop is never broken; a
    failed cycle prints ``settings.na_string``.

    Args:
        settings: The monitor settings.
        out: Stream receiving the status line (stdout in production).
        health: HealthWriter instance, or None to skip health writes.

    Returns:
        The line that was printed.
    """
    result: AggregateResult
    try:
        result = read_batteries(settings)
        line = render(settings, result)
    except Exception:
        logger.error("Refresh cycle error", exc_info=True)
        result = Unavailable()
        line = settings.na_string

    out.write(line + "\n")
    out.flush()

    if health is not None:
        try:
            health.record_cycle(result)
        except Exception:
            logger.warning("Failed to write health file", exc_info=True)

    return line


# ---------------------------------------------------------------------------
# Loop runner
# ---------------------------------------------------------------------------


async def run_loop(
    settings: BattSettings,
    *,
    out: TextIO,
    shutdown_event: asyncio.Event,
    health: HealthWriter | None = None,
) -> None:
    """Run refresh cycles until shutdown_event is set.

    Executes refresh_once, then sleeps for ``settings.refresh_interval_s``,
    checking the shutdown event between iterations.

    Args:
        settings: The monitor settings.
        out: Stream receiving status lines.
        shutdown_event: Event to signal graceful shutdown.
        health: HealthWriter instance, or None to skip health writes.
    """
    logger.info("Refresh loop started (interval=%ss)", settings.refresh_interval_s)
    while not shutdown_event.is_set():
        refresh_once(settings, out=out, health=health)
        # Use wait with timeout so we can check shutdown between sleeps
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(
                shutdown_event.wait(),
                timeout=settings.refresh_interval_s,
            )
    logger.info("Refresh loop stopped")


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        description="Battery monitor: prints one status line per refresh cycle"
    )
    p.add_argument(
        "--once", action="store_true",
        help="Print a single status line and exit",
    )
    p.add_argument(
        "--log-level", dest="log_level", default=None, type=str.upper,
        choices=LOG_LEVELS,
        help="Override BATT_LOG_LEVEL",
    )
    return p.parse_args(argv)


async def async_main(argv: list[str] | None = None) -> None:
    """Async entrypoint: load config, then run one cycle or the loop.

    Sets up SIGTERM/SIGINT handlers to trigger graceful shutdown.
    """
    from battmon.src.config import BattSettings

    args = parse_args(argv)
    settings = BattSettings()
    configure_logging(args.log_level or settings.log_level)
    log_config_summary(settings)

    health = HealthWriter(settings.health_path) if settings.health_path else None

    if args.once:
        refresh_once(settings, out=sys.stdout, health=health)
        return

    shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(
            sig,
            lambda: _handle_signal(shutdown_event),
        )

    await run_loop(settings, out=sys.stdout, shutdown_event=shutdown_event, health=health)


def _handle_signal(shutdown_event: asyncio.Event) -> None:
    """Handle SIGTERM/SIGINT by setting the shutdown event.

    Args:
        shutdown_event: The event to set for graceful shutdown.
    """
    logger.info("Received shutdown signal, stopping after current cycle")
    shutdown_event.set()


def main(argv: list[str] | None = None) -> None:
    """Synchronous entrypoint for the battery monitor."""
    asyncio.run(async_main(argv))


if __name__ == "__main__":
    main()
