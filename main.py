"""WorldClock Celestial - Main Entry Point.

`watch` re-evaluates the engine on a fixed cadence and logs a summary
per tick; `serve` runs the HTTP API.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure application logging."""
    level_name = (level or os.environ.get("WORLDCLOCK_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # Quieter libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def format_snapshot(snapshot) -> str:
    """One-line summary of a CelestialSnapshot."""
    parts = [
        snapshot.instant.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "sun@(%.2f, %.2f)" % snapshot.subsolar.as_tuple(),
        "moon@(%.2f, %.2f)" % snapshot.sublunar.as_tuple(),
        "terminator=%d pts" % len(snapshot.terminator),
    ]
    sky = snapshot.observer_sky
    if sky is not None:
        parts.append("sun alt/az=%.1f/%.1f" % (sky.sun.altitude, sky.sun.azimuth))
        parts.append("moon alt/az=%.1f/%.1f" % (sky.moon.altitude, sky.moon.azimuth))
        times = sky.sun_times
        if times.polar_day:
            parts.append("polar day")
        elif times.polar_night:
            parts.append("polar night")
        else:
            parts.append(
                "rise %s set %s"
                % (times.sunrise.strftime("%H:%M"), times.sunset.strftime("%H:%M"))
            )
    return " | ".join(parts)


def watch(
    observer=None,
    interval_seconds: float = 60.0,
    count: Optional[int] = None,
    step_degrees: float = 1.0,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Caller-owned sampling loop: one snapshot per tick.

    Returns the number of snapshots computed.
    """
    from core.coordinate_transforms import finite_number
    from core.errors import InputOutOfRange
    from core.sampling import compute_snapshot, validate_cadence

    interval_seconds = finite_number("interval", interval_seconds)
    try:
        cadence = timedelta(seconds=interval_seconds)
    except OverflowError as e:
        raise InputOutOfRange("interval", interval_seconds, "too large") from e
    validate_cadence(cadence)
    ticks = 0
    while count is None or ticks < count:
        if ticks:
            sleep(interval_seconds)
        snapshot = compute_snapshot(clock(), observer, terminator_step=step_degrees)
        logger.info("%s", format_snapshot(snapshot))
        ticks += 1
    return ticks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worldclock-celestial",
        description="Sun/Moon positions and day/night terminator",
    )
    parser.add_argument("--log-level", default=None, help="Override WORLDCLOCK_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    watch_p = sub.add_parser("watch", help="Log snapshots on a fixed cadence")
    watch_p.add_argument("--lat", type=float, default=None, help="Observer latitude")
    watch_p.add_argument("--lon", type=float, default=None, help="Observer longitude")
    watch_p.add_argument("--interval", type=float, default=60.0, help="Seconds between ticks")
    watch_p.add_argument("--count", type=int, default=None, help="Stop after N ticks")
    watch_p.add_argument("--step", type=float, default=1.0, help="Terminator latitude step")

    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument("--reload", action="store_true")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "serve":
        import uvicorn

        logger.info("Starting HTTP API on %s:%d", args.host, args.port)
        uvicorn.run("backend.main:app", host=args.host, port=args.port, reload=args.reload)
        return 0

    from core.coordinate_transforms import GeographicPoint
    from core.errors import InputOutOfRange

    if (args.lat is None) != (args.lon is None):
        logger.error("--lat and --lon must be given together")
        return 2
    try:
        observer = None
        if args.lat is not None:
            observer = GeographicPoint(latitude=args.lat, longitude=args.lon)
        watch(observer, args.interval, args.count, args.step)
    except InputOutOfRange as e:
        logger.error("%s", e)
        return 2
    except KeyboardInterrupt:
        logger.info("Stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
