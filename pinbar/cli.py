#!/usr/bin/env python3
"""Demo loop showing a progress bar pinned under scrolling output.

Usage:
    python3 -m pinbar --steps 50 --delay 0.05
    python3 -m pinbar --binary > /dev/null    # bar still shows on the terminal
"""

import argparse
import logging
import os
import signal
import sys
import time

from pinbar.shared.colors import Colors
from pinbar.shared.config import load_config, resolve_bar_settings
from pinbar.shared.logging_config import log_file_from_config, setup_logging
from pinbar.terminal.controller import TerminalProgressController

logger = logging.getLogger(__name__)


def _raise_system_exit(signum, frame):
    raise SystemExit(128 + signum)


def run(controller, steps, delay, binary=False, out=None):
    """Simulate a work loop of ``steps`` items under the pinned bar."""
    out = out if out is not None else sys.stdout
    for step in controller.track(range(1, steps + 1), total=steps):
        if binary:
            out.buffer.write(os.urandom(64))
            out.buffer.flush()
        else:
            out.write(f"processed item {step}/{steps}\n")
            out.flush()
        logger.debug("step %d done", step)
        if delay:
            time.sleep(delay)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Show a progress bar pinned to the bottom terminal line.",
    )
    parser.add_argument("--steps", type=int, default=100, help="Number of work items (default: 100)")
    parser.add_argument("--delay", type=float, default=0.05, help="Seconds per item (default: 0.05)")
    parser.add_argument("--fill", help="Character for the completed part of the bar")
    parser.add_argument("--empty", help="Character for the remaining part of the bar")
    parser.add_argument("--device", help="Terminal device to draw on (default: /dev/tty)")
    parser.add_argument(
        "--binary",
        action="store_true",
        help="Write random bytes to stdout instead of text lines",
    )
    parser.add_argument(
        "--log-file",
        help="Write debug records (terminal queries, init/deinit) to this file",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored log output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Show only warnings and errors")
    args = parser.parse_args(argv)

    if args.no_color:
        Colors.disable()
    else:
        Colors.auto(sys.stderr)

    config = load_config(fallback={})
    setup_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        log_file=args.log_file or log_file_from_config(config),
    )

    if args.steps < 0:
        logger.error("--steps must not be negative")
        return 2

    settings = resolve_bar_settings(config)
    for key in ("fill", "empty", "device"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    if len(settings["fill"]) != 1 or len(settings["empty"]) != 1:
        logger.error("--fill and --empty take a single character")
        return 2

    controller = TerminalProgressController(
        device=settings["device"], fill=settings["fill"], empty=settings["empty"],
    )
    previous_handler = signal.signal(signal.SIGTERM, _raise_system_exit)
    try:
        with controller:
            if not controller.active:
                logger.debug("No controlling terminal; running without a bar")
            run(controller, args.steps, args.delay, binary=args.binary)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    finally:
        # None means the old handler was not installed from Python
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())
