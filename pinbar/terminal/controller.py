"""Progress bar pinned to the bottom line of the controlling terminal.

The bar lives on the last terminal row, which is cut out of the scroll
region so the caller's output keeps scrolling above it. Everything is
drawn on the terminal device (``/dev/tty``), never on stdout or stderr,
so the caller can pipe stdout anywhere and still see the bar.

Usage::

    with TerminalProgressController() as progress:
        for i, item in enumerate(items, 1):
            process(item)
            progress.render(i, len(items))

When there is no controlling terminal (cron, CI, redirected session) every
operation quietly does nothing.
"""

import enum
import logging
import sys
from contextlib import contextmanager

from pinbar.shared.config import DEFAULT_EMPTY_CHAR, DEFAULT_FILL_CHAR
from pinbar.terminal import escapes
from pinbar.terminal.geometry import DEFAULT_DEVICE, query_geometry

logger = logging.getLogger(__name__)

# Columns taken by everything but the bar body: "[", "]", " ", "NNN", "%"
BAR_OVERHEAD = 7


class ControllerState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    TORN_DOWN = "torn_down"


def debug(message):
    """Write a diagnostic line to stderr.

    The line scrolls above the pinned bar like any other output.
    """
    print(message, file=sys.stderr, flush=True)


def _open_device(path):
    return open(path, "w", encoding="utf-8")


def format_bar(current, total, cols, fill=DEFAULT_FILL_CHAR, empty=DEFAULT_EMPTY_CHAR):
    """Compose the bar line for a terminal ``cols`` wide.

    A non-positive total renders an empty bar at 0% rather than dividing by
    zero. Out-of-range values are clamped so the line width is always
    ``max(cols - BAR_OVERHEAD, 0) + BAR_OVERHEAD``.
    """
    width = max(cols - BAR_OVERHEAD, 0)
    if total <= 0:
        filled = 0
        percentage = 0
    else:
        current = max(current, 0)
        filled = min(width * current // total, width)
        percentage = min(current * 100 // total, 100)
    return "[" + fill * filled + empty * (width - filled) + "]" + f" {percentage:3d}%"


class TerminalProgressController:
    """Owns the scroll region and the reserved bottom line of one terminal.

    Every operation re-queries the terminal size, so resizes between calls
    are picked up. Each operation returns True when it drew something and
    False when it was a no-op (no terminal, or wrong lifecycle state).

    Args:
        device: Path of the controlling terminal device.
        fill: Character for the completed part of the bar.
        empty: Character for the remaining part of the bar.
        query: Callable mapping a device path to a TerminalGeometry or None.
        opener: Callable opening the device path for writing.
    """

    def __init__(self, device=DEFAULT_DEVICE, fill=DEFAULT_FILL_CHAR,
                 empty=DEFAULT_EMPTY_CHAR, query=query_geometry, opener=_open_device):
        if len(fill) != 1 or len(empty) != 1:
            raise ValueError("fill and empty must be single characters")
        self.device = device
        self.fill = fill
        self.empty = empty
        self.state = ControllerState.UNINITIALIZED
        self._query = query
        self._opener = opener

    @property
    def active(self):
        return self.state is ControllerState.ACTIVE

    # -- context manager --

    def __enter__(self):
        self.init()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.deinit()
        return False

    # -- public API --

    def init(self):
        """Reserve the bottom line by shrinking the scroll region by one row."""
        if self.active:
            logger.debug("init() on an active controller ignored")
            return False
        geometry = self._query(self.device)
        if geometry is None:
            return False
        # The newline makes sure the cursor is not left on the reserved row.
        sequence = (
            "\n"
            + escapes.SAVE_CURSOR
            + escapes.scroll_region(0, geometry.rows - 1)
            + escapes.RESTORE_CURSOR
            + escapes.CURSOR_UP
        )
        if not self._write(sequence):
            return False
        self.state = ControllerState.ACTIVE
        logger.debug("Progress line reserved at row %d of %s", geometry.rows, self.device)
        return True

    def render(self, current, total):
        """Repaint the bar for ``current`` out of ``total``."""
        if not self.active:
            return False
        geometry = self._query(self.device)
        if geometry is None:
            return False
        sequence = (
            escapes.SAVE_CURSOR
            + escapes.move_cursor(geometry.rows, 1)
            + escapes.CLEAR_TO_EOL
            + format_bar(current, total, geometry.cols, self.fill, self.empty)
            + escapes.RESTORE_CURSOR
        )
        return self._write(sequence)

    def deinit(self):
        """Give the bottom line back to the scroll region and clear it.

        Safe to call unconditionally; does nothing if init() never succeeded.
        """
        if self.state is ControllerState.UNINITIALIZED:
            return False
        geometry = self._query(self.device)
        if geometry is None:
            return False
        sequence = (
            escapes.scroll_region(0, geometry.rows)
            + escapes.move_cursor(geometry.rows, 1)
            + escapes.CLEAR_TO_EOL
            + "\n"
        )
        if not self._write(sequence):
            return False
        self.state = ControllerState.TORN_DOWN
        logger.debug("Progress line released on %s", self.device)
        return True

    def track(self, iterable, total=None):
        """Yield items from iterable, rendering progress after each one.

        Without a total the length is taken from len(); iterables without
        one (generators) are passed through with no bar drawn.
        """
        if total is None:
            try:
                total = len(iterable)
            except TypeError:
                logger.debug("No total for %s; not rendering", type(iterable).__name__)
                yield from iterable
                return
        self.render(0, total)
        for index, item in enumerate(iterable, 1):
            yield item
            self.render(index, total)

    def debug(self, message):
        debug(message)

    # -- internals --

    def _write(self, sequence):
        # One write per operation so no partial escape sequence is emitted
        # by us; a device that vanished mid-run is treated as no terminal.
        try:
            with self._opener(self.device) as device:
                device.write(sequence)
                device.flush()
        except OSError as e:
            logger.debug("Write to %s failed: %s", self.device, e)
            return False
        return True


@contextmanager
def pinned_progress(**kwargs):
    """Context manager yielding an initialized TerminalProgressController.

    Keyword arguments are passed to the controller. Teardown runs on every
    exit path, including KeyboardInterrupt and SystemExit.
    """
    controller = TerminalProgressController(**kwargs)
    controller.init()
    try:
        yield controller
    finally:
        controller.deinit()
