"""Terminal size queries against the controlling terminal device.

The size is asked of the device itself (``stty size`` with its stdin bound
to the device), not of the process's inherited standard streams, so a
script whose stdout is piped still sees its terminal.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DEVICE = "/dev/tty"

# stty answers immediately; anything slower means the device is wedged
STTY_TIMEOUT = 2.0


@dataclass(frozen=True)
class TerminalGeometry:
    rows: int
    cols: int


def parse_size(text: str) -> Optional[TerminalGeometry]:
    """Parse ``stty size`` output (``"<rows> <cols>"``).

    Returns None for anything that is not two positive integers, or for a
    terminal too short to reserve a line in.
    """
    parts = text.split()
    if len(parts) != 2:
        return None
    try:
        rows, cols = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if rows < 2 or cols < 1:
        return None
    return TerminalGeometry(rows=rows, cols=cols)


def query_geometry(device_path: str = DEFAULT_DEVICE) -> Optional[TerminalGeometry]:
    """Ask the terminal device for its current size.

    Every call opens the device and runs the query afresh; the result is
    never cached. Returns None when there is no usable terminal (missing
    device, permission denied, no stty, non-zero exit, garbage output).
    """
    try:
        with open(device_path) as tty:
            result = subprocess.run(
                ["stty", "size"],
                stdin=tty,
                capture_output=True,
                text=True,
                timeout=STTY_TIMEOUT,
                check=True,
            )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Terminal unavailable at %s: %s", device_path, e)
        return None

    geometry = parse_size(result.stdout)
    if geometry is None:
        logger.debug("Unusable stty size output: %r", result.stdout)
    return geometry
