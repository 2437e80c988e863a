"""ANSI color codes for log prefixes written to stderr."""

import os
import sys

_DEFAULTS = {
    'RED': '\033[0;31m',
    'GREEN': '\033[0;32m',
    'YELLOW': '\033[1;33m',
    'CYAN': '\033[0;36m',
    'BOLD': '\033[1m',
    'NC': '\033[0m',  # No Color
}


class Colors:
    """ANSI color codes used by the log formatter.

    The progress bar itself is never colored.
    """
    RED = _DEFAULTS['RED']
    GREEN = _DEFAULTS['GREEN']
    YELLOW = _DEFAULTS['YELLOW']
    CYAN = _DEFAULTS['CYAN']
    BOLD = _DEFAULTS['BOLD']
    NC = _DEFAULTS['NC']

    @classmethod
    def disable(cls):
        """Blank every code so log lines carry no escape sequences."""
        for name in _DEFAULTS:
            setattr(cls, name, '')

    @classmethod
    def reset(cls):
        """Restore the default codes."""
        for name, code in _DEFAULTS.items():
            setattr(cls, name, code)

    @classmethod
    def auto(cls, stream=None):
        """Disable colors when the log stream is not a TTY or NO_COLOR is set."""
        stream = stream if stream is not None else sys.stderr
        isatty = getattr(stream, 'isatty', None)
        if os.environ.get('NO_COLOR') or isatty is None or not isatty():
            cls.disable()
