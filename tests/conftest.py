"""Shared pytest fixtures for unit tests."""

import io
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pinbar.shared.colors import Colors
from pinbar.terminal.geometry import TerminalGeometry


class _DeviceHandle(io.StringIO):
    """StringIO that hands its contents to the fake terminal on close."""

    def __init__(self, terminal):
        super().__init__()
        self._terminal = terminal

    def close(self):
        if not self.closed:
            self._terminal.writes.append(self.getvalue())
        super().close()


class FakeTerminal:
    """Stand-in for /dev/tty: a settable geometry plus a record of writes."""

    def __init__(self, rows=24, cols=80):
        self.geometry = TerminalGeometry(rows, cols)
        self.writes = []
        self.queries = 0
        self.fail_writes = False

    def query(self, device_path):
        self.queries += 1
        return self.geometry

    def open(self, device_path):
        if self.fail_writes:
            raise OSError(5, "Input/output error")
        return _DeviceHandle(self)

    def detach(self):
        self.geometry = None

    def resize(self, rows, cols):
        self.geometry = TerminalGeometry(rows, cols)

    @property
    def output(self):
        return "".join(self.writes)


@pytest.fixture
def terminal():
    """An attached 24x80 fake terminal."""
    return FakeTerminal()


@pytest.fixture
def no_terminal():
    """A fake terminal whose geometry query always fails."""
    fake = FakeTerminal()
    fake.detach()
    return fake


@pytest.fixture
def restore_colors():
    """Put the Colors codes back after a test that changes them."""
    yield
    Colors.reset()
