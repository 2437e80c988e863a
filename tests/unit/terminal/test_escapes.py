"""Tests for pinbar.terminal.escapes."""

from pinbar.terminal import escapes


class TestSequences:
    """The control sequences must match VT100 byte for byte."""

    def test_cursor_save_restore(self):
        assert escapes.SAVE_CURSOR == "\x1b7"
        assert escapes.RESTORE_CURSOR == "\x1b8"

    def test_clear_and_up(self):
        assert escapes.CLEAR_TO_EOL == "\x1b[0K"
        assert escapes.CURSOR_UP == "\x1b[1A"

    def test_move_cursor(self):
        assert escapes.move_cursor(24, 1) == "\x1b[24;1H"
        assert escapes.move_cursor(3) == "\x1b[3;1H"

    def test_scroll_region(self):
        assert escapes.scroll_region(0, 23) == "\x1b[0;23r"
