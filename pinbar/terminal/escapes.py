"""VT100 control sequences used to pin the progress line."""

ESC = '\033'

SAVE_CURSOR = ESC + '7'
RESTORE_CURSOR = ESC + '8'
CLEAR_TO_EOL = ESC + '[0K'
CURSOR_UP = ESC + '[1A'


def move_cursor(row: int, col: int = 1) -> str:
    """Absolute cursor position, 1-based."""
    return f"{ESC}[{row};{col}H"


def scroll_region(top: int, bottom: int) -> str:
    """Restrict scrolling to rows top..bottom."""
    return f"{ESC}[{top};{bottom}r"
