"""Console render service and keyboard for the loader menu.

Drawing uses plain ANSI cursor sequences; the keyboard reads single
bytes from a terminal switched to cbreak mode.
"""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from typing import Optional, Sequence, TextIO

from loader_menu.keys import normalize_key
from loader_menu.menu.aliases import AliasTable, VisibleEntry

# Row the cursor parks on between draws, below the menu.
DEFAULT_CURSOR_ROW = 25
MENU_TOP_ROW = 3
MENU_LEFT_COLUMN = 4


class TextRenderer:
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def clear_screen(self) -> None:
        self.write("\x1b[2J")

    def set_cursor(self, x: int, y: int) -> None:
        # Screen coordinates are 1-based; column 0 means the first column.
        self.write(f"\x1b[{max(y, 1)};{max(x, 1)}H")

    def reset_cursor(self) -> None:
        self.set_cursor(1, DEFAULT_CURSOR_ROW)

    def render(self, visible: Sequence[VisibleEntry], title: str = "") -> AliasTable:
        row = MENU_TOP_ROW
        if title:
            self.set_cursor(MENU_LEFT_COLUMN, row)
            self.write(title)
            row += 2
        for item in visible:
            self.set_cursor(MENU_LEFT_COLUMN, row)
            if item.number is None and item.entry.selectable:
                self.write(f"   {item.label}")
            elif item.number is None:
                self.write(item.label)
            else:
                self.write(f"{item.number}. {item.label}")
            row += 1
        self.reset_cursor()
        return AliasTable.build(visible)


class TerminalInput:
    """Single-key input from a terminal.

    Use as a context manager so the terminal mode is restored on exit.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdin
        self._fd = self.stream.fileno()
        self._saved_mode = None

    def __enter__(self) -> TerminalInput:
        if os.isatty(self._fd):
            self._saved_mode = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved_mode is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None

    def has_pending_key(self) -> bool:
        ready, _, _ = select.select([self._fd], [], [], 0)
        return bool(ready)

    def read_key(self) -> str:
        data = os.read(self._fd, 1)
        if not data:
            raise EOFError("keyboard input closed")
        return normalize_key(data.decode("latin-1")) or ""
