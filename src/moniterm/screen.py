"""Curses-backed screen: drawing primitives and key decoding."""

from __future__ import annotations

import curses

from .session import Key, Token


# Style names used by the editor -> curses color pair number
STYLES = {
    "normal": 0,
    "selected": 1,      # yellow on blue
    "highlight": 2,     # black on white
    "disabled": 3,      # dim gray
    "title": 4,         # cyan
    "active": 5,        # green
}

_KEYMAP = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_ENTER: Key.ENTER,
    9: Key.TAB,
    10: Key.ENTER,
    13: Key.ENTER,
    27: Key.ESCAPE,
    32: Key.SPACE,
}


def decode_key(code: int) -> Token | None:
    """Translate a ``getch()`` code into a key token (None if unknown)."""
    if code in _KEYMAP:
        return _KEYMAP[code]
    if 32 < code < 127:
        return chr(code)
    return None


class CursesScreen:
    """Thin wrapper over a curses window exposing what the editor needs."""

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr
        self._attrs: dict[str, int] = {}
        self._setup()

    def _setup(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.keypad(True)
        # Don't wait a second after a lone Esc
        curses.set_escdelay(25)

        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(1, curses.COLOR_YELLOW, curses.COLOR_BLUE)
            curses.init_pair(2, curses.COLOR_BLACK, curses.COLOR_WHITE)
            curses.init_pair(3, curses.COLOR_WHITE, -1)
            curses.init_pair(4, curses.COLOR_CYAN, -1)
            curses.init_pair(5, curses.COLOR_GREEN, -1)
            self._attrs = {name: curses.color_pair(n) for name, n in STYLES.items()}
            self._attrs["disabled"] |= curses.A_DIM
        else:
            self._attrs = {
                "normal": curses.A_NORMAL,
                "selected": curses.A_REVERSE | curses.A_BOLD,
                "highlight": curses.A_REVERSE,
                "disabled": curses.A_DIM,
                "title": curses.A_BOLD,
                "active": curses.A_NORMAL,
            }

    def size(self) -> tuple[int, int]:
        """Return (rows, cols)."""
        return self.stdscr.getmaxyx()

    def clear(self) -> None:
        self.stdscr.erase()

    def text(self, row: int, col: int, s: str, style: str = "normal") -> None:
        rows, cols = self.size()
        if not (0 <= row < rows) or col >= cols or col < 0:
            return
        s = s[:cols - col]
        try:
            self.stdscr.addstr(row, col, s, self._attrs.get(style, 0))
        except curses.error:
            # Writing the bottom-right cell raises after the text is drawn
            pass

    def box(self, row: int, col: int, height: int, width: int,
            title: str = "", style: str = "normal") -> None:
        title_str = f" {title} " if title else ""
        fill = max(0, width - 2 - len(title_str))
        self.text(row, col, "┌" + title_str + "─" * fill + "┐", style)
        for i in range(1, height - 1):
            self.text(row + i, col, "│" + " " * (width - 2) + "│", style)
        self.text(row + height - 1, col, "└" + "─" * (width - 2) + "┘", style)

    def refresh(self) -> None:
        self.stdscr.refresh()

    def read_key(self) -> Token | None:
        """Block for the next recognised key token; None when input ends."""
        while True:
            try:
                code = self.stdscr.getch()
            except KeyboardInterrupt:
                return None
            if code == -1:
                return None
            if code == curses.KEY_RESIZE:
                return Key.RESIZE
            token = decode_key(code)
            if token is not None:
                return token
