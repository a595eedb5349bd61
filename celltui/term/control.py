"""Control sequence (CSI) handling for the virtual terminal."""

from __future__ import annotations

from collections.abc import Sequence

from celltui.term.modes import ModalScreen
from celltui.term.screen import TermCell
from celltui.text import Character, CursorStyle

Params = Sequence[Sequence[int]]

_PRIMARY_ATTRIBUTES = "\x1b[?62;4;22c"
_SECONDARY_ATTRIBUTES = "\x1b[>1;0;0c"
_STATUS_OK = "\x1b[0n"
_XTERM_MOUSE_PARAMS = 5


def _single(params: Params) -> int:
    """The first parameter, or 0 when there are none."""
    return params[0][0] if params else 0


class ControlScreen(ModalScreen):
    """A screen that carries out cursor movement, editing and reports from CSI sequences."""

    _SINGLE_PARAM = {
        "@": "insert_blanks",
        "A": "_cursor_up",
        "B": "_cursor_down",
        "C": "_cursor_forward",
        "D": "_cursor_backward",
        "E": "_cursor_next_line",
        "F": "_cursor_previous_line",
        "G": "_cursor_column",
        "I": "tab_forward",
        "J": "erase_display",
        "K": "erase_line",
        "L": "insert_lines",
        "M": "delete_lines",
        "P": "delete_chars",
        "X": "erase_chars",
        "Z": "tab_backward",
        "`": "_column_absolute",
        "a": "_column_relative",
        "b": "repeat",
        "d": "_line_absolute",
        "e": "_line_relative",
        "g": "clear_tabs",
        "?$p": "report_private_mode",
    }

    _ALL_PARAMS = {
        "H": "cursor_position",
        "f": "cursor_position",
        "h": "set_mode",
        "?h": "set_private_mode",
        "l": "reset_mode",
        "?l": "reset_private_mode",
        "m": "sgr",
        "r": "set_margins",
    }

    def csi(self, final: str, params: Params) -> None:
        """Dispatch a CSI sequence given as intermediates plus final byte."""
        if final in self._SINGLE_PARAM:
            getattr(self, self._SINGLE_PARAM[final])(_single(params))
        elif final in self._ALL_PARAMS:
            getattr(self, self._ALL_PARAMS[final])(params)
        elif final == "S":
            self.scroll_up(_single(params) or 1)
        elif final == "T":
            # Five parameters means XTHIMOUSE, which is ignored.
            if len(params) == _XTERM_MOUSE_PARAMS:
                return
            self.scroll_down(_single(params) or 1)
        elif final == "c":
            self._reply(_PRIMARY_ATTRIBUTES)
        elif final == ">c":
            self._reply(_SECONDARY_ATTRIBUTES)
        elif final == "n":
            report = _single(params)
            if report == 5:
                self._reply(_STATUS_OK)
            elif report == 6:
                self._reply(f"\x1b[{self.cursor.row + 1};{self.cursor.col + 1}R")
        elif final == "s":
            self.save_cursor()
        elif final == "u":
            self.restore_cursor()
        elif final == " q":
            try:
                self.cursor.shape = CursorStyle(_single(params))
            except ValueError:
                pass

    def _erase(self, row: int, col: int) -> None:
        self.active_screen[row][col].erase(self.cursor.style.background)

    def insert_blanks(self, count: int) -> None:
        """Insert blank characters at the cursor without moving it (ICH)."""
        count = count or 1
        col, row = self.cursor.col, self.cursor.row
        line = self.active_screen[row]
        for i in range(self.margin.right, col, -1):
            if i - count < 0:
                continue
            line[i] = line[i - count].copy()
        for i in range(count):
            if col + i >= self.width() - 1:
                break
            line[col + i] = TermCell(Character(" ", 1))

    def _cursor_up(self, count: int) -> None:
        self.last_col = False
        count = count or 1
        clamp = self.margin.top if self.cursor.row >= self.margin.top else 0
        self.cursor.row = max(clamp, self.cursor.row - count)

    def _cursor_down(self, count: int) -> None:
        self.last_col = False
        count = count or 1
        self.cursor.row = min(self.margin.bottom, self.cursor.row + count)

    def _cursor_forward(self, count: int) -> None:
        self.last_col = False
        count = count or 1
        self.cursor.col = min(self.margin.right, self.cursor.col + count)

    def _cursor_backward(self, count: int) -> None:
        self.last_col = False
        count = count or 1
        self.cursor.col = max(self.margin.left, self.cursor.col - count)

    def _cursor_next_line(self, count: int) -> None:
        self.last_col = False
        for _ in range(count or 1):
            self.next_line()

    def _cursor_previous_line(self, count: int) -> None:
        self.last_col = False
        for _ in range(count or 1):
            self.reverse_index()
        self.cursor.col = self.margin.left

    def _cursor_column(self, count: int) -> None:
        self.last_col = False
        col = (count or 1) - 1
        col = min(col, self.margin.right)
        self.cursor.col = max(col, self.margin.left)

    def cursor_position(self, params: Params) -> None:
        """Move the cursor to an absolute 1-based row and column (CUP)."""
        self.last_col = False
        if len(params) == 0:
            self.cursor.row = 0
            self.cursor.col = 0
        elif len(params) == 1:
            self.cursor.row = params[0][0] - 1
            self.cursor.col = 0
        elif len(params) == 2:
            self.cursor.row = params[0][0] - 1
            self.cursor.col = params[1][0] - 1
        self.cursor.col = max(0, min(self.cursor.col, self.width() - 1))
        self.cursor.row = max(0, min(self.cursor.row, self.height() - 1))

    def erase_display(self, mode: int) -> None:
        """Erase below (0), above (1) or the whole display (2), cursor included (ED)."""
        cur_row, cur_col = self.cursor.row, self.cursor.col
        if mode == 0:
            self.last_col = False
            for r in range(cur_row, self.height()):
                for col in range(self.width()):
                    if r == cur_row and col < cur_col:
                        continue
                    self._erase(r, col)
        elif mode == 1:
            self.last_col = False
            for r in range(cur_row + 1):
                for col in range(self.width()):
                    if r == cur_row and col > cur_col:
                        break
                    self._erase(r, col)
        elif mode == 2:
            self.last_col = False
            for r in range(self.height()):
                for col in range(self.width()):
                    self._erase(r, col)

    def erase_line(self, mode: int) -> None:
        """Erase to the right (0), to the left (1) or all of the line (2) (EL)."""
        row = self.cursor.row
        self.last_col = False
        if mode == 0:
            columns = range(self.cursor.col, self.width())
        elif mode == 1:
            columns = range(self.cursor.col + 1)
        elif mode == 2:
            columns = range(self.width())
        else:
            return
        for col in columns:
            self._erase(row, col)

    def _inside_region(self) -> bool:
        return (
            self.margin.top <= self.cursor.row <= self.margin.bottom
            and self.margin.left <= self.cursor.col <= self.margin.right
        )

    def _limit_lines(self, count: int) -> int:
        count = count or 1
        available = self.margin.bottom - self.cursor.row
        if available < count - 1:
            count = available
        return count

    def _copy_line(self, dest: int, src: int) -> None:
        self.active_screen[dest][:] = [cell.copy() for cell in self.active_screen[src]]

    def insert_lines(self, count: int) -> None:
        """Insert blank lines at the cursor within the scrolling region (IL)."""
        self.last_col = False
        if not self._inside_region():
            return
        count = self._limit_lines(count)
        for r in range(self.margin.bottom, self.cursor.row + count - 1, -1):
            self._copy_line(r, r - count)
        for r in range(count):
            for col in range(self.margin.left, self.margin.right + 1):
                self._erase(self.cursor.row + r, col)
        self.cursor.col = self.margin.left

    def delete_lines(self, count: int) -> None:
        """Delete lines at the cursor, pulling up the rest of the region (DL)."""
        self.last_col = False
        if not self._inside_region():
            return
        count = self._limit_lines(count)
        for r in range(self.cursor.row, self.margin.bottom + 1):
            if r <= self.margin.bottom - count:
                self._copy_line(r, r + count)
                continue
            for col in range(self.margin.left, self.margin.right + 1):
                self._erase(r, col)
        self.cursor.col = self.margin.left

    def delete_chars(self, count: int) -> None:
        """Delete characters at the cursor, shifting the rest of the line left (DCH)."""
        self.last_col = False
        count = count or 1
        row = self.cursor.row
        line = self.active_screen[row]
        for col in range(self.cursor.col, self.margin.right + 1):
            if col + count > self.margin.right:
                self._erase(row, col)
                continue
            line[col] = line[col + count].copy()

    def erase_chars(self, count: int) -> None:
        """Erase characters from the cursor onward without shifting (ECH)."""
        self.last_col = False
        count = count or 1
        for i in range(count):
            if self.cursor.col + i == self.width():
                return
            self._erase(self.cursor.row, self.cursor.col + i)

    def tab_backward(self, count: int) -> None:
        """Move the cursor back through tab stops (CBT)."""
        self.last_col = False
        count = count or 1
        moved = 0
        for stop in reversed(self.tab_stops):
            if moved == count:
                break
            if self.cursor.col < stop:
                break
            self.cursor.col = stop
            moved += 1

    def clear_tabs(self, mode: int) -> None:
        """Clear the tab stop at the cursor (0) or all tab stops (3) (TBC)."""
        if mode == 0:
            self.tab_stops = [stop for stop in self.tab_stops if stop != self.cursor.col]
        elif mode == 3:
            self.tab_stops = []

    def _line_absolute(self, count: int) -> None:
        self.last_col = False
        self.cursor.row = min((count or 1) - 1, self.height() - 1)

    def _line_relative(self, count: int) -> None:
        self.last_col = False
        self.cursor.row = min(self.cursor.row + (count or 1), self.height() - 1)

    def _column_absolute(self, count: int) -> None:
        self.last_col = False
        self.cursor.col = min((count or 1) - 1, self.width() - 1)

    def _column_relative(self, count: int) -> None:
        self.last_col = False
        self.cursor.col = min(self.cursor.col + (count or 1), self.width() - 1)

    def repeat(self, count: int) -> None:
        """Repeat the character before the cursor count times (REP)."""
        self.last_col = False
        col = self.cursor.col
        if col == 0:
            return
        line = self.active_screen[self.cursor.row]
        character = line[col - 1].character
        for i in range(count):
            if col + i == self.margin.right:
                return
            line[col + i].character = character

    def set_margins(self, params: Params) -> None:
        """Set the top and bottom margins from 1-based rows (DECSTBM)."""
        if len(params) == 0:
            top, bottom = 0, self.height() - 1
        elif len(params) == 1:
            top, bottom = params[0][0] - 1, self.height() - 1
        elif len(params) == 2:
            top, bottom = params[0][0] - 1, params[1][0] - 1
        else:
            top = bottom = 0
        if top >= bottom:
            return
        self.last_col = False
        self.margin.top = top
        self.margin.bottom = bottom
        self.cursor.row = 0
        self.cursor.col = 0