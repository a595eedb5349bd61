"""A cell canvas and the windows that draw into it."""

from __future__ import annotations

from dataclasses import dataclass, replace

import regex

from celltui.text import Cell, Character, CursorStyle, Segment, Style, characters

_TRUNCATOR = Character("…", 1)
_BREAKS = "\n\r\v\f\x85\u2028\u2029"
_LINE_SEGMENT = regex.compile(
    r"\S*[^\S\n\r\v\f\x85\u2028\u2029]*(?:\r\n|[\n\r\v\f\x85\u2028\u2029])?"
)


def _line_segments(text: str):
    """Yield break opportunities: words with trailing spaces and hard breaks."""
    for match in _LINE_SEGMENT.finditer(text):
        if match.group():
            yield match.group()


def _has_trailing_break(grapheme: str) -> bool:
    return bool(grapheme) and grapheme[-1] in _BREAKS


class Canvas:
    """A grid of cells plus cursor state, the target of all drawing."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("canvas dimensions must not be negative")
        self.width = width
        self.height = height
        self._cells = [[Cell() for _ in range(width)] for _ in range(height)]
        self.graphics: list = []
        self.cursor_col = 0
        self.cursor_row = 0
        self.cursor_style = CursorStyle.DEFAULT
        self.cursor_visible = False

    def window(self) -> Window:
        """Return a window covering the whole canvas."""
        return Window(self, 0, 0, self.width, self.height)

    def cell(self, col: int, row: int) -> Cell:
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise IndexError(f"cell ({col}, {row}) is outside the canvas")
        return self._cells[row][col]

    def _inside(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def set_cell(self, col: int, row: int, cell: Cell) -> None:
        if self._inside(col, row):
            self._cells[row][col] = cell

    def set_style(self, col: int, row: int, style: Style) -> None:
        if self._inside(col, row):
            self._cells[row][col] = replace(self._cells[row][col], style=style)

    def show_cursor(self, col: int, row: int, style: CursorStyle) -> None:
        self.cursor_col = col
        self.cursor_row = row
        self.cursor_style = style
        self.cursor_visible = True


@dataclass(frozen=True)
class Window:
    """A rectangular view offset from an optional parent window."""

    canvas: Canvas
    column: int = 0
    row: int = 0
    width: int = 0
    height: int = 0
    parent: Window | None = None

    def new(self, col: int, row: int, cols: int, rows: int) -> Window:
        """Create a child window; negative or oversized dimensions fill the rest."""
        w, h = self.size()
        width = w - col if cols < 0 or cols + col > w else cols
        height = h - row if rows < 0 or rows + row > h else rows
        return Window(self.canvas, col, row, width, height, parent=self)

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def _visible(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def set_cell(self, col: int, row: int, cell: Cell) -> None:
        """Place a cell; positions outside the window are discarded."""
        if not self._visible(col, row):
            return
        target = self.canvas if self.parent is None else self.parent
        target.set_cell(col + self.column, row + self.row, cell)

    def set_style(self, col: int, row: int, style: Style) -> None:
        """Change the style at a position, leaving the text in place."""
        if not self._visible(col, row):
            return
        target = self.canvas if self.parent is None else self.parent
        target.set_style(col + self.column, row + self.row, style)

    def show_cursor(self, col: int, row: int, style: CursorStyle) -> None:
        """Show the cursor at a position relative to this window."""
        target = self.canvas if self.parent is None else self.parent
        target.show_cursor(col + self.column, row + self.row, style)

    def fill(self, cell: Cell) -> None:
        for row in range(self.height):
            for col in range(self.width):
                self.set_cell(col, row, cell)

    def origin(self) -> tuple[int, int]:
        """Return the absolute column and row of this window's top-left cell."""
        col = row = 0
        win: Window | None = self
        while win is not None:
            col += win.column
            row += win.row
            win = win.parent
        return col, row

    def clear(self) -> None:
        """Fill with blank cells and drop all graphics placements."""
        self.fill(Cell(Character(" ", 1), Style()))
        self.canvas.graphics.clear()

    def print(self, *segments: Segment) -> tuple[int, int]:
        """Print segments, wrapping at the window edge; return the final position."""
        cols, rows = self.size()
        col = row = 0
        for seg in segments:
            for char in characters(seg.text):
                if "\n" in char.grapheme:
                    col = 0
                    row += 1
                    continue
                if row > rows:
                    return col, row
                self.set_cell(col, row, Cell(char, seg.style))
                col += char.width
                if col >= cols:
                    row += 1
                    col = 0
        return col, row

    def print_truncate(self, row: int, *segments: Segment) -> None:
        """Print one line, ending it with an ellipsis if it does not fit."""
        cols, rows = self.size()
        if row >= rows:
            return
        col = 0
        for seg in segments:
            for char in characters(seg.text):
                if col + _TRUNCATOR.width + char.width > cols:
                    self.set_cell(col, row, Cell(_TRUNCATOR, seg.style))
                    return
                self.set_cell(col, row, Cell(char, seg.style))
                col += char.width

    def println(self, row: int, *segments: Segment) -> None:
        """Print one line, cutting it off at the window edge."""
        cols, rows = self.size()
        if row >= rows:
            return
        col = 0
        for seg in segments:
            for char in characters(seg.text):
                if col + char.width > cols:
                    return
                self.set_cell(col, row, Cell(char, seg.style))
                col += char.width

    def wrap(self, *segments: Segment) -> tuple[int, int]:
        """Print segments, wrapping at word boundaries; return the final position."""
        cols, rows = self.size()
        col = row = 0
        for seg in segments:
            for piece in _line_segments(seg.text):
                if row >= rows:
                    break
                chars = characters(piece)
                total = sum(char.width for char in chars)
                if total <= cols and total + col > cols:
                    col = 0
                    row += 1
                for char in chars:
                    if _has_trailing_break(char.grapheme):
                        row += 1
                        col = 0
                        continue
                    self.set_cell(col, row, Cell(char, seg.style))
                    col += char.width
                    if col >= cols:
                        row += 1
                        col = 0
        return col, row