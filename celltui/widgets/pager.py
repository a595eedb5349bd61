"""A scrollable, wrapping view over styled text."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from celltui.text import Cell, Character, Segment, characters
from celltui.window import Window

WRAP_FAST = 0

DEFAULT_FILL = Character(" ")


@dataclass
class Pager:
    """Lays segments out into lines of the window width and shows a slice of them."""

    segments: list[Segment] = field(default_factory=list)
    fill: Cell = field(default_factory=Cell)
    offset: int = 0
    wrap_mode: int = WRAP_FAST
    _lines: list[list[Cell]] = field(default_factory=list, init=False, repr=False)
    _width: int = field(default=0, init=False, repr=False)

    @property
    def lines(self) -> list[list[Cell]]:
        """The laid-out lines, each a list of cells."""
        return self._lines

    def draw(self, win: Window) -> None:
        w, h = win.size()
        if w != self._width:
            self._width = w
            self.layout()
        if len(self._lines) - self.offset < h:
            self.offset = len(self._lines) - h
        if self.offset < 0:
            self.offset = 0
        if not self.fill.grapheme:
            self.fill = replace(self.fill, character=DEFAULT_FILL)
        win.fill(self.fill)
        for row, line in enumerate(self._lines):
            if row < self.offset:
                continue
            if row - self.offset >= h:
                return
            col = 0
            for cell in line:
                win.set_cell(col, row - self.offset, cell)
                col += cell.width

    def layout(self) -> None:
        """Break the segments into lines at newlines and at the current width."""
        self._lines = []
        line: list[Cell] = []
        col = 0
        for seg in self.segments:
            for char in characters(seg.text):
                if "\n" in char.grapheme:
                    self._lines.append(line)
                    line = []
                    col = 0
                    continue
                line.append(Cell(char, seg.style))
                col += char.width
                if col >= self._width:
                    self._lines.append(line)
                    line = []
                    col = 0

    def scroll_down(self) -> None:
        self.offset += 1

    def scroll_up(self) -> None:
        self.offset -= 1