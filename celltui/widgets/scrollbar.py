"""A vertical scrollbar indicator."""

from __future__ import annotations

from dataclasses import dataclass, field

from celltui.text import Cell, Character, Style
from celltui.window import Window

DEFAULT_CHARACTER = Character("▐", 1)


@dataclass
class Scrollbar:
    """Shows which part of a scrolling area is visible."""

    character: Character = field(default_factory=Character)
    style: Style = field(default_factory=Style)
    total_height: int = 0
    view_height: int = 0
    top: int = 0

    def draw(self, win: Window) -> None:
        if self.total_height < 1 or self.view_height >= self.total_height:
            return
        _, h = win.size()
        bar_height = max(1, (self.view_height * h) // self.total_height)
        bar_top = (self.top * h) // self.total_height
        if not self.character.grapheme:
            self.character = DEFAULT_CHARACTER
        cell = Cell(self.character, self.style)
        for offset in range(bar_height):
            win.set_cell(0, bar_top + offset, cell)