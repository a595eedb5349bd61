"""Draw rounded borders around windows."""

from __future__ import annotations

from celltui.text import Cell, Character, Style
from celltui.window import Window

HORIZONTAL = Character("─", 1)
VERTICAL = Character("│", 1)
TOP_LEFT = Character("╭", 1)
TOP_RIGHT = Character("╮", 1)
BOTTOM_RIGHT = Character("╯", 1)
BOTTOM_LEFT = Character("╰", 1)


def box(win: Window, style: Style) -> Window:
    """Draw a border on all sides; return the window inside it."""
    w, h = win.size()
    win.set_cell(0, 0, Cell(TOP_LEFT, style))
    win.set_cell(0, h - 1, Cell(BOTTOM_LEFT, style))
    win.set_cell(w - 1, 0, Cell(TOP_RIGHT, style))
    win.set_cell(w - 1, h - 1, Cell(BOTTOM_RIGHT, style))
    for col in range(1, w - 1):
        win.set_cell(col, 0, Cell(HORIZONTAL, style))
        win.set_cell(col, h - 1, Cell(HORIZONTAL, style))
    for row in range(1, h - 1):
        win.set_cell(0, row, Cell(VERTICAL, style))
        win.set_cell(w - 1, row, Cell(VERTICAL, style))
    return win.new(1, 1, w - 2, h - 2)


def left(win: Window, style: Style) -> Window:
    _, h = win.size()
    for row in range(h):
        win.set_cell(0, row, Cell(VERTICAL, style))
    return win.new(1, 0, -1, -1)


def right(win: Window, style: Style) -> Window:
    w, h = win.size()
    for row in range(h):
        win.set_cell(w - 1, row, Cell(VERTICAL, style))
    return win.new(0, 0, w - 1, -1)


def bottom(win: Window, style: Style) -> Window:
    w, h = win.size()
    for col in range(w):
        win.set_cell(col, h - 1, Cell(HORIZONTAL, style))
    return win.new(0, 0, -1, h - 1)


def top(win: Window, style: Style) -> Window:
    w, _ = win.size()
    for col in range(w):
        win.set_cell(col, 0, Cell(HORIZONTAL, style))
    return win.new(0, 1, -1, -1)