"""Place child windows at fixed positions within a parent."""

from __future__ import annotations

from celltui.window import Window


def _half(n: int) -> int:
    """Halve, truncating toward zero."""
    return n // 2 if n >= 0 else -(-n // 2)


def center(parent: Window, cols: int, rows: int) -> Window:
    p_cols, p_rows = parent.size()
    row = _half(p_rows) - _half(rows)
    col = _half(p_cols) - _half(cols)
    return parent.new(col, row, cols, rows)


def top_left(parent: Window, cols: int, rows: int) -> Window:
    return parent.new(0, 0, cols, rows)


def top_middle(parent: Window, cols: int, rows: int) -> Window:
    p_cols, _ = parent.size()
    col = _half(p_cols) - _half(cols)
    return parent.new(col, 0, cols, rows)


def top_right(parent: Window, cols: int, rows: int) -> Window:
    p_cols, _ = parent.size()
    return parent.new(p_cols - cols, 0, cols, rows)


def bottom_left(parent: Window, cols: int, rows: int) -> Window:
    _, p_rows = parent.size()
    return parent.new(0, p_rows - rows, cols, rows)


def bottom_middle(parent: Window, cols: int, rows: int) -> Window:
    p_cols, p_rows = parent.size()
    col = _half(p_cols) - _half(cols)
    return parent.new(col, p_rows - rows, cols, rows)


def bottom_right(parent: Window, cols: int, rows: int) -> Window:
    p_cols, p_rows = parent.size()
    return parent.new(p_cols - cols, p_rows - rows, cols, rows)