"""A progress bar that can also count bytes passing through a stream."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import BinaryIO

from celltui.text import Cell, Character, Style
from celltui.window import Window

FULL = Character("█", 1)
_PARTIALS = (
    (0.875, Character("▉", 1)),
    (0.75, Character("▊", 1)),
    (0.625, Character("▋", 1)),
    (0.5, Character("▌", 1)),
    (0.375, Character("▍", 1)),
    (0.25, Character("▎", 1)),
    (0.125, Character("▏", 1)),
)


@dataclass
class ProgressBar:
    """Draws progress out of total; reads and writes advance the progress.

    When ``post`` is given, progress updates are handed to it as callables
    (to be run on the UI loop) instead of being applied at once.
    """

    reader: BinaryIO | None = None
    writer: BinaryIO | None = None
    total: float = 0.0
    progress: float = 0.0
    style: Style = field(default_factory=Style)
    post: Callable[[Callable[[], None]], None] | None = None

    def draw(self, win: Window) -> None:
        if self.total == 0:
            return
        _, span = win.size()
        frac_blocks = (self.progress / self.total) * span
        full_blocks = math.floor(frac_blocks)
        remainder = frac_blocks - full_blocks
        for col in range(int(full_blocks) + 1):
            win.set_cell(col, 0, Cell(FULL, self.style))
        for threshold, char in _PARTIALS:
            if remainder >= threshold:
                win.set_cell(int(full_blocks) + 1, 0, Cell(char, self.style))
                break

    def _advance(self, n: int) -> None:
        def apply() -> None:
            self.progress += n

        if self.post is None:
            apply()
        else:
            self.post(apply)

    def read(self, size: int = -1) -> bytes:
        """Read from the reader, counting the bytes returned."""
        if self.reader is None:
            raise ValueError("progress bar has no reader")
        data = self.reader.read(size)
        self._advance(len(data))
        return data

    def write(self, data: bytes) -> int:
        """Write to the writer, counting the bytes written."""
        if self.writer is None:
            raise ValueError("progress bar has no writer")
        n = self.writer.write(data)
        if n is None:
            n = len(data)
        self._advance(n)
        return n