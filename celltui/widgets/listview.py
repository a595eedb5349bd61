"""A scrolling list with one selected item."""

from __future__ import annotations

from collections.abc import Iterable

from celltui.text import Attribute, Segment, Style
from celltui.window import Window

_SELECTED = Style(attribute=Attribute.REVERSE)


class ListView:
    """A vertical list of strings; the selected item is shown reversed."""

    def __init__(self, items: Iterable[str] = ()) -> None:
        self.items = list(items)
        self._index = 0
        self._offset = 0

    @property
    def index(self) -> int:
        """The index of the selected item."""
        return self._index

    def draw(self, win: Window) -> None:
        _, height = win.size()
        if self._index >= self._offset + height:
            self._offset = self._index - height + 1
        elif self._index < self._offset:
            self._offset = self._index
        selected = self._index - self._offset
        for row, subject in enumerate(self.items[self._offset:]):
            style = _SELECTED if row == selected else Style()
            win.println(row, Segment(subject, style))

    def down(self) -> None:
        self._index = min(len(self.items) - 1, self._index + 1)

    def up(self) -> None:
        self._index = max(0, self._index - 1)

    def home(self) -> None:
        self._index = 0

    def end(self) -> None:
        self._index = len(self.items) - 1

    def page_down(self, win: Window) -> None:
        _, height = win.size()
        self._index = min(len(self.items) - 1, self._index + height)

    def page_up(self, win: Window) -> None:
        _, height = win.size()
        self._index = max(0, self._index - height)

    def set_items(self, items: Iterable[str]) -> None:
        self.items = list(items)
        self._index = min(len(self.items) - 1, self._index)