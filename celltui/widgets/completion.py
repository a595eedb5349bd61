"""Text inputs with completion driven by a user-supplied function."""

from __future__ import annotations

import unicodedata
from collections.abc import Callable

from celltui.events import EventType, Key
from celltui.widgets.textinput import TextInput
from celltui.window import Window

Completer = Callable[[str], list[str]]


def _is_graphic(code: int) -> bool:
    if not 0 <= code < 0x110000:
        return False
    ch = chr(code)
    return ch.isprintable() or unicodedata.category(ch) == "Zs"


class _Completing:
    def __init__(self, complete: Completer) -> None:
        self.input = TextInput()
        self.complete = complete
        self._original = ""
        self._completions: list[str] = []
        self._option = 0

    def _reset(self) -> None:
        self._option = 0
        self._completions = []
        self._original = ""

    def _common_key(self, name: str, key: Key) -> None:
        if name == "Enter":
            self._reset()
        elif name == "Escape":
            self.input.set_content(self._original)
            self._reset()
        elif name == "BackSpace":
            self._reset()
        elif self._completions and _is_graphic(key.keycode):
            self._reset()

    def draw(self, win: Window) -> None:
        self.input.draw(win)


class MenuComplete(_Completing):
    """Tab cycles through completions of the current text, then back to it."""

    def update(self, event: object) -> None:
        if isinstance(event, Key):
            if event.event_type is EventType.RELEASE:
                return
            name = str(event)
            if name == "Tab":
                if not self._completions:
                    self._option = 0
                    self._original = str(self.input)
                    self._completions = list(self.complete(self._original))
                    self._completions.append(self._original)
                else:
                    self._option += 1
                    if self._option >= len(self._completions):
                        self._option = 0
                self.input.set_content(self._completions[self._option])
                return
            if name == "Shift+Tab":
                if self._completions:
                    self._option -= 1
                    if self._option < 0:
                        self._option = len(self._completions) - 1
                    self.input.set_content(self._completions[self._option])
                    return
            else:
                self._common_key(name, event)
        self.input.update(event)

    def draw(self, win: Window) -> None:
        self.input.draw(win)


class AutoComplete(_Completing):
    """A text input that tracks completion state around editing keys."""

    def update(self, event: object) -> None:
        if isinstance(event, Key):
            if event.event_type is EventType.RELEASE:
                return
            self._common_key(str(event), event)
        self.input.update(event)

    def draw(self, win: Window) -> None:
        self.input.draw(win)