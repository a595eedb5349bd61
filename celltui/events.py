"""Input events: keys, mouse, paste and redraw requests."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_EXTENDED = 0x110000


class Modifiers(enum.IntFlag):
    NONE = 0
    SHIFT = 1
    ALT = 2
    CTRL = 4
    SUPER = 8
    HYPER = 16
    META = 32
    CAPS_LOCK = 64
    NUM_LOCK = 128


class EventType(enum.Enum):
    PRESS = enum.auto()
    REPEAT = enum.auto()
    RELEASE = enum.auto()
    MOTION = enum.auto()
    PASTE = enum.auto()


class KeyCode(enum.IntEnum):
    """Named keys. Printable keys use their code point instead."""

    TAB = 0x09
    ENTER = 0x0D
    ESCAPE = 0x1B
    SPACE = 0x20
    BACKSPACE = 0x7F
    UP = _EXTENDED + 1
    RIGHT = _EXTENDED + 2
    DOWN = _EXTENDED + 3
    LEFT = _EXTENDED + 4
    INSERT = _EXTENDED + 5
    DELETE = _EXTENDED + 6
    PAGE_DOWN = _EXTENDED + 7
    PAGE_UP = _EXTENDED + 8
    HOME = _EXTENDED + 9
    END = _EXTENDED + 10
    F1 = _EXTENDED + 11
    F2 = _EXTENDED + 12
    F3 = _EXTENDED + 13
    F4 = _EXTENDED + 14
    F5 = _EXTENDED + 15
    F6 = _EXTENDED + 16
    F7 = _EXTENDED + 17
    F8 = _EXTENDED + 18
    F9 = _EXTENDED + 19
    F10 = _EXTENDED + 20
    F11 = _EXTENDED + 21
    F12 = _EXTENDED + 22
    F13 = _EXTENDED + 23
    F14 = _EXTENDED + 24
    F15 = _EXTENDED + 25
    F16 = _EXTENDED + 26
    F17 = _EXTENDED + 27
    F18 = _EXTENDED + 28
    F19 = _EXTENDED + 29
    F20 = _EXTENDED + 30
    F21 = _EXTENDED + 31
    F22 = _EXTENDED + 32
    F23 = _EXTENDED + 33
    F24 = _EXTENDED + 34
    F25 = _EXTENDED + 35
    F26 = _EXTENDED + 36
    F27 = _EXTENDED + 37
    F28 = _EXTENDED + 38
    F29 = _EXTENDED + 39
    F30 = _EXTENDED + 40
    F31 = _EXTENDED + 41
    F32 = _EXTENDED + 42
    F33 = _EXTENDED + 43
    F34 = _EXTENDED + 44
    F35 = _EXTENDED + 45
    F36 = _EXTENDED + 46
    F37 = _EXTENDED + 47
    F38 = _EXTENDED + 48
    F39 = _EXTENDED + 49
    F40 = _EXTENDED + 50


_KEY_NAMES: dict[int, str] = {
    KeyCode.TAB: "Tab",
    KeyCode.ENTER: "Enter",
    KeyCode.ESCAPE: "Escape",
    KeyCode.SPACE: "space",
    KeyCode.BACKSPACE: "BackSpace",
    KeyCode.UP: "Up",
    KeyCode.RIGHT: "Right",
    KeyCode.DOWN: "Down",
    KeyCode.LEFT: "Left",
    KeyCode.INSERT: "Insert",
    KeyCode.DELETE: "Delete",
    KeyCode.PAGE_DOWN: "Page_Down",
    KeyCode.PAGE_UP: "Page_Up",
    KeyCode.HOME: "Home",
    KeyCode.END: "End",
}
_KEY_NAMES.update(
    {code: code.name for code in KeyCode if code.name[0] == "F" and code.name[1:].isdigit()}
)

_MODIFIER_LABELS = (
    (Modifiers.CTRL, "Ctrl"),
    (Modifiers.ALT, "Alt"),
    (Modifiers.META, "Meta"),
    (Modifiers.HYPER, "Hyper"),
    (Modifiers.SUPER, "Super"),
)


def _key_name(code: int) -> str:
    if code in _KEY_NAMES:
        return _KEY_NAMES[code]
    if 0 <= code < _EXTENDED:
        return chr(code)
    return "Unknown"


@dataclass(frozen=True)
class Key:
    """A key press, repeat or release."""

    keycode: int = 0
    text: str = ""
    modifiers: Modifiers = Modifiers.NONE
    shifted_code: int = 0
    base_layout_code: int = 0
    event_type: EventType = EventType.PRESS

    def __str__(self) -> str:
        parts = [label for flag, label in _MODIFIER_LABELS if self.modifiers & flag]
        code = self.keycode
        if self.modifiers & Modifiers.SHIFT:
            if self.shifted_code > 0:
                code = self.shifted_code
            else:
                parts.append("Shift")
        parts.append(_key_name(code))
        return "+".join(parts)


class MouseButton(enum.IntEnum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2
    NONE = 3
    WHEEL_UP = 64
    WHEEL_DOWN = 65
    BUTTON_8 = 128
    BUTTON_9 = 129


@dataclass(frozen=True)
class Mouse:
    """A mouse event at a zero-based cell position."""

    col: int = 0
    row: int = 0
    button: MouseButton = MouseButton.NONE
    event_type: EventType = EventType.PRESS
    modifiers: Modifiers = Modifiers.NONE


@dataclass(frozen=True)
class PasteStart:
    """Start of a bracketed paste."""


@dataclass(frozen=True)
class PasteEnd:
    """End of a bracketed paste."""


@dataclass(frozen=True)
class Redraw:
    """A request to redraw the screen."""