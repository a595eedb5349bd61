"""Mode switching, mode reports and graphic rendition for the virtual terminal."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from celltui.term.screen import Screen
from celltui.text import Attribute, Color, UnderlineStyle

_log = logging.getLogger(__name__)

_ANSI_MODES = {2: "kam", 4: "irm", 12: "srm", 20: "lnm"}

_PRIVATE_MODES = {
    1: "decckm",
    2: "decanm",
    3: "deccolm",
    4: "decsclm",
    6: "decom",
    7: "decawm",
    8: "decarm",
    25: "dectcem",
    1000: "mouse_buttons",
    1002: "mouse_drag",
    1003: "mouse_motion",
    1006: "mouse_sgr",
    1007: "alt_scroll",
    1049: "smcup",
    2004: "paste",
}

_ALT_SCREEN = 1049
_AUTOWRAP = 7

_UNDERLINE_STYLES = {
    0: UnderlineStyle.OFF,
    1: UnderlineStyle.SINGLE,
    2: UnderlineStyle.DOUBLE,
    3: UnderlineStyle.CURLY,
    4: UnderlineStyle.DOTTED,
    5: UnderlineStyle.DASHED,
}

_SET_ATTRIBUTES = {
    1: Attribute.BOLD,
    2: Attribute.DIM,
    3: Attribute.ITALIC,
    5: Attribute.BLINK,
    7: Attribute.REVERSE,
    8: Attribute.INVISIBLE,
    9: Attribute.STRIKETHROUGH,
}

_CLEAR_ATTRIBUTES = {
    22: Attribute.BOLD | Attribute.DIM,
    23: Attribute.ITALIC,
    25: Attribute.BLINK,
    27: Attribute.REVERSE,
    28: Attribute.INVISIBLE,
    29: Attribute.STRIKETHROUGH,
}

_COLOR_TARGETS = {38: "foreground", 48: "background", 58: "underline_color"}


class _MalformedSgr(Exception):
    pass


def _byte(value: int) -> int:
    return value & 0xFF


def _extended_color(params: Sequence[Sequence[int]], i: int) -> tuple[Color | None, int]:
    """Decode an extended colour starting at params[i]; return it and the params consumed."""
    group = params[i]
    if len(group) == 1:
        if len(params) - i < 3:
            raise _MalformedSgr
        kind = params[i + 1][0]
        if kind == 2:
            if len(params) - i < 5:
                raise _MalformedSgr
            rgb = (_byte(params[i + 2][0]), _byte(params[i + 3][0]), _byte(params[i + 4][0]))
            return Color.rgb(*rgb), 4
        if kind == 5:
            return Color.indexed(_byte(params[i + 2][0])), 2
        raise _MalformedSgr
    if len(group) == 3:
        if group[1] != 5:
            raise _MalformedSgr
        return Color.indexed(_byte(group[2])), 0
    if len(group) == 5:
        if group[1] != 2:
            raise _MalformedSgr
        return Color.rgb(_byte(group[2]), _byte(group[3]), _byte(group[4])), 0
    if len(group) == 6:
        if group[1] != 2:
            raise _MalformedSgr
        return Color.rgb(_byte(group[3]), _byte(group[4]), _byte(group[5])), 0
    return None, 0


class ModalScreen(Screen):
    """A screen that understands mode changes, mode reports and SGR."""

    def set_mode(self, params: Iterable[Sequence[int]]) -> None:
        """Set ANSI modes (SM)."""
        self._set_ansi(params, True)

    def reset_mode(self, params: Iterable[Sequence[int]]) -> None:
        """Reset ANSI modes (RM)."""
        self._set_ansi(params, False)

    def _set_ansi(self, params: Iterable[Sequence[int]], value: bool) -> None:
        for param in params:
            name = _ANSI_MODES.get(param[0])
            if name is not None:
                setattr(self.modes, name, value)

    def set_private_mode(self, params: Iterable[Sequence[int]]) -> None:
        """Set DEC private modes (DECSET)."""
        for param in params:
            number = param[0]
            if number == _ALT_SCREEN:
                self.save_cursor()
                self.active_screen = self.alt_screen
                self.modes.smcup = True
                # Wheel scrolling becomes arrow keys unless the program asks for the mouse.
                self.modes.alt_scroll = True
                continue
            name = _PRIVATE_MODES.get(number)
            if name is None:
                continue
            setattr(self.modes, name, True)
            if number == _AUTOWRAP:
                self.last_col = False

    def reset_private_mode(self, params: Iterable[Sequence[int]]) -> None:
        """Reset DEC private modes (DECRST)."""
        for param in params:
            number = param[0]
            if number == _ALT_SCREEN:
                if self.modes.smcup:
                    self._erase_all()
                self.active_screen = self.primary_screen
                self.modes.smcup = False
                self.modes.alt_scroll = False
                self.restore_cursor()
                continue
            name = _PRIVATE_MODES.get(number)
            if name is None:
                continue
            setattr(self.modes, name, False)
            if number == _AUTOWRAP:
                self.last_col = False

    def _erase_all(self) -> None:
        self.last_col = False
        background = self.cursor.style.background
        for line in self.active_screen:
            for cell in line:
                cell.erase(background)

    def report_private_mode(self, mode: int) -> None:
        """Reply to DECRQM: 1 when set, 2 when reset, 0 when not recognised."""
        name = _PRIVATE_MODES.get(mode)
        if name is None:
            state = 0
        else:
            state = 1 if getattr(self.modes, name) else 2
        self._reply(f"\x1b[?{mode};{state}$y")

    def sgr(self, params: Sequence[Sequence[int]]) -> None:
        """Apply Select Graphic Rendition parameters to the cursor's pen."""
        if not params:
            params = [[0]]
        i = 0
        while i < len(params):
            try:
                i += self._sgr_one(params, i)
            except _MalformedSgr:
                _log.error("malformed SGR sequence")
                return
            i += 1

    def _pen(self, **changes: object) -> None:
        self.cursor.style = replace(self.cursor.style, **changes)

    def _sgr_one(self, params: Sequence[Sequence[int]], i: int) -> int:
        group = params[i]
        code = group[0]
        style = self.cursor.style
        if code == 0:
            self._pen(
                attribute=Attribute.NONE,
                foreground=Color(),
                background=Color(),
                underline_color=Color(),
                underline_style=UnderlineStyle.OFF,
            )
        elif code in _SET_ATTRIBUTES:
            self._pen(attribute=style.attribute | _SET_ATTRIBUTES[code])
        elif code in _CLEAR_ATTRIBUTES:
            kept = int(style.attribute) & ~int(_CLEAR_ATTRIBUTES[code])
            self._pen(attribute=Attribute(kept))
        elif code == 4:
            if len(group) == 1:
                self._pen(underline_style=UnderlineStyle.SINGLE)
            elif len(group) == 2 and group[1] in _UNDERLINE_STYLES:
                self._pen(underline_style=_UNDERLINE_STYLES[group[1]])
        elif code == 24:
            self._pen(underline_style=UnderlineStyle.OFF)
        elif 30 <= code <= 37:
            self._pen(foreground=Color.indexed(code - 30))
        elif code == 39:
            self._pen(foreground=Color())
        elif 40 <= code <= 47:
            self._pen(background=Color.indexed(code - 40))
        elif code == 49:
            self._pen(background=Color())
        elif code in _COLOR_TARGETS:
            color, consumed = _extended_color(params, i)
            if color is not None:
                self._pen(**{_COLOR_TARGETS[code]: color})
            return consumed
        elif 90 <= code <= 97:
            self._pen(foreground=Color.indexed(code - 90 + 8))
        elif 100 <= code <= 107:
            self._pen(background=Color.indexed(code - 100 + 8))
        return 0