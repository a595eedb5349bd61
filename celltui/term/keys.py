"""Encode key events as the byte sequences an xterm-like terminal sends."""

from __future__ import annotations

import unicodedata

from celltui.events import Key, KeyCode, Modifiers

_MAX_RUNE = 0x10FFFF

_XTERM_KEYS: dict[int, tuple[int, str]] = {
    KeyCode.UP: (1, "A"),
    KeyCode.DOWN: (1, "B"),
    KeyCode.RIGHT: (1, "C"),
    KeyCode.LEFT: (1, "D"),
    KeyCode.END: (1, "F"),
    KeyCode.HOME: (1, "H"),
    KeyCode.INSERT: (2, "~"),
    KeyCode.DELETE: (3, "~"),
    KeyCode.PAGE_UP: (5, "~"),
    KeyCode.PAGE_DOWN: (6, "~"),
    KeyCode.F1: (1, "P"),
    KeyCode.F2: (1, "Q"),
    KeyCode.F3: (1, "R"),
    KeyCode.F4: (1, "S"),
    KeyCode.F5: (15, "~"),
    KeyCode.F6: (17, "~"),
    KeyCode.F7: (18, "~"),
    KeyCode.F8: (19, "~"),
    KeyCode.F9: (20, "~"),
    KeyCode.F10: (21, "~"),
    KeyCode.F11: (23, "~"),
    KeyCode.F12: (24, "~"),
}

_CURSOR_APPLICATION = {
    KeyCode.UP: "\x1bOA",
    KeyCode.DOWN: "\x1bOB",
    KeyCode.RIGHT: "\x1bOC",
    KeyCode.LEFT: "\x1bOD",
    KeyCode.END: "\x1bOF",
    KeyCode.HOME: "\x1bOH",
}

_CURSOR_NORMAL = {
    KeyCode.UP: "\x1b[A",
    KeyCode.DOWN: "\x1b[B",
    KeyCode.RIGHT: "\x1b[C",
    KeyCode.LEFT: "\x1b[D",
    KeyCode.END: "\x1b[F",
    KeyCode.HOME: "\x1b[H",
}

_NUMERIC_KEYPAD = {
    KeyCode.INSERT: "\x1b[2~",
    KeyCode.DELETE: "\x1b[3~",
    KeyCode.PAGE_UP: "\x1b[5~",
    KeyCode.PAGE_DOWN: "\x1b[6~",
}

_APPLICATION_KEYPAD = dict(_NUMERIC_KEYPAD)

_FUNCTION_KEYS = {
    KeyCode.F1: "\x1bOP",
    KeyCode.F2: "\x1bOQ",
    KeyCode.F3: "\x1bOR",
    KeyCode.F4: "\x1bOS",
    KeyCode.F5: "\x1b[15~",
    KeyCode.F6: "\x1b[17~",
    KeyCode.F7: "\x1b[18~",
    KeyCode.F8: "\x1b[19~",
    KeyCode.F9: "\x1b[20~",
    KeyCode.F10: "\x1b[21~",
    KeyCode.F11: "\x1b[23~",
    KeyCode.F12: "\x1b[24~",
    KeyCode.F13: "\x1b[1;2P",
    KeyCode.F14: "\x1b[1;2Q",
    KeyCode.F15: "\x1b[1;2R",
    KeyCode.F16: "\x1b[1;2S",
    KeyCode.F17: "\x1b[15;2~",
    KeyCode.F18: "\x1b[17;2~",
    KeyCode.F19: "\x1b[18;2~",
    KeyCode.F20: "\x1b[19;2~",
    KeyCode.F21: "\x1b[20;2~",
    KeyCode.F22: "\x1b[21;2~",
    KeyCode.F23: "\x1b[23;2~",
    KeyCode.F24: "\x1b[24;2~",
    KeyCode.F25: "\x1b[1;5P",
    KeyCode.F26: "\x1b[1;5Q",
    KeyCode.F27: "\x1b[1;5R",
    KeyCode.F28: "\x1b[1;5S",
    KeyCode.F29: "\x1b[15;5~",
    KeyCode.F30: "\x1b[17;5~",
    KeyCode.F31: "\x1b[18;5~",
    KeyCode.F32: "\x1b[19;5~",
    KeyCode.F33: "\x1b[20;5~",
    KeyCode.F34: "\x1b[21;5~",
    KeyCode.F35: "\x1b[23;5~",
    KeyCode.F36: "\x1b[24;5~",
    KeyCode.F37: "\x1b[1;6P",
    KeyCode.F38: "\x1b[1;6Q",
    KeyCode.F39: "\x1b[1;6R",
    KeyCode.F40: "\x1b[1;6S",
}

_CTRL_DIGITS = {
    ord("1"): "1",
    ord("2"): "\x00",
    ord("3"): "\x1b",
    ord("4"): "\x1c",
    ord("5"): "\x1d",
    ord("6"): "\x1e",
    ord("7"): "\x1f",
    ord("8"): "\x7f",
    ord("9"): "",
}

_XTERM_MODIFIERS = Modifiers.SHIFT | Modifiers.ALT | Modifiers.CTRL


def _rune(code: int) -> str:
    """Return the character for a code point, or U+FFFD if it is not valid."""
    if 0 <= code <= _MAX_RUNE and not 0xD800 <= code <= 0xDFFF:
        return chr(code)
    return "\ufffd"


def _is_lower(code: int) -> bool:
    if not 0 <= code <= _MAX_RUNE:
        return False
    return unicodedata.category(chr(code)) == "Ll"


def encode_xterm(key: Key, application_keypad: bool, application_cursor: bool) -> str:
    """Encode a key the way xterm would send it to a program."""
    mods = Modifiers(key.modifiers & _XTERM_MODIFIERS)
    code = key.keycode
    if not mods:
        if code in _FUNCTION_KEYS:
            return _FUNCTION_KEYS[code]
        cursor_keys = _CURSOR_APPLICATION if application_cursor else _CURSOR_NORMAL
        if code in cursor_keys:
            return cursor_keys[code]
        keypad = _APPLICATION_KEYPAD if application_keypad else _NUMERIC_KEYPAD
        if code in keypad:
            return keypad[code]
        if code < _MAX_RUNE:
            return _rune(code)

    if code in _XTERM_KEYS:
        number, final = _XTERM_KEYS[code]
        return f"\x1b[{number};{int(mods) + 1}{final}"

    if key.text and not key.modifiers & (Modifiers.CTRL | Modifiers.ALT):
        return key.text

    if code >= _MAX_RUNE:
        return ""

    prefix = "\x1b" if mods & Modifiers.ALT else ""
    if mods & Modifiers.CTRL:
        if _is_lower(code):
            return prefix + _rune(code - 0x60)
        if code in _CTRL_DIGITS:
            return prefix + _CTRL_DIGITS[code]
        return prefix + _rune(code - 0x40)
    if mods & Modifiers.SHIFT:
        return prefix + _rune(key.shifted_code if key.shifted_code > 0 else code)
    return prefix + _rune(code)