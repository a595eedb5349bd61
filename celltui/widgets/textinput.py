"""A single-line text input with readline-style editing keys."""

from __future__ import annotations

from celltui.events import EventType, Key, Modifiers, PasteEnd
from celltui.text import Cell, Character, CursorStyle, Style
from celltui.text import characters as _split
from celltui.window import Window

SCROLLOFF = 4
_TRUNCATOR = Character("…", 1)


def _is_alphanumeric(char: Character) -> bool:
    if len(char.grapheme) != 1:
        return False
    return char.grapheme.isalpha() or char.grapheme.isnumeric()


def _width_to_cursor(chars: list[Character], cursor: int, offset: int) -> int:
    width = 0
    for i, char in enumerate(chars):
        if i < offset:
            continue
        width += char.width
        if i == cursor:
            break
    return width


class TextInput:
    """Editable line of text with an optional prompt."""

    def __init__(self) -> None:
        self._content: list[Character] = []
        self._prompt: list[Character] = []
        self.content_style = Style()
        self.prompt_style = Style()
        self.hide_cursor = False
        self._invisible = Character()
        self._cursor = 0
        self._offset = 0
        self._paste: list[str] = []

    def set_prompt(self, text: str) -> TextInput:
        self._prompt = _split(text)
        return self

    def set_content(self, text: str) -> TextInput:
        """Replace the content and move the cursor to its end."""
        self._content = _split(text)
        self._cursor = len(self._content)
        return self

    def set_invisible_char(self, text: str) -> TextInput:
        """Display the first character of text in place of every typed one."""
        chars = _split(text)
        if chars:
            self._invisible = chars[0]
        return self

    def characters(self) -> list[Character]:
        return list(self._content)

    def cursor_position(self) -> int:
        """The cursor position in characters; 0 is the start of the line."""
        return self._cursor

    def __str__(self) -> str:
        return "".join(char.grapheme for char in self._content)

    def update(self, event: object) -> None:
        if isinstance(event, PasteEnd):
            chars = _split("".join(self._paste))
            self._content[self._cursor:self._cursor] = chars
            self._cursor += len(chars)
            self._paste = []
        elif isinstance(event, Key):
            if event.event_type is EventType.RELEASE:
                return
            if event.event_type is EventType.PASTE:
                self._paste.append(event.text)
                return
            if not self._handle_key(event):
                return
        self._cursor = max(0, min(self._cursor, len(self._content)))

    def _handle_key(self, key: Key) -> bool:
        """Apply an editing key; return False when the key is ignored outright."""
        content = self._content
        name = str(key)
        if name in ("Ctrl+a", "Home"):
            self._cursor = 0
        elif name in ("Ctrl+e", "End"):
            self._cursor = len(content)
        elif name in ("Ctrl+f", "Right"):
            self._cursor += 1
        elif name in ("Ctrl+b", "Left"):
            self._cursor -= 1
        elif name in ("Alt+f", "Ctrl+Right"):
            pos = self._cursor
            while pos < len(content) and not _is_alphanumeric(content[pos]):
                pos += 1
            while pos < len(content) and _is_alphanumeric(content[pos]):
                pos += 1
            self._cursor = pos
        elif name in ("Alt+b", "Ctrl+Left"):
            pos = min(self._cursor - 1, len(content) - 1)
            while pos >= 0 and not _is_alphanumeric(content[pos]):
                pos -= 1
            while pos >= 0 and _is_alphanumeric(content[pos]):
                pos -= 1
            if pos >= 0:
                pos += 1
            self._cursor = pos
        elif name in ("Ctrl+d", "Delete"):
            if self._cursor < len(content):
                del content[self._cursor]
        elif name == "Ctrl+k":
            del content[self._cursor:]
        elif name == "Ctrl+u":
            del content[: self._cursor]
            self._cursor = 0
        elif name in ("Ctrl+h", "BackSpace"):
            if self._cursor == 0:
                return False
            del content[self._cursor - 1]
            self._cursor -= 1
        elif name == "Ctrl+w":
            if self._cursor == 0:
                return False
            end = self._cursor
            pos = end
            while pos > 0 and not _is_alphanumeric(content[pos - 1]):
                pos -= 1
            while pos > 0 and _is_alphanumeric(content[pos - 1]):
                pos -= 1
            del content[pos:end]
            self._cursor = pos
        else:
            if key.modifiers & (Modifiers.CTRL | Modifiers.ALT | Modifiers.SUPER):
                return False
            if key.text:
                chars = _split(key.text)
                content[self._cursor:self._cursor] = chars
                self._cursor += len(chars)
        return True

    def draw(self, win: Window) -> None:
        win_w, _ = win.size()
        if win_w == 0:
            return
        win.fill(Cell(Character(" ", 1), self.content_style))
        col = 0
        for char in self._prompt:
            win.set_cell(col, 0, Cell(char, self.prompt_style))
            col += char.width
            if col >= win_w:
                return

        chars = self._content
        cursor_col = col
        while (
            self._offset < len(chars)
            and _width_to_cursor(chars, self._cursor, self._offset) + col + SCROLLOFF >= win_w
        ):
            self._offset += 1
        if self._cursor - SCROLLOFF - self._offset < 0:
            self._offset = self._cursor - SCROLLOFF
        if self._offset < 0:
            self._offset = 0

        for i, char in enumerate(chars):
            if i < self._offset:
                continue
            if i + 1 == self._cursor:
                cursor_col = col + char.width
            shown = char
            if self._invisible.grapheme:
                shown = self._invisible
            if self._offset > 0 and i == self._offset:
                shown = _TRUNCATOR
            if col + char.width >= win_w:
                shown = _TRUNCATOR
            win.set_cell(col, 0, Cell(shown, self.content_style))
            col += char.width
            if col >= win_w:
                break
        if not self.hide_cursor:
            win.show_cursor(cursor_col, 0, CursorStyle.BLOCK)