"""The cell grid, cursor and character-set state of a virtual terminal."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from celltui.text import (
    Attribute,
    Cell,
    Character,
    Color,
    CursorStyle,
    Style,
    UnderlineStyle,
)

G0, G1, G2, G3 = range(4)

DEC_SPECIAL: dict[int, str] = {
    0x5F: "\u00a0",
    0x60: "\u25c6",
    0x61: "\u2592",
    0x62: "\u2409",
    0x63: "\u240c",
    0x64: "\u240d",
    0x65: "\u240a",
    0x66: "\u00b0",
    0x67: "\u00b1",
    0x68: "\u2424",
    0x69: "\u240b",
    0x6A: "\u2518",
    0x6B: "\u2510",
    0x6C: "\u250c",
    0x6D: "\u2514",
    0x6E: "\u253c",
    0x6F: "\u23ba",
    0x70: "\u23bb",
    0x71: "\u2500",
    0x72: "\u23bc",
    0x73: "\u23bd",
    0x74: "\u251c",
    0x75: "\u2524",
    0x76: "\u2534",
    0x77: "\u252c",
    0x78: "\u2502",
    0x79: "\u2264",
    0x7A: "\u2265",
    0x7B: "\u03c0",
    0x7C: "\u2260",
    0x7D: "\u00a3",
    0x7E: "\u00b7",
}


class Charset(enum.IntEnum):
    ASCII = 0
    DEC_SPECIAL = 1


def _ascii_designations() -> dict[int, Charset]:
    return {g: Charset.ASCII for g in (G0, G1, G2, G3)}


@dataclass
class Charsets:
    """Designated character sets and which one is selected."""

    designations: dict[int, Charset] = field(default_factory=_ascii_designations)
    selected: int = G0
    saved: int = G0
    single_shift: bool = False

    def copy(self) -> Charsets:
        """Copy selection and designations; single shift is not carried over."""
        return Charsets(
            designations={g: self.designations.get(g, Charset.ASCII) for g in (G0, G1, G2, G3)},
            selected=self.selected,
            saved=self.saved,
        )


@dataclass
class TermCell:
    """A screen cell that also remembers whether its line wrapped."""

    character: Character = field(default_factory=Character)
    style: Style = field(default_factory=Style)
    wrapped: bool = False

    @property
    def grapheme(self) -> str:
        return self.character.grapheme

    @property
    def width(self) -> int:
        return self.character.width

    def rune(self) -> str:
        """The text to show for this cell; an empty cell shows as a space."""
        return self.character.grapheme or " "

    def erase(self, background: Color) -> None:
        """Clear content and attributes, keeping only the given background."""
        self.character = Character("", 0)
        self.style = replace(
            self.style,
            attribute=Attribute.NONE,
            underline_style=UnderlineStyle.OFF,
            background=background,
            hyperlink="",
            hyperlink_params="",
        )

    def selective_erase(self) -> None:
        """Remove the content but keep the attributes."""
        self.character = replace(self.character, grapheme=" ")

    def copy(self) -> TermCell:
        return replace(self)

    def to_cell(self) -> Cell:
        return Cell(self.character, self.style)


@dataclass
class Cursor:
    """The cursor position (0-indexed), the pen style and the cursor shape."""

    row: int = 0
    col: int = 0
    style: Style = field(default_factory=Style)
    shape: CursorStyle = CursorStyle.DEFAULT

    def copy(self) -> Cursor:
        return replace(self)


@dataclass
class Margin:
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0


@dataclass
class Modes:
    """Terminal modes; autowrap and cursor visibility start enabled."""

    kam: bool = False
    irm: bool = False
    srm: bool = False
    lnm: bool = False
    decckm: bool = False
    decanm: bool = False
    deccolm: bool = False
    decsclm: bool = False
    decom: bool = False
    decawm: bool = True
    decarm: bool = False
    decpff: bool = False
    decpex: bool = False
    dectcem: bool = True
    decnrcm: bool = False
    deckpam: bool = False
    deckpnm: bool = False
    smcup: bool = False
    paste: bool = False
    mouse_buttons: bool = False
    mouse_drag: bool = False
    mouse_motion: bool = False
    mouse_sgr: bool = False
    alt_scroll: bool = False


@dataclass
class CursorState:
    """What save-cursor stores and restore-cursor brings back."""

    charsets: Charsets = field(default_factory=Charsets)
    cursor: Cursor = field(default_factory=Cursor)
    decawm: bool = True
    decom: bool = False


@dataclass(frozen=True)
class Bell:
    """Emitted when BEL is received."""


@dataclass(frozen=True)
class Closed:
    """Emitted when the program behind the terminal has exited."""

    term: object = None
    error: BaseException | None = None


@dataclass(frozen=True)
class Title:
    text: str = ""


@dataclass(frozen=True)
class Notify:
    title: str = ""
    body: str = ""


@dataclass(frozen=True)
class ApcEvent:
    """Emitted when an APC sequence is received."""

    payload: str = ""


def _blank_grid(width: int, height: int) -> list[list[TermCell]]:
    return [[TermCell() for _ in range(width)] for _ in range(height)]


class Screen:
    """Primary and alternate cell grids with cursor, margins, modes and tab stops.

    Events raised by the screen are queued in ``events``. Replies meant for
    the program behind the terminal go to ``writer``, or are collected in
    ``replies`` when no writer is given.
    """

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        writer: Callable[[str], None] | None = None,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError("screen dimensions must not be negative")
        self.primary_screen: list[list[TermCell]] = []
        self.alt_screen: list[list[TermCell]] = []
        self.active_screen: list[list[TermCell]] = self.primary_screen
        self.charsets = Charsets()
        self.cursor = Cursor()
        self.margin = Margin()
        self.modes = Modes()
        self.tab_stops: list[int] = []
        self.last_col = False
        self.primary_state = CursorState()
        self.alt_state = CursorState()
        self.events: deque[object] = deque()
        self.replies: list[str] = []
        self._writer = writer
        self._set_default_tab_stops()
        self.resize(width, height)

    def _reply(self, data: str) -> None:
        if self._writer is None:
            self.replies.append(data)
        else:
            self._writer(data)

    def width(self) -> int:
        return len(self.active_screen[0]) if self.active_screen else 0

    def height(self) -> int:
        return len(self.active_screen)

    def resize(self, width: int, height: int) -> None:
        """Reallocate both grids and reflow the primary content above the cursor."""
        primary = self.primary_screen
        self.alt_screen = _blank_grid(width, height)
        self.primary_screen = _blank_grid(width, height)
        last = self.cursor.row
        self.margin.bottom = height - 1
        self.margin.right = width - 1
        self.cursor.row = 0
        self.cursor.col = 0
        self.last_col = False
        self.active_screen = self.primary_screen

        for row_index, line in enumerate(primary):
            if row_index == last:
                break
            wrapped = False
            for cell in line:
                self.cursor.style = cell.style
                self.print(cell.grapheme, cell.width)
                wrapped = cell.wrapped
            if not wrapped:
                self.next_line()

        self.active_screen = self.alt_screen if self.modes.smcup else self.primary_screen

    def print(self, grapheme: str, width: int) -> None:
        """Put a grapheme at the cursor with the cursor's style and advance."""
        if (
            len(grapheme) == 1
            and self.charsets.designations.get(self.charsets.selected) is Charset.DEC_SPECIAL
        ):
            grapheme = DEC_SPECIAL.get(ord(grapheme), grapheme)

        if self.charsets.single_shift:
            self.charsets.selected = self.charsets.saved

        wrap = self.last_col or self.cursor.col + width - 1 > self.margin.right
        if not self.modes.decawm:
            wrap = False
        if wrap:
            self.last_col = False
            self.active_screen[self.cursor.row][self.width() - 1].wrapped = True
            self.next_line()

        col = self.cursor.col
        row = self.cursor.row
        line = self.active_screen[row]

        if self.modes.irm:
            for i in range(self.margin.right, col, -1):
                line[i] = line[i - width].copy()
        col = min(col, self.width() - 1)
        row = min(row, self.height() - 1)

        if width == 0:
            return

        self.active_screen[row][col] = TermCell(Character(grapheme, width), self.cursor.style)

        for i in range(1, width):
            if col + i > self.margin.right:
                break
            trailing = self.active_screen[row][col + i]
            trailing.character = replace(trailing.character, grapheme=" ")
            trailing.style = self.cursor.style

        if self.modes.decawm or self.cursor.col + width <= self.margin.right:
            self.cursor.col += width
        if self.cursor.col >= self.margin.right + 1 and self.modes.decawm:
            self.last_col = True

    def scroll_up(self, n: int) -> None:
        """Shift the lines in the scrolling region up by n rows."""
        background = self.cursor.style.background
        for row_index, line in enumerate(self.active_screen):
            if row_index > self.margin.bottom or row_index < self.margin.top:
                continue
            if row_index + n > self.margin.bottom:
                for col in range(self.margin.left, self.margin.right + 1):
                    line[col].erase(background)
                continue
            line[:] = [cell.copy() for cell in self.active_screen[row_index + n]]

    def scroll_down(self, n: int) -> None:
        """Shift the lines in the scrolling region down by n rows."""
        background = self.cursor.style.background
        for row_index in range(self.margin.bottom, self.margin.top - 1, -1):
            line = self.active_screen[row_index]
            if row_index - n < self.margin.top:
                for col in range(self.margin.left, self.margin.right + 1):
                    line[col].erase(background)
                continue
            line[:] = [cell.copy() for cell in self.active_screen[row_index - n]]

    def c0(self, code: int) -> None:
        """Handle a C0 control character."""
        if code == 0x07:
            self.post_event(Bell())
        elif code == 0x08:
            self._backspace()
        elif code == 0x09:
            self.tab_forward(1)
        elif code in (0x0A, 0x0B, 0x0C):
            self._linefeed()
        elif code == 0x0D:
            self._carriage_return()
        elif code == 0x0E:
            self.charsets.selected = G1
        elif code == 0x0F:
            self.charsets.selected = G2

    def _backspace(self) -> None:
        self.last_col = False
        if self.cursor.col == self.margin.left:
            if self.cursor.row == self.margin.top:
                return
            self.cursor.col = self.margin.right
            self.cursor.row -= 1
            return
        self.cursor.col -= 1

    def _linefeed(self) -> None:
        self.index()
        if self.modes.lnm:
            self.cursor.col = self.margin.left

    def _carriage_return(self) -> None:
        self.last_col = False
        self.cursor.col = self.margin.left

    _DESIGNATORS = {"(": G0, ")": G1, "*": G2, "+": G3}

    def esc(self, sequence: str) -> None:
        """Handle an escape sequence given as intermediates plus final byte."""
        if sequence == "7":
            self.save_cursor()
        elif sequence == "8":
            self.restore_cursor()
        elif sequence == "D":
            self.index()
        elif sequence == "E":
            self.next_line()
        elif sequence == "H":
            self.set_tab_stop()
        elif sequence == "M":
            self.reverse_index()
        elif sequence == "N":
            self.charsets.single_shift = True
            self.charsets.selected = G2
        elif sequence == "O":
            self.charsets.single_shift = True
            self.charsets.selected = G3
        elif sequence == "=":
            self.modes.deckpam = True
            self.modes.deckpnm = False
        elif sequence == ">":
            self.modes.deckpnm = True
            self.modes.deckpam = False
        elif sequence == "c":
            self.reset()
        elif len(sequence) == 2 and sequence[0] in self._DESIGNATORS:
            designator = self._DESIGNATORS[sequence[0]]
            if sequence[1] == "0":
                self.charsets.designations[designator] = Charset.DEC_SPECIAL
            elif sequence[1] == "B":
                self.charsets.designations[designator] = Charset.ASCII

    def index(self) -> None:
        """Move down one line, scrolling at the bottom margin."""
        self.last_col = False
        if self.cursor.row == self.margin.bottom:
            self.scroll_up(1)
            return
        if self.cursor.row >= self.height() - 1:
            return
        self.cursor.row += 1

    def next_line(self) -> None:
        """Move to the left margin of the next line, scrolling if necessary."""
        self.index()
        self.cursor.col = self.margin.left

    def reverse_index(self) -> None:
        """Move up one line, scrolling down at the top margin."""
        self.last_col = False
        if self.cursor.row < 0:
            return
        if self.cursor.row == self.margin.top:
            self.scroll_down(1)
            return
        self.cursor.row -= 1

    def tab_forward(self, count: int) -> None:
        """Move the cursor forward count tab stops."""
        self.last_col = False
        if count == 0:
            count = 1
        moved = 0
        for stop in self.tab_stops:
            if moved == count:
                break
            if self.cursor.col > stop:
                continue
            self.cursor.col = stop
            moved += 1

    def set_tab_stop(self) -> None:
        self.tab_stops.append(self.cursor.col)

    def save_cursor(self) -> None:
        state = CursorState(
            charsets=self.charsets.copy(),
            cursor=self.cursor.copy(),
            decawm=self.modes.decawm,
            decom=self.modes.decom,
        )
        if self.modes.smcup:
            self.alt_state = state
        else:
            self.primary_state = state

    def restore_cursor(self) -> None:
        state = self.alt_state if self.modes.smcup else self.primary_state
        self.cursor = state.cursor.copy()
        self.charsets = state.charsets.copy()
        self.modes.decawm = state.decawm
        self.modes.decom = state.decom
        self.last_col = False

    def reset(self) -> None:
        """Reset to the initial state, clearing both grids."""
        width, height = self.width(), self.height()
        self.alt_screen = _blank_grid(width, height)
        self.primary_screen = _blank_grid(width, height)
        self.margin.bottom = height - 1
        self.margin.right = width - 1
        self.cursor.row = 0
        self.cursor.col = 0
        self.last_col = False
        self.active_screen = self.primary_screen
        self.charsets = Charsets()
        self.modes = Modes()
        self._set_default_tab_stops()

    def _set_default_tab_stops(self) -> None:
        self.tab_stops = list(range(8, 50 * 7, 8))

    def post_event(self, event: object) -> None:
        self.events.append(event)

    def __str__(self) -> str:
        return "\n".join("".join(cell.rune() for cell in line) for line in self.active_screen)