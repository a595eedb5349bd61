"""A virtual terminal fed with parsed output sequences and host input events."""

from __future__ import annotations

import base64
import binascii
import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from celltui.events import EventType, Key, Mouse, MouseButton, PasteEnd, PasteStart, Redraw
from celltui.term.control import ControlScreen
from celltui.term.keys import encode_xterm
from celltui.term.screen import ApcEvent, Closed, Notify, Title
from celltui.text import Cell, Character

_log = logging.getLogger(__name__)

_PASTE_START = "\x1b[200~"
_PASTE_END = "\x1b[201~"
_ARROW_UP = "\x1bOA"
_ARROW_DOWN = "\x1bOB"
_WHEEL_LINES = 3

Handler = Callable[[object], None]


@dataclass(frozen=True)
class Print:
    """A printable grapheme and its width in cells."""

    grapheme: str
    width: int = 1


@dataclass(frozen=True)
class C0:
    """A C0 control character."""

    code: int


@dataclass(frozen=True)
class Esc:
    """An escape sequence: intermediate bytes and a final byte."""

    final: str
    intermediate: str = ""


@dataclass(frozen=True)
class Csi:
    """A control sequence: intermediates, final byte and grouped parameters."""

    final: str
    params: Sequence[Sequence[int]] = field(default_factory=tuple)
    intermediate: str = ""


@dataclass(frozen=True)
class Osc:
    """An operating system command with its payload."""

    payload: str


@dataclass(frozen=True)
class Apc:
    """An application program command with its data."""

    data: str


def _cut(text: str, sep: str) -> tuple[str, str, bool]:
    before, found, after = text.partition(sep)
    if not found:
        return text, "", False
    return before, after, True


def parse_osc8(value: str) -> tuple[str, str]:
    """Split an OSC 8 payload ("params;url") into the URL and the optional id."""
    params, url, found = _cut(value, ";")
    if not found:
        return "", ""
    link_id = ""
    for param in params.split(":"):
        key, val, found = _cut(param, "=")
        if found and key == "id":
            link_id = val
    return url, link_id


def _ignore(event: object) -> None:
    pass


class Terminal(ControlScreen):
    """A terminal model that applies output sequences and encodes host input.

    Bytes meant for the program behind the terminal go to ``writer`` (or are
    collected in ``replies``). Events are handed to the attached handler.
    ``clipboard`` receives text copied with OSC 52 and ``background``
    answers OSC 11 queries with an (r, g, b) tuple. When ``redraw_delay`` is
    a number of seconds, a Redraw event follows a change after that delay.
    """

    def __init__(
        self,
        width: int = 80,
        height: int = 24,
        writer: Callable[[str], None] | None = None,
        *,
        osc8: bool = True,
        clipboard: Callable[[str], None] | None = None,
        background: Callable[[], Sequence[int] | None] | None = None,
        redraw_delay: float | None = 0.008,
    ) -> None:
        self._lock = threading.RLock()
        self._handler: Handler = _ignore
        self._focused = threading.Event()
        self._timer: threading.Timer | None = None
        self._closed = False
        self.dirty = False
        self.osc8 = osc8
        self.clipboard = clipboard
        self.background = background
        self.redraw_delay = redraw_delay
        super().__init__(width, height, writer)

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("terminal is closed")

    def _send(self, data: str) -> None:
        if data:
            self._reply(data)

    def post_event(self, event: object) -> None:
        self._handler(event)

    def _invalidate(self) -> None:
        if self.dirty:
            return
        self.dirty = True
        if self.redraw_delay is None:
            return
        timer = threading.Timer(self.redraw_delay, self._fire_redraw)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire_redraw(self) -> None:
        with self._lock:
            self._timer = None
            if self._closed:
                return
            handler = self._handler
        handler(Redraw())

    def handle(self, sequence: object) -> None:
        """Apply one sequence produced by the program behind the terminal."""
        with self._lock:
            self._check_open()
            match sequence:
                case Print(grapheme=grapheme, width=width):
                    self.print(grapheme, width)
                case C0(code=code):
                    self.c0(code)
                case Esc(final=final, intermediate=intermediate):
                    self.esc(intermediate + final)
                case Csi(final=final, params=params, intermediate=intermediate):
                    self.csi(intermediate + final, params)
                case Osc(payload=payload):
                    self.osc(payload)
                case Apc(data=data):
                    self.post_event(ApcEvent(payload=data))
                case _:
                    raise TypeError(f"unsupported sequence: {sequence!r}")
            self._invalidate()

    def osc(self, data: str) -> None:
        """Handle an operating system command payload."""
        selector, val, found = _cut(data, ";")
        if not found:
            return
        if selector in ("0", "2"):
            self.post_event(Title(val))
        elif selector == "8":
            if self.osc8:
                params, url, found = _cut(val, ";")
                if not found:
                    return
                self.cursor.style = replace(
                    self.cursor.style, hyperlink=url, hyperlink_params=params
                )
        elif selector == "9":
            self.post_event(Notify(body=val))
        elif selector == "11":
            if val != "?" or self.background is None:
                return
            rgb = self.background()
            if not rgb:
                return
            r, g, b = (int(v) & 0xFF for v in rgb[:3])
            self._send(f"\x1b]11;rgb:{r:02x}/{g:02x}/{b:02x}\x07")
        elif selector == "52":
            _, encoded, _ = _cut(val, ";")
            try:
                decoded = base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError):
                _log.error("error decoding base64 clipboard payload")
                return
            if self.clipboard is not None:
                self.clipboard(decoded.decode("utf-8", errors="replace"))
        elif selector == "777":
            kind, rest, found = _cut(val, ";")
            if not found or kind != "notify":
                return
            title, body, found = _cut(rest, ";")
            if not found:
                return
            self.post_event(Notify(title=title, body=body))

    def update(self, event: object) -> None:
        """Pass host input (keys, pastes, mouse) to the program."""
        with self._lock:
            self._check_open()
            self._invalidate()
            if isinstance(event, Key):
                self._send(encode_xterm(event, self.modes.deckpam, self.modes.decckm))
            elif isinstance(event, PasteStart):
                if self.modes.paste:
                    self._send(_PASTE_START)
            elif isinstance(event, PasteEnd):
                if self.modes.paste:
                    self._send(_PASTE_END)
            elif isinstance(event, Mouse):
                self._send(self.handle_mouse(event))

    def handle_mouse(self, mouse: Mouse) -> str:
        """Encode a mouse event for the program according to the mouse modes."""
        modes = self.modes
        if not (modes.mouse_buttons or modes.mouse_drag or modes.mouse_motion or modes.mouse_sgr):
            if modes.alt_scroll and modes.smcup:
                if mouse.button == MouseButton.WHEEL_UP:
                    self._send(_ARROW_UP * _WHEEL_LINES)
                if mouse.button == MouseButton.WHEEL_DOWN:
                    self._send(_ARROW_DOWN * _WHEEL_LINES)
            return ""
        is_motion = mouse.event_type == EventType.MOTION
        if not modes.mouse_motion and is_motion and mouse.button == MouseButton.NONE:
            return ""
        if not modes.mouse_drag and is_motion:
            return ""

        button = int(mouse.button)
        col = mouse.col + 1
        row = mouse.row + 1
        if modes.mouse_sgr:
            if is_motion:
                return f"\x1b[<{button + 32};{col};{row}M"
            if mouse.event_type == EventType.PRESS:
                return f"\x1b[<{button};{col};{row}M"
            if mouse.event_type == EventType.RELEASE:
                return f"\x1b[<{button};{col};{row}m"
            return ""
        return f"\x1b[M{chr(button + 32)}{chr(32 + col)}{chr(32 + row)}"

    def draw(self, win) -> None:
        """Copy the active grid into the window, resizing to fit it first."""
        with self._lock:
            self.dirty = False
            width, height = win.size()
            if width != self.width() or height != self.height():
                self.resize(width, height)
            for row, line in enumerate(self.active_screen):
                col = 0
                while col < len(line):
                    cell = line[col]
                    character = cell.character
                    if not character.grapheme:
                        character = Character(" ", character.width)
                    win.set_cell(col, row, Cell(character, cell.style))
                    col += cell.width or 1
            if self.modes.dectcem and self._focused.is_set():
                win.show_cursor(self.cursor.col, self.cursor.row, self.cursor.shape)

    def attach(self, handler: Handler) -> None:
        """Send events from now on to handler."""
        with self._lock:
            self._handler = handler

    def detach(self) -> None:
        with self._lock:
            self._handler = _ignore

    def focus(self) -> None:
        self._focused.set()

    def blur(self) -> None:
        self._focused.clear()

    def close(self) -> None:
        """Stop the terminal; further input or output raises RuntimeError."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self.post_event(Closed(term=self))