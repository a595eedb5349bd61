import base64
import threading

import pytest

from celltui.events import EventType, Key, Mouse, MouseButton, PasteEnd, PasteStart, Redraw
from celltui.term.screen import ApcEvent, Bell, Closed, Notify, Title
from celltui.term.terminal import (
    Apc,
    C0,
    Csi,
    Esc,
    Osc,
    Print,
    Terminal,
    parse_osc8,
)


class FakeWindow:
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.cells = {}
        self.cursor = None

    def size(self):
        return self.width, self.height

    def set_cell(self, col, row, cell):
        self.cells[(col, row)] = cell

    def show_cursor(self, col, row, style):
        self.cursor = (col, row)


def make(width=10, height=3, **kwargs):
    kwargs.setdefault("redraw_delay", None)
    term = Terminal(width, height, **kwargs)
    events = []
    term.attach(events.append)
    return term, events


def print_text(term, text):
    for ch in text:
        term.handle(Print(ch, 1))


def test_print_shows_text():
    term, _ = make(5, 2)
    print_text(term, "hi")
    lines = str(term).split("\n")
    assert lines[0].startswith("hi")
    assert len(lines) == 2
    assert all(len(line) == 5 for line in lines)


def test_cursor_position_report():
    term, _ = make()
    print_text(term, "ab")
    term.handle(Csi("n", [[6]]))
    assert term.replies == ["\x1b[1;3R"]


def test_writer_receives_replies():
    sent = []
    term = Terminal(10, 3, writer=sent.append, redraw_delay=None)
    term.handle(Csi("n", [[5]]))
    assert sent == ["\x1b[0n"]
    assert term.replies == []


def test_osc_title():
    term, events = make()
    term.handle(Osc("2;hello"))
    assert events == [Title("hello")]


def test_osc_without_separator_ignored():
    term, events = make()
    term.handle(Osc("2"))
    assert events == []


def test_osc8_sets_hyperlink():
    term, _ = make()
    term.handle(Osc("8;id=x;http://example.com"))
    assert term.cursor.style.hyperlink == "http://example.com"
    assert term.cursor.style.hyperlink_params == "id=x"


def test_osc8_disabled():
    term, _ = make(osc8=False)
    term.handle(Osc("8;;http://example.com"))
    assert term.cursor.style.hyperlink == ""


def test_parse_osc8():
    assert parse_osc8("id=abc:foo=bar;http://example.com") == ("http://example.com", "abc")
    assert parse_osc8("no separator") == ("", "")
    assert parse_osc8(";http://example.com") == ("http://example.com", "")


def test_osc9_notify():
    term, events = make()
    term.handle(Osc("9;done"))
    assert events == [Notify(body="done")]


def test_osc777_notify():
    term, events = make()
    term.handle(Osc("777;notify;build;finished"))
    assert events == [Notify(title="build", body="finished")]


def test_osc52_clipboard():
    copied = []
    term, _ = make(clipboard=copied.append)
    payload = base64.b64encode("copied text".encode()).decode()
    term.handle(Osc(f"52;c;{payload}"))
    assert copied == ["copied text"]


def test_osc52_invalid_base64():
    copied = []
    term, _ = make(clipboard=copied.append)
    term.handle(Osc("52;c;@@@"))
    assert copied == []


def test_osc11_background_query():
    term, _ = make(background=lambda: (0x12, 0x34, 0x56))
    term.handle(Osc("11;?"))
    assert term.replies == ["\x1b]11;rgb:12/34/56\x07"]


def test_osc11_without_background_source():
    term, _ = make()
    term.handle(Osc("11;?"))
    assert term.replies == []


def test_apc_event():
    term, events = make()
    term.handle(Apc("payload"))
    assert events == [ApcEvent(payload="payload")]


def test_bell():
    term, events = make()
    term.handle(C0(0x07))
    assert events == [Bell()]


def test_esc_reset_clears_screen():
    term, _ = make(5, 2)
    print_text(term, "abc")
    term.handle(Esc("c"))
    assert str(term) == "\n".join([" " * 5] * 2)
    assert (term.cursor.row, term.cursor.col) == (0, 0)


def test_unknown_sequence_raises():
    term, _ = make()
    with pytest.raises(TypeError):
        term.handle("text")


def test_key_update_writes_text():
    term, _ = make()
    term.update(Key(keycode=ord("a"), text="a"))
    assert term.replies == ["a"]


def test_paste_brackets_only_in_paste_mode():
    term, _ = make()
    term.update(PasteStart())
    assert term.replies == []
    term.handle(Csi("h", [[2004]], "?"))
    term.update(PasteStart())
    term.update(PasteEnd())
    assert term.replies == ["\x1b[200~", "\x1b[201~"]


def test_mouse_sgr_press_and_release():
    term, _ = make()
    term.handle(Csi("h", [[1000], [1006]], "?"))
    press = Mouse(button=MouseButton(0), col=4, row=2, event_type=EventType.PRESS)
    release = Mouse(button=MouseButton(0), col=4, row=2, event_type=EventType.RELEASE)
    assert term.handle_mouse(press) == "\x1b[<0;5;3M"
    assert term.handle_mouse(release) == "\x1b[<0;5;3m"


def test_mouse_legacy_encoding():
    term, _ = make()
    term.handle(Csi("h", [[1000]], "?"))
    press = Mouse(button=MouseButton(0), col=0, row=0, event_type=EventType.PRESS)
    term.update(press)
    assert term.replies == ["\x1b[M !!"]


def test_mouse_motion_ignored_without_motion_mode():
    term, _ = make()
    term.handle(Csi("h", [[1000]], "?"))
    motion = Mouse(button=MouseButton.NONE, col=1, row=1, event_type=EventType.MOTION)
    assert term.handle_mouse(motion) == ""


def test_mouse_without_modes_reports_nothing():
    term, _ = make()
    press = Mouse(button=MouseButton(0), col=1, row=1, event_type=EventType.PRESS)
    assert term.handle_mouse(press) == ""
    assert term.replies == []


def test_alt_scroll_sends_arrows():
    term, _ = make()
    term.handle(Csi("h", [[1049]], "?"))
    wheel = Mouse(button=MouseButton.WHEEL_UP, col=0, row=0, event_type=EventType.PRESS)
    assert term.handle_mouse(wheel) == ""
    assert "".join(term.replies) == "\x1bOA" * 3


def test_draw_copies_cells():
    term, _ = make(3, 1)
    term.handle(Print("a", 1))
    win = FakeWindow(3, 1)
    term.draw(win)
    assert win.cells[(0, 0)].grapheme == "a"
    assert win.cells[(1, 0)].grapheme == " "
    assert len(win.cells) == 3
    assert win.cursor is None


def test_draw_shows_cursor_when_focused():
    term, _ = make(3, 1)
    term.handle(Print("a", 1))
    term.focus()
    win = FakeWindow(3, 1)
    term.draw(win)
    assert win.cursor == (term.cursor.col, term.cursor.row)
    term.blur()
    other = FakeWindow(3, 1)
    term.draw(other)
    assert other.cursor is None


def test_draw_resizes_to_window():
    term, _ = make(3, 1)
    term.draw(FakeWindow(6, 4))
    assert (term.width(), term.height()) == (6, 4)


def test_draw_clears_dirty():
    term, _ = make(3, 1)
    term.handle(Print("a", 1))
    assert term.dirty
    term.draw(FakeWindow(3, 1))
    assert not term.dirty


def test_detach_stops_events():
    term, events = make()
    term.detach()
    term.handle(C0(0x07))
    assert events == []


def test_redraw_event_after_change():
    term = Terminal(5, 2, redraw_delay=0)
    arrived = threading.Event()
    seen = []

    def handler(event):
        seen.append(event)
        if isinstance(event, Redraw):
            arrived.set()

    term.attach(handler)
    term.handle(Print("x", 1))
    arrived.wait(2)
    redraws = [event for event in seen if isinstance(event, Redraw)]
    assert redraws == [Redraw()]
    assert str(term).startswith("x")
    term.close()


def test_close_posts_event_and_rejects_input():
    term, events = make()
    term.close()
    assert term.closed
    assert events == [Closed(term=term)]
    with pytest.raises(RuntimeError):
        term.handle(Print("a", 1))
    with pytest.raises(RuntimeError):
        term.update(PasteStart())