import pytest

from celltui.term.screen import (
    DEC_SPECIAL,
    Bell,
    Charset,
    G1,
    Screen,
    TermCell,
)
from celltui.text import Attribute, Character, Color, Style


def _row(screen, row):
    return str(screen).split("\n")[row]


def test_dimensions_and_blank_text():
    screen = Screen(10, 3)
    assert screen.width() == 10
    assert screen.height() == 3
    assert str(screen) == "\n".join([" " * 10] * 3)


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        Screen(-1, 3)


def test_print_advances_cursor():
    screen = Screen(10, 3)
    screen.print("a", 1)
    screen.print("b", 1)
    assert screen.cursor.col == 2
    assert _row(screen, 0).startswith("ab")


def test_autowrap_marks_line_wrapped():
    screen = Screen(3, 2)
    for ch in "abcd":
        screen.print(ch, 1)
    assert _row(screen, 0) == "abc"
    assert _row(screen, 1).startswith("d")
    assert screen.active_screen[0][2].wrapped is True


def test_no_wrap_without_decawm_stays_on_row():
    screen = Screen(3, 2)
    screen.modes.decawm = False
    for ch in "abcd":
        screen.print(ch, 1)
    assert screen.cursor.row == 0
    assert _row(screen, 1) == "   "


def test_wide_character_fills_trailing_cell():
    screen = Screen(5, 1)
    screen.print("中", 2)
    assert screen.active_screen[0][0].grapheme == "中"
    assert screen.active_screen[0][1].grapheme == " "
    assert screen.cursor.col == 2


def test_dec_special_graphics():
    screen = Screen(5, 1)
    screen.esc("(0")
    screen.print("q", 1)
    screen.esc("(B")
    screen.print("q", 1)
    assert screen.active_screen[0][0].grapheme == DEC_SPECIAL[ord("q")]
    assert screen.active_screen[0][1].grapheme == "q"


def test_shift_out_selects_g1():
    screen = Screen(5, 1)
    screen.esc(")0")
    screen.c0(0x0E)
    assert screen.charsets.selected == G1
    screen.print("x", 1)
    assert screen.active_screen[0][0].grapheme == DEC_SPECIAL[ord("x")]


def test_bell_posts_event():
    screen = Screen(5, 1)
    screen.c0(0x07)
    assert list(screen.events) == [Bell()]


def test_carriage_return_and_linefeed():
    screen = Screen(5, 3)
    screen.print("a", 1)
    screen.print("b", 1)
    screen.c0(0x0D)
    assert screen.cursor.col == 0
    screen.c0(0x0A)
    assert screen.cursor.row == 1


def test_backspace_reverse_wraps():
    screen = Screen(5, 3)
    screen.c0(0x08)
    assert (screen.cursor.row, screen.cursor.col) == (0, 0)
    screen.index()
    screen.c0(0x08)
    assert (screen.cursor.row, screen.cursor.col) == (0, 4)


def test_tab_moves_to_first_default_stop():
    screen = Screen(20, 1)
    screen.c0(0x09)
    assert screen.cursor.col == 8


def test_custom_tab_stop():
    screen = Screen(20, 1)
    screen.tab_stops = []
    screen.cursor.col = 3
    screen.set_tab_stop()
    screen.cursor.col = 0
    screen.tab_forward(1)
    assert screen.cursor.col == 3


def test_index_at_bottom_scrolls():
    screen = Screen(3, 2)
    screen.print("a", 1)
    screen.next_line()
    screen.print("b", 1)
    screen.index()
    assert _row(screen, 0) == "b  "
    assert _row(screen, 1) == "   "
    assert screen.cursor.row == 1


def test_reverse_index_at_top_scrolls_down():
    screen = Screen(3, 2)
    screen.print("a", 1)
    screen.reverse_index()
    assert _row(screen, 0) == "   "
    assert _row(screen, 1) == "a  "


def test_scroll_round_trip_keeps_middle_lines():
    screen = Screen(2, 3)
    screen.print("x", 1)
    screen.scroll_down(1)
    screen.scroll_up(1)
    assert _row(screen, 0) == "x "


def test_save_and_restore_cursor():
    screen = Screen(10, 5)
    screen.cursor.row, screen.cursor.col = 2, 3
    screen.esc("(0")
    screen.esc("7")
    screen.cursor.row, screen.cursor.col = 4, 9
    screen.esc("(B")
    screen.esc("8")
    assert (screen.cursor.row, screen.cursor.col) == (2, 3)
    assert screen.charsets.designations[0] is Charset.DEC_SPECIAL
    assert screen.last_col is False


def test_reset_clears_content_and_modes():
    screen = Screen(4, 2)
    screen.print("z", 1)
    screen.modes.irm = True
    screen.esc("(0")
    screen.esc("c")
    assert str(screen) == "    \n    "
    assert screen.modes.irm is False
    assert screen.modes.decawm is True
    assert screen.charsets.designations[0] is Charset.ASCII


def test_keypad_modes():
    screen = Screen(4, 2)
    screen.esc("=")
    assert screen.modes.deckpam and not screen.modes.deckpnm
    screen.esc(">")
    assert screen.modes.deckpnm and not screen.modes.deckpam


def test_erase_keeps_foreground_sets_background():
    fg = Color.indexed(1)
    bg = Color.indexed(4)
    cell = TermCell(Character("a", 1), Style(foreground=fg, attribute=Attribute.BOLD))
    cell.erase(bg)
    assert cell.grapheme == ""
    assert cell.rune() == " "
    assert cell.style.foreground == fg
    assert cell.style.background == bg
    assert cell.style.attribute == Attribute.NONE


def test_resize_keeps_lines_above_cursor():
    screen = Screen(5, 3)
    for ch in "hi":
        screen.print(ch, 1)
    screen.next_line()
    screen.resize(8, 4)
    assert screen.width() == 8
    assert screen.height() == 4
    assert _row(screen, 0).startswith("hi")
    assert screen.margin.right == 7
    assert screen.margin.bottom == 3


def test_replies_collected_without_writer():
    written = []
    screen = Screen(2, 1, writer=written.append)
    screen._reply("ok")
    assert written == ["ok"]
    assert screen.replies == []