import pytest

from celltui.term.control import ControlScreen
from celltui.text import Attribute, CursorStyle


def write(screen, text):
    for ch in text:
        screen.print(ch, 1)


def row_text(screen, row):
    return str(screen).split("\n")[row]


def write_lines(screen, lines):
    for number, line in enumerate(lines):
        screen.cursor_position([[number + 1], [1]])
        write(screen, line)


@pytest.fixture
def screen():
    return ControlScreen(10, 5)


def test_primary_device_attributes(screen):
    screen.csi("c", [])
    assert screen.replies == ["\x1b[?62;4;22c"]


def test_secondary_device_attributes(screen):
    screen.csi(">c", [])
    assert screen.replies == ["\x1b[>1;0;0c"]


def test_status_report_ok(screen):
    screen.csi("n", [[5]])
    assert screen.replies == ["\x1b[0n"]


def test_cursor_position_report_round_trips(screen):
    screen.csi("H", [[3], [7]])
    screen.csi("n", [[6]])
    assert screen.replies == [f"\x1b[{3};{7}R"]


def test_cursor_position_clamps_to_screen(screen):
    screen.cursor_position([[100], [100]])
    assert (screen.cursor.row, screen.cursor.col) == (screen.height() - 1, screen.width() - 1)


def test_cursor_position_without_params_homes(screen):
    screen.cursor_position([[3], [3]])
    screen.csi("f", [])
    assert (screen.cursor.row, screen.cursor.col) == (0, 0)


def test_cursor_up_stops_at_top(screen):
    screen.cursor_position([[4], [1]])
    screen.csi("A", [[50]])
    assert screen.cursor.row == screen.margin.top


def test_cursor_down_stops_at_bottom_margin(screen):
    screen.csi("B", [[50]])
    assert screen.cursor.row == screen.margin.bottom


def test_cursor_forward_and_backward_clamp(screen):
    screen.csi("C", [[50]])
    assert screen.cursor.col == screen.margin.right
    screen.csi("D", [[50]])
    assert screen.cursor.col == screen.margin.left


def test_column_and_line_absolute(screen):
    screen.csi("G", [[4]])
    assert screen.cursor.col == 4 - 1
    screen.csi("d", [[2]])
    assert screen.cursor.row == 2 - 1
    screen.csi("`", [[99]])
    assert screen.cursor.col == screen.width() - 1


def test_erase_display_all(screen):
    write_lines(screen, ["hello", "world"])
    screen.erase_display(2)
    assert str(screen).strip() == ""


def test_erase_display_below_keeps_text_before_cursor(screen):
    write(screen, "hello")
    screen.cursor_position([[1], [3]])
    screen.erase_display(0)
    assert row_text(screen, 0).rstrip() == "hello"[:2]


def test_erase_display_above_includes_cursor(screen):
    write(screen, "hello")
    screen.cursor_position([[1], [3]])
    screen.erase_display(1)
    assert row_text(screen, 0).strip() == "hello"[3:]


def test_erase_line_to_end(screen):
    write(screen, "hello")
    screen.cursor_position([[1], [3]])
    screen.erase_line(0)
    assert row_text(screen, 0).rstrip() == "hello"[:2]


def test_erase_whole_line(screen):
    write_lines(screen, ["abc", "def"])
    screen.cursor_position([[1], [2]])
    screen.erase_line(2)
    assert row_text(screen, 0).strip() == ""
    assert row_text(screen, 1).rstrip() == "def"


def test_insert_blanks_shifts_right(screen):
    write(screen, "abc")
    screen.cursor_position([[1], [1]])
    screen.insert_blanks(2)
    assert row_text(screen, 0).rstrip() == "  abc"
    assert screen.cursor.col == 0


def test_delete_chars_shifts_left(screen):
    text = "abcdef"
    write(screen, text)
    screen.cursor_position([[1], [2]])
    screen.delete_chars(2)
    assert row_text(screen, 0).rstrip() == text[:1] + text[3:]


def test_erase_chars_leaves_rest(screen):
    text = "abcdef"
    write(screen, text)
    screen.cursor_position([[1], [1]])
    screen.erase_chars(3)
    assert row_text(screen, 0).rstrip() == " " * 3 + text[3:]


def test_insert_lines(screen):
    write_lines(screen, ["a", "b", "c"])
    screen.cursor_position([[2], [1]])
    screen.insert_lines(1)
    rows = [row_text(screen, r).strip() for r in range(screen.height())]
    assert rows == ["a", "", "b", "c", ""]
    assert screen.cursor.col == screen.margin.left


def test_delete_lines(screen):
    write_lines(screen, ["a", "b", "c"])
    screen.cursor_position([[1], [1]])
    screen.delete_lines(1)
    rows = [row_text(screen, r).strip() for r in range(screen.height())]
    assert rows == ["b", "c", "", "", ""]


def test_clear_all_tabs(screen):
    screen.clear_tabs(3)
    assert screen.tab_stops == []


def test_clear_tab_at_cursor(screen):
    stops = list(screen.tab_stops)
    screen.cursor.col = stops[0]
    screen.clear_tabs(0)
    assert screen.tab_stops == stops[1:]


def test_tab_backward_from_beyond_last_stop():
    wide = ControlScreen(400, 2)
    wide.cursor.col = 399
    wide.tab_backward(1)
    assert wide.cursor.col == wide.tab_stops[-1]


def test_tab_forward_via_csi(screen):
    screen.csi("I", [])
    assert screen.cursor.col == screen.tab_stops[0]


def test_repeat_previous_character(screen):
    write(screen, "x")
    screen.repeat(3)
    assert row_text(screen, 0).rstrip() == "x" * 4


def test_repeat_at_first_column_does_nothing(screen):
    screen.repeat(3)
    assert str(screen).strip() == ""


def test_set_margins(screen):
    screen.cursor_position([[3], [3]])
    screen.set_margins([[2], [4]])
    assert (screen.margin.top, screen.margin.bottom) == (2 - 1, 4 - 1)
    assert (screen.cursor.row, screen.cursor.col) == (0, 0)


def test_invalid_margins_are_ignored(screen):
    before = (screen.margin.top, screen.margin.bottom)
    screen.set_margins([[4], [2]])
    assert (screen.margin.top, screen.margin.bottom) == before


def test_scroll_up_via_csi(screen):
    write_lines(screen, ["a", "b"])
    screen.csi("S", [])
    assert row_text(screen, 0).strip() == "b"


def test_xterm_mouse_highlight_is_ignored(screen):
    write_lines(screen, ["a", "b"])
    before = str(screen)
    screen.csi("T", [[1], [1], [1], [1], [1]])
    assert str(screen) == before


def test_sgr_via_csi(screen):
    screen.csi("m", [[1]])
    assert screen.cursor.style.attribute == Attribute.BOLD
    screen.csi("m", [[0]])
    assert screen.cursor.style.attribute == Attribute(0)


def test_private_modes_via_csi(screen):
    screen.csi("?h", [[1]])
    assert screen.modes.decckm is True
    screen.csi("?l", [[1]])
    assert screen.modes.decckm is False


def test_cursor_shape(screen):
    screen.csi(" q", [[2]])
    assert screen.cursor.shape is CursorStyle.BLOCK


def test_mode_report_via_csi(screen):
    screen.csi("?$p", [[7]])
    assert screen.replies == ["\x1b[?7;1$y"]


def test_save_and_restore_cursor(screen):
    screen.cursor_position([[3], [4]])
    screen.csi("s", [])
    screen.cursor_position([[1], [1]])
    screen.csi("u", [])
    assert (screen.cursor.row, screen.cursor.col) == (3 - 1, 4 - 1)