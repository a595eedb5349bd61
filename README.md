# celltui

A small toolkit for building terminal user interfaces out of character
cells. You draw into an in-memory `Canvas` through nested `Window` views,
and a set of ready-made widgets draws into those windows. It also includes a
virtual terminal model that takes parsed escape sequences and keeps a screen
grid, so the output of one terminal program can be shown inside a window.

## Installation

```
pip install celltui
```

To run the test suite:

```
pip install "celltui[test]"
pytest
```

## Text model

`celltui.text` holds the basic value types:

- `characters(text)` splits a string into grapheme clusters. Each one comes
  back as a `Character` that also stores its display width.
- `grapheme_width(grapheme)` gives the number of columns a cluster takes up.
- `Color` is the default colour, a palette colour (`Color.indexed(index)`)
  or a true colour (`Color.rgb(r, g, b)`); values outside 0..255 raise
  `ValueError`.
- `Style` groups foreground, background and underline colours, an
  `Attribute` flag set, an `UnderlineStyle` and hyperlink fields.
- A `Cell` is a `Character` together with a `Style`. A `Segment` is a run of
  text that shares one style. `CursorStyle` names the cursor shapes.

## Windows

```python
from celltui.text import Attribute, Segment, Style
from celltui.window import Canvas

canvas = Canvas(80, 24)
root = canvas.window()

sidebar = root.new(0, 0, 20, -1)  # negative or oversized sizes extend to the parent's edge
sidebar.print(Segment("Hello, world\n"), Segment("bold", Style(attribute=Attribute.BOLD)))
root.println(23, Segment("status line"))
root.print_truncate(22, Segment("a very long line that will be cut with an ellipsis"))
root.wrap(Segment("text wrapped between words rather than in the middle of them"))
```

- `print` wraps at the window edge and starts a new line at each newline;
  `wrap` moves whole words to the next line when they do not fit.
- `println` cuts a line off at the edge; `print_truncate` ends it with `…`.
- `fill`, `clear`, `set_cell`, `set_style` and `show_cursor` draw through the
  window into the canvas. Anything outside the window's bounds is dropped.
- `Window.origin()` gives a window's absolute position on the canvas, and
  `Canvas.cell(col, row)` reads back what was drawn there (raising
  `IndexError` outside the canvas). The canvas also records the cursor
  position, shape and visibility.

## Widgets

`celltui.widgets` contains:

- `align`: `center`, `top_left`, `top_middle`, `top_right`, `bottom_left`,
  `bottom_middle`, `bottom_right` place a child window of a given size.
- `border`: `box`, `left`, `right`, `top`, `bottom` draw rounded borders and
  give back the inner window.
- `listview.ListView`: a scrolling list of strings with one selected item
  (`down`, `up`, `home`, `end`, `page_down`, `page_up`, `set_items`, `index`).
- `scrollbar.Scrollbar`: a vertical scroll indicator.
- `pager.Pager`: a scrollable view of styled text, laid out to the window
  width.
- `progress.ProgressBar`: a progress bar drawn with eighth-block characters.
  Its `read` and `write` pass through to a binary reader or writer and count
  the bytes; a `post` callable can defer the updates to a UI loop.
- `spinner.Spinner`: cycles through frames on a background thread and passes
  a `Redraw` event to its `post_event` callable on each step.
- `textinput.TextInput`: a one-line editor with readline-style key bindings
  (`Ctrl+a`, `Ctrl+e`, `Ctrl+w`, `Ctrl+k`, `Ctrl+u`, word movement, bracketed
  paste and more), a prompt and an optional password character.
- `completion.MenuComplete` and `completion.AutoComplete`: text inputs driven
  by a completion function; `MenuComplete` cycles through completions with
  `Tab` and `Shift+Tab`.

```python
from celltui.widgets.listview import ListView

items = ListView(["alpha", "beta", "gamma"])
items.down()
items.draw(root)
```

## Input events

`celltui.events` defines `Key`, `Mouse`, `PasteStart`, `PasteEnd` and
`Redraw`, with `KeyCode`, `Modifiers`, `MouseButton` and `EventType`.
`str(key)` gives a readable name such as `"Ctrl+c"`, `"Enter"` or
`"Shift+Tab"`. Widgets pick their key bindings by that name.

## Virtual terminal

`celltui.term.terminal.Terminal` takes parsed sequences through `handle()`:
`Print`, `C0`, `Esc`, `Csi`, `Osc` and `Apc`. It updates its primary and
alternate screens, cursor, margins, tab stops, modes, character sets and
graphic rendition to match. Replies meant for the client program (device
attributes, status and mode reports, OSC 11 answers, encoded input) go to the
`writer` callable it was given, or are collected in `replies`.

Host input is passed to `update()`, which turns keys, pastes and mouse
events into xterm byte sequences (see `celltui.term.keys.encode_xterm`).
`draw(win)` resizes the grid to the window and copies it in, showing the
cursor while the terminal is focused (`focus()` / `blur()`). Events such as
`Bell`, `Title`, `Notify`, `ApcEvent`, `Redraw` and `Closed` go to the
handler set with `attach()`. OSC 52 text goes to the `clipboard` callable,
and `parse_osc8` splits a hyperlink payload into URL and id. After
`close()`, further input or output raises `RuntimeError`.

The layers it is built from are usable alone: `celltui.term.screen.Screen`
(grid, cursor, C0 and ESC handling), `celltui.term.modes.ModalScreen`
(modes and SGR) and `celltui.term.control.ControlScreen` (CSI sequences).

## What this package does not do

- It does not draw to or read from a real terminal: a `Canvas` is an
  in-memory grid, and input events have to be built by the caller.
- The virtual terminal does not start programs or open pseudo-terminals, and
  it does not parse raw bytes into sequences; it only applies sequences that
  have already been parsed.
- It has no image or sixel graphics support.