"""A spinner that advances through frames on a background timer."""

from __future__ import annotations

import threading
from collections.abc import Callable

from celltui.events import Redraw
from celltui.text import Cell, Character, Style
from celltui.window import Window

DEFAULT_FRAMES = "-\\|/"


class Spinner:
    """Cycles through frames every ``duration`` seconds while spinning.

    Each frame change is announced by passing a Redraw event to ``post_event``.
    """

    def __init__(
        self,
        duration: float,
        post_event: Callable[[object], None] | None = None,
        frames: str = DEFAULT_FRAMES,
        style: Style | None = None,
    ) -> None:
        self.duration = duration
        self.frames = frames
        self.style = style if style is not None else Style()
        self._post = post_event if post_event is not None else (lambda event: None)
        self._lock = threading.Lock()
        self._frame = 0
        self._spinning = False
        self._stopped: threading.Event | None = None

    @property
    def spinning(self) -> bool:
        with self._lock:
            return self._spinning

    def draw(self, win: Window) -> None:
        with self._lock:
            if self._spinning:
                char = Character(self.frames[self._frame], 1)
                win.set_cell(0, 0, Cell(char, self.style))

    def start(self) -> None:
        """Start spinning; does nothing if already spinning."""
        with self._lock:
            self._start()

    def stop(self) -> None:
        with self._lock:
            self._stop()

    def toggle(self) -> None:
        with self._lock:
            if self._spinning:
                self._stop()
            else:
                self._start()

    def _start(self) -> None:
        if self._spinning:
            return
        if not self.frames:
            self.frames = DEFAULT_FRAMES
        stopped = threading.Event()
        self._stopped = stopped
        self._spinning = True
        thread = threading.Thread(target=self._run, args=(stopped,), daemon=True)
        thread.start()

    def _stop(self) -> None:
        if self._stopped is not None:
            self._stopped.set()
            self._stopped = None
        self._spinning = False

    def _run(self, stopped: threading.Event) -> None:
        while not stopped.wait(self.duration):
            with self._lock:
                if stopped.is_set():
                    return
                self._frame = (self._frame + 1) % len(self.frames)
            self._post(Redraw())