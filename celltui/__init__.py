"""Cell-based terminal UI toolkit: text model, windows, widgets and a virtual terminal."""

__version__ = "0.1.0"