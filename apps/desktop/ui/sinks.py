"""Read/write pairs over the Qt strings the status annotation can live in."""

from __future__ import annotations

from typing import Callable, Tuple

from PySide6.QtWidgets import QMainWindow

Sink = Tuple[Callable[[], str], Callable[[str], None]]


def statusbar_sink(window: QMainWindow) -> Sink:
    bar = window.statusBar()
    return bar.currentMessage, bar.showMessage


def title_sink(window: QMainWindow) -> Sink:
    return window.windowTitle, window.setWindowTitle


def sink_for(window: QMainWindow, display_target: str) -> Sink:
    if display_target == "title":
        return title_sink(window)
    return statusbar_sink(window)
