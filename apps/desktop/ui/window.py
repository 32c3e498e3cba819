"""
Main window: a small tabbed text editor that reports activity to gtm.

Each editor tab forwards caret, layout, focus and save activity to the
GtmSession, which writes the status annotation into the status bar or the
window title.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QEvent, QTimer
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QTabWidget,
)

from packages.shared.config import AppConfig
from packages.shared.store import ConfigStore
from packages.core.status.session import GtmSession
from packages.core.status.types import ActivityEvent, ActivityKind

from .sinks import sink_for

log = logging.getLogger(__name__)

WINDOW_TITLE = "GtmStatus"


class EditorView(QPlainTextEdit):
    """Plain text view bound to an optional file path."""

    def __init__(self, path: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.path = path
        self._on_resize = None

    def on_resize(self, cb) -> None:
        self._on_resize = cb

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        if self._on_resize:
            self._on_resize()

    def tab_label(self) -> str:
        return Path(self.path).name if self.path else "Untitled"


class MainWindow(QMainWindow):
    """Editor window hosting the gtm status display."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        session: Optional[GtmSession] = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1000, 700)

        if config is None:
            config = ConfigStore().load()
        self.cfg = config

        self.session = session or GtmSession(self.cfg)
        self.session.on_error(self._on_session_error)
        self.session.attach_sink(*sink_for(self, self.cfg.display_target))

        self.tabs = QTabWidget()
        self.tabs.setTabsClosable(True)
        self.tabs.setDocumentMode(True)
        self.tabs.currentChanged.connect(self._on_tab_changed)
        self.tabs.tabCloseRequested.connect(self._close_tab)
        self.setCentralWidget(self.tabs)

        self._build_menu()
        self.statusBar()

    def _build_menu(self) -> None:
        file_menu = self.menuBar().addMenu("&File")

        act_new = QAction("&New", self)
        act_new.setShortcut(QKeySequence.StandardKey.New)
        act_new.triggered.connect(lambda: self.new_view())
        file_menu.addAction(act_new)

        act_open = QAction("&Open…", self)
        act_open.setShortcut(QKeySequence.StandardKey.Open)
        act_open.triggered.connect(self._open_dialog)
        file_menu.addAction(act_open)

        act_save = QAction("&Save", self)
        act_save.setShortcut(QKeySequence.StandardKey.Save)
        act_save.triggered.connect(lambda: self.save_current())
        file_menu.addAction(act_save)

        file_menu.addSeparator()
        act_quit = QAction("&Quit", self)
        act_quit.setShortcut(QKeySequence.StandardKey.Quit)
        act_quit.triggered.connect(self.close)
        file_menu.addAction(act_quit)

    # Views

    def new_view(self, path: Optional[str] = None, text: str = "") -> EditorView:
        view = EditorView(path)
        view.setPlainText(text)
        view.cursorPositionChanged.connect(lambda: self._report("CARET_MOVED", view))
        view.blockCountChanged.connect(lambda _count: self._report("LAYOUT_CHANGED", view))
        view.on_resize(lambda: self._report("LAYOUT_CHANGED", view))

        index = self.tabs.addTab(view, view.tab_label())
        self.tabs.setCurrentIndex(index)
        self._report("VIEW_OPENED", view)
        return view

    def open_path(self, path: str) -> Optional[EditorView]:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            log.warning("Failed to open %s: %s", path, e)
            QMessageBox.warning(self, WINDOW_TITLE, f"Could not open {path}:\n{e}")
            return None
        return self.new_view(str(Path(path).resolve()), text)

    def current_view(self) -> Optional[EditorView]:
        widget = self.tabs.currentWidget()
        return widget if isinstance(widget, EditorView) else None

    def save_current(self, path: Optional[str] = None) -> bool:
        view = self.current_view()
        if view is None:
            return False
        target = path or view.path
        if not target:
            target, _ = QFileDialog.getSaveFileName(self, "Save file")
            if not target:
                return False
        try:
            Path(target).write_text(view.toPlainText(), encoding="utf-8")
        except OSError as e:
            log.warning("Failed to save %s: %s", target, e)
            QMessageBox.warning(self, WINDOW_TITLE, f"Could not save {target}:\n{e}")
            return False

        view.path = str(Path(target).resolve())
        self.tabs.setTabText(self.tabs.indexOf(view), view.tab_label())
        self._report("DOCUMENT_SAVED", view)
        return True

    def _open_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open file")
        if path:
            self.open_path(path)

    def _close_tab(self, index: int) -> None:
        widget = self.tabs.widget(index)
        self.tabs.removeTab(index)
        if widget is not None:
            widget.deleteLater()

    # Activity

    def _report(self, kind: ActivityKind, view: Optional[EditorView]) -> None:
        if view is None:
            return
        self.session.handle(ActivityEvent(kind=kind, path=view.path))

    def _on_tab_changed(self, _index: int) -> None:
        self._report("FOCUS_CHANGED", self.current_view())

    def changeEvent(self, event) -> None:
        super().changeEvent(event)
        if event.type() == QEvent.Type.ActivationChange and self.isActiveWindow():
            self._report("FOCUS_CHANGED", self.current_view())

    def _on_session_error(self, msg: str) -> None:
        def handle() -> None:
            QMessageBox.critical(self, WINDOW_TITLE, msg)
        QTimer.singleShot(0, handle)
