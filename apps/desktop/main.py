import logging
import os
import signal
import sys
from PySide6.QtWidgets import QApplication

from packages.shared.paths import ensure_app_dirs, log_path
from packages.shared.store import ConfigStore
from packages.core.logging_ import setup_logging
from .ui.window import MainWindow

log = logging.getLogger(__name__)


def main() -> None:
    ensure_app_dirs()
    setup_logging(debug=bool(os.environ.get("GTM_STATUS_DEBUG")))
    log.info("GtmStatus starting, logging to %s", log_path())

    app = QApplication(sys.argv)
    win = MainWindow(config=ConfigStore().load())
    # Files named on the command line open as tabs; Qt has already removed its own options
    for path in app.arguments()[1:]:
        win.open_path(path)
    win.show()

    # Qt swallows Ctrl+C on Unix unless we close the window ourselves
    def signal_handler(sig, frame):
        log.info("Received interrupt signal, closing window")
        win.close()

    if hasattr(signal, 'SIGINT'):
        signal.signal(signal.SIGINT, signal_handler)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
