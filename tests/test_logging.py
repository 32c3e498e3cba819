from __future__ import annotations

import contextlib
import logging

from packages.core.logging_ import setup_logging


@contextlib.contextmanager
def _bare_root_logger():
    # pytest attaches its own capture handlers during the call phase
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
        logging.getLogger("packages.core.gtm.cli").setLevel(logging.NOTSET)


def test_setup_logging_writes_rotating_file(app_home) -> None:
    with _bare_root_logger() as root:
        setup_logging()

        logging.getLogger("packages.core.status.session").info("gtm ready")
        for handler in root.handlers:
            handler.flush()

        log_text = (app_home / "logs" / "app.log").read_text(encoding="utf-8")
        assert log_text.strip().endswith("gtm ready")
        assert logging.getLogger("packages.core.gtm.cli").level == logging.WARNING


def test_setup_logging_is_idempotent(app_home) -> None:
    with _bare_root_logger() as root:
        setup_logging()
        setup_logging()

        assert len(root.handlers) == 2


def test_debug_mode_enables_gtm_detail(app_home) -> None:
    with _bare_root_logger() as root:
        setup_logging(debug=True)

        assert root.level == logging.DEBUG
        assert logging.getLogger("packages.core.gtm.cli").level == logging.DEBUG
