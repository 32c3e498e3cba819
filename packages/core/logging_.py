from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from packages.shared.paths import log_path, ensure_app_dirs


def setup_logging(debug: bool = False) -> None:
    ensure_app_dirs()
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    fh = RotatingFileHandler(str(log_path()), maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Per-call subprocess output only in debug mode
    gtm_logger = logging.getLogger("packages.core.gtm.cli")
    gtm_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
