from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from packages.shared.config import AppConfig
from packages.shared.paths import config_path, ensure_app_dirs

log = logging.getLogger(__name__)


class ConfigStore:
    """AppConfig persisted as JSON under the app data dir."""

    def __init__(self) -> None:
        ensure_app_dirs()
        self._path = config_path()

    def load(self) -> AppConfig:
        if not self._path.exists():
            log.info("No config at %s, writing defaults", self._path)
            return self._restore_defaults()

        try:
            data: Any = json.loads(self._path.read_text(encoding="utf-8"))
            cfg = AppConfig.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            log.warning("Invalid config at %s (%s), restoring defaults", self._path, e)
            return self._restore_defaults()

        log.info(
            "Loaded config from %s (gtm=%s, target=%s)",
            self._path, cfg.gtm_executable, cfg.display_target,
        )
        return cfg

    def save(self, cfg: AppConfig) -> None:
        self._path.write_text(cfg.model_dump_json(indent=2), encoding="utf-8")

    def _restore_defaults(self) -> AppConfig:
        cfg = AppConfig()
        self.save(cfg)
        return cfg
