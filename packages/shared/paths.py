from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "GtmStatus"
HOME_ENV = "GTM_STATUS_HOME"

def app_data_dir() -> Path:
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override)
    base = os.environ.get("APPDATA") or str(Path.home())
    return Path(base) / APP_NAME

def config_path() -> Path:
    return app_data_dir() / "config.json"

def logs_dir() -> Path:
    return app_data_dir() / "logs"

def log_path() -> Path:
    return logs_dir() / "app.log"

def ensure_app_dirs() -> None:
    logs_dir().mkdir(parents=True, exist_ok=True)
