"""Tests for application configuration and its JSON store."""

from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from packages.shared import paths
from packages.shared.config import AppConfig
from packages.shared.store import ConfigStore


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()

        assert cfg.gtm_executable == "gtm"
        assert cfg.min_version == "1.1.0"
        assert cfg.update_interval_seconds == 30.0
        assert cfg.command_timeout_seconds is None
        assert cfg.display_target == "statusbar"
        assert cfg.insertion == "prepend"

    def test_reporter_config(self) -> None:
        cfg = AppConfig(update_interval_seconds=10, label="Time", fresh_marker="!")

        assert cfg.to_reporter_config() == {
            "update_interval_seconds": 10,
            "label": "Time",
            "fresh_marker": "!",
        }

    @pytest.mark.parametrize("field, value", [
        ("update_interval_seconds", 0),
        ("command_timeout_seconds", -1),
        ("display_target", "tray"),
        ("insertion", "middle"),
    ])
    def test_rejects_invalid_values(self, field: str, value) -> None:
        with pytest.raises(ValidationError):
            AppConfig(**{field: value})


class TestPaths:
    def test_home_override(self, app_home) -> None:
        assert paths.app_data_dir() == app_home
        assert paths.log_path() == app_home / "logs" / "app.log"

    def test_appdata_fallback(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("GTM_STATUS_HOME", raising=False)
        monkeypatch.setenv("APPDATA", str(tmp_path))

        assert paths.config_path() == tmp_path / "GtmStatus" / "config.json"


class TestConfigStore:
    def test_missing_file_writes_defaults(self, app_home) -> None:
        store = ConfigStore()

        cfg = store.load()

        assert cfg == AppConfig()
        assert json.loads((app_home / "config.json").read_text(encoding="utf-8"))["gtm_executable"] == "gtm"

    def test_round_trip(self, app_home) -> None:
        store = ConfigStore()
        store.save(AppConfig(display_target="title", insertion="append"))

        cfg = store.load()

        assert cfg.display_target == "title"
        assert cfg.insertion == "append"

    @pytest.mark.parametrize("content", ["{not json", '{"insertion": "middle"}'])
    def test_invalid_file_restores_defaults(self, app_home, content: str) -> None:
        store = ConfigStore()
        (app_home / "config.json").write_text(content, encoding="utf-8")

        assert store.load() == AppConfig()
        assert json.loads((app_home / "config.json").read_text(encoding="utf-8"))["insertion"] == "prepend"

    def test_load_logs_config_location(self, app_home, caplog) -> None:
        store = ConfigStore()
        store.save(AppConfig(gtm_executable="gtm-dev"))

        with caplog.at_level(logging.INFO, logger="packages.shared.store"):
            store.load()

        assert str(app_home / "config.json") in caplog.text
        assert "gtm=gtm-dev" in caplog.text
