"""Shared pytest fixtures."""

from __future__ import annotations

import os
from typing import List, Optional

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGtm:
    """Stands in for GtmCli; records every status request."""

    def __init__(self, statuses: Optional[List[str]] = None, ready: bool = True) -> None:
        self.statuses = list(statuses or ["1h"])
        self.calls: List[Optional[str]] = []
        self.ready = ready
        self.ensure_calls = 0

    def ensure_ready(self, min_version: str) -> str:
        from packages.core.gtm.cli import GtmNotFoundError

        self.ensure_calls += 1
        if not self.ready:
            raise GtmNotFoundError("We couldn't find gtm executable.")
        return "/usr/local/bin/gtm"

    def record_status(self, path: Optional[str]) -> str:
        self.calls.append(path)
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_gtm() -> FakeGtm:
    return FakeGtm()


@pytest.fixture
def app_home(tmp_path, monkeypatch):
    monkeypatch.setenv("GTM_STATUS_HOME", str(tmp_path / "home"))
    return tmp_path / "home"
