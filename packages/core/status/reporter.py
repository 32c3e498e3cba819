"""
Debounced status reporter.

Editor activity arrives many times per second (every caret move, every layout
pass). Asking gtm for a fresh status is a blocking subprocess call, so the
reporter only refreshes when one of these holds:

  - the caller forces it (document saved)
  - the update interval has elapsed since the previous update
  - the file path changed since the last refresh

Otherwise the last status text is replayed without calling gtm.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .types import DebounceState, StatusUpdate

log = logging.getLogger(__name__)

StatusSource = Callable[[Optional[str]], str]


@dataclass
class ReporterConfig:
    update_interval_seconds: float
    label: str
    fresh_marker: str


class StatusReporter:
    def __init__(
        self,
        status_source: StatusSource,
        config: Optional[dict] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = status_source
        self._cfg = self._parse_config(config or {})
        self._clock = clock
        self._state = DebounceState()

    @staticmethod
    def _parse_config(config: dict) -> ReporterConfig:
        return ReporterConfig(
            update_interval_seconds=config.get("update_interval_seconds", 30.0),
            label=config.get("label", "GTM"),
            fresh_marker=config.get("fresh_marker", "*"),
        )

    def get_state(self) -> DebounceState:
        return replace(self._state)

    def _should_refresh(self, path: Optional[str], force_refresh: bool, now: float) -> bool:
        if force_refresh:
            return True
        last = self._state.last_update_time
        if last is None or now - last >= self._cfg.update_interval_seconds:
            return True
        return path != self._state.last_path

    def update(self, path: Optional[str], force_refresh: bool = False) -> Optional[StatusUpdate]:
        """
        Returns the status to display, or None when there is nothing to show
        (gtm printed nothing, or the cached status is blank).
        """
        now = self._clock()
        fresh = self._should_refresh(path, force_refresh, now)
        if fresh:
            self._state.last_status_text = self._source(path).strip()
            self._state.last_path = path
            log.debug("Refreshed gtm status for %r (forced=%s)", path, force_refresh)
        self._state.last_update_time = now

        text = self._state.last_status_text
        if not text or not text.strip():
            return None
        return StatusUpdate(text=text, fresh=fresh)

    def format(self, update: StatusUpdate) -> str:
        return update.display(self._cfg.label, self._cfg.fresh_marker)

    def annotation(self, update: StatusUpdate) -> str:
        return update.annotation(self._cfg.label, self._cfg.fresh_marker)
