"""
GTM status session: lifecycle plus dispatch of editor activity.

UNINITIALIZED -> READY     gtm found and recent enough
UNINITIALIZED -> DISABLED  setup failed; reported once, later events ignored
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from packages.core.gtm.cli import GtmCli, GtmError
from packages.shared.config import AppConfig

from .annotator import TitleAnnotator
from .reporter import StatusReporter
from .types import ActivityEvent, Lifecycle

log = logging.getLogger(__name__)


class GtmSession:
    """
    Owns the gtm client, the debounced reporter and the annotator for one
    host window. All calls are expected on the host's UI thread.
    """

    def __init__(
        self,
        config: AppConfig,
        cli: Optional[GtmCli] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cfg = config
        self._cli = cli or GtmCli(config.gtm_executable, timeout=config.command_timeout_seconds)
        self._reporter = StatusReporter(
            self._cli.record_status,
            config=config.to_reporter_config(),
            clock=clock,
        )
        self._annotator: Optional[TitleAnnotator] = None
        self._lifecycle: Lifecycle = "UNINITIALIZED"

        self._error_cb: Optional[Callable[[str], None]] = None

    def on_error(self, cb: Callable[[str], None]) -> None:
        self._error_cb = cb

    def attach_sink(self, read: Callable[[], str], write: Callable[[str], None]) -> None:
        self._annotator = TitleAnnotator(read, write, mode=self._cfg.insertion)

    @property
    def lifecycle(self) -> Lifecycle:
        return self._lifecycle

    def initialize(self) -> Lifecycle:
        """Locate and verify gtm. Runs once; later calls return the settled state."""
        if self._lifecycle != "UNINITIALIZED":
            return self._lifecycle

        try:
            exe = self._cli.ensure_ready(self._cfg.min_version)
        except GtmError as e:
            self._lifecycle = "DISABLED"
            log.error("gtm unavailable, status display disabled: %s", e)
            self._emit_error(str(e))
            return self._lifecycle

        self._lifecycle = "READY"
        log.info("gtm %s ready (>= %s)", exe, self._cfg.min_version)
        return self._lifecycle

    def handle(self, event: ActivityEvent) -> Optional[str]:
        """
        Feed one activity event through the reporter.

        Returns the caption written to the sink (or the display text when no
        sink is attached), or None if nothing was displayed.
        """
        if self._lifecycle == "UNINITIALIZED":
            self.initialize()
        if self._lifecycle != "READY":
            return None

        update = self._reporter.update(event.path, force_refresh=event.forces_refresh)
        if update is None:
            return None

        if self._annotator is None:
            return self._reporter.format(update)
        return self._annotator.annotate(self._reporter.annotation(update))

    def _emit_error(self, msg: str) -> None:
        if self._error_cb:
            self._error_cb(msg)
