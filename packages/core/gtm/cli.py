"""
Client for the gtm (Git Time Metric) command-line tool.

Wraps the two invocations the status display needs:
  gtm verify "<range>"          -> "true" when the installed version satisfies the range
  gtm record --status "<path>"  -> short human-readable status for the file
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import List, Optional

log = logging.getLogger(__name__)

_NO_WINDOW = subprocess.CREATE_NO_WINDOW if hasattr(subprocess, "CREATE_NO_WINDOW") else 0


class GtmError(Exception):
    """Base class for gtm setup failures."""


class GtmNotFoundError(GtmError):
    pass


class GtmVersionError(GtmError):
    def __init__(self, min_version: str) -> None:
        super().__init__(
            f"Old version of gtm is installed. Please install at least version {min_version}"
        )
        self.min_version = min_version


class GtmCli:
    """
    Thin synchronous wrapper around the gtm executable.

    Setup problems (missing executable, old version) raise GtmError from
    ensure_ready(). Per-call failures in record_status() are swallowed and
    reported as an empty status.
    """

    def __init__(self, executable: str = "gtm", timeout: Optional[float] = None) -> None:
        self._executable = executable
        self._timeout = timeout
        self._resolved_path: Optional[str] = None

    @property
    def executable(self) -> str:
        return self._resolved_path or self._executable

    def locate(self) -> Optional[str]:
        """Resolve the executable on PATH. Returns None if it cannot be found."""
        found = shutil.which(self._executable)
        if found:
            self._resolved_path = found
            log.debug(f"Detected gtm at: {found}")
        return found

    def verify(self, version_range: str) -> bool:
        """Ask gtm whether its own version satisfies version_range."""
        output = self._run_for_output(["verify", version_range])
        return "true" in output

    def ensure_ready(self, min_version: str) -> str:
        """
        Check that gtm is on PATH and at least min_version.

        Returns the resolved executable path.
        Raises GtmNotFoundError or GtmVersionError.
        """
        path = self.locate()
        if path is None:
            raise GtmNotFoundError("We couldn't find gtm executable.")
        try:
            ok = self.verify(f">= {min_version}")
        except (OSError, subprocess.SubprocessError) as e:
            raise GtmNotFoundError(f'Executable "{self._executable}" could not be started: {e}') from e
        if not ok:
            raise GtmVersionError(min_version)
        return path

    def record_status(self, path: Optional[str]) -> str:
        """
        Record activity on path and return gtm's status text.

        Returns an empty string on any failure (non-zero exit, timeout,
        OS error, empty output).
        """
        try:
            return self._run_for_output(["record", "--status", path or ""]).strip()
        except subprocess.TimeoutExpired:
            log.debug(f"gtm record timed out (>{self._timeout}s)")
            return ""
        except OSError as e:
            log.debug(f"gtm record OS error: {e}")
            return ""

    def _run_for_output(self, args: List[str]) -> str:
        cmd = [self.executable, *args]
        result = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=self._timeout,
            creationflags=_NO_WINDOW,
        )
        if result.returncode != 0:
            log.debug(f"gtm {args[0]} returned non-zero exit code: {result.returncode}")
            if result.stderr:
                log.debug(f"gtm stderr: {result.stderr[:200]}")
        return result.stdout or ""
