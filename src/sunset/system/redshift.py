"""Color temperature through a long-running ``redshift`` process.

redshift is never reconfigured in place: every change spawns a fresh
one-shot-mode process (``-O``) and the previous one is killed first.
"""

from __future__ import annotations

import logging
import subprocess

from sunset.domain.models import format_value
from sunset.system.base import ExternalToolError

logger = logging.getLogger(__name__)


class RedshiftError(ExternalToolError):
    """Raised when the redshift process cannot be spawned."""


class RedshiftDaemon:
    """Spawns redshift processes and kills them on a best-effort basis."""

    def __init__(
        self,
        command: str = "redshift",
        method: str = "wayland",
        temperature: int = 6500,
    ) -> None:
        self._command = command
        self._method = method
        self._temperature = temperature

    @property
    def command(self) -> str:
        return self._command

    def build_args(self, factor: float) -> list[str]:
        return [
            self._command,
            "-m", self._method,
            "-O", str(self._temperature),
            "-b", format_value(factor),
        ]

    def spawn(self, factor: float) -> subprocess.Popen:
        """Start redshift with the given brightness factor."""
        args = self.build_args(factor)
        try:
            process = subprocess.Popen(args)  # noqa: S603
        except OSError as e:
            raise RedshiftError(
                f"Could not launch {self._command!r}: {e}", command=self._command
            ) from e
        logger.debug("Started %s (pid=%d)", " ".join(args), process.pid)
        return process

    def kill(self, process: subprocess.Popen | None) -> None:
        """Kill and reap ``process``. Failures are logged, never raised."""
        if process is None:
            return
        try:
            process.kill()
            process.wait()
        except OSError as e:
            logger.warning("Could not kill redshift process: %s", e)
            return
        logger.debug("Killed redshift process (pid=%d)", process.pid)
