"""Backlight control through the ``light`` command-line tool.

``light`` with no arguments prints the current backlight percentage;
``light -S <percent>`` sets it.
"""

from __future__ import annotations

import logging
import subprocess

from sunset.domain.models import format_value
from sunset.system.base import ExternalToolError

logger = logging.getLogger(__name__)


class BacklightError(ExternalToolError):
    """Raised when the backlight tool cannot be run or fails."""


class BacklightTool:
    """Runs the backlight tool to completion for each call."""

    def __init__(self, command: str = "light") -> None:
        self._command = command

    @property
    def command(self) -> str:
        return self._command

    def read(self) -> float:
        """Return the current backlight percentage."""
        result = self._run([self._command])
        output = result.stdout.strip()
        logger.info("Light output: %s", output)
        try:
            return float(output)
        except ValueError as e:
            raise BacklightError(
                f"Could not parse {self._command!r} output {output!r}: {e}",
                command=self._command,
            ) from e

    def apply(self, level: float) -> None:
        """Set the backlight percentage and wait for the tool to exit."""
        self._run([self._command, "-S", format_value(level)])
        logger.debug("Backlight set to %s", format_value(level))

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        try:
            result = subprocess.run(args, capture_output=True, text=True)  # noqa: S603
        except OSError as e:
            raise BacklightError(
                f"Could not invoke {self._command!r}: {e}", command=self._command
            ) from e
        except UnicodeDecodeError as e:
            raise BacklightError(
                f"{self._command!r} produced undecodable output: {e}", command=self._command
            ) from e
        if result.returncode != 0:
            raise BacklightError(
                f"{' '.join(args)} exited with status {result.returncode}: "
                f"{result.stderr.strip()}",
                command=self._command,
            )
        return result
