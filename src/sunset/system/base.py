"""Shared error type for external tool invocations."""

from __future__ import annotations


class ExternalToolError(Exception):
    """Raised when an external command cannot be run or fails."""

    def __init__(self, message: str, command: str = "") -> None:
        super().__init__(message)
        self.command = command
