"""Wrappers around the external tools sunset drives.

Public API:
    BacklightTool -- reads and sets the backlight via ``light``
    RedshiftDaemon -- spawns and kills ``redshift`` processes
    ExternalToolError -- base error for both
"""

from sunset.system.backlight import BacklightError, BacklightTool
from sunset.system.base import ExternalToolError
from sunset.system.redshift import RedshiftDaemon, RedshiftError

__all__ = [
    "BacklightError",
    "BacklightTool",
    "ExternalToolError",
    "RedshiftDaemon",
    "RedshiftError",
]
