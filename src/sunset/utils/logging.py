"""Logging setup for sunset.

Everything under the ``sunset`` logger goes to stdout and, unless
disabled, to a log file in the user's home directory.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from sunset.config.settings import LoggingConfig

# Marks handlers installed here so a second setup replaces them
_HANDLER_ATTR = "_sunset_handler"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach stdout and optional file output to the ``sunset`` logger.

    Calling it again (e.g. ``serve`` after a config reload) swaps out the
    handlers from the previous call instead of stacking duplicates.

    Args:
        config: Logging configuration. Defaults to ``LoggingConfig()``.

    Returns:
        The configured ``sunset`` logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger("sunset")

    for old in [h for h in logger.handlers if getattr(h, _HANDLER_ATTR, False)]:
        logger.removeHandler(old)
        old.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_path = Path(config.file).expanduser() if config.file else None
    if log_path is not None:
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    formatter = logging.Formatter(config.format)
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)

    level = logging.getLevelName(config.level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    logger.debug("Logging to stdout%s", f" and {log_path}" if log_path else "")
    return logger
