"""Shared brightness state and the restart cycle.

``BrightnessState`` owns the current :class:`Brightness` and the handle
of the running redshift process. Every mutation is followed by a restart
cycle: kill the old redshift, run ``light -S`` to completion, spawn a new
redshift with the updated factor.

HTTP handlers run on a worker thread pool, so all access goes through one
``threading.Lock``. A mutation and its restart cycle happen in a single
lock scope; concurrent requests are serialized rather than interleaved.
"""

from __future__ import annotations

import logging
import subprocess
import threading

from pydantic import BaseModel

from sunset.domain.models import DEFAULT_MAXIMUM, DEFAULT_MINIMUM, Brightness
from sunset.system.backlight import BacklightTool
from sunset.system.redshift import RedshiftDaemon

logger = logging.getLogger(__name__)


class StateSnapshot(BaseModel):
    value: float
    light_level: float
    redshift_factor: float
    redshift_running: bool


class BrightnessState:
    """The single mutable brightness state of the server.

    Usage::

        state = BrightnessState(BacklightTool(), RedshiftDaemon())
        state.start()
        state.change(5)
    """

    def __init__(
        self,
        backlight: BacklightTool,
        redshift: RedshiftDaemon,
        minimum: float = DEFAULT_MINIMUM,
        maximum: float = DEFAULT_MAXIMUM,
    ) -> None:
        self._backlight = backlight
        self._redshift = redshift
        self._minimum = minimum
        self._maximum = maximum
        self._lock = threading.Lock()
        self._brightness: Brightness | None = None
        self._process: subprocess.Popen | None = None

    @property
    def is_started(self) -> bool:
        return self._brightness is not None

    @property
    def value(self) -> float:
        with self._lock:
            return self._require_brightness().value

    def start(self) -> None:
        """Read the initial brightness and launch the first redshift.

        Raises:
            ExternalToolError: If either tool cannot be run. Callers treat
                this as fatal.
        """
        reading = self._backlight.read()
        brightness = Brightness.from_light_reading(
            reading, minimum=self._minimum, maximum=self._maximum
        )
        process = self._redshift.spawn(1.0)
        with self._lock:
            self._brightness = brightness
            self._process = process
        logger.info("Initial brightness value: %s", brightness)

    def set(self, value: float) -> float:
        """Set the brightness (clamped) and restart. Returns the new value."""
        with self._lock:
            brightness = self._require_brightness()
            brightness.set(value)
            self._restart_locked()
            return brightness.value

    def change(self, amount: float) -> float:
        """Shift the brightness by ``amount`` and restart. Returns the new value."""
        with self._lock:
            brightness = self._require_brightness()
            brightness.change(amount)
            self._restart_locked()
            return brightness.value

    def restart(self) -> None:
        """Re-apply the current value to both tools."""
        with self._lock:
            self._restart_locked()

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            brightness = self._require_brightness()
            return StateSnapshot(
                value=brightness.value,
                light_level=brightness.to_light_level(),
                redshift_factor=brightness.to_redshift_factor(),
                redshift_running=self._process is not None and self._process.poll() is None,
            )

    def _restart_locked(self) -> None:
        brightness = self._require_brightness()
        logger.info(
            "Restarting for brightness %s (light=%s, redshift=%s)",
            brightness,
            brightness.to_light_level(),
            brightness.to_redshift_factor(),
        )
        self._redshift.kill(self._process)
        self._process = None
        self._backlight.apply(brightness.to_light_level())
        self._process = self._redshift.spawn(brightness.to_redshift_factor())

    def _require_brightness(self) -> Brightness:
        if self._brightness is None:
            raise RuntimeError("BrightnessState.start() has not been called")
        return self._brightness
