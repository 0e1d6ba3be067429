"""Core domain model for sunset.

A single brightness scalar drives two outputs. Above the neutral point
(100) the excess is the backlight percentage and redshift runs at full
brightness. At or below it the backlight sits at its floor and redshift
dims the picture by ``value / 100``.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, model_validator

# Brightness value where the backlight hands over to redshift dimming
NEUTRAL = 100.0
# Lowest backlight percentage ever requested from ``light``
LIGHT_FLOOR = 0.10673

DEFAULT_MINIMUM = 10.0
DEFAULT_MAXIMUM = 200.0


class Brightness(BaseModel):
    """Mutable brightness value, clamped to ``[minimum, maximum]``.

    Example::

        b = Brightness(value=150)
        b.to_light_level()      # 50.0
        b.to_redshift_factor()  # 1.0
        b.change(-100)
        b.to_light_level()      # 0.10673
        b.to_redshift_factor()  # 0.5
    """

    value: float = Field(description="Current brightness on the 10-200 scale")
    minimum: float = Field(default=DEFAULT_MINIMUM)
    maximum: float = Field(default=DEFAULT_MAXIMUM)

    @model_validator(mode="after")
    def _clamp_initial(self) -> Brightness:
        self.value = self._clamp(self.value)
        return self

    @classmethod
    def from_light_reading(
        cls,
        reading: float,
        minimum: float = DEFAULT_MINIMUM,
        maximum: float = DEFAULT_MAXIMUM,
    ) -> Brightness:
        """Build the value from a backlight percentage reported by ``light``."""
        return cls(value=reading + NEUTRAL, minimum=minimum, maximum=maximum)

    def set(self, value: float) -> None:
        self.value = self._clamp(value)

    def change(self, amount: float) -> None:
        self.set(self.value + amount)

    def to_light_level(self) -> float:
        """Backlight percentage to pass to ``light -S``."""
        if self.value < NEUTRAL + LIGHT_FLOOR:
            return LIGHT_FLOOR
        return self.value - NEUTRAL

    def to_redshift_factor(self) -> float:
        """Brightness blend factor to pass to ``redshift -b``."""
        if self.value > NEUTRAL:
            return 1.0
        return self.value / NEUTRAL

    def _clamp(self, value: float) -> float:
        value = float(value)
        if math.isnan(value):
            return self.minimum
        return max(self.minimum, min(self.maximum, value))

    def __str__(self) -> str:
        return format_value(self.value)


def format_value(value: float) -> str:
    """Render a float the way the CLI tools expect it.

    Integral values drop the trailing ``.0`` (``150``), everything else
    uses the shortest round-tripping repr (``152.5``).
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
