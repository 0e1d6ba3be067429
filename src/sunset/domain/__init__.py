"""Domain models for sunset.

Holds the brightness value object and the derivations that turn it into
the two external control signals.
"""

from sunset.domain.models import Brightness, format_value

__all__ = ["Brightness", "format_value"]
