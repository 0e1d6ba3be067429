"""sunset -- HTTP control surface for display brightness and color temperature.

Drives the backlight through the ``light`` CLI and the screen color
temperature through a ``redshift`` process that is replaced whenever the
brightness changes. A single brightness scale from 10 to 200 covers both:
the upper half dims the backlight, the lower half dims via redshift.
"""

__version__ = "0.1.0"
