"""RGB color values.

Channels are floats with a nominal [0, 1] range. Additive lighting can push
them above 1.0; clamping happens only when a color is encoded for output.
"""

from __future__ import annotations

import math

from phongtracer.core.tuples import approx_equal


class Color:
    """An RGB color triple.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    __slots__ = ("red", "green", "blue")

    def __init__(self, red: float, green: float, blue: float) -> None:
        self.red = float(red)
        self.green = float(green)
        self.blue = float(blue)

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the Hadamard (component-wise) product
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        s = float(other)
        return Color(self.red * s, self.green * s, self.blue * s)

    def __rmul__(self, scalar: float) -> Color:
        return self * scalar

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            approx_equal(self.red, other.red)
            and approx_equal(self.green, other.green)
            and approx_equal(self.blue, other.blue)
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        return iter((self.red, self.green, self.blue))

    def to_rgb255(self) -> tuple[int, int, int]:
        """Encode each channel as an integer in [0, 255].

        Channels are scaled by 256 and clamped, so 1.0 and above map to 255
        and 0.5 maps to 128.
        """
        return (_to255(self.red), _to255(self.green), _to255(self.blue))

    def __repr__(self) -> str:
        return f"Color({self.red}, {self.green}, {self.blue})"


def _to255(channel: float) -> int:
    if math.isnan(channel):
        return 0
    return int(min(max(channel * 256.0, 0.0), 255.0))


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
