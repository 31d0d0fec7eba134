"""RGB color value type and byte conversion.

Colors are linear floating-point triples; each channel is nominally in
[0, 1]. Conversion to 8-bit output truncates ``c * 255.999`` after clamping,
so 0.0 maps to 0 and 1.0 maps to 255.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

# Scale used when quantizing [0, 1] to [0, 255]; slightly below 256 so that
# 1.0 truncates to 255
BYTE_SCALE = 255.999


@dataclass(frozen=True)
class Color:
    """An RGB color.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float
    g: float
    b: float

    def __add__(self, other: object) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: object) -> Color:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Color(self.r * other, self.g * other, self.b * other)

    def __rmul__(self, other: object) -> Color:
        return self.__mul__(other)

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def color_to_byte(channel: float) -> int:
    """Quantize a single color channel to an 8-bit value.

    Args:
        channel: The channel value, nominally in [0, 1].

    Returns:
        An integer in [0, 255]. Values below 0 map to 0, values above 1 map
        to 255, and NaN maps to 0.
    """
    if math.isnan(channel):
        return 0
    clamped = min(max(channel, 0.0), 1.0)
    return min(max(int(clamped * BYTE_SCALE), 0), 255)


def color_to_pixel(color: Color) -> tuple[int, int, int]:
    """Quantize a color to an (r, g, b) byte triple."""
    return (color_to_byte(color.r), color_to_byte(color.g), color_to_byte(color.b))
