"""
Color data models for Raster Forge.

Colors travel through the engine in two shapes:

- RgbaColor: a tuple of 4 integers (0-255) as stored in the raster buffer,
  where alpha 255 is fully opaque
- packed colors: a single integer laid out as
  ``(alpha << 24) | (red << 16) | (green << 8) | blue`` with the
  allocation-time alpha range 0-127, where 0 is fully opaque

Functions:
    pack_color: Build a packed color from channel values
    unpack_color: Convert a packed color to an RgbaColor
    alpha_to_buffer: Map a 0-127 alpha to the 0-255 buffer range
"""

from typing import Tuple

from RF_Libs.constants import (
    CHANNEL_MAX,
    PACKED_ALPHA_OPAQUE,
    PACKED_ALPHA_TRANSPARENT,
)
from RF_Libs.ImageLib.exceptions import InvalidOptionsError

RgbaColor = Tuple[int, int, int, int]


def _check_range(name: str, value: int, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOptionsError(f"{name} must be an integer, got {type(value).__name__}", name)
    if not (0 <= value <= upper):
        raise InvalidOptionsError(f"{name} must be 0-{upper}, got {value}", name)
    return value


def pack_color(red: int, green: int, blue: int, alpha: int = PACKED_ALPHA_OPAQUE) -> int:
    """
    Build a packed color identifier.

    Args:
        red: Red channel (0-255)
        green: Green channel (0-255)
        blue: Blue channel (0-255)
        alpha: 0-127, 0 means opaque, 127 is fully transparent

    Returns:
        The packed integer color

    Raises:
        InvalidOptionsError: If any channel is out of range
    """
    _check_range("red", red, CHANNEL_MAX)
    _check_range("green", green, CHANNEL_MAX)
    _check_range("blue", blue, CHANNEL_MAX)
    _check_range("alpha", alpha, PACKED_ALPHA_TRANSPARENT)
    return (alpha << 24) | (red << 16) | (green << 8) | blue


def alpha_to_buffer(alpha: int) -> int:
    """Map a packed alpha (0 opaque .. 127 transparent) to buffer alpha (255 .. 0)."""
    alpha = max(PACKED_ALPHA_OPAQUE, min(PACKED_ALPHA_TRANSPARENT, alpha))
    return round((PACKED_ALPHA_TRANSPARENT - alpha) * CHANNEL_MAX / PACKED_ALPHA_TRANSPARENT)


def unpack_color(color: int) -> RgbaColor:
    """
    Convert a packed color into an RGBA tuple for the raster buffer.

    Args:
        color: Packed integer color

    Returns:
        (red, green, blue, alpha) with alpha in the 0-255 buffer range

    Raises:
        InvalidOptionsError: If color is not an integer
    """
    if isinstance(color, bool) or not isinstance(color, int):
        raise InvalidOptionsError(f"Packed color must be an integer, got {type(color).__name__}", "color")

    alpha = (color >> 24) & 0x7F
    red = (color >> 16) & 0xFF
    green = (color >> 8) & 0xFF
    blue = color & 0xFF
    return (red, green, blue, alpha_to_buffer(alpha))
