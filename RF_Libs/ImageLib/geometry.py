"""
Pure geometry helpers for crop placement and resize scaling.

Functions:
    round_half_away: Round to the nearest integer, halves away from zero
    normalize_anchor: Clamp an anchor value to the 1-9 grid
    anchor_offset: Offset of the original along one axis for an anchor
    crop_offsets: (x, y) placement of the original inside the crop canvas
    scale_factor: Uniform factor fitting a size inside a bounding box
    fit_dimensions: Target size after aspect-ratio-preserving scaling
"""

import math
from typing import Tuple

from RF_Libs.constants import (
    ANCHOR_LEFT_TOP,
    ANCHOR_RIGHT_BOTTOM,
    DEFAULT_ANCHOR,
)

# Column of each anchor in the 3x3 grid: 0 = near edge, 1 = middle, 2 = far edge
_NEAR, _MIDDLE, _FAR = 0, 1, 2


def round_half_away(value: float) -> int:
    """
    Round a number to the nearest integer with halves rounded away from zero.

    Python's round() rounds halves to even, which would shift centered
    crops and rounded sizes by one pixel for some inputs.

    Example:
        >>> round_half_away(2.5)
        3
        >>> round_half_away(-2.5)
        -3
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def normalize_anchor(anchor: int) -> int:
    """Return anchor if it lies in 1-9, else the center anchor."""
    if ANCHOR_LEFT_TOP <= anchor <= ANCHOR_RIGHT_BOTTOM:
        return anchor
    return DEFAULT_ANCHOR


def _anchor_column(anchor: int) -> int:
    return (normalize_anchor(anchor) - 1) % 3


def _anchor_row(anchor: int) -> int:
    return (normalize_anchor(anchor) - 1) // 3


def anchor_offset(original: int, target: int, position: int) -> int:
    """
    Calculate where the original starts along one axis of the new canvas.

    Args:
        original: Original length along the axis
        target: New canvas length along the axis
        position: 0 for the near edge, 1 for the middle, 2 for the far edge

    Returns:
        Offset in pixels; negative when the original is clipped
    """
    if position == _NEAR:
        return 0
    if position == _MIDDLE:
        return round_half_away((target - original) / 2)
    if position == _FAR:
        return target - original
    raise ValueError(f"position must be 0, 1 or 2, got {position}")


def crop_offsets(
    original_size: Tuple[int, int],
    target_size: Tuple[int, int],
    anchor: int = DEFAULT_ANCHOR,
) -> Tuple[int, int]:
    """
    Calculate the placement of the original image inside a crop canvas.

    Args:
        original_size: (width, height) of the current image
        target_size: (width, height) of the crop canvas
        anchor: Anchor on the 3x3 grid (1-9, anything else means 5)

    Returns:
        (x, y) offset of the original's top-left corner on the canvas
    """
    x = anchor_offset(original_size[0], target_size[0], _anchor_column(anchor))
    y = anchor_offset(original_size[1], target_size[1], _anchor_row(anchor))
    return x, y


def scale_factor(original_size: Tuple[int, int], target_size: Tuple[int, int]) -> float:
    """Largest uniform factor that keeps original_size within target_size."""
    original_width, original_height = original_size
    if original_width <= 0 or original_height <= 0:
        raise ValueError(f"original size must be positive, got {original_size}")
    return min(target_size[0] / original_width, target_size[1] / original_height)


def fit_dimensions(original_size: Tuple[int, int], target_size: Tuple[int, int]) -> Tuple[int, int]:
    """
    Scale original_size by a single factor so it fits inside target_size.

    Width and height are rounded independently, so the result may drift
    from the exact aspect ratio by a fraction of a pixel.

    Example:
        >>> fit_dimensions((400, 300), (200, 200))
        (200, 150)
    """
    factor = scale_factor(original_size, target_size)
    return (
        round_half_away(original_size[0] * factor),
        round_half_away(original_size[1] * factor),
    )
