"""
Raster buffer primitives for Raster Forge.

A raster buffer is a Pillow image in RGBA mode. These helpers cover the
low-level operations the actions and filters are built from: allocating
truecolor canvases, clipped copies between buffers, percentage merges
and conversion to and from numpy channel arrays.

Functions:
    check_canvas_size: Validate canvas dimensions
    new_canvas: Allocate a truecolor canvas filled with one color
    to_array: Copy a buffer into an (height, width, 4) uint8 array
    from_array: Build a buffer from an (height, width, 4) array
    clip_region: Clip a copy rectangle against both buffers
    copy_region: Copy a rectangle from one buffer onto another
    merge_region: Blend a rectangle onto another buffer by percentage
"""

import logging
from typing import Any, Optional, Tuple

import numpy as np
from PIL import Image

from RF_Libs.constants import BUFFER_MODE, DEFAULT_CANVAS_COLOR, OPACITY_MAX, OPACITY_MIN
from RF_Libs.ImageLib.exceptions import AllocationError
from RF_Libs.ImageLib.image_models import RgbaColor

logger = logging.getLogger(__name__)

# (src_x, src_y, dst_x, dst_y, width, height)
Region = Tuple[int, int, int, int, int, int]


def check_canvas_size(width: int, height: int) -> None:
    """Raise AllocationError unless both sides are positive."""
    if width <= 0 or height <= 0:
        raise AllocationError(
            f"Cannot allocate a {width}x{height} canvas, both sides must be positive",
            width,
            height,
        )


def new_canvas(width: int, height: int, color: RgbaColor = DEFAULT_CANVAS_COLOR) -> Any:
    """
    Allocate a truecolor RGBA canvas.

    Args:
        width: Canvas width in pixels (> 0)
        height: Canvas height in pixels (> 0)
        color: RGBA fill color (default opaque black)

    Returns:
        A new PIL Image in RGBA mode

    Raises:
        AllocationError: If the size is not positive or the buffer
                         cannot be allocated
    """
    check_canvas_size(width, height)
    try:
        return Image.new(BUFFER_MODE, (width, height), tuple(color))
    except (MemoryError, OverflowError, ValueError) as e:
        raise AllocationError(
            f"Failed to allocate a {width}x{height} canvas: {e}", width, height
        ) from e


def to_array(buffer: Any) -> np.ndarray:
    """Return a writable (height, width, 4) uint8 copy of the buffer's channels."""
    if buffer.mode != BUFFER_MODE:
        buffer = buffer.convert(BUFFER_MODE)
    return np.array(buffer, dtype=np.uint8)


def from_array(pixels: np.ndarray) -> Any:
    """Build an RGBA buffer from an (height, width, 4) array."""
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8), BUFFER_MODE)


def clip_region(
    dst_size: Tuple[int, int],
    src_size: Tuple[int, int],
    dst_x: int,
    dst_y: int,
    src_x: int = 0,
    src_y: int = 0,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Optional[Region]:
    """
    Clip a copy rectangle so it lies inside both the source and destination.

    Args:
        dst_size: (width, height) of the destination buffer
        src_size: (width, height) of the source buffer
        dst_x, dst_y: Top-left corner on the destination (may be negative)
        src_x, src_y: Top-left corner on the source (may be negative)
        width, height: Rectangle size (default: the whole source)

    Returns:
        (src_x, src_y, dst_x, dst_y, width, height) of the visible part,
        or None if nothing overlaps
    """
    if width is None:
        width = src_size[0]
    if height is None:
        height = src_size[1]

    # Negative corners shift both rectangles and shrink the copy
    if dst_x < 0:
        src_x -= dst_x
        width += dst_x
        dst_x = 0
    if dst_y < 0:
        src_y -= dst_y
        height += dst_y
        dst_y = 0
    if src_x < 0:
        dst_x -= src_x
        width += src_x
        src_x = 0
    if src_y < 0:
        dst_y -= src_y
        height += src_y
        src_y = 0

    width = min(width, src_size[0] - src_x, dst_size[0] - dst_x)
    height = min(height, src_size[1] - src_y, dst_size[1] - dst_y)

    if width <= 0 or height <= 0:
        return None

    return src_x, src_y, dst_x, dst_y, width, height


def copy_region(
    dst: Any,
    src: Any,
    dst_x: int,
    dst_y: int,
    src_x: int = 0,
    src_y: int = 0,
    width: Optional[int] = None,
    height: Optional[int] = None,
    blend: bool = True,
) -> bool:
    """
    Copy a rectangle of src onto dst in place, clipping at both borders.

    With blend enabled the source is alpha-composited over the destination,
    so transparent source pixels let the destination show through. With
    blend disabled the channels (alpha included) are replaced as they are.

    Returns:
        True if any pixel was copied, False if the rectangles do not overlap
    """
    region = clip_region(dst.size, src.size, dst_x, dst_y, src_x, src_y, width, height)
    if region is None:
        logger.debug(f"copy_region: nothing to copy at ({dst_x}, {dst_y})")
        return False

    sx, sy, dx, dy, w, h = region
    part = src.crop((sx, sy, sx + w, sy + h))
    if part.mode != BUFFER_MODE:
        part = part.convert(BUFFER_MODE)

    if blend:
        dst.alpha_composite(part, dest=(dx, dy))
    else:
        dst.paste(part, (dx, dy))
    return True


def merge_region(dst: Any, src: Any, dst_x: int, dst_y: int, percent: int) -> bool:
    """
    Blend all of src onto dst at (dst_x, dst_y) with a percentage weight.

    Each channel becomes ``(src * percent + dst * (100 - percent)) // 100``,
    so 0 leaves the destination unchanged and 100 replaces it.

    Returns:
        True once the merge completed (also when nothing overlaps)
    """
    percent = max(OPACITY_MIN, min(OPACITY_MAX, int(percent)))
    region = clip_region(dst.size, src.size, dst_x, dst_y)
    if region is None:
        return True

    sx, sy, dx, dy, w, h = region
    dst_pixels = to_array(dst.crop((dx, dy, dx + w, dy + h))).astype(np.uint32)
    src_pixels = to_array(src.crop((sx, sy, sx + w, sy + h))).astype(np.uint32)

    merged = (src_pixels * percent + dst_pixels * (OPACITY_MAX - percent)) // OPACITY_MAX
    dst.paste(from_array(merged.astype(np.uint8)), (dx, dy))
    return True
