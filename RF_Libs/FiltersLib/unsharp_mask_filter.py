"""
Unsharp mask filter.

Unsharp masking is a traditional darkroom technique that has proven very
suitable for digital imaging. A blurred copy of the image is compared to
the original; the difference between the two is greatest near sharp edges,
and adding a multiple of it back to the original accentuates those edges.

Parameters are calibrated to Photoshop's dialog:

- amount: how much of the effect you want, 100 is 'normal' (typically 50-200)
- radius: radius of the blurring circle of the mask (typically 0.5-1)
- threshold: least difference between original and mask that gets
  sharpened, so low-contrast areas such as skin or sky are left alone
  (typically 0-5)

Example:
    >>> image.apply_filter(UnsharpMaskFilter(), {"amount": 80, "radius": 0.5, "threshold": 3})
    True
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

import numpy as np

from RF_Libs.constants import (
    CHANNEL_MAX,
    UNSHARP_AMOUNT_MAX,
    UNSHARP_AMOUNT_SCALE,
    UNSHARP_RADIUS_MAX,
    UNSHARP_RADIUS_SCALE,
    UNSHARP_THRESHOLD_MAX,
)
from RF_Libs.ActionsLib.operation import Filter, OperationOptions, as_float, as_int, require_options
from RF_Libs.FiltersLib.convolution import GAUSSIAN_BLUR_DIVISOR, GAUSSIAN_BLUR_KERNEL, convolve
from RF_Libs.ImageLib.exceptions import AllocationError
from RF_Libs.ImageLib.geometry import round_half_away
from RF_Libs.ImageLib.raster import from_array, to_array

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnsharpMaskOptions(OperationOptions):
    """Options for UnsharpMaskFilter.

    Attributes:
        amount: Strength, 0-500 (larger values are clamped)
        radius: Mask radius, 0-50 (larger values are clamped)
        threshold: Minimum channel difference to sharpen, 0-255 (clamped)
    """
    amount: float
    radius: float
    threshold: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnsharpMaskOptions":
        require_options(
            data,
            [
                UnsharpMaskFilter.OPTION_AMOUNT,
                UnsharpMaskFilter.OPTION_RADIUS,
                UnsharpMaskFilter.OPTION_THRESHOLD,
            ],
        )
        return cls(
            amount=as_float(data[UnsharpMaskFilter.OPTION_AMOUNT], UnsharpMaskFilter.OPTION_AMOUNT),
            radius=as_float(data[UnsharpMaskFilter.OPTION_RADIUS], UnsharpMaskFilter.OPTION_RADIUS),
            threshold=as_int(data[UnsharpMaskFilter.OPTION_THRESHOLD], UnsharpMaskFilter.OPTION_THRESHOLD),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            UnsharpMaskFilter.OPTION_AMOUNT: self.amount,
            UnsharpMaskFilter.OPTION_RADIUS: self.radius,
            UnsharpMaskFilter.OPTION_THRESHOLD: self.threshold,
        }


def calibrate(amount: float, radius: float, threshold: int) -> Tuple[float, int, int]:
    """
    Map user parameters to the values the mask works with.

    Returns:
        (amount factor, integer radius, threshold)

    Example:
        >>> calibrate(100, 0.5, 3)
        (1.6, 1, 3)
    """
    amount = min(amount, UNSHARP_AMOUNT_MAX) * UNSHARP_AMOUNT_SCALE
    radius = min(radius, UNSHARP_RADIUS_MAX) * UNSHARP_RADIUS_SCALE
    threshold = min(threshold, UNSHARP_THRESHOLD_MAX)

    # Only integers make sense
    radius = abs(round_half_away(radius))
    return amount, radius, threshold


def sharpen_against_blur(
    pixels: np.ndarray,
    blurred: np.ndarray,
    amount: float,
    threshold: int,
) -> np.ndarray:
    """
    Push every channel away from its blurred value.

    Each RGB channel becomes ``clamp(original + amount * (original - blurred))``.
    With a positive threshold a channel is only rewritten when its own
    difference reaches the threshold. Alpha is left unchanged.

    Args:
        pixels: Original (height, width, 4) uint8 array
        blurred: Blurred (height, width, 4) uint8 array of the same shape
        amount: Calibrated amount factor
        threshold: Calibrated threshold (0 rewrites every channel)

    Returns:
        A new (height, width, 4) uint8 array
    """
    original = pixels[..., :3].astype(np.float64)
    diff = original - blurred[..., :3].astype(np.float64)
    sharpened = np.clip(original + amount * diff, 0, CHANNEL_MAX).astype(np.uint8)

    result = pixels.copy()
    if threshold > 0:
        # When the masked pixels differ less from the original than the
        # threshold specifies, they keep their original value
        result[..., :3] = np.where(np.abs(diff) >= threshold, sharpened, pixels[..., :3])
    else:
        result[..., :3] = sharpened
    return result


class UnsharpMaskFilter(Filter):
    """Photoshop-style unsharp mask."""

    OPTION_AMOUNT = "amount"
    OPTION_RADIUS = "radius"
    OPTION_THRESHOLD = "threshold"

    options_class = UnsharpMaskOptions

    def process(self, image: Any, options: UnsharpMaskOptions) -> bool:
        """
        Sharpen the image.

        Returns:
            False if the calibrated radius is 0, else True

        Raises:
            AllocationError: If the blurred copy cannot be created
        """
        amount, radius, threshold = calibrate(options.amount, options.radius, options.threshold)
        if radius == 0:
            logger.debug("Unsharp mask radius rounds to 0, nothing to do")
            return False

        try:
            pixels = to_array(image.get_buffer())
            blurred = convolve(pixels, GAUSSIAN_BLUR_KERNEL, GAUSSIAN_BLUR_DIVISOR, 0)
            result = sharpen_against_blur(pixels, blurred, amount, threshold)
        except MemoryError as e:
            raise AllocationError(
                f"Failed to allocate unsharp mask buffers for {image.width}x{image.height}: {e}",
                image.width,
                image.height,
            ) from e

        image.set_buffer(from_array(result))
        logger.debug(
            f"Unsharp mask amount={amount:.3f} radius={radius} threshold={threshold}"
        )
        return True
