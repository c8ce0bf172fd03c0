"""
Sharpen the image with a fixed 3x3 convolution kernel.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from RF_Libs.ActionsLib.operation import Filter, OperationOptions
from RF_Libs.FiltersLib.convolution import convolve_buffer, kernel_divisor
from RF_Libs.ImageLib.exceptions import InvalidOptionsError

logger = logging.getLogger(__name__)

TYPE_NORMAL = "normal"
TYPE_SMOOTH = "smooth"

SHARPEN_KERNELS = {
    TYPE_NORMAL: (
        (0.0, -1.0, 0.0),
        (-1.0, 5.0, -1.0),
        (0.0, -1.0, 0.0),
    ),
    TYPE_SMOOTH: (
        (-1.0, -1.0, -1.0),
        (-1.0, 16.0, -1.0),
        (-1.0, -1.0, -1.0),
    ),
}

# Numeric aliases
_TYPE_CODES = {0: TYPE_NORMAL, 1: TYPE_SMOOTH}


@dataclass(frozen=True)
class SharpenOptions(OperationOptions):
    """Options for SharpenFilter.

    Attributes:
        type: 'normal' or 'smooth' (default: 'smooth')
    """
    type: str = TYPE_SMOOTH

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SharpenOptions":
        value = data.get(SharpenFilter.OPTION_TYPE)
        if value is None:
            return cls()

        if isinstance(value, str) and value.strip().lower() in SHARPEN_KERNELS:
            return cls(type=value.strip().lower())

        if isinstance(value, int) and not isinstance(value, bool) and value in _TYPE_CODES:
            return cls(type=_TYPE_CODES[value])

        raise InvalidOptionsError(
            f"Unknown sharpen type: {value!r}. Valid types: normal, smooth",
            SharpenFilter.OPTION_TYPE,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {SharpenFilter.OPTION_TYPE: self.type}


class SharpenFilter(Filter):
    """Sharpen filter with a normal and a smooth kernel."""

    OPTION_TYPE = "type"

    TYPE_NORMAL = 0
    TYPE_SMOOTH = 1

    options_class = SharpenOptions

    def process(self, image: Any, options: SharpenOptions) -> bool:
        """Convolve the image with the selected kernel. Always returns True."""
        kernel = SHARPEN_KERNELS[options.type]
        divisor = kernel_divisor(kernel)

        image.set_buffer(convolve_buffer(image.get_buffer(), kernel, divisor, 0))
        logger.debug(f"Sharpened with {options.type} kernel, divisor {divisor}")
        return True
