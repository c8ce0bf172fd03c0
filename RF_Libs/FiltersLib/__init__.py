"""
FiltersLib - Convolution-based filters

Provides the convolution engine plus the sharpen and unsharp-mask filters.
"""

from RF_Libs.FiltersLib.convolution import convolve, convolve_buffer, kernel_divisor
from RF_Libs.FiltersLib.sharpen_filter import SharpenFilter, SharpenOptions, SHARPEN_KERNELS
from RF_Libs.FiltersLib.unsharp_mask_filter import UnsharpMaskFilter, UnsharpMaskOptions

__all__ = [
    "convolve",
    "convolve_buffer",
    "kernel_divisor",
    "SharpenFilter",
    "SharpenOptions",
    "SHARPEN_KERNELS",
    "UnsharpMaskFilter",
    "UnsharpMaskOptions",
]
