"""
Convolution engine for the photometric filters.

Kernels are small square weight matrices applied to each pixel's
neighbourhood. Pixels beyond the border repeat the nearest edge pixel,
every channel sum is divided by the divisor, shifted by the offset,
clamped to 0-255 and truncated. Alpha is carried over unchanged.

Functions:
    kernel_divisor: Sum of all kernel weights
    convolve: Convolve the RGB channels of an (height, width, 4) array
    convolve_buffer: Convolve an RGBA buffer and return a new buffer
"""

from typing import Any, Sequence

import numpy as np

from RF_Libs.constants import CHANNEL_MAX
from RF_Libs.ImageLib.raster import from_array, to_array

Kernel = Sequence[Sequence[float]]

# Gaussian-like blur used by the unsharp mask:
#
#    1    2    1
#    2    4    2
#    1    2    1
GAUSSIAN_BLUR_KERNEL = (
    (1.0, 2.0, 1.0),
    (2.0, 4.0, 2.0),
    (1.0, 2.0, 1.0),
)
GAUSSIAN_BLUR_DIVISOR = 16.0


def kernel_divisor(kernel: Kernel) -> float:
    """Return the sum of all weights in the kernel."""
    return float(sum(sum(row) for row in kernel))


def _as_kernel(kernel: Kernel) -> np.ndarray:
    matrix = np.asarray(kernel, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] % 2 == 0:
        raise ValueError(f"kernel must be an odd square matrix, got shape {matrix.shape}")
    return matrix


def convolve(pixels: np.ndarray, kernel: Kernel, divisor: float, offset: float = 0.0) -> np.ndarray:
    """
    Convolve the RGB channels of a pixel array.

    Args:
        pixels: (height, width, 4) uint8 array
        kernel: Odd square weight matrix, rows top to bottom
        divisor: Divides every weighted sum (must not be 0)
        offset: Added after the division

    Returns:
        A new (height, width, 4) uint8 array; alpha is copied from pixels

    Raises:
        ValueError: If divisor is 0 or the kernel is not an odd square
    """
    if divisor == 0:
        raise ValueError("divisor must not be 0")

    matrix = _as_kernel(kernel)
    radius = matrix.shape[0] // 2
    height, width = pixels.shape[:2]

    rgb = pixels[..., :3].astype(np.float64)
    padded = np.pad(rgb, ((radius, radius), (radius, radius), (0, 0)), mode="edge")

    total = np.zeros_like(rgb)
    for j in range(matrix.shape[0]):
        for i in range(matrix.shape[1]):
            weight = matrix[j, i]
            if weight:
                total += weight * padded[j:j + height, i:i + width]

    total = np.clip(total / divisor + offset, 0, CHANNEL_MAX)

    result = pixels.copy()
    result[..., :3] = total.astype(np.uint8)
    return result


def convolve_buffer(buffer: Any, kernel: Kernel, divisor: float, offset: float = 0.0) -> Any:
    """Convolve an RGBA buffer, returning a new buffer of the same size."""
    return from_array(convolve(to_array(buffer), kernel, divisor, offset))
