"""
ImageLib - Image entity and raster primitives

This module provides the Image entity, color helpers, the geometry
engine, raster buffer primitives and the file collaborators
for the Raster Forge project.
"""

from RF_Libs.ImageLib.exceptions import (
    ImageError,
    InvalidOptionsError,
    AllocationError,
    DecodeError,
)
from RF_Libs.ImageLib.image_models import RgbaColor, pack_color, unpack_color
from RF_Libs.ImageLib.image import Image

__all__ = [
    "ImageError",
    "InvalidOptionsError",
    "AllocationError",
    "DecodeError",
    "RgbaColor",
    "pack_color",
    "unpack_color",
    "Image",
]
