"""
Constants and configuration values for Raster Forge.

This module centralizes all constant values, magic numbers, and
default settings used throughout the transformation engine.
"""

# Raster buffer constants
BUFFER_MODE = "RGBA"
CHANNEL_MAX = 255
ALPHA_OPAQUE = 255

# Packed color alpha range (0 = opaque, 127 = transparent)
PACKED_ALPHA_OPAQUE = 0
PACKED_ALPHA_TRANSPARENT = 127

# Default color for blank canvases and rotate backgrounds (opaque black)
DEFAULT_CANVAS_COLOR = (0, 0, 0, ALPHA_OPAQUE)
DEFAULT_BACKGROUND_COLOR = 0

# Supported file formats
JPEG_EXTENSIONS = {".jpg", ".jpeg"}
PNG_EXTENSIONS = {".png"}
SUPPORTED_EXTENSIONS = JPEG_EXTENSIONS | PNG_EXTENSIONS

# Format names as understood by Pillow
FORMAT_JPEG = "JPEG"
FORMAT_PNG = "PNG"

# Encoding defaults
DEFAULT_JPEG_QUALITY = 98
PNG_COMPRESSION_MIN = 0
PNG_COMPRESSION_MAX = 9
PNG_DEFAULT_COMPRESSION = 6

# EXIF
EXIF_ORIENTATION = "Orientation"

# Crop anchors, same layout as Photoshop
#
#    1    2    3
#    4    5    6
#    7    8    9
ANCHOR_LEFT_TOP = 1
ANCHOR_MIDDLE_TOP = 2
ANCHOR_RIGHT_TOP = 3
ANCHOR_LEFT_MIDDLE = 4
ANCHOR_MIDDLE_MIDDLE = 5
ANCHOR_RIGHT_MIDDLE = 6
ANCHOR_LEFT_BOTTOM = 7
ANCHOR_MIDDLE_BOTTOM = 8
ANCHOR_RIGHT_BOTTOM = 9
DEFAULT_ANCHOR = ANCHOR_MIDDLE_MIDDLE

# Copy opacity range (percent)
OPACITY_MIN = 0
OPACITY_MAX = 100

# Unsharp mask calibration
UNSHARP_AMOUNT_MAX = 500.0
UNSHARP_AMOUNT_SCALE = 0.016
UNSHARP_RADIUS_MAX = 50.0
UNSHARP_RADIUS_SCALE = 2.0
UNSHARP_THRESHOLD_MAX = 255
