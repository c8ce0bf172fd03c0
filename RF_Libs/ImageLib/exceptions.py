"""Custom exceptions for the transformation engine.

Operations raise these for malformed input and failed allocations.
Soft no-ops are reported through the boolean result instead.
"""


class ImageError(Exception):
    """Base exception for all image-related errors."""


class InvalidOptionsError(ImageError, ValueError):
    """Raised when a required option is missing or has the wrong type."""

    def __init__(self, message: str, option: str = "") -> None:
        """Initialize with the offending option name.

        Args:
            message: Error message
            option: Name of the option that failed validation
        """
        super().__init__(message)
        self.option = option


class AllocationError(ImageError, MemoryError):
    """Raised when a raster buffer of the requested size cannot be created."""

    def __init__(self, message: str, width: int = 0, height: int = 0) -> None:
        """Initialize with the requested dimensions.

        Args:
            message: Error message
            width: Requested buffer width
            height: Requested buffer height
        """
        super().__init__(message)
        self.width = width
        self.height = height


class DecodeError(ImageError, OSError):
    """Raised when a source is missing, unreadable or not a supported format."""
