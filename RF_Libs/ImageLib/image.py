"""
Image entity for Raster Forge.

An Image owns exactly one RGBA raster buffer and optionally remembers the
source it was decoded from, which is only used to look up EXIF metadata.
Every action and filter mutates the Image by installing a new buffer or
editing the current one in place.

Example:
    >>> image = Image.from_file("photo.jpg")
    >>> image.apply_action(ResizeAction(), {"width": 800, "height": 600})
    True
    >>> image.apply_filter(SharpenFilter(), {"type": "normal"})
    True
    >>> image.set_interlace(True).save_as_jpeg("photo_small.jpg")
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from RF_Libs.constants import (
    BUFFER_MODE,
    DEFAULT_JPEG_QUALITY,
    FORMAT_JPEG,
    PACKED_ALPHA_OPAQUE,
)
from RF_Libs.ImageLib import image_io
from RF_Libs.ImageLib.image_io import SourceRef
from RF_Libs.ImageLib.image_models import pack_color
from RF_Libs.ImageLib.raster import new_canvas

logger = logging.getLogger(__name__)


class Image:
    """
    Represents an image buffer and where it came from.

    Attributes:
        source: File path or encoded bytes the image was decoded from
                (None for blank canvases)
        interlace: Progressive-encoding hint used when saving as JPEG
    """

    def __init__(self, buffer: Any, source: Optional[SourceRef] = None):
        """
        Wrap an existing buffer. See the from_* and create_* constructors.

        Args:
            buffer: PIL Image (converted to RGBA if needed)
            source: Optional file path or encoded bytes for metadata lookup
        """
        self._buffer = None
        self.set_buffer(buffer)
        self.source = source
        self.interlace = False

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "Image":
        """
        Create an image from a JPEG or PNG file.

        The decoder is chosen from the file extension. JPEG images are
        rotated according to their EXIF orientation right after loading.

        Raises:
            DecodeError: If the file is missing or cannot be decoded
        """
        path = Path(file_path)
        buffer = image_io.decode_file(path)
        image = cls(buffer, path)

        if image_io.format_from_hint(path.suffix) == FORMAT_JPEG:
            image._adjust_orientation()

        return image

    @classmethod
    def from_bytes(cls, data: bytes, format_hint: Optional[str] = None) -> "Image":
        """
        Create an image from encoded JPEG or PNG bytes.

        The bytes are kept as the source so EXIF metadata stays readable.

        Raises:
            DecodeError: If the data cannot be decoded
        """
        buffer = image_io.decode_bytes(data, format_hint)
        image = cls(buffer, bytes(data))

        if cls._is_jpeg(data):
            image._adjust_orientation()

        return image

    @classmethod
    def create_true_color(cls, width: int, height: int) -> "Image":
        """
        Create a new blank image (opaque black).

        Raises:
            AllocationError: If the buffer cannot be allocated
        """
        return cls(new_canvas(width, height))

    @staticmethod
    def allocate_color(
        image: "Image",
        red: int,
        green: int,
        blue: int,
        alpha: int = PACKED_ALPHA_OPAQUE,
    ) -> int:
        """
        Create a packed color for use with this image.

        Args:
            image: The image the color is meant for
            red, green, blue: Channels 0-255
            alpha: 0-127, 0 means opaque, 127 is fully transparent

        Returns:
            A packed color identifier

        Raises:
            InvalidOptionsError: If a channel is out of range
        """
        return pack_color(red, green, blue, alpha)

    @staticmethod
    def _is_jpeg(data: bytes) -> bool:
        return data[:3] == b"\xff\xd8\xff"

    def _adjust_orientation(self) -> bool:
        from RF_Libs.ActionsLib.orientation_action import AdjustOrientationByExifAction

        return self.apply_action(AdjustOrientationByExifAction())

    # ------------------------------------------------------------------
    # Buffer access
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        """Width of the image in pixels."""
        return self._buffer.width

    @property
    def height(self) -> int:
        """Height of the image in pixels."""
        return self._buffer.height

    @property
    def size(self):
        return self._buffer.size

    def get_buffer(self) -> Any:
        """Return the internal RGBA buffer."""
        return self._buffer

    def set_buffer(self, buffer: Any) -> "Image":
        """
        Install a new buffer, discarding the previous one.

        Raises:
            TypeError: If buffer is not a PIL Image
        """
        if not hasattr(buffer, "mode") or not hasattr(buffer, "size"):
            raise TypeError(f"Expected PIL Image, got {type(buffer)}")

        if buffer.mode != BUFFER_MODE:
            buffer = buffer.convert(BUFFER_MODE)

        self._buffer = buffer
        return self

    def copy(self) -> "Image":
        """Return an independent image with a copy of the buffer."""
        duplicate = Image(self._buffer.copy(), self.source)
        duplicate.interlace = self.interlace
        return duplicate

    def set_interlace(self, enabled: bool) -> "Image":
        """Enable interlace. When saving as JPEG, the image is written progressive."""
        self.interlace = bool(enabled)
        return self

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def read_metadata(self) -> Dict[str, Any]:
        """
        Return the EXIF data of the source, when existing.

        The source is read again on every call. Missing or broken metadata
        yields an empty mapping.
        """
        return image_io.read_exif_tags(self.source)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def apply_filter(self, image_filter: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
        """Apply a filter to the image and return its result."""
        return self._apply(image_filter, options)

    def apply_action(self, action: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
        """Process an action on the image and return its result."""
        return self._apply(action, options)

    def _apply(self, operation: Any, options: Optional[Mapping[str, Any]]) -> bool:
        if not callable(getattr(operation, "apply", None)):
            raise TypeError(f"Expected an operation with apply(), got {type(operation)}")

        result = operation.apply(self, options)
        logger.debug(
            f"{type(operation).__name__} -> {result} ({self.width}x{self.height})"
        )
        return result

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def to_jpeg_bytes(self, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
        """Encode as JPEG, progressive when interlace is enabled."""
        return image_io.encode_jpeg(self._buffer, quality, self.interlace)

    def to_png_bytes(self, compression: Optional[int] = None, preserve_alpha: bool = True) -> bytes:
        """Encode as PNG."""
        return image_io.encode_png(self._buffer, compression, preserve_alpha)

    def save_as_jpeg(self, target_path: Union[str, Path], quality: int = DEFAULT_JPEG_QUALITY) -> Path:
        """
        Save the image as JPEG.

        Args:
            target_path: Output file path
            quality: Quality between 0 and 100

        Returns:
            The path written

        Raises:
            InvalidOptionsError: If quality is out of range
            OSError: If the file cannot be written
        """
        path = Path(target_path)
        path.write_bytes(self.to_jpeg_bytes(quality))
        return path

    def save_as_png(
        self,
        target_path: Union[str, Path],
        compression: Optional[int] = None,
        preserve_alpha: bool = True,
    ) -> Path:
        """
        Save the image as PNG.

        Args:
            target_path: Output file path
            compression: zlib level 0-9, or None for the default
            preserve_alpha: Keep the alpha channel

        Returns:
            The path written
        """
        path = Path(target_path)
        path.write_bytes(self.to_png_bytes(compression, preserve_alpha))
        return path

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height}, source={self.source!r:.60})"
