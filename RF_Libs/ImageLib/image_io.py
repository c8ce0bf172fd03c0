"""
File decoding, encoding and EXIF extraction for Raster Forge.

The transformation engine never touches files directly; these functions
are the collaborators the Image entity delegates to.

Functions:
    get_supported_formats: List of supported file extensions
    is_supported_format: Check a path's extension
    format_from_hint: Resolve an extension or format name to a Pillow format
    decode_file: Decode a JPEG or PNG file into an RGBA buffer
    decode_bytes: Decode in-memory JPEG or PNG data into an RGBA buffer
    read_exif_tags: Read EXIF tags as a name -> value mapping (never raises)
    encode_jpeg: Encode a buffer as JPEG bytes
    encode_png: Encode a buffer as PNG bytes
"""

import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from PIL import ExifTags, Image

from RF_Libs.constants import (
    BUFFER_MODE,
    DEFAULT_JPEG_QUALITY,
    FORMAT_JPEG,
    FORMAT_PNG,
    JPEG_EXTENSIONS,
    PNG_COMPRESSION_MAX,
    PNG_COMPRESSION_MIN,
    PNG_DEFAULT_COMPRESSION,
    PNG_EXTENSIONS,
    SUPPORTED_EXTENSIONS,
)
from RF_Libs.ImageLib.exceptions import DecodeError, InvalidOptionsError

logger = logging.getLogger(__name__)

# A source reference is either a file path or the encoded bytes themselves
SourceRef = Union[str, Path, bytes]


def get_supported_formats() -> List[str]:
    """
    Get list of supported file extensions.

    Returns:
        Sorted list of extensions (e.g., ['.jpeg', '.jpg', '.png'])
    """
    return sorted(SUPPORTED_EXTENSIONS)


def is_supported_format(file_path: Union[str, Path]) -> bool:
    """Check if a file path has a supported extension."""
    return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS


def format_from_hint(hint: str) -> str:
    """
    Resolve a format hint to a Pillow format name.

    Args:
        hint: An extension ('.jpg', 'png') or a format name ('JPEG')

    Returns:
        'JPEG' or 'PNG'

    Raises:
        DecodeError: If the hint names an unsupported format
    """
    normalized = str(hint).strip().lower()
    if not normalized.startswith("."):
        normalized = f".{normalized}"

    if normalized in JPEG_EXTENSIONS:
        return FORMAT_JPEG
    if normalized in PNG_EXTENSIONS:
        return FORMAT_PNG

    raise DecodeError(
        f'There is no implemented loading function for "{hint}". '
        f"Supported types: jpg, jpeg, png."
    )


def _decode(stream: Any, expected_format: Optional[str], label: str) -> Any:
    try:
        with Image.open(stream) as img:
            img.load()
            actual_format = img.format
            buffer = img.convert(BUFFER_MODE)
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Failed to decode image from {label}: {e}") from e

    if actual_format not in (FORMAT_JPEG, FORMAT_PNG):
        raise DecodeError(f"Unsupported image format {actual_format} in {label}")

    if expected_format is not None and actual_format != expected_format:
        raise DecodeError(
            f"Expected {expected_format} data in {label}, found {actual_format}"
        )

    logger.debug(f"Decoded {actual_format} {buffer.width}x{buffer.height} from {label}")
    return buffer


def decode_file(file_path: Union[str, Path]) -> Any:
    """
    Decode a JPEG or PNG file into an RGBA buffer.

    The decoder is chosen from the file extension.

    Args:
        file_path: Path to the image file

    Returns:
        PIL Image in RGBA mode

    Raises:
        DecodeError: If the file is missing, has an unsupported extension
                     or does not contain a valid image of that format
    """
    path = Path(file_path)
    if not path.is_file():
        raise DecodeError(f'The image was not found or is not readable: "{path}"')

    expected_format = format_from_hint(path.suffix)
    return _decode(path, expected_format, str(path))


def decode_bytes(data: bytes, format_hint: Optional[str] = None) -> Any:
    """
    Decode in-memory JPEG or PNG data into an RGBA buffer.

    Args:
        data: Encoded image bytes
        format_hint: Optional extension or format name the data must match

    Returns:
        PIL Image in RGBA mode

    Raises:
        DecodeError: If the data is empty or not a supported image
    """
    if not data:
        raise DecodeError("Cannot decode an empty byte string")

    expected_format = format_from_hint(format_hint) if format_hint else None
    return _decode(io.BytesIO(data), expected_format, "bytes")


def read_exif_tags(source: Optional[SourceRef]) -> Dict[str, Any]:
    """
    Read the EXIF tags of an encoded image.

    Tags from the base IFD and the Exif sub-IFD are merged and keyed by
    their EXIF names ('Orientation', 'Make', ...). Unknown numeric tags
    are keyed by their number as a string.

    Args:
        source: File path or encoded bytes (None yields no tags)

    Returns:
        Mapping of tag name to value; empty if there is no source or the
        metadata cannot be read
    """
    if source is None or source == "" or source == b"":
        return {}

    stream = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        with Image.open(stream) as img:
            exif = img.getexif()
            raw_tags = dict(exif)
            raw_tags.update(exif.get_ifd(ExifTags.IFD.Exif))
    except Exception as e:
        logger.debug(f"No EXIF data available: {e}")
        return {}

    return {
        ExifTags.TAGS.get(tag, str(tag)): value
        for tag, value in raw_tags.items()
    }


def encode_jpeg(buffer: Any, quality: int = DEFAULT_JPEG_QUALITY, progressive: bool = False) -> bytes:
    """
    Encode a buffer as JPEG.

    The alpha channel is dropped.

    Args:
        buffer: PIL Image to encode
        quality: Quality between 0 and 100
        progressive: Write a progressive (interlaced) JPEG

    Returns:
        The encoded bytes

    Raises:
        InvalidOptionsError: If quality is not an integer in 0-100
    """
    if isinstance(quality, bool) or not isinstance(quality, int) or not (0 <= quality <= 100):
        raise InvalidOptionsError(f"quality must be an integer 0-100, got {quality!r}", "quality")

    out = io.BytesIO()
    buffer.convert("RGB").save(out, format=FORMAT_JPEG, quality=quality, progressive=bool(progressive))
    return out.getvalue()


def encode_png(buffer: Any, compression: Optional[int] = None, preserve_alpha: bool = True) -> bytes:
    """
    Encode a buffer as PNG.

    Args:
        buffer: PIL Image to encode
        compression: zlib level 0-9, or None for the default level
        preserve_alpha: Keep the alpha channel (False writes plain RGB)

    Returns:
        The encoded bytes

    Raises:
        InvalidOptionsError: If compression is outside 0-9
    """
    if compression is None:
        compression = PNG_DEFAULT_COMPRESSION
    if (
        isinstance(compression, bool)
        or not isinstance(compression, int)
        or not (PNG_COMPRESSION_MIN <= compression <= PNG_COMPRESSION_MAX)
    ):
        raise InvalidOptionsError(
            f"compression must be an integer 0-9 or None, got {compression!r}", "compression"
        )

    image = buffer.convert(BUFFER_MODE if preserve_alpha else "RGB")
    out = io.BytesIO()
    image.save(out, format=FORMAT_PNG, compress_level=compression)
    return out.getvalue()
