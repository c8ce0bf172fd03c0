"""
Resize the image to a maximum size.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from PIL import Image as PILImage

from RF_Libs.ActionsLib.operation import Action, OperationOptions, as_bool, as_int, require_options
from RF_Libs.ImageLib.exceptions import AllocationError
from RF_Libs.ImageLib.geometry import fit_dimensions
from RF_Libs.ImageLib.raster import check_canvas_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResizeOptions(OperationOptions):
    """Options for ResizeAction.

    Attributes:
        width: Target (or maximum, with keep_aspect_ratio) width
        height: Target (or maximum, with keep_aspect_ratio) height
        keep_aspect_ratio: Fit inside width x height instead of stretching
    """
    width: int
    height: int
    keep_aspect_ratio: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResizeOptions":
        require_options(data, [ResizeAction.OPTION_WIDTH, ResizeAction.OPTION_HEIGHT])
        keep = data.get(ResizeAction.OPTION_KEEP_ASPECT_RATIO)
        return cls(
            width=as_int(data[ResizeAction.OPTION_WIDTH], ResizeAction.OPTION_WIDTH),
            height=as_int(data[ResizeAction.OPTION_HEIGHT], ResizeAction.OPTION_HEIGHT),
            keep_aspect_ratio=True if keep is None else as_bool(keep, ResizeAction.OPTION_KEEP_ASPECT_RATIO),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            ResizeAction.OPTION_WIDTH: self.width,
            ResizeAction.OPTION_HEIGHT: self.height,
            ResizeAction.OPTION_KEEP_ASPECT_RATIO: self.keep_aspect_ratio,
        }


class ResizeAction(Action):
    """Resample an image to a new size."""

    OPTION_WIDTH = "width"
    OPTION_HEIGHT = "height"
    OPTION_KEEP_ASPECT_RATIO = "keepAspectRatio"

    options_class = ResizeOptions

    def process(self, image: Any, options: ResizeOptions) -> bool:
        """
        Resize the image.

        Returns:
            False if a target dimension is 0, else True

        Raises:
            AllocationError: If the resized buffer cannot be created
        """
        width, height = options.width, options.height

        # Does not make sense
        if width == 0 or height == 0:
            logger.debug(f"Skipping resize to {width}x{height}")
            return False

        image_width, image_height = image.width, image.height

        # Calculate real target size
        if options.keep_aspect_ratio:
            width, height = fit_dimensions((image_width, image_height), (width, height))

        # If the image already has the desired size, we are done
        if width == image_width and height == image_height:
            return True

        check_canvas_size(width, height)
        try:
            resized = image.get_buffer().resize((width, height), PILImage.Resampling.LANCZOS)
        except (MemoryError, ValueError) as e:
            raise AllocationError(
                f"Failed to resize to {width}x{height}: {e}", width, height
            ) from e

        image.set_buffer(resized)
        logger.debug(f"Resized {image_width}x{image_height} to {width}x{height}")
        return True
