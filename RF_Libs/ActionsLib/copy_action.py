"""
Copy one image onto another with an opacity.

A plain percentage merge ignores the source's own alpha channel, so the
merge goes through a scratch canvas the size of the source:

1. the destination area under the source is copied into the scratch canvas
2. the source is alpha-composited on top of it
3. the scratch canvas is merged onto the destination with the opacity

Transparent parts of the source therefore keep showing the destination.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from RF_Libs.constants import OPACITY_MAX, OPACITY_MIN
from RF_Libs.ActionsLib.operation import Action, OperationOptions, as_int, require_options
from RF_Libs.ImageLib.exceptions import InvalidOptionsError
from RF_Libs.ImageLib.image import Image
from RF_Libs.ImageLib.raster import copy_region, merge_region, new_canvas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopyOptions(OperationOptions):
    """Options for CopyAction.

    Attributes:
        source_image: Image to paste onto the processed image
        target_x: Left edge on the destination (may be negative)
        target_y: Top edge on the destination (may be negative)
        opacity: 0-100, 0 = none, 100 = full (clamped)
    """
    source_image: Any
    target_x: int
    target_y: int
    opacity: int = OPACITY_MAX

    def __post_init__(self):
        if not isinstance(self.source_image, Image):
            raise InvalidOptionsError(
                f"Source image must be of class {Image.__module__}.{Image.__name__}",
                CopyAction.OPTION_SOURCE_IMAGE,
            )
        object.__setattr__(self, "opacity", min(OPACITY_MAX, max(OPACITY_MIN, self.opacity)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CopyOptions":
        require_options(
            data,
            [CopyAction.OPTION_SOURCE_IMAGE, CopyAction.OPTION_TARGET_X, CopyAction.OPTION_TARGET_Y],
        )
        opacity = data.get(CopyAction.OPTION_OPACITY)
        return cls(
            source_image=data[CopyAction.OPTION_SOURCE_IMAGE],
            target_x=as_int(data[CopyAction.OPTION_TARGET_X], CopyAction.OPTION_TARGET_X),
            target_y=as_int(data[CopyAction.OPTION_TARGET_Y], CopyAction.OPTION_TARGET_Y),
            opacity=OPACITY_MAX if opacity is None else as_int(opacity, CopyAction.OPTION_OPACITY),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            CopyAction.OPTION_SOURCE_IMAGE: self.source_image,
            CopyAction.OPTION_TARGET_X: self.target_x,
            CopyAction.OPTION_TARGET_Y: self.target_y,
            CopyAction.OPTION_OPACITY: self.opacity,
        }


class CopyAction(Action):
    """Paste a source image onto the processed image."""

    OPTION_SOURCE_IMAGE = "sourceImage"
    OPTION_TARGET_X = "targetX"
    OPTION_TARGET_Y = "targetY"
    OPTION_OPACITY = "opacity"

    options_class = CopyOptions

    def process(self, image: Any, options: CopyOptions) -> bool:
        """
        Merge the source image onto image at the target position.

        Raises:
            AllocationError: If the scratch canvas cannot be created
        """
        source = options.source_image
        destination = image.get_buffer()

        cut = new_canvas(source.width, source.height)

        # Relevant section of the destination as the first layer
        copy_region(
            cut,
            destination,
            0,
            0,
            options.target_x,
            options.target_y,
            source.width,
            source.height,
            blend=False,
        )

        # Source on top, honouring its own alpha
        copy_region(cut, source.get_buffer(), 0, 0)

        result = merge_region(destination, cut, options.target_x, options.target_y, options.opacity)
        logger.debug(
            f"Copied {source.width}x{source.height} onto {image.width}x{image.height} "
            f"at ({options.target_x}, {options.target_y}) with opacity {options.opacity}"
        )
        return result
