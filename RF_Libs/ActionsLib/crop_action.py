"""
Crop an image to a specified size.

The original is placed on a new canvas of the target size according to an
anchor on a 3x3 grid. If the crop is larger than the original, a fill
color can be given for the uncovered area.

Anchors, same positions as in Photoshop:

    1    2    3
    4    5    6
    7    8    9
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from RF_Libs.constants import (
    ANCHOR_LEFT_BOTTOM,
    ANCHOR_LEFT_MIDDLE,
    ANCHOR_LEFT_TOP,
    ANCHOR_MIDDLE_BOTTOM,
    ANCHOR_MIDDLE_MIDDLE,
    ANCHOR_MIDDLE_TOP,
    ANCHOR_RIGHT_BOTTOM,
    ANCHOR_RIGHT_MIDDLE,
    ANCHOR_RIGHT_TOP,
    DEFAULT_ANCHOR,
)
from RF_Libs.ActionsLib.operation import Action, OperationOptions, as_int, require_options
from RF_Libs.ImageLib.exceptions import InvalidOptionsError
from RF_Libs.ImageLib.geometry import crop_offsets, normalize_anchor
from RF_Libs.ImageLib.image_models import unpack_color
from RF_Libs.ImageLib.raster import copy_region, new_canvas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropOptions(OperationOptions):
    """Options for CropAction.

    Attributes:
        width: Target width in pixels
        height: Target height in pixels
        anchor: Position on the 3x3 grid (1-9, anything else means 5)
        color: Optional packed fill color for the new canvas
    """
    width: int
    height: int
    anchor: int = DEFAULT_ANCHOR
    color: Optional[int] = None

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidOptionsError(
                f"Crop size must not be negative, got {self.width}x{self.height}",
                CropAction.OPTION_WIDTH if self.width < 0 else CropAction.OPTION_HEIGHT,
            )
        object.__setattr__(self, "anchor", normalize_anchor(self.anchor))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CropOptions":
        require_options(data, [CropAction.OPTION_WIDTH, CropAction.OPTION_HEIGHT])

        anchor = data.get(CropAction.OPTION_ORIENTATION)
        color = data.get(CropAction.OPTION_COLOR)
        if color is not None and (isinstance(color, bool) or not isinstance(color, int)):
            raise InvalidOptionsError(
                f"Option 'color' must be a packed integer color, got {type(color).__name__}",
                CropAction.OPTION_COLOR,
            )

        return cls(
            width=as_int(data[CropAction.OPTION_WIDTH], CropAction.OPTION_WIDTH),
            height=as_int(data[CropAction.OPTION_HEIGHT], CropAction.OPTION_HEIGHT),
            anchor=DEFAULT_ANCHOR if anchor is None else as_int(anchor, CropAction.OPTION_ORIENTATION),
            color=color,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            CropAction.OPTION_WIDTH: self.width,
            CropAction.OPTION_HEIGHT: self.height,
            CropAction.OPTION_ORIENTATION: self.anchor,
            CropAction.OPTION_COLOR: self.color,
        }


class CropAction(Action):
    """Crop or extend an image around an anchor."""

    OPTION_WIDTH = "width"
    OPTION_HEIGHT = "height"
    OPTION_ORIENTATION = "orientation"
    OPTION_COLOR = "color"

    CROP_FROM_LEFT_TOP = ANCHOR_LEFT_TOP
    CROP_FROM_MIDDLE_TOP = ANCHOR_MIDDLE_TOP
    CROP_FROM_RIGHT_TOP = ANCHOR_RIGHT_TOP
    CROP_FROM_LEFT_MIDDLE = ANCHOR_LEFT_MIDDLE
    CROP_FROM_MIDDLE_MIDDLE = ANCHOR_MIDDLE_MIDDLE
    CROP_FROM_RIGHT_MIDDLE = ANCHOR_RIGHT_MIDDLE
    CROP_FROM_LEFT_BOTTOM = ANCHOR_LEFT_BOTTOM
    CROP_FROM_MIDDLE_BOTTOM = ANCHOR_MIDDLE_BOTTOM
    CROP_FROM_RIGHT_BOTTOM = ANCHOR_RIGHT_BOTTOM

    options_class = CropOptions

    def process(self, image: Any, options: CropOptions) -> bool:
        """
        Install a canvas of the target size holding the anchored original.

        Raises:
            AllocationError: If the new canvas cannot be created
        """
        original_size = (image.width, image.height)
        target_size = (options.width, options.height)

        # Target position of the original image
        target_x, target_y = crop_offsets(original_size, target_size, options.anchor)

        if options.color is not None:
            canvas = new_canvas(options.width, options.height, unpack_color(options.color))
        else:
            canvas = new_canvas(options.width, options.height)

        copy_region(canvas, image.get_buffer(), target_x, target_y)
        image.set_buffer(canvas)

        logger.debug(
            f"Cropped {original_size} to {target_size} "
            f"with anchor {options.anchor} at ({target_x}, {target_y})"
        )
        return True
