"""
Rotate an image.

The rotation is counter-clockwise for positive angles. The canvas grows
to hold the whole rotated image and the exposed corners are filled with
the background color.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from PIL import Image as PILImage

from RF_Libs.constants import DEFAULT_BACKGROUND_COLOR
from RF_Libs.ActionsLib.operation import Action, OperationOptions, as_float, as_int, require_options
from RF_Libs.ImageLib.image_models import unpack_color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RotateOptions(OperationOptions):
    """Options for RotateAction.

    Attributes:
        angle: Rotation in degrees, conventionally -360 to 360
        background_color: Packed color for exposed corners (default: 0, opaque black)
    """
    angle: float
    background_color: int = DEFAULT_BACKGROUND_COLOR

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RotateOptions":
        require_options(data, [RotateAction.OPTION_ANGLE])
        background = data.get(RotateAction.OPTION_BACKGROUND_COLOR)
        return cls(
            angle=as_float(data[RotateAction.OPTION_ANGLE], RotateAction.OPTION_ANGLE),
            background_color=(
                DEFAULT_BACKGROUND_COLOR
                if background is None
                else as_int(background, RotateAction.OPTION_BACKGROUND_COLOR)
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            RotateAction.OPTION_ANGLE: self.angle,
            RotateAction.OPTION_BACKGROUND_COLOR: self.background_color,
        }


class RotateAction(Action):
    """Rotate an image by an arbitrary angle."""

    OPTION_ANGLE = "angle"
    OPTION_BACKGROUND_COLOR = "backgroundColor"

    options_class = RotateOptions

    def process(self, image: Any, options: RotateOptions) -> bool:
        """
        Rotate the image buffer.

        Returns:
            True if the rotated buffer was installed, False if the rotation
            could not produce a result
        """
        if not math.isfinite(options.angle):
            logger.warning(f"Cannot rotate by non-finite angle {options.angle}")
            return False

        fill = unpack_color(options.background_color)
        try:
            rotated = image.get_buffer().rotate(
                options.angle,
                resample=PILImage.Resampling.BICUBIC,
                expand=True,
                fillcolor=fill,
            )
        except (ValueError, MemoryError) as e:
            logger.warning(f"Rotation by {options.angle} degrees failed: {e}")
            return False

        image.set_buffer(rotated)
        logger.debug(f"Rotated by {options.angle} degrees to {rotated.width}x{rotated.height}")
        return True
