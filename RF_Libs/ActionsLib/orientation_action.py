"""
Automatically adjust the image rotation based on the EXIF data.

Orientation codes (EXIF tag 0x0112):

    1 = normal
    3 = rotated 180 degrees
    6 = rotated 90 degrees clockwise, corrected with -90
    8 = rotated 90 degrees counter-clockwise, corrected with +90

Mirrored codes (2, 4, 5, 7) and anything else are not corrected; they are
logged and treated as normal.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from RF_Libs.constants import EXIF_ORIENTATION
from RF_Libs.ActionsLib.operation import Action, OperationOptions
from RF_Libs.ActionsLib.rotate_action import RotateAction

logger = logging.getLogger(__name__)

ORIENTATION_NORMAL = 1
ORIENTATION_180 = 3
ORIENTATION_90_RIGHT = 6
ORIENTATION_90_LEFT = 8

# Angle that undoes each orientation
CORRECTION_ANGLES = {
    ORIENTATION_NORMAL: None,
    ORIENTATION_180: 180,
    ORIENTATION_90_RIGHT: -90,
    ORIENTATION_90_LEFT: 90,
}


@dataclass(frozen=True)
class OrientationOptions(OperationOptions):
    """AdjustOrientationByExifAction takes no options."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrientationOptions":
        return cls()


class AdjustOrientationByExifAction(Action):
    """Rotate an image upright according to its EXIF Orientation tag."""

    options_class = OrientationOptions

    def process(self, image: Any, options: OrientationOptions) -> bool:
        """
        Rotate the image.

        Returns:
            False if there is no orientation metadata, else True
        """
        exif = image.read_metadata()

        # No exif data, nothing to do
        if exif.get(EXIF_ORIENTATION) is None:
            return False

        orientation = self._parse_orientation(exif[EXIF_ORIENTATION])
        if orientation not in CORRECTION_ANGLES:
            logger.warning(
                f"Not supported orientation found: {exif[EXIF_ORIENTATION]!r}, leaving image as is"
            )
            return True

        angle = CORRECTION_ANGLES[orientation]
        if angle is not None:
            image.apply_action(RotateAction(), {RotateAction.OPTION_ANGLE: angle})

        return True

    @staticmethod
    def _parse_orientation(value: Any) -> Any:
        if isinstance(value, (tuple, list)) and len(value) == 1:
            value = value[0]
        try:
            return int(value)
        except (TypeError, ValueError):
            return value
