"""
ActionsLib - Geometric actions

Every action implements apply(image, options) -> bool and mutates the
image it is given.
"""

from RF_Libs.ActionsLib.operation import Operation, Action, Filter, OperationOptions
from RF_Libs.ActionsLib.rotate_action import RotateAction, RotateOptions
from RF_Libs.ActionsLib.orientation_action import AdjustOrientationByExifAction, OrientationOptions
from RF_Libs.ActionsLib.crop_action import CropAction, CropOptions
from RF_Libs.ActionsLib.resize_action import ResizeAction, ResizeOptions
from RF_Libs.ActionsLib.copy_action import CopyAction, CopyOptions

__all__ = [
    "Operation",
    "Action",
    "Filter",
    "OperationOptions",
    "RotateAction",
    "RotateOptions",
    "AdjustOrientationByExifAction",
    "OrientationOptions",
    "CropAction",
    "CropOptions",
    "ResizeAction",
    "ResizeOptions",
    "CopyAction",
    "CopyOptions",
]
