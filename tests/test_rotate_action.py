"""
Tests for RotateAction.
"""

import math

import pytest

from RF_Libs.ActionsLib.rotate_action import RotateAction, RotateOptions
from RF_Libs.ImageLib.exceptions import InvalidOptionsError
from RF_Libs.ImageLib.image import Image


class TestRotateOptions:
    """Tests for option parsing."""

    def test_angle_is_mandatory(self):
        with pytest.raises(InvalidOptionsError, match="Mandatory options: angle"):
            RotateOptions.from_dict({})

    def test_background_defaults_to_black(self):
        assert RotateOptions.from_dict({"angle": 90}).background_color == 0

    def test_angle_must_be_numeric(self):
        with pytest.raises(InvalidOptionsError):
            RotateOptions.from_dict({"angle": "90"})

    def test_to_dict(self):
        assert RotateOptions(angle=45.0, background_color=255).to_dict() == {
            "angle": 45.0,
            "backgroundColor": 255,
        }


class TestRotateAction:
    """Tests for rotating buffers."""

    def test_quarter_turn_counter_clockwise(self, gradient_buffer):
        image = Image(gradient_buffer.copy())

        assert image.apply_action(RotateAction(), {"angle": 90})

        assert image.size == (6, 8)
        assert image.get_buffer().getpixel((0, 0)) == gradient_buffer.getpixel((7, 0))

    def test_quarter_turn_clockwise(self, gradient_buffer):
        image = Image(gradient_buffer.copy())

        image.apply_action(RotateAction(), {"angle": -90})

        assert image.size == (6, 8)
        assert image.get_buffer().getpixel((5, 0)) == gradient_buffer.getpixel((0, 0))

    def test_half_turn(self, gradient_buffer):
        image = Image(gradient_buffer.copy())

        image.apply_action(RotateAction(), {"angle": 180})

        assert image.size == (8, 6)
        assert image.get_buffer().getpixel((0, 0)) == gradient_buffer.getpixel((7, 5))

    def test_full_turn_keeps_pixels(self, gradient_buffer):
        image = Image(gradient_buffer.copy())

        image.apply_action(RotateAction(), {"angle": 360})

        assert image.get_buffer().tobytes() == gradient_buffer.tobytes()

    def test_arbitrary_angle_grows_canvas(self, solid_image):
        image = solid_image(10, 10, (255, 255, 255, 255))

        image.apply_action(RotateAction(), {"angle": 45})

        assert image.width > 10
        assert image.height > 10
        assert image.get_buffer().getpixel((0, 0)) == (0, 0, 0, 255)

    def test_background_color(self, solid_image):
        image = solid_image(10, 10, (255, 255, 255, 255))
        green = Image.allocate_color(image, 0, 255, 0)

        image.apply_action(RotateAction(), {"angle": 30, "backgroundColor": green})

        assert image.get_buffer().getpixel((0, 0)) == (0, 255, 0, 255)

    def test_transparent_background(self, solid_image):
        image = solid_image(10, 10, (255, 255, 255, 255))
        transparent = Image.allocate_color(image, 0, 0, 0, 127)

        image.apply_action(RotateAction(), {"angle": 30, "backgroundColor": transparent})

        assert image.get_buffer().getpixel((0, 0))[3] == 0

    @pytest.mark.parametrize("angle", [math.nan, math.inf])
    def test_non_finite_angle_fails_softly(self, solid_image, angle):
        image = solid_image(4, 4)
        buffer = image.get_buffer()

        assert image.apply_action(RotateAction(), {"angle": angle}) is False
        assert image.get_buffer() is buffer
