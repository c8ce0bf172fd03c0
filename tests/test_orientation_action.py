"""
Tests for AdjustOrientationByExifAction.

Tests cover:
- Missing and unsupported orientation values
- Correction angles for orientations 3, 6 and 8
- Automatic correction when decoding JPEG files
"""

import unittest
from unittest.mock import patch

import pytest
from PIL import Image as PILImage

from RF_Libs.ActionsLib.orientation_action import AdjustOrientationByExifAction
from RF_Libs.ActionsLib.rotate_action import RotateAction
from RF_Libs.ImageLib.image import Image


class TestOrientationWithMetadata(unittest.TestCase):
    """Test the action against patched metadata."""

    def setUp(self):
        self.original = PILImage.new("RGBA", (4, 2))
        self.original.putdata([(i * 30, 255 - i * 30, i, 255) for i in range(8)])
        self.image = Image(self.original.copy())

    def _apply_with(self, metadata):
        with patch.object(Image, "read_metadata", return_value=metadata):
            return self.image.apply_action(AdjustOrientationByExifAction())

    def _rotated(self, angle):
        expected = Image(self.original.copy())
        expected.apply_action(RotateAction(), {"angle": angle})
        return expected.get_buffer().tobytes()

    def test_no_metadata(self):
        self.assertFalse(self._apply_with({}))
        self.assertEqual(self.image.get_buffer().tobytes(), self.original.tobytes())

    def test_metadata_without_orientation(self):
        self.assertFalse(self._apply_with({"Make": "Camera"}))

    def test_normal_orientation(self):
        self.assertTrue(self._apply_with({"Orientation": 1}))
        self.assertEqual(self.image.get_buffer().tobytes(), self.original.tobytes())

    def test_orientation_6_rotates_clockwise(self):
        self.assertTrue(self._apply_with({"Orientation": 6}))
        self.assertEqual(self.image.size, (2, 4))
        self.assertEqual(self.image.get_buffer().tobytes(), self._rotated(-90))

    def test_orientation_8_rotates_counter_clockwise(self):
        self.assertTrue(self._apply_with({"Orientation": 8}))
        self.assertEqual(self.image.get_buffer().tobytes(), self._rotated(90))

    def test_orientation_3_rotates_half_turn(self):
        self.assertTrue(self._apply_with({"Orientation": 3}))
        self.assertEqual(self.image.get_buffer().tobytes(), self._rotated(180))

    def test_orientation_as_string(self):
        self.assertTrue(self._apply_with({"Orientation": "6"}))
        self.assertEqual(self.image.size, (2, 4))

    def test_orientation_in_tuple(self):
        self.assertTrue(self._apply_with({"Orientation": (8,)}))
        self.assertEqual(self.image.size, (2, 4))

    def test_mirrored_orientation_is_ignored(self):
        with self.assertLogs("RF_Libs.ActionsLib.orientation_action", level="WARNING"):
            self.assertTrue(self._apply_with({"Orientation": 2}))

        self.assertEqual(self.image.get_buffer().tobytes(), self.original.tobytes())

    def test_garbage_orientation_is_ignored(self):
        with self.assertLogs("RF_Libs.ActionsLib.orientation_action", level="WARNING"):
            self.assertTrue(self._apply_with({"Orientation": "sideways"}))


class TestOrientationOnDecode:
    """Tests for automatic correction of decoded JPEG files."""

    def test_from_file_corrects_orientation(self, jpeg_with_orientation):
        image = Image.from_file(jpeg_with_orientation(6))
        assert image.size == (20, 40)

    def test_from_file_keeps_upright_image(self, jpeg_with_orientation):
        image = Image.from_file(jpeg_with_orientation(1))
        assert image.size == (40, 20)

    def test_from_bytes_corrects_orientation(self, jpeg_with_orientation):
        data = jpeg_with_orientation(8).read_bytes()

        image = Image.from_bytes(data)

        assert image.size == (20, 40)

    def test_png_is_not_corrected(self, png_file):
        with patch.object(AdjustOrientationByExifAction, "process") as process:
            Image.from_file(png_file)

        process.assert_not_called()

    def test_action_on_decoded_file(self, jpeg_with_orientation):
        """Should re-read the source every time it is applied."""
        image = Image(PILImage.new("RGBA", (40, 20)), jpeg_with_orientation(6))

        assert image.apply_action(AdjustOrientationByExifAction())
        assert image.size == (20, 40)

        # The source still says 6, so a second run rotates again
        assert image.apply_action(AdjustOrientationByExifAction())
        assert image.size == (40, 20)


def test_options_are_ignored():
    image = Image(PILImage.new("RGBA", (2, 2)))
    with patch.object(Image, "read_metadata", return_value={}):
        assert image.apply_action(AdjustOrientationByExifAction(), {"anything": 1}) is False


@pytest.mark.parametrize("code", [4, 5, 7, 9, 0])
def test_unsupported_codes_leave_image(code):
    image = Image(PILImage.new("RGBA", (4, 2)))
    with patch.object(Image, "read_metadata", return_value={"Orientation": code}):
        assert image.apply_action(AdjustOrientationByExifAction())
    assert image.size == (4, 2)
