"""
Tests for packed colors and raster buffer primitives.

Tests cover:
- Packing and unpacking colors
- Canvas allocation
- Region clipping, copying and merging
"""

import unittest

import numpy as np
from PIL import Image as PILImage

from RF_Libs.ImageLib.exceptions import AllocationError, ImageError, InvalidOptionsError
from RF_Libs.ImageLib.image_models import alpha_to_buffer, pack_color, unpack_color
from RF_Libs.ImageLib.raster import (
    clip_region,
    copy_region,
    from_array,
    merge_region,
    new_canvas,
    to_array,
)


class TestPackedColors(unittest.TestCase):
    """Test the packed color layout."""

    def test_pack_layout(self):
        self.assertEqual(pack_color(0x12, 0x34, 0x56, 0x01), 0x01123456)

    def test_unpack_opaque(self):
        self.assertEqual(unpack_color(0x0000FF), (0, 0, 255, 255))

    def test_unpack_transparent(self):
        self.assertEqual(unpack_color(0x7F000000), (0, 0, 0, 0))

    def test_alpha_mapping_endpoints(self):
        self.assertEqual(alpha_to_buffer(0), 255)
        self.assertEqual(alpha_to_buffer(127), 0)

    def test_unpack_rejects_non_integer(self):
        with self.assertRaises(InvalidOptionsError):
            unpack_color("red")

    def test_pack_rejects_float(self):
        with self.assertRaises(InvalidOptionsError):
            pack_color(1.5, 0, 0)

    def test_invalid_options_is_value_error(self):
        """Test that InvalidOptionsError is catchable as ValueError and ImageError."""
        with self.assertRaises(ValueError):
            pack_color(-1, 0, 0)
        with self.assertRaises(ImageError):
            pack_color(-1, 0, 0)


class TestCanvas(unittest.TestCase):
    """Test canvas allocation and array conversion."""

    def test_new_canvas_default_color(self):
        canvas = new_canvas(3, 2)

        self.assertEqual(canvas.mode, "RGBA")
        self.assertEqual(canvas.size, (3, 2))
        self.assertEqual(canvas.getpixel((2, 1)), (0, 0, 0, 255))

    def test_new_canvas_fill(self):
        canvas = new_canvas(2, 2, (1, 2, 3, 4))
        self.assertEqual(canvas.getpixel((0, 0)), (1, 2, 3, 4))

    def test_new_canvas_rejects_empty(self):
        with self.assertRaises(AllocationError) as ctx:
            new_canvas(0, 5)

        self.assertEqual((ctx.exception.width, ctx.exception.height), (0, 5))

    def test_array_round_trip_shape(self):
        canvas = new_canvas(5, 3, (9, 8, 7, 255))

        pixels = to_array(canvas)

        self.assertEqual(pixels.shape, (3, 5, 4))
        self.assertEqual(pixels.dtype, np.uint8)
        self.assertEqual(from_array(pixels).getpixel((4, 2)), (9, 8, 7, 255))

    def test_to_array_is_a_copy(self):
        canvas = new_canvas(2, 2)
        pixels = to_array(canvas)

        pixels[0, 0] = (255, 255, 255, 255)

        self.assertEqual(canvas.getpixel((0, 0)), (0, 0, 0, 255))


class TestClipRegion(unittest.TestCase):
    """Test rectangle clipping."""

    def test_fully_inside(self):
        self.assertEqual(clip_region((10, 10), (4, 4), 2, 3), (0, 0, 2, 3, 4, 4))

    def test_negative_destination(self):
        """Test that the source is shifted by the clipped amount."""
        self.assertEqual(clip_region((10, 10), (4, 4), -1, -2), (1, 2, 0, 0, 3, 2))

    def test_overflow_right_bottom(self):
        self.assertEqual(clip_region((10, 10), (4, 4), 8, 9), (0, 0, 8, 9, 2, 1))

    def test_source_offset(self):
        self.assertEqual(
            clip_region((5, 5), (10, 10), 0, 0, src_x=3, src_y=4, width=5, height=5),
            (3, 4, 0, 0, 5, 5),
        )

    def test_negative_source_offset(self):
        self.assertEqual(
            clip_region((5, 5), (10, 10), 0, 0, src_x=-2, src_y=0, width=4, height=4),
            (0, 0, 2, 0, 2, 4),
        )

    def test_no_overlap(self):
        self.assertIsNone(clip_region((10, 10), (4, 4), 10, 0))
        self.assertIsNone(clip_region((10, 10), (4, 4), -4, 0))


class TestCopyAndMerge(unittest.TestCase):
    """Test in-place copies and percentage merges."""

    def setUp(self):
        self.dst = PILImage.new("RGBA", (4, 4), (0, 0, 255, 255))
        self.src = PILImage.new("RGBA", (2, 2), (255, 0, 0, 255))

    def test_copy_region(self):
        self.assertTrue(copy_region(self.dst, self.src, 1, 1))

        self.assertEqual(self.dst.getpixel((1, 1)), (255, 0, 0, 255))
        self.assertEqual(self.dst.getpixel((2, 2)), (255, 0, 0, 255))
        self.assertEqual(self.dst.getpixel((0, 0)), (0, 0, 255, 255))
        self.assertEqual(self.dst.getpixel((3, 3)), (0, 0, 255, 255))

    def test_copy_region_outside(self):
        self.assertFalse(copy_region(self.dst, self.src, 5, 5))
        self.assertEqual(self.dst.getpixel((3, 3)), (0, 0, 255, 255))

    def test_blend_keeps_destination_under_transparency(self):
        src = PILImage.new("RGBA", (2, 2), (255, 0, 0, 0))

        copy_region(self.dst, src, 0, 0, blend=True)

        self.assertEqual(self.dst.getpixel((0, 0)), (0, 0, 255, 255))

    def test_no_blend_replaces_alpha(self):
        src = PILImage.new("RGBA", (2, 2), (255, 0, 0, 0))

        copy_region(self.dst, src, 0, 0, blend=False)

        self.assertEqual(self.dst.getpixel((0, 0)), (255, 0, 0, 0))

    def test_merge_half(self):
        self.assertTrue(merge_region(self.dst, self.src, 0, 0, 50))

        self.assertEqual(self.dst.getpixel((0, 0)), (127, 0, 127, 255))
        self.assertEqual(self.dst.getpixel((2, 2)), (0, 0, 255, 255))

    def test_merge_zero_keeps_destination(self):
        merge_region(self.dst, self.src, 0, 0, 0)
        self.assertEqual(self.dst.getpixel((0, 0)), (0, 0, 255, 255))

    def test_merge_full_replaces(self):
        merge_region(self.dst, self.src, 2, 2, 100)
        self.assertEqual(self.dst.getpixel((3, 3)), (255, 0, 0, 255))

    def test_merge_clamps_percent(self):
        merge_region(self.dst, self.src, 0, 0, 250)
        self.assertEqual(self.dst.getpixel((0, 0)), (255, 0, 0, 255))

    def test_merge_outside_is_noop(self):
        self.assertTrue(merge_region(self.dst, self.src, -5, 0, 50))
        self.assertEqual(self.dst.getpixel((0, 0)), (0, 0, 255, 255))
