"""Tests for the image processors and image helpers."""

import numpy as np
import pytest
from PIL import Image

from content_box.cropping import crop_to_box, rotate_orthogonal
from content_box.exceptions import ImageLoadError, ImageSaveError, TaskCancelledError, ValidationError
from content_box.geometry import AffineTransform, Dpi, FloatRect, IntRect
from content_box.processors import (
    GrayNormalizer,
    OtsuBinarizer,
    darkest_gray_level,
    get_image_files,
    load_grayscale_image,
    read_image_dpi,
    save_image,
    transform_to_gray,
)
from content_box.raster import BinaryImage
from content_box.status import TaskStatus
from content_box.transformation import ImageTransformation


class TestBinaryImage:

    def test_from_array(self):
        image = BinaryImage.from_array(np.array([[0, 1], [5, 0]]))
        assert image.is_black(0, 1)
        assert not image.is_black(1, 1)
        assert (image.width, image.height) == (2, 2)

    def test_from_thresholded_treats_zero_as_black(self):
        image = BinaryImage.from_thresholded(np.array([[0, 255]], dtype=np.uint8))
        assert image.is_black(0, 0)
        assert not image.is_black(1, 0)

    def test_contains(self):
        image = BinaryImage(np.zeros((3, 4), dtype=bool))
        assert image.contains(3, 2)
        assert not image.contains(4, 0)
        assert not image.contains(0, -1)

    def test_to_array(self):
        image = BinaryImage(np.array([[True, False]]))
        np.testing.assert_array_equal(image.to_array(), [[0, 255]])

    def test_rejects_color_input(self):
        with pytest.raises(ValidationError):
            BinaryImage(np.zeros((2, 2, 3), dtype=bool))


class TestGrayNormalizer:

    def test_darkest_gray_level(self):
        image = np.array([[10, 200], [50, 90]], dtype=np.uint8)
        assert darkest_gray_level(image) == 10

    def test_uncovered_area_gets_outside_value(self):
        image = np.full((10, 10), 200, dtype=np.uint8)
        result = transform_to_gray(image, AffineTransform.identity(), IntRect(0, 0, 19, 9), 7)
        assert result.shape == (10, 20)
        assert (result[:, :9] == 200).all()
        assert (result[:, 11:] == 7).all()

    def test_target_rect_offset(self):
        image = np.zeros((10, 10), dtype=np.uint8)
        image[5, 5] = 255
        result = transform_to_gray(image, AffineTransform.identity(), IntRect(5, 5, 9, 9))
        assert result.shape == (5, 5)
        assert result[0, 0] == 255

    def test_half_turn_places_pixels_exactly(self):
        image = np.full((4, 6), 255, dtype=np.uint8)
        image[0, 0] = 0
        xform = ImageTransformation(FloatRect(0, 0, 6, 4), Dpi(150, 150), rotation=180)

        result = transform_to_gray(image, xform.transform, xform.resulting_rect.to_rect(), 128)

        assert result.shape == (4, 6)
        assert result[3, 5] == 0
        assert (result == 0).sum() == 1
        assert not (result == 128).any()

    def test_quarter_turn_places_pixels_exactly(self):
        image = np.full((4, 6), 255, dtype=np.uint8)
        image[0, 0] = 0
        image[3, 5] = 10
        xform = ImageTransformation.for_image(image, Dpi(150, 150), rotation=90)

        result = GrayNormalizer().process(image, xform)

        # Clockwise: source (x, y) lands on (height - 1 - y, x).
        assert result.shape == (6, 4)
        assert result[0, 3] == 0
        assert result[5, 0] == 10
        assert ((result == 0) | (result == 10)).sum() == 2

    def test_rotation_fills_with_darkest_level(self):
        image = np.full((40, 40), 100, dtype=np.uint8)
        image[20, 20] = 30
        xform = ImageTransformation.for_image(image, Dpi(150, 150), rotation=45)

        result = GrayNormalizer().process(image, xform)

        assert result.shape == (57, 57)
        assert result[0, 0] == 30

    def test_scales_to_reference_density(self, framed_page):
        xform = ImageTransformation.for_image(framed_page, Dpi(300, 300))
        result = GrayNormalizer().to_reference_gray(
            framed_page, xform.pre_scale_to_dpi(Dpi(150, 150))
        )
        assert result.shape == (150, 200)

    def test_validation(self, framed_page):
        xform = ImageTransformation.for_image(framed_page, Dpi(150, 150))
        normalizer = GrayNormalizer()
        with pytest.raises(ValidationError):
            normalizer.process(None, xform)
        with pytest.raises(ValidationError):
            normalizer.process(np.zeros((0, 0), dtype=np.uint8), xform)
        with pytest.raises(ValidationError):
            normalizer.process(np.zeros((4, 4, 3), dtype=np.uint8), xform)
        with pytest.raises(ValidationError):
            normalizer.process(framed_page)

    def test_cancelled(self, framed_page):
        status = TaskStatus()
        status.cancel()
        xform = ImageTransformation.for_image(framed_page, Dpi(150, 150))
        with pytest.raises(TaskCancelledError):
            GrayNormalizer().to_reference_gray(framed_page, xform, status)


class TestOtsuBinarizer:

    def test_dark_pixels_become_black(self):
        gray = np.full((20, 20), 220, dtype=np.uint8)
        gray[:, :5] = 20
        binary = OtsuBinarizer().binarize(gray)
        assert binary.is_black(0, 0)
        assert binary.is_black(4, 19)
        assert not binary.is_black(5, 0)

    def test_framed_page(self, framed_page):
        binary = OtsuBinarizer().binarize(framed_page)
        np.testing.assert_array_equal(binary.to_array(), framed_page)

    def test_validation(self):
        with pytest.raises(ValidationError):
            OtsuBinarizer().binarize("not an image")

    def test_cancelled(self, framed_page):
        status = TaskStatus()
        status.cancel()
        with pytest.raises(TaskCancelledError):
            OtsuBinarizer().binarize(framed_page, status)


class TestImageIO:

    def test_read_dpi_from_metadata(self, temp_dir, framed_page):
        path = temp_dir / "page.png"
        Image.fromarray(framed_page).save(path, dpi=(300, 300))
        dpi = read_image_dpi(path, 150)
        assert dpi.horizontal == pytest.approx(300, abs=0.5)
        assert dpi.vertical == pytest.approx(300, abs=0.5)

    def test_missing_dpi_uses_default(self, temp_dir, framed_page):
        path = temp_dir / "page.png"
        Image.fromarray(framed_page).save(path)
        assert read_image_dpi(path, 150) == Dpi(150, 150)

    def test_unreadable_file_uses_default(self, temp_dir):
        path = temp_dir / "page.png"
        path.write_text("not an image")
        assert read_image_dpi(path, 200) == Dpi(200, 200)

    def test_load_grayscale(self, temp_dir, framed_page):
        path = temp_dir / "page.png"
        save_image(framed_page, path)
        loaded = load_grayscale_image(path)
        np.testing.assert_array_equal(loaded, framed_page)

    def test_load_errors(self, temp_dir):
        with pytest.raises(ImageLoadError):
            load_grayscale_image(temp_dir / "missing.png")
        broken = temp_dir / "broken.png"
        broken.write_bytes(b"garbage")
        with pytest.raises(ImageLoadError):
            load_grayscale_image(broken)

    def test_save_empty_image(self, temp_dir):
        with pytest.raises(ImageSaveError):
            save_image(np.zeros((0, 0), dtype=np.uint8), temp_dir / "empty.png")

    def test_get_image_files(self, temp_dir, framed_page):
        for name in ("b.png", "a.tif", "notes.txt"):
            (temp_dir / name).write_bytes(b"")
        names = [p.name for p in get_image_files(temp_dir)]
        assert names == ["a.tif", "b.png"]


class TestCropping:

    def test_crop_to_box(self, framed_page):
        cropped = crop_to_box(framed_page, FloatRect(51, 51, 299, 199))
        assert cropped.shape == (199, 299)
        assert (cropped == 255).all()

    def test_crop_is_clamped(self, framed_page):
        assert crop_to_box(framed_page, FloatRect(-10, -10, 50, 50)).shape == (40, 40)

    def test_nothing_left(self, framed_page):
        assert crop_to_box(framed_page, FloatRect()) is None
        assert crop_to_box(framed_page, FloatRect(500, 500, 10, 10)) is None

    def test_rotate_orthogonal(self, framed_page):
        assert rotate_orthogonal(framed_page, 0) is framed_page
        assert rotate_orthogonal(framed_page, 90).shape == (400, 300)
        assert rotate_orthogonal(framed_page, -90).shape == (400, 300)
        assert rotate_orthogonal(framed_page, 180).shape == (300, 400)

    def test_rotate_rejects_other_angles(self, framed_page):
        with pytest.raises(ValueError):
            rotate_orthogonal(framed_page, 45)
