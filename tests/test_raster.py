"""Tests for gradient preview rasterization."""

import numpy as np
import pytest

from relief.config import Region
from relief.exceptions import ConfigurationError, ImageConversionError
from relief.gradient import build_gradient, image_to_texture, rasterize_gradient, to_rgba8


def test_image_size_and_mode(black_to_white):
    image = rasterize_gradient(build_gradient(black_to_white), (10, 3))
    assert image.size == (10, 3)
    assert image.mode == "RGBA"


def test_columns_are_uniform(black_to_white):
    image = rasterize_gradient(build_gradient(black_to_white), (16, 4))
    pixels = np.asarray(image)

    for row in pixels[1:]:
        np.testing.assert_array_equal(row, pixels[0])


def test_column_samples_gradient(black_to_white):
    image = rasterize_gradient(build_gradient(black_to_white), (10, 1))
    pixels = np.asarray(image).astype(int)

    # Column x samples t = x * 100 / width
    expected = np.round(np.arange(10) * 10 / 100 * 255)
    assert np.all(np.abs(pixels[0, :, 0] - expected) <= 1)
    assert np.all(pixels[0, :, 3] == 255)


def test_transparent_gradient_shows_base_colour():
    regions = [Region(0, (255, 0, 0, 0)), Region(100, (0, 0, 255, 0))]
    base = (10, 20, 30, 255)
    image = rasterize_gradient(build_gradient(regions), (8, 2), base_color=base)

    pixels = np.asarray(image)
    assert np.all(pixels == np.array(base, dtype=np.uint8))


def test_translucent_gradient_is_composited():
    regions = [Region(0, (255, 0, 0, 128)), Region(100, (255, 0, 0, 128))]
    image = rasterize_gradient(build_gradient(regions), (4, 1), base_color=(0, 0, 0, 255))

    pixel = np.asarray(image)[0, 0].astype(int)
    assert abs(pixel[0] - 128) <= 1
    assert pixel[3] == 255


def test_invalid_size(black_to_white):
    with pytest.raises(ConfigurationError):
        rasterize_gradient(build_gradient(black_to_white), (0, 4))


def test_to_rgba8_clamps():
    colors = np.array([[-0.5, 0.0, 1.0, 2.0]])
    np.testing.assert_array_equal(to_rgba8(colors), [[0, 0, 255, 255]])


def test_image_to_texture(black_to_white):
    image = rasterize_gradient(build_gradient(black_to_white), (12, 5))
    texture = image_to_texture(image)

    assert texture.shape == (5, 12, 4)
    assert texture.dtype == np.uint8


def test_image_to_texture_rejects_non_images():
    with pytest.raises(ImageConversionError):
        image_to_texture("not an image")
