"""Gradient preview images."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
from PIL import Image

from relief.exceptions import ConfigurationError, ImageConversionError


def to_rgba8(colors: np.ndarray) -> np.ndarray:
    """Convert float RGBA in [0, 1] to 8-bit RGBA."""
    return np.round(np.clip(colors, 0.0, 1.0) * 255.0).astype(np.uint8)


def rasterize_gradient(
    gradient: Callable[[np.ndarray], np.ndarray],
    size: Sequence[int],
    base_color: Sequence[int] = (0, 0, 0, 255),
) -> Image.Image:
    """Render a gradient as a horizontal ramp image.

    Column ``x`` shows ``gradient(x * 100 / width)`` composited over the
    base colour; every row of a column is identical.

    Args:
        gradient: Callable mapping positions in [0, 100] to float RGBA.
        size: Image (width, height) in pixels.
        base_color: 8-bit RGBA background.

    Returns:
        RGBA image of the requested size.
    """
    width, height = int(size[0]), int(size[1])
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Image size must be positive, got {size}")

    positions = np.arange(width, dtype=float) * 100.0 / width
    ramp = to_rgba8(gradient(positions))
    overlay = np.ascontiguousarray(np.broadcast_to(ramp, (height, width, 4)))

    base = Image.new("RGBA", (width, height), tuple(int(c) for c in base_color))
    return Image.alpha_composite(base, Image.fromarray(overlay))


def image_to_texture(image: Image.Image) -> np.ndarray:
    """Convert an image to a raw (height, width, 4) uint8 RGBA buffer.

    Raises:
        ImageConversionError: If the image cannot be converted.
    """
    try:
        texture = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    except (OSError, ValueError, AttributeError) as e:
        raise ImageConversionError(f"Could not convert gradient image to RGBA: {e}") from e

    if texture.ndim != 3 or texture.shape[2] != 4:
        raise ImageConversionError(
            f"Expected an RGBA buffer, got shape {texture.shape}"
        )
    return np.ascontiguousarray(texture)
