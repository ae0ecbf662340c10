"""Colour gradient construction and rasterization."""

from relief.gradient.builder import Gradient, QuantizedGradient, build_gradient
from relief.gradient.raster import image_to_texture, rasterize_gradient, to_rgba8

__all__ = [
    "Gradient",
    "QuantizedGradient",
    "build_gradient",
    "image_to_texture",
    "rasterize_gradient",
    "to_rgba8",
]
