"""Heightfield to triangle mesh conversion."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from relief.exceptions import MeshGenerationError
from relief.mesh.buffers import TRIANGLE_LIST, MeshBuffers

logger = logging.getLogger(__name__)

HEIGHT_SCALE = 1.2


def sea_level_heights(noise: np.ndarray, sea_percent: float) -> np.ndarray:
    """Normalized heights with everything at or below sea level at zero.

        height = max(0, noise - sea_percent) / 100
    """
    return np.maximum(0.0, np.asarray(noise, dtype=float) - sea_percent) / 100.0


def shape_heights(heights: np.ndarray, height_exponent: float) -> np.ndarray:
    """Apply the contrast curve to normalized heights.

        y = ((height * 1.2) ** height_exponent - 0.5) * 2

    Larger exponents flatten lowlands and steepen peaks.
    """
    with np.errstate(over="ignore"):
        return ((np.asarray(heights, dtype=float) * HEIGHT_SCALE) ** height_exponent - 0.5) * 2.0


def grid_indices(rows: int, cols: int) -> np.ndarray:
    """Triangle-list indices for a row-major ``rows`` x ``cols`` vertex lattice.

    Each cell contributes ``(current, current + 1, next_row)`` followed by
    ``(next_row, current + 1, next_row + 1)``.
    """
    i, j = np.meshgrid(
        np.arange(rows - 1, dtype=np.int64),
        np.arange(cols - 1, dtype=np.int64),
        indexing="ij",
    )
    current = i * cols + j
    next_row = current + cols

    cells = np.stack(
        [current, current + 1, next_row, next_row, current + 1, next_row + 1],
        axis=-1,
    )
    return cells.reshape(-1).astype(np.uint32)


def build_heightfield_mesh(
    noise: np.ndarray,
    gradient: Callable[[np.ndarray], np.ndarray],
    size: Sequence[int],
    resolution: int,
    height_exponent: float = 1.0,
    sea_percent: float = 10.0,
) -> MeshBuffers:
    """Convert a noise grid into a coloured, origin-centred terrain mesh.

    Vertex ``(i, j)`` sits at ``x = i / resolution - (size[0] + 1) / 2 + 0.5``,
    ``z = j / resolution - (size[1] + 1) / 2 + 0.5`` with ``y`` from
    :func:`shape_heights`. Colours are sampled from the raw noise value, so
    flattened sea areas keep their depth colouring.

    Args:
        noise: Noise values in [0, 100], shape
            (size[0] * resolution + 1, size[1] * resolution + 1).
        gradient: Callable mapping noise values to float RGBA.
        size: Terrain size in tiles.
        resolution: Grid subdivisions per tile.
        height_exponent: Contrast exponent.
        sea_percent: Sea level in noise units.

    Returns:
        Triangle-list MeshBuffers with upward normals and raw grid UVs.

    Raises:
        MeshGenerationError: If the grid shape does not match the terrain
            or the shaped heights are not finite.
    """
    if resolution <= 0:
        raise MeshGenerationError(f"Resolution must be positive, got {resolution}")

    rows = int(size[0]) * resolution + 1
    cols = int(size[1]) * resolution + 1
    noise = np.asarray(noise, dtype=float)
    if noise.shape != (rows, cols):
        raise MeshGenerationError(
            f"Noise grid shape {noise.shape} does not match terrain lattice "
            f"({rows}, {cols})"
        )

    heights = shape_heights(sea_level_heights(noise, sea_percent), height_exponent)
    if np.any(~np.isfinite(heights)):
        raise MeshGenerationError(
            f"Terrain heights are not finite for height_exponent={height_exponent}"
        )

    i, j = np.meshgrid(
        np.arange(rows, dtype=float), np.arange(cols, dtype=float), indexing="ij"
    )
    width = size[0] + 1.0
    depth = size[1] + 1.0
    x = i / resolution - width / 2.0 + 0.5
    z = j / resolution - depth / 2.0 + 0.5

    positions = np.stack([x, heights, z], axis=-1).reshape(-1, 3)
    with np.errstate(over="ignore"):
        single = positions.astype(np.float32)
    if np.any(~np.isfinite(single)):
        raise MeshGenerationError(
            f"Terrain heights overflow vertex precision for "
            f"height_exponent={height_exponent}"
        )

    n_vertices = rows * cols
    normals = np.tile(np.array([0.0, 1.0, 0.0]), (n_vertices, 1))
    uvs = np.stack([i, j], axis=-1).reshape(-1, 2)
    colors = np.asarray(gradient(noise.reshape(-1)), dtype=float).reshape(-1, 4)
    indices = grid_indices(rows, cols)

    logger.debug(
        "Built heightfield mesh: %d vertices, %d indices", n_vertices, len(indices)
    )
    return MeshBuffers(positions, normals, uvs, colors, indices, topology=TRIANGLE_LIST)
