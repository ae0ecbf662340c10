"""Terrain geometry, image and configuration export utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np
import trimesh
import yaml
from PIL import Image

from relief.config import TerrainConfig
from relief.exceptions import ExportError
from relief.gradient.raster import to_rgba8
from relief.mesh.buffers import TOPOLOGIES, TRIANGLE_LIST

logger = logging.getLogger(__name__)


class TerrainExporter(Protocol):
    """Protocol for sinks receiving the final terrain buffers."""

    def __call__(
        self,
        positions: np.ndarray,
        indices: np.ndarray,
        colors: np.ndarray,
        topology: str = TRIANGLE_LIST,
    ) -> None:
        ...


def export_terrain(
    positions: np.ndarray,
    indices: np.ndarray,
    colors: np.ndarray,
    path: str | Path,
    topology: str = TRIANGLE_LIST,
) -> Path:
    """Write terrain geometry to disk.

    ``.npz`` stores the raw buffers and the topology and accepts any mesh.
    Other extensions are written by trimesh (e.g. ``.ply``, ``.obj``,
    ``.glb``) with 8-bit vertex colours and require a triangle list.

    Args:
        positions: Vertex positions, shape (n, 3).
        indices: Flat index buffer.
        colors: Float RGBA vertex colours, shape (n, 4).
        path: Output file path.
        topology: ``"triangle_list"`` or ``"line_list"``.

    Returns:
        Path of the written file.

    Raises:
        ExportError: If the format cannot hold the geometry or writing fails.
    """
    if topology not in TOPOLOGIES:
        raise ExportError(f"Unknown topology: {topology}")

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportError(f"Cannot create output directory for {path}: {e}") from e

    positions = np.asarray(positions, dtype=np.float32).reshape(-1, 3)
    indices = np.asarray(indices, dtype=np.uint32).reshape(-1)
    colors = np.asarray(colors, dtype=np.float32).reshape(-1, 4)

    if path.suffix.lower() == ".npz":
        try:
            np.savez(
                path,
                positions=positions,
                indices=indices,
                colors=colors,
                topology=np.array(topology),
            )
        except OSError as e:
            raise ExportError(f"Failed to export terrain to {path}: {e}") from e
    else:
        if topology != TRIANGLE_LIST:
            raise ExportError(
                f"{path.suffix or 'extensionless'} export needs a triangle list; "
                f"use .npz for {topology} geometry"
            )
        mesh = trimesh.Trimesh(
            vertices=positions,
            faces=indices.reshape(-1, 3),
            vertex_colors=to_rgba8(colors),
            process=False,
        )
        try:
            mesh.export(path)
        except (ValueError, KeyError, OSError) as e:
            raise ExportError(f"Failed to export terrain to {path}: {e}") from e

    logger.info(
        "Exported terrain (%d vertices, %d indices) to %s",
        len(positions),
        len(indices),
        path,
    )
    return path


class FileExporter:
    """Exporter writing every request to the same file.

    Args:
        path: Output file; the extension selects the format.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def __call__(
        self,
        positions: np.ndarray,
        indices: np.ndarray,
        colors: np.ndarray,
        topology: str = TRIANGLE_LIST,
    ) -> None:
        export_terrain(positions, indices, colors, self.path, topology=topology)

    def __repr__(self) -> str:
        return f"FileExporter(path={str(self.path)!r})"


def save_gradient_image(image: Image.Image | np.ndarray, path: str | Path) -> None:
    """Save a gradient preview image or raw RGBA texture buffer."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(image, np.ndarray):
        image = Image.fromarray(np.asarray(image, dtype=np.uint8))
    try:
        image.save(path)
    except (OSError, ValueError) as e:
        raise ExportError(f"Failed to save gradient image to {path}: {e}") from e


def save_terrain_config(config: TerrainConfig, path: str | Path) -> None:
    """Save a terrain configuration as YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
