"""I/O utilities for reading and writing terrain data."""

from relief.io.readers import load_terrain_config
from relief.io.writers import (
    FileExporter,
    TerrainExporter,
    export_terrain,
    save_gradient_image,
    save_terrain_config,
)

__all__ = [
    "FileExporter",
    "TerrainExporter",
    "export_terrain",
    "load_terrain_config",
    "save_gradient_image",
    "save_terrain_config",
]
