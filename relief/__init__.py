"""relief - procedural heightfield terrain meshes.

Generates a coloured 3D terrain mesh from a 2D noise field, with an optional
wireframe topology and geometry export.

Example:
    >>> from relief import Terrain, TerrainConfig, TerrainPipeline
    >>> from relief.io import FileExporter
    >>> pipeline = TerrainPipeline(exporter=FileExporter("island.ply"))
    >>> terrain = Terrain(TerrainConfig(size=(4, 4), resolution=16, export=True))
    >>> mesh = pipeline.run(terrain)
    >>> mesh.index_count
    24576
"""

from relief.config import GradientConfig, NoiseConfig, Region, TerrainConfig
from relief.exceptions import (
    ConfigurationError,
    DataLoadError,
    ExportError,
    GradientError,
    ImageConversionError,
    MeshGenerationError,
    ReliefError,
)
from relief.gradient import build_gradient, rasterize_gradient
from relief.mesh import MeshBuffers, build_heightfield_mesh, triangles_to_lines
from relief.pipeline import Terrain, TerrainPipeline

__version__ = "0.1.0"

__all__ = [
    # Main API
    "TerrainPipeline",
    "Terrain",
    "TerrainConfig",
    "NoiseConfig",
    "GradientConfig",
    "Region",
    "MeshBuffers",
    "build_gradient",
    "rasterize_gradient",
    "build_heightfield_mesh",
    "triangles_to_lines",
    # Exceptions
    "ReliefError",
    "ConfigurationError",
    "GradientError",
    "ImageConversionError",
    "MeshGenerationError",
    "DataLoadError",
    "ExportError",
]
