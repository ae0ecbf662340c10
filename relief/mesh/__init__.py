"""Terrain mesh generation utilities."""

from relief.mesh.buffers import LINE_LIST, TRIANGLE_LIST, MeshBuffers
from relief.mesh.heightfield import (
    build_heightfield_mesh,
    grid_indices,
    sea_level_heights,
    shape_heights,
)
from relief.mesh.wireframe import to_wireframe, triangles_to_lines

__all__ = [
    "MeshBuffers",
    "TRIANGLE_LIST",
    "LINE_LIST",
    "build_heightfield_mesh",
    "grid_indices",
    "sea_level_heights",
    "shape_heights",
    "to_wireframe",
    "triangles_to_lines",
]
