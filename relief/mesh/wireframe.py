"""Triangle to line-list conversion for wireframe rendering."""

from __future__ import annotations

import numpy as np

from relief.exceptions import MeshGenerationError
from relief.mesh.buffers import LINE_LIST, TRIANGLE_LIST, MeshBuffers

# (a, b), (b, c), (c, a)
_EDGE_ORDER = [0, 1, 1, 2, 2, 0]


def triangles_to_lines(indices: np.ndarray) -> np.ndarray:
    """Expand a triangle-list index buffer into its edges.

    Edges shared by neighbouring triangles are emitted once per triangle,
    so the result is always twice as long as the input.

    Args:
        indices: Flat triangle-list indices, length divisible by 3.

    Returns:
        Flat line-list indices.

    Raises:
        MeshGenerationError: If the index count is not a multiple of 3.
    """
    indices = np.asarray(indices, dtype=np.uint32).reshape(-1)
    if len(indices) % 3 != 0:
        raise MeshGenerationError(
            f"Triangle index count must be divisible by 3, got {len(indices)}"
        )
    return indices.reshape(-1, 3)[:, _EDGE_ORDER].reshape(-1)


def to_wireframe(mesh: MeshBuffers) -> MeshBuffers:
    """Return a line-list copy of a triangle mesh sharing its vertex data."""
    if mesh.topology != TRIANGLE_LIST:
        raise MeshGenerationError(
            f"Expected a {TRIANGLE_LIST} mesh, got {mesh.topology}"
        )
    return MeshBuffers(
        mesh.positions,
        mesh.normals,
        mesh.uvs,
        mesh.colors,
        triangles_to_lines(mesh.indices),
        topology=LINE_LIST,
    )
