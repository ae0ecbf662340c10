"""Vertex and index buffers of a generated terrain mesh."""

from __future__ import annotations

import numpy as np

TRIANGLE_LIST = "triangle_list"
LINE_LIST = "line_list"
TOPOLOGIES = (TRIANGLE_LIST, LINE_LIST)


class MeshBuffers:
    """Flat vertex attributes and index buffer of a terrain mesh.

    Args:
        positions: Vertex positions, shape (n, 3).
        normals: Vertex normals, shape (n, 3).
        uvs: Texture coordinates, shape (n, 2).
        colors: Float RGBA vertex colours, shape (n, 4).
        indices: Flat index buffer.
        topology: ``"triangle_list"`` or ``"line_list"``.
    """

    def __init__(
        self,
        positions: np.ndarray,
        normals: np.ndarray,
        uvs: np.ndarray,
        colors: np.ndarray,
        indices: np.ndarray,
        topology: str = TRIANGLE_LIST,
    ):
        if topology not in TOPOLOGIES:
            raise ValueError(
                f"Unknown topology: {topology}. Supported: {', '.join(TOPOLOGIES)}"
            )

        self.positions = np.asarray(positions, dtype=np.float32).reshape(-1, 3)
        self.normals = np.asarray(normals, dtype=np.float32).reshape(-1, 3)
        self.uvs = np.asarray(uvs, dtype=np.float32).reshape(-1, 2)
        self.colors = np.asarray(colors, dtype=np.float32).reshape(-1, 4)
        self.indices = np.asarray(indices, dtype=np.uint32).reshape(-1)
        self.topology = topology

        n = len(self.positions)
        for name in ("normals", "uvs", "colors"):
            if len(getattr(self, name)) != n:
                raise ValueError(
                    f"{name} length ({len(getattr(self, name))}) must match "
                    f"number of vertices ({n})"
                )

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    @property
    def primitive_count(self) -> int:
        """Number of triangles or line segments."""
        per_primitive = 3 if self.topology == TRIANGLE_LIST else 2
        return self.index_count // per_primitive

    @property
    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """(min, max) corners of the vertex positions."""
        return self.positions.min(axis=0), self.positions.max(axis=0)

    def __repr__(self) -> str:
        return (
            f"MeshBuffers(n_vertices={self.vertex_count}, "
            f"n_indices={self.index_count}, topology={self.topology!r})"
        )
