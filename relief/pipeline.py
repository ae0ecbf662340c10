"""Terrain synthesis pipeline.

Runs noise generation, gradient construction, preview rasterization, mesh
building and the optional wireframe and export steps for each terrain.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from relief.config import TerrainConfig
from relief.fields.noise import NoiseGenerator, SimplexNoise
from relief.gradient.builder import build_gradient
from relief.gradient.raster import image_to_texture, rasterize_gradient
from relief.io.writers import TerrainExporter
from relief.mesh.buffers import MeshBuffers
from relief.mesh.heightfield import build_heightfield_mesh
from relief.mesh.wireframe import to_wireframe
from relief.resources import Handle, MemoryResourcePool, ResourcePool

logger = logging.getLogger(__name__)


class Terrain:
    """A terrain instance: its configuration and latest resource handles.

    Args:
        config: Synthesis parameters. Defaults to TerrainConfig().
        name: Label used in log messages.
    """

    def __init__(self, config: TerrainConfig | None = None, name: str = "terrain"):
        self.config = config if config is not None else TerrainConfig()
        self.name = name
        self.mesh: Handle | None = None
        self.image: Handle | None = None
        self.fingerprint: str | None = None

    @property
    def is_built(self) -> bool:
        """Return True once a mesh has been registered."""
        return self.mesh is not None

    @property
    def needs_rebuild(self) -> bool:
        """Return True if the stored resources are missing or out of date."""
        return (
            not self.is_built
            or self.config.export
            or self.fingerprint != self.config.fingerprint()
        )

    def __repr__(self) -> str:
        return f"Terrain(name={self.name!r}, mesh={self.mesh}, image={self.image})"


class TerrainPipeline:
    """Builds terrain meshes and gradient previews from configuration.

    Collaborators are injected so that a renderer can supply its own asset
    storage and export sink.

    Args:
        noise_generator: Callable returning the noise grid for a NoiseConfig.
            Default: SimplexNoise().
        image_pool: Pool receiving gradient textures. Default: in-memory.
        mesh_pool: Pool receiving MeshBuffers. Default: in-memory.
        exporter: Callable receiving (positions, indices, colors, topology)
            when a terrain's export flag is set.

    Example:
        >>> pipeline = TerrainPipeline()
        >>> terrain = Terrain(TerrainConfig(size=(4, 4), resolution=8))
        >>> mesh = pipeline.run(terrain)
        >>> mesh.vertex_count
        1089
    """

    def __init__(
        self,
        noise_generator: NoiseGenerator | None = None,
        image_pool: ResourcePool | None = None,
        mesh_pool: ResourcePool | None = None,
        exporter: TerrainExporter | None = None,
    ):
        self.noise_generator = noise_generator or SimplexNoise()
        self.image_pool = image_pool if image_pool is not None else MemoryResourcePool("images")
        self.mesh_pool = mesh_pool if mesh_pool is not None else MemoryResourcePool("meshes")
        self.exporter = exporter

    @staticmethod
    def _store(pool: ResourcePool, handle: Handle | None, buffer) -> Handle:
        if handle is None:
            return pool.register(buffer)
        return pool.replace(handle, buffer)

    def run(self, terrain: Terrain) -> MeshBuffers:
        """Rebuild a terrain's gradient image and mesh unconditionally.

        Nothing is registered unless every build step succeeds.

        Returns:
            The registered MeshBuffers.

        Raises:
            ConfigurationError: If the configuration is invalid.
            GradientError: If no gradient can be built from the regions.
            ImageConversionError: If the preview cannot become a texture.
            MeshGenerationError: If the mesh cannot be built.
        """
        config = terrain.config
        config.validate()
        config.sync_noise_size()
        noise_config = config.noise
        gradient_config = noise_config.gradient

        noise = np.asarray(self.noise_generator(noise_config), dtype=float)

        gradient = build_gradient(
            noise_config.regions,
            segments=gradient_config.segments,
            smoothness=gradient_config.smoothness,
        )
        image = rasterize_gradient(
            gradient, gradient_config.size, gradient_config.base_color
        )
        texture = image_to_texture(image)

        mesh = build_heightfield_mesh(
            noise,
            gradient,
            config.size,
            config.resolution,
            height_exponent=config.height_exponent,
            sea_percent=config.sea_percent,
        )
        if config.wireframe:
            mesh = to_wireframe(mesh)

        terrain.image = self._store(self.image_pool, terrain.image, texture)
        gradient_config.image = terrain.image
        terrain.mesh = self._store(self.mesh_pool, terrain.mesh, mesh)
        terrain.fingerprint = config.fingerprint()

        logger.info(
            "Rebuilt %s: %d vertices, %d indices (%s)",
            terrain.name,
            mesh.vertex_count,
            mesh.index_count,
            mesh.topology,
        )

        if config.export:
            self._export(terrain, mesh)

        return mesh

    def _export(self, terrain: Terrain, mesh: MeshBuffers) -> None:
        if self.exporter is None:
            logger.warning(
                "Export requested for %s but no exporter is configured", terrain.name
            )
        else:
            self.exporter(
                mesh.positions, mesh.indices, mesh.colors, topology=mesh.topology
            )
            logger.info("Exported %s", terrain.name)
        terrain.config.export = False

    def update(self, terrains: Iterable[Terrain], force: bool = False) -> list[Terrain]:
        """Process one scheduling tick.

        Terrains are rebuilt when they have never been built, their
        configuration changed, their export flag is set, or ``force`` is
        True. Any error aborts only that terrain: it is logged and the
        others are still processed.

        Returns:
            Terrains rebuilt successfully during this tick.
        """
        rebuilt = []
        for terrain in terrains:
            if not force and not terrain.needs_rebuild:
                continue
            try:
                self.run(terrain)
            except Exception:
                # Collaborators are injected and may raise anything
                logger.exception("Failed to rebuild %s", terrain.name)
                continue
            rebuilt.append(terrain)
        return rebuilt
