"""Configuration records for terrain, noise and gradient parameters."""

from __future__ import annotations

import hashlib
import json
from typing import Sequence

import numpy as np

from relief.exceptions import ConfigurationError

RGBA = tuple[int, int, int, int]


def _as_rgba(color: Sequence[int]) -> RGBA:
    values = tuple(int(c) for c in color)
    if len(values) == 3:
        values = values + (255,)
    if len(values) != 4:
        raise ConfigurationError(f"Colour must have 3 or 4 channels, got {color!r}")
    if any(c < 0 or c > 255 for c in values):
        raise ConfigurationError(f"Colour channels must be in [0, 255], got {color!r}")
    return values


def _as_pair(value: Sequence[int], name: str) -> tuple[int, int]:
    pair = tuple(int(v) for v in value)
    if len(pair) != 2:
        raise ConfigurationError(f"{name} must have exactly two entries, got {value!r}")
    return pair


class Region:
    """Gradient control point.

    Args:
        position: Domain position in [0, 100].
        color: 8-bit RGB or RGBA colour. RGB is promoted to opaque RGBA.
    """

    def __init__(self, position: float, color: Sequence[int]):
        self.position = float(position)
        self.color = _as_rgba(color)

    @property
    def color_float(self) -> np.ndarray:
        """Colour as float RGBA in [0, 1]."""
        return np.asarray(self.color, dtype=float) / 255.0

    def to_dict(self) -> dict:
        return {"position": self.position, "color": list(self.color)}

    @classmethod
    def from_dict(cls, data: dict) -> Region:
        try:
            return cls(data["position"], data["color"])
        except KeyError as e:
            raise ConfigurationError(f"Region is missing field {e}") from e

    def __eq__(self, other) -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return self.position == other.position and self.color == other.color

    def __repr__(self) -> str:
        return f"Region(position={self.position}, color={self.color})"


def default_regions() -> list[Region]:
    """Return a water-to-snow elevation palette."""
    return [
        Region(0.0, (12, 38, 94, 255)),
        Region(30.0, (38, 92, 160, 255)),
        Region(36.0, (214, 196, 140, 255)),
        Region(45.0, (86, 152, 62, 255)),
        Region(65.0, (44, 96, 40, 255)),
        Region(80.0, (112, 102, 92, 255)),
        Region(95.0, (245, 245, 250, 255)),
    ]


class GradientConfig:
    """Gradient quantization and preview image settings.

    Args:
        size: Preview image (width, height) in pixels.
        segments: Number of flat colour bands. 0 keeps the gradient continuous.
        smoothness: Blend width between bands. 0 is a hard step, values are
            clamped to [0, 1] when the gradient is quantized.
        base_color: 8-bit RGBA background the gradient is composited over.
        image: Handle of the last rasterized image, set by the pipeline.
    """

    def __init__(
        self,
        size: Sequence[int] = (256, 16),
        segments: int = 0,
        smoothness: float = 0.0,
        base_color: Sequence[int] = (0, 0, 0, 255),
        image=None,
    ):
        self.size = _as_pair(size, "Gradient size")
        self.segments = int(segments)
        self.smoothness = float(smoothness)
        self.base_color = _as_rgba(base_color)
        self.image = image

    def validate(self) -> None:
        if self.size[0] <= 0 or self.size[1] <= 0:
            raise ConfigurationError(
                f"Gradient image size must be positive, got {self.size}"
            )
        if self.segments < 0:
            raise ConfigurationError(
                f"Gradient segments must be >= 0, got {self.segments}"
            )
        if not np.isfinite(self.smoothness) or self.smoothness < 0:
            raise ConfigurationError(
                f"Gradient smoothness must be >= 0, got {self.smoothness}"
            )

    def to_dict(self) -> dict:
        return {
            "size": list(self.size),
            "segments": self.segments,
            "smoothness": self.smoothness,
            "base_color": list(self.base_color),
        }

    @classmethod
    def from_dict(cls, data: dict) -> GradientConfig:
        return cls(**data)

    def __repr__(self) -> str:
        return (
            f"GradientConfig(size={self.size}, segments={self.segments}, "
            f"smoothness={self.smoothness})"
        )


class NoiseConfig:
    """Noise field and colour region configuration.

    ``size`` is the grid size in cells and is overwritten by the pipeline
    from the owning terrain's size and resolution. The generated grid holds
    one value per vertex, see :attr:`shape`.

    Args:
        regions: Gradient control points. Defaults to :func:`default_regions`.
        gradient: Gradient settings.
        seed: Seed of the noise generator.
        frequency: Base feature frequency across the whole grid.
        octaves: Number of fractal noise layers.
        persistence: Amplitude multiplier between octaves.
        lacunarity: Frequency multiplier between octaves.
        offset: (x, y) shift of the sampled noise domain.
        size: Grid size in cells.
    """

    def __init__(
        self,
        regions: Sequence[Region] | None = None,
        gradient: GradientConfig | None = None,
        seed: int = 0,
        frequency: float = 2.0,
        octaves: int = 4,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
        offset: Sequence[float] = (0.0, 0.0),
        size: Sequence[int] = (1, 1),
    ):
        self.regions = list(regions) if regions is not None else default_regions()
        self.gradient = gradient if gradient is not None else GradientConfig()
        self.seed = int(seed)
        self.frequency = float(frequency)
        self.octaves = int(octaves)
        self.persistence = float(persistence)
        self.lacunarity = float(lacunarity)
        self.offset = tuple(float(v) for v in offset)
        self.size = _as_pair(size, "Noise size")

    @property
    def shape(self) -> tuple[int, int]:
        """Shape of the generated grid: one value per lattice vertex."""
        return (self.size[0] + 1, self.size[1] + 1)

    def validate(self) -> None:
        if not self.regions:
            raise ConfigurationError("At least one colour region is required")
        for region in self.regions:
            if not isinstance(region, Region):
                raise ConfigurationError(f"Expected Region, got {region!r}")
        if self.octaves < 1:
            raise ConfigurationError(f"octaves must be >= 1, got {self.octaves}")
        if self.frequency <= 0:
            raise ConfigurationError(
                f"frequency must be positive, got {self.frequency}"
            )
        if self.persistence <= 0:
            raise ConfigurationError(
                f"persistence must be positive, got {self.persistence}"
            )
        if self.lacunarity <= 0:
            raise ConfigurationError(
                f"lacunarity must be positive, got {self.lacunarity}"
            )
        if len(self.offset) != 2:
            raise ConfigurationError(f"offset must be an (x, y) pair, got {self.offset}")
        self.gradient.validate()

    def to_dict(self) -> dict:
        return {
            "regions": [region.to_dict() for region in self.regions],
            "gradient": self.gradient.to_dict(),
            "seed": self.seed,
            "frequency": self.frequency,
            "octaves": self.octaves,
            "persistence": self.persistence,
            "lacunarity": self.lacunarity,
            "offset": list(self.offset),
        }

    @classmethod
    def from_dict(cls, data: dict) -> NoiseConfig:
        data = dict(data)
        if "regions" in data:
            data["regions"] = [Region.from_dict(r) for r in data["regions"]]
        if "gradient" in data:
            data["gradient"] = GradientConfig.from_dict(data["gradient"])
        return cls(**data)

    def __repr__(self) -> str:
        return (
            f"NoiseConfig(size={self.size}, n_regions={len(self.regions)}, "
            f"seed={self.seed}, octaves={self.octaves})"
        )


class TerrainConfig:
    """Per-terrain synthesis parameters.

    Args:
        size: World-space size in tiles along x and z.
        resolution: Grid subdivisions per tile.
        wireframe: Emit a line-list mesh instead of triangles.
        height_exponent: Contrast between low and high terrain.
        sea_percent: Noise level in [0, 100] below which geometry is flat.
        export: One-shot request to forward the next build to the exporter.
        noise: Noise and colour configuration.

    Example:
        >>> config = TerrainConfig(size=(1, 1), resolution=2)
        >>> config.grid_size
        (2, 2)
        >>> config.vertex_shape
        (3, 3)
    """

    def __init__(
        self,
        size: Sequence[int] = (2, 2),
        resolution: int = 10,
        wireframe: bool = False,
        height_exponent: float = 1.0,
        sea_percent: float = 10.0,
        export: bool = False,
        noise: NoiseConfig | None = None,
    ):
        self.size = _as_pair(size, "Terrain size")
        self.resolution = int(resolution)
        self.wireframe = bool(wireframe)
        self.height_exponent = float(height_exponent)
        self.sea_percent = float(sea_percent)
        self.export = bool(export)
        self.noise = noise if noise is not None else NoiseConfig()

    @property
    def grid_size(self) -> tuple[int, int]:
        """Grid size in cells (size x resolution)."""
        return (self.size[0] * self.resolution, self.size[1] * self.resolution)

    @property
    def vertex_shape(self) -> tuple[int, int]:
        """Number of lattice (rows, cols)."""
        width, depth = self.grid_size
        return (width + 1, depth + 1)

    def validate(self) -> None:
        """Check every parameter before any generation work starts.

        Raises:
            ConfigurationError: If any parameter is out of range.
        """
        if self.size[0] <= 0 or self.size[1] <= 0:
            raise ConfigurationError(f"Terrain size must be positive, got {self.size}")
        if self.resolution <= 0:
            raise ConfigurationError(
                f"Resolution must be positive, got {self.resolution}"
            )
        if not np.isfinite(self.height_exponent) or self.height_exponent < 0:
            raise ConfigurationError(
                f"height_exponent must be >= 0, got {self.height_exponent}"
            )
        if not 0.0 <= self.sea_percent <= 100.0:
            raise ConfigurationError(
                f"sea_percent must be in [0, 100], got {self.sea_percent}"
            )
        self.noise.validate()

    def sync_noise_size(self) -> None:
        """Write the derived grid size into the noise configuration."""
        self.noise.size = self.grid_size

    def to_dict(self) -> dict:
        return {
            "size": list(self.size),
            "resolution": self.resolution,
            "wireframe": self.wireframe,
            "height_exponent": self.height_exponent,
            "sea_percent": self.sea_percent,
            "export": self.export,
            "noise": self.noise.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> TerrainConfig:
        data = dict(data)
        try:
            if "noise" in data:
                data["noise"] = NoiseConfig.from_dict(data["noise"])
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid terrain configuration: {e}") from e

    def fingerprint(self) -> str:
        """Hash of every parameter that affects the built mesh or image.

        The export flag and the image handle are excluded.
        """
        data = self.to_dict()
        data.pop("export")
        payload = json.dumps(data, sort_keys=True).encode("utf-8")
        return hashlib.sha1(payload).hexdigest()

    def __repr__(self) -> str:
        return (
            f"TerrainConfig(size={self.size}, resolution={self.resolution}, "
            f"wireframe={self.wireframe}, height_exponent={self.height_exponent}, "
            f"sea_percent={self.sea_percent})"
        )
