import numpy as np
import pytest

from relief.config import GradientConfig, NoiseConfig, Region, TerrainConfig
from relief.resources import MemoryResourcePool


class RampNoise:
    """Noise double returning a linear ramp from 0 to 100 along rows."""

    def __init__(self):
        self.calls = 0

    def __call__(self, config):
        self.calls += 1
        rows, cols = config.shape
        column = np.linspace(0.0, 100.0, rows)
        return np.repeat(column[:, np.newaxis], cols, axis=1)


class ConstantNoise:
    def __init__(self, value):
        self.value = value

    def __call__(self, config):
        return np.full(config.shape, float(self.value))


class RecordingExporter:
    def __init__(self):
        self.calls = []

    def __call__(self, positions, indices, colors, topology="triangle_list"):
        self.calls.append((positions, indices, colors, topology))


@pytest.fixture
def black_to_white():
    return [
        Region(0.0, (0, 0, 0, 255)),
        Region(100.0, (255, 255, 255, 255)),
    ]


@pytest.fixture
def small_config(black_to_white):
    return TerrainConfig(
        size=(1, 1),
        resolution=2,
        height_exponent=1.0,
        sea_percent=0.0,
        noise=NoiseConfig(regions=black_to_white, gradient=GradientConfig(size=(10, 2))),
    )


@pytest.fixture
def ramp_noise():
    return RampNoise()


@pytest.fixture
def exporter():
    return RecordingExporter()


@pytest.fixture
def pools():
    return MemoryResourcePool("images"), MemoryResourcePool("meshes")
