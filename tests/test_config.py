"""Tests for terrain configuration records."""

import pytest

from relief.config import GradientConfig, NoiseConfig, Region, TerrainConfig
from relief.exceptions import ConfigurationError


def test_defaults():
    config = TerrainConfig()
    assert config.size == (2, 2)
    assert config.resolution == 10
    assert config.wireframe is False
    assert config.height_exponent == 1.0
    assert config.sea_percent == 10.0
    assert config.export is False
    config.validate()


def test_derived_grid_size():
    config = TerrainConfig(size=(3, 2), resolution=4)
    assert config.grid_size == (12, 8)
    assert config.vertex_shape == (13, 9)

    config.sync_noise_size()
    assert config.noise.size == (12, 8)
    assert config.noise.shape == (13, 9)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"resolution": 0},
        {"size": (0, 2)},
        {"height_exponent": -1.0},
        {"sea_percent": 120.0},
        {"noise": NoiseConfig(regions=[])},
        {"noise": NoiseConfig(gradient=GradientConfig(size=(0, 4)))},
        {"noise": NoiseConfig(gradient=GradientConfig(segments=-2))},
        {"noise": NoiseConfig(octaves=0)},
        {"noise": NoiseConfig(persistence=-1.0)},
        {"noise": NoiseConfig(persistence=0.0)},
        {"noise": NoiseConfig(lacunarity=0.0)},
    ],
)
def test_invalid_configs(kwargs):
    with pytest.raises(ConfigurationError):
        TerrainConfig(**kwargs).validate()


def test_region_colours():
    region = Region(40, (10, 20, 30))
    assert region.color == (10, 20, 30, 255)

    with pytest.raises(ConfigurationError):
        Region(40, (300, 0, 0, 255))
    with pytest.raises(ConfigurationError):
        Region(40, (1, 2))


def test_dict_round_trip():
    config = TerrainConfig(
        size=(3, 5),
        resolution=7,
        wireframe=True,
        sea_percent=25.0,
        noise=NoiseConfig(
            regions=[Region(0, (0, 0, 0, 255)), Region(60, (9, 8, 7, 6))],
            gradient=GradientConfig(segments=4, smoothness=0.2),
            seed=11,
        ),
    )
    restored = TerrainConfig.from_dict(config.to_dict())

    assert restored.to_dict() == config.to_dict()
    assert restored.noise.regions[1] == Region(60, (9, 8, 7, 6))


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigurationError):
        TerrainConfig.from_dict({"size": [1, 1], "altitude": 3})


def test_fingerprint_tracks_geometry_parameters():
    config = TerrainConfig()
    before = config.fingerprint()

    config.export = True
    assert config.fingerprint() == before

    config.sea_percent = 42.0
    assert config.fingerprint() != before


def test_fingerprint_ignores_image_handle():
    config = TerrainConfig()
    before = config.fingerprint()
    config.noise.gradient.image = object()
    assert config.fingerprint() == before
