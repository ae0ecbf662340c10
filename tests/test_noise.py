"""Tests for the default noise generator."""

import numpy as np

from relief.config import NoiseConfig
from relief.fields import SimplexNoise, generate_noise_grid


def test_grid_shape_and_range():
    grid = generate_noise_grid(NoiseConfig(size=(12, 7)))

    assert grid.shape == (13, 8)
    assert grid.min() >= 0.0
    assert grid.max() <= 100.0


def test_seed_is_deterministic():
    noise = SimplexNoise()
    a = noise(NoiseConfig(seed=3, size=(8, 8)))
    b = noise(NoiseConfig(seed=3, size=(8, 8)))
    c = noise(NoiseConfig(seed=4, size=(8, 8)))

    np.testing.assert_array_equal(a, b)
    assert not np.allclose(a, c)


def test_resolution_refines_same_landscape():
    noise = SimplexNoise()
    coarse = noise(NoiseConfig(seed=5, size=(4, 4)))
    fine = noise(NoiseConfig(seed=5, size=(8, 8)))

    np.testing.assert_allclose(fine[::2, ::2], coarse)


def test_offset_shifts_field():
    noise = SimplexNoise()
    a = noise(NoiseConfig(seed=1, size=(6, 6)))
    b = noise(NoiseConfig(seed=1, size=(6, 6), offset=(0.37, 0.0)))
    assert not np.allclose(a, b)


def test_generator_cache_holds_one_seed():
    noise = SimplexNoise()
    first = noise._generator(1)

    assert noise._generator(1) is first
    assert noise._generator(2) is not first
    assert noise._generator(1) is not first
