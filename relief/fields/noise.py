"""Fractal OpenSimplex noise grids."""

from __future__ import annotations

from typing import Protocol

import numpy as np
from opensimplex import OpenSimplex

from relief.config import NoiseConfig


class NoiseGenerator(Protocol):
    """Protocol for noise grid sources."""

    def __call__(self, config: NoiseConfig) -> np.ndarray:
        """Return values in [0, 100] with shape ``config.shape``."""
        ...


class SimplexNoise:
    """Fractal Brownian motion over OpenSimplex noise.

    The lattice is sampled in coordinates normalized by the grid size, so a
    higher resolution refines the same landscape instead of widening it.
    Octave ``k`` has amplitude ``persistence**k`` and frequency
    ``frequency * lacunarity**k``. The sum is normalized by the total
    amplitude and mapped from [-1, 1] to [0, 100].

    Example:
        >>> config = NoiseConfig(seed=7, size=(20, 20))
        >>> grid = SimplexNoise()(config)
        >>> grid.shape
        (21, 21)
    """

    def __init__(self):
        self._seed: int | None = None
        self._cached: OpenSimplex | None = None

    def _generator(self, seed: int) -> OpenSimplex:
        # Only the most recent seed is kept
        if self._cached is None or seed != self._seed:
            self._cached = OpenSimplex(seed=seed)
            self._seed = seed
        return self._cached

    def __call__(self, config: NoiseConfig) -> np.ndarray:
        rows, cols = config.shape
        generator = self._generator(config.seed)

        u = np.arange(rows, dtype=float) / max(config.size[0], 1)
        v = np.arange(cols, dtype=float) / max(config.size[1], 1)

        total = np.zeros((rows, cols))
        amplitude = 1.0
        frequency = config.frequency
        amplitude_sum = 0.0
        for _ in range(config.octaves):
            # noise2array returns shape (len(y), len(x))
            layer = generator.noise2array(
                v * frequency + config.offset[1],
                u * frequency + config.offset[0],
            )
            total += amplitude * layer
            amplitude_sum += amplitude
            amplitude *= config.persistence
            frequency *= config.lacunarity

        if amplitude_sum > 0:
            total /= amplitude_sum
        return np.clip((total + 1.0) * 50.0, 0.0, 100.0)


def generate_noise_grid(config: NoiseConfig) -> np.ndarray:
    """Convenience function for one-shot noise generation."""
    return SimplexNoise()(config)
