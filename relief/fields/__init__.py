"""Noise field generation."""

from relief.fields.noise import NoiseGenerator, SimplexNoise, generate_noise_grid

__all__ = ["NoiseGenerator", "SimplexNoise", "generate_noise_grid"]
