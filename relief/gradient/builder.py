"""Colour gradients built from elevation regions."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from scipy.interpolate import make_interp_spline

from relief.config import Region
from relief.exceptions import GradientError

logger = logging.getLogger(__name__)

DOMAIN = (0.0, 100.0)


def _piecewise_linear(
    t: np.ndarray, knots: np.ndarray, values: np.ndarray
) -> np.ndarray:
    """Interpolate ``values`` over non-decreasing ``knots``.

    Repeated knots produce a step: a sample exactly on the repeated knot
    takes the value on its right.
    """
    t = np.clip(t, knots[0], knots[-1])
    idx = np.searchsorted(knots, t, side="right") - 1
    idx = np.clip(idx, 0, len(knots) - 2)

    left = knots[idx]
    span = knots[idx + 1] - left
    with np.errstate(divide="ignore", invalid="ignore"):
        frac = np.where(span > 0, (t - left) / np.where(span > 0, span, 1.0), 0.0)

    frac = frac[..., np.newaxis]
    return values[idx] + frac * (values[idx + 1] - values[idx])


class Gradient:
    """Continuous RGBA colour ramp.

    Colours are interpolated linearly between knots with a degree-1
    B-spline. Samples outside the domain take the nearest edge colour.

    Args:
        positions: Strictly increasing knot positions.
        colors: Float RGBA colours in [0, 1], shape (n, 4).

    Raises:
        GradientError: If the knots cannot define a ramp.

    Example:
        >>> grad = Gradient([0, 100], [[0, 0, 0, 1], [1, 1, 1, 1]])
        >>> grad.at(50)
        (0.5, 0.5, 0.5, 1.0)
    """

    def __init__(self, positions: Sequence[float], colors: np.ndarray):
        positions = np.asarray(positions, dtype=float)
        colors = np.asarray(colors, dtype=float)

        if positions.ndim != 1 or len(positions) < 2:
            raise GradientError("A gradient needs at least two positions")
        if colors.shape != (len(positions), 4):
            raise GradientError(
                f"Expected {len(positions)} RGBA colours, got shape {colors.shape}"
            )
        if np.any(~np.isfinite(positions)):
            raise GradientError("Gradient positions contain NaN or infinite values")

        try:
            self._spline = make_interp_spline(positions, colors, k=1)
        except ValueError as e:
            raise GradientError(f"Invalid gradient domain {positions.tolist()}: {e}") from e

        self._positions = positions
        self._colors = colors

    @property
    def domain(self) -> tuple[float, float]:
        """(start, end) of the gradient domain."""
        return float(self._positions[0]), float(self._positions[-1])

    @property
    def positions(self) -> np.ndarray:
        return self._positions.copy()

    def __call__(self, t) -> np.ndarray:
        """Sample float RGBA colours, shape ``np.shape(t) + (4,)``."""
        t = np.clip(np.asarray(t, dtype=float), *self.domain)
        return np.clip(self._spline(t), 0.0, 1.0)

    def at(self, t: float) -> tuple[float, float, float, float]:
        """Sample a single colour as a tuple."""
        return tuple(float(c) for c in self(t))

    def colors(self, n: int) -> np.ndarray:
        """Return ``n`` colours sampled evenly across the domain."""
        if n == 1:
            return self(np.array([self.domain[0]]))
        return self(np.linspace(*self.domain, n))

    def sharp(self, segments: int, smoothness: float = 0.0) -> QuantizedGradient:
        """Quantize into ``segments`` flat colour bands.

        Args:
            segments: Number of bands, must be positive.
            smoothness: Transition width between bands, clamped to [0, 1].
                0 gives a hard step.
        """
        if segments < 1:
            raise GradientError(f"segments must be positive, got {segments}")
        return QuantizedGradient(self.colors(segments), self.domain, smoothness)

    def __repr__(self) -> str:
        return f"Gradient(n_stops={len(self._positions)}, domain={self.domain})"


class QuantizedGradient:
    """Gradient made of flat colour bands of equal width.

    Each boundary is blended over ``smoothness * band_width / 4`` on either
    side.

    Args:
        colors: One float RGBA colour per band, shape (n, 4).
        domain: (start, end) of the gradient domain.
        smoothness: Blend amount in [0, 1]. Values outside are clamped.
    """

    def __init__(
        self,
        colors: np.ndarray,
        domain: tuple[float, float],
        smoothness: float = 0.0,
    ):
        colors = np.asarray(colors, dtype=float)
        n = len(colors)
        if n < 1:
            raise GradientError("A quantized gradient needs at least one band")

        dmin, dmax = domain
        blend = float(np.clip(smoothness, 0.0, 1.0)) * (dmax - dmin) / n / 4.0
        edges = np.linspace(dmin, dmax, n + 1)

        starts = edges[:-1].copy()
        ends = edges[1:].copy()
        starts[1:] += blend
        ends[:-1] -= blend

        self._knots = np.empty(2 * n)
        self._knots[0::2] = starts
        self._knots[1::2] = ends
        self._values = np.repeat(colors, 2, axis=0)
        self._domain = (float(dmin), float(dmax))
        self._n_segments = n

    @property
    def domain(self) -> tuple[float, float]:
        return self._domain

    @property
    def n_segments(self) -> int:
        """Number of flat colour bands."""
        return self._n_segments

    def __call__(self, t) -> np.ndarray:
        return _piecewise_linear(
            np.asarray(t, dtype=float), self._knots, self._values
        )

    def at(self, t: float) -> tuple[float, float, float, float]:
        return tuple(float(c) for c in self(t))

    def __repr__(self) -> str:
        return (
            f"QuantizedGradient(n_segments={self._n_segments}, "
            f"domain={self._domain})"
        )


def build_gradient(
    regions: Sequence[Region],
    segments: int = 0,
    smoothness: float = 0.0,
) -> Gradient | QuantizedGradient:
    """Build the terrain colour gradient from elevation regions.

    Regions are sorted by position and used as knots. When the positions
    cannot form a domain (duplicates, fewer than two, non-finite values),
    the colours are spread evenly over [0, 100] in their declared order.

    Args:
        regions: Colour control points, in any order.
        segments: Number of flat bands. 0 keeps the gradient continuous.
        smoothness: Band transition width, see :meth:`Gradient.sharp`.

    Returns:
        Callable gradient mapping positions to float RGBA.

    Raises:
        GradientError: If neither the declared nor the evenly spaced
            domain produce a gradient.
    """
    ordered = sorted(regions, key=lambda region: region.position)
    colors = np.array([region.color_float for region in ordered]).reshape(-1, 4)
    positions = [region.position for region in ordered]

    try:
        gradient = Gradient(positions, colors)
    except GradientError as e:
        logger.warning("%s; falling back to an evenly spaced domain", e)
        declared = np.array([region.color_float for region in regions]).reshape(-1, 4)
        try:
            gradient = Gradient(np.linspace(*DOMAIN, len(declared)), declared)
        except GradientError as fallback_error:
            raise GradientError(
                f"Gradient generation failed for {len(regions)} region(s): "
                f"{fallback_error}"
            ) from fallback_error

    if segments > 0:
        return gradient.sharp(segments, smoothness)
    return gradient
