"""
Noise functions for terrain generation.

Deterministic lattice value noise and its fractal (multi-octave) sum.
Each function has a scalar form used by the per-cell reference path and
an ``_array`` twin used by the vectorized path; both evaluate the same
expressions in the same order.
"""

import math

import numpy as np

from .hashing import TWO_POW_32, hash2d, hash2d_array
from .seeding import SeedContext


def fade(t):
    """Quintic smoothstep 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(a, b, t):
    return a + (b - a) * t


def value_noise(x: float, y: float, seed_term: int) -> float:
    """
    Smoothly interpolated lattice value noise at a real coordinate.

    Args:
        x, y: Query point
        seed_term: 32-bit seed contribution for this layer

    Returns:
        Noise value, interpolated from four corner hashes in [0, 1)
    """
    xi = math.floor(x)
    yi = math.floor(y)
    xf = x - xi
    yf = y - yi

    v00 = hash2d(xi, yi, seed_term)
    v10 = hash2d(xi + 1, yi, seed_term)
    v01 = hash2d(xi, yi + 1, seed_term)
    v11 = hash2d(xi + 1, yi + 1, seed_term)

    u = fade(xf)
    i1 = lerp(v00, v10, u)
    i2 = lerp(v01, v11, u)
    return lerp(i1, i2, fade(yf))


def value_noise_array(x: np.ndarray, y: np.ndarray, seed_term: int) -> np.ndarray:
    """Vectorized value_noise over coordinate arrays of equal shape."""

    x0 = np.floor(x)
    y0 = np.floor(y)
    xf = x - x0
    yf = y - y0

    # The hash only sees coordinates mod 2^32; reducing first keeps the
    # int64 cast exact for any finite coordinate.
    xi = np.mod(x0, TWO_POW_32).astype(np.int64)
    yi = np.mod(y0, TWO_POW_32).astype(np.int64)

    v00 = hash2d_array(xi, yi, seed_term)
    v10 = hash2d_array(xi + 1, yi, seed_term)
    v01 = hash2d_array(xi, yi + 1, seed_term)
    v11 = hash2d_array(xi + 1, yi + 1, seed_term)

    u = fade(xf)
    i1 = lerp(v00, v10, u)
    i2 = lerp(v01, v11, u)
    return lerp(i1, i2, fade(yf))


def fractal_elevation(
    x: float,
    y: float,
    context: SeedContext,
    octaves: int = 4,
    persistence: float = 0.5,
    scale: float = 0.08
) -> float:
    """
    Sum value noise over several octaves and normalize by total amplitude.

    Args:
        x, y: Cell coordinate
        context: Seed context; octave o reads layer o
        octaves: Number of octaves to sum
        persistence: Amplitude reduction per octave
        scale: Base frequency (lower = larger features)

    Returns:
        Normalized elevation, approximately in [0, 1]
    """

    amplitude = 1.0
    frequency = 1.0
    value = 0.0
    normalizer = 0.0

    for o in range(octaves):
        value += amplitude * value_noise(
            (x * scale) * frequency,
            (y * scale) * frequency,
            context.term(o)
        )
        normalizer += amplitude
        amplitude *= persistence
        frequency *= 2

    return value / normalizer


def fractal_elevation_array(
    x: np.ndarray,
    y: np.ndarray,
    context: SeedContext,
    octaves: int = 4,
    persistence: float = 0.5,
    scale: float = 0.08
) -> np.ndarray:
    """Vectorized fractal_elevation; one array pass per octave."""

    amplitude = 1.0
    frequency = 1.0
    value = np.zeros(np.shape(x), dtype=np.float64)
    normalizer = 0.0

    for o in range(octaves):
        value += amplitude * value_noise_array(
            (x * scale) * frequency,
            (y * scale) * frequency,
            context.term(o)
        )
        normalizer += amplitude
        amplitude *= persistence
        frequency *= 2

    return value / normalizer
