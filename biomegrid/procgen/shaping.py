"""
Elevation curve post-processing.

A power-law bias followed by a low-frequency modulation layer, then a
clamp into [0, 1]. The clamp is required: modulation can push values
slightly above 1 and the biome classifier expects in-range input.
"""

import numpy as np

from .noise import value_noise, value_noise_array
from .seeding import SeedContext


def shape_elevation(
    raw: float,
    x: int,
    y: int,
    context: SeedContext,
    modulation_layer: int,
    exponent: float = 0.65,
    modulation_scale: float = 0.02,
    modulation_strength: float = 0.3
) -> float:
    """
    Apply the elevation curve to one cell.

    Args:
        raw: Fractal elevation for the cell
        x, y: Cell coordinate
        context: Seed context of the run
        modulation_layer: Layer index used for the modulation noise
        exponent: Power-law exponent (< 1 lifts mid-range values)
        modulation_scale: Frequency of the modulation noise
        modulation_strength: Maximum relative boost from modulation

    Returns:
        Elevation clamped to [0, 1]
    """

    e = raw ** exponent
    sample = value_noise(x * modulation_scale, y * modulation_scale, context.term(modulation_layer))
    e = e * (1 + sample * modulation_strength)
    return max(0.0, min(1.0, e))


def shape_elevation_array(
    raw: np.ndarray,
    x: np.ndarray,
    y: np.ndarray,
    context: SeedContext,
    modulation_layer: int,
    exponent: float = 0.65,
    modulation_scale: float = 0.02,
    modulation_strength: float = 0.3
) -> np.ndarray:
    """Vectorized shape_elevation."""

    e = np.power(raw, exponent)
    sample = value_noise_array(x * modulation_scale, y * modulation_scale, context.term(modulation_layer))
    e = e * (1 + sample * modulation_strength)
    return np.clip(e, 0.0, 1.0)
