"""
Numeric generation pipeline.

- hashing: lattice hash and Mulberry32 sequence generator
- seeding: per-layer seed context strategies
- noise: value noise and fractal accumulation
- shaping: elevation curve and clamp
"""

from .hashing import Mulberry32, hash2d, hash2d_array
from .seeding import (
    SEED_STRATEGIES, SeedContext, HashedSeedContext,
    SequenceSeedContext, make_seed_context
)
from .noise import (
    fade, lerp, value_noise, value_noise_array,
    fractal_elevation, fractal_elevation_array
)
from .shaping import shape_elevation, shape_elevation_array

__all__ = [
    "Mulberry32", "hash2d", "hash2d_array",
    "SEED_STRATEGIES", "SeedContext", "HashedSeedContext",
    "SequenceSeedContext", "make_seed_context",
    "fade", "lerp", "value_noise", "value_noise_array",
    "fractal_elevation", "fractal_elevation_array",
    "shape_elevation", "shape_elevation_array",
]
