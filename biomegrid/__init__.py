"""
Seed-reproducible elevation grids with threshold biome classification.
"""

from .errors import (
    BiomeGridError, InvalidDimensionError,
    InvalidConfigError, UnclassifiableElevationError
)
from .config import (
    Biome, GenerationConfig, PRESETS, DEFAULT_PRESET, MAX_OCTAVES,
    TABLE_A, TABLE_B, UNKNOWN_BIOME, get_preset
)
from .engine import TerrainComposer, classify, generate

__version__ = "0.1.0"

__all__ = [
    "BiomeGridError", "InvalidDimensionError",
    "InvalidConfigError", "UnclassifiableElevationError",
    "Biome", "GenerationConfig", "PRESETS", "DEFAULT_PRESET", "MAX_OCTAVES",
    "TABLE_A", "TABLE_B", "UNKNOWN_BIOME", "get_preset",
    "TerrainComposer", "classify", "generate",
]
