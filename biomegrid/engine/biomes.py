"""
Biome classification by ascending elevation threshold.
"""

from typing import Dict, List, Sequence

import numpy as np

from ..config import TABLE_A, UNKNOWN_BIOME, Biome


def classify(elevation: float, biomes: Sequence[Biome] = TABLE_A) -> Biome:
    """
    Return the first biome whose threshold is >= elevation.

    Ties go to the lower biome since the scan is ascending. Elevations
    above every threshold (or NaN) return UNKNOWN_BIOME rather than raising.
    """
    for biome in biomes:
        if elevation <= biome.max:
            return biome
    return UNKNOWN_BIOME


def pick_color(elevation: float, biomes: Sequence[Biome] = TABLE_A) -> str:
    return classify(elevation, biomes).color


def classify_grid(elevations: np.ndarray, biomes: Sequence[Biome] = TABLE_A) -> List[List[Biome]]:
    """Classify every cell of a (height, width) elevation grid, row-major."""
    return [[classify(float(e), biomes) for e in row] for row in elevations]


def biome_coverage(
    biome_grid: List[List[Biome]],
    biomes: Sequence[Biome] = TABLE_A
) -> Dict[str, float]:
    """
    Fraction of cells in each biome.

    Args:
        biome_grid: Output of classify_grid
        biomes: Table giving the key order; every table biome is reported

    Returns:
        Dict mapping biome name to fraction of cells, in table order
    """

    counts = {biome.name: 0 for biome in biomes}
    total = 0
    for row in biome_grid:
        for biome in row:
            counts[biome.name] = counts.get(biome.name, 0) + 1
            total += 1

    if total == 0:
        return {name: 0.0 for name in counts}
    return {name: count / total for name, count in counts.items()}
