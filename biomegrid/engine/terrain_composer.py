"""
Grid driver for seeded terrain generation.

Evaluates the fractal -> shaping pipeline for every cell of a
width x height grid and classifies the result into biomes. Cells have no
dependencies on each other; the only run-wide state is the immutable
config and seed context.
"""

import logging
from numbers import Integral
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from ..config import UNKNOWN_BIOME, Biome, GenerationConfig
from ..errors import InvalidConfigError, InvalidDimensionError, UnclassifiableElevationError
from ..procgen import (
    SeedContext, fractal_elevation, fractal_elevation_array,
    make_seed_context, shape_elevation, shape_elevation_array
)
from .biomes import biome_coverage, classify_grid
from .grid_sink import GridSink

logger = logging.getLogger(__name__)

BACKENDS = ("numpy", "reference")
OUTPUTS = ("colors", "biomes", "elevation")


def validate_dimensions(width: Any, height: Any) -> None:
    for name, value in (("width", width), ("height", height)):
        if not isinstance(value, Integral) or isinstance(value, bool):
            raise InvalidDimensionError(f"{name} must be an integer, got {type(value).__name__}")
        if value <= 0:
            raise InvalidDimensionError(f"{name} must be positive, got {value}")


def validate_seed(seed: Any) -> None:
    if not isinstance(seed, Integral) or isinstance(seed, bool):
        raise InvalidConfigError(f"seed must be an integer, got {type(seed).__name__}")


class TerrainComposer:
    """
    Seeded elevation and biome grid generator.

    Args:
        config: Immutable generation config shared by every run
        backend: "numpy" (vectorized) or "reference" (per-cell loop)
    """

    def __init__(self, config: Optional[GenerationConfig] = None, backend: str = "numpy"):
        if backend not in BACKENDS:
            raise InvalidConfigError(
                f"Unknown backend {backend!r} (available: {', '.join(BACKENDS)})"
            )
        self.config = config if config is not None else GenerationConfig()
        self.backend = backend

    def seed_context(self, seed: int) -> SeedContext:
        return make_seed_context(self.config.seed_strategy, int(seed), self.config.layers)

    def elevation_at(self, x: int, y: int, context: SeedContext) -> float:
        """Full per-cell pipeline: fractal accumulation then shaping."""
        cfg = self.config
        raw = fractal_elevation(x, y, context, cfg.octaves, cfg.persistence, cfg.scale)
        return shape_elevation(
            raw, x, y, context,
            modulation_layer=cfg.octaves,
            exponent=cfg.elevation_exponent,
            modulation_scale=cfg.modulation_scale,
            modulation_strength=cfg.modulation_strength
        )

    def _rows_array(self, ys: np.ndarray, width: int, context: SeedContext) -> np.ndarray:
        cfg = self.config
        X, Y = np.meshgrid(
            np.arange(width, dtype=np.float64),
            ys.astype(np.float64),
            indexing="xy"
        )
        raw = fractal_elevation_array(X, Y, context, cfg.octaves, cfg.persistence, cfg.scale)
        return shape_elevation_array(
            raw, X, Y, context,
            modulation_layer=cfg.octaves,
            exponent=cfg.elevation_exponent,
            modulation_scale=cfg.modulation_scale,
            modulation_strength=cfg.modulation_strength
        )

    def _row_reference(self, y: int, width: int, context: SeedContext) -> np.ndarray:
        return np.array([self.elevation_at(x, y, context) for x in range(width)], dtype=np.float64)

    def iter_rows(self, seed: int, width: int, height: int) -> Iterator[Tuple[int, np.ndarray]]:
        """
        Yield (y, row) pairs in row order.

        Stopping iteration between rows is the supported way to cancel a
        long generation.
        """

        validate_seed(seed)
        validate_dimensions(width, height)
        context = self.seed_context(seed)

        for y in range(height):
            if self.backend == "numpy":
                row = self._rows_array(np.array([y]), width, context)[0]
            else:
                row = self._row_reference(y, width, context)
            yield y, row

    def generate(self, seed: int, width: int, height: int) -> np.ndarray:
        """
        Generate an elevation grid.

        Args:
            seed: Run seed
            width: Number of columns (> 0)
            height: Number of rows (> 0)

        Returns:
            np.ndarray of shape (height, width), values in [0, 1]
        """

        validate_seed(seed)
        validate_dimensions(width, height)
        context = self.seed_context(seed)

        logger.info(
            "Generating %dx%d elevation grid (seed=%d, strategy=%s, backend=%s)",
            width, height, seed, context.strategy, self.backend
        )
        logger.debug("Seed context: %r", context)

        if self.backend == "numpy":
            grid = self._rows_array(np.arange(height), width, context)
        else:
            grid = np.empty((height, width), dtype=np.float64)
            for y in range(height):
                grid[y] = self._row_reference(y, width, context)

        logger.info("Elevation range: %.4f to %.4f", grid.min(), grid.max())
        return grid

    def classify(self, elevations: np.ndarray) -> List[List[Biome]]:
        """Classify a grid, rejecting any cell that falls through every threshold."""

        biome_grid = classify_grid(elevations, self.config.biomes)
        for y, row in enumerate(biome_grid):
            for x, biome in enumerate(row):
                if biome is UNKNOWN_BIOME:
                    raise UnclassifiableElevationError(float(elevations[y, x]), x, y)
        return biome_grid

    def generate_biomes(self, seed: int, width: int, height: int) -> Tuple[np.ndarray, List[List[Biome]]]:
        elevations = self.generate(seed, width, height)
        return elevations, self.classify(elevations)

    def generate_map(self, seed: int, width: int, height: int) -> Dict[str, Any]:
        """
        Generate elevations, biomes and summary statistics in one call.

        Returns:
            Dict with keys: elevation, biomes, colors, stats, coverage
        """

        elevations, biome_grid = self.generate_biomes(seed, width, height)

        return {
            "elevation": elevations,
            "biomes": [[b.name for b in row] for row in biome_grid],
            "colors": [[b.color for b in row] for row in biome_grid],
            "stats": {
                "min": float(elevations.min()),
                "max": float(elevations.max()),
                "mean": float(elevations.mean()),
                "std": float(elevations.std()),
            },
            "coverage": biome_coverage(biome_grid, self.config.biomes),
        }

    def render(self, seed: int, width: int, height: int, output: str = "colors") -> List[List[Any]]:
        """Produce the row-major grid a sink receives: colors, biome names or elevations."""

        if output not in OUTPUTS:
            raise InvalidConfigError(
                f"Unknown output {output!r} (available: {', '.join(OUTPUTS)})"
            )

        if output == "elevation":
            return self.generate(seed, width, height).tolist()

        result = self.generate_map(seed, width, height)
        return result["colors"] if output == "colors" else result["biomes"]

    def paint(self, sink: GridSink, seed: int, width: int, height: int, output: str = "colors") -> None:
        """
        Generate a grid and hand it to a sink.

        The grid is fully computed before the sink is touched, so a failed
        run leaves the sink unchanged.
        """

        rows = self.render(seed, width, height, output)
        sink.resize(width, height)
        sink.write(rows)
        logger.debug("Wrote %dx%d %s grid to %s", width, height, output, type(sink).__name__)


def generate(
    seed: int,
    width: int,
    height: int,
    config: Optional[GenerationConfig] = None,
    backend: str = "numpy"
) -> np.ndarray:
    """Generate an elevation grid with a one-off composer."""
    return TerrainComposer(config, backend=backend).generate(seed, width, height)
