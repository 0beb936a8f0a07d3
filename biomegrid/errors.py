"""
Error types for terrain grid generation.

Every error is raised before any grid is allocated, so a caller never
receives a partially filled grid.
"""


class BiomeGridError(ValueError):
    """Base class for all generation errors."""


class InvalidDimensionError(BiomeGridError):
    """Width or height is not a positive integer."""


class InvalidConfigError(BiomeGridError):
    """Generation configuration is malformed."""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class UnclassifiableElevationError(BiomeGridError):
    """An elevation matched no biome threshold."""

    def __init__(self, elevation: float, x: int, y: int):
        self.elevation = elevation
        self.x = x
        self.y = y
        super().__init__(f"Elevation {elevation!r} at ({x}, {y}) matched no biome")
