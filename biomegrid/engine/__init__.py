"""
Grid generation engine.

Drives the procgen pipeline over whole grids, classifies elevations into
biomes and hands finished grids to sinks.
"""

from .biomes import classify, pick_color, classify_grid, biome_coverage
from .grid_sink import GridSink, MemorySink, StreamSink
from .terrain_composer import TerrainComposer, generate

__all__ = [
    "classify", "pick_color", "classify_grid", "biome_coverage",
    "GridSink", "MemorySink", "StreamSink",
    "TerrainComposer", "generate",
]
