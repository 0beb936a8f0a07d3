"""
Outer surfaces for map generation.

- cli: command-line boundary with fallback defaults
- api: FastAPI server returning grids as JSON
"""

from .cli import main, parse_seed, parse_size
from .api import create_app

__all__ = ["main", "parse_seed", "parse_size", "create_app"]
