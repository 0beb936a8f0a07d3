"""
Command-line entry point for map generation.

This is the boundary where loose user input becomes strict core
arguments: unparsable or zero seeds fall back to 1 and missing sizes fall
back to the preset dimensions. The core itself never substitutes defaults.
"""

import argparse
import logging
import re
import sys
from typing import List, Optional, Tuple

from ..config import DEFAULT_PRESET, PRESETS, GenerationConfig, get_preset
from ..engine import StreamSink, TerrainComposer
from ..engine.terrain_composer import BACKENDS, OUTPUTS
from ..errors import BiomeGridError
from ..procgen import SEED_STRATEGIES

DEFAULT_SEED = 1

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")
_SIZE_SEPARATOR = re.compile(r"x|×")


def parse_int_prefix(text: Optional[str]) -> Optional[int]:
    """Parse a leading integer the lenient way ("12abc" -> 12, "abc" -> None)."""
    if text is None:
        return None
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_seed(text: Optional[str]) -> int:
    return parse_int_prefix(text) or DEFAULT_SEED


def parse_size(text: Optional[str], default_width: int, default_height: int) -> Tuple[int, int]:
    """
    Parse "<cols>x<rows>".

    Each part that is missing, zero or unparsable falls back to its default.
    """

    parts = _SIZE_SEPARATOR.split((text or "").lower())
    width = parse_int_prefix(parts[0]) if parts else None
    height = parse_int_prefix(parts[1]) if len(parts) > 1 else None
    return width or default_width, height or default_height


def build_config(args: argparse.Namespace) -> GenerationConfig:
    config = get_preset(args.preset)
    overrides = {
        name: getattr(args, name)
        for name in ("octaves", "persistence", "scale", "seed_strategy")
        if getattr(args, name) is not None
    }
    return config.replace(**overrides) if overrides else config


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a seeded elevation/biome grid")
    parser.add_argument("--seed", default=None, help="Seed (any integer, default 1)")
    parser.add_argument("--size", default=None, help="Map size as COLSxROWS (default from preset)")
    parser.add_argument("--preset", choices=sorted(PRESETS), default=DEFAULT_PRESET, help="Named preset")
    parser.add_argument("--output", choices=OUTPUTS, default="colors", help="Cell contents")
    parser.add_argument("--format", choices=StreamSink.FORMATS, default="json", help="Output format")
    parser.add_argument("--backend", choices=BACKENDS, default="numpy", help="Evaluation backend")
    parser.add_argument("--octaves", type=int, default=None, help="Override octave count")
    parser.add_argument("--persistence", type=float, default=None, help="Override persistence")
    parser.add_argument("--scale", type=float, default=None, help="Override base scale")
    parser.add_argument("--strategy", dest="seed_strategy", choices=SEED_STRATEGIES, default=None,
                        help="Override seed strategy")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""

    args = make_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = build_config(args)
        seed = parse_seed(args.seed)
        width, height = parse_size(args.size, config.width, config.height)

        composer = TerrainComposer(config, backend=args.backend)
        composer.paint(StreamSink(sys.stdout, args.format), seed, width, height, output=args.output)
    except BiomeGridError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
