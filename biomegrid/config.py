"""
Generation configuration and biome tables.

This module defines:
- Biome: one discrete terrain category with its inclusive upper threshold
- GenerationConfig: immutable record of every pipeline tunable
- PRESETS: the "classic" and "wide" deployments
"""

import math
from dataclasses import asdict, dataclass, fields, replace as _replace
from numbers import Integral, Real
from typing import Any, Dict, List, Mapping, Tuple

from .errors import InvalidConfigError
from .procgen.seeding import SEED_STRATEGIES


@dataclass(frozen=True)
class Biome:
    name: str
    max: float
    color: str


UNKNOWN_BIOME = Biome("unknown", math.inf, "#000000")

# Ascending thresholds; last bound must be 1.0
TABLE_A: Tuple[Biome, ...] = (
    Biome("deep ocean", 0.35, "#1565c0"),
    Biome("coast", 0.42, "#42a5f5"),
    Biome("grassland", 0.51, "#81c784"),
    Biome("forest", 0.60, "#388e3c"),
    Biome("mountain", 1.00, "#795548"),
)

TABLE_B: Tuple[Biome, ...] = (
    Biome("deep ocean", 0.30, "#1565c0"),
    Biome("coast", 0.38, "#42a5f5"),
    Biome("grassland", 0.50, "#81c784"),
    Biome("forest", 0.65, "#388e3c"),
    Biome("mountain", 1.00, "#795548"),
)


def validate_biome_table(biomes: Any) -> List[str]:
    """Return every problem found in a biome table (empty if valid)."""

    errors = []
    if not isinstance(biomes, (tuple, list)) or len(biomes) == 0:
        return ["biomes must be a non-empty sequence of Biome"]

    previous = None
    for i, biome in enumerate(biomes):
        if not isinstance(biome, Biome):
            errors.append(f"biomes[{i}] must be a Biome, got {type(biome).__name__}")
            continue
        if not isinstance(biome.max, Real) or isinstance(biome.max, bool):
            errors.append(f"biomes[{i}].max must be a number")
            continue
        if not (0.0 < biome.max <= 1.0):
            errors.append(f"biomes[{i}].max = {biome.max} must be in (0, 1]")
        if previous is not None and biome.max <= previous:
            errors.append(
                f"biomes[{i}].max = {biome.max} must be greater than previous threshold {previous}"
            )
        previous = biome.max

    last = biomes[-1]
    if isinstance(last, Biome) and last.max != 1.0:
        errors.append(f"last biome threshold must be 1.0, got {last.max}")

    return errors


# Upper bounds on the octave loop and on any lattice frequency
MAX_OCTAVES = 32
MAX_FREQUENCY = 2.0 ** 32


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class GenerationConfig:
    """
    Immutable configuration for one generation run.

    Construction validates every field and raises InvalidConfigError
    listing all problems at once. ``width`` and ``height`` are only the
    defaults offered by the CLI and API; the core always receives explicit
    dimensions.
    """

    octaves: int = 4
    persistence: float = 0.5
    scale: float = 0.08
    biomes: Tuple[Biome, ...] = TABLE_A
    seed_strategy: str = "sequence"
    elevation_exponent: float = 0.65
    modulation_scale: float = 0.02
    modulation_strength: float = 0.3
    width: int = 100
    height: int = 120

    def __post_init__(self):
        if isinstance(self.biomes, list):
            object.__setattr__(self, "biomes", tuple(self.biomes))
        errors = self.collect_errors()
        if errors:
            raise InvalidConfigError(errors)

    def collect_errors(self) -> List[str]:
        errors = []

        octaves_ok = _is_int(self.octaves) and 1 <= self.octaves <= MAX_OCTAVES
        if not octaves_ok:
            errors.append(f"octaves must be an integer in [1, {MAX_OCTAVES}], got {self.octaves!r}")
        if not _is_number(self.persistence) or not (0.0 < self.persistence <= 1.0):
            errors.append(f"persistence must be in (0, 1], got {self.persistence!r}")
        if not _is_number(self.scale) or self.scale <= 0:
            errors.append(f"scale must be > 0, got {self.scale!r}")
        elif octaves_ok and self.scale * 2.0 ** (self.octaves - 1) > MAX_FREQUENCY:
            # top octave samples at scale * 2^(octaves - 1)
            errors.append(
                f"scale * 2^(octaves - 1) must be <= {MAX_FREQUENCY:.0f}, "
                f"got scale={self.scale!r} with octaves={self.octaves}"
            )
        if self.seed_strategy not in SEED_STRATEGIES:
            errors.append(
                f"seed_strategy must be one of {', '.join(SEED_STRATEGIES)}, got {self.seed_strategy!r}"
            )
        if not _is_number(self.elevation_exponent) or self.elevation_exponent <= 0:
            errors.append(f"elevation_exponent must be > 0, got {self.elevation_exponent!r}")
        if (not _is_number(self.modulation_scale) or self.modulation_scale <= 0
                or self.modulation_scale > MAX_FREQUENCY):
            errors.append(
                f"modulation_scale must be in (0, {MAX_FREQUENCY:.0f}], got {self.modulation_scale!r}"
            )
        if not _is_number(self.modulation_strength) or self.modulation_strength < 0:
            errors.append(f"modulation_strength must be >= 0, got {self.modulation_strength!r}")
        for name in ("width", "height"):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                errors.append(f"{name} must be a positive integer, got {value!r}")

        errors.extend(validate_biome_table(self.biomes))
        return errors

    @property
    def layers(self) -> int:
        """Noise layers consumed per cell: one per octave plus the modulation layer."""
        return self.octaves + 1

    def replace(self, **changes) -> "GenerationConfig":
        return _replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["biomes"] = [asdict(b) for b in self.biomes]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationConfig":
        """
        Build a config from a plain mapping such as a decoded JSON payload.

        Args:
            data: Field values; missing fields keep their defaults. ``biomes``
                may be a list of {"name", "max", "color"} mappings.

        Returns:
            Validated GenerationConfig
        """

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfigError([f"Unknown config field: {name}" for name in unknown])

        values = dict(data)
        if "biomes" in values:
            values["biomes"] = _biomes_from_data(values["biomes"])
        return cls(**values)


def _biomes_from_data(raw: Any) -> Tuple[Biome, ...]:
    if not isinstance(raw, (list, tuple)):
        raise InvalidConfigError("biomes must be a list")

    table = []
    errors = []
    for i, item in enumerate(raw):
        if isinstance(item, Biome):
            table.append(item)
        elif isinstance(item, Mapping):
            missing = [k for k in ("name", "max", "color") if k not in item]
            if missing:
                errors.append(f"biomes[{i}] missing field(s): {', '.join(missing)}")
                continue
            table.append(Biome(str(item["name"]), item["max"], str(item["color"])))
        else:
            errors.append(f"biomes[{i}] must be a mapping, got {type(item).__name__}")
    if errors:
        raise InvalidConfigError(errors)
    return tuple(table)


PRESETS: Dict[str, GenerationConfig] = {
    "classic": GenerationConfig(
        biomes=TABLE_A, seed_strategy="sequence", width=100, height=120
    ),
    "wide": GenerationConfig(
        biomes=TABLE_B, seed_strategy="hashed", width=160, height=100
    ),
}

DEFAULT_PRESET = "classic"


def get_preset(name: str) -> GenerationConfig:
    """Look up a named preset."""
    try:
        return PRESETS[name]
    except KeyError:
        raise InvalidConfigError(
            f"Unknown preset {name!r} (available: {', '.join(sorted(PRESETS))})"
        ) from None
