"""
Seed context strategies.

A seed context supplies the 32-bit seed contribution that the lattice hash
adds for each noise layer. Layers 0..octaves-1 are the fractal octaves and
layer ``octaves`` is the large-scale modulation layer.

Two strategies exist and produce different terrain for the same seed:
- "sequence": layer terms are successive Mulberry32 draws from the seed
- "hashed": every layer uses seed * 2246822519 (mod 2^32)
"""

from abc import ABC, abstractmethod
from typing import Tuple

from ..errors import InvalidConfigError
from .hashing import MASK32, SEED_MULTIPLIER, Mulberry32

SEED_STRATEGIES = ("sequence", "hashed")


class SeedContext(ABC):
    """Read-only source of per-layer seed terms."""

    strategy: str = ""

    def __init__(self, seed: int):
        self.seed = seed

    @abstractmethod
    def term(self, layer: int) -> int:
        """Return the 32-bit seed contribution for a noise layer."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed})"


class HashedSeedContext(SeedContext):
    """Stateless: the raw seed scaled by a large odd constant, same for every layer."""

    strategy = "hashed"

    def __init__(self, seed: int):
        super().__init__(seed)
        self._term = (seed * SEED_MULTIPLIER) & MASK32

    def term(self, layer: int) -> int:
        return self._term


class SequenceSeedContext(SeedContext):
    """
    Terms drawn from a Mulberry32 sequence seeded once per run.

    All draws happen at construction, so the context never changes while
    cells are being evaluated and cells can be computed in any order.
    """

    strategy = "sequence"

    def __init__(self, seed: int, layers: int):
        super().__init__(seed)
        if layers < 1:
            raise InvalidConfigError(f"layers must be >= 1, got {layers}")
        prng = Mulberry32(seed)
        self.terms: Tuple[int, ...] = tuple(prng.next_uint32() for _ in range(layers))

    def term(self, layer: int) -> int:
        return self.terms[layer]


def make_seed_context(strategy: str, seed: int, layers: int) -> SeedContext:
    """
    Create the seed context for one run.

    Args:
        strategy: "sequence" or "hashed"
        seed: Run seed (any int; reduced modulo 2^32 by the hash)
        layers: Number of noise layers the pipeline will request

    Returns:
        SeedContext
    """

    if strategy == "hashed":
        return HashedSeedContext(seed)
    if strategy == "sequence":
        return SequenceSeedContext(seed, layers)
    raise InvalidConfigError(
        f"Unknown seed strategy {strategy!r} (available: {', '.join(SEED_STRATEGIES)})"
    )
