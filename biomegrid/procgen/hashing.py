"""
Integer lattice hashing and the seedable sequence generator.

All arithmetic is unsigned 32-bit with wrapping; shifts are logical.
"""

import numpy as np

MASK32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296.0

PRIME_X = 374761393
PRIME_Y = 668265263
AVALANCHE = 1274126177
SEED_MULTIPLIER = 2246822519

MULBERRY_INCREMENT = 0x6D2B79F5


def hash2d(x: int, y: int, seed_term: int) -> float:
    """
    Hash an integer lattice coordinate to a uniform value in [0, 1).

    Args:
        x, y: Lattice coordinate (any Python int, negatives wrap)
        seed_term: 32-bit seed contribution for the current noise layer

    Returns:
        float in [0, 1)
    """
    n = (x * PRIME_X + y * PRIME_Y + seed_term) & MASK32
    n = ((n ^ (n >> 13)) * AVALANCHE) & MASK32
    n ^= n >> 16
    return n / TWO_POW_32


def hash2d_array(x: np.ndarray, y: np.ndarray, seed_term: int) -> np.ndarray:
    """Vectorized hash2d over integer coordinate arrays; bit-identical to the scalar form."""

    xu = (np.asarray(x, dtype=np.int64) & MASK32).astype(np.uint32)
    yu = (np.asarray(y, dtype=np.int64) & MASK32).astype(np.uint32)
    term = np.uint32(seed_term & MASK32)

    with np.errstate(over="ignore"):
        n = xu * np.uint32(PRIME_X) + yu * np.uint32(PRIME_Y) + term
        n = (n ^ (n >> np.uint32(13))) * np.uint32(AVALANCHE)
        n = n ^ (n >> np.uint32(16))

    return n.astype(np.float64) / TWO_POW_32


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


class Mulberry32:
    """
    Tiny seedable 32-bit PRNG.

    Each call advances the internal state, so one instance yields one
    fixed sequence per seed.
    """

    def __init__(self, seed: int):
        self.state = seed & MASK32

    def next_uint32(self) -> int:
        self.state = (self.state + MULBERRY_INCREMENT) & MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return (t ^ (t >> 14)) & MASK32

    def next_float(self) -> float:
        return self.next_uint32() / TWO_POW_32
