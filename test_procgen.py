"""
Tests for the numeric pipeline: hashing, seed contexts, noise and shaping.
"""

import numpy as np
import pytest

from biomegrid.errors import InvalidConfigError
from biomegrid.procgen import (
    HashedSeedContext, Mulberry32, SequenceSeedContext,
    fade, fractal_elevation, fractal_elevation_array, hash2d, hash2d_array,
    make_seed_context, shape_elevation, value_noise, value_noise_array
)


def test_hash_known_values():
    """Hash output is fixed for known inputs."""
    assert hash2d(0, 0, 0) == 0.0
    assert hash2d(1, 0, 0) == pytest.approx(0.5081244609318674, abs=1e-15)
    assert hash2d(-1, -1, 0) == pytest.approx(0.17023825296200812, abs=1e-15)
    assert hash2d(3, 7, 12345) == pytest.approx(0.5623394059948623, abs=1e-15)


def test_hash_is_not_degenerate():
    assert abs(hash2d(0, 0, 0) - hash2d(1, 0, 0)) > 1e-3


def test_hash_range():
    values = [hash2d(x, y, 2246822519) for x in range(-20, 20) for y in range(-20, 20)]
    assert all(0.0 <= v < 1.0 for v in values)
    # crude uniformity check
    assert 0.4 < np.mean(values) < 0.6


def test_hash_array_matches_scalar():
    xs, ys = np.meshgrid(np.arange(-8, 8), np.arange(-5, 5))
    for term in (0, 1, 2048144777, 4294967295):
        fast = hash2d_array(xs, ys, term)
        slow = np.array([[hash2d(int(x), int(y), term) for x, y in zip(rx, ry)]
                         for rx, ry in zip(xs, ys)])
        assert np.array_equal(fast, slow)


def test_mulberry32_sequence():
    prng = Mulberry32(1)
    assert [prng.next_uint32() for _ in range(3)] == [2693262067, 11749833, 2265367787]
    assert Mulberry32(0).next_uint32() == 1144304738
    assert Mulberry32(1).next_float() == pytest.approx(2693262067 / 4294967296.0)


def test_seed_contexts():
    hashed = HashedSeedContext(1)
    assert hashed.term(0) == 2246822519
    assert hashed.term(7) == hashed.term(0)
    assert HashedSeedContext(-1).term(0) == 2048144777

    seq = SequenceSeedContext(1, layers=5)
    assert seq.terms[:3] == (2693262067, 11749833, 2265367787)
    assert len(seq.terms) == 5
    # terms never change after construction
    assert [seq.term(i) for i in range(5)] == [seq.term(i) for i in range(5)]


def test_make_seed_context():
    assert isinstance(make_seed_context("hashed", 3, 5), HashedSeedContext)
    assert isinstance(make_seed_context("sequence", 3, 5), SequenceSeedContext)
    with pytest.raises(InvalidConfigError):
        make_seed_context("random", 3, 5)


def test_fade_endpoints():
    assert fade(0.0) == 0.0
    assert fade(1.0) == 1.0
    assert fade(0.5) == pytest.approx(0.5)


def test_value_noise_known_values():
    assert value_noise(0.5, 0.5, 0) == pytest.approx(0.4850625472026877, abs=1e-14)
    assert value_noise(2.25, 3.75, 99) == pytest.approx(0.09694102565789642, abs=1e-14)


def test_value_noise_hits_corners():
    """At lattice points the noise equals the corner hash."""
    for x, y in [(0, 0), (3, 2), (-4, 7)]:
        assert value_noise(float(x), float(y), 42) == pytest.approx(hash2d(x, y, 42))


def test_value_noise_smooth_across_lattice():
    eps = 1e-6
    for seed in (0, 1, 99, 123456789):
        term = HashedSeedContext(seed).term(0)
        for x in np.linspace(-3.0, 3.0, 241):
            for xx in (x, np.nextafter(np.ceil(x), -np.inf)):
                a = value_noise(float(xx), 0.0, term)
                b = value_noise(float(xx) + eps, 0.0, term)
                assert abs(a - b) < 1e-5


def test_value_noise_array_matches_scalar():
    xs = np.linspace(-2.3, 5.7, 17)
    ys = np.linspace(1.1, -3.9, 17)
    fast = value_noise_array(xs, ys, 777)
    slow = np.array([value_noise(float(x), float(y), 777) for x, y in zip(xs, ys)])
    np.testing.assert_allclose(fast, slow, rtol=0, atol=1e-15)


def test_value_noise_array_matches_scalar_far_from_origin():
    """Coordinates past the int64 range still hash the same lattice points."""
    xs = np.array([1e20, -3.5e19, 2.0 ** 63 + 2.0 ** 12, 9.2e18, -1e30, 2.0 ** 32 - 1])
    ys = xs[::-1].copy()
    fast = value_noise_array(xs, ys, 2246822519)
    slow = np.array([value_noise(float(x), float(y), 2246822519) for x, y in zip(xs, ys)])
    np.testing.assert_allclose(fast, slow, rtol=0, atol=1e-15)
    assert np.all((fast >= 0.0) & (fast < 1.0))


def test_fractal_elevation_normalized():
    for strategy in ("hashed", "sequence"):
        ctx = make_seed_context(strategy, 5, layers=7)
        for x in range(0, 60, 7):
            for y in range(0, 60, 11):
                for octaves, persistence in ((1, 0.5), (4, 0.5), (6, 1.0), (3, 0.1)):
                    e = fractal_elevation(x, y, ctx, octaves, persistence, 0.08)
                    assert 0.0 <= e < 1.0


def test_single_octave_is_plain_noise():
    ctx = HashedSeedContext(9)
    assert fractal_elevation(3, 4, ctx, 1, 0.5, 0.1) == value_noise(3 * 0.1, 4 * 0.1, ctx.term(0))


def test_fractal_array_matches_scalar():
    ctx = SequenceSeedContext(11, layers=5)
    X, Y = np.meshgrid(np.arange(9, dtype=np.float64), np.arange(6, dtype=np.float64))
    fast = fractal_elevation_array(X, Y, ctx, 4, 0.5, 0.08)
    slow = np.array([[fractal_elevation(x, y, ctx, 4, 0.5, 0.08) for x in range(9)] for y in range(6)])
    np.testing.assert_allclose(fast, slow, rtol=0, atol=1e-15)


def test_shape_elevation_clamps():
    ctx = HashedSeedContext(1)
    for raw in (0.0, 0.2, 0.5, 0.9, 0.999, 1.0):
        for x, y in ((0, 0), (13, 40), (99, 119)):
            e = shape_elevation(raw, x, y, ctx, modulation_layer=4, modulation_strength=5.0)
            assert 0.0 <= e <= 1.0


def test_shape_elevation_power_curve():
    """With modulation off the shaper is just the power curve."""
    ctx = HashedSeedContext(1)
    e = shape_elevation(0.25, 3, 4, ctx, modulation_layer=4, exponent=0.65, modulation_strength=0.0)
    assert e == pytest.approx(0.25 ** 0.65)
    assert e > 0.25
