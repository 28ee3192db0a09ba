#!/usr/bin/env python3
"""
Tests for the seedable simplex noise field.

Verifies:
1. Same seed -> identical tables and samples, reseed round trips
2. Continuity across integer lattice boundaries
3. Output range for random points
4. Vectorised sampling agrees with the scalar reference
"""

import numpy as np
from terminal_genart.noise import NoiseField, shuffled_permutation


def test_permutation_is_bijection():
    """Every seed yields a permutation of 0..255."""
    print("Testing permutation tables...")
    for seed in (0, 1, 42, 99999, -7):
        p = shuffled_permutation(seed)
        assert sorted(p) == list(range(256)), f"Seed {seed} is not a bijection"
    assert shuffled_permutation(1) != shuffled_permutation(2), "Seeds should differ"

    field = NoiseField(5)
    assert len(field.perm) == 512, "Table should be doubled to 512 entries"
    assert np.array_equal(field.perm[:256], field.perm[256:]), "Second half repeats the first"
    print("  ✓ Permutation tables correct")


def test_determinism():
    """Same seed, same output; reseed restores the original sequence."""
    print("Testing noise determinism...")
    points = [(0.1, 0.2, 0.3), (3.7, -1.2, 8.5), (100.25, 42.0, 0.5)]

    a = NoiseField(123)
    b = NoiseField(123)
    first = [a.sample3(*p) for p in points]
    again = [a.sample3(*p) for p in points]
    other = [b.sample3(*p) for p in points]
    assert first == again, "Repeated sampling must be bit-identical"
    assert first == other, "Two fields with one seed must agree"

    a.reseed(456)
    changed = [a.sample3(*p) for p in points]
    assert changed != first, "A different seed should change the output"

    a.reseed(123)
    restored = [a.sample3(*p) for p in points]
    assert restored == first, "Reseeding the original seed must restore the output"
    assert a.seed == 123
    print("  ✓ Noise is deterministic")


def test_continuity_at_lattice_boundary():
    """No jump between x=3.999 and x=4.001, and deltas shrink with epsilon."""
    print("Testing noise continuity...")
    field = NoiseField(0)
    y, z = 0.37, 1.61

    jump = abs(field.sample3(4.001, y, z) - field.sample3(3.999, y, z))
    assert jump < 0.05, f"Discontinuity at integer boundary: {jump}"

    deltas = []
    for eps in (1e-2, 1e-3, 1e-4, 1e-5):
        deltas.append(abs(field.sample3(4.0 + eps, y, z) - field.sample3(4.0, y, z)))
    for bigger, smaller in zip(deltas, deltas[1:]):
        assert smaller <= bigger, f"Delta should shrink with epsilon: {deltas}"
    print("  ✓ Noise is continuous")


def test_output_bound():
    """10,000 random samples stay within [-1.05, 1.05]."""
    print("Testing noise range...")
    field = NoiseField(0)
    rng = np.random.default_rng(1234)
    pts = rng.uniform(-200.0, 200.0, size=(10000, 3))
    values = [field.sample3(x, y, z) for x, y, z in pts]
    lo, hi = min(values), max(values)
    assert lo >= -1.05 and hi <= 1.05, f"Noise out of range: [{lo}, {hi}]"
    assert hi - lo > 0.5, "Noise should actually vary"
    print(f"  ✓ Range [{lo:.3f}, {hi:.3f}]")


def test_grid_matches_scalar():
    """sample3_grid reproduces sample3 at every point, ties included."""
    print("Testing vectorised noise...")
    field = NoiseField(42)
    rng = np.random.default_rng(7)
    xs = rng.uniform(-20, 20, 500)
    ys = rng.uniform(-20, 20, 500)
    zs = rng.uniform(-20, 20, 500)

    # Lattice points and coordinate ties exercise the tetrahedron tie-break
    extra = np.array([
        [0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [0.5, 0.5, 0.2],
        [0.25, 0.75, 0.75], [2.0, 3.0, 3.0], [4.0, 4.0, -1.0],
    ])
    xs = np.concatenate([xs, extra[:, 0]])
    ys = np.concatenate([ys, extra[:, 1]])
    zs = np.concatenate([zs, extra[:, 2]])

    grid = field.sample3_grid(xs, ys, zs)
    scalar = np.array([field.sample3(x, y, z) for x, y, z in zip(xs, ys, zs)])
    err = np.max(np.abs(grid - scalar))
    assert err < 1e-12, f"Grid and scalar paths disagree by {err}"

    # Broadcasting a row of x against a column of y, scalar time
    plane = field.sample3_grid(np.arange(5)[None, :] * 0.1, np.arange(3)[:, None] * 0.2, 0.7)
    assert plane.shape == (3, 5), f"Unexpected shape {plane.shape}"
    assert abs(plane[2, 4] - field.sample3(0.4, 0.4, 0.7)) < 1e-12
    print(f"  ✓ Grid matches scalar (max error {err:.2e})")


if __name__ == "__main__":
    print("\n=== Testing Noise Field ===\n")

    test_permutation_is_bijection()
    test_determinism()
    test_continuity_at_lattice_boundary()
    test_output_bound()
    test_grid_matches_scalar()

    print("\n✓ All tests passed!\n")
