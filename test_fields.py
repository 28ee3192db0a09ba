#!/usr/bin/env python3
"""
Tests for the scalar field generators: plasma, tunnel, escape time.
"""

import math
import numpy as np
from terminal_genart.fields import (complex_plane, escape_time, escape_time_grid,
                                    plasma_value, tunnel_intensity)


def test_plasma_normalized():
    """1,000 random (x, y, t) samples land in [0, 1]."""
    print("Testing plasma range...")
    rng = np.random.default_rng(0)
    for _ in range(1000):
        x, y = rng.uniform(-500, 500, 2)
        t = rng.uniform(0, 1000)
        scale = rng.uniform(1, 20)
        v = plasma_value(x, y, t, scale)
        assert 0.0 <= v <= 1.0, f"plasma({x}, {y}, {t}) = {v}"

    xs = rng.uniform(-50, 50, (24, 80))
    ys = rng.uniform(-50, 50, (24, 80))
    grid = plasma_value(xs, ys, 3.2, 4)
    assert grid.shape == (24, 80)
    assert float(grid.min()) >= 0.0 and float(grid.max()) <= 1.0
    assert abs(grid[5, 7] - plasma_value(xs[5, 7], ys[5, 7], 3.2, 4)) < 1e-12, \
        "Array and scalar plasma should agree"
    print("  ✓ Plasma stays in [0, 1]")


def test_tunnel_range():
    print("Testing tunnel intensity...")
    xs = np.arange(80)[None, :]
    ys = np.arange(24)[:, None]
    for t in (0.0, 0.37, 12.5):
        v = tunnel_intensity(xs, ys, t, 80, 24, 12)
        assert v.shape == (24, 80)
        assert float(v.min()) >= 0.0 and float(v.max()) <= 1.0, "Tunnel out of range"
    print("  ✓ Tunnel stays in [0, 1]")


def test_escape_time_boundaries():
    """Origin and c = -2 never escape; (2, 0) escapes almost at once."""
    print("Testing escape time...")
    for max_iter in (1, 2, 10, 100, 500):
        s = escape_time(0.0, 0.0, max_iter)
        assert s.iterations == max_iter, f"Origin should use all {max_iter} iterations"
        assert not s.escaped, "Origin is inside the Mandelbrot set"
        assert s.smooth == float(max_iter)

    s = escape_time(2.0, 0.0, 100)
    assert s.escaped, "(2, 0) must escape"
    assert s.iterations <= 2, f"(2, 0) should escape within 2 iterations, took {s.iterations}"

    # c = -2 settles on z = 2, exactly on the bailout circle: bounded
    for max_iter in (1, 10, 100):
        tip = escape_time(-2.0, 0.0, max_iter)
        assert not tip.escaped, "c = -2 is the tip of the Mandelbrot set"
        assert tip.iterations == max_iter
    iters, escaped, _ = escape_time_grid(np.array([-2.0, 2.0]), np.zeros(2), 50)
    assert escaped.tolist() == [False, True]
    assert iters[0] == 50

    far = escape_time(10.0, 10.0, 100)
    assert far.escaped and far.iterations == 1
    assert math.isfinite(far.smooth)
    print("  ✓ Escape time boundaries correct")


def test_julia_mode():
    """In Julia mode z starts at the point and c is fixed."""
    print("Testing Julia mode...")
    # c = 0: the Julia set is the unit circle
    inside = escape_time(0.5, 0.0, 50, julia_mode=True, c=(0.0, 0.0))
    outside = escape_time(1.5, 0.0, 50, julia_mode=True, c=(0.0, 0.0))
    assert not inside.escaped, "|z| < 1 stays bounded for c = 0"
    assert outside.escaped, "|z| > 1 escapes for c = 0"
    # A point already outside the bailout escapes without iterating
    start = escape_time(3.0, 0.0, 50, julia_mode=True)
    assert start.iterations == 0 and start.escaped
    print("  ✓ Julia mode correct")


def test_smooth_value():
    """Escaped points get the continuous escape-time value."""
    print("Testing smooth coloring...")
    s = escape_time(0.5, 0.5, 200)
    assert s.escaped
    # Recompute the final |z|^2 by hand
    x = y = 0.0
    for _ in range(s.iterations):
        x, y = x * x - y * y + 0.5, 2 * x * y + 0.5
    mag_sq = x * x + y * y
    expected = s.iterations + 1 - math.log(math.log(mag_sq) / 2 / math.log(2)) / math.log(2)
    assert abs(s.smooth - expected) < 1e-9, f"smooth {s.smooth} != {expected}"
    print("  ✓ Smooth value matches formula")


def test_grid_matches_scalar():
    print("Testing vectorised escape time...")
    re, im = complex_plane(40, 12, -0.5, 0.0, 1.0)
    for julia in (False, True):
        iters, escaped, smooth = escape_time_grid(re, im, 60, julia, (-0.7, 0.27015))
        for y in range(0, 12, 3):
            for x in range(0, 40, 7):
                s = escape_time(re[y, x], im[y, x], 60, julia, (-0.7, 0.27015))
                assert iters[y, x] == s.iterations, f"iterations differ at {(x, y)}"
                assert escaped[y, x] == s.escaped, f"escaped differs at {(x, y)}"
                assert abs(smooth[y, x] - s.smooth) < 1e-9, f"smooth differs at {(x, y)}"
    print("  ✓ Grid matches scalar")


def test_complex_plane_aspect():
    """One cell covers `aspect` times more imaginary than real distance."""
    print("Testing aspect correction...")
    re, im = complex_plane(80, 24, -0.5, 0.0, 1.0, aspect=2.0)
    assert re.shape == (24, 80)
    dx = re[0, 1] - re[0, 0]
    dy = im[1, 0] - im[0, 0]
    assert abs(dx - 4.0 / 80) < 1e-12, "Horizontal range is 4 / zoom"
    assert abs(dy - 2.0 * dx) < 1e-12, f"Vertical step {dy} should be 2x {dx}"

    re2, _ = complex_plane(80, 24, 0.0, 0.0, 2.0)
    assert abs((re2[0, 1] - re2[0, 0]) - dx / 2) < 1e-12, "Zoom 2 halves the step"
    print("  ✓ Aspect correction correct")


if __name__ == "__main__":
    print("\n=== Testing Scalar Fields ===\n")

    test_plasma_normalized()
    test_tunnel_range()
    test_escape_time_boundaries()
    test_julia_mode()
    test_smooth_value()
    test_grid_matches_scalar()
    test_complex_plane_aspect()

    print("\n✓ All tests passed!\n")
