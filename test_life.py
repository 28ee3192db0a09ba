#!/usr/bin/env python3
"""
Tests for the Game of Life grid and pattern library.

Verifies:
1. Still lifes, oscillators and spaceships behave under Conway's rule
2. Toroidal vs dead-outside boundaries
3. step() replaces the grid instead of editing it
4. Pattern placement clips silently
"""

import numpy as np
import pytest
from terminal_genart.life import LifeGrid, parse_rule
from terminal_genart.patterns import BLOCK, PATTERNS, get_pattern, parse_pattern


def _grid_with(pattern, width=10, height=10, x=3, y=3, wrap=True):
    grid = LifeGrid(width, height, wrap=wrap)
    grid.place_pattern(pattern, x, y)
    return grid


def test_parse_rule():
    print("Testing rule parsing...")
    assert parse_rule("B3/S23") == ({3}, {2, 3})
    assert parse_rule("b36/s23") == ({3, 6}, {2, 3}), "Rules are case-insensitive"
    assert parse_rule("B3678/S34678") == ({3, 6, 7, 8}, {3, 4, 6, 7, 8})
    assert parse_rule("B2/S") == ({2}, set()), "Empty survival set"
    print("  ✓ Rule parsing correct")


def test_block_still_life():
    print("Testing block still life...")
    grid = _grid_with(BLOCK)
    start = grid.cells.copy()
    for _ in range(20):
        grid.step()
        assert np.array_equal(grid.cells, start), "Block must never change"
    assert grid.generation == 20
    print("  ✓ Block is stable")


def test_blinker_period_two():
    print("Testing blinker oscillator...")
    grid = _grid_with(parse_pattern("OOO"), x=3, y=4)
    horizontal = grid.cells.copy()

    grid.step()
    vertical = grid.cells.copy()
    assert vertical.sum() == 3, "Blinker keeps 3 cells"
    assert vertical[3:6, 4].all(), "Second phase is a vertical line"
    assert not np.array_equal(vertical, horizontal)

    grid.step()
    assert np.array_equal(grid.cells, horizontal), "Period 2"
    print("  ✓ Blinker oscillates")


def test_glider_translates():
    """A glider moves by (1, 1) every 4 generations, also across the wrap."""
    print("Testing glider...")
    glider = get_pattern(0).data
    assert get_pattern(0).name == "Glider"
    assert glider.sum() == 5

    grid = _grid_with(glider, width=8, height=8, x=5, y=5)
    start = grid.cells.copy()
    for k in range(1, 4):
        grid.step_n(4)
        expected = np.roll(start, (k, k), axis=(0, 1))
        assert np.array_equal(grid.cells, expected), f"Glider off course after {4 * k} steps"
    print("  ✓ Glider translates by (1, 1) per 4 generations")


def test_boundary_policy():
    print("Testing boundary policy...")
    for wrap, expected in ((True, 1), (False, 0)):
        grid = LifeGrid(6, 5, wrap=wrap)
        grid.set_cell(5, 2)
        assert grid.neighbors_at(0, 2) == expected, f"wrap={wrap}"
        counts = grid.count_neighbors()
        assert counts[2, 0] == expected, f"Vectorised count differs for wrap={wrap}"

    # Neighbour counts agree between the scalar and convolution paths
    grid = LifeGrid(9, 7, wrap=True)
    grid.randomize(0.4, np.random.default_rng(3))
    counts = grid.count_neighbors()
    for y in range(grid.height):
        for x in range(grid.width):
            assert counts[y, x] == grid.neighbors_at(x, y)
    print("  ✓ Boundary policy correct")


def test_step_replaces_grid():
    print("Testing full-grid replacement...")
    grid = _grid_with(parse_pattern("OOO"))
    before = grid.cells
    snapshot = before.copy()
    grid.step()
    assert grid.cells is not before, "step() must build a new array"
    assert np.array_equal(before, snapshot), "The previous generation must be untouched"
    print("  ✓ step() replaces the grid")


def test_place_pattern_clips():
    print("Testing pattern clipping...")
    grid = LifeGrid(5, 5, wrap=False)
    grid.set_cell(4, 4)
    full = np.ones((3, 3), dtype=bool)

    grid.place_pattern(full, -1, -1)
    assert grid.cells[:2, :2].all(), "Visible part is placed"
    assert grid.count_live() == 5, f"Only 4 cells fit, plus the existing one: {grid.count_live()}"
    assert grid.cells[4, 4], "Cells outside the footprint are untouched"

    grid.place_pattern(full, 10, 10)
    assert grid.count_live() == 5, "Fully off-grid placement is a no-op"
    print("  ✓ Placement clips silently")


def test_randomize_density():
    print("Testing randomize...")
    grid = LifeGrid(100, 100)
    grid.step()
    grid.randomize(0.3, np.random.default_rng(0))
    frac = grid.count_live() / 10000
    assert 0.25 < frac < 0.35, f"Density 0.3 gave {frac}"
    assert grid.generation == 0, "Randomize resets the generation"

    a = LifeGrid(20, 20)
    b = LifeGrid(20, 20)
    a.randomize(0.5, np.random.default_rng(9))
    b.randomize(0.5, np.random.default_rng(9))
    assert np.array_equal(a.cells, b.cells), "Same rng seed, same soup"
    print("  ✓ Randomize respects density")


def test_patterns_parse():
    print("Testing pattern library...")
    names = [p.name for p in PATTERNS]
    assert names[:3] == ["Glider", "Blinker", "Toad"]
    assert "Gosper Gun" in names
    gun = PATTERNS[names.index("Gosper Gun")].data
    assert gun.shape == (9, 36) and gun.sum() == 36
    assert get_pattern(len(PATTERNS)).name == "Glider", "Index wraps"

    grid = LifeGrid(20, 20)
    grid.randomize(0.5, np.random.default_rng(1))
    grid.place_centered(get_pattern(0).data)
    assert grid.count_live() == 5, "place_centered clears first"
    print("  ✓ Patterns parse correctly")


def test_set_rule_keeps_cells():
    grid = _grid_with(parse_pattern("OOO"))
    grid.set_rule("B36/S23")
    assert grid.birth == {3, 6} and grid.rule_str == "B36/S23"
    assert grid.count_live() == 3, "Switching rules keeps the live cells"


def test_zero_size_rejected():
    with pytest.raises(ValueError):
        LifeGrid(0, 10)
    with pytest.raises(ValueError):
        LifeGrid(10, 0)


if __name__ == "__main__":
    print("\n=== Testing Game of Life ===\n")

    test_parse_rule()
    test_block_still_life()
    test_blinker_period_two()
    test_glider_translates()
    test_boundary_policy()
    test_step_replaces_grid()
    test_place_pattern_clips()
    test_randomize_density()
    test_patterns_parse()
    test_set_rule_keeps_cells()
    test_zero_size_rejected()

    print("\n✓ All tests passed!\n")
