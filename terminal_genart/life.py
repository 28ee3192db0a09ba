"""
Game of Life Grid - Binary Cellular Automaton

Supports arbitrary B/S (birth/survival) rule notation:
- B3/S23: Conway's Game of Life (default)
- B36/S23: HighLife
- B3678/S34678: Day & Night

Neighbours are the 8-cell Moore neighbourhood. The boundary is either
toroidal (wrap=True) or dead outside the grid (wrap=False).
"""

import numpy as np
from scipy.ndimage import convolve


CONWAY = "B3/S23"

# Moore neighbourhood, centre excluded
_MOORE_KERNEL = np.array([[1, 1, 1],
                          [1, 0, 1],
                          [1, 1, 1]], dtype=np.uint8)


def parse_rule(rule_str):
    """Parse B/S notation like 'B3/S23' into (birth_set, survive_set)."""
    rule_str = rule_str.upper().replace(" ", "")
    parts = rule_str.split("/")
    birth = set()
    survive = set()
    for part in parts:
        if part.startswith("B"):
            birth = {int(c) for c in part[1:]}
        elif part.startswith("S"):
            survive = {int(c) for c in part[1:]}
    return birth, survive


class LifeGrid:
    """Fixed-size boolean grid with a Life-like transition rule.

    `cells` is a (height, width) bool array, row-major. step() replaces
    it with a freshly computed array, never editing it in place.
    """

    def __init__(self, width, height, wrap=True, rule=CONWAY):
        if width < 1 or height < 1:
            raise ValueError(f"grid needs positive dimensions, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.wrap = wrap
        self.set_rule(rule)
        self.cells = np.zeros((self.height, self.width), dtype=bool)
        self.generation = 0

    def set_rule(self, rule):
        """Switch to another B/S rule; live cells are kept."""
        self.rule_str = rule
        self.birth, self.survive = parse_rule(rule)

    def count_neighbors(self, cells=None):
        """Live-neighbour count for every cell under the boundary policy."""
        grid = self.cells if cells is None else cells
        mode = "wrap" if self.wrap else "constant"
        return convolve(grid.astype(np.uint8), _MOORE_KERNEL, mode=mode, cval=0)

    def neighbors_at(self, x, y):
        """Live-neighbour count of the single cell at column x, row y."""
        count = 0
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx = x + dx
                ny = y + dy
                if self.wrap:
                    nx %= self.width
                    ny %= self.height
                elif not (0 <= nx < self.width and 0 <= ny < self.height):
                    continue
                if self.cells[ny, nx]:
                    count += 1
        return count

    def step(self):
        """Advance one generation. Returns the new cell array."""
        current = self.cells
        neighbors = self.count_neighbors(current)

        born = ~current & np.isin(neighbors, sorted(self.birth))
        survives = current & np.isin(neighbors, sorted(self.survive))

        self.cells = born | survives
        self.generation += 1
        return self.cells

    def step_n(self, n):
        """Advance n generations. Returns final state."""
        for _ in range(n):
            self.step()
        return self.cells

    def randomize(self, density, rng=None):
        """Set each cell alive independently with probability `density`."""
        if rng is None:
            rng = np.random.default_rng()
        density = min(1.0, max(0.0, density))
        self.cells = rng.random((self.height, self.width)) < density
        self.generation = 0

    def place_pattern(self, pattern, offset_x, offset_y):
        """Overlay a smaller boolean grid at (offset_x, offset_y).

        Parts of the pattern outside the grid are dropped; cells outside
        the pattern's footprint are left untouched.
        """
        pattern = np.asarray(pattern, dtype=bool)
        if pattern.ndim != 2 or pattern.size == 0:
            return
        ph, pw = pattern.shape

        x_start = max(0, offset_x)
        y_start = max(0, offset_y)
        x_end = min(self.width, offset_x + pw)
        y_end = min(self.height, offset_y + ph)
        if x_start >= x_end or y_start >= y_end:
            return

        cells = self.cells.copy()
        cells[y_start:y_end, x_start:x_end] = pattern[
            y_start - offset_y:y_end - offset_y,
            x_start - offset_x:x_end - offset_x,
        ]
        self.cells = cells

    def place_centered(self, pattern):
        """Clear the grid and drop a pattern in the middle."""
        pattern = np.asarray(pattern, dtype=bool)
        self.clear()
        offset_x = (self.width - pattern.shape[1]) // 2
        offset_y = (self.height - pattern.shape[0]) // 2
        self.place_pattern(pattern, offset_x, offset_y)

    def set_cell(self, x, y, alive=True):
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y, x] = alive

    def count_live(self):
        return int(self.cells.sum())

    def clear(self):
        self.cells = np.zeros((self.height, self.width), dtype=bool)
        self.generation = 0

    @property
    def stats(self):
        alive_count = self.count_live()
        total = self.width * self.height
        return {
            "generation": self.generation,
            "live": alive_count,
            "alive_pct": alive_count / total * 100,
        }
