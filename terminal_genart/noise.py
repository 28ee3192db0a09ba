"""
Simplex Noise Field - Seedable 3D Gradient Noise

Simplex noise after Stefan Gustavson's "Simplex noise demystified".
Compared to classic Perlin noise it touches 4 lattice corners instead
of 8 and has fewer axis-aligned artifacts. The flow field samples
(x, y, time) so a slowly advancing z axis gives smooth animation.

Each NoiseField owns its own permutation and gradient tables, so
several fields with different seeds can coexist.
"""

import math
import numpy as np


# Skewing factors for 3D (cubes -> tetrahedra)
F3 = 1.0 / 3.0
G3 = 1.0 / 6.0

# Squared kernel radius of each corner's contribution
RADIUS_SQ = 0.6

# Normalises the 4-corner sum into roughly [-1, 1]
NOISE_SCALE = 32.0

# 12 gradient vectors: midpoints of the edges of a cube
GRAD3 = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)

_GRAD3_ARRAY = np.array(GRAD3, dtype=np.float64)


def shuffled_permutation(seed):
    """Deterministic permutation of 0..255 for a seed.

    A linear congruential generator drives a Fisher-Yates shuffle, so
    the same seed always produces the same table.

    Args:
        seed: Any integer (negative values are folded by the LCG mask)

    Returns:
        List of 256 ints, a bijection on [0, 256)
    """
    p = list(range(256))
    s = int(seed)
    for i in range(255, 0, -1):
        s = (s * 1103515245 + 12345) & 0x7FFFFFFF
        j = min(int(s / 0x7FFFFFFF * (i + 1)), i)
        p[i], p[j] = p[j], p[i]
    return p


class NoiseField:
    """3D simplex noise with its own seeded tables.

    Tables are rebuilt only by reseed(); sampling never mutates state,
    so results depend only on (x, y, z) and the current seed.
    """

    def __init__(self, seed=0):
        self.seed = None
        self.reseed(seed)

    def reseed(self, seed):
        """Rebuild permutation and gradient tables from an integer seed."""
        p = shuffled_permutation(seed)
        # Doubled so corner lookups never need to wrap
        perm = [p[i & 255] for i in range(512)]
        self.seed = int(seed)
        self._perm = perm
        self._grad = [GRAD3[v % 12] for v in perm]
        self.perm = np.array(perm, dtype=np.int64)
        self.grad_p = _GRAD3_ARRAY[self.perm % 12]

    def sample3(self, x, y, z):
        """Noise value at one point, approximately in [-1, 1].

        The output can overshoot the unit range very slightly; clamp
        before using it as an index.
        """
        s = (x + y + z) * F3
        i = math.floor(x + s)
        j = math.floor(y + s)
        k = math.floor(z + s)

        t = (i + j + k) * G3
        x0 = x - (i - t)
        y0 = y - (j - t)
        z0 = z - (k - t)

        # Which of the six tetrahedra holds the point
        if x0 >= y0:
            if y0 >= z0:
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 1, 0
            elif x0 >= z0:
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 0, 1
            else:
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 1, 0, 1
        else:
            if y0 < z0:
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 0, 1, 1
            elif x0 < z0:
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 0, 1, 1
            else:
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 1, 1, 0

        x1 = x0 - i1 + G3
        y1 = y0 - j1 + G3
        z1 = z0 - k1 + G3
        x2 = x0 - i2 + 2.0 * G3
        y2 = y0 - j2 + 2.0 * G3
        z2 = z0 - k2 + 2.0 * G3
        x3 = x0 - 1.0 + 3.0 * G3
        y3 = y0 - 1.0 + 3.0 * G3
        z3 = z0 - 1.0 + 3.0 * G3

        ii = i & 255
        jj = j & 255
        kk = k & 255
        perm = self._perm
        grad = self._grad

        corners = (
            (grad[ii + perm[jj + perm[kk]]], x0, y0, z0),
            (grad[ii + i1 + perm[jj + j1 + perm[kk + k1]]], x1, y1, z1),
            (grad[ii + i2 + perm[jj + j2 + perm[kk + k2]]], x2, y2, z2),
            (grad[ii + 1 + perm[jj + 1 + perm[kk + 1]]], x3, y3, z3),
        )

        total = 0.0
        for g, dx, dy, dz in corners:
            t0 = RADIUS_SQ - dx * dx - dy * dy - dz * dz
            if t0 >= 0:
                t0 *= t0
                total += t0 * t0 * (g[0] * dx + g[1] * dy + g[2] * dz)

        return NOISE_SCALE * total

    def sample3_grid(self, xs, ys, z):
        """Vectorised sample3 over broadcastable coordinate arrays.

        Same skew, tie-break and gradient selection as sample3, one
        numpy pass per step instead of one Python call per cell.

        Args:
            xs: Array of x coordinates
            ys: Array of y coordinates (broadcast against xs)
            z: Scalar or array z coordinate (usually time)

        Returns:
            float64 array with the broadcast shape of the inputs
        """
        x, y, z = np.broadcast_arrays(
            np.asarray(xs, dtype=np.float64),
            np.asarray(ys, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
        )

        s = (x + y + z) * F3
        i = np.floor(x + s).astype(np.int64)
        j = np.floor(y + s).astype(np.int64)
        k = np.floor(z + s).astype(np.int64)

        t = (i + j + k) * G3
        x0 = x - (i - t)
        y0 = y - (j - t)
        z0 = z - (k - t)

        a = x0 >= y0
        b = ~a
        yz = y0 >= z0
        xz = x0 >= z0

        i1 = (a & (yz | xz)).astype(np.int64)
        j1 = (b & yz).astype(np.int64)
        k1 = ((a & ~yz & ~xz) | (b & ~yz)).astype(np.int64)
        i2 = (a | (b & yz & xz)).astype(np.int64)
        j2 = (b | (a & yz)).astype(np.int64)
        k2 = ((a & ~yz) | (b & ~(yz & xz))).astype(np.int64)

        x1 = x0 - i1 + G3
        y1 = y0 - j1 + G3
        z1 = z0 - k1 + G3
        x2 = x0 - i2 + 2.0 * G3
        y2 = y0 - j2 + 2.0 * G3
        z2 = z0 - k2 + 2.0 * G3
        x3 = x0 - 1.0 + 3.0 * G3
        y3 = y0 - 1.0 + 3.0 * G3
        z3 = z0 - 1.0 + 3.0 * G3

        ii = i & 255
        jj = j & 255
        kk = k & 255
        perm = self.perm
        grad = self.grad_p

        g0 = grad[ii + perm[jj + perm[kk]]]
        g1 = grad[ii + i1 + perm[jj + j1 + perm[kk + k1]]]
        g2 = grad[ii + i2 + perm[jj + j2 + perm[kk + k2]]]
        g3 = grad[ii + 1 + perm[jj + 1 + perm[kk + 1]]]

        total = np.zeros(x.shape, dtype=np.float64)
        for g, dx, dy, dz in ((g0, x0, y0, z0), (g1, x1, y1, z1),
                              (g2, x2, y2, z2), (g3, x3, y3, z3)):
            t0 = RADIUS_SQ - dx * dx - dy * dy - dz * dz
            t2 = t0 * t0
            dot = g[..., 0] * dx + g[..., 1] * dy + g[..., 2] * dz
            total += np.where(t0 >= 0, t2 * t2 * dot, 0.0)

        return NOISE_SCALE * total
