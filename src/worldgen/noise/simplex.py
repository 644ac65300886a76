"""Simplex noise in two and three dimensions."""

import math

from ..rng import RandomSource
from .grid import GRADIENTS, PermutationTable

SQRT_3 = 1.7320508075688772
F2 = 0.5 * (SQRT_3 - 1.0)
G2 = (3.0 - SQRT_3) / 6.0
F3 = 0.3333333333333333
G3 = 0.16666666666666666


def _corner(gi: int, x: float, y: float, z: float, falloff: float) -> float:
    d = falloff - x * x - y * y - z * z
    if d < 0.0:
        return 0.0
    d *= d
    gx, gy, gz = GRADIENTS[gi]
    return d * d * (gx * x + gy * y + gz * z)


class SimplexNoise:
    """Simplex noise over a shuffled permutation table.

    The table's lattice offsets are drawn (so the RNG stream matches the grid
    noise) but are not applied to sample coordinates.
    """

    def __init__(self, rng: RandomSource):
        self.table = PermutationTable(rng)

    def sample2(self, x: float, z: float) -> float:
        p = self.table
        s = (x + z) * F2
        i = math.floor(x + s)
        j = math.floor(z + s)
        t = (i + j) * G2
        x0 = x - (i - t)
        y0 = z - (j - t)

        if x0 > y0:
            o1, o2 = 1, 0
        else:
            o1, o2 = 0, 1

        x1 = x0 - o1 + G2
        y1 = y0 - o2 + G2
        x2 = x0 - 1.0 + 2.0 * G2
        y2 = y0 - 1.0 + 2.0 * G2

        ii = i & 255
        jj = j & 255
        g0 = p(ii + p(jj)) % 12
        g1 = p(ii + o1 + p(jj + o2)) % 12
        g2 = p(ii + 1 + p(jj + 1)) % 12

        return 70.0 * (
            _corner(g0, x0, y0, 0.0, 0.5)
            + _corner(g1, x1, y1, 0.0, 0.5)
            + _corner(g2, x2, y2, 0.0, 0.5)
        )

    def sample3(self, x: float, y: float, z: float) -> float:
        p = self.table
        s = (x + y + z) * F3
        i = math.floor(x + s)
        j = math.floor(y + s)
        k = math.floor(z + s)
        t = (i + j + k) * G3
        x0 = x - (i - t)
        y0 = y - (j - t)
        z0 = z - (k - t)

        if x0 >= y0:
            if y0 >= z0:
                a, b, c, d, e, f = 1, 0, 0, 1, 1, 0
            elif x0 >= z0:
                a, b, c, d, e, f = 1, 0, 0, 1, 0, 1
            else:
                a, b, c, d, e, f = 0, 0, 1, 1, 0, 1
        elif y0 < z0:
            a, b, c, d, e, f = 0, 0, 1, 0, 1, 1
        elif x0 < z0:
            a, b, c, d, e, f = 0, 1, 0, 0, 1, 1
        else:
            a, b, c, d, e, f = 0, 1, 0, 1, 1, 0

        x1 = x0 - a + G3
        y1 = y0 - b + G3
        z1 = z0 - c + G3
        x2 = x0 - d + F3
        y2 = y0 - e + F3
        z2 = z0 - f + F3
        x3 = x0 - 1.0 + 0.5
        y3 = y0 - 1.0 + 0.5
        z3 = z0 - 1.0 + 0.5

        ii = i & 255
        jj = j & 255
        kk = k & 255
        g0 = p(ii + p(jj + p(kk))) % 12
        g1 = p(ii + a + p(jj + b + p(kk + c))) % 12
        g2 = p(ii + d + p(jj + e + p(kk + f))) % 12
        g3 = p(ii + 1 + p(jj + 1 + p(kk + 1))) % 12

        return 32.0 * (
            _corner(g0, x0, y0, z0, 0.6)
            + _corner(g1, x1, y1, z1, 0.6)
            + _corner(g2, x2, y2, z2, 0.6)
            + _corner(g3, x3, y3, z3, 0.6)
        )
