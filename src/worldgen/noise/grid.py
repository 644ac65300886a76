"""Improved Perlin noise on a cubic lattice."""

import math

from ..rng import RandomSource
from .math import lerp3, smoothstep

PERMUTATION_SIZE = 256

# 12 cube-edge gradients followed by 4 repeats so indices can be masked with 15.
GRADIENTS: tuple[tuple[float, float, float], ...] = (
    (1.0, 1.0, 0.0), (-1.0, 1.0, 0.0), (1.0, -1.0, 0.0), (-1.0, -1.0, 0.0),
    (1.0, 0.0, 1.0), (-1.0, 0.0, 1.0), (1.0, 0.0, -1.0), (-1.0, 0.0, -1.0),
    (0.0, 1.0, 1.0), (0.0, -1.0, 1.0), (0.0, 1.0, -1.0), (0.0, -1.0, -1.0),
    (1.0, 1.0, 0.0), (0.0, -1.0, 1.0), (-1.0, 1.0, 0.0), (0.0, -1.0, -1.0),
)

# 64-bit draws skipped in place of an absent legacy octave.
SKIP_DRAWS = 262

_SLICE_EPSILON = 1.0e-7


def grad_dot(index: int, x: float, y: float, z: float) -> float:
    gx, gy, gz = GRADIENTS[index]
    return gx * x + gy * y + gz * z


class PermutationTable:
    """Random lattice offsets and a shuffled permutation of 0..255."""

    __slots__ = ("x_offset", "y_offset", "z_offset", "perm")

    def __init__(self, rng: RandomSource):
        self.x_offset = rng.next_f64() * PERMUTATION_SIZE
        self.y_offset = rng.next_f64() * PERMUTATION_SIZE
        self.z_offset = rng.next_f64() * PERMUTATION_SIZE

        perm = list(range(PERMUTATION_SIZE))
        for i in range(PERMUTATION_SIZE):
            j = i + rng.next_u32(PERMUTATION_SIZE - i)
            perm[i], perm[j] = perm[j], perm[i]
        self.perm = tuple(perm)

    def __call__(self, i: int) -> int:
        return self.perm[i & 255]


class GridNoise:
    """Improved Perlin noise (cubic lattice, quintic fade).

    The optional ``y_amp``/``y_min`` pair reproduces the vertical slicing of
    the old terrain generator: the y fraction used for gradients is snapped
    down to a multiple of ``y_amp`` while the fade still uses the true
    fraction.
    """

    def __init__(self, rng: RandomSource):
        self.table = PermutationTable(rng)

    def sample(
        self, x: float, y: float, z: float, y_amp: float = 0.0, y_min: float = 0.0
    ) -> float:
        table = self.table
        sx = x + table.x_offset
        sy = y + table.y_offset
        sz = z + table.z_offset

        fx = math.floor(sx)
        fy = math.floor(sy)
        fz = math.floor(sz)

        xf = sx - fx
        yf = sy - fy
        zf = sz - fz

        if y_amp != 0.0:
            effective_y = y_min if 0.0 <= y_min < yf else yf
            y_slice = math.floor(effective_y / y_amp + _SLICE_EPSILON) * y_amp
        else:
            y_slice = 0.0

        return self._sample_and_lerp(fx, fy, fz, xf, yf - y_slice, zf, yf)

    def _sample_and_lerp(
        self,
        fx: int,
        fy: int,
        fz: int,
        x: float,
        y: float,
        z: float,
        y_fade: float,
    ) -> float:
        p = self.table
        px = p(fx)
        px1 = p(fx + 1)
        pxy = p(px + fy)
        pxy1 = p(px + fy + 1)
        px1y = p(px1 + fy)
        px1y1 = p(px1 + fy + 1)

        v000 = grad_dot(p(pxy + fz) & 15, x, y, z)
        v100 = grad_dot(p(px1y + fz) & 15, x - 1.0, y, z)
        v010 = grad_dot(p(pxy1 + fz) & 15, x, y - 1.0, z)
        v110 = grad_dot(p(px1y1 + fz) & 15, x - 1.0, y - 1.0, z)
        v001 = grad_dot(p(pxy + fz + 1) & 15, x, y, z - 1.0)
        v101 = grad_dot(p(px1y + fz + 1) & 15, x - 1.0, y, z - 1.0)
        v011 = grad_dot(p(pxy1 + fz + 1) & 15, x, y - 1.0, z - 1.0)
        v111 = grad_dot(p(px1y1 + fz + 1) & 15, x - 1.0, y - 1.0, z - 1.0)

        return lerp3(
            smoothstep(x),
            smoothstep(y_fade),
            smoothstep(z),
            v000, v100, v010, v110, v001, v101, v011, v111,
        )
