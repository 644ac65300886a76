"""Block-resolution biome lookup.

Biomes are classified per quarter cell. To avoid blocky borders, a block
picks among the eight surrounding quarter cells the one whose jittered
center is closest.
"""

import hashlib
from typing import Callable

from ..types import BlockPos, wrap_i64

_LCG_MULTIPLIER = 6364136223846793005
_LCG_INCREMENT = 1442695040888963407


def hash_seed(seed: int) -> int:
    """First eight bytes of SHA-256 over the little-endian world seed."""
    digest = hashlib.sha256(wrap_i64(seed).to_bytes(8, "little", signed=True)).digest()
    return int.from_bytes(digest[:8], "little", signed=True)


def _lcg_next(state: int, term: int) -> int:
    state = wrap_i64(state * wrap_i64(state * _LCG_MULTIPLIER + _LCG_INCREMENT))
    return wrap_i64(state + term)


def _fiddle(value: int) -> float:
    return (((value >> 24) % 1024) / 1024.0 - 0.5) * 0.9


def fiddled_distance(seed: int, quart: BlockPos, dx: float, dy: float, dz: float) -> float:
    state = seed
    for term in (quart.x, quart.y, quart.z, quart.x, quart.y, quart.z):
        state = _lcg_next(state, term)
    shift_x = _fiddle(state)
    state = _lcg_next(state, seed)
    shift_y = _fiddle(state)
    state = _lcg_next(state, seed)
    shift_z = _fiddle(state)
    return (dz + shift_z) ** 2 + (dy + shift_y) ** 2 + (dx + shift_x) ** 2


class BiomeZoom:
    """Smooths a quarter-resolution biome lookup to block resolution.

    Args:
        seed: World seed; hashed with :func:`hash_seed`.
        lookup: Biome at a quarter position.
    """

    def __init__(self, seed: int, lookup: Callable[[BlockPos], str]):
        self.seed = hash_seed(seed)
        self.lookup = lookup

    def quart_for(self, pos: BlockPos) -> BlockPos:
        """Quarter cell whose biome the block at ``pos`` takes."""
        x, y, z = pos.x - 2, pos.y - 2, pos.z - 2
        base = BlockPos(x >> 2, y >> 2, z >> 2)
        fx, fy, fz = (x & 3) / 4.0, (y & 3) / 4.0, (z & 3) / 4.0

        best = 0
        best_distance = float("inf")
        for candidate in range(8):
            ox, oy, oz = (candidate >> 2) & 1, (candidate >> 1) & 1, candidate & 1
            quart = BlockPos(base.x + ox, base.y + oy, base.z + oz)
            distance = fiddled_distance(self.seed, quart, fx - ox, fy - oy, fz - oz)
            if best_distance > distance:
                best = candidate
                best_distance = distance

        return BlockPos(base.x + ((best >> 2) & 1), base.y + ((best >> 1) & 1), base.z + (best & 1))

    def biome_at(self, pos: BlockPos) -> str:
        return self.lookup(self.quart_for(pos))
