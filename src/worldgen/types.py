"""Core types and fixed-width integer helpers."""

from typing import NamedTuple

MASK_32 = 0xFFFFFFFF
MASK_48 = (1 << 48) - 1
MASK_64 = 0xFFFFFFFFFFFFFFFF


def wrap_u64(value: int) -> int:
    """Reduce an integer to an unsigned 64-bit value."""
    return value & MASK_64


def wrap_i64(value: int) -> int:
    """Reduce an integer to a signed 64-bit value (two's complement)."""
    value &= MASK_64
    return value - (1 << 64) if value >= 1 << 63 else value


def wrap_i32(value: int) -> int:
    """Reduce an integer to a signed 32-bit value (two's complement)."""
    value &= MASK_32
    return value - (1 << 32) if value >= 1 << 31 else value


class BlockPos(NamedTuple):
    """Immutable integer block position."""

    x: int
    y: int
    z: int

    def seed(self) -> int:
        """Signed 64-bit positional seed."""
        i = wrap_i32(self.x * 3129871) ^ wrap_i64(self.z * 116129781) ^ self.y
        i = wrap_i64(wrap_i64(i * i * 42317861) + i * 11)
        return i >> 16

    def quart(self) -> "BlockPos":
        """Quarter-resolution position containing this block."""
        return BlockPos(self.x >> 2, self.y >> 2, self.z >> 2)

    @classmethod
    def from_quart(cls, qx: int, qy: int, qz: int) -> "BlockPos":
        """Block position of the origin of a quarter cell."""
        return cls(qx << 2, qy << 2, qz << 2)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"
