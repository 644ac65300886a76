"""Deterministic random number generators.

Two generators are provided: the modern XoroShiro128++ variant and the legacy
48-bit linear congruential generator. Both produce bit-identical streams for a
given seed and call sequence, and both can be forked into positional sources
that derive independent generators from block positions or string tags.
"""

import hashlib
from abc import ABC, abstractmethod

from .types import MASK_32, MASK_48, MASK_64, BlockPos, wrap_i32, wrap_u64

_SILVER_RATIO = 0x6A09E667F3BCC909
_GOLDEN_RATIO = 0x9E3779B97F4A7C15

# 2^-53 and 2^-24
_F64_UNIT = 1.1102230246251565e-16
_F32_UNIT = 5.960464477539063e-08

_LCG_MULTIPLIER = 0x5DEECE66D
_LCG_INCREMENT = 11
_LCG_F64_UNIT = 1.110223e-16


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (64 - shift))) & MASK_64


def _mix_stafford13(value: int) -> int:
    value = ((value ^ (value >> 30)) * 0xBF58476D1CE4E5B9) & MASK_64
    value = ((value ^ (value >> 27)) * 0x94D049BB133111EB) & MASK_64
    return value ^ (value >> 31)


def java_string_hash(text: str) -> int:
    """32-bit multiplicative string hash (multiplier 31) over UTF-8 bytes."""
    h = 0
    for b in text.encode("utf-8"):
        h = wrap_i32(31 * h + b)
    return h


class RandomSource(ABC):
    """Capability set shared by every generator."""

    @abstractmethod
    def next_u64(self) -> int:
        """Next unsigned 64-bit value."""

    @abstractmethod
    def next_u32(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""

    @abstractmethod
    def next_f64(self) -> float:
        """Uniform double in ``[0, 1)``."""

    @abstractmethod
    def next_f32(self) -> float:
        """Uniform single-precision value in ``[0, 1)``."""

    @abstractmethod
    def next_bool(self) -> bool:
        pass

    @abstractmethod
    def fork(self) -> "RandomSource":
        """Derive an independent generator of the same family."""

    @abstractmethod
    def fork_positional(self) -> "RandomPositional":
        """Derive a positional source of the same family."""

    def next_u32_inclusive(self, lo: int, hi: int) -> int:
        """Uniform integer in ``[lo, hi]``."""
        return self.next_u32(hi - lo + 1) + lo

    def skip(self, n: int) -> None:
        """Discard ``n`` 64-bit draws."""
        for _ in range(n):
            self.next_u64()


class RandomPositional(ABC):
    """Factory of generators keyed by block position or string tag."""

    @abstractmethod
    def at(self, pos: BlockPos) -> RandomSource:
        pass

    @abstractmethod
    def by_hash(self, tag: str) -> RandomSource:
        pass


class XoroShiro(RandomSource):
    """XoroShiro128++ generator with Stafford-mixed seeding."""

    __slots__ = ("lo", "hi")

    def __init__(self, seed: int):
        lo = wrap_u64(seed) ^ _SILVER_RATIO
        hi = wrap_u64(lo + _GOLDEN_RATIO)
        self.lo = _mix_stafford13(lo)
        self.hi = _mix_stafford13(hi)

    @classmethod
    def from_lo_hi(cls, lo: int, hi: int) -> "XoroShiro":
        """Create a generator from raw state words."""
        rng = cls.__new__(cls)
        rng.lo = wrap_u64(lo)
        rng.hi = wrap_u64(hi)
        return rng

    def next_u64(self) -> int:
        lo = self.lo
        hi = self.hi
        n = wrap_u64(_rotl(wrap_u64(lo + hi), 17) + lo)
        hi ^= lo
        self.lo = _rotl(lo, 49) ^ hi ^ ((hi << 21) & MASK_64)
        self.hi = _rotl(hi, 28)
        return n

    def next_u32(self, bound: int) -> int:
        r = ((self.next_u64() & MASK_32) * bound) & MASK_64
        if r < bound:
            threshold = ((1 << 64) - bound) % bound
            while r < threshold:
                r = ((self.next_u64() & MASK_32) * bound) & MASK_64
        return r >> 32

    def next_f64(self) -> float:
        return (self.next_u64() >> 11) * _F64_UNIT

    def next_f32(self) -> float:
        return (self.next_u64() >> 40) * _F32_UNIT

    def next_bool(self) -> bool:
        return self.next_u64() & 1 != 0

    def fork(self) -> "XoroShiro":
        lo = self.next_u64()
        hi = self.next_u64()
        return XoroShiro.from_lo_hi(lo, hi)

    def fork_positional(self) -> "XoroShiroPositional":
        lo = self.next_u64()
        hi = self.next_u64()
        return XoroShiroPositional(lo, hi)

    def __repr__(self) -> str:
        return f"XoroShiro(lo={self.lo:#x}, hi={self.hi:#x})"


class XoroShiroPositional(RandomPositional):
    """Positional source for :class:`XoroShiro`."""

    __slots__ = ("lo", "hi")

    def __init__(self, lo: int, hi: int):
        self.lo = wrap_u64(lo)
        self.hi = wrap_u64(hi)

    def at(self, pos: BlockPos) -> XoroShiro:
        return XoroShiro.from_lo_hi(wrap_u64(pos.seed()) ^ self.lo, self.hi)

    def by_hash(self, tag: str) -> XoroShiro:
        digest = hashlib.md5(tag.encode("utf-8")).digest()
        lo = int.from_bytes(digest[:8], "big")
        hi = int.from_bytes(digest[8:], "big")
        return XoroShiro.from_lo_hi(self.lo ^ lo, self.hi ^ hi)


class LegacyRandom(RandomSource):
    """48-bit linear congruential generator.

    Only a few older noise layers use it; everything else draws from
    :class:`XoroShiro`.
    """

    __slots__ = ("state",)

    def __init__(self, seed: int):
        self.state = (wrap_u64(seed) ^ _LCG_MULTIPLIER) & MASK_48

    def next_bits(self, bits: int) -> int:
        """Advance the state and return its top ``bits`` bits."""
        self.state = (self.state * _LCG_MULTIPLIER + _LCG_INCREMENT) & MASK_48
        return self.state >> (48 - bits)

    def next_u64(self) -> int:
        high = wrap_i32(self.next_bits(32))
        low = wrap_i32(self.next_bits(32))
        return wrap_u64((high << 32) + low)

    def next_u32(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError("bound must be greater than 0")
        if bound & (bound - 1) == 0:
            return (bound * self.next_bits(31)) >> 31
        while True:
            i = self.next_bits(31)
            j = i % bound
            if wrap_i32(i - j + (bound - 1)) >= 0:
                return j

    def next_f64(self) -> float:
        i = self.next_bits(26)
        j = self.next_bits(27)
        return ((i << 27) + j) * _LCG_F64_UNIT

    def next_f32(self) -> float:
        return self.next_bits(24) * _F32_UNIT

    def next_bool(self) -> bool:
        return self.next_bits(1) != 0

    def fork(self) -> "LegacyRandom":
        return LegacyRandom(self.next_u64())

    def fork_positional(self) -> "LegacyPositional":
        return LegacyPositional(self.next_u64())

    def __repr__(self) -> str:
        return f"LegacyRandom(state={self.state})"


class LegacyPositional(RandomPositional):
    """Positional source for :class:`LegacyRandom`."""

    __slots__ = ("state",)

    def __init__(self, state: int):
        self.state = wrap_u64(state)

    def at(self, pos: BlockPos) -> LegacyRandom:
        return LegacyRandom(wrap_u64(pos.seed()) ^ self.state)

    def by_hash(self, tag: str) -> LegacyRandom:
        return LegacyRandom(wrap_u64(java_string_hash(tag)) ^ self.state)


def create_random(seed: int, legacy: bool = False) -> RandomSource:
    """Create the generator selected by the noise settings.

    Args:
        seed: World seed.
        legacy: Use the 48-bit LCG instead of XoroShiro.

    Returns:
        A freshly seeded generator.
    """
    if legacy:
        return LegacyRandom(seed)
    return XoroShiro(seed)
