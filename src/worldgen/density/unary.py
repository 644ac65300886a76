"""Unary transforms of a single input node."""

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..types import BlockPos
from .base import DensityFunction, EvaluationContext


class _Unary(DensityFunction):
    """Pointwise transform; bounds follow from the transform's shape."""

    def __init__(self, input: DensityFunction):
        self.input = input
        self._min, self._max = self._bounds(input.min_value(), input.max_value())

    def _bounds(self, lo: float, hi: float) -> tuple[float, float]:
        # Monotonic transforms map the input range directly.
        return self.transform(lo), self.transform(hi)

    @staticmethod
    def transform(value: float) -> float:
        raise NotImplementedError

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.transform(self.input.sample(pos, ctx))

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.input.fill_array(arr, ctx)
        for i in range(len(arr)):
            arr[i] = self.transform(arr[i])

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.input,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return type(self)(children[0])


class Abs(_Unary):
    def _bounds(self, lo, hi):
        if lo >= 0.0:
            return lo, hi
        if hi <= 0.0:
            return -hi, -lo
        return 0.0, max(-lo, hi)

    @staticmethod
    def transform(value: float) -> float:
        return abs(value)


class Square(_Unary):
    def _bounds(self, lo, hi):
        if lo >= 0.0:
            return lo * lo, hi * hi
        if hi <= 0.0:
            return hi * hi, lo * lo
        return 0.0, max(lo * lo, hi * hi)

    @staticmethod
    def transform(value: float) -> float:
        return value * value


class Cube(_Unary):
    @staticmethod
    def transform(value: float) -> float:
        return value * value * value


class HalfNegative(_Unary):
    @staticmethod
    def transform(value: float) -> float:
        return value if value > 0.0 else value * 0.5


class QuarterNegative(_Unary):
    @staticmethod
    def transform(value: float) -> float:
        return value if value > 0.0 else value * 0.25


class Squeeze(_Unary):
    """Soft saturation ``c/2 - c^3/24`` of the input clamped to ``[-1, 1]``."""

    @staticmethod
    def transform(value: float) -> float:
        c = -1.0 if value < -1.0 else 1.0 if value > 1.0 else value
        return c / 2.0 - c * c * c / 24.0
