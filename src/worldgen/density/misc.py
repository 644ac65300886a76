"""Constant, gradient, range-choice and clamp nodes."""

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..noise.math import clamped_map
from ..types import BlockPos
from .base import DensityFunction, EvaluationContext


class Constant(DensityFunction):
    def __init__(self, value: float):
        self.value = float(value)
        self._min = self.value
        self._max = self.value

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.value

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        arr.fill(self.value)

    def __repr__(self) -> str:
        return f"Constant({self.value})"


class YClampedGradient(DensityFunction):
    """Linear ramp over block y, flat outside ``[from_y, to_y]``."""

    def __init__(self, from_y: int, to_y: int, from_value: float, to_value: float):
        self.from_y = from_y
        self.to_y = to_y
        self.from_value = from_value
        self.to_value = to_value
        self._min = min(from_value, to_value)
        self._max = max(from_value, to_value)

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return clamped_map(
            float(pos.y), float(self.from_y), float(self.to_y), self.from_value, self.to_value
        )

    def __repr__(self) -> str:
        return (
            f"YClampedGradient(from_y={self.from_y}, to_y={self.to_y}, "
            f"from_value={self.from_value}, to_value={self.to_value})"
        )


class RangeChoice(DensityFunction):
    """Pick one of two branches depending on whether the input is in range.

    The range is ``[min_inclusive, max_exclusive)``. Only the chosen branch
    is evaluated.
    """

    def __init__(
        self,
        input: DensityFunction,
        min_inclusive: float,
        max_exclusive: float,
        when_in_range: DensityFunction,
        when_out_of_range: DensityFunction,
    ):
        self.input = input
        self.min_inclusive = min_inclusive
        self.max_exclusive = max_exclusive
        self.when_in_range = when_in_range
        self.when_out_of_range = when_out_of_range
        self._min = min(when_in_range.min_value(), when_out_of_range.min_value())
        self._max = max(when_in_range.max_value(), when_out_of_range.max_value())

    def _in_range(self, value: float) -> bool:
        return self.min_inclusive <= value < self.max_exclusive

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        if self._in_range(self.input.sample(pos, ctx)):
            return self.when_in_range.sample(pos, ctx)
        return self.when_out_of_range.sample(pos, ctx)

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.input.fill_array(arr, ctx)
        for i in range(len(arr)):
            chosen = self.when_in_range if self._in_range(arr[i]) else self.when_out_of_range
            ctx.for_index(i)
            arr[i] = chosen.sample(ctx.pos(), ctx)

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.input, self.when_in_range, self.when_out_of_range)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        input, when_in_range, when_out_of_range = children
        return RangeChoice(
            input, self.min_inclusive, self.max_exclusive, when_in_range, when_out_of_range
        )

    def __repr__(self) -> str:
        return f"RangeChoice(min_inclusive={self.min_inclusive}, max_exclusive={self.max_exclusive})"


class Clamp(DensityFunction):
    def __init__(self, input: DensityFunction, min: float, max: float):
        self.input = input
        self._min = min
        self._max = max

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        value = self.input.sample(pos, ctx)
        return self._min if value < self._min else self._max if value > self._max else value

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.input.fill_array(arr, ctx)
        np.clip(arr, self._min, self._max, out=arr)

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.input,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return Clamp(children[0], self._min, self._max)

    def __repr__(self) -> str:
        return f"Clamp(min={self._min}, max={self._max})"
