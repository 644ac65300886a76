"""Binary arithmetic nodes.

``Add`` and ``Mul`` with a literal operand are folded into ``AddConstant`` and
``MulConstant`` by :func:`add` and :func:`mul`. ``Mul``, ``Min`` and ``Max``
skip their second operand when the first value already decides the result.
"""

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..types import BlockPos
from .base import DensityFunction, EvaluationContext
from .misc import Constant


def product_bounds(min1: float, max1: float, min2: float, max2: float) -> tuple[float, float]:
    """Interval product, accounting for the operand signs."""
    if min1 > 0.0 and min2 > 0.0:
        return min1 * min2, max1 * max2
    if max1 < 0.0 and max2 < 0.0:
        return max1 * max2, min1 * min2
    corners = (min1 * min2, min1 * max2, max1 * min2, max1 * max2)
    return min(corners), max(corners)


class AddConstant(DensityFunction):
    def __init__(self, input: DensityFunction, argument: float):
        self.input = input
        self.argument = argument
        self._min = input.min_value() + argument
        self._max = input.max_value() + argument

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.input.sample(pos, ctx) + self.argument

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.input.fill_array(arr, ctx)
        arr += self.argument

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.input,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return AddConstant(children[0], self.argument)

    def __repr__(self) -> str:
        return f"AddConstant({self.argument})"


class MulConstant(DensityFunction):
    def __init__(self, input: DensityFunction, argument: float):
        self.input = input
        self.argument = argument
        self._min, self._max = product_bounds(
            input.min_value(), input.max_value(), argument, argument
        )

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.input.sample(pos, ctx) * self.argument

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.input.fill_array(arr, ctx)
        arr *= self.argument

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.input,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return MulConstant(children[0], self.argument)

    def __repr__(self) -> str:
        return f"MulConstant({self.argument})"


class _Binary(DensityFunction):
    def __init__(self, argument1: DensityFunction, argument2: DensityFunction):
        self.argument1 = argument1
        self.argument2 = argument2
        self._min, self._max = self._bounds(
            argument1.min_value(), argument1.max_value(),
            argument2.min_value(), argument2.max_value(),
        )

    def _bounds(self, min1: float, max1: float, min2: float, max2: float) -> tuple[float, float]:
        raise NotImplementedError

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.argument1, self.argument2)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return type(self)(children[0], children[1])


class Add(_Binary):
    def _bounds(self, min1, max1, min2, max2):
        return min1 + min2, max1 + max2

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.argument1.sample(pos, ctx) + self.argument2.sample(pos, ctx)

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.argument1.fill_array(arr, ctx)
        other = np.empty_like(arr)
        self.argument2.fill_array(other, ctx)
        arr += other


class Mul(_Binary):
    def _bounds(self, min1, max1, min2, max2):
        return product_bounds(min1, max1, min2, max2)

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        value = self.argument1.sample(pos, ctx)
        if value == 0.0:
            return 0.0
        return value * self.argument2.sample(pos, ctx)

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.argument1.fill_array(arr, ctx)
        for i in range(len(arr)):
            value = arr[i]
            if value != 0.0:
                ctx.for_index(i)
                arr[i] = value * self.argument2.sample(ctx.pos(), ctx)


class Min(_Binary):
    def _bounds(self, min1, max1, min2, max2):
        return min(min1, min2), min(max1, max2)

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        value = self.argument1.sample(pos, ctx)
        if value < self.argument2.min_value():
            return value
        return min(value, self.argument2.sample(pos, ctx))

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.argument1.fill_array(arr, ctx)
        floor = self.argument2.min_value()
        for i in range(len(arr)):
            value = arr[i]
            if value >= floor:
                ctx.for_index(i)
                arr[i] = min(value, self.argument2.sample(ctx.pos(), ctx))


class Max(_Binary):
    def _bounds(self, min1, max1, min2, max2):
        return max(min1, min2), max(max1, max2)

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        value = self.argument1.sample(pos, ctx)
        if value > self.argument2.max_value():
            return value
        return max(value, self.argument2.sample(pos, ctx))

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.argument1.fill_array(arr, ctx)
        ceiling = self.argument2.max_value()
        for i in range(len(arr)):
            value = arr[i]
            if value <= ceiling:
                ctx.for_index(i)
                arr[i] = max(value, self.argument2.sample(ctx.pos(), ctx))


def add(argument1: DensityFunction, argument2: DensityFunction) -> DensityFunction:
    """Sum of two nodes, folding a literal first operand."""
    if isinstance(argument1, Constant):
        return AddConstant(argument2, argument1.value)
    return Add(argument1, argument2)


def mul(argument1: DensityFunction, argument2: DensityFunction) -> DensityFunction:
    """Product of two nodes, folding a literal first operand."""
    if isinstance(argument1, Constant):
        return MulConstant(argument2, argument1.value)
    return Mul(argument1, argument2)
