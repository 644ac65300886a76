"""Blending hooks.

Without a blender on the context these are neutral: alpha is 1, offset is 0
and density passes through unchanged.
"""

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..types import BlockPos
from .base import DensityFunction, EvaluationContext


class BlendAlpha(DensityFunction):
    _min = 1.0
    _max = 1.0

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        if ctx.blender is None:
            return 1.0
        return ctx.blending_output(pos.x, pos.z).alpha

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        if ctx.blender is None:
            arr.fill(1.0)
        else:
            ctx.fill_all_directly(arr, self)


class BlendOffset(DensityFunction):
    _min = 0.0
    _max = 0.0

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        if ctx.blender is None:
            return 0.0
        return ctx.blending_output(pos.x, pos.z).offset


class BlendDensity(DensityFunction):
    """Density passed through the context blender."""

    _min = float("-inf")
    _max = float("inf")

    def __init__(self, argument: DensityFunction):
        self.argument = argument

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        value = self.argument.sample(pos, ctx)
        if ctx.blender is None:
            return value
        return ctx.blender.blend_density(pos, value)

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.argument.fill_array(arr, ctx)
        if ctx.blender is None:
            return
        for i in range(len(arr)):
            ctx.for_index(i)
            arr[i] = ctx.blender.blend_density(ctx.pos(), arr[i])

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.argument,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return BlendDensity(children[0])
