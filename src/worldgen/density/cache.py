"""Caching wrappers.

The four caches follow different disciplines and are not interchangeable:

* ``FlatCache`` keeps one value per quarter column for the whole context.
* ``Cache2D`` remembers only the last ``(x, z)`` column queried.
* ``CacheOnce`` remembers one value per query and one array per batch fill.
* ``CacheAllInCell`` holds a whole cell, filled by the chunk driver.

Memo state lives in ``ctx.state`` under the node, so a node can be shared by
any number of contexts.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..types import BlockPos
from .base import DensityFunction, EvaluationContext, Filler


class _Wrapper(DensityFunction):
    def __init__(self, argument: DensityFunction):
        self.argument = argument
        self._min = argument.min_value()
        self._max = argument.max_value()

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.argument,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return type(self)(children[0])


class FlatCache(_Wrapper):
    """One value per quarter column, sampled at ``y = 0``.

    When ``eager`` is set and the context describes a chunk column, the
    whole quarter grid of that column is sampled the first time the cache
    is touched.
    """

    def __init__(self, argument: DensityFunction, eager: bool = False):
        super().__init__(argument)
        self.eager = eager

    def _column(self, qx: int, qz: int, ctx: EvaluationContext) -> float:
        return self.argument.sample(BlockPos(qx << 2, 0, qz << 2), ctx)

    def _values(self, ctx: EvaluationContext) -> dict[tuple[int, int], float]:
        values = ctx.state.get(self)
        if values is None:
            values = {}
            ctx.state[self] = values
            if self.eager and ctx.noise_size_xz > 0:
                for i in range(ctx.noise_size_xz + 1):
                    qx = ctx.first_noise_x + i
                    for j in range(ctx.noise_size_xz + 1):
                        qz = ctx.first_noise_z + j
                        values[(qx, qz)] = self._column(qx, qz, ctx)
        return values

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        values = self._values(ctx)
        key = (pos.x >> 2, pos.z >> 2)
        value = values.get(key)
        if value is None:
            value = self._column(key[0], key[1], ctx)
            values[key] = value
        return value

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return FlatCache(children[0], self.eager)

    def __repr__(self) -> str:
        return f"FlatCache(eager={self.eager})"


class Cache2D(_Wrapper):
    """Single-slot memo of the last ``(x, z)`` queried."""

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        slot = ctx.state.get(self)
        if slot is not None and slot[0] == pos.x and slot[1] == pos.z:
            return slot[2]
        value = self.argument.sample(pos, ctx)
        ctx.state[self] = (pos.x, pos.z, value)
        return value

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.argument.fill_array(arr, ctx)


@dataclass
class _OnceState:
    counter: int | None = None
    value: float = 0.0
    array_counter: int | None = None
    array: NDArray[np.float64] | None = None


class CacheOnce(_Wrapper):
    """Memo valid for one query, or for one batch fill.

    In ``Filler.CELL`` mode a single sample is cached per
    ``interpolation_counter``. A batch fill caches the whole array per
    ``array_interpolation_counter``, and cell-mode samples taken during the
    same batch read ``array[array_index]``. In ``Filler.SLICE`` mode single
    samples bypass the memo and never populate it.
    """

    def _state(self, ctx: EvaluationContext) -> _OnceState:
        state = ctx.state.get(self)
        if state is None:
            state = _OnceState()
            ctx.state[self] = state
        return state

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        if ctx.filler is not Filler.CELL:
            return self.argument.sample(pos, ctx)

        state = self._state(ctx)
        if state.array is not None and state.array_counter == ctx.array_interpolation_counter:
            return float(state.array[ctx.array_index])
        if state.counter == ctx.interpolation_counter:
            return state.value

        state.counter = ctx.interpolation_counter
        state.value = self.argument.sample(pos, ctx)
        return state.value

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        state = self._state(ctx)
        if state.array is not None and state.array_counter == ctx.array_interpolation_counter:
            arr[:] = state.array
            return

        self.argument.fill_array(arr, ctx)
        if state.array is not None and len(state.array) == len(arr):
            state.array[:] = arr
        else:
            state.array = arr.copy()
        state.array_counter = ctx.array_interpolation_counter


class CacheAllInCell(_Wrapper):
    """Whole-cell buffer owned by the chunk driver.

    :meth:`fill_cell` evaluates the argument for every block of the current
    cell. Cell-mode samples with in-cell offsets inside the cell read the
    buffer; anything else passes through.
    """

    def fill_cell(self, ctx: EvaluationContext) -> None:
        size = ctx.cell_width * ctx.cell_width * ctx.cell_height
        values = ctx.state.get(self)
        if values is None or len(values) != size:
            values = np.zeros(size, dtype=np.float64)
            ctx.state[self] = values
        self.argument.fill_array(values, ctx)

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        values = ctx.state.get(self)
        if ctx.filler is not Filler.CELL or values is None:
            return self.argument.sample(pos, ctx)

        i, j, k = ctx.in_cell_x, ctx.in_cell_y, ctx.in_cell_z
        width, height = ctx.cell_width, ctx.cell_height
        if 0 <= i < width and 0 <= j < height and 0 <= k < width:
            return float(values[((height - 1 - j) * width + i) * width + k])
        return self.argument.sample(pos, ctx)
