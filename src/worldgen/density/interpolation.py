"""Cell interpolation and transparent marker nodes."""

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..noise.math import lerp, lerp3
from ..types import BlockPos
from .base import DensityFunction, EvaluationContext, Filler


class InterpolatorState:
    """Per-context corner values of one :class:`Interpolated` node.

    ``slice0`` and ``slice1`` hold the argument sampled on the cell grid of
    two neighbouring x planes, indexed ``[cell_z][cell_y]``.
    """

    def __init__(self, cell_count_xz: int, cell_count_y: int):
        shape = (cell_count_xz + 1, cell_count_y + 1)
        self.slice0 = np.zeros(shape, dtype=np.float64)
        self.slice1 = np.zeros(shape, dtype=np.float64)
        self.noise000 = self.noise001 = self.noise100 = self.noise101 = 0.0
        self.noise010 = self.noise011 = self.noise110 = self.noise111 = 0.0
        self.value_xz00 = self.value_xz10 = self.value_xz01 = self.value_xz11 = 0.0
        self.value_z0 = self.value_z1 = 0.0
        self.value = 0.0

    def select_cell_yz(self, y: int, z: int) -> None:
        s0, s1 = self.slice0, self.slice1
        self.noise000 = s0[z, y]
        self.noise001 = s0[z + 1, y]
        self.noise100 = s1[z, y]
        self.noise101 = s1[z + 1, y]
        self.noise010 = s0[z, y + 1]
        self.noise011 = s0[z + 1, y + 1]
        self.noise110 = s1[z, y + 1]
        self.noise111 = s1[z + 1, y + 1]

    def update_for_y(self, t: float) -> None:
        self.value_xz00 = lerp(t, self.noise000, self.noise010)
        self.value_xz10 = lerp(t, self.noise100, self.noise110)
        self.value_xz01 = lerp(t, self.noise001, self.noise011)
        self.value_xz11 = lerp(t, self.noise101, self.noise111)

    def update_for_x(self, t: float) -> None:
        self.value_z0 = lerp(t, self.value_xz00, self.value_xz10)
        self.value_z1 = lerp(t, self.value_xz01, self.value_xz11)

    def update_for_z(self, t: float) -> None:
        self.value = lerp(t, self.value_z0, self.value_z1)

    def swap_slices(self) -> None:
        self.slice0, self.slice1 = self.slice1, self.slice0


class Interpolated(DensityFunction):
    """Argument evaluated on cell corners and trilinearly interpolated.

    Outside an interpolating chunk pass, or while the driver fills slices,
    the argument is sampled directly.
    """

    def __init__(self, argument: DensityFunction):
        self.argument = argument
        self._min = argument.min_value()
        self._max = argument.max_value()

    def state(self, ctx: EvaluationContext) -> InterpolatorState:
        state = ctx.state.get(self)
        if state is None:
            state = InterpolatorState(ctx.cell_count_xz, ctx.cell_count_y)
            ctx.state[self] = state
        return state

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        if not ctx.interpolating or ctx.filler is Filler.SLICE:
            return self.argument.sample(pos, ctx)

        state = self.state(ctx)
        if ctx.filling_cell:
            return lerp3(
                ctx.in_cell_x / ctx.cell_width,
                ctx.in_cell_y / ctx.cell_height,
                ctx.in_cell_z / ctx.cell_width,
                state.noise000, state.noise100,
                state.noise010, state.noise110,
                state.noise001, state.noise101,
                state.noise011, state.noise111,
            )
        return state.value

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        if ctx.filling_cell:
            ctx.fill_all_directly(arr, self)
        else:
            self.argument.fill_array(arr, ctx)

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.argument,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return Interpolated(children[0])


class Marker(DensityFunction):
    """Annotation recording a cache or interpolation kind; forwards everything."""

    def __init__(self, kind: str, argument: DensityFunction):
        self.kind = kind
        self.argument = argument
        self._min = argument.min_value()
        self._max = argument.max_value()

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.argument.sample(pos, ctx)

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.argument.fill_array(arr, ctx)

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.argument,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return Marker(self.kind, children[0])

    def __repr__(self) -> str:
        return f"Marker({self.kind})"
