"""Chunk-column density driver.

Fills the final density of one 16x16 chunk column. :class:`Interpolated`
nodes are evaluated only on the cell grid: the driver fills one x plane of
cell corners at a time (``Filler.SLICE``), then for every cell fills the
whole final density of the cell into a buffer (``Filler.CELL``) while the
interpolators supply trilinear values, and finally reads block values out
of that buffer.
"""

import numpy as np
from numpy.typing import NDArray

from .base import Blender, DensityFunction, EvaluationContext, Filler
from .cache import CacheAllInCell
from .interpolation import Interpolated, InterpolatorState
from .mapping import collect

CHUNK_WIDTH = 16


class NoiseChunk:
    """Density driver for the chunk column at ``(chunk_x, chunk_z)``.

    Args:
        final_density: Bound final-density graph.
        chunk_x: Chunk x coordinate.
        chunk_z: Chunk z coordinate.
        min_y: Lowest block y of the column.
        height: Number of blocks in the column.
        cell_width: Horizontal cell size in blocks.
        cell_height: Vertical cell size in blocks.
        blender: Optional blender for chunk-border smoothing.

    Raises:
        ValueError: If the cell size does not tile the column.
    """

    def __init__(
        self,
        final_density: DensityFunction,
        chunk_x: int,
        chunk_z: int,
        min_y: int,
        height: int,
        cell_width: int = 4,
        cell_height: int = 8,
        blender: Blender | None = None,
    ):
        if cell_width <= 0 or CHUNK_WIDTH % cell_width != 0:
            raise ValueError(f"Cell width {cell_width} does not divide {CHUNK_WIDTH}")
        if cell_height <= 0 or height < cell_height:
            raise ValueError(f"Cell height {cell_height} does not fit height {height}")

        min_x = chunk_x * CHUNK_WIDTH
        min_z = chunk_z * CHUNK_WIDTH
        cell_count_xz = CHUNK_WIDTH // cell_width

        self.ctx = EvaluationContext(
            cell_width=cell_width,
            cell_height=cell_height,
            cell_count_xz=cell_count_xz,
            cell_count_y=height // cell_height,
            cell_noise_min_y=min_y // cell_height,
            first_cell_x=min_x // cell_width,
            first_cell_z=min_z // cell_width,
            first_noise_x=min_x >> 2,
            first_noise_z=min_z >> 2,
            noise_size_xz=(cell_count_xz * cell_width) >> 2,
            blender=blender,
        )
        self.interpolators = collect(final_density, Interpolated)
        self.final = CacheAllInCell(final_density)

    def _states(self) -> list[InterpolatorState]:
        return [interpolator.state(self.ctx) for interpolator in self.interpolators]

    def _fill_slice(self, first: bool, cell_x: int) -> None:
        ctx = self.ctx
        ctx.cell_start_block_x = cell_x * ctx.cell_width
        ctx.in_cell_x = 0
        for i in range(ctx.cell_count_xz + 1):
            ctx.cell_start_block_z = (ctx.first_cell_z + i) * ctx.cell_width
            ctx.in_cell_z = 0
            ctx.array_interpolation_counter += 1
            for interpolator in self.interpolators:
                state = interpolator.state(ctx)
                target = state.slice0 if first else state.slice1
                previous = ctx.filler
                ctx.filler = Filler.SLICE
                interpolator.fill_array(target[i], ctx)
                ctx.filler = previous
        ctx.array_interpolation_counter += 1

    def _select_cell(self, states: list[InterpolatorState], cell_y: int, cell_z: int) -> None:
        ctx = self.ctx
        for state in states:
            state.select_cell_yz(cell_y, cell_z)
        ctx.filling_cell = True
        ctx.cell_start_block_y = (cell_y + ctx.cell_noise_min_y) * ctx.cell_height
        ctx.cell_start_block_z = (ctx.first_cell_z + cell_z) * ctx.cell_width
        ctx.array_interpolation_counter += 1
        self.final.fill_cell(ctx)
        ctx.array_interpolation_counter += 1
        ctx.filling_cell = False

    def fill(self) -> NDArray[np.float64]:
        """Final density of every block, indexed ``[x, y - min_y, z]``.

        ``min_y`` here is rounded down to a whole cell.
        """
        ctx = self.ctx
        width, height = ctx.cell_width, ctx.cell_height
        out = np.zeros(
            (CHUNK_WIDTH, ctx.cell_count_y * height, CHUNK_WIDTH), dtype=np.float64
        )

        ctx.interpolating = True
        self._fill_slice(True, ctx.first_cell_x)
        states = self._states()

        for cell_x in range(ctx.cell_count_xz):
            self._fill_slice(False, ctx.first_cell_x + cell_x + 1)
            ctx.cell_start_block_x = (ctx.first_cell_x + cell_x) * width
            for cell_z in range(ctx.cell_count_xz):
                for cell_y in reversed(range(ctx.cell_count_y)):
                    self._select_cell(states, cell_y, cell_z)
                    for in_y in reversed(range(height)):
                        ctx.in_cell_y = in_y
                        for state in states:
                            state.update_for_y(in_y / height)
                        for in_x in range(width):
                            ctx.in_cell_x = in_x
                            for state in states:
                                state.update_for_x(in_x / width)
                            for in_z in range(width):
                                ctx.in_cell_z = in_z
                                ctx.interpolation_counter += 1
                                for state in states:
                                    state.update_for_z(in_z / width)
                                out[
                                    cell_x * width + in_x,
                                    cell_y * height + in_y,
                                    cell_z * width + in_z,
                                ] = self.final.sample(ctx.pos(), ctx)
            for state in states:
                state.swap_slices()

        ctx.interpolating = False
        return out
