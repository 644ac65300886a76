"""Density function base class and the per-worker evaluation context.

A density function is an immutable node in a DAG that maps integer block
positions to floats. Nodes never hold mutable state themselves: every cache
and interpolator keeps its state in the :class:`EvaluationContext` passed to
``sample``, keyed by the node object. A context belongs to exactly one worker
and is discarded together with all memoized values.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Protocol, Sequence

import numpy as np
from numpy.typing import NDArray

from ..types import BlockPos


class Filler(str, Enum):
    """Batch-fill layout the context is currently driving."""

    CELL = "cell"
    SLICE = "slice"


@dataclass(frozen=True)
class BlendingOutput:
    alpha: float
    offset: float


class Blender(Protocol):
    """Hook blending freshly generated terrain into pre-existing terrain."""

    def blend_offset_and_factor(self, x: int, z: int) -> BlendingOutput: ...

    def blend_density(self, pos: BlockPos, density: float) -> float: ...


@dataclass
class EvaluationContext:
    """Mutable per-worker state for density evaluation.

    Cell geometry fields describe the chunk column currently being filled by
    a :class:`~worldgen.density.chunk.NoiseChunk`; a context used for plain
    point sampling leaves them at zero and ``interpolating`` false.
    """

    filler: Filler = Filler.CELL
    filling_cell: bool = False
    array_index: int = 0
    in_cell_x: int = 0
    in_cell_y: int = 0
    in_cell_z: int = 0
    cell_width: int = 0
    cell_height: int = 0
    cell_count_xz: int = 0
    cell_count_y: int = 0
    cell_noise_min_y: int = 0
    cell_start_block_x: int = 0
    cell_start_block_y: int = 0
    cell_start_block_z: int = 0
    noise_size_xz: int = 0
    first_cell_x: int = 0
    first_cell_z: int = 0
    first_noise_x: int = 0
    first_noise_z: int = 0
    interpolating: bool = False
    interpolation_counter: int = 0
    array_interpolation_counter: int = 0
    blender: Blender | None = None
    trace: list[tuple[str, float]] | None = None
    state: dict["DensityFunction", Any] = field(default_factory=dict, repr=False)
    _blend_column: tuple[int, int] | None = field(default=None, repr=False)
    _blend_output: BlendingOutput | None = field(default=None, repr=False)

    def pos(self) -> BlockPos:
        """Block position addressed by the current cell and in-cell offsets."""
        return BlockPos(
            self.cell_start_block_x + self.in_cell_x,
            self.cell_start_block_y + self.in_cell_y,
            self.cell_start_block_z + self.in_cell_z,
        )

    def sample(self, function: "DensityFunction", pos: BlockPos) -> float:
        """Sample ``function`` as an independent query.

        Advances the interpolation counter so per-query caches cannot leak a
        value from the previous query.
        """
        self.interpolation_counter += 1
        return function.sample(pos, self)

    def for_index(self, index: int) -> None:
        """Point the context at element ``index`` of the current batch."""
        if self.filler is Filler.CELL:
            width = self.cell_width
            j = index // width
            self.in_cell_z = index % width
            self.in_cell_x = j % width
            self.in_cell_y = self.cell_height - 1 - j // width
            self.array_index = index
        else:
            self.cell_start_block_y = (index + self.cell_noise_min_y) * self.cell_height
            self.interpolation_counter += 1
            self.in_cell_y = 0
            self.array_index = index

    def fill_all_directly(self, arr: NDArray[np.float64], function: "DensityFunction") -> None:
        """Fill ``arr`` by sampling ``function`` at every batch position."""
        if self.filler is Filler.CELL:
            self.array_index = 0
            for y in range(self.cell_height - 1, -1, -1):
                self.in_cell_y = y
                for x in range(self.cell_width):
                    self.in_cell_x = x
                    for z in range(self.cell_width):
                        self.in_cell_z = z
                        index = self.array_index
                        self.array_index += 1
                        arr[index] = function.sample(self.pos(), self)
        else:
            for i in range(self.cell_count_y + 1):
                self.for_index(i)
                arr[i] = function.sample(self.pos(), self)

    def blending_output(self, x: int, z: int) -> BlendingOutput:
        """Blender output for a column, memoized for the last column asked."""
        if self.blender is None:
            return BlendingOutput(alpha=1.0, offset=0.0)
        if self._blend_column != (x, z):
            self._blend_column = (x, z)
            self._blend_output = self.blender.blend_offset_and_factor(x, z)
        return self._blend_output


class DensityFunction(ABC):
    """Immutable node of a density-function DAG.

    Subclasses compute their value bounds once at construction and expose
    them through :meth:`min_value` and :meth:`max_value`. For every reachable
    input, ``min_value() <= sample(...) <= max_value()``.
    """

    _min: float
    _max: float

    @abstractmethod
    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        pass

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        ctx.fill_all_directly(arr, self)

    def min_value(self) -> float:
        return self._min

    def max_value(self) -> float:
        return self._max

    def children(self) -> tuple["DensityFunction", ...]:
        return ()

    def rebuild(self, children: Sequence["DensityFunction"]) -> "DensityFunction":
        """Copy of this node with its children replaced, in ``children()`` order."""
        return self

    def map(
        self, mapper: "Mapper", memo: dict["DensityFunction", "DensityFunction"] | None = None
    ) -> "DensityFunction":
        """Rebuild this graph bottom-up through ``mapper``, preserving sharing."""
        from .mapping import map_graph

        return map_graph(self, mapper, memo)

    def __repr__(self) -> str:
        return type(self).__name__


Mapper = Callable[[DensityFunction], DensityFunction]
