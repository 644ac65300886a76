"""Evaluation tracing."""

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..types import BlockPos
from .base import DensityFunction, EvaluationContext


class Traced(DensityFunction):
    """Records ``(description, value)`` of its argument in ``ctx.trace``.

    Entries are appended in evaluation pre-order: a parent's entry precedes
    the entries of the nodes it evaluates. Nothing is recorded when the
    context has no trace list.
    """

    def __init__(self, argument: DensityFunction):
        self.argument = argument
        self._min = argument.min_value()
        self._max = argument.max_value()

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        trace = ctx.trace
        if trace is None:
            return self.argument.sample(pos, ctx)

        index = len(trace)
        description = repr(self.argument)
        trace.append((description, math.nan))
        value = self.argument.sample(pos, ctx)
        trace[index] = (description, value)
        return value

    def fill_array(self, arr: NDArray[np.float64], ctx: EvaluationContext) -> None:
        self.argument.fill_array(arr, ctx)

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.argument,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return Traced(children[0])

    def __repr__(self) -> str:
        return f"Traced({self.argument!r})"
