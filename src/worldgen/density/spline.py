"""Cubic Hermite splines over a coordinate subtree.

Control point values are density functions themselves: a :class:`Constant`
or a nested :class:`Spline`. Outside the location range the spline extends
linearly using the derivative of the outermost point.
"""

from bisect import bisect_left
from typing import Sequence

from ..exceptions import InvalidSplineError
from ..noise.math import lerp
from ..types import BlockPos
from .base import DensityFunction, EvaluationContext


class Spline(DensityFunction):
    """Multipoint spline.

    Args:
        coordinate: Node whose value selects the position along the spline.
        locations: Ascending control point locations.
        derivatives: Slope at each control point.
        values: Value at each control point.

    Raises:
        InvalidSplineError: If the point lists are empty or of unequal length.
    """

    def __init__(
        self,
        coordinate: DensityFunction,
        locations: Sequence[float],
        derivatives: Sequence[float],
        values: Sequence[DensityFunction],
    ):
        if not (len(locations) == len(derivatives) == len(values)):
            raise InvalidSplineError(
                f"All lengths must be equal, got: {len(locations)} {len(values)} {len(derivatives)}"
            )
        if not locations:
            raise InvalidSplineError("Cannot create a multipoint spline with no points")

        self.coordinate = coordinate
        self.locations = tuple(float(v) for v in locations)
        self.derivatives = tuple(float(v) for v in derivatives)
        self.values = tuple(values)
        self._min, self._max = self._bounds()

    def _extend(self, at: float, value: float, index: int) -> float:
        slope = self.derivatives[index]
        if slope == 0.0:
            return value
        return value + slope * (at - self.locations[index])

    def _bounds(self) -> tuple[float, float]:
        locations, derivatives, values = self.locations, self.derivatives, self.values
        last = len(locations) - 1
        lo = float("inf")
        hi = float("-inf")

        input_min = self.coordinate.min_value()
        input_max = self.coordinate.max_value()
        if input_min < locations[0]:
            a = self._extend(input_min, values[0].min_value(), 0)
            b = self._extend(input_min, values[0].max_value(), 0)
            lo = min(lo, a, b)
            hi = max(hi, a, b)
        if input_max > locations[last]:
            a = self._extend(input_max, values[last].min_value(), last)
            b = self._extend(input_max, values[last].max_value(), last)
            lo = min(lo, a, b)
            hi = max(hi, a, b)

        for value in values:
            lo = min(lo, value.min_value())
            hi = max(hi, value.max_value())

        for j in range(last):
            slope1 = derivatives[j]
            slope2 = derivatives[j + 1]
            if slope1 == 0.0 and slope2 == 0.0:
                continue
            length = locations[j + 1] - locations[j]
            min1, max1 = values[j].min_value(), values[j].max_value()
            min2, max2 = values[j + 1].min_value(), values[j + 1].max_value()
            rise1 = slope1 * length
            rise2 = slope2 * length
            # Hermite overshoot is at most a quarter of the tangent excess.
            extreme_low = min(rise1 - max2 + min1, -rise2 + min2 - max1)
            extreme_high = max(rise1 - min2 + max1, -rise2 + max2 - min1)
            lo = min(lo, min(min1, min2) + 0.25 * extreme_low)
            hi = max(hi, max(max1, max2) + 0.25 * extreme_high)

        return lo, hi

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        at = self.coordinate.sample(pos, ctx)
        start = bisect_left(self.locations, at) - 1
        last = len(self.locations) - 1

        if start < 0:
            return self._extend(at, self.values[0].sample(pos, ctx), 0)
        if start == last:
            return self._extend(at, self.values[last].sample(pos, ctx), last)

        x1 = self.locations[start]
        x2 = self.locations[start + 1]
        t = (at - x1) / (x2 - x1)
        y1 = self.values[start].sample(pos, ctx)
        y2 = self.values[start + 1].sample(pos, ctx)
        t1 = self.derivatives[start] * (x2 - x1) - (y2 - y1)
        t2 = -self.derivatives[start + 1] * (x2 - x1) + (y2 - y1)
        return lerp(t, y1, y2) + t * (1.0 - t) * lerp(t, t1, t2)

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.coordinate, *self.values)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return Spline(children[0], self.locations, self.derivatives, children[1:])

    def __repr__(self) -> str:
        return f"Spline(points={len(self.locations)}, min_value={self._min}, max_value={self._max})"
