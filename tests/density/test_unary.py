"""Tests for unary transforms."""

import numpy as np
import pytest

from worldgen.density import (
    Abs,
    Constant,
    Cube,
    EvaluationContext,
    Filler,
    HalfNegative,
    QuarterNegative,
    Square,
    Squeeze,
)
from worldgen.types import BlockPos


class TestTransforms:
    """Tests for the pointwise formulas."""

    @pytest.mark.parametrize(
        "node_type,value,expected",
        [
            (Abs, -2.5, 2.5),
            (Square, -3.0, 9.0),
            (Cube, -2.0, -8.0),
            (HalfNegative, -4.0, -2.0),
            (HalfNegative, 4.0, 4.0),
            (QuarterNegative, -4.0, -1.0),
            (QuarterNegative, 0.5, 0.5),
            (Squeeze, 0.5, 0.5 / 2 - 0.125 / 24),
            (Squeeze, 3.0, 0.5 - 1.0 / 24),
            (Squeeze, -7.0, -0.5 + 1.0 / 24),
        ],
    )
    def test_sample(self, ctx, node_type, value, expected) -> None:
        node = node_type(Constant(value))
        assert node.sample(BlockPos(0, 0, 0), ctx) == pytest.approx(expected)

    def test_fill_array(self) -> None:
        ctx = EvaluationContext(filler=Filler.SLICE, cell_count_y=2, cell_height=8)
        arr = np.zeros(3)
        HalfNegative(Constant(-1.0)).fill_array(arr, ctx)
        assert arr.tolist() == [-0.5, -0.5, -0.5]


class TestUnaryBounds:
    """Tests for bounds of non-monotonic transforms."""

    def test_abs_straddling_zero(self, counting) -> None:
        node = Abs(counting(bound=3.0))
        assert (node.min_value(), node.max_value()) == (0.0, 3.0)

    def test_abs_negative_input(self) -> None:
        node = Abs(Constant(-2.0))
        assert (node.min_value(), node.max_value()) == (2.0, 2.0)

    def test_square_straddling_zero(self, counting) -> None:
        node = Square(counting(bound=2.0))
        assert (node.min_value(), node.max_value()) == (0.0, 4.0)

    def test_monotonic_transform(self, counting) -> None:
        node = Cube(counting(bound=2.0))
        assert (node.min_value(), node.max_value()) == (-8.0, 8.0)

    def test_squeeze_saturates(self, counting) -> None:
        node = Squeeze(counting(bound=100.0))
        assert node.max_value() == pytest.approx(0.5 - 1.0 / 24)
        assert node.min_value() == pytest.approx(-0.5 + 1.0 / 24)
