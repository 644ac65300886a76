"""Tests for binary arithmetic nodes."""

import numpy as np
import pytest

from worldgen.density import (
    Add,
    AddConstant,
    Constant,
    EvaluationContext,
    Filler,
    Max,
    Min,
    Mul,
    MulConstant,
    add,
    mul,
)
from worldgen.density.arithmetic import product_bounds
from worldgen.types import BlockPos

ORIGIN = BlockPos(0, 0, 0)


class TestProductBounds:
    """Tests for interval multiplication."""

    def test_both_positive(self) -> None:
        assert product_bounds(1.0, 2.0, 3.0, 4.0) == (3.0, 8.0)

    def test_both_negative(self) -> None:
        assert product_bounds(-2.0, -1.0, -4.0, -3.0) == (3.0, 8.0)

    def test_mixed_signs(self) -> None:
        """Negative times positive interval spans the corner products."""
        assert product_bounds(-2.0, -1.0, 1.0, 3.0) == (-6.0, -1.0)

    def test_straddling_zero(self) -> None:
        assert product_bounds(-1.0, 2.0, -3.0, 1.0) == (-6.0, 3.0)


class TestAdd:
    """Tests for Add and AddConstant."""

    def test_sample(self, ctx, counting) -> None:
        node = Add(counting(fx=1.0), counting(fx=0.0, fz=2.0))
        assert node.sample(BlockPos(3, 0, 5), ctx) == 13.0

    def test_bounds(self) -> None:
        node = Add(Constant(1.0), Constant(-3.0))
        assert node.min_value() == -2.0
        assert node.max_value() == -2.0

    def test_literal_first_operand_folds(self, counting) -> None:
        node = add(Constant(2.5), counting())
        assert isinstance(node, AddConstant)
        assert node.argument == 2.5

    def test_literal_second_operand_kept(self, counting) -> None:
        assert isinstance(add(counting(), Constant(2.5)), Add)

    def test_add_constant_fill_array(self) -> None:
        ctx = EvaluationContext(filler=Filler.SLICE, cell_count_y=3, cell_height=8)
        arr = np.zeros(4)
        AddConstant(Constant(1.0), 0.5).fill_array(arr, ctx)
        assert arr.tolist() == [1.5, 1.5, 1.5, 1.5]


class TestMul:
    """Tests for Mul and MulConstant."""

    def test_zero_skips_second_operand(self, ctx, counting) -> None:
        second = counting()
        node = Mul(Constant(0.0), second)
        assert node.sample(BlockPos(7, 0, 0), ctx) == 0.0
        assert second.calls == 0

    def test_nonzero_evaluates_both(self, ctx, counting) -> None:
        second = counting()
        node = Mul(Constant(3.0), second)
        assert node.sample(BlockPos(7, 0, 0), ctx) == 21.0
        assert second.calls == 1

    def test_literal_first_operand_folds(self, counting) -> None:
        node = mul(Constant(-2.0), counting(bound=5.0))
        assert isinstance(node, MulConstant)
        assert node.min_value() == -10.0
        assert node.max_value() == 10.0

    def test_negative_constant_bounds(self) -> None:
        node = MulConstant(AddConstant(Constant(1.0), 1.0), -3.0)
        assert (node.min_value(), node.max_value()) == (-6.0, -6.0)


class TestMinMax:
    """Tests for the short-circuiting Min and Max."""

    def test_min_skips_when_below_second_floor(self, ctx, counting) -> None:
        second = counting(bound=10.0)
        node = Min(Constant(-20.0), second)
        assert node.sample(ORIGIN, ctx) == -20.0
        assert second.calls == 0

    def test_min_evaluates_inside_range(self, ctx, counting) -> None:
        second = counting(bound=10.0)
        node = Min(Constant(5.0), second)
        assert node.sample(BlockPos(2, 0, 0), ctx) == 2.0
        assert second.calls == 1

    def test_max_skips_when_above_second_ceiling(self, ctx, counting) -> None:
        second = counting(bound=10.0)
        node = Max(Constant(20.0), second)
        assert node.sample(ORIGIN, ctx) == 20.0
        assert second.calls == 0

    def test_max_evaluates_inside_range(self, ctx, counting) -> None:
        node = Max(Constant(1.0), counting(bound=10.0))
        assert node.sample(BlockPos(4, 0, 0), ctx) == 4.0

    def test_bounds(self, counting) -> None:
        a = counting(bound=1.0)
        b = Constant(3.0)
        assert (Min(a, b).min_value(), Min(a, b).max_value()) == (-1.0, 1.0)
        assert (Max(a, b).min_value(), Max(a, b).max_value()) == (3.0, 3.0)

    @pytest.mark.parametrize("node_type", [Min, Max])
    def test_fill_array_matches_sample(self, node_type, counting) -> None:
        """Batch fill agrees with per-position sampling."""
        ctx = EvaluationContext(filler=Filler.SLICE, cell_count_y=4, cell_height=8)
        node = node_type(counting(fy=0.1, bound=100.0), Constant(1.5))
        arr = np.zeros(5)
        node.fill_array(arr, ctx)

        point_ctx = EvaluationContext()
        expected = [node.sample(BlockPos(0, i * 8, 0), point_ctx) for i in range(5)]
        assert arr.tolist() == pytest.approx(expected)


class TestRebuild:
    """Tests for child replacement."""

    def test_rebuild_keeps_type(self, counting) -> None:
        node = Max(Constant(1.0), Constant(2.0))
        replacement = counting()
        rebuilt = node.rebuild([replacement, Constant(2.0)])
        assert isinstance(rebuilt, Max)
        assert rebuilt.argument1 is replacement
