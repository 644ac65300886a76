"""Tests for graph passes: mapping, collection, binding and tracing."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from worldgen.density import (
    Add,
    BindNoises,
    Constant,
    EvaluationContext,
    FlatCache,
    Interpolated,
    Mul,
    Noise,
    NoiseHolder,
    NoiseRegistry,
    OldBlendedNoise,
    TraceMapper,
    Traced,
    collect,
    map_graph,
)
from worldgen.noise.double import NoiseParameters
from worldgen.rng import XoroShiro
from worldgen.types import BlockPos

PARAMS = NoiseParameters(first_octave=-3, amplitudes=(1.0,))


def registry(seed: int = 99) -> NoiseRegistry:
    return NoiseRegistry(XoroShiro(seed).fork_positional())


class TestMapGraph:
    """Tests for bottom-up rebuilding."""

    def test_identity_mapper_returns_same_graph(self, counting) -> None:
        root = Add(counting(), Constant(1.0))
        assert map_graph(root, lambda node: node) is root

    def test_children_offered_before_parents(self) -> None:
        seen = []

        def mapper(node):
            seen.append(repr(node))
            return node

        map_graph(Add(Constant(1.0), Constant(2.0)), mapper)
        assert seen == ["Constant(1.0)", "Constant(2.0)", "Add"]

    def test_shared_subtree_stays_shared(self, counting) -> None:
        shared = FlatCache(counting())
        root = Add(shared, Mul(shared, Constant(2.0)))

        def double_constants(node):
            if isinstance(node, Constant):
                return Constant(node.value * 2.0)
            return node

        mapped = map_graph(root, double_constants)
        assert mapped.argument1 is mapped.argument2.argument1
        assert mapped.argument2.argument2.value == 4.0

    def test_shared_memo_across_roots(self, counting) -> None:
        shared = Interpolated(counting())
        memo = {}
        first = map_graph(Add(shared, Constant(0.0)), TraceMapper(), memo)
        second = map_graph(Mul(shared, Constant(1.0)), TraceMapper(), memo)
        assert first.argument.argument1 is second.argument.argument1

    def test_map_method_delegates(self, counting) -> None:
        root = Add(counting(), Constant(1.0))
        assert isinstance(root.map(TraceMapper()), Traced)


class TestCollect:
    """Tests for node collection."""

    def test_distinct_nodes_children_first(self, counting) -> None:
        inner = Interpolated(counting())
        outer = Interpolated(Add(inner, inner))
        assert collect(outer, Interpolated) == [inner, outer]

    def test_missing_kind(self) -> None:
        assert collect(Constant(1.0), Interpolated) == []


class TestNoiseRegistry:
    """Tests for noise binding."""

    def test_same_name_bound_once(self) -> None:
        reg = registry()
        a = reg.get(NoiseHolder("test:a", PARAMS))
        b = reg.get(NoiseHolder("test:a", PARAMS))
        assert a is b
        assert len(reg) == 1
        assert "test:a" in reg

    def test_names_seed_independently(self) -> None:
        reg = registry()
        a = reg.get(NoiseHolder("test:a", PARAMS))
        b = reg.get(NoiseHolder("test:b", PARAMS))
        assert a.sample(10.5, 0.0, 3.25) != b.sample(10.5, 0.0, 3.25)

    def test_binding_independent_of_order(self) -> None:
        first = registry()
        first.get(NoiseHolder("test:b", PARAMS))
        a1 = first.get(NoiseHolder("test:a", PARAMS))
        a2 = registry().get(NoiseHolder("test:a", PARAMS))
        assert a1.sample(1.5, 2.5, 3.5) == a2.sample(1.5, 2.5, 3.5)

    def test_concurrent_binding_converges(self) -> None:
        reg = registry()
        with ThreadPoolExecutor(max_workers=8) as pool:
            holders = list(pool.map(lambda _: reg.get(NoiseHolder("test:a", PARAMS)), range(32)))
        assert all(h is holders[0] for h in holders)


class TestBindNoises:
    """Tests for the binding mapper."""

    def test_binds_leaves_and_shares_holders(self) -> None:
        unbound = NoiseHolder("test:a", PARAMS)
        root = Add(Noise(unbound), Noise(unbound, xz_scale=2.0))
        bound = root.map(BindNoises(registry()))
        assert bound.argument1.holder.bound
        assert bound.argument1.holder is bound.argument2.holder
        assert bound.argument1.max_value() == bound.argument1.holder.max_value()

    def test_reseeds_blended_noise(self) -> None:
        blended = OldBlendedNoise.create(XoroShiro(0), 0.25, 0.125, 80.0, 160.0, 8.0)
        a = blended.map(BindNoises(registry(5)))
        b = blended.map(BindNoises(registry(5)))
        assert a is not blended
        pos = BlockPos(7, 30, -11)
        assert a.sample(pos, EvaluationContext()) == b.sample(pos, EvaluationContext())

    def test_other_nodes_untouched(self) -> None:
        node = Constant(2.0)
        assert BindNoises(registry())(node) is node


class TestTracing:
    """Tests for evaluation traces."""

    def test_trace_in_evaluation_order(self) -> None:
        root = Add(Constant(1.0), Constant(2.0)).map(TraceMapper())
        ctx = EvaluationContext(trace=[])
        assert root.sample(BlockPos(0, 0, 0), ctx) == 3.0
        assert ctx.trace == [
            ("Add", 3.0),
            ("Constant(1.0)", 1.0),
            ("Constant(2.0)", 2.0),
        ]

    def test_no_trace_list_records_nothing(self) -> None:
        root = Constant(1.0).map(TraceMapper())
        ctx = EvaluationContext()
        assert root.sample(BlockPos(0, 0, 0), ctx) == 1.0
        assert ctx.trace is None

    def test_traced_nodes_not_wrapped_twice(self) -> None:
        traced = Traced(Constant(1.0))
        assert TraceMapper()(traced) is traced

    def test_bounds_preserved(self, counting) -> None:
        root = Add(counting(bound=2.0), Constant(1.0)).map(TraceMapper())
        assert (root.min_value(), root.max_value()) == pytest.approx((-1.0, 3.0))
