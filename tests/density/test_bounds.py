"""Sampled values of composite graphs stay inside their declared bounds."""

import numpy as np
import pytest

from worldgen.density import (
    Abs,
    BindNoises,
    Clamp,
    Constant,
    Cube,
    EvaluationContext,
    HalfNegative,
    Max,
    Min,
    Noise,
    NoiseHolder,
    NoiseRegistry,
    RarityValue,
    ShiftA,
    ShiftedNoise,
    Spline,
    Square,
    Squeeze,
    WeirdScaledSampler,
    YClampedGradient,
    add,
    mul,
)
from worldgen.noise.double import NoiseParameters
from worldgen.rng import XoroShiro
from worldgen.types import BlockPos


def holder(name: str) -> NoiseHolder:
    return NoiseHolder(name, NoiseParameters(first_octave=-5, amplitudes=(1.0, 0.5, 1.0)))


def graphs():
    offset = ShiftA(holder("test:offset"))
    base = Noise(holder("test:base"), xz_scale=0.25, y_scale=0.5)
    shifted = ShiftedNoise(offset, Constant(0.0), offset, 0.25, 0.0, holder("test:shifted"))
    spline = Spline(
        shifted,
        [-1.0, -0.2, 0.3, 1.0],
        [0.0, 0.8, -0.4, 0.0],
        [Constant(-0.5), Constant(0.1), base, Constant(0.9)],
    )
    return [
        add(Square(base), mul(Constant(-0.5), Cube(shifted))),
        Squeeze(Clamp(add(base, YClampedGradient(-64, 320, 1.5, -1.5)), -1.0, 1.0)),
        Min(Abs(shifted), HalfNegative(base)),
        Max(WeirdScaledSampler(base, holder("test:weird"), RarityValue.TYPE_2), base),
        spline,
    ]


@pytest.mark.parametrize("index", range(5))
def test_samples_within_bounds(index) -> None:
    registry = NoiseRegistry(XoroShiro(1234).fork_positional())
    graph = graphs()[index].map(BindNoises(registry))
    lo, hi = graph.min_value(), graph.max_value()
    assert lo <= hi

    rng = np.random.default_rng(index)
    ctx = EvaluationContext()
    for x, y, z in rng.integers(-20000, 20000, size=(300, 3)):
        value = ctx.sample(graph, BlockPos(int(x), int(y) % 384 - 64, int(z)))
        assert lo - 1e-9 <= value <= hi + 1e-9
