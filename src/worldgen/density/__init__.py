"""Density-function DAG: node classes, evaluation context and graph passes."""

from .arithmetic import Add, AddConstant, Max, Min, Mul, MulConstant, add, mul
from .base import Blender, BlendingOutput, DensityFunction, EvaluationContext, Filler, Mapper
from .blend import BlendAlpha, BlendDensity, BlendOffset
from .cache import Cache2D, CacheAllInCell, CacheOnce, FlatCache
from .chunk import NoiseChunk
from .debug import Traced
from .interpolation import Interpolated, InterpolatorState, Marker
from .mapping import BindNoises, NoiseRegistry, TraceMapper, collect, map_graph
from .misc import Clamp, Constant, RangeChoice, YClampedGradient
from .noise import (
    Noise,
    NoiseHolder,
    OldBlendedNoise,
    RarityValue,
    ShiftA,
    ShiftB,
    ShiftedNoise,
    WeirdScaledSampler,
)
from .spline import Spline
from .unary import Abs, Cube, HalfNegative, QuarterNegative, Square, Squeeze

__all__ = [
    "Abs",
    "Add",
    "AddConstant",
    "BindNoises",
    "BlendAlpha",
    "BlendDensity",
    "BlendOffset",
    "Blender",
    "BlendingOutput",
    "Cache2D",
    "CacheAllInCell",
    "CacheOnce",
    "Clamp",
    "Constant",
    "Cube",
    "DensityFunction",
    "EvaluationContext",
    "Filler",
    "FlatCache",
    "HalfNegative",
    "Interpolated",
    "InterpolatorState",
    "Mapper",
    "Marker",
    "Max",
    "Min",
    "Mul",
    "MulConstant",
    "Noise",
    "NoiseChunk",
    "NoiseHolder",
    "NoiseRegistry",
    "OldBlendedNoise",
    "QuarterNegative",
    "RangeChoice",
    "RarityValue",
    "ShiftA",
    "ShiftB",
    "ShiftedNoise",
    "Spline",
    "Square",
    "Squeeze",
    "TraceMapper",
    "Traced",
    "WeirdScaledSampler",
    "YClampedGradient",
    "add",
    "collect",
    "map_graph",
    "mul",
]
