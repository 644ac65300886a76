"""Deserializer tables mapping ``type`` tags to node constructors.

A deserializer takes ``(obj, resolver, name)`` where ``obj`` is the JSON
object carrying the ``type`` tag and ``name`` the contextual name, and
returns the constructed node.
"""

from functools import partial
from typing import TYPE_CHECKING, Any, Callable

from ..density import (
    Abs,
    BlendAlpha,
    BlendDensity,
    BlendOffset,
    Cache2D,
    CacheOnce,
    Clamp,
    Cube,
    DensityFunction,
    FlatCache,
    HalfNegative,
    Interpolated,
    Marker,
    Max,
    Min,
    Noise,
    OldBlendedNoise,
    QuarterNegative,
    RangeChoice,
    ShiftA,
    ShiftB,
    ShiftedNoise,
    Square,
    Squeeze,
    WeirdScaledSampler,
    YClampedGradient,
    add,
    mul,
)
from ..rng import XoroShiro
from . import fields

if TYPE_CHECKING:
    from .resolver import Resolver

Deserializer = Callable[[Any, "Resolver", str | None], DensityFunction]


def _wrapping(node: Callable[[DensityFunction], DensityFunction]) -> Deserializer:
    def deserialize(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
        return node(resolver.field(obj, "argument", fields.density, name))

    return deserialize


def _binary(node: Callable[[DensityFunction, DensityFunction], DensityFunction]) -> Deserializer:
    def deserialize(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
        return node(
            resolver.field(obj, "argument1", fields.density, name),
            resolver.field(obj, "argument2", fields.density, name),
        )

    return deserialize


def _marker(kind: str) -> Deserializer:
    return _wrapping(partial(Marker, kind))


def noise(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return Noise(
        resolver.field(obj, "noise", fields.noise, name),
        resolver.field(obj, "xz_scale", fields.number, name),
        resolver.field(obj, "y_scale", fields.number, name),
    )


def shifted_noise(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return ShiftedNoise(
        resolver.field(obj, "shift_x", fields.density, name),
        resolver.field(obj, "shift_y", fields.density, name),
        resolver.field(obj, "shift_z", fields.density, name),
        resolver.field(obj, "xz_scale", fields.number, name),
        resolver.field(obj, "y_scale", fields.number, name),
        resolver.field(obj, "noise", fields.noise, name),
    )


def shift_a(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return ShiftA(resolver.field(obj, "argument", fields.noise, name))


def shift_b(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return ShiftB(resolver.field(obj, "argument", fields.noise, name))


def old_blended_noise(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    # Placeholder stacks; BindNoises reseeds them from the world seed.
    return OldBlendedNoise.create(
        XoroShiro(0),
        resolver.field(obj, "xz_scale", fields.number, name),
        resolver.field(obj, "y_scale", fields.number, name),
        resolver.field(obj, "xz_factor", fields.number, name),
        resolver.field(obj, "y_factor", fields.number, name),
        resolver.field(obj, "smear_scale_multiplier", fields.number, name),
    )


def weird_scaled_sampler(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return WeirdScaledSampler(
        resolver.field(obj, "input", fields.density, name),
        resolver.field(obj, "noise", fields.noise, name),
        resolver.field(obj, "rarity_value_mapper", fields.rarity, name),
    )


def y_clamped_gradient(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return YClampedGradient(
        resolver.field(obj, "from_y", fields.integer, name),
        resolver.field(obj, "to_y", fields.integer, name),
        resolver.field(obj, "from_value", fields.number, name),
        resolver.field(obj, "to_value", fields.number, name),
    )


def range_choice(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return RangeChoice(
        resolver.field(obj, "input", fields.density, name),
        resolver.field(obj, "min_inclusive", fields.number, name),
        resolver.field(obj, "max_exclusive", fields.number, name),
        resolver.field(obj, "when_in_range", fields.density, name),
        resolver.field(obj, "when_out_of_range", fields.density, name),
    )


def clamp(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return Clamp(
        resolver.field(obj, "input", fields.density, name),
        resolver.field(obj, "min", fields.number, name),
        resolver.field(obj, "max", fields.number, name),
    )


def spline(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return resolver.field(obj, "spline", fields.spline, name)


def blend_alpha(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return BlendAlpha()


def blend_offset(obj: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return BlendOffset()


STANDARD: dict[str, Deserializer] = {
    "minecraft:cache_2d": _wrapping(Cache2D),
    "minecraft:flat_cache": _wrapping(partial(FlatCache, eager=True)),
    "minecraft:shifted_noise": shifted_noise,
    "minecraft:noise": noise,
    "minecraft:old_blended_noise": old_blended_noise,
    "minecraft:interpolated": _wrapping(Interpolated),
    "minecraft:add": _binary(add),
    "minecraft:mul": _binary(mul),
    "minecraft:min": _binary(Min),
    "minecraft:max": _binary(Max),
    "minecraft:abs": _wrapping(Abs),
    "minecraft:squeeze": _wrapping(Squeeze),
    "minecraft:square": _wrapping(Square),
    "minecraft:cube": _wrapping(Cube),
    "minecraft:half_negative": _wrapping(HalfNegative),
    "minecraft:quarter_negative": _wrapping(QuarterNegative),
    "minecraft:blend_density": _wrapping(BlendDensity),
    "minecraft:blend_alpha": blend_alpha,
    "minecraft:blend_offset": blend_offset,
    "minecraft:y_clamped_gradient": y_clamped_gradient,
    "minecraft:range_choice": range_choice,
    "minecraft:cache_once": _wrapping(CacheOnce),
    "minecraft:spline": spline,
    "minecraft:shift_a": shift_a,
    "minecraft:shift_b": shift_b,
    "minecraft:clamp": clamp,
    "minecraft:weird_scaled_sampler": weird_scaled_sampler,
}

# Cache and interpolation wrappers become inert markers, for inspecting a
# graph without evaluation state.
MARKERS: dict[str, Deserializer] = {
    **STANDARD,
    "minecraft:interpolated": _marker("interpolated"),
    "minecraft:cache_2d": _marker("cache_2d"),
    "minecraft:flat_cache": _marker("flat_cache"),
    "minecraft:cache_once": _marker("cache_once"),
}
