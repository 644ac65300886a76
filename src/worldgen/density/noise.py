"""Noise-backed leaves.

Every leaf delegates to a :class:`NoiseHolder`. Holders are created unbound
by the resolver and swapped for seeded ones by
:class:`~worldgen.density.mapping.BindNoises`.
"""

from enum import Enum
from typing import Sequence

from ..noise.double import DoubleMultiOctaveNoise, NoiseParameters
from ..noise.math import clamped_lerp
from ..noise.octave import LegacyMultiOctaveNoise, wrap
from ..rng import RandomSource
from ..types import BlockPos
from .base import DensityFunction, EvaluationContext

# Horizontal and vertical scale of the blended terrain noise.
BLENDED_NOISE_SCALE = 684.412


class NoiseHolder:
    """A named noise definition and, once bound, its seeded noise."""

    def __init__(
        self,
        name: str,
        parameters: NoiseParameters,
        noise: DoubleMultiOctaveNoise | None = None,
    ):
        self.name = name
        self.parameters = parameters
        self.noise = noise

    @property
    def bound(self) -> bool:
        return self.noise is not None

    def bind(self, rng: RandomSource) -> "NoiseHolder":
        """Copy of this holder with a noise seeded from ``rng``."""
        return NoiseHolder(
            self.name, self.parameters, DoubleMultiOctaveNoise.from_parameters(rng, self.parameters)
        )

    def sample(self, x: float, y: float, z: float) -> float:
        """Sample the bound noise.

        An unbound holder samples ``0.0``. Graphs built by the resolver hold
        unbound holders until ``BindNoises`` runs, so sample them only after
        binding (``TerrainEngine`` binds every graph it returns).
        """
        if self.noise is None:
            return 0.0
        return self.noise.sample(x, y, z)

    def max_value(self) -> float:
        if self.noise is None:
            return 2.0
        return self.noise.max_value

    def __repr__(self) -> str:
        state = "bound" if self.bound else "unbound"
        return f"NoiseHolder({self.name}, {state})"


class NoiseLeaf(DensityFunction):
    """Leaf reading one holder; bounds are symmetric around zero."""

    holder: NoiseHolder
    scale = 1.0

    def _set_bounds(self) -> None:
        self._max = self.holder.max_value() * self.scale
        self._min = -self._max

    def with_holder(self, holder: NoiseHolder) -> DensityFunction:
        raise NotImplementedError


class Noise(NoiseLeaf):
    def __init__(self, holder: NoiseHolder, xz_scale: float = 1.0, y_scale: float = 1.0):
        self.holder = holder
        self.xz_scale = xz_scale
        self.y_scale = y_scale
        self._set_bounds()

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.holder.sample(pos.x * self.xz_scale, pos.y * self.y_scale, pos.z * self.xz_scale)

    def with_holder(self, holder: NoiseHolder) -> DensityFunction:
        return Noise(holder, self.xz_scale, self.y_scale)

    def __repr__(self) -> str:
        return f"Noise({self.holder.name}, xz_scale={self.xz_scale}, y_scale={self.y_scale})"


class ShiftedNoise(NoiseLeaf):
    """Noise sampled at the scaled position plus three shift subtrees."""

    def __init__(
        self,
        shift_x: DensityFunction,
        shift_y: DensityFunction,
        shift_z: DensityFunction,
        xz_scale: float,
        y_scale: float,
        holder: NoiseHolder,
    ):
        self.shift_x = shift_x
        self.shift_y = shift_y
        self.shift_z = shift_z
        self.xz_scale = xz_scale
        self.y_scale = y_scale
        self.holder = holder
        self._set_bounds()

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        x = pos.x * self.xz_scale + self.shift_x.sample(pos, ctx)
        y = pos.y * self.y_scale + self.shift_y.sample(pos, ctx)
        z = pos.z * self.xz_scale + self.shift_z.sample(pos, ctx)
        return self.holder.sample(x, y, z)

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.shift_x, self.shift_y, self.shift_z)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        shift_x, shift_y, shift_z = children
        return ShiftedNoise(shift_x, shift_y, shift_z, self.xz_scale, self.y_scale, self.holder)

    def with_holder(self, holder: NoiseHolder) -> DensityFunction:
        return ShiftedNoise(
            self.shift_x, self.shift_y, self.shift_z, self.xz_scale, self.y_scale, holder
        )

    def __repr__(self) -> str:
        return f"ShiftedNoise({self.holder.name}, xz_scale={self.xz_scale}, y_scale={self.y_scale})"


class ShiftA(NoiseLeaf):
    """Domain-shift noise ``4 * noise(x/4, 0, z/4)``."""

    scale = 4.0

    def __init__(self, holder: NoiseHolder):
        self.holder = holder
        self._set_bounds()

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.holder.sample(pos.x * 0.25, 0.0, pos.z * 0.25) * 4.0

    def with_holder(self, holder: NoiseHolder) -> DensityFunction:
        return ShiftA(holder)

    def __repr__(self) -> str:
        return f"ShiftA({self.holder.name})"


class ShiftB(NoiseLeaf):
    """Domain-shift noise ``4 * noise(z/4, x/4, 0)``."""

    scale = 4.0

    def __init__(self, holder: NoiseHolder):
        self.holder = holder
        self._set_bounds()

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        return self.holder.sample(pos.z * 0.25, pos.x * 0.25, 0.0) * 4.0

    def with_holder(self, holder: NoiseHolder) -> DensityFunction:
        return ShiftB(holder)

    def __repr__(self) -> str:
        return f"ShiftB({self.holder.name})"


class RarityValue(str, Enum):
    """Rarity mapping used by :class:`WeirdScaledSampler`."""

    TYPE_1 = "type_1"
    TYPE_2 = "type_2"

    def map(self, value: float) -> float:
        if self is RarityValue.TYPE_1:
            if value < -0.5:
                return 0.75
            if value < 0.0:
                return 1.0
            return 1.5 if value < 0.5 else 2.0
        if value < -0.75:
            return 0.5
        if value < -0.5:
            return 0.75
        if value < 0.5:
            return 1.0
        return 2.0 if value < 0.75 else 3.0

    @property
    def max_rarity(self) -> float:
        return 2.0 if self is RarityValue.TYPE_1 else 3.0


class WeirdScaledSampler(NoiseLeaf):
    """``rarity * |noise(pos / rarity)|`` with the rarity mapped from the input."""

    def __init__(self, input: DensityFunction, holder: NoiseHolder, rarity: RarityValue):
        self.input = input
        self.holder = holder
        self.rarity = rarity
        self._min = 0.0
        self._max = rarity.max_rarity * holder.max_value()

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        rarity = self.rarity.map(self.input.sample(pos, ctx))
        return rarity * abs(self.holder.sample(pos.x / rarity, pos.y / rarity, pos.z / rarity))

    def children(self) -> tuple[DensityFunction, ...]:
        return (self.input,)

    def rebuild(self, children: Sequence[DensityFunction]) -> DensityFunction:
        return WeirdScaledSampler(children[0], self.holder, self.rarity)

    def with_holder(self, holder: NoiseHolder) -> DensityFunction:
        return WeirdScaledSampler(self.input, holder, self.rarity)

    def __repr__(self) -> str:
        return f"WeirdScaledSampler({self.holder.name}, rarity={self.rarity.value})"


class OldBlendedNoise(DensityFunction):
    """Legacy terrain noise blending two limit stacks by a selector stack.

    The selector (``main``) is sampled first; the limit stacks are only
    sampled when the selector leaves room for them.
    """

    def __init__(
        self,
        min_limit: LegacyMultiOctaveNoise,
        max_limit: LegacyMultiOctaveNoise,
        main: LegacyMultiOctaveNoise,
        xz_scale: float,
        y_scale: float,
        xz_factor: float,
        y_factor: float,
        smear_scale_multiplier: float,
    ):
        self.min_limit = min_limit
        self.max_limit = max_limit
        self.main = main
        self.xz_scale = xz_scale
        self.y_scale = y_scale
        self.xz_factor = xz_factor
        self.y_factor = y_factor
        self.smear_scale_multiplier = smear_scale_multiplier
        self.xz_multiplier = BLENDED_NOISE_SCALE * xz_scale
        self.y_multiplier = BLENDED_NOISE_SCALE * y_scale
        self._max = min_limit.max_broken_value(self.y_multiplier)
        self._min = -self._max

    @classmethod
    def create(
        cls,
        rng: RandomSource,
        xz_scale: float,
        y_scale: float,
        xz_factor: float,
        y_factor: float,
        smear_scale_multiplier: float,
    ) -> "OldBlendedNoise":
        """Draw the three legacy stacks (16, 16 and 8 octaves) from ``rng``."""
        return cls(
            LegacyMultiOctaveNoise.from_range(rng, range(-15, 1)),
            LegacyMultiOctaveNoise.from_range(rng, range(-15, 1)),
            LegacyMultiOctaveNoise.from_range(rng, range(-7, 1)),
            xz_scale,
            y_scale,
            xz_factor,
            y_factor,
            smear_scale_multiplier,
        )

    def reseed(self, rng: RandomSource) -> "OldBlendedNoise":
        return OldBlendedNoise.create(
            rng,
            self.xz_scale,
            self.y_scale,
            self.xz_factor,
            self.y_factor,
            self.smear_scale_multiplier,
        )

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        x = pos.x * self.xz_multiplier
        y = pos.y * self.y_multiplier
        z = pos.z * self.xz_multiplier
        main_x = x / self.xz_factor
        main_y = y / self.y_factor
        main_z = z / self.xz_factor
        smear = self.y_multiplier * self.smear_scale_multiplier
        main_smear = smear / self.y_factor

        selector = 0.0
        factor = 1.0
        for i in range(8):
            octave = self.main.octave(i)
            if octave is not None:
                selector += (
                    octave.noise.sample(
                        main_x * factor,
                        main_y * factor,
                        main_z * factor,
                        main_smear * factor,
                        main_y * factor,
                    )
                    / factor
                )
            factor /= 2.0

        blend = (selector / 10.0 + 1.0) / 2.0
        skip_min = blend >= 1.0
        skip_max = blend <= 0.0

        low = 0.0
        high = 0.0
        factor = 1.0
        for i in range(16):
            wx = wrap(x * factor)
            wy = wrap(y * factor)
            wz = wrap(z * factor)
            y_amp = smear * factor
            if not skip_min:
                octave = self.min_limit.octave(i)
                if octave is not None:
                    low += octave.noise.sample(wx, wy, wz, y_amp, y * factor) / factor
            if not skip_max:
                octave = self.max_limit.octave(i)
                if octave is not None:
                    high += octave.noise.sample(wx, wy, wz, y_amp, y * factor) / factor
            factor /= 2.0

        return clamped_lerp(low / 512.0, high / 512.0, blend) / 128.0

    def __repr__(self) -> str:
        return (
            f"OldBlendedNoise(xz_scale={self.xz_scale}, y_scale={self.y_scale}, "
            f"xz_factor={self.xz_factor}, y_factor={self.y_factor}, "
            f"smear_scale_multiplier={self.smear_scale_multiplier})"
        )
